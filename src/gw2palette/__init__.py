"""
gw2palette - Palette mapping for GW2 build template codes

Converts between the palette indices stored in Guild Wars 2 build
template codes and skill ids, using palette data from the official
GW2 API with an in-memory, per-profession cache.
"""

__version__ = "0.1.0"

from .config import PaletteMapperSettings
from .services import Gw2ApiClient, PaletteIndex, PaletteMapper
from .shared.constants import PROFESSION_NAMES, Profession
from .shared.errors import (
    ApiTimeoutError,
    DomainError,
    ErrorCode,
    InfrastructureError,
    MalformedResponseError,
    PaletteMapperError,
    RemoteApiError,
    TransportError,
    UnknownProfessionError,
    UnmappedPaletteError,
    UnmappedSkillError,
)
from .shared.models import (
    PayloadFormat,
    PetDetail,
    ProfessionPayload,
    SkillDetail,
    SpecializationDetail,
)
from .shared.protocols import PaletteMapperProtocol

__all__ = [
    "PROFESSION_NAMES",
    "ApiTimeoutError",
    "DomainError",
    "ErrorCode",
    "Gw2ApiClient",
    "InfrastructureError",
    "MalformedResponseError",
    "PaletteIndex",
    "PaletteMapper",
    "PaletteMapperError",
    "PaletteMapperProtocol",
    "PaletteMapperSettings",
    "PayloadFormat",
    "PetDetail",
    "Profession",
    "ProfessionPayload",
    "RemoteApiError",
    "SkillDetail",
    "SpecializationDetail",
    "TransportError",
    "UnknownProfessionError",
    "UnmappedPaletteError",
    "UnmappedSkillError",
]
