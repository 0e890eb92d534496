"""Shared data models for gw2palette."""

from .api import (
    PaletteEntry,
    PayloadFormat,
    PetDetail,
    ProfessionPayload,
    SkillDetail,
    SpecializationDetail,
)

__all__ = [
    "PaletteEntry",
    "PayloadFormat",
    "PetDetail",
    "ProfessionPayload",
    "SkillDetail",
    "SpecializationDetail",
]
