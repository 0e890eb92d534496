"""Palette mapper configuration model.

All options are resolved to their defaults at construction time;
nothing is read from the environment.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gw2palette.shared.constants import GW2ApiConfig, PaletteCacheConfig
from gw2palette.shared.models import PayloadFormat


class PaletteMapperSettings(BaseModel):
    """Construction options for PaletteMapper and Gw2ApiClient.

    Durations are in milliseconds.

    Example:
        >>> settings = PaletteMapperSettings(cache_ttl=60_000, timeout=2_000)
        >>> settings.timeout_seconds
        2.0
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    api_url: str = Field(
        default=GW2ApiConfig.BASE_URL,
        min_length=1,
        description="GW2 API base URL",
    )
    cache_ttl: float = Field(
        default=PaletteCacheConfig.TTL,
        ge=0,
        description="Palette cache time-to-live in milliseconds",
    )
    timeout: float = Field(
        default=GW2ApiConfig.REQUEST_TIMEOUT,
        gt=0,
        description="Request timeout in milliseconds",
    )
    payload_format: PayloadFormat = Field(
        default=PayloadFormat.PAIRS,
        description="Expected shape of skills_by_palette in profession responses",
    )
    schema_version: str | None = Field(
        default=GW2ApiConfig.SCHEMA_VERSION,
        description="X-Schema-Version header for profession requests (None to omit)",
    )

    @field_validator("api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        stripped = value.rstrip("/")
        if not stripped:
            raise ValueError("api_url must not be empty")
        return stripped

    @property
    def timeout_seconds(self) -> float:
        """Request timeout in seconds."""
        return self.timeout / 1000

    @property
    def cache_ttl_seconds(self) -> float:
        """Cache time-to-live in seconds."""
        return self.cache_ttl / 1000


__all__ = ["PaletteMapperSettings"]
