"""
API Configuration Constants

This module contains all constants related to the GW2 API endpoints,
request timeouts and palette cache lifetime.
"""

BASE_MILLISECOND = 1
BASE_SECOND = 1000 * BASE_MILLISECOND
BASE_MINUTE = 60 * BASE_SECOND


class GW2ApiConfig:
    """GW2 API specific configuration."""

    BASE_URL = "https://api.guildwars2.com"

    # Resource paths (relative to BASE_URL)
    PROFESSION_ENDPOINT = "/v2/professions/{name}"
    SKILL_ENDPOINT = "/v2/skills/{skill_id}"
    SPECIALIZATION_ENDPOINT = "/v2/specializations/{spec_id}"
    PET_ENDPOINT = "/v2/pets/{pet_id}"

    # Schema version that switches skills_by_palette to [palette, skill] pairs
    SCHEMA_VERSION = "2019-12-19T00:00:00.000Z"

    # Timeouts are expressed in milliseconds
    REQUEST_TIMEOUT = 5 * BASE_SECOND


class PaletteCacheConfig:
    """Palette cache configuration."""

    TTL = 30 * BASE_MINUTE  # milliseconds


class APIFields:
    """Field names consumed from GW2 API responses."""

    SKILLS_BY_PALETTE = "skills_by_palette"
    ID = "id"
    NAME = "name"
