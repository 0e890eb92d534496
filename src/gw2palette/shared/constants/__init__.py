"""
gw2palette Constants Module

This module provides centralized constants for the palette mapper.
All magic values and configuration defaults are defined here to ensure
consistency across the codebase.
"""

from .api import APIFields, GW2ApiConfig, PaletteCacheConfig
from .http_codes import ContentTypes, HTTPHeaders, HTTPStatusCodes
from .professions import PROFESSION_NAMES, Profession, get_profession_name

__all__ = [
    "PROFESSION_NAMES",
    "APIFields",
    "ContentTypes",
    "GW2ApiConfig",
    "HTTPHeaders",
    "HTTPStatusCodes",
    "PaletteCacheConfig",
    "Profession",
    "get_profession_name",
]
