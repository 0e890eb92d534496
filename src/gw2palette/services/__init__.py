"""Services module for gw2palette.

This module contains the GW2 API client and the cached palette mapper
built on top of it.
"""

from .gw2_client import Gw2ApiClient
from .palette_index import CacheEntry, PaletteIndex, build_palette_index
from .palette_mapper import PaletteMapper

__all__ = [
    "CacheEntry",
    "Gw2ApiClient",
    "PaletteIndex",
    "PaletteMapper",
    "build_palette_index",
]
