"""Configuration for gw2palette."""

from .settings import PaletteMapperSettings

__all__ = ["PaletteMapperSettings"]
