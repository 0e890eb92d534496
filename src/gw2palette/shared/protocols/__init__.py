"""Protocol interfaces for gw2palette."""

from .services import PaletteMapperProtocol

__all__ = ["PaletteMapperProtocol"]
