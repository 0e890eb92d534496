"""Service protocols for dependency inversion.

Build-code decoders depend on PaletteMapperProtocol instead of the
services layer, so any object with these two coroutines can translate
palette slots.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class PaletteMapperProtocol(Protocol):
    """Protocol for palette index / skill id translation.

    Example:
        >>> from gw2palette.services import PaletteMapper
        >>> mapper: PaletteMapperProtocol = PaletteMapper()
        >>> skill_id = await mapper.palette_to_skill(1, 4572)
    """

    async def palette_to_skill(self, profession: int, palette_index: int) -> int:
        """Convert a palette index to a skill id (0 maps to 0)."""

    async def skill_to_palette(self, profession: int, skill_id: int) -> int:
        """Convert a skill id to a palette index (0 maps to 0)."""
