"""Bidirectional palette index.

A PaletteIndex holds the palette -> skill and skill -> palette mappings
for one profession. It is built once from a ProfessionPayload and never
mutated afterwards; a refresh replaces it wholesale.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from gw2palette.shared.models import ProfessionPayload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaletteIndex:
    """Read-only bidirectional mapping between palette indices and skill ids.

    For every stored pair, ``palette_to_skill[p] == s`` exactly when
    ``skill_to_palette[s] == p``.
    """

    palette_to_skill: Mapping[int, int] = field(
        default_factory=lambda: MappingProxyType({}),
    )
    skill_to_palette: Mapping[int, int] = field(
        default_factory=lambda: MappingProxyType({}),
    )

    def __len__(self) -> int:
        return len(self.palette_to_skill)

    def skill_for(self, palette_index: int) -> int | None:
        """Return the skill id for a palette index, or None if unmapped."""
        return self.palette_to_skill.get(palette_index)

    def palette_for(self, skill_id: int) -> int | None:
        """Return the palette index for a skill id, or None if unmapped."""
        return self.skill_to_palette.get(skill_id)


@dataclass(frozen=True)
class CacheEntry:
    """Cached index for one profession and the clock reading it was fetched at."""

    index: PaletteIndex
    fetched_at: float

    def is_fresh(self, now: float, ttl_seconds: float) -> bool:
        return now - self.fetched_at < ttl_seconds


def build_palette_index(payload: ProfessionPayload) -> PaletteIndex:
    """Build a PaletteIndex from a parsed profession payload.

    Entries whose skill is None or 0 are skipped, as are entries for the
    reserved palette index 0. A well-formed payload lists each palette
    index and each skill id at most once; if one repeats, the later
    entry wins.

    To keep the two maps exact inverses, an overwritten pair is removed
    from both sides before the new pair is stored.

    Args:
        payload: Parsed profession payload (either format)

    Returns:
        Immutable PaletteIndex
    """
    palette_to_skill: dict[int, int] = {}
    skill_to_palette: dict[int, int] = {}
    duplicates = 0

    for palette_index, skill_id in payload.entries:
        if not skill_id or not palette_index:
            continue

        previous_skill = palette_to_skill.get(palette_index)
        previous_palette = skill_to_palette.get(skill_id)
        if previous_skill is not None:
            duplicates += 1
            skill_to_palette.pop(previous_skill, None)
        if previous_palette is not None:
            duplicates += 1
            palette_to_skill.pop(previous_palette, None)

        palette_to_skill[palette_index] = skill_id
        skill_to_palette[skill_id] = palette_index

    if duplicates:
        logger.debug(
            "Profession %s payload repeats %d palette/skill ids; later entries won",
            payload.name,
            duplicates,
        )

    return PaletteIndex(
        palette_to_skill=MappingProxyType(palette_to_skill),
        skill_to_palette=MappingProxyType(skill_to_palette),
    )


__all__ = ["CacheEntry", "PaletteIndex", "build_palette_index"]
