"""GW2 API Response Models.

This module defines dataclasses for GW2 API responses to ensure
type safety at the external API boundary.

The profession payload is a tagged union: the API returns
``skills_by_palette`` either as ``[[palette, skill|null], ...]`` pairs
(when the 2019-12-19 schema version is requested) or as a dense array
where the position is the palette index. The shape is chosen once at
parse time and both are normalised into pairs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class PayloadFormat(str, Enum):
    """Accepted shapes of the ``skills_by_palette`` field."""

    PAIRS = "pairs"
    DENSE = "dense"


PaletteEntry = tuple[int, Optional[int]]


@dataclass(frozen=True)
class ProfessionPayload:
    """Parsed ``/v2/professions/{name}`` response.

    Attributes:
        profession: Profession code that was requested
        name: Profession name as reported by the API
        format: Shape the ``skills_by_palette`` field was parsed as
        entries: ``(palette_index, skill_id or None)`` pairs in payload order
    """

    profession: int
    name: str
    format: PayloadFormat
    entries: tuple[PaletteEntry, ...] = ()


@dataclass
class SkillDetail:
    """GW2 skill information."""

    id: int
    name: str
    professions: list[str] = field(default_factory=list)
    type: str | None = None
    slot: str | None = None
    icon: str | None = None


@dataclass
class SpecializationDetail:
    """GW2 specialization information."""

    id: int
    name: str
    profession: str | None = None
    elite: bool = False
    icon: str | None = None


@dataclass
class PetDetail:
    """GW2 ranger pet information."""

    id: int
    name: str
    icon: str | None = None


__all__ = [
    "PaletteEntry",
    "PayloadFormat",
    "PetDetail",
    "ProfessionPayload",
    "SkillDetail",
    "SpecializationDetail",
]
