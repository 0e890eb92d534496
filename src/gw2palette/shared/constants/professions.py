"""Profession constants.

Professions are identified by the small integer used in GW2 build
template codes. The GW2 API addresses them by name instead.
"""

from __future__ import annotations

from enum import IntEnum


class Profession(IntEnum):
    """Profession codes as they appear in build template codes."""

    GUARDIAN = 1
    WARRIOR = 2
    ENGINEER = 3
    RANGER = 4
    THIEF = 5
    ELEMENTALIST = 6
    MESMER = 7
    NECROMANCER = 8
    REVENANT = 9


PROFESSION_NAMES: dict[int, str] = {
    Profession.GUARDIAN: "Guardian",
    Profession.WARRIOR: "Warrior",
    Profession.ENGINEER: "Engineer",
    Profession.RANGER: "Ranger",
    Profession.THIEF: "Thief",
    Profession.ELEMENTALIST: "Elementalist",
    Profession.MESMER: "Mesmer",
    Profession.NECROMANCER: "Necromancer",
    Profession.REVENANT: "Revenant",
}


def get_profession_name(profession: int) -> str | None:
    """Return the API name for a profession code, or None if unknown."""
    return PROFESSION_NAMES.get(profession)
