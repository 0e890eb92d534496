"""Dataclass serialization utilities for gw2palette.

This module converts GW2 API JSON objects into the flat dataclass models
in gw2palette.shared.models, ignoring fields the models do not declare.
"""

from __future__ import annotations

from dataclasses import MISSING, fields, is_dataclass
from typing import Any


def from_dict(cls: type, data: dict[str, Any]) -> Any:
    """Create dataclass instance from dictionary.

    Declared fields missing from data take their defaults; keys the
    dataclass does not declare are ignored.

    Args:
        cls: Dataclass class to instantiate
        data: Dictionary with field values

    Returns:
        Dataclass instance

    Raises:
        TypeError: If cls is not a dataclass
        KeyError: If a required field is missing

    Example:
        >>> @dataclass
        ... class Pet:
        ...     id: int
        ...     name: str
        >>> from_dict(Pet, {"id": 1, "name": "Juvenile Jungle Stalker", "icon": "..."})
        Pet(id=1, name='Juvenile Jungle Stalker')
    """
    if not is_dataclass(cls):
        error_msg = f"{cls.__name__} is not a dataclass"
        raise TypeError(error_msg)

    result: dict[str, Any] = {}
    for field in fields(cls):
        if field.name not in data:
            if field.default is MISSING and field.default_factory is MISSING:
                raise KeyError(f"Missing required field: {field.name}")
            continue

        value = data[field.name]
        # Copy lists so the model never aliases the decoded response
        result[field.name] = list(value) if isinstance(value, list) else value

    return cls(**result)


__all__ = ["from_dict"]
