"""Utility helpers shared across gw2palette."""

from .dataclass_serialization import from_dict

__all__ = ["from_dict"]
