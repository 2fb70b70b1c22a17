"""Requested result counts and the unlimited-count sentinel."""
from __future__ import annotations

from enum import Enum

UNLIMITED = -1
"""Count asking an upstream source for every candidate it would ever produce."""


class CountMode(str, Enum):
    """How a requested result count bounds a recommendation."""

    NONE = "none"
    LIMITED = "limited"
    UNLIMITED = "unlimited"

    @classmethod
    def of(cls, n: int) -> "CountMode":
        if n == 0:
            return cls.NONE
        if n < 0:
            return cls.UNLIMITED
        return cls.LIMITED


def has_room(n: int, selected: int) -> bool:
    """Return whether ``selected`` results still leave room under the count ``n``."""

    mode = CountMode.of(n)
    if mode is CountMode.UNLIMITED:
        return True
    if mode is CountMode.NONE:
        return False
    return selected < n


__all__ = ["UNLIMITED", "CountMode", "has_room"]
