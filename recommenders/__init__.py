"""Upstream recommenders that produce candidate pools for reranking."""
from __future__ import annotations

from typing import AbstractSet, Optional, Protocol, Sequence

from results import Result


class ItemRecommender(Protocol):
    """Protocol for recommenders returning ranked, scored results."""

    def recommend(
        self,
        user_id: int,
        n: int,
        exclude: Optional[AbstractSet[int]] = None,
        candidates: Optional[AbstractSet[int]] = None,
    ) -> Sequence[Result]:
        """Return up to ``n`` results for ``user_id``; a negative ``n`` asks for all of them."""


from .count import UNLIMITED, CountMode, has_room
from .static import StaticItemRecommender

__all__ = [
    "ItemRecommender",
    "UNLIMITED",
    "CountMode",
    "has_room",
    "StaticItemRecommender",
]
