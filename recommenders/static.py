"""Upstream recommender backed by a fixed, pre-ranked result list."""
from __future__ import annotations

import logging
from typing import AbstractSet, Iterable, List, Optional

from results import Result
from .count import CountMode

logger = logging.getLogger(__name__)


class StaticItemRecommender:
    """Serve the same ranked results to every user.

    Each call returns a fresh list so callers may mutate what they receive
    without affecting later calls.
    """

    def __init__(self, results: Iterable[Result]) -> None:
        self.results: List[Result] = list(results)
        self.last_request: Optional[int] = None

    def recommend(
        self,
        user_id: int,
        n: int,
        exclude: Optional[AbstractSet[int]] = None,
        candidates: Optional[AbstractSet[int]] = None,
    ) -> List[Result]:
        self.last_request = n
        mode = CountMode.of(n)
        if mode is CountMode.NONE:
            return []
        selected: List[Result] = []
        for result in self.results:
            if candidates is not None and result.item_id not in candidates:
                continue
            if exclude and result.item_id in exclude:
                continue
            selected.append(result)
            if mode is CountMode.LIMITED and len(selected) >= n:
                break
        logger.debug("Static recommender returned %s results for user %s", len(selected), user_id)
        return selected


__all__ = ["StaticItemRecommender"]
