"""Greedy reranking of upstream recommendations."""
from __future__ import annotations

from typing import Optional, Protocol, Sequence

from results import Result


class GreedyRerankStrategy(Protocol):
    """Protocol describing how the next item is picked.

    ``items`` holds the selections so far and ``candidates`` the remaining
    pool, both in order; neither may be modified. Implementations return one
    of ``candidates`` or ``None`` to stop the selection.
    """

    def next_item(
        self,
        user_id: int,
        n: int,
        items: Sequence[Result],
        candidates: Sequence[Result],
    ) -> Optional[Result]:
        """Return the next item to select, or ``None``."""


from .coverage import coverage_scorer, group_cap_filter, group_lookup, minimum_score_filter
from .errors import StrategyContractError
from .greedy import GreedyReranker
from .strategies import (
    FilteringStrategy,
    ScoringStrategy,
    candidate_score,
    filtering_strategy,
    scoring_strategy,
)

__all__ = [
    "GreedyRerankStrategy",
    "GreedyReranker",
    "StrategyContractError",
    "FilteringStrategy",
    "ScoringStrategy",
    "candidate_score",
    "filtering_strategy",
    "scoring_strategy",
    "coverage_scorer",
    "group_cap_filter",
    "group_lookup",
    "minimum_score_filter",
]
