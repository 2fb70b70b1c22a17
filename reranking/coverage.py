"""Coverage-aware strategies built on the filtering and scoring helpers."""
from __future__ import annotations

from collections import Counter
from typing import Callable, Hashable, Mapping, Optional, Sequence

from results import Result

from .strategies import FilteringStrategy, ScoringStrategy, filtering_strategy, scoring_strategy

GroupFunction = Callable[[int], Hashable]


def group_lookup(groups: Mapping[int, Hashable]) -> GroupFunction:
    """Map item ids to groups; ids without a group form a group of their own."""

    table = dict(groups)

    def _group_of(item_id: int) -> Hashable:
        return table.get(item_id, ("item", item_id))

    return _group_of


class _GroupUsage:
    """Group counts of the current selection.

    The reranker hands every candidate of one round the same ``items`` tuple,
    so the counts are rebuilt only when a new round starts.
    """

    def __init__(self, group_of: GroupFunction) -> None:
        self.group_of = group_of
        self._items: Optional[Sequence[Result]] = None
        self._size = 0
        self._counts: Counter = Counter()

    def __call__(self, items: Sequence[Result]) -> Counter:
        if items is not self._items or len(items) != self._size:
            self._counts = Counter(self.group_of(item.item_id) for item in items)
            self._items = items
            self._size = len(items)
        return self._counts


def minimum_score_filter(threshold: float) -> FilteringStrategy:
    """Keep candidates whose upstream score is at least ``threshold``."""

    def _constraint(user_id: int, n: int, items: Sequence[Result], candidate: Result) -> bool:
        return candidate.score >= threshold

    return filtering_strategy(_constraint)


def group_cap_filter(group_of: GroupFunction, max_per_group: int = 1) -> FilteringStrategy:
    """Admit a candidate only while its group has fewer than ``max_per_group`` selections."""

    if max_per_group < 1:
        raise ValueError("max_per_group must be at least 1")
    group_usage = _GroupUsage(group_of)

    def _constraint(user_id: int, n: int, items: Sequence[Result], candidate: Result) -> bool:
        usage = group_usage(items)
        return usage[group_of(candidate.item_id)] < max_per_group

    return filtering_strategy(_constraint)


def coverage_scorer(group_of: GroupFunction, diversity_bias: float = 0.15) -> ScoringStrategy:
    """Favour candidates from groups the selection does not cover yet.

    The candidate's score gains ``diversity_bias`` when its group is unseen
    and loses ``diversity_bias`` per already selected item of the same group.
    """

    if diversity_bias < 0.0:
        raise ValueError("diversity_bias must be non-negative")
    group_usage = _GroupUsage(group_of)

    def _scorer(user_id: int, n: int, items: Sequence[Result], candidate: Result) -> float:
        usage = group_usage(items)[group_of(candidate.item_id)]
        bonus = diversity_bias if usage == 0 else 0.0
        return candidate.score + bonus - diversity_bias * usage

    return scoring_strategy(_scorer)


__all__ = [
    "GroupFunction",
    "coverage_scorer",
    "group_cap_filter",
    "group_lookup",
    "minimum_score_filter",
]
