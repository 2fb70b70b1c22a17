"""Filtering and scoring strategies for the greedy reranker.

Both strategies are built from a plain callable rather than subclassed:

* :class:`FilteringStrategy` wraps a constraint and picks the first candidate
  that satisfies it.
* :class:`ScoringStrategy` wraps a scorer and picks the highest-scoring
  candidate, keeping the earliest one on ties.
"""
from __future__ import annotations

import math
from typing import Callable, Optional, Sequence, Tuple

from results import Result

Constraint = Callable[[int, int, Sequence[Result], Result], bool]
Scorer = Callable[[int, int, Sequence[Result], Result], Optional[float]]


class FilteringStrategy:
    """Select the first candidate, in candidate order, that satisfies ``constraint``."""

    def __init__(self, constraint: Constraint) -> None:
        self.constraint = constraint

    def satisfies_constraint(self, user_id: int, n: int, items: Sequence[Result], candidate: Result) -> bool:
        return bool(self.constraint(user_id, n, items, candidate))

    def next_item(
        self,
        user_id: int,
        n: int,
        items: Sequence[Result],
        candidates: Sequence[Result],
    ) -> Optional[Result]:
        for candidate in candidates:
            if self.satisfies_constraint(user_id, n, items, candidate):
                return candidate
        return None


class ScoringStrategy:
    """Select the candidate with the highest score from ``scorer``.

    A scorer may return ``None`` to mark a candidate as ineligible; when no
    candidate is eligible the strategy declines to pick anything. NaN scores
    rank below every number, ``-inf`` included.
    """

    def __init__(self, scorer: Scorer) -> None:
        self.scorer = scorer

    def score_candidate(
        self, user_id: int, n: int, items: Sequence[Result], candidate: Result
    ) -> Optional[float]:
        score = self.scorer(user_id, n, items, candidate)
        if score is None:
            return None
        return float(score)

    def next_item(
        self,
        user_id: int,
        n: int,
        items: Sequence[Result],
        candidates: Sequence[Result],
    ) -> Optional[Result]:
        best: Optional[Result] = None
        best_key: Tuple[int, float] = (0, 0.0)
        for candidate in candidates:
            score = self.score_candidate(user_id, n, items, candidate)
            if score is None:
                continue
            key = _rank_key(score)
            # strict comparison keeps the earliest candidate on ties
            if best is None or key > best_key:
                best = candidate
                best_key = key
        return best


def _rank_key(score: float) -> Tuple[int, float]:
    if math.isnan(score):
        return (0, 0.0)
    return (1, score)


def candidate_score(user_id: int, n: int, items: Sequence[Result], candidate: Result) -> float:
    """Scorer returning the upstream score unchanged."""

    return candidate.score


def filtering_strategy(constraint: Constraint) -> FilteringStrategy:
    """Build a strategy that keeps candidates passing ``constraint``."""

    return FilteringStrategy(constraint)


def scoring_strategy(scorer: Scorer = candidate_score) -> ScoringStrategy:
    """Build a strategy that greedily maximises ``scorer``."""

    return ScoringStrategy(scorer)


__all__ = [
    "Constraint",
    "Scorer",
    "FilteringStrategy",
    "ScoringStrategy",
    "candidate_score",
    "filtering_strategy",
    "scoring_strategy",
]
