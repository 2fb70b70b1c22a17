"""Greedy iterative reranking over an upstream candidate pool."""
from __future__ import annotations

import logging
import time
from typing import AbstractSet, List, Optional

from monitoring.metrics import RerankMetrics
from recommenders import UNLIMITED, CountMode, ItemRecommender, has_room
from results import Result

from . import GreedyRerankStrategy
from .errors import StrategyContractError

logger = logging.getLogger(__name__)


class GreedyReranker:
    """Rerank an upstream recommender's output one pick at a time.

    The upstream is asked for its whole pool; the strategy is then invoked
    repeatedly with the selections so far and the remaining candidates, and
    each pick is moved from the pool to the output. The loop ends when ``n``
    results have been selected, the pool is empty, or the strategy declines
    to pick.
    """

    def __init__(
        self,
        upstream: ItemRecommender,
        strategy: GreedyRerankStrategy,
        *,
        metrics: Optional[RerankMetrics] = None,
    ) -> None:
        self.upstream = upstream
        self.strategy = strategy
        self.metrics = metrics

    def rerank(
        self,
        user_id: int,
        n: int,
        exclude: Optional[AbstractSet[int]] = None,
        candidates: Optional[AbstractSet[int]] = None,
    ) -> List[Result]:
        if CountMode.of(n) is CountMode.NONE:
            return []

        start = time.perf_counter()
        pool: List[Result] = list(self.upstream.recommend(user_id, UNLIMITED, exclude, candidates))
        pool_size = len(pool)
        items: List[Result] = []
        refused = False

        while has_room(n, len(items)) and pool:
            picked = self.strategy.next_item(user_id, n, tuple(items), tuple(pool))
            if picked is None:
                refused = True
                break
            try:
                index = pool.index(picked)
            except ValueError:
                raise StrategyContractError(
                    f"Strategy {type(self.strategy).__name__} picked {picked!r}, "
                    "which is not among the remaining candidates",
                    strategy=self.strategy,
                ) from None
            items.append(pool.pop(index))
            logger.debug("Selected item %s at rank %s for user %s", picked.item_id, len(items), user_id)

        latency_ms = (time.perf_counter() - start) * 1000.0
        if refused:
            stop_reason = "strategy_declined"
        elif not pool:
            stop_reason = "pool_exhausted"
        else:
            stop_reason = "limit_reached"
        logger.info(
            "rerank_completed",
            extra={
                "extra_data": {
                    "user_id": user_id,
                    "requested": n,
                    "pool_size": pool_size,
                    "selected": len(items),
                    "stop_reason": stop_reason,
                }
            },
        )
        if self.metrics is not None:
            self.metrics.record(
                latency_ms=latency_ms,
                pool_size=pool_size,
                selected=len(items),
                early_stop=refused,
            )
        return items

    def recommend(
        self,
        user_id: int,
        n: int,
        exclude: Optional[AbstractSet[int]] = None,
        candidates: Optional[AbstractSet[int]] = None,
    ) -> List[Result]:
        """Alias of :meth:`rerank` so a reranker can feed another reranker."""

        return self.rerank(user_id, n, exclude, candidates)


__all__ = ["GreedyReranker"]
