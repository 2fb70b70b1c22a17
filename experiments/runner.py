"""Offline runner that reranks a stored candidate pool."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, AbstractSet, Dict, List, Optional, Sequence

from configs.loader import RerankConfig, build_strategy
from monitoring.metrics import RerankMetrics
from recommenders import StaticItemRecommender
from reranking import GreedyReranker
from results import Result, save_results

logger = logging.getLogger(__name__)

Overrides = Dict[str, Any]


def _apply_override(overrides: Overrides, key: str, value: str) -> None:
    parts = key.split(".")
    target = overrides
    for part in parts[:-1]:
        if part not in target or not isinstance(target[part], dict):
            target[part] = {}
        target = target[part]
    try:
        parsed_value = json.loads(value)
    except json.JSONDecodeError:
        parsed_value = value
    target[parts[-1]] = parsed_value


def parse_overrides(overrides: Sequence[str]) -> Overrides:
    """Turn ``key=value`` strings into a nested override mapping."""

    parsed: Overrides = {}
    for override in overrides:
        if "=" not in override:
            raise ValueError(f"Override must be in key=value format: {override}")
        key, value = override.split("=", 1)
        _apply_override(parsed, key, value)
    return parsed


def run_rerank(
    config: RerankConfig,
    pool: Sequence[Result],
    user_id: int,
    n: Optional[int] = None,
    *,
    exclude: Optional[AbstractSet[int]] = None,
    metrics: Optional[RerankMetrics] = None,
) -> List[Result]:
    """Rerank ``pool`` for ``user_id`` with the strategy described by ``config``."""

    upstream = StaticItemRecommender(pool)
    reranker = GreedyReranker(upstream, build_strategy(config), metrics=metrics)
    count = config.n if n is None else n
    logger.info("Reranking %s candidates with strategy '%s'", len(pool), config.strategy)
    return reranker.rerank(user_id, count, exclude=exclude)


def write_run(results: Sequence[Result], metrics: RerankMetrics, run_dir: Path) -> Path:
    """Write reranked results and metrics under ``run_dir``."""

    run_dir.mkdir(parents=True, exist_ok=True)
    save_results(results, run_dir / "results.json")
    (run_dir / "metrics.json").write_text(json.dumps(metrics.as_dict(), indent=2), encoding="utf-8")
    return run_dir


__all__ = ["parse_overrides", "run_rerank", "write_run"]
