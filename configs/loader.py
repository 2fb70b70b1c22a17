"""Helpers for loading and validating reranking configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Literal, Mapping, MutableMapping, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from reranking import (
    GreedyRerankStrategy,
    coverage_scorer,
    group_cap_filter,
    group_lookup,
    minimum_score_filter,
    scoring_strategy,
)


class LoggingConfig(BaseModel):
    """Location for structured logs."""

    directory: Path

    @model_validator(mode="after")
    def _ensure_directory(self) -> "LoggingConfig":
        self.directory = self.directory.expanduser().resolve()
        return self


class RerankConfig(BaseModel):
    """Schema describing which greedy strategy to run and how."""

    strategy: Literal["score", "min_score", "group_cap", "coverage"] = Field(
        default="score", description="Selection strategy used by the greedy reranker"
    )
    n: int = Field(default=10, description="Default result length; negative means unlimited")
    min_score: float = Field(default=0.0, description="Threshold for the min_score strategy")
    diversity_bias: float = Field(default=0.15, ge=0.0)
    max_per_group: int = Field(default=1, ge=1)
    groups: Dict[int, str] = Field(default_factory=dict, description="Item id to group key")
    logging: Optional[LoggingConfig] = None

    @model_validator(mode="after")
    def _check_groups(self) -> "RerankConfig":
        if self.strategy in {"group_cap", "coverage"} and not self.groups:
            raise ValueError(f"strategy '{self.strategy}' requires a non-empty groups mapping")
        return self


DEFAULT_VALUES: Dict[str, Any] = {
    "strategy": "score",
    "n": 10,
    "min_score": 0.0,
    "diversity_bias": 0.15,
    "max_per_group": 1,
}


def _deep_merge(base: MutableMapping[str, Any], updates: Mapping[str, Any]) -> MutableMapping[str, Any]:
    for key, value in updates.items():
        if (
            key in base
            and isinstance(base[key], MutableMapping)
            and isinstance(value, Mapping)
        ):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(path: str | Path, overrides: Optional[Mapping[str, Any]] = None) -> RerankConfig:
    """Load a rerank config, merging defaults, file contents, and overrides."""

    config_path = Path(path).expanduser()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    raw = DEFAULT_VALUES.copy()
    with config_path.open("r", encoding="utf-8") as handle:
        file_values = yaml.safe_load(handle) or {}
    if not isinstance(file_values, Mapping):
        raise TypeError("Config file must contain a mapping at the top level")
    merged: Dict[str, Any] = _deep_merge(raw, dict(file_values))  # type: ignore[assignment]
    if overrides:
        merged = _deep_merge(merged, dict(overrides))  # type: ignore[assignment]
    try:
        return RerankConfig(**merged)
    except ValidationError as exc:
        raise ValueError(f"Invalid rerank config: {exc}") from exc


def build_strategy(config: RerankConfig) -> GreedyRerankStrategy:
    """Instantiate the strategy named by ``config``."""

    if config.strategy == "min_score":
        return minimum_score_filter(config.min_score)
    if config.strategy == "group_cap":
        return group_cap_filter(group_lookup(config.groups), config.max_per_group)
    if config.strategy == "coverage":
        return coverage_scorer(group_lookup(config.groups), config.diversity_bias)
    return scoring_strategy()


__all__ = [
    "LoggingConfig",
    "RerankConfig",
    "build_strategy",
    "load_config",
]
