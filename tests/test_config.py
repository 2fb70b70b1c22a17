from __future__ import annotations

import pytest

from configs.loader import RerankConfig, build_strategy, load_config
from reranking import FilteringStrategy, ScoringStrategy


def _write(tmp_path, text: str):
    path = tmp_path / "rerank.yaml"
    path.write_text(text.strip(), encoding="utf-8")
    return path


def test_defaults_applied(tmp_path) -> None:
    config = load_config(_write(tmp_path, "strategy: score"))
    assert config.n == 10
    assert config.diversity_bias == 0.15
    assert isinstance(build_strategy(config), ScoringStrategy)


def test_overrides_win_over_file(tmp_path) -> None:
    path = _write(tmp_path, "strategy: min_score\nmin_score: 0.4\nn: 5")
    config = load_config(path, {"n": -1, "min_score": 0.7})
    assert config.n == -1
    assert config.min_score == 0.7
    assert isinstance(build_strategy(config), FilteringStrategy)


def test_group_strategies_require_groups(tmp_path) -> None:
    with pytest.raises(ValueError):
        load_config(_write(tmp_path, "strategy: coverage"))


def test_groups_loaded_with_integer_keys(tmp_path) -> None:
    path = _write(
        tmp_path,
        """
strategy: group_cap
max_per_group: 2
groups:
  1: news
  2: sports
""",
    )
    config = load_config(path)
    assert config.groups == {1: "news", 2: "sports"}
    assert isinstance(build_strategy(config), FilteringStrategy)


def test_logging_directory_resolved(tmp_path) -> None:
    config = load_config(_write(tmp_path, f"logging:\n  directory: {tmp_path / 'logs'}"))
    assert config.logging is not None
    assert config.logging.directory == (tmp_path / "logs").resolve()


def test_invalid_values_rejected(tmp_path) -> None:
    with pytest.raises(ValueError):
        load_config(_write(tmp_path, "diversity_bias: -1"))
    with pytest.raises(ValueError):
        load_config(_write(tmp_path, "strategy: random"))


def test_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")


def test_non_mapping_file(tmp_path) -> None:
    with pytest.raises(TypeError):
        load_config(_write(tmp_path, "- score\n- coverage"))


def test_coverage_strategy_from_model() -> None:
    config = RerankConfig(strategy="coverage", groups={1: "a"}, diversity_bias=0.2)
    assert isinstance(build_strategy(config), ScoringStrategy)
