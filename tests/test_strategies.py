from __future__ import annotations

import math

import pytest

from recommenders import StaticItemRecommender
from reranking import (
    FilteringStrategy,
    GreedyReranker,
    ScoringStrategy,
    coverage_scorer,
    group_cap_filter,
    group_lookup,
    minimum_score_filter,
    scoring_strategy,
)
from results import create_result, result_ids


def test_filtering_strategy_returns_first_match() -> None:
    candidates = (create_result(1, 0.1), create_result(2, 0.9), create_result(3, 0.8))
    strategy = FilteringStrategy(lambda user_id, n, items, candidate: candidate.score > 0.5)
    assert strategy.next_item(0, 5, (), candidates) == candidates[1]


def test_filtering_strategy_returns_none_without_match() -> None:
    candidates = (create_result(1, 0.1), create_result(2, 0.2))
    strategy = FilteringStrategy(lambda user_id, n, items, candidate: False)
    assert strategy.next_item(0, 5, (), candidates) is None


def test_scoring_strategy_breaks_ties_by_position() -> None:
    candidates = (create_result(7, 1.0), create_result(3, 2.0), create_result(1, 2.0))
    assert scoring_strategy().next_item(0, 5, (), candidates) == candidates[1]


def test_scoring_strategy_can_decline_every_candidate() -> None:
    candidates = (create_result(1, 1.0), create_result(2, 2.0))
    strategy = ScoringStrategy(lambda user_id, n, items, candidate: None)
    assert strategy.next_item(0, 5, (), candidates) is None


def test_scoring_strategy_ranks_nan_below_numbers() -> None:
    candidates = (create_result(1, math.nan), create_result(2, -5.0))
    assert scoring_strategy().next_item(0, 5, (), candidates) == candidates[1]


def test_scoring_strategy_sees_selected_items() -> None:
    pool = [create_result(item_id, 1.0) for item_id in range(4)]

    def prefer_far_from_last(user_id, n, items, candidate):
        if not items:
            return candidate.score
        return abs(candidate.item_id - items[-1].item_id)

    reranker = GreedyReranker(StaticItemRecommender(pool), scoring_strategy(prefer_far_from_last))
    assert result_ids(reranker.rerank(0, -1)) == [0, 3, 1, 2]


def test_minimum_score_filter_stops_below_threshold() -> None:
    pool = [create_result(1, 0.9), create_result(2, 0.2), create_result(3, 0.7)]
    reranker = GreedyReranker(StaticItemRecommender(pool), minimum_score_filter(0.5))
    assert result_ids(reranker.rerank(0, 10)) == [1, 3]


def test_group_cap_filter_limits_each_group() -> None:
    pool = [create_result(item_id, 1.0) for item_id in range(5)]
    groups = group_lookup({0: "a", 1: "a", 2: "a", 3: "b", 4: "b"})
    reranker = GreedyReranker(StaticItemRecommender(pool), group_cap_filter(groups, max_per_group=2))
    assert result_ids(reranker.rerank(0, -1)) == [0, 1, 3, 4]


def test_group_cap_filter_rejects_invalid_cap() -> None:
    with pytest.raises(ValueError):
        group_cap_filter(group_lookup({}), max_per_group=0)


def test_coverage_scorer_promotes_unseen_groups() -> None:
    pool = [create_result(1, 0.8), create_result(2, 0.79), create_result(3, 0.6)]
    groups = group_lookup({1: "A", 2: "A", 3: "B"})
    reranker = GreedyReranker(StaticItemRecommender(pool), coverage_scorer(groups, diversity_bias=0.3))
    assert result_ids(reranker.rerank(0, 3)) == [1, 3, 2]


def test_coverage_scorer_without_bias_is_plain_score_order() -> None:
    pool = [create_result(1, 0.2), create_result(2, 0.9), create_result(3, 0.5)]
    groups = group_lookup({1: "A", 2: "A", 3: "A"})
    reranker = GreedyReranker(StaticItemRecommender(pool), coverage_scorer(groups, diversity_bias=0.0))
    assert result_ids(reranker.rerank(0, -1)) == [2, 3, 1]


def test_coverage_scorer_rejects_negative_bias() -> None:
    with pytest.raises(ValueError):
        coverage_scorer(group_lookup({}), diversity_bias=-0.1)


def test_group_lookup_treats_unknown_items_as_singletons() -> None:
    group_of = group_lookup({1: "A"})
    assert group_of(1) == "A"
    assert group_of(2) != group_of(3)


def test_scoring_strategy_picks_nan_when_nothing_else_remains() -> None:
    candidates = (create_result(4, math.nan),)
    assert scoring_strategy().next_item(0, 5, (), candidates) == candidates[0]


def test_coverage_scorer_counts_groups_once_per_round() -> None:
    lookups = []
    table = group_lookup({1: "A", 2: "B", 3: "C", 4: "D"})

    def counting_group_of(item_id):
        lookups.append(item_id)
        return table(item_id)

    pool = [create_result(item_id, 1.0 / item_id) for item_id in range(1, 5)]
    reranker = GreedyReranker(StaticItemRecommender(pool), coverage_scorer(counting_group_of, diversity_bias=0.1))

    assert result_ids(reranker.rerank(0, -1)) == [1, 2, 3, 4]
    # each round looks up every selected item once and every candidate once
    assert len(lookups) == 4 * len(pool)


def test_group_cap_filter_sees_list_growing_in_place() -> None:
    strategy = group_cap_filter(group_lookup({1: "A", 2: "A"}), max_per_group=1)
    first, second = create_result(1, 1.0), create_result(2, 1.0)
    items = []
    assert strategy.next_item(0, 5, items, (first, second)) == first
    items.append(first)
    assert strategy.next_item(0, 5, items, (second,)) is None
