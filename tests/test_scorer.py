"""
Tests for explainable scoring: clamping, exact reconstruction from the
breakdown, penalty helpers and the weighted composite.
"""

from __future__ import annotations

import math

from schema_audit.analysis_engine.scorer import (
    ScoreCard,
    capped_penalty,
    clamp_score,
    mean,
    status_penalty,
    weighted_average,
)


def test_score_is_clamped_to_range():
    card = ScoreCard()
    card.add("many problems", -150)
    assert card.score == 0
    assert card.raw_total == -50

    bonus = ScoreCard().add("bonus", 25)
    assert bonus.score == 100


def test_score_reconstructs_from_breakdown():
    """clamp(base + sum of deltas) equals the reported score."""
    card = ScoreCard(floor=20)
    for reason, delta in [("a", -15), ("b", -40), ("c", 5), ("d", -35)]:
        card.add(reason, delta)
    total = card.base + sum(c.delta for c in card.breakdown())
    assert card.score == clamp_score(total, card.floor, card.ceiling) == 20
    assert card.to_dict()["raw_total"] == total


def test_zero_delta_is_dropped():
    card = ScoreCard().add("nothing", 0)
    assert card.breakdown() == []
    assert card.score == 100


def test_status_penalty():
    card = ScoreCard()
    status_penalty(card, "good", "good", issue_delta=15, warning_delta=8)
    status_penalty(card, "warn", "warning", issue_delta=15, warning_delta=8)
    status_penalty(card, "bad", "issue", issue_delta=15, warning_delta=8)
    assert [c.delta for c in card.breakdown()] == [-8, -15]
    assert card.score == 77


def test_capped_penalty():
    card = ScoreCard()
    capped_penalty(card, "naming", 4, 2, 20)
    capped_penalty(card, "unique", 10, 3, 15)
    capped_penalty(card, "none", 0, 3, 15)
    assert [c.delta for c in card.breakdown()] == [-8, -15]


def test_weighted_average():
    scores = {"structure": 80, "components": 40}
    weights = {"structure": 1.2, "components": 0.8}
    assert math.isclose(weighted_average(scores, weights, default=100), (80 * 1.2 + 40 * 0.8) / 2.0)
    # Missing weight counts as 1.0
    assert weighted_average({"x": 50}, {}, default=100) == 50
    assert weighted_average({}, weights, default=100) == 100


def test_mean_default():
    assert mean([], default=7) == 7
    assert mean([1, 2, 3]) == 2
