"""
Explainable scoring: base score plus itemized, clamped contributions.

Responsibilities:
- Every dimension score starts at a base (100) and accumulates signed
  ScoreContributions, each with a reason and optional detail.
- The reported score is always clamp(base + sum(deltas)) computed on read,
  so the breakdown reconstructs the score exactly.
- Composite scores are weighted averages over already-published scores.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

DEFAULT_BASE = 100
DEFAULT_FLOOR = 0
DEFAULT_CEILING = 100


def clamp_score(score: float, floor: float = DEFAULT_FLOOR, ceiling: float = DEFAULT_CEILING) -> float:
    return max(floor, min(ceiling, score))


@dataclass(frozen=True)
class ScoreContribution:
    """Atomic explainability unit: one signed adjustment and why."""

    reason: str
    delta: int
    detail: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"reason": self.reason, "delta": self.delta}
        if self.detail:
            out["detail"] = self.detail
        return out


@dataclass
class ScoreCard:
    """
    Base + contributions, clamped to [floor, ceiling].

    There is no setter for the score: the only way to move it is add().
    """

    base: int = DEFAULT_BASE
    floor: int = DEFAULT_FLOOR
    ceiling: int = DEFAULT_CEILING
    contributions: list[ScoreContribution] = field(default_factory=list)

    def add(self, reason: str, delta: int, detail: str | None = None) -> ScoreCard:
        """Record a contribution. Zero deltas are dropped to keep breakdowns readable."""
        if delta:
            self.contributions.append(ScoreContribution(reason=reason, delta=int(delta), detail=detail))
        return self

    @property
    def raw_total(self) -> int:
        return self.base + sum(c.delta for c in self.contributions)

    @property
    def score(self) -> int:
        return int(clamp_score(self.raw_total, self.floor, self.ceiling))

    def breakdown(self) -> list[ScoreContribution]:
        return list(self.contributions)

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "base": self.base,
            "floor": self.floor,
            "ceiling": self.ceiling,
            "raw_total": self.raw_total,
            "breakdown": [c.to_dict() for c in self.contributions],
        }


def status_penalty(
    card: ScoreCard,
    reason: str,
    status: str,
    *,
    issue_delta: int,
    warning_delta: int,
    detail: str | None = None,
) -> ScoreCard:
    """Deduct by checkpoint status ('issue' / 'warning'); 'good' adds nothing."""
    if status == "issue":
        card.add(reason, -abs(issue_delta), detail)
    elif status == "warning":
        card.add(reason, -abs(warning_delta), detail)
    return card


def capped_penalty(card: ScoreCard, reason: str, count: int, per_item: int, cap: int, detail: str | None = None) -> ScoreCard:
    """Deduct per_item for each of count items, at most cap in total."""
    if count > 0:
        card.add(reason, -min(abs(cap), abs(per_item) * count), detail)
    return card


def weighted_average(
    scores: Mapping[str, float],
    weights: Mapping[str, float],
    default: float,
) -> float:
    """
    Weighted mean of published scores. Missing weights count as 1.0.

    Returns default when there is nothing to average (never NaN).
    """
    total_weight = 0.0
    weighted = 0.0
    for key, score in scores.items():
        weight = weights.get(key, 1.0)
        if weight <= 0:
            continue
        total_weight += weight
        weighted += score * weight
    if total_weight == 0:
        return default
    return weighted / total_weight


def mean(values: Iterable[float], default: float = 0.0) -> float:
    items = list(values)
    return sum(items) / len(items) if items else default
