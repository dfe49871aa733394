"""
Data models shared by analyzers and the aggregator.

Responsibilities:
- Define checkpoint, issue and dimension result structures.
- Severity / status / effort enums used for sorting and roadmap bucketing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from schema_audit.analysis_engine.scorer import ScoreCard


class Dimension(str, Enum):
    STRUCTURE = "structure"
    COMPONENTS = "components"
    CONTENT = "content"
    PERFORMANCE = "performance"
    RELATIONSHIPS = "relationships"
    ENUM_ARCHITECTURE = "enum-architecture"
    DUPLICATES = "duplicates"
    BEST_PRACTICES = "best-practices"
    LOCALIZATION = "localization"
    SEO = "seo"


class Severity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


SEVERITY_ORDER = {Severity.CRITICAL: 0, Severity.WARNING: 1, Severity.INFO: 2}


class CheckpointStatus(str, Enum):
    GOOD = "good"
    WARNING = "warning"
    ISSUE = "issue"


class Effort(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def status_for_count(count: int, good_max: int, warning_max: int) -> CheckpointStatus:
    """good when count <= good_max, warning up to warning_max, issue above."""
    if count <= good_max:
        return CheckpointStatus.GOOD
    if count <= warning_max:
        return CheckpointStatus.WARNING
    return CheckpointStatus.ISSUE


@dataclass
class CheckpointExample:
    items: list[str]
    details: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"items": list(self.items)}
        if self.details:
            out["details"] = self.details
        return out


@dataclass
class CheckpointResult:
    """One discrete pass / warn / issue finding."""

    title: str
    status: CheckpointStatus
    findings: list[str] = field(default_factory=list)
    examples: list[CheckpointExample] = field(default_factory=list)
    action_items: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "status": self.status.value,
            "findings": list(self.findings),
            "examples": [e.to_dict() for e in self.examples],
            "action_items": list(self.action_items),
        }


@dataclass
class AuditIssue:
    """
    Flat issue for the prioritized list and the roadmap.

    effort decides the roadmap phase; score_bonus estimates the points
    recovered by fixing it.
    """

    id: str
    severity: Severity
    category: str
    title: str
    description: str
    impact: str
    recommendation: str
    affected_items: list[str] = field(default_factory=list)
    effort: Effort = Effort.MEDIUM
    score_bonus: int | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "severity": self.severity.value,
            "category": self.category,
            "title": self.title,
            "description": self.description,
            "impact": self.impact,
            "recommendation": self.recommendation,
            "affected_items": list(self.affected_items),
            "effort": self.effort.value,
        }
        if self.score_bonus is not None:
            out["score_bonus"] = self.score_bonus
        return out


@dataclass
class DimensionResult:
    """Everything one analyzer publishes."""

    category: str
    card: ScoreCard
    checkpoints: list[CheckpointResult] = field(default_factory=list)
    issues: list[AuditIssue] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    details: dict[str, Any] = field(default_factory=dict)
    degraded: bool = False

    @property
    def score(self) -> int:
        return self.card.score

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "score": self.score,
            "scoring": self.card.to_dict(),
            "checkpoints": [c.to_dict() for c in self.checkpoints],
            "issues": [i.to_dict() for i in self.issues],
            "recommendations": list(self.recommendations),
            "notes": list(self.notes),
            "details": self.details,
            "degraded": self.degraded,
        }


def neutral_result(category: str, note: str) -> DimensionResult:
    """Score 100, no findings, one explanatory note."""
    return DimensionResult(category=category, card=ScoreCard(), notes=[note], degraded=True)
