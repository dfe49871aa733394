"""
Executive summary: assessment band, narrative headline and key metrics.

Responsibilities:
- Band the audit (excellent / good / needs-attention / critical) from the
  overall score and the number of critical issues.
- Pick headline, subheadline, key findings, quick wins and strategic
  recommendations from the sorted issue list.
- Report schema metrics (model / component / enum / entry counts).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Sequence

from schema_audit.analysis_engine.models import AuditIssue, DimensionResult, Effort, Severity
from schema_audit.schema_graph import EntryCounts, Schema, entries_for_model


class Assessment(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    NEEDS_ATTENTION = "needs-attention"
    CRITICAL = "critical"


CRITICAL_BAND_ISSUES = 5
ATTENTION_BAND_ISSUES = 3
CRITICAL_BAND_SCORE = 40
ATTENTION_BAND_SCORE = 60
EXCELLENT_BAND_SCORE = 80

MAX_KEY_FINDINGS = 4
MAX_QUICK_WINS = 3
MAX_STRATEGIC = 3

HEADLINES: dict[Assessment, tuple[str, str]] = {
    Assessment.EXCELLENT: (
        "Your content schema is well-architected and editor-friendly",
        "Minor optimizations can further improve content operations",
    ),
    Assessment.GOOD: (
        "Solid foundation with opportunities to improve editorial experience",
        "Your content schema works but could benefit from strategic refinements",
    ),
    Assessment.NEEDS_ATTENTION: (
        "Schema structure is creating friction for content teams",
        "Addressing key issues will significantly improve content velocity and quality",
    ),
    Assessment.CRITICAL: (
        "Significant restructuring needed to support content goals",
        "Current architecture is limiting scalability and creating editorial bottlenecks",
    ),
}


@dataclass
class SchemaMetrics:
    models: int
    custom_models: int
    system_models: int
    components: int
    enums: int
    content_entries: int

    def to_dict(self) -> dict[str, int]:
        return {
            "models": self.models,
            "custom_models": self.custom_models,
            "system_models": self.system_models,
            "components": self.components,
            "enums": self.enums,
            "content_entries": self.content_entries,
        }


@dataclass
class ExecutiveSummary:
    assessment: Assessment
    headline: str
    subheadline: str
    metrics: SchemaMetrics
    key_findings: list[str] = field(default_factory=list)
    quick_wins: list[str] = field(default_factory=list)
    strategic_recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "assessment": self.assessment.value,
            "headline": self.headline,
            "subheadline": self.subheadline,
            "key_findings": list(self.key_findings),
            "quick_wins": list(self.quick_wins),
            "strategic_recommendations": list(self.strategic_recommendations),
            "metrics": self.metrics.to_dict(),
        }


def assess(overall_score: int, critical_issues: int) -> Assessment:
    if critical_issues >= CRITICAL_BAND_ISSUES or overall_score < CRITICAL_BAND_SCORE:
        return Assessment.CRITICAL
    if critical_issues >= ATTENTION_BAND_ISSUES or overall_score < ATTENTION_BAND_SCORE:
        return Assessment.NEEDS_ATTENTION
    if critical_issues == 0 and overall_score >= EXCELLENT_BAND_SCORE:
        return Assessment.EXCELLENT
    return Assessment.GOOD


def schema_metrics(schema: Schema, entry_counts: EntryCounts) -> SchemaMetrics:
    custom = schema.custom_models()
    return SchemaMetrics(
        models=len(schema.models),
        custom_models=len(custom),
        system_models=len(schema.models) - len(custom),
        components=len(schema.custom_components()),
        enums=len(schema.custom_enums()),
        content_entries=sum(entries_for_model(entry_counts, m).total for m in custom),
    )


def _dedupe(items: Sequence[str], limit: int) -> list[str]:
    out: list[str] = []
    for item in items:
        if item and item not in out:
            out.append(item)
        if len(out) == limit:
            break
    return out


def build_summary(
    schema: Schema,
    entry_counts: EntryCounts,
    overall_score: int,
    issues: Sequence[AuditIssue],
    dimensions: Mapping[str, DimensionResult],
) -> ExecutiveSummary:
    """Issues must already be sorted by severity."""
    critical = [i for i in issues if i.severity == Severity.CRITICAL]
    assessment = assess(overall_score, len(critical))
    headline, subheadline = HEADLINES[assessment]

    strengths = [i.title for i in issues if i.score_bonus is not None]
    problems = [i.title for i in issues if i.score_bonus is None and i.severity != Severity.INFO]
    key_findings = _dedupe(strengths[:1] + problems[:3] + strengths[1:2], MAX_KEY_FINDINGS)

    quick_wins = _dedupe(
        [
            i.recommendation
            for i in issues
            if i.effort == Effort.LOW and i.score_bonus is None and i.severity != Severity.INFO
        ],
        MAX_QUICK_WINS,
    )

    weakest = sorted(
        (d for d in dimensions.values() if not d.degraded and d.score < EXCELLENT_BAND_SCORE),
        key=lambda d: (d.score, d.category),
    )
    strategic = [
        i.recommendation
        for i in issues
        if i.effort == Effort.HIGH and i.severity in (Severity.CRITICAL, Severity.WARNING)
    ]
    strategic += [f"Improve {d.category} (score {d.score}/100)" for d in weakest]

    return ExecutiveSummary(
        assessment=assessment,
        headline=headline,
        subheadline=subheadline,
        metrics=schema_metrics(schema, entry_counts),
        key_findings=key_findings,
        quick_wins=quick_wins,
        strategic_recommendations=_dedupe(strategic, MAX_STRATEGIC),
    )
