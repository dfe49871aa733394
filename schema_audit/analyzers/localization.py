"""
Localization dimension: how ready the schema is to serve more than one locale.

Responsibilities:
- Find models carrying locale-aware fields and the enum listing locales.
- Band readiness none / basic / structured / advanced.
- Report coverage gaps, existing strengths and translation workflow
  considerations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from schema_audit.analysis_engine.models import (
    AuditIssue,
    CheckpointResult,
    CheckpointStatus,
    Dimension,
    DimensionResult,
    Effort,
    Severity,
)
from schema_audit.analysis_engine.scorer import ScoreCard
from schema_audit.analyzers.common import example, preview
from schema_audit.audit_logging import get_logger
from schema_audit.config import AuditConfig, LocalizationThresholds
from schema_audit.patterns import DEFAULT_REGISTRY, PatternRegistry, PatternTag
from schema_audit.schema_graph import EntryCounts, Schema

logger = get_logger(__name__)

PENALTY_NONE = 15
PENALTY_BASIC = 10
PENALTY_LIMITED_COVERAGE = 10
PENALTY_LOCALES_IN_SCHEMA = 5
LOCALIZATION_READY_BONUS = 5


class Readiness(str, Enum):
    NONE = "none"
    BASIC = "basic"
    STRUCTURED = "structured"
    ADVANCED = "advanced"


@dataclass
class LocalizationGap:
    id: str
    issue: str
    impact: str
    recommendation: str

    def to_dict(self) -> dict[str, str]:
        return {"issue": self.issue, "impact": self.impact, "recommendation": self.recommendation}


@dataclass
class LocalizationFacts:
    readiness: Readiness = Readiness.NONE
    localized_models: list[str] = field(default_factory=list)
    localized_fields: int = 0
    content_models: int = 0
    locale_enum: str | None = None
    locale_count: int = 1
    localized_fields_ratio: float = 0.0
    limited_coverage: bool = False
    locales_in_schema: bool = False
    gaps: list[LocalizationGap] = field(default_factory=list)
    strengths: list[str] = field(default_factory=list)
    workflow_considerations: list[str] = field(default_factory=list)

    @property
    def narrative(self) -> str:
        n = len(self.localized_models)
        if self.readiness == Readiness.ADVANCED:
            return f"Localization is deeply integrated across the schema with {self.locale_count}+ locales supported natively."
        if self.readiness == Readiness.STRUCTURED:
            return f"A solid localization foundation exists across {n} models. Define workflows to keep locales in sync."
        if self.readiness == Readiness.BASIC:
            return f"Localization fields exist but only cover {n} model(s). Scale the pattern before adding more locales."
        return "Content is currently single-locale. Plan now if international expansion is on the roadmap."

    def to_dict(self) -> dict[str, Any]:
        return {
            "readiness": self.readiness.value,
            "narrative": self.narrative,
            "coverage": {
                "localized_models": len(self.localized_models),
                "total_content_models": self.content_models,
                "locale_count": self.locale_count,
                "localized_fields_ratio": round(self.localized_fields_ratio, 2),
            },
            "localized_models": list(self.localized_models),
            "locale_enum": self.locale_enum,
            "gaps": [g.to_dict() for g in self.gaps],
            "strengths": list(self.strengths),
            "workflow_considerations": list(self.workflow_considerations),
        }


def readiness_for(localized_models: int, locale_count: int, thresholds: LocalizationThresholds) -> Readiness:
    if localized_models == 0:
        return Readiness.NONE
    if locale_count <= 1 or localized_models <= thresholds.basic_max_models:
        return Readiness.BASIC
    if locale_count >= thresholds.structured_min_locales and localized_models >= thresholds.structured_min_models:
        return Readiness.ADVANCED
    return Readiness.STRUCTURED


def _gaps(facts: LocalizationFacts) -> list[LocalizationGap]:
    if facts.readiness == Readiness.NONE:
        return [
            LocalizationGap(
                "localization-none",
                "No localization-ready models",
                "Scaling to new regions will require schema surgery",
                "Introduce locale-aware structures for high-priority models first.",
            )
        ]
    gaps: list[LocalizationGap] = []
    if facts.limited_coverage:
        gaps.append(
            LocalizationGap(
                "localization-limited-coverage",
                "Limited model coverage",
                "Only a subset of content can be translated, creating fragmented experiences",
                "Extend localization fields to hero pages, navigation, and SEO metadata.",
            )
        )
    if facts.locales_in_schema:
        gaps.append(
            LocalizationGap(
                "localization-locales-in-schema",
                "Locale list managed in schema",
                "Adding new locales requires developers, delaying go-to-market",
                "Store locale configuration in environment variables or dedicated models.",
            )
        )
    return gaps


def _strengths(facts: LocalizationFacts) -> list[str]:
    strengths: list[str] = []
    if len(facts.localized_models) >= 3:
        strengths.append(f"{len(facts.localized_models)} models already support locale-specific fields.")
    if facts.locale_count >= 3:
        strengths.append(f"Locale enum tracks {facts.locale_count}+ languages.")
    return strengths or ["Localization groundwork can be introduced without major refactors."]


def _workflow_considerations(facts: LocalizationFacts) -> list[str]:
    considerations: list[str] = []
    if facts.locale_count > 2:
        considerations.append("Define translation workflow stages to avoid overwriting approved locales.")
    if len(facts.localized_models) > 4:
        considerations.append("Group related translation tasks to prevent partial releases.")
    considerations.append("Clarify fallback locale behavior in the frontend.")
    return considerations


def detect_localization(
    schema: Schema,
    config: AuditConfig,
    registry: PatternRegistry = DEFAULT_REGISTRY,
) -> LocalizationFacts:
    thresholds = config.localization
    facts = LocalizationFacts()
    models = sorted(schema.custom_models(), key=lambda m: m.name)
    facts.content_models = len(models)
    for model in models:
        localized = [f for f in model.fields if registry.matches(PatternTag.LOCALIZED_FIELD, f.name)]
        if localized:
            facts.localized_models.append(model.name)
            facts.localized_fields += len(localized)

    # The platform's own Locale enum lists the project's locales, so system enums count here
    locale_enum = next(
        (e for e in sorted(schema.enums, key=lambda e: e.name) if registry.matches(PatternTag.LOCALE_ENUM, e.name)),
        None,
    )
    if locale_enum is not None:
        facts.locale_enum = locale_enum.name
        facts.locale_count = len(locale_enum.values)
    if facts.content_models:
        facts.localized_fields_ratio = facts.localized_fields / (facts.content_models * thresholds.fields_per_model)

    facts.readiness = readiness_for(len(facts.localized_models), facts.locale_count, thresholds)
    if facts.readiness != Readiness.NONE:
        facts.limited_coverage = len(facts.localized_models) < facts.content_models * thresholds.coverage_ratio
        facts.locales_in_schema = facts.locale_count <= thresholds.managed_locales_max
    facts.gaps = _gaps(facts)
    facts.strengths = _strengths(facts)
    facts.workflow_considerations = _workflow_considerations(facts)
    return facts


def score_localization(facts: LocalizationFacts) -> ScoreCard:
    card = ScoreCard()
    if facts.readiness == Readiness.NONE:
        card.add("No localization-ready models", -PENALTY_NONE)
    elif facts.readiness == Readiness.BASIC:
        card.add("Basic localization only", -PENALTY_BASIC, preview(facts.localized_models))
    if facts.limited_coverage:
        card.add("Limited localized model coverage", -PENALTY_LIMITED_COVERAGE)
    if facts.locales_in_schema:
        card.add("Locale list managed in schema", -PENALTY_LOCALES_IN_SCHEMA, f"{facts.locale_count} locale(s)")
    if facts.readiness == Readiness.ADVANCED:
        card.add("Localization integrated across the schema", LOCALIZATION_READY_BONUS)
    return card


def localization_checkpoints(facts: LocalizationFacts) -> list[CheckpointResult]:
    if facts.readiness == Readiness.NONE:
        coverage_status = CheckpointStatus.ISSUE
    elif facts.readiness == Readiness.BASIC or facts.limited_coverage:
        coverage_status = CheckpointStatus.WARNING
    else:
        coverage_status = CheckpointStatus.GOOD

    if facts.locale_enum is None:
        locale_findings = [f"No locale enum; {facts.locale_count} locale assumed"]
    else:
        locale_findings = [f"{facts.locale_enum} lists {facts.locale_count} locale(s)"]
    return [
        CheckpointResult(
            title="Localized Model Coverage",
            status=coverage_status,
            findings=[
                facts.narrative,
                f"{len(facts.localized_models)} of {facts.content_models} content model(s) carry locale-aware fields",
            ],
            examples=[example(facts.localized_models[:5], "Models with locale-aware fields")] if facts.localized_models else [],
            action_items=[g.recommendation for g in facts.gaps if g.id != "localization-locales-in-schema"],
        ),
        CheckpointResult(
            title="Locale Management",
            status=CheckpointStatus.WARNING if facts.locales_in_schema else CheckpointStatus.GOOD,
            findings=locale_findings,
            action_items=[g.recommendation for g in facts.gaps if g.id == "localization-locales-in-schema"],
        ),
        CheckpointResult(
            title="Translation Workflow",
            status=CheckpointStatus.GOOD,
            findings=list(facts.strengths),
            action_items=list(facts.workflow_considerations),
        ),
    ]


def localization_issues(facts: LocalizationFacts) -> list[AuditIssue]:
    category = Dimension.LOCALIZATION.value
    effort = {
        "localization-none": Effort.HIGH,
        "localization-limited-coverage": Effort.MEDIUM,
        "localization-locales-in-schema": Effort.LOW,
    }
    issues = [
        AuditIssue(
            id=gap.id,
            severity=Severity.INFO,
            category=category,
            title=gap.issue,
            description=facts.narrative,
            impact=gap.impact,
            recommendation=gap.recommendation,
            affected_items=list(facts.localized_models) if gap.id != "localization-none" else [],
            effort=effort[gap.id],
        )
        for gap in facts.gaps
    ]
    if facts.readiness == Readiness.ADVANCED:
        issues.append(
            AuditIssue(
                id="localization-ready",
                severity=Severity.INFO,
                category=category,
                title="Localization-Ready Schema",
                description=facts.narrative,
                impact="New markets can launch without schema changes",
                recommendation="Keep locale-aware fields on every new content model",
                affected_items=list(facts.localized_models),
                effort=Effort.LOW,
                score_bonus=LOCALIZATION_READY_BONUS,
            )
        )
    return issues


def analyze(
    schema: Schema,
    entry_counts: EntryCounts,
    config: AuditConfig,
    registry: PatternRegistry = DEFAULT_REGISTRY,
) -> DimensionResult:
    facts = detect_localization(schema, config, registry)
    checkpoints = localization_checkpoints(facts)
    result = DimensionResult(
        category=Dimension.LOCALIZATION.value,
        card=score_localization(facts),
        checkpoints=checkpoints,
        issues=localization_issues(facts),
        recommendations=[a for c in checkpoints for a in c.action_items][:10],
        details=facts.to_dict(),
    )
    logger.debug(
        "localization_analyzed",
        score=result.score,
        readiness=facts.readiness.value,
        localized_models=len(facts.localized_models),
    )
    return result
