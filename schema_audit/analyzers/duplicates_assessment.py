"""
Duplicates dimension: near-identical enums, components and models, plus
boolean show/hide fields that push presentation logic into content.

The grouping itself lives in analysis_engine.duplicates; this module turns
groups into checkpoints, issues and score contributions.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from schema_audit.analysis_engine.duplicates import (
    BooleanToggle,
    DuplicateGroup,
    find_boolean_toggles,
    find_duplicate_components,
    find_duplicate_enums,
    find_duplicate_models,
)
from schema_audit.analysis_engine.models import (
    AuditIssue,
    CheckpointResult,
    Dimension,
    DimensionResult,
    Effort,
    Severity,
    status_for_count,
)
from schema_audit.analysis_engine.scorer import ScoreCard, status_penalty
from schema_audit.analyzers.common import example, issue_id
from schema_audit.audit_logging import get_logger
from schema_audit.config import AuditConfig
from schema_audit.patterns import DEFAULT_REGISTRY, PatternRegistry
from schema_audit.schema_graph import EntryCounts, Schema

logger = get_logger(__name__)

CHECKPOINT_PENALTIES: dict[str, tuple[int, int]] = {
    "Duplicate Enums": (10, 5),
    "Duplicate Components": (10, 5),
    "Duplicate Models": (15, 8),
    "Boolean Show/Hide Fields": (5, 3),
}

TOGGLES_GOOD_MAX = 3
TOGGLES_WARNING_MAX = 8
TOGGLE_PATTERN_MIN = 3


@dataclass
class DuplicateFacts:
    enums: list[DuplicateGroup] = field(default_factory=list)
    components: list[DuplicateGroup] = field(default_factory=list)
    models: list[DuplicateGroup] = field(default_factory=list)
    toggles: list[BooleanToggle] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "enums": [g.to_dict() for g in self.enums],
            "components": [g.to_dict() for g in self.components],
            "models": [g.to_dict() for g in self.models],
            "boolean_toggles": [t.to_dict() for t in self.toggles],
        }


def detect_duplicates(schema: Schema, config: AuditConfig, registry: PatternRegistry = DEFAULT_REGISTRY) -> DuplicateFacts:
    thresholds = config.duplicates
    return DuplicateFacts(
        enums=find_duplicate_enums(schema.custom_enums(), thresholds),
        components=find_duplicate_components(schema.custom_components(), thresholds),
        models=find_duplicate_models(schema.custom_models(), thresholds, registry),
        toggles=find_boolean_toggles((*schema.custom_models(), *schema.custom_components()), registry),
    )


def _group_checkpoint(title: str, groups: list[DuplicateGroup], empty: str) -> CheckpointResult:
    return CheckpointResult(
        title=title,
        status=status_for_count(len(groups), 0, 1),
        findings=[f"{len(groups)} group(s) found"] if groups else [empty],
        examples=[example(g.members, f"{g.similarity}% similar: {g.reason}") for g in groups],
        action_items=[g.recommendation for g in groups],
    )


def duplicate_checkpoints(facts: DuplicateFacts) -> list[CheckpointResult]:
    toggles = facts.toggles
    by_pattern = Counter(t.pattern for t in toggles)
    toggle_actions: list[str] = []
    if len(toggles) > TOGGLES_GOOD_MAX:
        toggle_actions.append(
            f"Found {len(toggles)} boolean show/hide fields - consider if these create editor confusion"
        )
        toggle_actions.extend(
            f'{count} "{pattern}*" fields may indicate presentation logic in content schema'
            for pattern, count in sorted(by_pattern.items())
            if count >= TOGGLE_PATTERN_MIN
        )
    return [
        _group_checkpoint("Duplicate Enums", facts.enums, "No duplicate enums"),
        _group_checkpoint("Duplicate Components", facts.components, "No duplicate components"),
        _group_checkpoint("Duplicate Models", facts.models, "No duplicate models"),
        CheckpointResult(
            title="Boolean Show/Hide Fields",
            status=status_for_count(len(toggles), TOGGLES_GOOD_MAX, TOGGLES_WARNING_MAX),
            findings=[f"{len(toggles)} boolean toggle field(s)"],
            examples=[example([f"{t.owner}.{t.field}" for t in toggles[:5]], "Boolean toggles")] if toggles else [],
            action_items=toggle_actions,
        ),
    ]


def score_duplicates(checkpoints: list[CheckpointResult]) -> ScoreCard:
    card = ScoreCard()
    for checkpoint in checkpoints:
        issue_delta, warning_delta = CHECKPOINT_PENALTIES[checkpoint.title]
        status_penalty(
            card,
            checkpoint.title,
            checkpoint.status.value,
            issue_delta=issue_delta,
            warning_delta=warning_delta,
            detail=checkpoint.findings[0] if checkpoint.findings else None,
        )
    return card


def duplicate_issues(facts: DuplicateFacts) -> list[AuditIssue]:
    category = Dimension.DUPLICATES.value
    issues: list[AuditIssue] = []
    for group in facts.enums:
        issues.append(
            AuditIssue(
                id=issue_id("duplicate-enum", *group.members),
                severity=Severity.INFO,
                category=category,
                title="Duplicate Enums",
                description=f"{', '.join(group.members)}: {group.reason}",
                impact="Parallel enums drift apart and confuse editors",
                recommendation=group.recommendation,
                affected_items=list(group.members),
                effort=Effort.LOW,
            )
        )
    for group in facts.components:
        issues.append(
            AuditIssue(
                id=issue_id("duplicate-components", *group.members),
                severity=Severity.WARNING,
                category=category,
                title="Duplicate Components",
                description=f"{', '.join(group.members)}: {group.reason}",
                impact="Editors pick between near-identical components",
                recommendation=group.recommendation,
                affected_items=list(group.members),
                effort=Effort.MEDIUM,
            )
        )
    for group in facts.models:
        issues.append(
            AuditIssue(
                id=issue_id("duplicate-models", *group.members),
                severity=Severity.WARNING,
                category=category,
                title="Duplicate Models",
                description=f"{', '.join(group.members)}: {group.reason}",
                impact="Content is split across models that describe the same thing",
                recommendation=group.recommendation,
                affected_items=list(group.members),
                effort=Effort.HIGH,
            )
        )
    if len(facts.toggles) > TOGGLES_GOOD_MAX:
        issues.append(
            AuditIssue(
                id="boolean-toggles",
                severity=Severity.INFO,
                category=category,
                title="Boolean Show/Hide Fields",
                description=f"{len(facts.toggles)} boolean fields toggle presentation",
                impact="Presentation toggles mix layout decisions into content",
                recommendation="Replace toggles with a layout or variant enum, or move display logic to the frontend",
                affected_items=[f"{t.owner}.{t.field}" for t in facts.toggles],
                effort=Effort.MEDIUM,
            )
        )
    return issues


def analyze(
    schema: Schema,
    entry_counts: EntryCounts,
    config: AuditConfig,
    registry: PatternRegistry = DEFAULT_REGISTRY,
) -> DimensionResult:
    facts = detect_duplicates(schema, config, registry)
    checkpoints = duplicate_checkpoints(facts)
    result = DimensionResult(
        category=Dimension.DUPLICATES.value,
        card=score_duplicates(checkpoints),
        checkpoints=checkpoints,
        issues=duplicate_issues(facts),
        recommendations=[a for c in checkpoints for a in c.action_items][:10],
        details=facts.to_dict(),
    )
    logger.debug(
        "duplicates_analyzed",
        score=result.score,
        enum_groups=len(facts.enums),
        component_groups=len(facts.components),
        model_groups=len(facts.models),
    )
    return result
