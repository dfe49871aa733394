"""
Relationships dimension: correctness and cost of model references.

Responsibilities:
- Reference correctness: references to unknown types, optional key
  references (author, category, ...) and missing reverse relations.
- Circular references: bidirectional pairs are normal; chains through
  three or more models are flagged.
- Nested vs linked: large models carrying SEO, media or CTA field groups
  inline, and models with several inline list fields.
- Query cost: deep reference chains from the traversal engine, bucketed by
  estimated cost.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from schema_audit.analysis_engine.cycles import CycleReport, find_cycles
from schema_audit.analysis_engine.models import (
    AuditIssue,
    CheckpointResult,
    CheckpointStatus,
    Dimension,
    DimensionResult,
    Effort,
    Severity,
)
from schema_audit.analysis_engine.scorer import ScoreCard, status_penalty
from schema_audit.analysis_engine.traversal import DeepPath, find_deep_paths
from schema_audit.analyzers.common import example, issue_id, qualified
from schema_audit.audit_logging import get_logger
from schema_audit.config import AuditConfig
from schema_audit.patterns import DEFAULT_REGISTRY, PatternRegistry, PatternTag
from schema_audit.schema_graph import EntryCounts, ModelType, Schema
from schema_audit.schema_graph.system_filters import is_system_reference

logger = get_logger(__name__)

CHECKPOINT_PENALTIES: dict[str, tuple[int, int]] = {
    "Reference Correctness": (15, 8),
    "Circular References": (10, 5),
    "Nested vs Linked Structure": (10, 5),
    "Query Cost": (15, 8),
}

SEO_GROUP_MIN = 3
MEDIA_GROUP_MIN = 4
CTA_GROUP_MIN = 3
INLINE_LIST_MIN = 2


class ReferenceProblem(str, Enum):
    BROKEN = "broken_reference"
    NULLABLE_KEY = "nullable_key_reference"
    MISSING_REVERSE = "missing_reverse_relation"


@dataclass
class ReferenceFinding:
    model: str
    field: str
    target: str
    problem: ReferenceProblem

    @property
    def suggestion(self) -> str:
        if self.problem == ReferenceProblem.BROKEN:
            return f'Target model "{self.target}" does not exist'
        if self.problem == ReferenceProblem.NULLABLE_KEY:
            return f'Consider making "{self.field}" required for data consistency'
        return f'Add reverse relation on "{self.target}" for bidirectional navigation'

    def to_dict(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "field": self.field,
            "target": self.target,
            "issue": self.problem.value,
            "suggestion": self.suggestion,
        }


@dataclass
class SplitSuggestion:
    model: str
    field_count: int
    suggestion: str

    def to_dict(self) -> dict[str, Any]:
        return {"model": self.model, "field_count": self.field_count, "suggestion": self.suggestion}


@dataclass
class RelationshipFacts:
    references: list[ReferenceFinding] = field(default_factory=list)
    cycles: CycleReport = field(default_factory=CycleReport)
    splits: list[SplitSuggestion] = field(default_factory=list)
    high_cost: list[DeepPath] = field(default_factory=list)
    medium_cost: list[DeepPath] = field(default_factory=list)
    edge_count: int = 0

    def of(self, problem: ReferenceProblem) -> list[ReferenceFinding]:
        return [r for r in self.references if r.problem == problem]

    def to_dict(self) -> dict[str, Any]:
        return {
            "edge_count": self.edge_count,
            "reference_issues": [r.to_dict() for r in self.references],
            "cycles": self.cycles.to_dict(),
            "should_be_split": [s.to_dict() for s in self.splits],
            "high_cost_paths": [p.to_dict() for p in self.high_cost],
            "medium_cost_paths": [p.to_dict() for p in self.medium_cost],
        }


def _reference_findings(schema: Schema, model: ModelType, registry: PatternRegistry) -> list[ReferenceFinding]:
    findings: list[ReferenceFinding] = []
    for f in model.fields:
        target = f.related_model
        if target is None:
            continue
        if not is_system_reference(target, registry) and schema.type_by_name(target) is None:
            findings.append(ReferenceFinding(model.name, f.name, target, ReferenceProblem.BROKEN))
        if not f.is_required and not f.is_list and registry.matches(PatternTag.KEY_REFERENCE, f.name):
            findings.append(ReferenceFinding(model.name, f.name, target, ReferenceProblem.NULLABLE_KEY))
        target_model = schema.model_by_name(target) if schema.is_custom_model(target) else None
        if target_model is not None and registry.matches(PatternTag.REVERSE_EXPECTED, f.name):
            if not any(back.related_model == model.name for back in target_model.fields):
                findings.append(ReferenceFinding(model.name, f.name, target, ReferenceProblem.MISSING_REVERSE))
    return findings


def _split_suggestions(
    schema: Schema,
    model: ModelType,
    config: AuditConfig,
    registry: PatternRegistry,
) -> list[SplitSuggestion]:
    suggestions: list[SplitSuggestion] = []
    component_names = [c.name for c in schema.custom_components()]
    if len(model.fields) > config.performance.huge_model_fields:
        seo = [f.name for f in model.fields if registry.matches(PatternTag.SEO_FIELD, f.name)]
        media = [f.name for f in model.fields if registry.matches(PatternTag.MEDIA_FIELD, f.name)]
        cta = [f.name for f in model.fields if registry.matches(PatternTag.CTA_FIELD, f.name)]
        has_seo_component = any(registry.matches(PatternTag.SEO_FIELD, c) for c in component_names)
        has_cta_component = any(registry.matches(PatternTag.CTA_FIELD, c) for c in component_names)
        if len(seo) >= SEO_GROUP_MIN and not has_seo_component:
            suggestions.append(
                SplitSuggestion(model.name, len(seo), f"Extract SEO fields ({', '.join(seo)}) to an SEO component")
            )
        if len(media) >= MEDIA_GROUP_MIN:
            suggestions.append(
                SplitSuggestion(
                    model.name,
                    len(media),
                    f"Consider grouping media fields ({', '.join(media[:3])}...) into a Media component",
                )
            )
        if len(cta) >= CTA_GROUP_MIN and not has_cta_component:
            suggestions.append(SplitSuggestion(model.name, len(cta), "Extract CTA fields to a reusable CTA component"))

    inline_lists = [f for f in model.fields if f.is_list and f.related_model is None and f.type_name != "String"]
    if len(inline_lists) >= INLINE_LIST_MIN:
        suggestions.append(
            SplitSuggestion(
                model.name,
                len(inline_lists),
                "Consider converting inline list fields to component references for better reusability",
            )
        )
    return suggestions


def detect_relationships(
    schema: Schema,
    config: AuditConfig,
    registry: PatternRegistry = DEFAULT_REGISTRY,
) -> RelationshipFacts:
    facts = RelationshipFacts(
        cycles=find_cycles(schema, config.traversal),
        edge_count=len(schema.relation_edges()),
    )
    for model in sorted(schema.custom_models(), key=lambda m: m.name):
        facts.references.extend(_reference_findings(schema, model, registry))
        facts.splits.extend(_split_suggestions(schema, model, config, registry))
    for path in find_deep_paths(schema, config.traversal).paths:
        if path.severity == Severity.CRITICAL:
            facts.high_cost.append(path)
        else:
            facts.medium_cost.append(path)
    return facts


def relationship_checkpoints(facts: RelationshipFacts, config: AuditConfig) -> list[CheckpointResult]:
    checkpoints: list[CheckpointResult] = []

    broken = facts.of(ReferenceProblem.BROKEN)
    nullable = facts.of(ReferenceProblem.NULLABLE_KEY)
    reverse = facts.of(ReferenceProblem.MISSING_REVERSE)
    if broken:
        status = CheckpointStatus.ISSUE
    elif len(facts.references) > 2:
        status = CheckpointStatus.WARNING
    else:
        status = CheckpointStatus.GOOD
    findings = []
    if broken:
        findings.append(f"{len(broken)} broken reference(s) detected")
    if nullable:
        findings.append(f"{len(nullable)} key reference(s) should be required")
    if reverse:
        findings.append(f"{len(reverse)} reverse relation(s) recommended")
    checkpoints.append(
        CheckpointResult(
            title="Reference Correctness",
            status=status,
            findings=findings or ["All references are valid and well-configured"],
            examples=[example([qualified(r.model, r.field)], r.suggestion) for r in facts.references[:5]],
            action_items=[r.suggestion for r in facts.references[:3]],
        )
    )

    pairs = facts.cycles.bidirectional_pairs
    chains = facts.cycles.chains
    if len(chains) > 2:
        cycle_status = CheckpointStatus.ISSUE
    elif chains:
        cycle_status = CheckpointStatus.WARNING
    else:
        cycle_status = CheckpointStatus.GOOD
    checkpoints.append(
        CheckpointResult(
            title="Circular References",
            status=cycle_status,
            findings=[
                f"{len(pairs)} bidirectional relationship(s)",
                f"{len(chains)} circular chain(s) detected (3+ models)" if chains else "No problematic circular chains detected",
            ],
            examples=[
                *[example([a, b], f"Bidirectional: {a} <-> {b}") for a, b in pairs[:2]],
                *[example(c, f"Cycle: {' -> '.join(c)} -> {c[0]}") for c in chains[:2]],
            ],
            action_items=[
                f"Review circular chain: {' -> '.join(c)} - consider if all relations are necessary" for c in chains[:2]
            ],
        )
    )

    splits = facts.splits
    if not splits:
        split_status = CheckpointStatus.GOOD
    elif len(splits) <= 3:
        split_status = CheckpointStatus.WARNING
    else:
        split_status = CheckpointStatus.ISSUE
    checkpoints.append(
        CheckpointResult(
            title="Nested vs Linked Structure",
            status=split_status,
            findings=(
                [f"{len(splits)} model(s) could benefit from restructuring"]
                if splits
                else ["Model structures are well-organized"]
            ),
            examples=[example([s.model], s.suggestion) for s in splits[:3]],
            action_items=[s.suggestion for s in splits[:3]],
        )
    )

    high, medium = facts.high_cost, facts.medium_cost
    if len(high) > 2:
        cost_status = CheckpointStatus.ISSUE
    elif high or len(medium) > 3:
        cost_status = CheckpointStatus.WARNING
    else:
        cost_status = CheckpointStatus.GOOD
    cost_findings = []
    if high:
        cost_findings.append(f"{len(high)} high-cost path(s) ({config.traversal.critical_depth}+ models)")
    if medium:
        cost_findings.append(f"{len(medium)} medium-cost path(s) ({config.traversal.min_reported_depth} models)")
    checkpoints.append(
        CheckpointResult(
            title="Query Cost",
            status=cost_status,
            findings=cost_findings or ["No high-cost query paths detected"],
            examples=[example(p.models, f"{p.query_complexity} cost: {' -> '.join(p.models)}") for p in (high + medium)[:3]],
            action_items=[p.mitigation for p in high[:2]],
        )
    )
    return checkpoints


def score_relationships(checkpoints: list[CheckpointResult]) -> ScoreCard:
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


def relationship_issues(facts: RelationshipFacts) -> list[AuditIssue]:
    category = Dimension.RELATIONSHIPS.value
    issues: list[AuditIssue] = []
    for ref in facts.of(ReferenceProblem.BROKEN):
        issues.append(
            AuditIssue(
                id=issue_id("broken-reference", ref.model, ref.field),
                severity=Severity.CRITICAL,
                category=category,
                title="Broken Reference",
                description=f'{qualified(ref.model, ref.field)} points to "{ref.target}", which is not in the schema',
                impact="Queries through this field return nothing or fail",
                recommendation=f'Remove the field or restore the "{ref.target}" model',
                affected_items=[qualified(ref.model, ref.field)],
                effort=Effort.LOW,
            )
        )
    nullable = facts.of(ReferenceProblem.NULLABLE_KEY)
    if nullable:
        issues.append(
            AuditIssue(
                id="nullable-key-references",
                severity=Severity.INFO,
                category=category,
                title="Optional Key References",
                description=f"{len(nullable)} key reference(s) are optional",
                impact="Entries without an owner, author or category fall out of listings",
                recommendation="Make key references required",
                affected_items=[qualified(r.model, r.field) for r in nullable],
                effort=Effort.LOW,
            )
        )
    reverse = facts.of(ReferenceProblem.MISSING_REVERSE)
    if reverse:
        issues.append(
            AuditIssue(
                id="missing-reverse-relations",
                severity=Severity.INFO,
                category=category,
                title="Missing Reverse Relations",
                description=f"{len(reverse)} taxonomy or ownership reference(s) have no reverse field",
                impact="Editors cannot navigate from the target back to its content",
                recommendation="Add reverse relations for bidirectional navigation",
                affected_items=[qualified(r.model, r.field) for r in reverse],
                effort=Effort.LOW,
            )
        )
    for chain in facts.cycles.chains:
        issues.append(
            AuditIssue(
                id=issue_id("circular-chain", *chain),
                severity=Severity.WARNING,
                category=category,
                title="Circular Reference Chain",
                description=f"{' -> '.join(chain)} -> {chain[0]}",
                impact="Circular chains complicate deletion order and invite unbounded queries",
                recommendation="Consider if all relations in the chain are necessary",
                affected_items=list(chain),
                effort=Effort.HIGH,
            )
        )
    for n, split in enumerate(facts.splits, start=1):
        issues.append(
            AuditIssue(
                id=issue_id("restructure", split.model, str(n)),
                severity=Severity.INFO,
                category=category,
                title="Inline Field Group",
                description=f'"{split.model}": {split.suggestion}',
                impact="Inline field groups cannot be reused or queried independently",
                recommendation=split.suggestion,
                affected_items=[split.model],
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
    facts = detect_relationships(schema, config, registry)
    checkpoints = relationship_checkpoints(facts, config)
    result = DimensionResult(
        category=Dimension.RELATIONSHIPS.value,
        card=score_relationships(checkpoints),
        checkpoints=checkpoints,
        issues=relationship_issues(facts),
        recommendations=[a for c in checkpoints for a in c.action_items][:10],
        details=facts.to_dict(),
    )
    logger.debug("relationships_analyzed", score=result.score, references=len(facts.references))
    return result
