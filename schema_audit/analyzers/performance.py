"""
Performance dimension: query cost implied by the schema shape.

Responsibilities:
- Deep query paths from the bounded traversal engine; one finding per
  reported chain.
- Recursive reference chains from the cycle detector.
- Deeply nested components, oversized models and key fields that should be
  required on models that already hold content.

Checkpoint penalties (issue / warning): nested components 15/8, deep paths
15/8, recursive chains 15/8, huge models 15/8, missing required 10/5.
"""

from __future__ import annotations

from dataclasses import dataclass, field
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
    status_for_count,
)
from schema_audit.analysis_engine.scorer import ScoreCard, status_penalty
from schema_audit.analysis_engine.traversal import DeepPathReport, find_deep_paths
from schema_audit.analyzers.common import example, issue_id
from schema_audit.analyzers.components import nesting_depths
from schema_audit.audit_logging import get_logger
from schema_audit.config import AuditConfig
from schema_audit.patterns import DEFAULT_REGISTRY, PatternRegistry, PatternTag
from schema_audit.schema_graph import EntryCounts, Schema, entries_for_model

logger = get_logger(__name__)

CHECKPOINT_PENALTIES: dict[str, tuple[int, int]] = {
    "Nested Components": (15, 8),
    "Deep Query Paths": (15, 8),
    "Recursive Chains": (15, 8),
    "Huge Models": (15, 8),
    "Missing Required Fields": (10, 5),
}


@dataclass
class HugeModel:
    model: str
    field_count: int
    high_usage: bool

    def to_dict(self) -> dict[str, Any]:
        return {"model": self.model, "field_count": self.field_count, "high_usage": self.high_usage}


@dataclass
class MissingRequired:
    model: str
    fields: list[str]
    reasons: list[str]

    def to_dict(self) -> dict[str, Any]:
        return {"model": self.model, "fields": list(self.fields), "reasons": list(self.reasons)}


@dataclass
class PerformanceFacts:
    deep_paths: DeepPathReport = field(default_factory=DeepPathReport)
    cycles: CycleReport = field(default_factory=CycleReport)
    nested_components: dict[str, int] = field(default_factory=dict)
    huge_models: list[HugeModel] = field(default_factory=list)
    missing_required: list[MissingRequired] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "deep_paths": self.deep_paths.to_dict(),
            "cycles": self.cycles.to_dict(),
            "nested_components": dict(self.nested_components),
            "huge_models": [h.to_dict() for h in self.huge_models],
            "missing_required": [m.to_dict() for m in self.missing_required],
        }


def detect_performance(
    schema: Schema,
    entry_counts: EntryCounts,
    config: AuditConfig,
    registry: PatternRegistry = DEFAULT_REGISTRY,
) -> PerformanceFacts:
    thresholds = config.performance
    facts = PerformanceFacts(
        deep_paths=find_deep_paths(schema, config.traversal),
        cycles=find_cycles(schema, config.traversal),
    )
    depths = nesting_depths(schema, config.components.nesting_search_limit)
    facts.nested_components = {
        name: depth for name, depth in depths.items() if depth >= config.components.max_nesting
    }

    for model in sorted(schema.custom_models(), key=lambda m: m.name):
        entries = entries_for_model(entry_counts, model).total
        if len(model.fields) > thresholds.huge_model_fields:
            facts.huge_models.append(
                HugeModel(
                    model=model.name,
                    field_count=len(model.fields),
                    high_usage=entries > thresholds.high_usage_entries,
                )
            )
        if entries == 0:
            continue
        missing: list[str] = []
        reasons: list[str] = []
        for matcher in registry.matchers(PatternTag.SHOULD_BE_REQUIRED):
            candidate = next((f for f in model.fields if matcher(f.name)), None)
            if candidate is not None and not candidate.is_required:
                missing.append(candidate.name)
                reasons.append(matcher.description)
        if missing:
            facts.missing_required.append(MissingRequired(model=model.name, fields=missing, reasons=reasons))

    facts.huge_models.sort(key=lambda h: (-h.field_count, h.model))
    return facts


def _quoted(names: list[str]) -> str:
    return ", ".join(f'"{n}"' for n in names)


def performance_checkpoints(facts: PerformanceFacts, config: AuditConfig) -> list[CheckpointResult]:
    thresholds = config.performance
    max_nesting = config.components.max_nesting
    checkpoints: list[CheckpointResult] = []

    nested = facts.nested_components
    if not nested:
        nested_status = CheckpointStatus.GOOD
    elif any(depth > max_nesting for depth in nested.values()):
        nested_status = CheckpointStatus.ISSUE
    else:
        nested_status = CheckpointStatus.WARNING
    checkpoints.append(
        CheckpointResult(
            title="Nested Components",
            status=nested_status,
            findings=(
                [f"{len(nested)} component(s) nest {max_nesting}+ levels deep"]
                if nested
                else [f"No components nest {max_nesting}+ levels deep"]
            ),
            examples=[example([name], f"{depth} levels") for name, depth in list(nested.items())[:5]],
            action_items=[f'Flatten "{name}" ({depth} levels)' for name, depth in list(nested.items())[:5]],
        )
    )

    report = facts.deep_paths
    paths = report.paths
    critical = [p for p in paths if p.severity == Severity.CRITICAL]
    findings = (
        [f"{len(paths)} path(s) require {config.traversal.min_reported_depth}+ nested queries"]
        if paths
        else ["No excessively deep query paths detected"]
    )
    if critical:
        findings.append(f"{len(critical)} path(s) with HIGH complexity ({config.traversal.critical_depth}+ models)")
    if report.truncated:
        findings.append(f"Search stopped early ({', '.join(report.bounds_hit)}); results are partial")
    checkpoints.append(
        CheckpointResult(
            title="Deep Query Paths",
            status=CheckpointStatus.ISSUE if critical else (CheckpointStatus.WARNING if paths else CheckpointStatus.GOOD),
            findings=findings,
            examples=[example(p.models, f"{p.depth - 1} hops: {' -> '.join(p.models)}") for p in paths],
            action_items=[
                f'Add direct reference from "{p.models[0]}" to "{p.models[-1]}" if frequently queried together'
                for p in paths[:3]
            ],
        )
    )

    chains = facts.cycles.chains
    checkpoints.append(
        CheckpointResult(
            title="Recursive Chains",
            status=status_for_count(len(chains), 0, 2),
            findings=(
                [f"{len(chains)} circular reference chain(s) detected"]
                if chains
                else ["No circular dependencies detected"]
            ),
            examples=[example(c, f"Cycle: {' -> '.join(c)} -> {c[0]}") for c in chains[:3]],
            action_items=[
                f"Break circular reference: {' -> '.join(c)} - consider removing one direction or using a junction model"
                for c in chains[:2]
            ],
        )
    )

    huge = facts.huge_models
    if not huge:
        huge_status = CheckpointStatus.GOOD
    elif any(h.field_count > thresholds.very_huge_model_fields for h in huge):
        huge_status = CheckpointStatus.ISSUE
    else:
        huge_status = CheckpointStatus.WARNING
    checkpoints.append(
        CheckpointResult(
            title="Huge Models",
            status=huge_status,
            findings=(
                [f"{len(huge)} model(s) exceed {thresholds.huge_model_fields} field threshold"]
                if huge
                else [f"All models have <={thresholds.huge_model_fields} fields"]
            ),
            examples=[
                example(
                    [h.model],
                    f"High-usage model with {h.field_count} fields; prioritize splitting for API performance"
                    if h.high_usage
                    else f"{h.field_count} fields exceed recommended {thresholds.huge_model_fields}",
                )
                for h in huge
            ],
            action_items=[
                f'Split "{h.model}" ({h.field_count} fields) into focused models or extract field groups into components'
                for h in huge
            ],
        )
    )

    missing = facts.missing_required
    checkpoints.append(
        CheckpointResult(
            title="Missing Required Fields",
            status=status_for_count(len(missing), 0, 3),
            findings=(
                [f"{len(missing)} model(s) have key fields that should be required"]
                if missing
                else ["Key fields are properly marked as required"]
            ),
            examples=[
                example([m.model], f"{', '.join(m.fields)} should be required ({', '.join(m.reasons)})")
                for m in missing[:5]
            ],
            action_items=[
                f"Make {_quoted(m.fields)} required in \"{m.model}\" to ensure data completeness" for m in missing
            ],
        )
    )
    return checkpoints


def score_performance(checkpoints: list[CheckpointResult]) -> ScoreCard:
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


def performance_issues(facts: PerformanceFacts, config: AuditConfig) -> list[AuditIssue]:
    category = Dimension.PERFORMANCE.value
    issues: list[AuditIssue] = []
    for path in facts.deep_paths.paths:
        critical = path.severity == Severity.CRITICAL
        issues.append(
            AuditIssue(
                id=issue_id("deep-path", *path.models),
                severity=path.severity,
                category=category,
                title="Deep Query Path" if critical else "Nested Query Path",
                description=f"Querying {' -> '.join(path.models)} spans {path.depth} models",
                impact="Each nested level multiplies query cost and response size",
                recommendation=path.mitigation,
                affected_items=list(path.models),
                effort=Effort.HIGH if critical else Effort.MEDIUM,
            )
        )
    for chain in facts.cycles.chains:
        issues.append(
            AuditIssue(
                id=issue_id("recursive-chain", *chain),
                severity=Severity.WARNING,
                category=category,
                title="Recursive Reference Chain",
                description=f"{' -> '.join(chain)} -> {chain[0]} forms a cycle",
                impact="Recursive chains allow unbounded nested queries",
                recommendation="Remove one direction of the chain or introduce a junction model",
                affected_items=list(chain),
                effort=Effort.HIGH,
            )
        )
    for huge in facts.huge_models:
        very_huge = huge.field_count > config.performance.very_huge_model_fields
        issues.append(
            AuditIssue(
                id=issue_id("huge-model", huge.model),
                severity=Severity.WARNING if very_huge or huge.high_usage else Severity.INFO,
                category=category,
                title="Huge Model",
                description=f'"{huge.model}" has {huge.field_count} fields',
                impact="Large models slow the editor and inflate API payloads",
                recommendation="Split the model or extract field groups into components",
                affected_items=[huge.model],
                effort=Effort.HIGH,
            )
        )
    for item in facts.missing_required:
        issues.append(
            AuditIssue(
                id=issue_id("missing-required", item.model),
                severity=Severity.INFO,
                category=category,
                title="Key Fields Not Required",
                description=f'"{item.model}": {", ".join(item.fields)} should be required',
                impact="Entries without key fields break routing and listings",
                recommendation=f"Mark {', '.join(item.fields)} as required",
                affected_items=[f"{item.model}.{f}" for f in item.fields],
                effort=Effort.LOW,
            )
        )
    return issues


def analyze(
    schema: Schema,
    entry_counts: EntryCounts,
    config: AuditConfig,
    registry: PatternRegistry = DEFAULT_REGISTRY,
) -> DimensionResult:
    facts = detect_performance(schema, entry_counts, config, registry)
    checkpoints = performance_checkpoints(facts, config)
    result = DimensionResult(
        category=Dimension.PERFORMANCE.value,
        card=score_performance(checkpoints),
        checkpoints=checkpoints,
        issues=performance_issues(facts, config),
        recommendations=[a for c in checkpoints for a in c.action_items][:10],
        details=facts.to_dict(),
    )
    if facts.deep_paths.truncated:
        result.notes.append(f"Deep path search hit bounds: {', '.join(facts.deep_paths.bounds_hit)}")
    if facts.cycles.truncated:
        result.notes.append(f"Cycle detection stopped after {config.traversal.max_cycles} cycles")
    logger.debug("performance_analyzed", score=result.score, deep_paths=len(facts.deep_paths.paths))
    return result
