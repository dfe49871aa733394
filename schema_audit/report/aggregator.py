"""
Strategic aggregator: runs every dimension analyzer and assembles the report.

Responsibilities:
- Run each analyzer in isolation; a failing analyzer becomes a neutral,
  degraded DimensionResult plus a dimension_degraded warning.
- Combine dimension scores into the overall score with fixed category
  weights (empty schema -> EMPTY_SCHEMA_SCORE).
- Sort issues by severity, category, id; build roadmap, executive summary,
  relationship graph and strengths. Graph and strengths failures are noted
  on their own section, never fatal.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable

from schema_audit.analysis_engine.models import (
    SEVERITY_ORDER,
    AuditIssue,
    Dimension,
    DimensionResult,
    neutral_result,
)
from schema_audit.analysis_engine.relationship_graph import RelationshipGraph, build_relationship_graph
from schema_audit.analysis_engine.scorer import ScoreCard, weighted_average
from schema_audit.analyzers import ANALYZERS
from schema_audit.analyzers.content_health import ContentSampler
from schema_audit.audit_logging import get_logger, run_context
from schema_audit.config import AuditConfig
from schema_audit.patterns import DEFAULT_REGISTRY, PatternRegistry
from schema_audit.report.roadmap import Roadmap, build_roadmap
from schema_audit.report.strengths import StrengthsReport, find_strengths
from schema_audit.report.summary import ExecutiveSummary, build_summary
from schema_audit.schema_graph import EntryCounts, Schema

logger = get_logger(__name__)

EMPTY_SCHEMA_NOTE = "Schema has no custom models, components or enums to audit"


@dataclass
class StrategicAuditReport:
    executive_summary: ExecutiveSummary
    overall_score: int
    score_weights: dict[str, float]
    category_scores: dict[str, int]
    dimensions: dict[str, DimensionResult]
    issues: list[AuditIssue]
    roadmap: Roadmap
    relationship_graph: RelationshipGraph
    strengths: StrengthsReport
    registry_version: str

    @property
    def degraded_dimensions(self) -> list[str]:
        return [name for name, d in self.dimensions.items() if d.degraded]

    def to_dict(self) -> dict[str, Any]:
        return {
            "executive_summary": self.executive_summary.to_dict(),
            "overall_score": self.overall_score,
            "score_weights": dict(self.score_weights),
            "category_scores": dict(self.category_scores),
            "dimensions": {name: d.to_dict() for name, d in self.dimensions.items()},
            "issues": [i.to_dict() for i in self.issues],
            "roadmap": self.roadmap.to_dict(),
            "relationship_graph": self.relationship_graph.to_dict(),
            "strengths": self.strengths.to_dict(),
            "registry_version": self.registry_version,
        }


def run_isolated(category: str, analyze: Callable[..., DimensionResult], *args: Any, **kwargs: Any) -> DimensionResult:
    """Run one analyzer; any exception yields a neutral degraded result."""
    try:
        return analyze(*args, **kwargs)
    except Exception as e:
        logger.warning("dimension_degraded", category=category, error=str(e), error_type=type(e).__name__)
        return neutral_result(category, f"{category} analysis failed ({type(e).__name__}); score is neutral")


def sort_issues(issues: list[AuditIssue]) -> list[AuditIssue]:
    return sorted(issues, key=lambda i: (SEVERITY_ORDER[i.severity], i.category, i.id))


def has_auditable_types(schema: Schema) -> bool:
    return bool(schema.custom_models() or schema.custom_components() or schema.custom_enums())


def _relationship_graph(schema: Schema, entry_counts: EntryCounts, config: AuditConfig, registry: PatternRegistry) -> RelationshipGraph:
    try:
        return build_relationship_graph(schema, entry_counts, config.graph, registry)
    except Exception as e:
        logger.warning("relationship_graph_degraded", error=str(e), error_type=type(e).__name__)
        return RelationshipGraph(
            degraded=True,
            notes=[f"relationship graph failed ({type(e).__name__}: {e}); graph is empty"],
        )


def _strengths(schema: Schema, entry_counts: EntryCounts, config: AuditConfig, registry: PatternRegistry) -> StrengthsReport:
    try:
        return find_strengths(schema, entry_counts, config, registry)
    except Exception as e:
        logger.warning("strengths_degraded", error=str(e), error_type=type(e).__name__)
        return StrengthsReport(notes=[f"strengths detection failed ({type(e).__name__}: {e})"])


def run_audit(
    schema: Schema,
    entry_counts: EntryCounts | None = None,
    config: AuditConfig | None = None,
    registry: PatternRegistry = DEFAULT_REGISTRY,
    sampler: ContentSampler | None = None,
) -> StrategicAuditReport:
    """
    Audit one schema.

    Pure over its inputs: nothing is cached between runs. Only the optional
    sampler touches the outside world, and its failures are isolated.
    """
    config = config or AuditConfig()
    entry_counts = entry_counts or {}
    with run_context(uuid.uuid4().hex[:12]) as run_logger:
        return _audit(schema, entry_counts, config, registry, sampler, run_logger)


def _audit(
    schema: Schema,
    entry_counts: EntryCounts,
    config: AuditConfig,
    registry: PatternRegistry,
    sampler: ContentSampler | None,
    run_logger: Any,
) -> StrategicAuditReport:
    run_logger.info(
        "audit_started",
        models=len(schema.models),
        components=len(schema.components),
        enums=len(schema.enums),
        registry_version=registry.version,
    )

    auditable = has_auditable_types(schema)
    dimensions: dict[str, DimensionResult] = {}
    for dimension, analyze in ANALYZERS:
        category = dimension.value
        if not auditable:
            dimensions[category] = DimensionResult(category=category, card=ScoreCard(), notes=[EMPTY_SCHEMA_NOTE])
            continue
        if dimension == Dimension.CONTENT:
            analyze = partial(analyze, sampler=sampler)
        dimensions[category] = run_isolated(category, analyze, schema, entry_counts, config, registry)

    category_scores = {name: d.score for name, d in dimensions.items()}
    weights = {name: config.category_weights.get(name, 1.0) for name in category_scores}
    if auditable:
        overall = round(weighted_average(category_scores, weights, default=config.empty_schema_score))
    else:
        overall = config.empty_schema_score

    issues = sort_issues([i for d in dimensions.values() for i in d.issues])
    report = StrategicAuditReport(
        executive_summary=build_summary(schema, entry_counts, overall, issues, dimensions),
        overall_score=overall,
        score_weights=weights,
        category_scores=category_scores,
        dimensions=dimensions,
        issues=issues,
        roadmap=build_roadmap(issues),
        relationship_graph=_relationship_graph(schema, entry_counts, config, registry),
        strengths=_strengths(schema, entry_counts, config, registry) if auditable else StrengthsReport(),
        registry_version=registry.version,
    )
    run_logger.info(
        "audit_completed",
        overall_score=overall,
        issues=len(issues),
        degraded=report.degraded_dimensions,
    )
    return report
