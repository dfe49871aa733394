"""
Content dimension: health of the entries stored in each model.

Responsibilities:
- Entry volume facts: empty models, draft-heavy models, large collections
  and content concentrated in one model.
- Optional field sampling through a ContentSampler. Every sampling call is
  isolated: a failure on one model becomes a note and never affects the
  other models or the rest of the audit.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

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
from schema_audit.analysis_engine.scorer import ScoreCard, capped_penalty
from schema_audit.analyzers.common import example, issue_id, preview
from schema_audit.audit_logging import get_logger
from schema_audit.config import AuditConfig
from schema_audit.patterns import DEFAULT_REGISTRY, PatternRegistry
from schema_audit.schema_graph import EntryCounts, ModelType, Schema, entries_for_model

logger = get_logger(__name__)

# (draft percentage above which, deduction); cumulative
DRAFT_RATIO_PENALTIES = ((30, 5), (50, 10), (70, 15))
EMPTY_MODELS_MAX_PENALTY = 20
PENALTY_LARGE_COLLECTION = 5
PENALTY_SPARSE_MODEL = 2
SPARSE_MODELS_CAP = 10


class SamplingError(Exception):
    """Raised by a ContentSampler when a model cannot be sampled."""


class ContentSampler(Protocol):
    """Reads a sample of entries and reports how often each field is empty."""

    def empty_field_rates(self, model: ModelType) -> Mapping[str, float]:
        """Field name -> share of sampled entries (0..1) where the field is empty."""
        ...


@dataclass
class ModelVolume:
    name: str
    draft: int
    published: int

    @property
    def total(self) -> int:
        return self.draft + self.published

    @property
    def draft_ratio(self) -> float:
        return self.draft / self.total if self.total else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "draft": self.draft, "published": self.published, "total": self.total}


@dataclass
class ContentFacts:
    has_counts: bool = False
    volumes: list[ModelVolume] = field(default_factory=list)
    empty_models: list[str] = field(default_factory=list)
    draft_heavy: list[str] = field(default_factory=list)
    large_collections: list[str] = field(default_factory=list)
    dominant_model: str | None = None
    dominant_share: float = 0.0
    sparse_fields: dict[str, list[str]] = field(default_factory=dict)
    sampled_models: list[str] = field(default_factory=list)
    sampling_failures: dict[str, str] = field(default_factory=dict)

    @property
    def total_entries(self) -> int:
        return sum(v.total for v in self.volumes)

    @property
    def draft_percentage(self) -> float:
        total = self.total_entries
        return sum(v.draft for v in self.volumes) / total * 100 if total else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "has_entry_counts": self.has_counts,
            "total_entries": self.total_entries,
            "draft_percentage": round(self.draft_percentage, 1),
            "models": [v.to_dict() for v in self.volumes],
            "empty_models": list(self.empty_models),
            "draft_heavy_models": list(self.draft_heavy),
            "large_collections": list(self.large_collections),
            "dominant_model": self.dominant_model,
            "dominant_share": round(self.dominant_share, 2),
            "sparse_fields": {k: list(v) for k, v in self.sparse_fields.items()},
            "sampled_models": list(self.sampled_models),
            "sampling_failures": dict(self.sampling_failures),
        }


def detect_content(schema: Schema, entry_counts: EntryCounts, config: AuditConfig) -> ContentFacts:
    thresholds = config.content
    facts = ContentFacts(has_counts=bool(entry_counts))
    if not facts.has_counts:
        return facts

    for model in sorted(schema.custom_models(), key=lambda m: m.name):
        counts = entries_for_model(entry_counts, model)
        volume = ModelVolume(name=model.name, draft=counts.draft, published=counts.published)
        facts.volumes.append(volume)
        if volume.total == 0:
            facts.empty_models.append(model.name)
        elif volume.total >= thresholds.draft_heavy_min_entries and volume.draft_ratio > thresholds.draft_heavy_ratio:
            facts.draft_heavy.append(model.name)
        if volume.total > thresholds.large_collection_entries:
            facts.large_collections.append(model.name)

    total = facts.total_entries
    populated = [v for v in facts.volumes if v.total > 0]
    if total and len(populated) > 1:
        top = max(populated, key=lambda v: (v.total, v.name))
        share = top.total / total
        if share > thresholds.concentration_ratio:
            facts.dominant_model = top.name
            facts.dominant_share = share
    return facts


def sample_fields(
    schema: Schema,
    facts: ContentFacts,
    sampler: ContentSampler,
    config: AuditConfig,
) -> None:
    """Collect mostly-empty fields per model; one failing model never stops the rest."""
    thresholds = config.content
    populated = sorted((v for v in facts.volumes if v.total > 0), key=lambda v: (-v.total, v.name))
    for volume in populated[: thresholds.max_sampled_models]:
        model = schema.model_by_name(volume.name)
        if model is None:
            continue
        try:
            rates = sampler.empty_field_rates(model)
        except Exception as exc:  # sampler is an external boundary
            facts.sampling_failures[model.name] = str(exc) or exc.__class__.__name__
            logger.warning("content_sample_failed", model=model.name, error=str(exc), error_type=exc.__class__.__name__)
            continue
        facts.sampled_models.append(model.name)
        sparse = sorted(name for name, rate in rates.items() if rate >= thresholds.empty_field_rate)
        if sparse:
            facts.sparse_fields[model.name] = sparse


def score_content(facts: ContentFacts) -> ScoreCard:
    card = ScoreCard()
    if not facts.has_counts:
        return card
    draft_pct = facts.draft_percentage
    for threshold, deduction in DRAFT_RATIO_PENALTIES:
        if draft_pct > threshold:
            card.add(f"Draft ratio above {threshold}%", -deduction, f"{draft_pct:.0f}% of entries are drafts")
    if facts.volumes:
        empty_ratio = len(facts.empty_models) / len(facts.volumes)
        card.add("Empty models", -round(empty_ratio * EMPTY_MODELS_MAX_PENALTY), preview(facts.empty_models))
    if facts.large_collections:
        card.add(
            "Large collections",
            -PENALTY_LARGE_COLLECTION * len(facts.large_collections),
            preview(facts.large_collections),
        )
    capped_penalty(
        card,
        "Mostly empty fields",
        len(facts.sparse_fields),
        PENALTY_SPARSE_MODEL,
        SPARSE_MODELS_CAP,
        preview(sorted(facts.sparse_fields)),
    )
    return card


def content_checkpoints(facts: ContentFacts, config: AuditConfig) -> list[CheckpointResult]:
    if not facts.has_counts:
        return []
    checkpoints = [
        CheckpointResult(
            title="Empty Models",
            status=status_for_count(len(facts.empty_models), 0, 3),
            findings=[f"{len(facts.empty_models)} of {len(facts.volumes)} model(s) have no entries"],
            examples=[example(facts.empty_models, "No draft or published entries")] if facts.empty_models else [],
            action_items=[f'Add content to "{name}" or remove the model' for name in facts.empty_models],
        ),
        CheckpointResult(
            title="Publishing Backlog",
            status=status_for_count(len(facts.draft_heavy), 0, 2),
            findings=[
                f"{facts.draft_percentage:.0f}% of all entries are drafts",
                *([f"{len(facts.draft_heavy)} model(s) are mostly drafts"] if facts.draft_heavy else []),
            ],
            examples=[example(facts.draft_heavy, "More drafts than published entries")] if facts.draft_heavy else [],
            action_items=[f'Review draft entries of "{name}" and publish approved content' for name in facts.draft_heavy],
        ),
        CheckpointResult(
            title="Content Distribution",
            status=CheckpointStatus.WARNING if facts.dominant_model or facts.large_collections else CheckpointStatus.GOOD,
            findings=[
                f"{facts.total_entries} entries across {len(facts.volumes)} model(s)",
                *(
                    [f'"{facts.dominant_model}" holds {facts.dominant_share:.0%} of all entries']
                    if facts.dominant_model
                    else []
                ),
                *(
                    [f"{len(facts.large_collections)} collection(s) exceed {config.content.large_collection_entries} entries"]
                    if facts.large_collections
                    else []
                ),
            ],
            examples=[example(facts.large_collections, "Large collections")] if facts.large_collections else [],
            action_items=[
                f'Ensure queries on "{name}" use pagination (first/skip or cursor)' for name in facts.large_collections
            ],
        ),
    ]
    if facts.sampled_models or facts.sampling_failures:
        checkpoints.append(
            CheckpointResult(
                title="Field Completeness",
                status=status_for_count(len(facts.sparse_fields), 0, 2),
                findings=[
                    f"{len(facts.sampled_models)} model(s) sampled",
                    *(
                        [f"{len(facts.sparse_fields)} model(s) have fields that are mostly empty"]
                        if facts.sparse_fields
                        else []
                    ),
                ],
                examples=[example([f"{m}.{f}" for f in fields], "Mostly empty") for m, fields in facts.sparse_fields.items()],
                action_items=[
                    f'Remove or make required the unused fields of "{m}": {", ".join(fields)}'
                    for m, fields in facts.sparse_fields.items()
                ],
            )
        )
    return checkpoints


def content_issues(facts: ContentFacts, config: AuditConfig) -> list[AuditIssue]:
    category = Dimension.CONTENT.value
    issues: list[AuditIssue] = []
    if not facts.has_counts:
        return issues
    if facts.draft_percentage > 50:
        issues.append(
            AuditIssue(
                id="high-draft-ratio",
                severity=Severity.WARNING,
                category=category,
                title="High Unpublished Content Ratio",
                description=f"{facts.draft_percentage:.0f}% of content is in DRAFT state",
                impact="Unpublished content is not visible to end users",
                recommendation="Review draft content and publish approved entries",
                affected_items=list(facts.draft_heavy),
                effort=Effort.LOW,
            )
        )
    if facts.empty_models:
        issues.append(
            AuditIssue(
                id="empty-models",
                severity=Severity.INFO,
                category=category,
                title="Empty Content Models",
                description=f"{len(facts.empty_models)} model(s) have no entries",
                impact="Empty models may indicate unused schema or incomplete content",
                recommendation="Add content or remove unused models",
                affected_items=list(facts.empty_models),
                effort=Effort.LOW,
            )
        )
    volumes = {v.name: v for v in facts.volumes}
    for name in facts.large_collections:
        issues.append(
            AuditIssue(
                id=issue_id("large-collection", name),
                severity=Severity.WARNING,
                category=category,
                title="Large Content Collection",
                description=f'Model "{name}" has {volumes[name].total:,} entries',
                impact="Large collections can cause performance issues without pagination",
                recommendation="Ensure all queries use pagination (first/skip or cursor)",
                affected_items=[name],
                effort=Effort.MEDIUM,
            )
        )
    if facts.dominant_model:
        issues.append(
            AuditIssue(
                id="imbalanced-distribution",
                severity=Severity.INFO,
                category=category,
                title="Imbalanced Content Distribution",
                description=f'"{facts.dominant_model}" holds {facts.dominant_share:.0%} of all entries',
                impact="Heavily skewed distribution may indicate architectural issues",
                recommendation="Consider if this model needs optimization or splitting",
                affected_items=[facts.dominant_model],
                effort=Effort.HIGH,
            )
        )
    for model, fields in facts.sparse_fields.items():
        issues.append(
            AuditIssue(
                id=issue_id("sparse-fields", model),
                severity=Severity.INFO,
                category=category,
                title="Mostly Empty Fields",
                description=f'"{model}" has fields that are empty in most entries: {", ".join(fields)}',
                impact="Unused fields clutter the editing interface",
                recommendation="Remove fields editors do not fill, or make essential ones required",
                affected_items=[f"{model}.{f}" for f in fields],
                effort=Effort.LOW,
            )
        )
    return issues


def analyze(
    schema: Schema,
    entry_counts: EntryCounts,
    config: AuditConfig,
    registry: PatternRegistry = DEFAULT_REGISTRY,
    sampler: ContentSampler | None = None,
) -> DimensionResult:
    facts = detect_content(schema, entry_counts, config)
    if sampler is not None and facts.has_counts:
        sample_fields(schema, facts, sampler, config)
    checkpoints = content_checkpoints(facts, config)
    result = DimensionResult(
        category=Dimension.CONTENT.value,
        card=score_content(facts),
        checkpoints=checkpoints,
        issues=content_issues(facts, config),
        recommendations=[a for c in checkpoints for a in c.action_items][:10],
        details=facts.to_dict(),
    )
    if not facts.has_counts:
        result.notes.append("No entry counts supplied; content health was not evaluated")
    for model, error in facts.sampling_failures.items():
        result.notes.append(f'Sampling "{model}" failed: {error}')
    logger.debug("content_analyzed", score=result.score, entries=facts.total_entries)
    return result
