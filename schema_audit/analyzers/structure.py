"""
Structure dimension: how the schema is organized into content types.

Responsibilities:
- Detect vague model names, page models that embed reusable content,
  section-numbered fields, oversized models and inline media URLs.
- Summarize model complexity, field type distribution and relation density.
- Score each checkpoint by status through visible contributions.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

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
from schema_audit.analysis_engine.scorer import ScoreCard, mean, status_penalty
from schema_audit.analyzers.common import example, issue_id, preview, qualified
from schema_audit.audit_logging import get_logger
from schema_audit.config import AuditConfig
from schema_audit.patterns import DEFAULT_REGISTRY, PatternRegistry, PatternTag
from schema_audit.schema_graph import EntryCounts, Schema

logger = get_logger(__name__)

CONTENT_LIKE_LIST_FIELDS = ("testimonial", "faq", "team", "feature", "benefit", "step")

PENALTY_VAGUE = (15, 8)
PENALTY_PAGE_MIXING = (10, 5)
PENALTY_FIELD_NAMING = (10, 5)
PENALTY_INLINE_MEDIA = (10, 5)


@dataclass
class StructureFacts:
    model_count: int = 0
    component_count: int = 0
    enum_count: int = 0
    total_fields: int = 0
    avg_fields: float = 0.0
    largest_model: str | None = None
    largest_field_count: int = 0
    field_kinds: dict[str, int] = field(default_factory=dict)
    relation_density: float = 0.0
    vague_models: list[str] = field(default_factory=list)
    purpose_specific_models: list[str] = field(default_factory=list)
    page_models: list[str] = field(default_factory=list)
    reusable_content_models: list[str] = field(default_factory=list)
    mixed_pages: dict[str, list[str]] = field(default_factory=dict)
    section_specific_fields: list[str] = field(default_factory=list)
    large_models: dict[str, int] = field(default_factory=dict)
    inline_media_fields: list[str] = field(default_factory=list)
    asset_referencing_models: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "model_count": self.model_count,
            "component_count": self.component_count,
            "enum_count": self.enum_count,
            "total_fields": self.total_fields,
            "avg_fields": round(self.avg_fields, 1),
            "largest_model": self.largest_model,
            "largest_field_count": self.largest_field_count,
            "field_kinds": dict(self.field_kinds),
            "relation_density": round(self.relation_density, 2),
            "vague_models": list(self.vague_models),
            "page_models": list(self.page_models),
            "reusable_content_models": list(self.reusable_content_models),
            "mixed_pages": {k: list(v) for k, v in self.mixed_pages.items()},
            "section_specific_fields": list(self.section_specific_fields),
            "large_models": dict(self.large_models),
            "inline_media_fields": list(self.inline_media_fields),
        }


def _field_kind(schema: Schema, f) -> str:
    if schema.enum_by_name(f.type_name) is not None or f.enum_values is not None:
        return "enum"
    target = f.related_model or f.type_name
    if schema.component_by_name(target) is not None:
        return "component"
    if f.related_model is not None:
        return "reference"
    return "scalar" if f.is_scalar else "other"


def detect_structure(schema: Schema, config: AuditConfig, registry: PatternRegistry = DEFAULT_REGISTRY) -> StructureFacts:
    models = sorted(schema.custom_models(), key=lambda m: m.name)
    components = sorted(schema.custom_components(), key=lambda c: c.name)
    facts = StructureFacts(
        model_count=len(models),
        component_count=len(components),
        enum_count=len(schema.custom_enums()),
    )
    if not models and not components:
        return facts

    kinds: Counter[str] = Counter()
    for model in models:
        if registry.matches(PatternTag.VAGUE_MODEL, model.name):
            facts.vague_models.append(model.name)
        else:
            facts.purpose_specific_models.append(model.name)

        if registry.matches(PatternTag.PAGE_MODEL, model.name):
            facts.page_models.append(model.name)
            embedded = [
                f.name
                for f in model.fields
                if (f.type_name == "RichText" and registry.matches(PatternTag.REUSABLE_CONTENT, f.name))
                or (
                    f.is_list
                    and f.related_model is None
                    and f.type_name != "String"
                    and any(token in f.name.lower() for token in CONTENT_LIKE_LIST_FIELDS)
                )
            ]
            if embedded:
                facts.mixed_pages[model.name] = embedded
        elif registry.matches(PatternTag.REUSABLE_CONTENT, model.name):
            facts.reusable_content_models.append(model.name)

        for f in model.fields:
            kinds[_field_kind(schema, f)] += 1
            if f.related_model == "Asset" and model.name not in facts.asset_referencing_models:
                facts.asset_referencing_models.append(model.name)
            if f.type_name == "String" and registry.matches(PatternTag.INLINE_MEDIA, f.name):
                facts.inline_media_fields.append(qualified(model.name, f.name))

    for owner in (*models, *components):
        if len(owner.fields) > config.structure.large_model_fields:
            facts.large_models[owner.name] = len(owner.fields)
        for f in owner.fields:
            if registry.matches(PatternTag.SECTION_SPECIFIC, f.name):
                facts.section_specific_fields.append(qualified(owner.name, f.name))

    field_counts = [len(m.fields) for m in models]
    facts.total_fields = sum(field_counts)
    facts.avg_fields = mean(field_counts)
    if models:
        largest = max(models, key=lambda m: (len(m.fields), m.name))
        facts.largest_model = largest.name
        facts.largest_field_count = len(largest.fields)
    facts.field_kinds = dict(sorted(kinds.items()))
    facts.relation_density = len(schema.relation_edges()) / len(models) if models else 0.0
    return facts


def structure_checkpoints(facts: StructureFacts, config: AuditConfig) -> list[CheckpointResult]:
    thresholds = config.structure
    checkpoints: list[CheckpointResult] = []

    vague = facts.vague_models
    checkpoints.append(
        CheckpointResult(
            title="Distinct Content Types",
            status=status_for_count(len(vague), 0, thresholds.vague_warning_max),
            findings=(
                [f"{len(vague)} model(s) have vague/generic names: {', '.join(vague)}"]
                if vague
                else [f"All {facts.model_count} models have purpose-specific names"]
            ),
            examples=(
                [example(vague, "These names do not clearly indicate content purpose")]
                if vague
                else [example(facts.purpose_specific_models[:5], "Examples of well-named models")]
            ),
            action_items=[
                f'Rename "{name}" to reflect its content purpose (e.g. "Article", "Product", "Testimonial")'
                for name in vague
            ],
        )
    )

    mixed = facts.mixed_pages
    findings = [
        f"{len(facts.page_models)} page model(s): {preview(facts.page_models)}",
        f"{len(facts.reusable_content_models)} reusable content model(s): {preview(facts.reusable_content_models)}",
    ]
    if mixed:
        findings.append(f"{len(mixed)} page model(s) embed content that should be referenced")
    checkpoints.append(
        CheckpointResult(
            title="Page vs Content Separation",
            status=status_for_count(len(mixed), 0, 2),
            findings=findings,
            examples=[
                example([page], f"Embeds: {', '.join(fields)}; should be separate models referenced via relation")
                for page, fields in mixed.items()
            ],
            action_items=[
                f'Extract "{f}" from "{page}" into a separate model and reference it'
                for page, fields in mixed.items()
                for f in fields
            ],
        )
    )

    sections = facts.section_specific_fields
    large = facts.large_models
    if not sections and not large:
        naming_status = CheckpointStatus.GOOD
    elif len(sections) > 3 or len(large) > 2:
        naming_status = CheckpointStatus.ISSUE
    else:
        naming_status = CheckpointStatus.WARNING
    naming_findings = []
    if sections:
        naming_findings.append(f"{len(sections)} section-specific field(s) found (e.g. section2Title pattern)")
    if large:
        naming_findings.append(f"{len(large)} type(s) have more than {thresholds.large_model_fields} fields")
    if not naming_findings:
        naming_findings.append("Field naming is consistent and models are well-sized")
    checkpoints.append(
        CheckpointResult(
            title="Field Count & Naming",
            status=naming_status,
            findings=naming_findings,
            examples=[
                *[example([s], "Section-specific naming; should use components instead") for s in sections[:3]],
                *[example([name], f"{count} fields; consider splitting or using components") for name, count in list(large.items())[:2]],
            ],
            action_items=[
                *[f'Replace "{s}" with a reusable component' for s in sections[:3]],
                *[
                    f'Split "{name}" ({count} fields) into smaller models or extract field groups into components'
                    for name, count in large.items()
                ],
            ],
        )
    )

    inline = facts.inline_media_fields
    checkpoints.append(
        CheckpointResult(
            title="Asset Centralization",
            status=status_for_count(len(inline), 0, thresholds.inline_media_warning_max),
            findings=[
                f"{len(facts.asset_referencing_models)} model(s) reference the centralized Asset model",
                *([f"{len(inline)} field(s) use inline media URLs instead of Asset references"] if inline else []),
            ],
            examples=(
                [example([f], "Inline URL field; should reference the Asset model") for f in inline[:3]]
                if inline
                else [example(facts.asset_referencing_models[:5], "Models using Asset references")]
            ),
            action_items=[f'Replace string field "{f}" with an Asset reference' for f in inline],
        )
    )
    return checkpoints


def score_structure(checkpoints: list[CheckpointResult]) -> ScoreCard:
    card = ScoreCard()
    penalties = {
        "Distinct Content Types": PENALTY_VAGUE,
        "Page vs Content Separation": PENALTY_PAGE_MIXING,
        "Field Count & Naming": PENALTY_FIELD_NAMING,
        "Asset Centralization": PENALTY_INLINE_MEDIA,
    }
    for checkpoint in checkpoints:
        issue_delta, warning_delta = penalties[checkpoint.title]
        status_penalty(
            card,
            checkpoint.title,
            checkpoint.status.value,
            issue_delta=issue_delta,
            warning_delta=warning_delta,
            detail=checkpoint.findings[0] if checkpoint.findings else None,
        )
    return card


def structure_issues(facts: StructureFacts) -> list[AuditIssue]:
    category = Dimension.STRUCTURE.value
    issues: list[AuditIssue] = []
    if facts.vague_models:
        issues.append(
            AuditIssue(
                id="structure-vague-model-names",
                severity=Severity.WARNING,
                category=category,
                title="Vague Model Names",
                description=f"{len(facts.vague_models)} model(s) use generic names: {preview(facts.vague_models)}",
                impact="Editors and developers cannot tell what these models hold",
                recommendation="Rename models after the content they contain",
                affected_items=list(facts.vague_models),
                effort=Effort.LOW,
            )
        )
    for page, fields in facts.mixed_pages.items():
        issues.append(
            AuditIssue(
                id=issue_id("structure-page-embeds-content", page),
                severity=Severity.WARNING,
                category=category,
                title="Page Embeds Reusable Content",
                description=f'"{page}" embeds {", ".join(fields)} inline',
                impact="Inline content cannot be reused across pages or channels",
                recommendation="Move the embedded content into its own model and reference it",
                affected_items=[page],
                effort=Effort.MEDIUM,
            )
        )
    if facts.section_specific_fields:
        issues.append(
            AuditIssue(
                id="structure-section-specific-fields",
                severity=Severity.WARNING,
                category=category,
                title="Section-Numbered Fields",
                description=f"{len(facts.section_specific_fields)} field(s) are numbered per page section",
                impact="Numbered fields hardcode page layout into the schema",
                recommendation="Replace numbered fields with a list of reusable section components",
                affected_items=list(facts.section_specific_fields),
                effort=Effort.MEDIUM,
            )
        )
    if facts.inline_media_fields:
        issues.append(
            AuditIssue(
                id="structure-inline-media-urls",
                severity=Severity.INFO,
                category=category,
                title="Inline Media URLs",
                description=f"{len(facts.inline_media_fields)} string field(s) hold media URLs",
                impact="Media outside the asset library misses transformations and reuse",
                recommendation="Reference the Asset model instead of storing URLs",
                affected_items=list(facts.inline_media_fields),
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
    facts = detect_structure(schema, config, registry)
    checkpoints = structure_checkpoints(facts, config)
    result = DimensionResult(
        category=Dimension.STRUCTURE.value,
        card=score_structure(checkpoints),
        checkpoints=checkpoints,
        issues=structure_issues(facts),
        details=facts.to_dict(),
    )
    result.recommendations = [a for c in checkpoints for a in c.action_items][:10]
    if facts.model_count == 0:
        result.notes.append("No custom models to evaluate")
    logger.debug("structure_analyzed", score=result.score, models=facts.model_count)
    return result
