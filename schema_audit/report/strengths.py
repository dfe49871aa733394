"""
Schema strengths: what the schema already does well.

Responsibilities:
- Recognise positive patterns (component reuse, taxonomy models, site or
  brand models with real referrers, form and SEO building blocks,
  bidirectional navigation, well-scoped models, styling enums, active
  publishing).
- Group short highlights by architecture, components and taxonomy.

Strengths never move a score; they balance the issue list in the report.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from schema_audit.analysis_engine.scorer import mean
from schema_audit.analyzers.components import detect_components
from schema_audit.config import AuditConfig
from schema_audit.patterns import DEFAULT_REGISTRY, ENUM_CATEGORY_ORDER, PatternRegistry, PatternTag
from schema_audit.schema_graph import Direction, EntryCounts, Schema, entries_for_model

MAX_EXAMPLES = 5


class StrengthCategory(str, Enum):
    ARCHITECTURE = "architecture"
    COMPONENTS = "components"
    TAXONOMY = "taxonomy"
    FORMS = "forms"
    SEO = "seo"
    WORKFLOW = "workflow"
    SCALABILITY = "scalability"


@dataclass
class SchemaStrength:
    id: str
    title: str
    description: str
    impact: str
    category: StrengthCategory
    examples: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "impact": self.impact,
            "category": self.category.value,
            "examples": list(self.examples),
        }


@dataclass
class StrengthsReport:
    strengths: list[SchemaStrength] = field(default_factory=list)
    architecture_highlights: list[str] = field(default_factory=list)
    component_highlights: list[str] = field(default_factory=list)
    taxonomy_highlights: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)

    def ids(self) -> list[str]:
        return [s.id for s in self.strengths]

    def to_dict(self) -> dict[str, Any]:
        return {
            "strengths": [s.to_dict() for s in self.strengths],
            "architecture_highlights": list(self.architecture_highlights),
            "component_highlights": list(self.component_highlights),
            "taxonomy_highlights": list(self.taxonomy_highlights),
            "notes": list(self.notes),
        }


def _referrers(schema: Schema, target: str) -> int:
    return len({e.source for e in schema.relation_edges() if e.target == target and e.source != target})


def _component_strengths(schema: Schema, config: AuditConfig, registry: PatternRegistry, report: StrengthsReport) -> None:
    thresholds = config.strengths
    facts = detect_components(schema, config)
    if not facts.components:
        return
    if facts.reuse_score >= thresholds.component_reuse_score:
        names = [c.name for c in facts.components]
        examples = []
        blocks = [n for n in names if registry.matches(PatternTag.BLOCK_COMPONENT, n)]
        forms = [n for n in names if registry.matches(PatternTag.FORM_COMPONENT, n)]
        if blocks:
            examples.append(f"UI Blocks: {', '.join(blocks[:3])}")
        if forms:
            examples.append(f"Form fields: {', '.join(forms[:3])}")
        report.strengths.append(
            SchemaStrength(
                id="excellent-component-architecture",
                title="Excellent Component Architecture",
                description=f"Your schema leverages {len(names)} components for modular, reusable content blocks.",
                impact="This approach provides flexibility for page builders and reduces duplication.",
                category=StrengthCategory.COMPONENTS,
                examples=examples,
            )
        )
        report.component_highlights.append(f"{len(names)} reusable components defined")

    highly_reused = [c for c in facts.components if len(c.used_in) >= thresholds.highly_reused_min_users]
    if highly_reused:
        report.component_highlights.append(f"{len(highly_reused)} components are highly reused across models")
    used_blocks = [c.name for c in facts.components if c.used_in and registry.matches(PatternTag.BLOCK_COMPONENT, c.name)]
    if used_blocks:
        report.component_highlights.append(f"Rich content blocks: {', '.join(used_blocks[:MAX_EXAMPLES])}")


def _tenancy_strengths(schema: Schema, config: AuditConfig, registry: PatternRegistry, report: StrengthsReport) -> None:
    for model in sorted(schema.custom_models(), key=lambda m: m.name):
        if not registry.matches(PatternTag.TENANCY_MODEL, model.name):
            continue
        referrers = _referrers(schema, model.name)
        if referrers < config.strengths.tenancy_min_referrers:
            continue
        if registry.matches(PatternTag.MULTI_SITE, model.name):
            report.strengths.append(
                SchemaStrength(
                    id="multi-site-support",
                    title="Multi-Site Support",
                    description=f"Dedicated {model.name} model with relationships across {referrers} content types.",
                    impact="Excellent foundation for managing content across multiple platforms.",
                    category=StrengthCategory.ARCHITECTURE,
                    examples=[f"{model.name} model linked to {referrers} models"],
                )
            )
            report.architecture_highlights.append("Multi-site architecture properly implemented")
        else:
            report.strengths.append(
                SchemaStrength(
                    id="multi-brand-support",
                    title="Multi-Brand Architecture",
                    description=f"Dedicated {model.name} model enabling brand-specific content management.",
                    impact="Supports brand-specific content and settings at scale.",
                    category=StrengthCategory.ARCHITECTURE,
                    examples=[f"{model.name} model linked to {referrers} content types"],
                )
            )
            report.architecture_highlights.append("Multi-brand architecture with proper model relations")


def find_strengths(
    schema: Schema,
    entry_counts: EntryCounts,
    config: AuditConfig,
    registry: PatternRegistry = DEFAULT_REGISTRY,
) -> StrengthsReport:
    thresholds = config.strengths
    report = StrengthsReport()
    models = sorted(schema.custom_models(), key=lambda m: m.name)
    components = sorted(schema.custom_components(), key=lambda c: c.name)

    _component_strengths(schema, config, registry, report)

    taxonomy = [m.name for m in models if registry.matches(PatternTag.TAXONOMY, m.name)]
    if taxonomy:
        report.strengths.append(
            SchemaStrength(
                id="thoughtful-content-taxonomy",
                title="Thoughtful Content Taxonomy",
                description=f"Clear hierarchical organization with {len(taxonomy)} dedicated taxonomy models.",
                impact="Supports scalable, well-organized content discovery.",
                category=StrengthCategory.TAXONOMY,
                examples=taxonomy,
            )
        )
        report.taxonomy_highlights.append(f"{len(taxonomy)} taxonomy models for content classification")

    _tenancy_strengths(schema, config, registry, report)

    form_model = next((m.name for m in models if m.name.lower() == "form"), None)
    form_components = [c.name for c in components if registry.matches(PatternTag.FORM_COMPONENT, c.name)]
    if form_model or len(form_components) >= thresholds.form_components_min:
        report.strengths.append(
            SchemaStrength(
                id="comprehensive-form-architecture",
                title="Comprehensive Form Architecture",
                description=(
                    f"{len(form_components)} form-related components for structured form management."
                    if form_components
                    else "Dedicated Form model with proper field structure."
                ),
                impact="Enables consistent form management across the platform.",
                category=StrengthCategory.FORMS,
                examples=form_components[:MAX_EXAMPLES],
            )
        )

    seo_component = next((c.name for c in components if registry.matches(PatternTag.SEO_COMPONENT, c.name)), None)
    seo_models = [
        m.name
        for m in models
        if any(registry.matches(PatternTag.META_FIELD, f.name) or registry.matches(PatternTag.SEO_COMPONENT, f.type_name) for f in m.fields)
    ]
    if seo_component or len(seo_models) >= thresholds.seo_models_min:
        report.strengths.append(
            SchemaStrength(
                id="seo-content-metadata",
                title="SEO & Content Metadata",
                description=(
                    "Reusable SEO component embedded across content models."
                    if seo_component
                    else f"{len(seo_models)} models include SEO/meta fields."
                ),
                impact="Supports consistent SEO practices across content types.",
                category=StrengthCategory.SEO,
                examples=[f"{seo_component} component"] if seo_component else seo_models[:3],
            )
        )

    volumes = [entries_for_model(entry_counts, m) for m in models]
    total_entries = sum(v.total for v in volumes)
    if total_entries:
        draft_ratio = sum(v.draft for v in volumes) / total_entries
        if 0 < draft_ratio < 0.8:
            report.architecture_highlights.append(
                f"{round((1 - draft_ratio) * 100)}% content published - healthy publishing workflow"
            )

    pairs = {
        tuple(sorted((e.source, e.target)))
        for e in schema.relation_edges()
        if e.direction == Direction.BIDIRECTIONAL
    }
    if pairs:
        report.strengths.append(
            SchemaStrength(
                id="bidirectional-relations",
                title="Smart Content Navigation",
                description=f"{len(pairs)} bidirectional relationships enable flexible content navigation.",
                impact="Editors can navigate content from multiple entry points.",
                category=StrengthCategory.ARCHITECTURE,
            )
        )

    avg_fields = mean((len(m.fields) for m in models), default=0.0)
    low, high = thresholds.well_scoped_fields
    if models and low <= avg_fields <= high:
        report.strengths.append(
            SchemaStrength(
                id="well-scoped-models",
                title="Well-Scoped Content Models",
                description=f"Models average {round(avg_fields)} fields - appropriately sized for editorial efficiency.",
                impact="Editors work with manageable forms, reducing complexity and errors.",
                category=StrengthCategory.ARCHITECTURE,
            )
        )

    styling_enums = [
        e.name
        for e in sorted(schema.custom_enums(), key=lambda e: e.name)
        if registry.classify(e.name, e.values, order=ENUM_CATEGORY_ORDER) in (PatternTag.STYLING, PatternTag.LAYOUT)
    ]
    if styling_enums:
        report.strengths.append(
            SchemaStrength(
                id="enum-styling-control",
                title="Controlled Styling Options",
                description=f"{len(styling_enums)} enums provide controlled styling/layout choices for editors.",
                impact="Editors have flexibility within guardrails, maintaining design consistency.",
                category=StrengthCategory.WORKFLOW,
                examples=styling_enums[:MAX_EXAMPLES],
            )
        )

    if total_entries > thresholds.active_platform_entries:
        report.strengths.append(
            SchemaStrength(
                id="active-content-platform",
                title="Active Content Platform",
                description=f"{total_entries:,} content entries across the platform.",
                impact="Schema is actively used for real content production.",
                category=StrengthCategory.SCALABILITY,
            )
        )

    ratio = len(components) / max(len(models), 1)
    if ratio >= thresholds.component_model_ratio and len(components) >= thresholds.component_ratio_min_components:
        report.strengths.append(
            SchemaStrength(
                id="strong-componentization",
                title="Strong Componentization Strategy",
                description=f"{ratio:.1f}:1 component-to-model ratio indicates mature modular design.",
                impact="Content is highly modular and reusable across different contexts.",
                category=StrengthCategory.ARCHITECTURE,
            )
        )
        report.architecture_highlights.append("Excellent component-to-model ratio")
    return report
