"""
SEO readiness dimension: can every page-like model be found, linked and shared.

Responsibilities:
- Meta field coverage and URL slug coverage over page-like content models
  (settings, configuration and navigation models are left out).
- Social sharing support: Open Graph, Twitter Card and canonical URL fields
  anywhere in custom models or components.
- Models whose names map onto Schema.org types for structured data.

Only the schema is read. Alt text and duplicate slugs need entry content
and are not assessed here.
"""

from __future__ import annotations

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
)
from schema_audit.analysis_engine.scorer import ScoreCard, capped_penalty, status_penalty
from schema_audit.analyzers.common import example, preview
from schema_audit.audit_logging import get_logger
from schema_audit.config import AuditConfig, SeoThresholds
from schema_audit.patterns import DEFAULT_REGISTRY, PatternRegistry, PatternTag
from schema_audit.schema_graph import EntryCounts, ModelType, Schema

logger = get_logger(__name__)

# (issue, warning) deductions per checkpoint
META_PENALTY = (25, 12)
SLUG_PENALTY = (20, 10)
SOCIAL_PENALTY = (20, 10)
STRUCTURED_DATA_PENALTY = 7
MISSING_META_PENALTY = (5, 25)
GOOD_COVERAGE_BONUS = 10
MANY_MODELS_WITHOUT_META = 3


@dataclass
class StructuredDataModel:
    model: str
    schema_type: str

    def to_dict(self) -> dict[str, str]:
        return {"model": self.model, "schema_type": self.schema_type}


@dataclass
class SeoFacts:
    content_models: list[str] = field(default_factory=list)
    with_meta: list[str] = field(default_factory=list)
    without_meta: list[str] = field(default_factory=list)
    with_slug: list[str] = field(default_factory=list)
    without_slug: list[str] = field(default_factory=list)
    slug_field_names: list[str] = field(default_factory=list)
    seo_component: str | None = None
    has_open_graph: bool = False
    has_twitter: bool = False
    has_canonical: bool = False
    structured_data: list[StructuredDataModel] = field(default_factory=list)

    @property
    def meta_coverage(self) -> float:
        if not self.content_models:
            return 100.0
        return len(self.with_meta) / len(self.content_models) * 100

    @property
    def slug_coverage(self) -> float:
        if not self.content_models:
            return 100.0
        return len(self.with_slug) / len(self.content_models) * 100

    def to_dict(self) -> dict[str, Any]:
        return {
            "content_models": list(self.content_models),
            "models_with_seo": list(self.with_meta),
            "models_without_seo": list(self.without_meta),
            "seo_field_coverage": round(self.meta_coverage, 1),
            "models_without_slug": list(self.without_slug),
            "slug_coverage": round(self.slug_coverage, 1),
            "slug_field_names": list(self.slug_field_names),
            "seo_component": self.seo_component,
            "open_graph_fields": self.has_open_graph,
            "twitter_fields": self.has_twitter,
            "canonical_field": self.has_canonical,
            "structured_data": [s.to_dict() for s in self.structured_data],
        }


def coverage_status(percent: float, thresholds: SeoThresholds) -> CheckpointStatus:
    if percent >= thresholds.good_coverage:
        return CheckpointStatus.GOOD
    if percent >= thresholds.warning_coverage:
        return CheckpointStatus.WARNING
    return CheckpointStatus.ISSUE


def slug_field(model: ModelType, registry: PatternRegistry) -> str | None:
    """First slug-like field, preferring the matcher order (slug before handle before path)."""
    for matcher in registry.matchers(PatternTag.SLUG_FIELD):
        for f in model.fields:
            if matcher(f.name):
                return f.name
    return None


def detect_seo(schema: Schema, registry: PatternRegistry = DEFAULT_REGISTRY) -> SeoFacts:
    facts = SeoFacts()
    custom_models = sorted(schema.custom_models(), key=lambda m: m.name)
    custom_components = sorted(schema.custom_components(), key=lambda c: c.name)

    for model in custom_models:
        if registry.matches(PatternTag.NON_PAGE_MODEL, model.name):
            continue
        facts.content_models.append(model.name)
        if any(registry.matches(PatternTag.META_FIELD, f.name) for f in model.fields):
            facts.with_meta.append(model.name)
        else:
            facts.without_meta.append(model.name)
        slug = slug_field(model, registry)
        if slug is None:
            facts.without_slug.append(model.name)
        else:
            facts.with_slug.append(model.name)
            if slug not in facts.slug_field_names:
                facts.slug_field_names.append(slug)
        schema_type = registry.first_match(PatternTag.STRUCTURED_DATA, model.name)
        if schema_type is not None:
            facts.structured_data.append(StructuredDataModel(model.name, schema_type.description))

    field_names = [f.name for owner in (*custom_models, *custom_components) for f in owner.fields]
    facts.has_open_graph = any(registry.matches(PatternTag.OPEN_GRAPH_FIELD, n) for n in field_names)
    facts.has_twitter = any(registry.matches(PatternTag.TWITTER_FIELD, n) for n in field_names)
    facts.has_canonical = any(registry.matches(PatternTag.CANONICAL_FIELD, n) for n in field_names)
    facts.seo_component = next(
        (c.name for c in custom_components if registry.matches(PatternTag.SEO_COMPONENT, c.name)),
        None,
    )
    return facts


def _social_status(facts: SeoFacts) -> CheckpointStatus:
    if not facts.has_open_graph and not facts.has_twitter:
        return CheckpointStatus.ISSUE
    if not (facts.has_open_graph and facts.has_twitter and facts.has_canonical):
        return CheckpointStatus.WARNING
    return CheckpointStatus.GOOD


def _slug_status(facts: SeoFacts, thresholds: SeoThresholds) -> CheckpointStatus:
    status = coverage_status(facts.slug_coverage, thresholds)
    if status == CheckpointStatus.GOOD and len(facts.slug_field_names) > 1:
        return CheckpointStatus.WARNING
    return status


def seo_checkpoints(facts: SeoFacts, thresholds: SeoThresholds) -> list[CheckpointResult]:
    meta_status = coverage_status(facts.meta_coverage, thresholds)
    if meta_status == CheckpointStatus.GOOD:
        meta_findings = [f"{round(facts.meta_coverage)}% of content models have SEO meta fields"]
    else:
        meta_findings = [
            f"Only {round(facts.meta_coverage)}% of content models have SEO meta fields",
            f"{len(facts.without_meta)} model(s) missing meta fields",
        ]

    slug_status = _slug_status(facts, thresholds)
    slug_findings = [f"{round(facts.slug_coverage)}% of models have slug fields"]
    if len(facts.slug_field_names) > 1:
        slug_findings.append(f"Inconsistent slug field names: {', '.join(facts.slug_field_names)}")

    social_findings: list[str] = []
    social_actions: list[str] = []
    if facts.has_open_graph and facts.has_twitter:
        social_findings.append("Open Graph and Twitter Card fields present")
    elif facts.has_open_graph:
        social_findings += ["Open Graph fields present", "Twitter Card fields missing"]
        social_actions.append("Add twitterTitle, twitterDescription, twitterImage fields")
    elif facts.has_twitter:
        social_findings += ["Twitter Card fields present", "Open Graph fields missing"]
        social_actions.append("Add ogTitle, ogDescription, ogImage fields")
    else:
        social_findings.append("No social sharing fields found")
        social_actions += [
            "Add Open Graph fields: ogTitle, ogDescription, ogImage",
            "Add Twitter Card fields for better social previews",
        ]
    if facts.has_canonical:
        social_findings.append("Canonical URL field present")
    else:
        social_findings.append("Canonical URL field missing")
        social_actions.append("Add canonicalUrl field to prevent duplicate content issues")

    schema_types = {s.schema_type for s in facts.structured_data}
    if facts.structured_data:
        structured_findings = [f"{len(facts.structured_data)} model(s) support Schema.org structured data"]
        rich_results = (
            ("Article", "Article schema support detected (good for Google News)"),
            ("Product", "Product schema support detected (good for shopping results)"),
            ("FAQPage", "FAQ schema support detected (good for featured snippets)"),
        )
        structured_findings += [text for schema_type, text in rich_results if schema_type in schema_types]
    else:
        structured_findings = ["No models detected that map to Schema.org types"]

    return [
        CheckpointResult(
            title="Meta Field Coverage",
            status=meta_status,
            findings=meta_findings,
            examples=[example(facts.without_meta[:5], "Models without metaTitle/metaDescription")] if facts.without_meta else [],
            action_items=(
                ["Create reusable SEO component with metaTitle, metaDescription", "Add SEO component to all content models"]
                if meta_status != CheckpointStatus.GOOD
                else ["Maintain meta field coverage for new models"]
            ),
        ),
        CheckpointResult(
            title="URL Slug Consistency",
            status=slug_status,
            findings=slug_findings,
            examples=[example(facts.without_slug[:5], "Models without slug field")] if facts.without_slug else [],
            action_items=(
                ["Add slug field to content models for SEO-friendly URLs", 'Standardize slug field naming (recommend: "slug")']
                if slug_status != CheckpointStatus.GOOD
                else ["Maintain slug field coverage"]
            ),
        ),
        CheckpointResult(
            title="Social Sharing Support",
            status=_social_status(facts),
            findings=social_findings,
            action_items=social_actions or ["Maintain social sharing field coverage"],
        ),
        CheckpointResult(
            title="Structured Data Support",
            status=CheckpointStatus.GOOD if facts.structured_data else CheckpointStatus.WARNING,
            findings=structured_findings,
            examples=(
                [example([f"{s.model} -> {s.schema_type}" for s in facts.structured_data[:5]], "Models with Schema.org potential")]
                if facts.structured_data
                else []
            ),
            action_items=(
                ["Implement Schema.org JSON-LD in frontend using these models"]
                if facts.structured_data
                else [
                    "Consider naming content models to align with Schema.org types",
                    "Add structured data fields (datePublished, author, etc.)",
                ]
            ),
        ),
    ]


def score_seo(facts: SeoFacts, checkpoints: list[CheckpointResult]) -> ScoreCard:
    meta, slug, social, structured = (c.status.value for c in checkpoints)
    card = ScoreCard()
    status_penalty(card, "Meta field coverage", meta, issue_delta=META_PENALTY[0], warning_delta=META_PENALTY[1])
    capped_penalty(
        card,
        "Content models without SEO fields",
        len(facts.without_meta),
        *MISSING_META_PENALTY,
        detail=preview(facts.without_meta),
    )
    status_penalty(card, "URL slug consistency", slug, issue_delta=SLUG_PENALTY[0], warning_delta=SLUG_PENALTY[1])
    status_penalty(card, "Social sharing support", social, issue_delta=SOCIAL_PENALTY[0], warning_delta=SOCIAL_PENALTY[1])
    if structured == CheckpointStatus.WARNING.value:
        card.add("No Schema.org-friendly models", -STRUCTURED_DATA_PENALTY)
    return card


def seo_issues(facts: SeoFacts, thresholds: SeoThresholds) -> list[AuditIssue]:
    category = Dimension.SEO.value
    issues: list[AuditIssue] = []
    if facts.without_meta:
        issues.append(
            AuditIssue(
                id="missing-seo-fields",
                severity=Severity.WARNING if len(facts.without_meta) > MANY_MODELS_WITHOUT_META else Severity.INFO,
                category=category,
                title="Missing SEO Fields",
                description=f"{len(facts.without_meta)} content model(s) lack SEO fields",
                impact="Content without SEO fields may not be properly indexed by search engines",
                recommendation="Add SEO component with metaTitle, metaDescription to content models",
                affected_items=list(facts.without_meta),
                effort=Effort.MEDIUM,
            )
        )
    if facts.meta_coverage < thresholds.warning_coverage:
        issues.append(
            AuditIssue(
                id="low-seo-coverage",
                severity=Severity.WARNING,
                category=category,
                title="Low SEO Field Coverage",
                description=f"Only {round(facts.meta_coverage)}% of content models have SEO fields",
                impact="Most content cannot be optimized for search engines",
                recommendation="Create a reusable SEO component and add it to all content models",
                affected_items=list(facts.without_meta),
                effort=Effort.MEDIUM,
            )
        )
    if facts.without_slug:
        issues.append(
            AuditIssue(
                id="missing-slug-fields",
                severity=Severity.WARNING,
                category=category,
                title="Missing Slug Fields",
                description=f"{len(facts.without_slug)} model(s) lack slug fields",
                impact="Content without slugs cannot have SEO-friendly URLs",
                recommendation="Add slug field with unique constraint to content models",
                affected_items=list(facts.without_slug),
                effort=Effort.LOW,
            )
        )
    if len(facts.slug_field_names) > 1:
        issues.append(
            AuditIssue(
                id="inconsistent-slug-names",
                severity=Severity.INFO,
                category=category,
                title="Inconsistent Slug Field Names",
                description=f"Slug fields are named {', '.join(facts.slug_field_names)}",
                impact="Routing code has to special-case each model",
                recommendation='Standardize slug field naming on "slug"',
                affected_items=list(facts.slug_field_names),
                effort=Effort.LOW,
            )
        )
    if not facts.has_open_graph:
        issues.append(
            AuditIssue(
                id="missing-og-fields",
                severity=Severity.INFO,
                category=category,
                title="No Open Graph Fields",
                description="Schema lacks Open Graph (og:) fields for social sharing",
                impact="Shared content may not display properly on social media",
                recommendation="Add ogTitle, ogDescription, ogImage fields to SEO component",
                effort=Effort.LOW,
            )
        )
    if not facts.has_canonical:
        issues.append(
            AuditIssue(
                id="missing-canonical-field",
                severity=Severity.INFO,
                category=category,
                title="No Canonical URL Field",
                description="No model or component stores a canonical URL",
                impact="Syndicated or duplicated pages compete with each other in search",
                recommendation="Add canonicalUrl to the SEO component",
                effort=Effort.LOW,
            )
        )
    if facts.content_models and facts.meta_coverage >= thresholds.good_coverage:
        issues.append(
            AuditIssue(
                id="good-seo-coverage",
                severity=Severity.INFO,
                category=category,
                title="Good SEO Field Coverage",
                description=f"{round(facts.meta_coverage)}% of content models have SEO fields",
                impact="Most content can be optimized for search engines",
                recommendation="Maintain this coverage for new models",
                affected_items=list(facts.with_meta),
                effort=Effort.LOW,
                score_bonus=GOOD_COVERAGE_BONUS,
            )
        )
    return issues


def analyze(
    schema: Schema,
    entry_counts: EntryCounts,
    config: AuditConfig,
    registry: PatternRegistry = DEFAULT_REGISTRY,
) -> DimensionResult:
    facts = detect_seo(schema, registry)
    checkpoints = seo_checkpoints(facts, config.seo)
    result = DimensionResult(
        category=Dimension.SEO.value,
        card=score_seo(facts, checkpoints),
        checkpoints=checkpoints,
        issues=seo_issues(facts, config.seo),
        recommendations=[a for c in checkpoints for a in c.action_items][:10],
        details=facts.to_dict(),
    )
    logger.debug("seo_analyzed", score=result.score, coverage=round(facts.meta_coverage), content_models=len(facts.content_models))
    return result
