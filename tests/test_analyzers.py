"""
Tests for the dimension analyzers: facts, checkpoint-driven scores and
the issues each one emits.
"""

from __future__ import annotations

from schema_audit.analysis_engine.models import CheckpointStatus, Severity
from schema_audit.analyzers import (
    best_practices,
    components,
    content_health,
    duplicates_assessment,
    enum_architecture,
    localization,
    performance,
    relationships,
    seo_readiness,
    structure,
)
from schema_audit.analyzers.components import nesting_depths
from schema_audit.analyzers.content_health import SamplingError
from schema_audit.analyzers.enum_architecture import EnumHealth
from schema_audit.analyzers.localization import Readiness, readiness_for
from schema_audit.schema_graph import EntryCount, EnumType, Field, ModelType, Schema


def _string(name: str, **kwargs) -> Field:
    return Field(name=name, type_name="String", **kwargs)


def _embed(name: str, target: str) -> Field:
    return Field(name=name, type_name=target, related_model=target)


def _ids(result) -> list[str]:
    return [i.id for i in result.issues]


# ---------------------------------------------------------------------------
# Structure
# ---------------------------------------------------------------------------


def test_structure_flags_vague_names_mixed_pages_and_inline_media(config):
    schema = Schema.from_types([
        ModelType(name="Content", fields=(_string("title"),)),
        ModelType(name="Data", fields=(_string("value"),)),
        ModelType(
            name="HomePage",
            fields=(
                _string("title"),
                Field(name="testimonial", type_name="RichText"),
                _string("section1Title"),
            ),
        ),
        ModelType(name="Hero", fields=(_string("imageUrl"),)),
    ])
    result = structure.analyze(schema, {}, config)

    assert result.score == 77  # 100 - 8 - 5 - 5 - 5
    statuses = {c.title: c.status for c in result.checkpoints}
    assert statuses["Distinct Content Types"] == CheckpointStatus.WARNING
    assert statuses["Asset Centralization"] == CheckpointStatus.WARNING
    assert _ids(result) == [
        "structure-vague-model-names",
        "structure-page-embeds-content-homepage",
        "structure-section-specific-fields",
        "structure-inline-media-urls",
    ]
    assert result.details["mixed_pages"] == {"HomePage": ["testimonial"]}
    assert result.details["inline_media_fields"] == ["Hero.imageUrl"]


def test_structure_score_reconstructs_from_breakdown(sample_schema, config):
    result = structure.analyze(sample_schema, {}, config)
    card = result.card
    assert card.score == max(card.floor, min(card.ceiling, card.base + sum(c.delta for c in card.breakdown())))


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------


def test_component_reuse_patterns_and_unused(config):
    shared = (_string("title"), _string("slug"), _embed("seo", "Seo"))
    schema = Schema.from_types(
        [ModelType(name=name, fields=shared) for name in ("Article", "Page", "Product")],
        components=[
            ModelType(name="Seo", fields=(_string("metaTitle"), _string("metaDescription")), is_component=True),
            ModelType(name="Quote", fields=(_string("text"), _string("attribution")), is_component=True),
        ],
    )
    result = components.analyze(schema, {}, config)

    # -3 unused, -8 pattern, +2 well reused, +5 components available
    assert result.score == 96
    assert result.details["unused"] == ["Quote"]
    assert result.details["well_reused"] == ["Seo"]
    assert _ids(result) == ["unused-component-quote", "duplicate-pattern-title-slug", "good-reuse"]
    good = next(i for i in result.issues if i.id == "good-reuse")
    assert good.score_bonus == 10


def test_component_score_has_a_floor(config):
    schema = Schema.from_types(
        components=[
            ModelType(name=f"Block{i}", fields=(_string(f"note{i}"),), is_component=True) for i in range(30)
        ],
    )
    result = components.analyze(schema, {}, config)
    assert result.card.raw_total == 10
    assert result.score == 20


def test_component_nesting_depths(config):
    schema = Schema.from_types(
        components=[
            ModelType(name="A", fields=(_embed("b", "B"),), is_component=True),
            ModelType(name="B", fields=(_embed("c", "C"),), is_component=True),
            ModelType(name="C", fields=(_embed("d", "D"),), is_component=True),
            ModelType(name="D", fields=(_string("label"),), is_component=True),
        ],
    )
    assert nesting_depths(schema, limit=10) == {"A": 4, "B": 3, "C": 2, "D": 1}
    facts = components.detect_components(schema, config)
    assert facts.deep_nested == ["A"]


def test_self_embedding_component_does_not_recurse(config):
    schema = Schema.from_types(
        components=[ModelType(name="Menu", fields=(_embed("children", "Menu"),), is_component=True)],
    )
    assert nesting_depths(schema, limit=10) == {"Menu": 1}


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------


class _Sampler:
    def __init__(self, rates, failing=()):
        self.rates = rates
        self.failing = set(failing)
        self.calls = []

    def empty_field_rates(self, model):
        self.calls.append(model.name)
        if model.name in self.failing:
            raise SamplingError("boom")
        return self.rates.get(model.name, {})


def test_content_without_counts_is_neutral_with_note(sample_schema, config):
    result = content_health.analyze(sample_schema, {}, config)
    assert result.score == 100
    assert result.checkpoints == []
    assert result.notes == ["No entry counts supplied; content health was not evaluated"]
    assert not result.degraded


def test_content_healthy_counts(sample_schema, sample_counts, config):
    result = content_health.analyze(sample_schema, sample_counts, config)
    assert result.score == 100
    assert result.issues == []
    assert result.details["total_entries"] == 53


def test_content_draft_backlog_and_dominant_model(sample_schema, config):
    counts = {
        "Article": EntryCount(draft=60, published=40),
        "Author": EntryCount(published=5),
        "Category": EntryCount(published=8),
    }
    result = content_health.analyze(sample_schema, counts, config)
    # 60 of 113 entries are drafts: above 30% and above 50%
    assert result.score == 85
    assert _ids(result) == ["high-draft-ratio", "imbalanced-distribution"]
    assert result.details["draft_heavy_models"] == ["Article"]
    assert result.details["dominant_model"] == "Article"


def test_content_empty_models_penalty(sample_schema, config):
    counts = {"Article": EntryCount(published=3)}
    result = content_health.analyze(sample_schema, counts, config)
    # Author and Category are empty: round(2 / 3 * 20)
    assert result.score == 87
    assert "empty-models" in _ids(result)


def test_failing_sampler_is_isolated_per_model(sample_schema, sample_counts, config):
    sampler = _Sampler({"Author": {"email": 0.9, "name": 0.0}}, failing={"Article"})
    result = content_health.analyze(sample_schema, sample_counts, config, sampler=sampler)

    assert sampler.calls == ["Article", "Category", "Author"]
    assert result.details["sampled_models"] == ["Category", "Author"]
    assert result.details["sparse_fields"] == {"Author": ["email"]}
    assert result.details["sampling_failures"] == {"Article": "boom"}
    assert result.notes == ['Sampling "Article" failed: boom']
    assert result.score == 98
    assert not result.degraded


# ---------------------------------------------------------------------------
# Performance and relationships
# ---------------------------------------------------------------------------


def test_performance_reports_one_critical_deep_path(chain_schema, config):
    result = performance.analyze(chain_schema, {}, config)
    deep = [i for i in result.issues if i.id.startswith("deep-path")]
    assert len(deep) == 1
    assert deep[0].severity == Severity.CRITICAL
    assert deep[0].affected_items == ["Page", "Section", "Card", "Teaser", "Image"]
    assert deep[0].category == "performance"


def test_relationships_reference_findings(sample_schema, config):
    result = relationships.analyze(sample_schema, {}, config)
    ids = _ids(result)
    assert "nullable-key-references" in ids
    assert "missing-reverse-relations" in ids
    assert not any(i.startswith("broken-reference") for i in ids)
    assert result.details["cycles"]["bidirectional_pairs"] == [["Article", "Author"]]


def test_relationships_broken_reference_is_critical(config):
    schema = Schema.from_types([ModelType(name="Post", fields=(_embed("ghost", "Ghost"),))])
    result = relationships.analyze(schema, {}, config)
    broken = [i for i in result.issues if i.id == "broken-reference-post-ghost"]
    assert len(broken) == 1
    assert broken[0].severity == Severity.CRITICAL
    assert result.checkpoints[0].status == CheckpointStatus.ISSUE


# ---------------------------------------------------------------------------
# Enum architecture
# ---------------------------------------------------------------------------


def test_brand_enum_is_critical_tenancy(brand_schema, config):
    facts = enum_architecture.detect_enums(brand_schema, config)
    profile = facts.profiles[0]
    assert profile.name == "Brand"
    assert profile.category == "tenancy"
    assert profile.health == EnumHealth.CRITICAL
    assert "Create a dedicated content model (Brand, Site, etc.) with proper relationships" in profile.recommendations
    assert profile.used_in == ["Article", "Banner", "Campaign", "Product"]


def test_brand_enum_raises_multi_brand_issue(brand_schema, config):
    result = enum_architecture.analyze(brand_schema, {}, config)
    issue = next(i for i in result.issues if i.id == "enum-arch-multi-brand")
    assert issue.severity == Severity.CRITICAL
    assert issue.affected_items == ["Brand"]
    # The flaw covers the tenancy profile; no second issue for the same enum
    assert not any(i.id.startswith("enum-tenancy") for i in result.issues)
    assert result.score == 80


def test_small_brand_enum_is_monitored_not_flagged(sample_schema, config):
    result = enum_architecture.analyze(sample_schema, {}, config)
    brand = result.details["enums"][0]
    assert brand["name"] == "Brand"
    assert brand["health"] == "warning"
    assert not any(i.severity == Severity.CRITICAL for i in result.issues)


# ---------------------------------------------------------------------------
# Duplicates
# ---------------------------------------------------------------------------


def test_duplicates_dimension_scores_model_groups(versioned_schema, config):
    result = duplicates_assessment.analyze(versioned_schema, {}, config)
    assert result.score == 92
    assert _ids(result) == ["duplicate-models-product-productv2"]
    statuses = {c.title: c.status for c in result.checkpoints}
    assert statuses["Duplicate Models"] == CheckpointStatus.WARNING
    assert statuses["Duplicate Enums"] == CheckpointStatus.GOOD


def test_duplicates_dimension_flags_many_toggles(config):
    toggles = ("showTitle", "showAuthor", "hideDate", "isFeatured")
    schema = Schema.from_types([
        ModelType(name="Post", fields=tuple(Field(name=t, type_name="Boolean") for t in toggles)),
    ])
    result = duplicates_assessment.analyze(schema, {}, config)
    assert _ids(result) == ["boolean-toggles"]
    assert result.score == 97


# ---------------------------------------------------------------------------
# Best practices
# ---------------------------------------------------------------------------


def test_best_practices_findings_and_score(config):
    schema = Schema.from_types([
        ModelType(
            name="Product",
            fields=(
                _string("product_name"),
                _string("slug"),
                _string("status"),
                _string("contactEmail"),
                _string("backgroundColor"),
            ),
        ),
    ])
    result = best_practices.analyze(schema, {}, config)

    # naming -2, unique -3, slug -5, enum -1, validation -1, presentation -1
    assert result.score == 87
    ids = _ids(result)
    assert ids[:2] == ["naming-snake-case", "missing-unique-constraints"]
    assert {"potential-enum-fields", "missing-field-validation", "presentation-fields"} <= set(ids)
    unique = next(i for i in result.issues if i.id == "missing-unique-constraints")
    assert unique.severity == Severity.WARNING
    naming = result.details["naming"][0]
    assert naming["suggestion"] == "productName"


def test_best_practices_bonus_for_consistent_naming(sample_schema, config):
    result = best_practices.analyze(sample_schema, {}, config)
    assert "consistent-naming" in _ids(result)
    assert any(c.reason == "Consistent naming conventions" and c.delta == 5 for c in result.card.breakdown())


# ---------------------------------------------------------------------------
# Localization
# ---------------------------------------------------------------------------


def test_readiness_bands(config):
    thresholds = config.localization
    assert readiness_for(0, 5, thresholds) == Readiness.NONE
    assert readiness_for(5, 1, thresholds) == Readiness.BASIC
    assert readiness_for(2, 5, thresholds) == Readiness.BASIC
    assert readiness_for(3, 2, thresholds) == Readiness.STRUCTURED
    assert readiness_for(4, 3, thresholds) == Readiness.ADVANCED


def test_localization_structured_with_limited_coverage(rich_schema, config):
    result = localization.analyze(rich_schema, {}, config)
    details = result.details
    assert details["readiness"] == "structured"
    assert details["localized_models"] == ["Article", "ArticleV2", "Page"]
    assert details["locale_enum"] == "Locale"
    assert details["coverage"]["locale_count"] == 3
    assert _ids(result) == ["localization-limited-coverage"]
    assert result.score == 90


def test_single_locale_schema(sample_schema, config):
    result = localization.analyze(sample_schema, {}, config)
    assert result.details["readiness"] == "none"
    assert result.checkpoints[0].status == CheckpointStatus.ISSUE
    assert _ids(result) == ["localization-none"]
    assert result.score == 85


def test_localization_advanced_earns_bonus_issue(config):
    schema = Schema.from_types(
        [ModelType(name=name, fields=(_string("title"), _string("locale"))) for name in ("Article", "Event", "Page", "Product")],
        enums=[EnumType(name="Locale", values=("en", "de", "fr", "es"))],
    )
    result = localization.analyze(schema, {}, config)
    assert result.details["readiness"] == "advanced"
    assert _ids(result) == ["localization-ready"]
    assert result.issues[0].score_bonus is not None
    assert result.score == 100
    assert all(c.status == CheckpointStatus.GOOD for c in result.checkpoints)


# ---------------------------------------------------------------------------
# SEO readiness
# ---------------------------------------------------------------------------


def test_seo_gaps_on_partially_covered_schema(rich_schema, config):
    result = seo_readiness.analyze(rich_schema, {}, config)
    details = result.details
    assert "SiteSettings" not in details["content_models"]
    assert details["models_with_seo"] == ["Article", "ArticleV2", "Page"]
    assert details["slug_field_names"] == ["handle", "slug"]
    statuses = {c.title: c.status for c in result.checkpoints}
    assert statuses == {
        "Meta Field Coverage": CheckpointStatus.ISSUE,
        "URL Slug Consistency": CheckpointStatus.ISSUE,
        "Social Sharing Support": CheckpointStatus.GOOD,
        "Structured Data Support": CheckpointStatus.GOOD,
    }
    assert _ids(result) == ["missing-seo-fields", "low-seo-coverage", "missing-slug-fields", "inconsistent-slug-names"]
    assert result.issues[0].severity == Severity.WARNING
    assert result.score == 30  # 100 - 25 - 25 - 20


def test_seo_ready_schema(config):
    schema = Schema.from_types(
        [
            ModelType(name="BlogPost", fields=(_string("title"), _string("slug"), _embed("seo", "Seo"))),
            ModelType(name="Product", fields=(_string("slug"), _string("metaTitle"))),
            ModelType(name="MainMenu", fields=(_string("label"),)),
        ],
        components=[
            ModelType(
                name="Seo",
                is_component=True,
                fields=(_string("ogTitle"), _string("twitterTitle"), _string("canonicalUrl")),
            ),
        ],
    )
    result = seo_readiness.analyze(schema, {}, config)
    assert result.details["content_models"] == ["BlogPost", "Product"]
    assert [s["schema_type"] for s in result.details["structured_data"]] == ["Article", "Product"]
    assert all(c.status == CheckpointStatus.GOOD for c in result.checkpoints)
    assert _ids(result) == ["good-seo-coverage"]
    assert result.score == 100


def test_seo_without_social_fields(config):
    schema = Schema.from_types([ModelType(name="Page", fields=(_string("slug"), _string("metaTitle")))])
    result = seo_readiness.analyze(schema, {}, config)
    social = next(c for c in result.checkpoints if c.title == "Social Sharing Support")
    assert social.status == CheckpointStatus.ISSUE
    assert "missing-og-fields" in _ids(result)
    assert "missing-canonical-field" in _ids(result)
    # Social issue plus no Schema.org-friendly model
    assert result.score == 100 - 20 - 7
