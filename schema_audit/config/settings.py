"""
Audit settings: thresholds, resource caps and category weights.

Responsibilities:
- Hold every tunable constant of the analyzers in one typed place.
- Provide defaults that reproduce the reference heuristics.
- Allow tests and callers to inject overridden thresholds per run.

All dataclasses are frozen; build a modified copy with dataclasses.replace().
"""

from __future__ import annotations

from dataclasses import dataclass, field

# Fields present on nearly every type; they inflate similarity if counted
UNIVERSAL_FIELDS = frozenset({
    "id",
    "createdat",
    "updatedat",
    "publishedat",
    "stage",
    "locale",
    "title",
    "slug",
    "name",
    "description",
})

DEFAULT_CATEGORY_WEIGHTS: dict[str, float] = {
    "structure": 1.2,
    "components": 0.8,
    "content": 1.0,
    "performance": 1.2,
    "relationships": 1.0,
    "enum-architecture": 1.0,
    "duplicates": 0.9,
    "best-practices": 0.8,
    "localization": 0.6,
    "seo": 0.8,
}

EMPTY_SCHEMA_SCORE = 100
"""Overall score reported when there is nothing to audit."""


@dataclass(frozen=True)
class DuplicateThresholds:
    """Overlap thresholds per duplicate kind. Ratios are shared / min(|A|, |B|)."""

    enum_min_overlap: float = 0.5
    enum_min_shared: int = 3
    component_min_overlap: float = 0.6
    component_min_shared: int = 3
    model_min_overlap: float = 0.7
    model_min_shared: int = 5
    model_min_fields: int = 5
    version_similarity: int = 90
    """Similarity reported for version-suffix groups (name rule, no field math)."""
    max_candidates: int = 500
    """Types compared per kind; the rest are dropped in name order."""
    max_shared_listed: int = 10
    universal_fields: frozenset[str] = UNIVERSAL_FIELDS


@dataclass(frozen=True)
class TraversalLimits:
    """
    Hard caps for the deep-nesting search and the cycle detector.

    Depth counts models on a chain: Page -> Section -> Card is depth 3.
    """

    max_depth: int = 6
    min_reported_depth: int = 4
    critical_depth: int = 5
    max_frontier: int = 500
    max_explored_per_start: int = 5000
    max_paths_per_start: int = 20
    max_total_paths: int = 50
    report_limit: int = 10
    max_cycle_length: int = 6
    max_cycles: int = 100


@dataclass(frozen=True)
class GraphThresholds:
    """Relationship graph inclusion, importance, hub and orphan thresholds."""

    component_min_usage: int = 2
    core_component_usage: int = 5
    enum_min_usage: int = 3
    architectural_enum_min_values: int = 3
    core_entry_count: int = 20
    core_reference_count: int = 3
    hub_min_degree: int = 3
    hub_limit: int = 5
    orphan_max_entries: int = 5


@dataclass(frozen=True)
class StructureThresholds:
    """Model naming and size heuristics for the structure dimension."""

    large_model_fields: int = 20
    vague_warning_max: int = 2
    inline_media_warning_max: int = 2


@dataclass(frozen=True)
class ComponentThresholds:
    """Component reuse and shared-field-pattern limits."""

    well_reused_min_users: int = 3
    pattern_min_models: int = 3
    """Ad-hoc three-field combinations must repeat in this many models."""
    pattern_field_limit: int = 30
    """Scalar fields per model considered when enumerating combinations."""
    max_nesting: int = 3
    nesting_search_limit: int = 10


@dataclass(frozen=True)
class PerformanceThresholds:
    """Model size limits."""

    huge_model_fields: int = 25
    very_huge_model_fields: int = 40
    high_usage_entries: int = 100


@dataclass(frozen=True)
class EnumThresholds:
    """Enum health limits."""

    oversized_values: int = 20
    critical_tenancy_values: int = 5
    multi_brand_min_values: int = 4
    multi_brand_min_usage: int = 3
    multi_region_min_values: int = 6
    multi_region_min_usage: int = 2


@dataclass(frozen=True)
class ContentThresholds:
    """Entry volume heuristics for the content dimension."""

    draft_heavy_ratio: float = 0.5
    draft_heavy_min_entries: int = 10
    concentration_ratio: float = 0.8
    empty_field_rate: float = 0.5
    max_sampled_models: int = 20
    large_collection_entries: int = 10000


@dataclass(frozen=True)
class LocalizationThresholds:
    """Readiness bands for locale-aware schemas."""

    basic_max_models: int = 2
    structured_min_locales: int = 3
    structured_min_models: int = 4
    coverage_ratio: float = 1 / 3
    """Localized models below this share of content models is limited coverage."""
    managed_locales_max: int = 2
    fields_per_model: int = 5


@dataclass(frozen=True)
class SeoThresholds:
    """Coverage percentages for the SEO readiness checkpoints."""

    good_coverage: float = 80.0
    warning_coverage: float = 50.0


@dataclass(frozen=True)
class StrengthThresholds:
    """When a schema pattern counts as a strength worth reporting."""

    component_reuse_score: float = 50.0
    highly_reused_min_users: int = 3
    tenancy_min_referrers: int = 2
    form_components_min: int = 3
    seo_models_min: int = 3
    well_scoped_fields: tuple[int, int] = (5, 20)
    active_platform_entries: int = 100
    component_model_ratio: float = 1.5
    component_ratio_min_components: int = 5


@dataclass(frozen=True)
class AuditConfig:
    """Everything an audit run can tune. Passed explicitly into analyzers."""

    duplicates: DuplicateThresholds = field(default_factory=DuplicateThresholds)
    traversal: TraversalLimits = field(default_factory=TraversalLimits)
    graph: GraphThresholds = field(default_factory=GraphThresholds)
    structure: StructureThresholds = field(default_factory=StructureThresholds)
    components: ComponentThresholds = field(default_factory=ComponentThresholds)
    performance: PerformanceThresholds = field(default_factory=PerformanceThresholds)
    enums: EnumThresholds = field(default_factory=EnumThresholds)
    content: ContentThresholds = field(default_factory=ContentThresholds)
    localization: LocalizationThresholds = field(default_factory=LocalizationThresholds)
    seo: SeoThresholds = field(default_factory=SeoThresholds)
    strengths: StrengthThresholds = field(default_factory=StrengthThresholds)
    category_weights: dict[str, float] = field(
        default_factory=lambda: dict(DEFAULT_CATEGORY_WEIGHTS)
    )
    empty_schema_score: int = EMPTY_SCHEMA_SCORE
