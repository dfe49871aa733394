"""
Tests for the pattern registry: ordered classification, case-sensitive toggles,
version stems, overrides and platform-generated type detection.
"""

from __future__ import annotations

from schema_audit.patterns import (
    DEFAULT_REGISTRY,
    ENUM_CATEGORY_ORDER,
    FIELD_ROLE_ORDER,
    REGISTRY_VERSION,
    Matcher,
    PatternTag,
    version_stem,
)
from schema_audit.schema_graph.system_filters import (
    is_embedded_wrapper,
    is_system_component,
    is_system_enum,
    is_system_reference,
)


def test_enum_category_styling_wins_over_layout():
    """Color values classify as styling even though layout is also plausible."""
    tag = DEFAULT_REGISTRY.classify("ButtonColor", ["primary", "secondary"], order=ENUM_CATEGORY_ORDER)
    assert tag == PatternTag.STYLING


def test_enum_category_tenancy_by_name_and_by_values():
    assert DEFAULT_REGISTRY.classify("Brand", ["Acme", "Globex"], order=ENUM_CATEGORY_ORDER) == PatternTag.TENANCY
    # Name says nothing, values read like proper nouns
    tag = DEFAULT_REGISTRY.classify("Label", ["Acme", "Globex", "Initech"], order=ENUM_CATEGORY_ORDER)
    assert tag == PatternTag.TENANCY


def test_enum_category_unmatched_is_none():
    assert DEFAULT_REGISTRY.classify("Flavour", ["vanilla", "mint"], order=ENUM_CATEGORY_ORDER) is None


def test_boolean_toggle_is_case_sensitive():
    assert DEFAULT_REGISTRY.matches(PatternTag.BOOLEAN_TOGGLE, "showTitle")
    assert DEFAULT_REGISTRY.matches(PatternTag.BOOLEAN_TOGGLE, "isFeatured")
    assert not DEFAULT_REGISTRY.matches(PatternTag.BOOLEAN_TOGGLE, "shower")
    assert not DEFAULT_REGISTRY.matches(PatternTag.BOOLEAN_TOGGLE, "island")


def test_field_role_presentation_beats_configuration():
    assert DEFAULT_REGISTRY.classify("textColor", order=FIELD_ROLE_ORDER) == PatternTag.PRESENTATION
    assert DEFAULT_REGISTRY.classify("showBanner", order=FIELD_ROLE_ORDER) == PatternTag.CONFIG_FIELD
    # Bare "text" is content, not styling
    assert DEFAULT_REGISTRY.classify("text", order=FIELD_ROLE_ORDER) is None


def test_first_match_carries_description():
    matcher = DEFAULT_REGISTRY.first_match(PatternTag.SHOULD_BE_REQUIRED, "slug")
    assert matcher is not None
    assert matcher.description == "URL routing"


def test_version_stem():
    assert version_stem("ProductV2") == "Product"
    assert version_stem("Page_2") == "Page"
    assert version_stem("Product") is None


def test_with_overrides_replaces_one_tag_only():
    custom = DEFAULT_REGISTRY.with_overrides({
        PatternTag.VAGUE_MODEL: [Matcher("vague-widget", lambda name, _ctx: name == "Widget")],
    })
    assert custom.version == f"{REGISTRY_VERSION}+custom"
    assert custom.matches(PatternTag.VAGUE_MODEL, "Widget")
    assert not custom.matches(PatternTag.VAGUE_MODEL, "Content")
    assert DEFAULT_REGISTRY.matches(PatternTag.VAGUE_MODEL, "Content")
    assert custom.matches(PatternTag.PAGE_MODEL, "LandingPage")


def test_system_type_detection():
    assert is_system_component("ProductWhereInput")
    assert is_system_component("RichText")
    assert not is_system_component("Seo")
    assert is_system_enum("Stage")
    assert is_system_enum("_FilterKind")
    assert not is_system_enum("Brand")
    assert is_system_reference("Asset")
    assert is_embedded_wrapper("ArticleBodyRichText")
    assert not is_embedded_wrapper("RichText")
