"""
Tests for duplicate detection: version-suffix groups, field and value overlap,
universal-field exclusion, single assignment and order stability.
"""

from __future__ import annotations

from schema_audit.analysis_engine.duplicates import (
    DuplicateKind,
    GroupingRule,
    find_boolean_toggles,
    find_duplicate_components,
    find_duplicate_enums,
    find_duplicate_models,
    overlap_ratio,
)
from schema_audit.schema_graph import EnumType, Field, ModelType


def _type(name: str, *field_names: str, component: bool = False, type_name: str = "String") -> ModelType:
    return ModelType(
        name=name,
        fields=tuple(Field(name=f, type_name=type_name) for f in field_names),
        is_component=component,
    )


def test_versioned_models_grouped_with_fixed_similarity(versioned_schema):
    groups = find_duplicate_models(versioned_schema.custom_models())
    assert len(groups) == 1
    group = groups[0]
    assert group.kind == DuplicateKind.MODEL
    assert group.rule == GroupingRule.VERSION_SUFFIX
    assert group.members == ["Product", "ProductV2"]
    assert group.similarity == 90
    assert "price" in group.shared_attributes


def test_model_field_overlap():
    shared = ("headline", "body", "excerpt", "coverImage", "readingTime")
    models = [
        _type("NewsPost", *shared, "source"),
        _type("BlogPost", *shared, "tags"),
        _type("Recipe", "ingredients", "steps", "servings", "cookTime", "difficulty"),
    ]
    groups = find_duplicate_models(models)
    assert [g.members for g in groups] == [["BlogPost", "NewsPost"]]
    assert groups[0].rule == GroupingRule.FIELD_OVERLAP
    assert groups[0].similarity == 83


def test_component_overlap_and_similarity():
    components = [
        _type("Hero", "heading", "subheading", "image", "ctaLabel", "ctaUrl", component=True),
        _type("Banner", "heading", "subheading", "image", "ctaLabel", "background", component=True),
        _type("Card", "heading", "image", "excerpt", component=True),
    ]
    groups = find_duplicate_components(components)
    assert len(groups) == 1
    assert groups[0].members == ["Banner", "Hero"]
    assert groups[0].similarity == 80
    assert groups[0].shared_attributes == ["heading", "subheading", "image", "ctaLabel"]


def test_universal_fields_do_not_create_duplicates():
    components = [
        _type("Quote", "id", "title", "slug", "text", component=True),
        _type("Callout", "id", "title", "slug", "icon", component=True),
    ]
    assert find_duplicate_components(components) == []


def test_each_type_lands_in_at_most_one_group():
    components = [
        _type(name, "alpha", "beta", "gamma", "delta", component=True)
        for name in ("Zeta", "Eta", "Theta")
    ]
    groups = find_duplicate_components(components)
    assert len(groups) == 1
    members = [m for g in groups for m in g.members]
    assert sorted(members) == ["Eta", "Theta", "Zeta"]
    assert len(members) == len(set(members))


def test_grouping_is_stable_under_reordering():
    shared = ("headline", "body", "excerpt", "coverImage", "readingTime")
    models = [
        _type("NewsPost", *shared, "source"),
        _type("BlogPost", *shared, "tags"),
        _type("StoryV2", "plot", "cast"),
        _type("Story", "plot", "cast"),
    ]
    forward = [g.to_dict() for g in find_duplicate_models(models)]
    backward = [g.to_dict() for g in find_duplicate_models(list(reversed(models)))]
    assert forward == backward
    assert len(forward) == 2


def test_enum_value_overlap():
    enums = [
        EnumType(name="ButtonColor", values=("primary", "secondary", "accent", "muted", "danger")),
        EnumType(name="TextColor", values=("Primary", "Secondary", "Accent", "Muted", "Inverse")),
        EnumType(name="Flavour", values=("vanilla", "mint", "lemon")),
    ]
    groups = find_duplicate_enums(enums)
    assert len(groups) == 1
    assert groups[0].members == ["ButtonColor", "TextColor"]
    assert groups[0].similarity == 80
    assert groups[0].rule == GroupingRule.VALUE_OVERLAP
    assert groups[0].recommendation == 'Consolidate "ButtonColor" and "TextColor" into a single enum'


def test_overlap_ratio_empty_side():
    assert overlap_ratio(frozenset(), frozenset({"a"})) == 0.0
    assert overlap_ratio(frozenset({"a", "b"}), frozenset({"a", "b", "c", "d"})) == 1.0


def test_boolean_toggles_in_type_then_field_order():
    types = [
        _type("Page", "showTitle", "isFeatured", "island", type_name="Boolean"),
        _type("Banner", "hideOnMobile", "shower", type_name="Boolean"),
        _type("Note", "showAuthor"),  # String, not a toggle
    ]
    toggles = find_boolean_toggles(types)
    assert [(t.owner, t.field, t.pattern) for t in toggles] == [
        ("Banner", "hideOnMobile", "hide"),
        ("Page", "showTitle", "show"),
        ("Page", "isFeatured", "is"),
    ]
