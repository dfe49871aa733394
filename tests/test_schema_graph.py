"""
Tests for the schema graph: payload loading, system filtering, relation edges,
enum/component usage and entry-count lookup.
"""

from __future__ import annotations

import pytest

from schema_audit.schema_graph import (
    Cardinality,
    Direction,
    EntryCount,
    EnumType,
    Field,
    ModelType,
    Schema,
    SchemaLoadError,
    entries_for,
    entries_for_model,
    load_entry_counts,
    load_schema,
)


def test_load_schema_filters_system_types(sample_schema):
    """Asset (isSystem) and Stage (platform enum) are not custom."""
    assert [m.name for m in sample_schema.custom_models()] == ["Article", "Author", "Category"]
    assert [e.name for e in sample_schema.custom_enums()] == ["Brand"]
    assert sample_schema.model_by_name("Asset") is not None
    assert sample_schema.component_by_name("Seo").is_component


def test_load_schema_inherits_enum_values(sample_schema):
    brand = next(f for f in sample_schema.fields_of("Article") if f.name == "brand")
    assert brand.is_enum
    assert brand.enum_values == ("Acme", "Globex", "Initech")


def test_load_schema_rejects_invalid_payload():
    with pytest.raises(SchemaLoadError):
        load_schema({"models": [{"fields": []}]})


def test_load_entry_counts_aliases_and_validation():
    counts = load_entry_counts({"Article": {"draftCount": 2, "publishedCount": 3}})
    assert counts["Article"] == EntryCount(draft=2, published=3)
    assert counts["Article"].total == 5
    assert load_entry_counts(None) == {}
    with pytest.raises(SchemaLoadError):
        load_entry_counts({"Article": {"draft": -1}})
    with pytest.raises(SchemaLoadError):
        load_entry_counts(["Article"])


def test_bidirectional_edges(sample_schema):
    edges = {(e.source, e.target): e for e in sample_schema.relation_edges()}
    assert edges[("Article", "Author")].direction == Direction.BIDIRECTIONAL
    assert edges[("Author", "Article")].direction == Direction.BIDIRECTIONAL
    assert edges[("Author", "Article")].cardinality == Cardinality.ONE_TO_MANY
    assert edges[("Article", "Category")].direction == Direction.ONE_WAY
    # Component references are not model edges
    assert ("Article", "Seo") not in edges


def test_dangling_reference_is_no_relation():
    schema = Schema.from_types([
        ModelType(name="Post", fields=(Field(name="ghost", type_name="Ghost", related_model="Ghost"),)),
    ])
    assert schema.relation_edges() == []
    assert schema.adjacency() == {"Post": []}


def test_enum_usage_counts_by_type_name_only():
    schema = Schema.from_types(
        [
            ModelType(name="Article", fields=(Field(name="brand", type_name="Brand", enum_values=("A", "B")),)),
            # Named like the enum but typed as String: not a usage
            ModelType(name="Note", fields=(Field(name="brand", type_name="String"),)),
        ],
        enums=[EnumType(name="Brand", values=("A", "B"))],
    )
    assert schema.enum_usage() == {"Brand": ["Article"]}


def test_component_usage(sample_schema):
    assert sample_schema.component_usage() == {"Seo": ["Article"]}


def test_first_declaration_wins_on_duplicate_names():
    first = ModelType(name="Page", fields=(Field(name="title", type_name="String"),))
    second = ModelType(name="Page", fields=())
    schema = Schema.from_types([first, second])
    assert schema.model_by_name("Page") is first


def test_entries_lookup_falls_back_to_plural_api_id(sample_schema):
    article = sample_schema.model_by_name("Article")
    counts = {"articles": EntryCount(draft=1, published=2)}
    assert entries_for_model(counts, article).total == 3
    assert entries_for(counts, "Unknown") == EntryCount()


def test_scalar_fields():
    assert Field(name="title", type_name="String").is_scalar
    assert Field(name="body", type_name="RichText").is_scalar
    assert not Field(name="author", type_name="Author", related_model="Author").is_scalar
    assert not Field(name="brand", type_name="Brand", enum_values=("A",)).is_scalar
