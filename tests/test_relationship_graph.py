"""
Tests for the relationship graph: node importance, collapsed bidirectional
edges, enum nodes, clusters, hubs and orphans.
"""

from __future__ import annotations

from schema_audit.analysis_engine.relationship_graph import (
    EdgeKind,
    Importance,
    NodeKind,
    build_relationship_graph,
)
from schema_audit.schema_graph import EntryCount, Field, ModelType, Schema


def test_nodes_and_importance(sample_schema, sample_counts):
    graph = build_relationship_graph(sample_schema, sample_counts)
    article = graph.node("Article")
    assert article.kind == NodeKind.MODEL
    assert article.importance == Importance.CORE
    assert article.entry_count == 40
    assert article.description == "Website pages and articles"
    assert graph.node("Author").importance == Importance.SUPPORTING
    # Architectural enum is a node; Seo is embedded by a single model and is not
    brand = graph.node("enum:Brand")
    assert brand is not None and brand.importance == Importance.CORE
    assert graph.node("comp:Seo") is None
    assert graph.node("Asset") is None


def test_bidirectional_pair_collapses_into_one_edge(sample_schema, sample_counts):
    graph = build_relationship_graph(sample_schema, sample_counts)
    model_edges = [(e.source, e.target, e.kind) for e in graph.edges if e.kind != EdgeKind.ENUM]
    assert model_edges == [
        ("Article", "Author", EdgeKind.BIDIRECTIONAL),
        ("Article", "Category", EdgeKind.REFERENCE),
    ]
    enum_edges = [(e.source, e.target) for e in graph.edges if e.kind == EdgeKind.ENUM]
    assert enum_edges == [("Article", "enum:Brand")]


def test_clusters(sample_schema, sample_counts):
    graph = build_relationship_graph(sample_schema, sample_counts)
    clusters = {c.name: c.members for c in graph.clusters}
    assert clusters == {"Content": ["Article"], "Taxonomy": ["Category"], "People": ["Author"]}
    assert graph.core_models == ["Article"]


def test_hubs_and_orphans():
    def ref(target: str) -> Field:
        return Field(name=target.lower(), type_name=target, related_model=target)

    schema = Schema.from_types([
        ModelType(name="Hub", fields=(ref("Alpha"), ref("Beta"), ref("Gamma"))),
        ModelType(name="Alpha"),
        ModelType(name="Beta"),
        ModelType(name="Gamma"),
        ModelType(name="Lonely", fields=(Field(name="note", type_name="String"),)),
    ])
    graph = build_relationship_graph(schema, {"Lonely": EntryCount(published=2)})
    assert [(h.model, h.connection_count) for h in graph.hub_models] == [("Hub", 3)]
    assert graph.orphaned_models == ["Lonely"]
    assert "Hub" in graph.core_models
    assert graph.to_dict()["hub_models"] == [{"model": "Hub", "connection_count": 3}]
