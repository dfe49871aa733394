"""
Tests for the bounded deep-path search and the cycle detector.
"""

from __future__ import annotations

from dataclasses import replace

from schema_audit.analysis_engine.cycles import canonical_rotation, find_cycles
from schema_audit.analysis_engine.models import Severity
from schema_audit.analysis_engine.traversal import find_deep_paths
from schema_audit.config import TraversalLimits
from schema_audit.schema_graph import Field, ModelType, Schema


def _linked(name: str, *targets: str) -> ModelType:
    return ModelType(
        name=name,
        fields=tuple(Field(name=t.lower(), type_name=t, related_model=t) for t in targets),
    )


def test_five_model_chain_reports_one_critical_path(chain_schema):
    report = find_deep_paths(chain_schema)
    assert len(report.paths) == 1
    path = report.paths[0]
    assert path.models == ("Page", "Section", "Card", "Teaser", "Image")
    assert path.depth == 5
    assert path.severity == Severity.CRITICAL
    assert path.query_complexity == "high"
    assert not report.truncated


def test_four_model_chain_is_warning():
    schema = Schema.from_types([_linked("A", "B"), _linked("B", "C"), _linked("C", "D"), _linked("D")])
    report = find_deep_paths(schema)
    assert [(p.models, p.severity) for p in report.paths] == [(("A", "B", "C", "D"), Severity.WARNING)]


def test_short_chains_are_not_reported():
    schema = Schema.from_types([_linked("A", "B"), _linked("B", "C"), _linked("C")])
    assert find_deep_paths(schema).paths == []


def test_paths_never_revisit_a_model():
    schema = Schema.from_types([
        _linked("A", "B"),
        _linked("B", "C", "A"),
        _linked("C", "D", "A"),
        _linked("D", "A", "B"),
    ])
    report = find_deep_paths(schema)
    assert report.paths
    for path in report.paths:
        assert len(set(path.models)) == len(path.models)
        assert path.depth <= TraversalLimits().max_depth


def test_bounds_are_recorded_not_raised():
    """A dense graph hits the per-start cap; the result is truncated, not an error."""
    names = [f"M{i}" for i in range(8)]
    schema = Schema.from_types([_linked(n, *[o for o in names if o != n]) for n in names])
    limits = replace(TraversalLimits(), max_paths_per_start=3, max_total_paths=10)
    report = find_deep_paths(schema, limits)
    assert report.truncated
    assert "max_paths_per_start" in report.bounds_hit
    assert len(report.paths) <= limits.report_limit


def test_two_model_cycle_reported_once():
    schema = Schema.from_types([_linked("A", "B"), _linked("B", "A")])
    report = find_cycles(schema)
    assert report.bidirectional_pairs == [("A", "B")]
    assert report.chains == []
    assert report.total == 1


def test_cycle_detector_finds_chains_and_self_references():
    schema = Schema.from_types([
        _linked("Category", "Category"),
        _linked("Page", "Section"),
        _linked("Section", "Widget"),
        _linked("Widget", "Page"),
    ])
    report = find_cycles(schema)
    assert report.self_references == ["Category"]
    assert report.chains == [("Page", "Section", "Widget")]
    assert report.to_dict()["chains"] == [["Page", "Section", "Widget", "Page"]]


def test_canonical_rotation_keeps_direction():
    assert canonical_rotation(["Widget", "Page", "Section"]) == ("Page", "Section", "Widget")


def test_deepest_chain_survives_per_start_cap():
    """Twenty-two parallel branches fill the per-start list with four-model chains first."""
    blocks = [f"Block{i:02d}" for i in range(22)]
    schema = Schema.from_types(
        [_linked("Page", "Section"), _linked("Section", *blocks)]
        + [_linked(b, "Image") for b in blocks]
        + [_linked("Image", "Media"), _linked("Media")]
    )
    report = find_deep_paths(schema)
    assert report.max_depth == 5
    assert report.paths[0].severity == Severity.CRITICAL
    assert report.paths[0].models[0] == "Page"
    assert report.paths[0].models[-1] == "Media"
    assert "max_paths_per_start" in report.bounds_hit


def test_explored_cap_stops_search_and_is_recorded():
    names = [f"M{i}" for i in range(8)]
    schema = Schema.from_types([_linked(n, *[o for o in names if o != n]) for n in names])
    limits = replace(TraversalLimits(), max_explored_per_start=10)
    report = find_deep_paths(schema, limits)
    assert "max_explored_per_start" in report.bounds_hit
    assert report.explored == 10 * len(names)


def test_mutual_pairs_survive_cycle_cap():
    dense = [f"D{i}" for i in range(6)]
    schema = Schema.from_types(
        [_linked(n, *[o for o in dense if o != n]) for n in dense]
        + [_linked("Author", "Article"), _linked("Article", "Author"), _linked("Tag", "Tag")]
    )
    report = find_cycles(schema, replace(TraversalLimits(), max_cycles=5))
    assert report.truncated
    assert ("Article", "Author") in report.bidirectional_pairs
    assert len(report.bidirectional_pairs) == 16
    assert report.self_references == ["Tag"]
    assert len(report.chains) == 5
    assert all(len(chain) == 3 for chain in report.chains)
