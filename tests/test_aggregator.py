"""
Tests for the strategic aggregator: empty schemas, analyzer isolation, issue
ordering, roadmap phases, executive summary bands and report determinism.
"""

from __future__ import annotations

import json

from schema_audit.analysis_engine.models import AuditIssue, Dimension, Effort, Severity
from schema_audit.analyzers import structure
from schema_audit.report import Assessment, build_roadmap, run_audit, sort_issues
from schema_audit.report import aggregator
from schema_audit.report.summary import assess
from schema_audit.schema_graph import ModelType, Schema, load_schema

ALL_DIMENSIONS = [d.value for d in Dimension]


def _issue(issue_id: str, severity: Severity, category: str = "structure", effort: Effort = Effort.MEDIUM, **kwargs) -> AuditIssue:
    return AuditIssue(
        id=issue_id,
        severity=severity,
        category=category,
        title=issue_id.title(),
        description="",
        impact="",
        recommendation=f"Fix {issue_id}",
        effort=effort,
        **kwargs,
    )


def test_empty_schema_scores_100(empty_schema):
    assert empty_schema.is_empty
    report = run_audit(empty_schema)
    assert report.overall_score == 100
    assert list(report.dimensions) == ALL_DIMENSIONS
    assert all(d.score == 100 for d in report.dimensions.values())
    assert report.degraded_dimensions == []
    assert report.issues == []
    assert report.executive_summary.assessment == Assessment.EXCELLENT
    assert [p.name for p in report.roadmap.phases] == ["Maintenance"]


def test_system_types_only_is_empty():
    schema = Schema.from_types([ModelType(name="Asset", is_system=True), ModelType(name="User")])
    report = run_audit(schema)
    assert report.overall_score == 100
    assert report.dimensions["structure"].notes == [aggregator.EMPTY_SCHEMA_NOTE]


def test_failing_analyzer_degrades_only_its_dimension(monkeypatch, sample_schema, sample_counts):
    def explode(*args, **kwargs):
        raise RuntimeError("analyzer bug")

    patched = tuple(
        (dimension, explode if dimension == Dimension.STRUCTURE else analyze)
        for dimension, analyze in aggregator.ANALYZERS
    )
    monkeypatch.setattr(aggregator, "ANALYZERS", patched)

    report = run_audit(sample_schema, sample_counts)
    assert report.degraded_dimensions == ["structure"]
    degraded = report.dimensions["structure"]
    assert degraded.score == 100
    assert "RuntimeError" in degraded.notes[0]
    assert len(report.dimensions) == len(ALL_DIMENSIONS)
    # The degraded dimension is not offered as a weak spot
    assert not any(r.startswith("Improve structure") for r in report.executive_summary.strategic_recommendations)


def test_run_isolated_returns_result_unchanged_on_success(sample_schema, sample_counts, config):
    result = aggregator.run_isolated("structure", structure.analyze, sample_schema, sample_counts, config)
    assert not result.degraded


def test_overall_score_is_weighted_average(sample_schema, sample_counts, config):
    report = run_audit(sample_schema, sample_counts, config)
    weights = report.score_weights
    expected = sum(report.category_scores[c] * weights[c] for c in weights) / sum(weights.values())
    assert report.overall_score == round(expected)
    assert weights["structure"] == 1.2


def test_issues_sorted_by_severity_category_id():
    issues = [
        _issue("b-info", Severity.INFO, "components"),
        _issue("z-critical", Severity.CRITICAL, "performance"),
        _issue("a-warning", Severity.WARNING, "structure"),
        _issue("a-critical", Severity.CRITICAL, "performance"),
        _issue("c-warning", Severity.WARNING, "components"),
    ]
    assert [i.id for i in sort_issues(issues)] == [
        "a-critical",
        "z-critical",
        "c-warning",
        "a-warning",
        "b-info",
    ]


def test_report_is_stable_under_type_reordering(sample_payload):
    forward = run_audit(load_schema(sample_payload)).to_dict()
    reversed_payload = {key: list(reversed(value)) for key, value in sample_payload.items()}
    backward = run_audit(load_schema(reversed_payload)).to_dict()
    assert json.dumps(forward, sort_keys=True) == json.dumps(backward, sort_keys=True)


def test_report_serialises_to_json(sample_schema, sample_counts):
    report = run_audit(sample_schema, sample_counts)
    payload = json.loads(json.dumps(report.to_dict()))
    assert payload["overall_score"] == report.overall_score
    assert set(payload["category_scores"]) == set(ALL_DIMENSIONS)
    assert payload["registry_version"] == "1.0"
    assert payload["roadmap"]["phases"][-1]["name"] == "Maintenance"


def test_brand_schema_surfaces_critical_issue_first(brand_schema):
    report = run_audit(brand_schema)
    assert report.issues[0].id == "enum-arch-multi-brand"
    assert report.issues[0].severity == Severity.CRITICAL
    strategic = report.executive_summary.strategic_recommendations
    assert strategic[0] == report.issues[0].recommendation


def test_roadmap_phases_by_effort():
    issues = sort_issues([
        _issue("rename", Severity.WARNING, effort=Effort.LOW),
        _issue("extract", Severity.WARNING, effort=Effort.MEDIUM),
        _issue("migrate", Severity.CRITICAL, effort=Effort.HIGH),
        _issue("good-reuse", Severity.INFO, effort=Effort.LOW, score_bonus=10),
    ])
    roadmap = build_roadmap(issues)
    assert [(p.phase, p.name) for p in roadmap.phases] == [
        (1, "Quick Wins"),
        (2, "Medium Efforts"),
        (3, "Strategic Improvements"),
        (4, "Maintenance"),
    ]
    assert [t.id for t in roadmap.phases[0].tasks] == ["task-rename"]
    assert [t.id for t in roadmap.quick_wins] == ["task-rename"]
    assert len(roadmap.maintenance_tasks) == 3
    assert roadmap.total_estimated_effort == "4-6 weeks for full implementation"


def test_roadmap_effort_estimate_in_months():
    issues = [_issue(f"migrate-{n}", Severity.WARNING, effort=Effort.HIGH) for n in range(4)]
    assert build_roadmap(issues).total_estimated_effort == "2-3 months for full implementation"
    assert build_roadmap([]).total_estimated_effort == "2-3 weeks for full implementation"


def test_assessment_bands():
    assert assess(95, 0) == Assessment.EXCELLENT
    assert assess(95, 1) == Assessment.GOOD
    assert assess(70, 0) == Assessment.GOOD
    assert assess(90, 3) == Assessment.NEEDS_ATTENTION
    assert assess(55, 0) == Assessment.NEEDS_ATTENTION
    assert assess(90, 5) == Assessment.CRITICAL
    assert assess(39, 0) == Assessment.CRITICAL


def test_failed_relationship_graph_is_marked_degraded(monkeypatch, sample_schema, sample_counts):
    def boom(*args, **kwargs):
        raise ValueError("boom")

    monkeypatch.setattr(aggregator, "build_relationship_graph", boom)
    report = run_audit(sample_schema, sample_counts)

    graph = report.to_dict()["relationship_graph"]
    assert graph["degraded"] is True
    assert graph["nodes"] == []
    assert "ValueError: boom" in graph["notes"][0]
    # Dimension scores are unaffected by the graph failure
    assert report.degraded_dimensions == []


def test_relationship_graph_not_degraded_on_success(sample_schema, sample_counts):
    graph = run_audit(sample_schema, sample_counts).relationship_graph
    assert not graph.degraded
    assert graph.notes == []


def test_every_dimension_score_reconstructs_from_breakdown(rich_schema, rich_counts, config):
    report = run_audit(rich_schema, rich_counts, config)
    assert report.degraded_dimensions == []
    assert list(report.dimensions) == ALL_DIMENSIONS
    for name, result in report.dimensions.items():
        card = result.card
        raw = card.base + sum(c.delta for c in card.breakdown())
        assert card.score == max(card.floor, min(card.ceiling, raw)), name
        assert report.category_scores[name] == card.score
    assert sum(1 for d in report.dimensions.values() if d.card.contributions) >= 8
