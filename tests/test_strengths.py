"""
Tests for the strengths section: positive patterns and grouped highlights.
"""

from __future__ import annotations

from schema_audit.report import find_strengths, run_audit
from schema_audit.schema_graph import Field, ModelType, Schema


def _ref(name: str, target: str) -> Field:
    return Field(name=name, type_name=target, related_model=target)


def test_rich_schema_strengths(rich_schema, rich_counts, config):
    report = find_strengths(rich_schema, rich_counts, config)
    assert report.ids() == [
        "thoughtful-content-taxonomy",
        "seo-content-metadata",
        "bidirectional-relations",
        "enum-styling-control",
        "active-content-platform",
    ]
    by_id = {s.id: s for s in report.strengths}
    assert by_id["thoughtful-content-taxonomy"].examples == ["Category"]
    assert by_id["seo-content-metadata"].examples == ["Seo component"]
    assert by_id["enum-styling-control"].examples == ["ButtonColor"]
    assert report.component_highlights == ["Rich content blocks: Hero"]
    assert report.architecture_highlights == ["87% content published - healthy publishing workflow"]


def test_tenancy_models_need_referrers(config):
    schema = Schema.from_types([
        ModelType(name="Brand", fields=(Field(name="title", type_name="String"),)),
        ModelType(name="Site", fields=(Field(name="title", type_name="String"),)),
        ModelType(name="Article", fields=(_ref("brand", "Brand"), _ref("site", "Site"))),
        ModelType(name="Product", fields=(_ref("brand", "Brand"), _ref("site", "Site"))),
        ModelType(name="Form", fields=(Field(name="title", type_name="String"),)),
    ])
    report = find_strengths(schema, {}, config)
    assert report.ids() == ["multi-brand-support", "multi-site-support", "comprehensive-form-architecture"]
    assert report.strengths[2].description == "Dedicated Form model with proper field structure."

    lonely = Schema.from_types([
        ModelType(name="Brand", fields=(Field(name="title", type_name="String"),)),
        ModelType(name="Article", fields=(_ref("brand", "Brand"),)),
    ])
    assert "multi-brand-support" not in find_strengths(lonely, {}, config).ids()


def test_report_carries_strengths(rich_schema, rich_counts, empty_schema):
    payload = run_audit(rich_schema, rich_counts).to_dict()
    assert payload["strengths"]["strengths"]
    assert run_audit(empty_schema).to_dict()["strengths"]["strengths"] == []
