"""
Tests for the schema-audit command: report output and input error exit codes.
"""

from __future__ import annotations

import json

from schema_audit.cli import EXIT_INPUT_ERROR, EXIT_OK, main


def _write(path, payload) -> str:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def test_writes_report_to_output_file(tmp_path, sample_payload):
    schema_path = _write(tmp_path / "schema.json", sample_payload)
    counts_path = _write(tmp_path / "counts.json", {"Article": {"draft": 2, "published": 10}})
    output = tmp_path / "report.json"

    code = main([schema_path, "--entry-counts", counts_path, "--output", str(output), "--pretty"])

    assert code == EXIT_OK
    report = json.loads(output.read_text(encoding="utf-8"))
    assert 0 <= report["overall_score"] <= 100
    assert report["executive_summary"]["metrics"]["content_entries"] == 12


def test_prints_report_to_stdout(tmp_path, sample_payload, capsys):
    schema_path = _write(tmp_path / "schema.json", sample_payload)
    assert main([schema_path]) == EXIT_OK
    report = json.loads(capsys.readouterr().out)
    assert set(report["category_scores"]) == {
        "structure",
        "components",
        "content",
        "performance",
        "relationships",
        "enum-architecture",
        "duplicates",
        "best-practices",
        "localization",
        "seo",
    }


def test_missing_file_exits_2(tmp_path, capsys):
    assert main([str(tmp_path / "missing.json")]) == EXIT_INPUT_ERROR
    assert "schema-audit:" in capsys.readouterr().err


def test_malformed_json_exits_2(tmp_path):
    path = tmp_path / "schema.json"
    path.write_text("{not json", encoding="utf-8")
    assert main([str(path)]) == EXIT_INPUT_ERROR


def test_invalid_schema_exits_2(tmp_path):
    path = _write(tmp_path / "schema.json", {"models": [{"fields": "nope"}]})
    assert main([path]) == EXIT_INPUT_ERROR


def test_invalid_entry_counts_exit_2(tmp_path, sample_payload):
    schema_path = _write(tmp_path / "schema.json", sample_payload)
    counts_path = _write(tmp_path / "counts.json", {"Article": {"draft": -1}})
    assert main([schema_path, "--entry-counts", counts_path]) == EXIT_INPUT_ERROR


def test_non_utf8_file_exits_2(tmp_path, capsys):
    path = tmp_path / "schema.json"
    path.write_bytes(b"\xff\xfe{\x80\x81")
    assert main([str(path)]) == EXIT_INPUT_ERROR
    assert "schema-audit:" in capsys.readouterr().err
