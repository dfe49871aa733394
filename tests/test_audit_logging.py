"""
Tests for audit logging: JSON record shape, level parsing and run-scoped context.
"""

from __future__ import annotations

import json

import structlog
from structlog.testing import capture_logs

from schema_audit.audit_logging import get_logger, run_context
from schema_audit.audit_logging.logger import (
    RUN_LOGGER_NAME,
    build_processors,
    event_to_event_type,
    level_from_env,
)
from schema_audit.report import run_audit


def _render(fmt: str, event_dict: dict):
    for processor in build_processors(fmt):
        event_dict = processor(None, "warning", event_dict)
    return event_dict


def test_json_record_carries_event_type_level_and_timestamp():
    line = _render("json", {"event": "cycle_bound_hit", "logger": "schema_audit.cycles", "max_cycles": 5})
    record = json.loads(line)
    assert record["event_type"] == "cycle_bound_hit"
    assert record["message"] == "cycle_bound_hit"
    assert record["level"] == "warning"
    assert record["max_cycles"] == 5
    assert record["timestamp"].endswith("Z")
    assert "event" not in record


def test_explicit_message_is_kept():
    out = event_to_event_type(None, "info", {"event": "audit_started", "message": "starting"})
    assert out == {"event_type": "audit_started", "message": "starting"}


def test_console_format_leaves_event_key_for_renderer():
    assert event_to_event_type not in build_processors("console")
    assert event_to_event_type in build_processors("json")


def test_level_from_env(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert level_from_env() == 10
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    assert level_from_env() == 20


def test_module_logger_binds_its_name():
    with capture_logs() as logs:
        get_logger("schema_audit.tests").info("fixture_loaded", models=3)
    assert logs == [{"event": "fixture_loaded", "log_level": "info", "logger": "schema_audit.tests", "models": 3}]


def test_run_context_scopes_contextvars():
    with run_context("abc123", source="cli"):
        assert structlog.contextvars.get_contextvars() == {"run_id": "abc123", "source": "cli"}
    assert "run_id" not in structlog.contextvars.get_contextvars()


def test_audit_run_events_share_one_run_id(sample_schema, sample_counts):
    with capture_logs() as logs:
        run_audit(sample_schema, sample_counts)
    run_events = [e for e in logs if e.get("logger") == RUN_LOGGER_NAME]
    assert [e["event"] for e in run_events] == ["audit_started", "audit_completed"]
    assert run_events[0]["run_id"] == run_events[1]["run_id"]
    assert len(run_events[0]["run_id"]) == 12
