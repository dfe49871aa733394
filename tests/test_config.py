"""
Tests for audit settings: defaults, environment overrides and invalid values.
"""

from __future__ import annotations

import pytest

from schema_audit.config import AuditConfig, get_settings

OVERRIDES = (
    "AUDIT_MAX_PATH_DEPTH",
    "AUDIT_MIN_REPORTED_DEPTH",
    "AUDIT_MAX_FRONTIER",
    "AUDIT_MAX_EXPLORED_PER_START",
    "AUDIT_MAX_PATHS_PER_START",
    "AUDIT_MAX_TOTAL_PATHS",
    "AUDIT_HUGE_MODEL_FIELDS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in OVERRIDES:
        monkeypatch.delenv(name, raising=False)


def test_defaults_match_audit_config():
    assert get_settings() == AuditConfig()


def test_default_thresholds():
    config = AuditConfig()
    assert config.traversal.max_depth == 6
    assert config.traversal.min_reported_depth == 4
    assert config.traversal.critical_depth == 5
    assert config.duplicates.version_similarity == 90
    assert config.empty_schema_score == 100
    assert config.category_weights["performance"] == 1.2
    assert set(config.category_weights) == {
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


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("AUDIT_MAX_PATH_DEPTH", "8")
    monkeypatch.setenv("AUDIT_MAX_TOTAL_PATHS", "25")
    monkeypatch.setenv("AUDIT_MAX_EXPLORED_PER_START", "800")
    monkeypatch.setenv("AUDIT_HUGE_MODEL_FIELDS", "30")
    config = get_settings()
    assert config.traversal.max_depth == 8
    assert config.traversal.max_total_paths == 25
    assert config.traversal.max_explored_per_start == 800
    assert config.performance.huge_model_fields == 30
    # Untouched values keep their defaults
    assert config.traversal.max_frontier == AuditConfig().traversal.max_frontier


@pytest.mark.parametrize("raw", ["deep", "0", "-3"])
def test_invalid_env_value_falls_back_to_default(monkeypatch, raw):
    monkeypatch.setenv("AUDIT_MAX_FRONTIER", raw)
    assert get_settings().traversal.max_frontier == AuditConfig().traversal.max_frontier
