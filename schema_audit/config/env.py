"""
Environment variable loading for audit settings.

- AUDIT_MAX_PATH_DEPTH: models per chain explored by the deep-nesting search (default 6)
- AUDIT_MIN_REPORTED_DEPTH: shortest chain reported as a finding (default 4)
- AUDIT_MAX_FRONTIER: BFS frontier cap (default 500)
- AUDIT_MAX_EXPLORED_PER_START: paths popped per start model before the search stops (default 5000)
- AUDIT_MAX_PATHS_PER_START: retained paths per start model (default 20)
- AUDIT_MAX_TOTAL_PATHS: retained paths across all starts (default 50)
- AUDIT_HUGE_MODEL_FIELDS: field count above which a model is "huge" (default 25)
- Loads .env from project root when available.
"""

from __future__ import annotations

import os
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from schema_audit.audit_logging import get_logger
from schema_audit.config.settings import AuditConfig

logger = get_logger(__name__)

# Project root: config is schema_audit/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"


def load_audit_env() -> None:
    """Load .env from project root. Safe to call multiple times."""
    load_dotenv(_ENV_PATH)


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("config_env_invalid", variable=name, value=raw, default=default)
        return default
    if value < 1:
        logger.warning("config_env_out_of_range", variable=name, value=value, default=default)
        return default
    return value


def get_settings() -> AuditConfig:
    """
    Return the audit configuration for this process.

    Defaults come from AuditConfig; traversal caps and the huge-model
    threshold can be overridden from the environment.
    """
    load_audit_env()
    config = AuditConfig()
    traversal = replace(
        config.traversal,
        max_depth=_env_int("AUDIT_MAX_PATH_DEPTH", config.traversal.max_depth),
        min_reported_depth=_env_int(
            "AUDIT_MIN_REPORTED_DEPTH", config.traversal.min_reported_depth
        ),
        max_frontier=_env_int("AUDIT_MAX_FRONTIER", config.traversal.max_frontier),
        max_explored_per_start=_env_int(
            "AUDIT_MAX_EXPLORED_PER_START", config.traversal.max_explored_per_start
        ),
        max_paths_per_start=_env_int(
            "AUDIT_MAX_PATHS_PER_START", config.traversal.max_paths_per_start
        ),
        max_total_paths=_env_int("AUDIT_MAX_TOTAL_PATHS", config.traversal.max_total_paths),
    )
    performance = replace(
        config.performance,
        huge_model_fields=_env_int(
            "AUDIT_HUGE_MODEL_FIELDS", config.performance.huge_model_fields
        ),
    )
    return replace(config, traversal=traversal, performance=performance)
