"""
Configuration for the schema audit engine.

Typed threshold dataclasses plus environment overrides. Exposes a single
source of truth for every cap, threshold and weight the analyzers use.
"""

from schema_audit.config.env import get_settings, load_audit_env
from schema_audit.config.settings import (
    DEFAULT_CATEGORY_WEIGHTS,
    EMPTY_SCHEMA_SCORE,
    UNIVERSAL_FIELDS,
    AuditConfig,
    ComponentThresholds,
    ContentThresholds,
    DuplicateThresholds,
    EnumThresholds,
    GraphThresholds,
    LocalizationThresholds,
    PerformanceThresholds,
    SeoThresholds,
    StrengthThresholds,
    StructureThresholds,
    TraversalLimits,
)

__all__ = [
    "DEFAULT_CATEGORY_WEIGHTS",
    "EMPTY_SCHEMA_SCORE",
    "UNIVERSAL_FIELDS",
    "AuditConfig",
    "ComponentThresholds",
    "ContentThresholds",
    "DuplicateThresholds",
    "EnumThresholds",
    "GraphThresholds",
    "LocalizationThresholds",
    "PerformanceThresholds",
    "SeoThresholds",
    "StrengthThresholds",
    "StructureThresholds",
    "TraversalLimits",
    "get_settings",
    "load_audit_env",
]
