"""
Pattern matchers: the single registry of name/value classification rules.
"""

from schema_audit.patterns.registry import (
    CLUSTER_ORDER,
    DEFAULT_REGISTRY,
    ENUM_ARCHITECTURE_PATTERNS,
    ENUM_CATEGORY_ORDER,
    FIELD_ROLE_ORDER,
    NODE_IMPORTANCE_ORDER,
    REGISTRY_VERSION,
    Matcher,
    PatternRegistry,
    PatternTag,
    build_default_registry,
    version_stem,
)

__all__ = [
    "CLUSTER_ORDER",
    "DEFAULT_REGISTRY",
    "ENUM_ARCHITECTURE_PATTERNS",
    "ENUM_CATEGORY_ORDER",
    "FIELD_ROLE_ORDER",
    "NODE_IMPORTANCE_ORDER",
    "REGISTRY_VERSION",
    "Matcher",
    "PatternRegistry",
    "PatternTag",
    "build_default_registry",
    "version_stem",
]
