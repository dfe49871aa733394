"""
Analysis engine package: shared algorithms behind every audit dimension.

Consumes the frozen Schema, applies duplicate detection, bounded traversal,
cycle detection and graph building, and scores results with itemized,
clamped contributions.
"""

from schema_audit.analysis_engine.cycles import CycleReport, find_cycles
from schema_audit.analysis_engine.duplicates import (
    BooleanToggle,
    DuplicateGroup,
    DuplicateKind,
    GroupingRule,
    find_boolean_toggles,
    find_duplicate_components,
    find_duplicate_enums,
    find_duplicate_models,
)
from schema_audit.analysis_engine.models import (
    AuditIssue,
    CheckpointExample,
    CheckpointResult,
    CheckpointStatus,
    Dimension,
    DimensionResult,
    Effort,
    Severity,
)
from schema_audit.analysis_engine.relationship_graph import (
    RelationshipGraph,
    build_relationship_graph,
)
from schema_audit.analysis_engine.scorer import (
    ScoreCard,
    ScoreContribution,
    status_penalty,
    weighted_average,
)
from schema_audit.analysis_engine.traversal import DeepPath, DeepPathReport, find_deep_paths

__all__ = [
    "AuditIssue",
    "BooleanToggle",
    "CheckpointExample",
    "CheckpointResult",
    "CheckpointStatus",
    "CycleReport",
    "DeepPath",
    "DeepPathReport",
    "Dimension",
    "DimensionResult",
    "DuplicateGroup",
    "DuplicateKind",
    "Effort",
    "GroupingRule",
    "RelationshipGraph",
    "ScoreCard",
    "ScoreContribution",
    "Severity",
    "build_relationship_graph",
    "find_boolean_toggles",
    "find_cycles",
    "find_deep_paths",
    "find_duplicate_components",
    "find_duplicate_enums",
    "find_duplicate_models",
    "status_penalty",
    "weighted_average",
]
