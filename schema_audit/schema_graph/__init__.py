"""
Schema graph model: frozen schema value objects, system filters, input loader.
"""

from schema_audit.schema_graph.loader import SchemaLoadError, load_entry_counts, load_schema
from schema_audit.schema_graph.models import (
    Cardinality,
    Direction,
    EntryCount,
    EntryCounts,
    EnumType,
    Field,
    ModelType,
    RelationEdge,
    Schema,
    entries_for,
    entries_for_model,
)

__all__ = [
    "Cardinality",
    "Direction",
    "EntryCount",
    "EntryCounts",
    "EnumType",
    "Field",
    "ModelType",
    "RelationEdge",
    "Schema",
    "SchemaLoadError",
    "entries_for",
    "entries_for_model",
    "load_entry_counts",
    "load_schema",
]
