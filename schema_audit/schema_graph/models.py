"""
Immutable in-memory view of an introspected content schema.

Responsibilities:
- Hold models, components and enums as frozen value objects.
- Provide O(1) name lookup (model_by_name, enum_by_name, fields_of).
- Derive relation edges on demand; dangling targets mean "no relation".
- Apply system filters so analyzers only see user-defined types.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from schema_audit.patterns import DEFAULT_REGISTRY, PatternRegistry
from schema_audit.schema_graph.system_filters import (
    is_system_component,
    is_system_enum,
    is_system_model,
)

SCALAR_TYPES = frozenset({
    "String",
    "Int",
    "Float",
    "Boolean",
    "ID",
    "DateTime",
    "Date",
    "Json",
    "JSON",
    "Long",
    "RichText",
    "Color",
    "Location",
    "RGBA",
})


class Cardinality(str, Enum):
    ONE_TO_ONE = "one-to-one"
    ONE_TO_MANY = "one-to-many"


class Direction(str, Enum):
    ONE_WAY = "one-way"
    BIDIRECTIONAL = "bidirectional"


@dataclass(frozen=True)
class Field:
    """Single field of a model or component."""

    name: str
    type_name: str
    is_required: bool = False
    is_list: bool = False
    is_unique: bool = False
    related_model: str | None = None
    """Reference target; may name a type absent from the schema."""
    enum_values: tuple[str, ...] | None = None
    description: str | None = None

    @property
    def is_enum(self) -> bool:
        return self.enum_values is not None

    @property
    def is_scalar(self) -> bool:
        return self.related_model is None and self.type_name in SCALAR_TYPES

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "name": self.name,
            "type": self.type_name,
            "is_required": self.is_required,
            "is_list": self.is_list,
            "is_unique": self.is_unique,
        }
        if self.related_model is not None:
            out["related_model"] = self.related_model
        if self.enum_values is not None:
            out["enum_values"] = list(self.enum_values)
        return out


@dataclass(frozen=True)
class ModelType:
    """Content model or embeddable component (is_component=True)."""

    name: str
    fields: tuple[Field, ...] = ()
    is_component: bool = False
    is_system: bool = False
    api_id: str | None = None
    plural_api_id: str | None = None

    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)


@dataclass(frozen=True)
class EnumType:
    name: str
    values: tuple[str, ...] = ()


@dataclass(frozen=True)
class RelationEdge:
    """Derived reference edge between two known models."""

    source: str
    target: str
    via_field: str
    cardinality: Cardinality
    direction: Direction

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "target": self.target,
            "via_field": self.via_field,
            "cardinality": self.cardinality.value,
            "direction": self.direction.value,
        }


@dataclass(frozen=True)
class EntryCount:
    draft: int = 0
    published: int = 0

    @property
    def total(self) -> int:
        return self.draft + self.published


EntryCounts = Mapping[str, EntryCount]

_ZERO_ENTRIES = EntryCount()


def entries_for(counts: EntryCounts, name: str) -> EntryCount:
    """Entry count for a model; unknown names read as zero."""
    return counts.get(name, _ZERO_ENTRIES)


@dataclass(frozen=True)
class Schema:
    """
    Read-only schema built once per run.

    Use Schema.from_types(); the name indexes are populated there and never
    change afterwards.
    """

    models: tuple[ModelType, ...] = ()
    components: tuple[ModelType, ...] = ()
    enums: tuple[EnumType, ...] = ()
    registry: PatternRegistry = field(default=DEFAULT_REGISTRY, repr=False, compare=False)
    _models_by_name: dict[str, ModelType] = field(default_factory=dict, repr=False, compare=False)
    _components_by_name: dict[str, ModelType] = field(default_factory=dict, repr=False, compare=False)
    _enums_by_name: dict[str, EnumType] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_types(
        cls,
        models: Iterable[ModelType] = (),
        components: Iterable[ModelType] = (),
        enums: Iterable[EnumType] = (),
        registry: PatternRegistry = DEFAULT_REGISTRY,
    ) -> Schema:
        models_t = tuple(models)
        components_t = tuple(components)
        enums_t = tuple(enums)
        # First declaration wins on duplicate names
        by_model: dict[str, ModelType] = {}
        for m in models_t:
            by_model.setdefault(m.name, m)
        by_component: dict[str, ModelType] = {}
        for c in components_t:
            by_component.setdefault(c.name, c)
        by_enum: dict[str, EnumType] = {}
        for e in enums_t:
            by_enum.setdefault(e.name, e)
        return cls(
            models=models_t,
            components=components_t,
            enums=enums_t,
            registry=registry,
            _models_by_name=by_model,
            _components_by_name=by_component,
            _enums_by_name=by_enum,
        )

    @property
    def is_empty(self) -> bool:
        return not (self.models or self.components or self.enums)

    def model_by_name(self, name: str | None) -> ModelType | None:
        if name is None:
            return None
        return self._models_by_name.get(name)

    def component_by_name(self, name: str | None) -> ModelType | None:
        if name is None:
            return None
        return self._components_by_name.get(name)

    def type_by_name(self, name: str | None) -> ModelType | None:
        """Model or component with this name; models take precedence."""
        return self.model_by_name(name) or self.component_by_name(name)

    def enum_by_name(self, name: str | None) -> EnumType | None:
        if name is None:
            return None
        return self._enums_by_name.get(name)

    def fields_of(self, name: str) -> tuple[Field, ...]:
        found = self.type_by_name(name)
        return found.fields if found is not None else ()

    def custom_models(self) -> tuple[ModelType, ...]:
        return tuple(m for m in self.models if not is_system_model(m, self.registry))

    def custom_components(self) -> tuple[ModelType, ...]:
        return tuple(c for c in self.components if not is_system_component(c.name, self.registry))

    def custom_enums(self) -> tuple[EnumType, ...]:
        return tuple(e for e in self.enums if not is_system_enum(e.name, self.registry))

    def is_custom_model(self, name: str | None) -> bool:
        model = self.model_by_name(name)
        return model is not None and not is_system_model(model, self.registry)

    def reference_fields(self, model: ModelType, include_system: bool = False) -> Iterator[Field]:
        """Fields of model pointing to a known model; dangling targets are skipped."""
        for f in model.fields:
            if f.related_model is None:
                continue
            if include_system:
                if self.model_by_name(f.related_model) is None:
                    continue
            elif not self.is_custom_model(f.related_model):
                continue
            yield f

    def relation_edges(self, include_system: bool = False) -> list[RelationEdge]:
        """
        Reference edges between models.

        A pair of models that reference each other yields two edges, both
        marked bidirectional. Edges are ordered by (source, via_field).
        """
        sources = self.models if include_system else self.custom_models()
        raw: list[tuple[str, str, str, bool]] = []
        for model in sorted(sources, key=lambda m: m.name):
            for f in self.reference_fields(model, include_system=include_system):
                raw.append((model.name, f.related_model or "", f.name, f.is_list))
        pairs = {(src, dst) for src, dst, _, _ in raw}
        edges: list[RelationEdge] = []
        for src, dst, via, is_list in raw:
            edges.append(
                RelationEdge(
                    source=src,
                    target=dst,
                    via_field=via,
                    cardinality=Cardinality.ONE_TO_MANY if is_list else Cardinality.ONE_TO_ONE,
                    direction=(
                        Direction.BIDIRECTIONAL
                        if src != dst and (dst, src) in pairs
                        else Direction.ONE_WAY
                    ),
                )
            )
        return edges

    def adjacency(self) -> dict[str, list[str]]:
        """Custom model -> sorted distinct custom reference targets."""
        out: dict[str, set[str]] = {m.name: set() for m in self.custom_models()}
        for edge in self.relation_edges():
            out.setdefault(edge.source, set()).add(edge.target)
        return {name: sorted(targets) for name, targets in out.items()}

    def enum_usage(self) -> dict[str, list[str]]:
        """Enum name -> sorted names of types (models and components) that use it."""
        usage: dict[str, set[str]] = {}
        for owner in (*self.models, *self.components):
            for f in owner.fields:
                if self.enum_by_name(f.type_name) is not None:
                    usage.setdefault(f.type_name, set()).add(owner.name)
        return {name: sorted(users) for name, users in usage.items()}

    def component_usage(self) -> dict[str, list[str]]:
        """Custom component name -> sorted names of types embedding it."""
        usage: dict[str, set[str]] = {c.name: set() for c in self.custom_components()}
        for owner in (*self.custom_models(), *self.custom_components()):
            for f in owner.fields:
                target = f.related_model or f.type_name
                if target in usage and target != owner.name:
                    usage[target].add(owner.name)
        return {name: sorted(users) for name, users in usage.items()}


def entries_for_model(counts: EntryCounts, model: ModelType) -> EntryCount:
    """Entry count by model name, falling back to its plural API id."""
    if model.name in counts:
        return counts[model.name]
    if model.plural_api_id and model.plural_api_id in counts:
        return counts[model.plural_api_id]
    return _ZERO_ENTRIES
