"""
Relationship graph builder: renderable nodes, edges and clusters.

Responsibilities:
- Nodes for every custom model, components embedded by several models and
  enums that are architectural or widely used.
- Reference edges (a bidirectional pair collapses into one edge), component
  usage edges and enum usage edges.
- Node importance, archetype clusters, hubs and orphans.

Connection counts come from a NetworkX view of the collapsed reference edges;
component and enum edges do not count toward hub or orphan status.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import networkx as nx

from schema_audit.audit_logging import get_logger
from schema_audit.config import GraphThresholds
from schema_audit.patterns import (
    CLUSTER_ORDER,
    DEFAULT_REGISTRY,
    ENUM_ARCHITECTURE_PATTERNS,
    NODE_IMPORTANCE_ORDER,
    PatternRegistry,
    PatternTag,
)
from schema_audit.schema_graph import Direction, EntryCounts, ModelType, Schema, entries_for_model

logger = get_logger(__name__)

COMPONENT_PREFIX = "comp:"
ENUM_PREFIX = "enum:"


class NodeKind(str, Enum):
    MODEL = "model"
    COMPONENT = "component"
    ENUM = "enum"


class Importance(str, Enum):
    CORE = "core"
    SUPPORTING = "supporting"
    CONFIG = "config"
    UTILITY = "utility"


class EdgeKind(str, Enum):
    REFERENCE = "reference"
    BIDIRECTIONAL = "bidirectional"
    COMPONENT = "component"
    ENUM = "enum"


@dataclass
class RelationshipNode:
    id: str
    name: str
    kind: NodeKind
    importance: Importance
    description: str
    field_count: int
    entry_count: int | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "type": self.kind.value,
            "importance": self.importance.value,
            "description": self.description,
            "field_count": self.field_count,
        }
        if self.entry_count is not None:
            out["entry_count"] = self.entry_count
        return out


@dataclass
class RelationshipEdge:
    source: str
    target: str
    kind: EdgeKind
    field_name: str
    cardinality: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.source,
            "to": self.target,
            "type": self.kind.value,
            "field_name": self.field_name,
            "cardinality": self.cardinality,
        }


@dataclass
class RelationshipCluster:
    name: str
    description: str
    members: list[str]
    central_model: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "models": list(self.members),
            "central_model": self.central_model,
        }


@dataclass
class HubNode:
    model: str
    connection_count: int

    def to_dict(self) -> dict[str, Any]:
        return {"model": self.model, "connection_count": self.connection_count}


@dataclass
class RelationshipGraph:
    nodes: list[RelationshipNode] = field(default_factory=list)
    edges: list[RelationshipEdge] = field(default_factory=list)
    clusters: list[RelationshipCluster] = field(default_factory=list)
    core_models: list[str] = field(default_factory=list)
    orphaned_models: list[str] = field(default_factory=list)
    hub_models: list[HubNode] = field(default_factory=list)
    degraded: bool = False
    notes: list[str] = field(default_factory=list)

    def node(self, node_id: str) -> RelationshipNode | None:
        return next((n for n in self.nodes if n.id == node_id), None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
            "clusters": [c.to_dict() for c in self.clusters],
            "core_models": list(self.core_models),
            "orphaned_models": list(self.orphaned_models),
            "hub_models": [h.to_dict() for h in self.hub_models],
            "degraded": self.degraded,
            "notes": list(self.notes),
        }


def _referrer_counts(schema: Schema) -> dict[str, int]:
    """Model -> number of distinct other custom models referencing it."""
    referrers: dict[str, set[str]] = {}
    for edge in schema.relation_edges():
        if edge.source != edge.target:
            referrers.setdefault(edge.target, set()).add(edge.source)
    return {name: len(sources) for name, sources in referrers.items()}


def node_importance(
    model: ModelType,
    entry_count: int,
    referrers: int,
    thresholds: GraphThresholds,
    registry: PatternRegistry,
) -> Importance:
    """First rule of NODE_IMPORTANCE_ORDER that holds; utility otherwise."""
    rules = {
        "core-content-with-entries": lambda: entry_count > 0 and registry.matches(PatternTag.CORE_CONTENT, model.name),
        "configuration-name": lambda: registry.matches(PatternTag.CONFIGURATION, model.name),
        "high-entry-volume": lambda: entry_count > thresholds.core_entry_count,
        "highly-referenced": lambda: referrers >= thresholds.core_reference_count,
        "has-entries-or-referrers": lambda: entry_count > 0 or referrers >= 1,
    }
    for rule, importance in NODE_IMPORTANCE_ORDER:
        if rules[rule]():
            return Importance(importance)
    return Importance.UTILITY


def describe_model(model: ModelType, registry: PatternRegistry) -> str:
    """Inferred purpose from the archetype name rules, else the field count."""
    for tag, _cluster, _description in CLUSTER_ORDER:
        matcher = registry.first_match(tag, model.name)
        if matcher is not None and matcher.description:
            return matcher.description
    return f"{len(model.fields)} fields"


def is_architectural_enum(name: str, values: tuple[str, ...], thresholds: GraphThresholds, registry: PatternRegistry) -> bool:
    """Enum named like a brand/region/tenant/site axis with enough values to segment content."""
    if len(values) < thresholds.architectural_enum_min_values:
        return False
    return any(registry.matches(tag, name) for tag in ENUM_ARCHITECTURE_PATTERNS)


def build_relationship_graph(
    schema: Schema,
    entry_counts: EntryCounts,
    thresholds: GraphThresholds = GraphThresholds(),
    registry: PatternRegistry = DEFAULT_REGISTRY,
) -> RelationshipGraph:
    graph = RelationshipGraph()
    models = sorted(schema.custom_models(), key=lambda m: m.name)
    referrers = _referrer_counts(schema)
    entries = {m.name: entries_for_model(entry_counts, m).total for m in models}

    for model in models:
        graph.nodes.append(
            RelationshipNode(
                id=model.name,
                name=model.name,
                kind=NodeKind.MODEL,
                importance=node_importance(model, entries[model.name], referrers.get(model.name, 0), thresholds, registry),
                description=describe_model(model, registry),
                field_count=len(model.fields),
                entry_count=entries[model.name],
            )
        )

    # Components embedded by several models
    component_users: dict[str, list[str]] = {}
    for model in models:
        for f in model.fields:
            target = f.type_name if schema.component_by_name(f.type_name) else f.related_model
            if target is not None and schema.component_by_name(target) is not None:
                users = component_users.setdefault(target, [])
                if model.name not in users:
                    users.append(model.name)
    significant_components: set[str] = set()
    for component in sorted(schema.custom_components(), key=lambda c: c.name):
        usage = len(component_users.get(component.name, []))
        if usage < thresholds.component_min_usage:
            continue
        significant_components.add(component.name)
        graph.nodes.append(
            RelationshipNode(
                id=f"{COMPONENT_PREFIX}{component.name}",
                name=component.name,
                kind=NodeKind.COMPONENT,
                importance=Importance.CORE if usage >= thresholds.core_component_usage else Importance.SUPPORTING,
                description=f"Used in {usage} models",
                field_count=len(component.fields),
            )
        )

    enum_usage = schema.enum_usage()
    significant_enums: set[str] = set()
    for enum in sorted(schema.custom_enums(), key=lambda e: e.name):
        usage = len(enum_usage.get(enum.name, []))
        architectural = is_architectural_enum(enum.name, enum.values, thresholds, registry)
        if not architectural and usage < thresholds.enum_min_usage:
            continue
        significant_enums.add(enum.name)
        graph.nodes.append(
            RelationshipNode(
                id=f"{ENUM_PREFIX}{enum.name}",
                name=enum.name,
                kind=NodeKind.ENUM,
                importance=Importance.CORE if architectural else Importance.CONFIG,
                description=f"{len(enum.values)} values",
                field_count=len(enum.values),
            )
        )

    # Reference edges, one per unordered model pair
    G = nx.DiGraph()
    G.add_nodes_from(m.name for m in models)
    linked_pairs: set[frozenset[str]] = set()
    for edge in schema.relation_edges():
        pair = frozenset((edge.source, edge.target))
        if pair in linked_pairs:
            continue
        linked_pairs.add(pair)
        bidirectional = edge.direction == Direction.BIDIRECTIONAL
        graph.edges.append(
            RelationshipEdge(
                source=edge.source,
                target=edge.target,
                kind=EdgeKind.BIDIRECTIONAL if bidirectional else EdgeKind.REFERENCE,
                field_name=edge.via_field,
                cardinality=edge.cardinality.value,
            )
        )
        G.add_edge(edge.source, edge.target)

    for owner in models:
        seen_targets: set[str] = set()
        for f in owner.fields:
            component = f.type_name if f.type_name in significant_components else f.related_model
            if component in significant_components:
                target_id = f"{COMPONENT_PREFIX}{component}"
                kind = EdgeKind.COMPONENT
            elif f.type_name in significant_enums:
                target_id = f"{ENUM_PREFIX}{f.type_name}"
                kind = EdgeKind.ENUM
            else:
                continue
            if target_id in seen_targets:
                continue
            seen_targets.add(target_id)
            graph.edges.append(
                RelationshipEdge(
                    source=owner.name,
                    target=target_id,
                    kind=kind,
                    field_name=f.name,
                    cardinality="one-to-many" if f.is_list else "one-to-one",
                )
            )

    degree = dict(G.degree())
    for tag, cluster_name, description in CLUSTER_ORDER:
        members = [m.name for m in models if registry.matches(tag, m.name)]
        if members:
            graph.clusters.append(
                RelationshipCluster(
                    name=cluster_name,
                    description=description,
                    members=members,
                    central_model=max(members, key=lambda n: (degree.get(n, 0), entries.get(n, 0), n)),
                )
            )

    graph.core_models = [
        n.id
        for n in graph.nodes
        if n.kind == NodeKind.MODEL
        and (n.importance == Importance.CORE or degree.get(n.id, 0) >= thresholds.hub_min_degree)
    ]
    graph.orphaned_models = [
        m.name
        for m in models
        if degree.get(m.name, 0) == 0 and entries[m.name] < thresholds.orphan_max_entries
    ]
    ranked = sorted(
        ((name, d) for name, d in degree.items() if d >= thresholds.hub_min_degree),
        key=lambda item: (-item[1], item[0]),
    )
    graph.hub_models = [HubNode(model=name, connection_count=d) for name, d in ranked[: thresholds.hub_limit]]

    logger.debug(
        "relationship_graph_built",
        nodes=len(graph.nodes),
        edges=len(graph.edges),
        clusters=len(graph.clusters),
        hubs=len(graph.hub_models),
    )
    return graph
