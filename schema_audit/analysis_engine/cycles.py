"""
Circular reference detection over the model reference graph.

Mutual pairs and self references are read from the relation edges, so they
are never lost to a cap. Longer cycles come from a NetworkX DiGraph of custom
models, enumerated by increasing length up to max_cycle_length. Each cycle
is rotated so its smallest model name comes first, which makes A -> B -> A
and B -> A -> B the same finding no matter where enumeration started.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import networkx as nx

from schema_audit.audit_logging import get_logger
from schema_audit.config import TraversalLimits
from schema_audit.schema_graph import Schema

logger = get_logger(__name__)


@dataclass
class CycleReport:
    bidirectional_pairs: list[tuple[str, str]] = field(default_factory=list)
    chains: list[tuple[str, ...]] = field(default_factory=list)
    """Cycles through three or more models."""
    self_references: list[str] = field(default_factory=list)
    truncated: bool = False

    @property
    def total(self) -> int:
        return len(self.bidirectional_pairs) + len(self.chains) + len(self.self_references)

    def to_dict(self) -> dict[str, Any]:
        return {
            "bidirectional_pairs": [list(p) for p in self.bidirectional_pairs],
            "chains": [list(c) + [c[0]] for c in self.chains],
            "self_references": list(self.self_references),
            "truncated": self.truncated,
        }


def build_reference_digraph(schema: Schema) -> nx.DiGraph:
    """Directed graph: custom model -> referenced custom model."""
    G = nx.DiGraph()
    G.add_nodes_from(sorted(m.name for m in schema.custom_models()))
    for edge in schema.relation_edges():
        if G.has_edge(edge.source, edge.target):
            G[edge.source][edge.target]["fields"].append(edge.via_field)
        else:
            G.add_edge(edge.source, edge.target, fields=[edge.via_field])
    return G


def canonical_rotation(cycle: list[str]) -> tuple[str, ...]:
    """Rotate so the smallest name leads; direction is preserved."""
    pivot = cycle.index(min(cycle))
    return tuple(cycle[pivot:] + cycle[:pivot])


def _pairs_and_self_references(schema: Schema) -> tuple[list[tuple[str, str]], list[str]]:
    """Every mutual pair and self reference, straight from the relation edges."""
    linked = {(e.source, e.target) for e in schema.relation_edges()}
    pairs = sorted((a, b) for a, b in linked if a < b and (b, a) in linked)
    self_references = sorted(a for a, b in linked if a == b)
    return pairs, self_references


def _chains(G: nx.DiGraph, limits: TraversalLimits) -> tuple[list[tuple[str, ...]], bool]:
    """
    Cycles of three or more models, shortest lengths first.

    Each round enumerates cycles up to the current length and keeps the new
    ones; the cap therefore always cuts the longest cycles.
    """
    chains: set[tuple[str, ...]] = set()
    for length in range(3, limits.max_cycle_length + 1):
        for cycle in nx.simple_cycles(G, length_bound=length):
            if len(cycle) != length:
                continue
            if len(chains) >= limits.max_cycles:
                return sorted(chains, key=lambda c: (len(c), c)), True
            chains.add(canonical_rotation(cycle))
    return sorted(chains, key=lambda c: (len(c), c)), False


def find_cycles(schema: Schema, limits: TraversalLimits = TraversalLimits()) -> CycleReport:
    """
    Bidirectional pairs and self references (always complete) plus circular
    chains of three or more models up to max_cycle_length (capped).
    """
    report = CycleReport()
    report.bidirectional_pairs, report.self_references = _pairs_and_self_references(schema)
    report.chains, report.truncated = _chains(build_reference_digraph(schema), limits)
    if report.truncated:
        logger.warning("cycle_bound_hit", max_cycles=limits.max_cycles)
    if report.total:
        logger.info(
            "cycles_detected",
            pairs=len(report.bidirectional_pairs),
            chains=len(report.chains),
            self_references=len(report.self_references),
        )
    return report
