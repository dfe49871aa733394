"""
Bounded breadth-first search for deep reference chains.

A query that follows Page -> Section -> Card -> Image -> Asset has to resolve
five levels of nesting. This module finds such chains so the performance
dimension can flag them.

Search runs from every custom model in name order, along model -> model
reference edges only. A model already on the current path is never
revisited; cycles are the cycle detector's job. Every loop is capped
(frontier size, explored paths per start, depth). Retention caps (paths per
start, total paths, report limit) keep the longest chains. A cap that fires
is recorded in bounds_hit instead of raising.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Any

from schema_audit.analysis_engine.models import Severity
from schema_audit.audit_logging import get_logger
from schema_audit.config import TraversalLimits
from schema_audit.schema_graph import Schema

logger = get_logger(__name__)

BOUND_MAX_FRONTIER = "max_frontier"
BOUND_EXPLORED = "max_explored_per_start"
BOUND_PATHS_PER_START = "max_paths_per_start"
BOUND_TOTAL_PATHS = "max_total_paths"
BOUND_REPORT_LIMIT = "report_limit"


@dataclass(frozen=True)
class DeepPath:
    """One reference chain; depth is the number of models on it."""

    models: tuple[str, ...]
    severity: Severity
    mitigation: str

    @property
    def depth(self) -> int:
        return len(self.models)

    @property
    def query_complexity(self) -> str:
        return "high" if self.severity == Severity.CRITICAL else "medium"

    def to_dict(self) -> dict[str, Any]:
        return {
            "models": list(self.models),
            "path": " -> ".join(self.models),
            "depth": self.depth,
            "severity": self.severity.value,
            "query_complexity": self.query_complexity,
            "mitigation": self.mitigation,
        }


@dataclass
class DeepPathReport:
    paths: list[DeepPath] = field(default_factory=list)
    truncated: bool = False
    bounds_hit: list[str] = field(default_factory=list)
    explored: int = 0
    """Paths popped from the frontier across all starts."""

    @property
    def max_depth(self) -> int:
        return max((p.depth for p in self.paths), default=0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "paths": [p.to_dict() for p in self.paths],
            "truncated": self.truncated,
            "bounds_hit": list(self.bounds_hit),
            "explored": self.explored,
            "max_depth": self.max_depth,
        }


def _is_contiguous_run(short: tuple[str, ...], long: tuple[str, ...]) -> bool:
    n = len(short)
    return any(long[i:i + n] == short for i in range(len(long) - n + 1))


def _drop_contained(paths: list[tuple[str, ...]]) -> list[tuple[str, ...]]:
    """Remove chains that appear as a contiguous run inside a longer kept chain."""
    kept: list[tuple[str, ...]] = []
    for candidate in sorted(paths, key=len, reverse=True):
        if any(len(k) > len(candidate) and _is_contiguous_run(candidate, k) for k in kept):
            continue
        kept.append(candidate)
    return kept


def _classify(models: tuple[str, ...], limits: TraversalLimits) -> DeepPath:
    if len(models) >= limits.critical_depth:
        return DeepPath(
            models=models,
            severity=Severity.CRITICAL,
            mitigation=(
                f"Denormalize frequently read data or add a direct reference from "
                f"{models[0]} to {models[-1]}"
            ),
        )
    return DeepPath(
        models=models,
        severity=Severity.WARNING,
        mitigation="Query this chain with fragments and paginate nested lists",
    )


def _longest_from(
    start: str,
    adjacency: dict[str, list[str]],
    limits: TraversalLimits,
    bounds: set[str],
) -> tuple[list[tuple[str, ...]], int]:
    """
    The max_paths_per_start longest chains from one start model.

    BFS yields chains in non-decreasing length, so kept stays sorted and a
    full list evicts its shortest chain for a strictly longer one. Search
    ends when the frontier empties or max_explored_per_start paths were
    popped; the per-start cap never stops the search.
    """
    kept: deque[tuple[str, ...]] = deque()
    queue: deque[tuple[str, ...]] = deque([(start,)])
    explored = 0
    while queue:
        if explored >= limits.max_explored_per_start:
            bounds.add(BOUND_EXPLORED)
            break
        path = queue.popleft()
        explored += 1
        for neighbor in adjacency.get(path[-1], ()):
            if neighbor in path:
                continue
            extended = path + (neighbor,)
            if len(extended) >= limits.min_reported_depth:
                if len(kept) < limits.max_paths_per_start:
                    kept.append(extended)
                else:
                    bounds.add(BOUND_PATHS_PER_START)
                    if len(extended) > len(kept[0]):
                        kept.popleft()
                        kept.append(extended)
            if len(extended) < limits.max_depth:
                if len(queue) >= limits.max_frontier:
                    bounds.add(BOUND_MAX_FRONTIER)
                    continue
                queue.append(extended)
    return list(kept), explored


def find_deep_paths(schema: Schema, limits: TraversalLimits = TraversalLimits()) -> DeepPathReport:
    """
    Chains of at least min_reported_depth models, deepest first.

    Every cap keeps the longest chains and drops the shortest. Chains
    contained in a longer chain are dropped, and the list is cut to
    report_limit.
    """
    adjacency = schema.adjacency()
    report = DeepPathReport()
    bounds: set[str] = set()
    retained: list[tuple[str, ...]] = []

    for start in sorted(adjacency):
        chains, explored = _longest_from(start, adjacency, limits, bounds)
        report.explored += explored
        retained.extend(chains)

    retained.sort(key=lambda p: (-len(p), p))
    if len(retained) > limits.max_total_paths:
        bounds.add(BOUND_TOTAL_PATHS)
        retained = retained[: limits.max_total_paths]

    chains = _drop_contained(retained)
    chains.sort(key=lambda p: (-len(p), p))
    if len(chains) > limits.report_limit:
        bounds.add(BOUND_REPORT_LIMIT)
        chains = chains[: limits.report_limit]

    report.paths = [_classify(p, limits) for p in chains]
    report.bounds_hit = sorted(bounds)
    report.truncated = bool(bounds)
    if bounds:
        logger.warning("traversal_bound_hit", bounds=report.bounds_hit, retained=len(retained))
    logger.debug("deep_paths_found", paths=len(report.paths), explored=report.explored)
    return report
