"""
Components dimension: reuse of embeddable components.

Responsibilities:
- Build the component usage map and list unused components.
- Measure component nesting depth with a bounded, memoized walk.
- Find field groups repeated across models that should become components,
  both well-known groups (SEO, address, ...) and ad-hoc three-field
  combinations.
- Surface duplicate components from the similarity detector.

The dimension floor is 20: a schema that never adopted components is
penalized, not zeroed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import combinations
from typing import Any

from schema_audit.analysis_engine.duplicates import DuplicateGroup, find_duplicate_components
from schema_audit.analysis_engine.models import (
    AuditIssue,
    CheckpointResult,
    CheckpointStatus,
    Dimension,
    DimensionResult,
    Effort,
    Severity,
    status_for_count,
)
from schema_audit.analysis_engine.scorer import ScoreCard
from schema_audit.analyzers.common import example, issue_id, preview
from schema_audit.audit_logging import get_logger
from schema_audit.config import AuditConfig, ComponentThresholds
from schema_audit.patterns import DEFAULT_REGISTRY, PatternRegistry
from schema_audit.schema_graph import EntryCounts, Schema

logger = get_logger(__name__)

COMPONENT_SCORE_FLOOR = 20

PENALTY_UNUSED = 3
PENALTY_PATTERN = 8
PENALTY_DEEP_NESTING = 5
PENALTY_DUPLICATE_COMPONENT = 5
BONUS_WELL_REUSED = 2
BONUS_COMPONENTS_AVAILABLE = 5

COMMON_FIELD_PATTERNS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Content Card", ("title", "description", "image")),
    ("SEO", ("metaTitle", "metaDescription", "ogImage")),
    ("Sluggable Content", ("title", "slug")),
    ("Contact Info", ("name", "email", "phone")),
    ("Address", ("street", "city", "country", "postalCode")),
    ("Link/CTA", ("label", "url", "icon")),
    ("Text Block", ("heading", "subheading", "body")),
)

# Platform bookkeeping fields never form a reusable group
BOOKKEEPING_FIELDS = frozenset({
    "id",
    "createdat",
    "updatedat",
    "publishedat",
    "createdby",
    "updatedby",
    "publishedby",
    "stage",
    "locale",
    "localizations",
    "documentinstages",
    "history",
    "scheduledin",
})


@dataclass
class ComponentUsage:
    name: str
    used_in: list[str]
    field_count: int
    nesting_depth: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "used_in": list(self.used_in),
            "field_count": self.field_count,
            "nesting_depth": self.nesting_depth,
        }


@dataclass
class FieldPattern:
    """Field group repeated across models."""

    fields: list[str]
    models: list[str]
    name: str | None = None

    @property
    def recommendation(self) -> str:
        if self.name:
            return f'Extract these fields to a reusable "{self.name}" component'
        return f"Consider extracting [{', '.join(self.fields)}] to a reusable component"

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "fields": list(self.fields),
            "models": list(self.models),
            "recommendation": self.recommendation,
        }


@dataclass
class ComponentFacts:
    components: list[ComponentUsage] = field(default_factory=list)
    unused: list[str] = field(default_factory=list)
    deep_nested: list[str] = field(default_factory=list)
    well_reused: list[str] = field(default_factory=list)
    patterns: list[FieldPattern] = field(default_factory=list)
    duplicate_groups: list[DuplicateGroup] = field(default_factory=list)
    reuse_score: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "components": [c.to_dict() for c in self.components],
            "unused": list(self.unused),
            "deep_nested": list(self.deep_nested),
            "well_reused": list(self.well_reused),
            "field_patterns": [p.to_dict() for p in self.patterns],
            "duplicate_components": [g.to_dict() for g in self.duplicate_groups],
            "reuse_score": round(self.reuse_score, 1),
        }


def nesting_depths(schema: Schema, limit: int) -> dict[str, int]:
    """
    Component -> levels of component nesting (a flat component is 1).

    Self-embedding and cycles count once; depth never exceeds limit.
    """
    components = {c.name: c for c in schema.custom_components()}
    memo: dict[str, int] = {}

    def depth(name: str, visiting: frozenset[str]) -> int:
        if name in memo:
            return memo[name]
        if len(visiting) >= limit:
            return 1
        deepest = 0
        for f in components[name].fields:
            child = f.related_model or f.type_name
            if child in components and child not in visiting:
                deepest = max(deepest, depth(child, visiting | {child}))
        result = min(limit, 1 + deepest)
        memo[name] = result
        return result

    return {name: depth(name, frozenset({name})) for name in sorted(components)}


def _field_lookup(model) -> dict[str, str]:
    """Lowercased field name -> declared name."""
    return {f.name.lower(): f.name for f in model.fields}


def find_field_patterns(schema: Schema, thresholds: ComponentThresholds) -> list[FieldPattern]:
    models = sorted(schema.custom_models(), key=lambda m: m.name)
    lookups = {m.name: _field_lookup(m) for m in models}
    patterns: list[FieldPattern] = []

    for label, wanted in COMMON_FIELD_PATTERNS:
        found = [name for name, fields in lookups.items() if all(w.lower() in fields for w in wanted)]
        if len(found) >= 2:
            patterns.append(FieldPattern(fields=list(wanted), models=found, name=label))

    combos: dict[tuple[str, ...], list[str]] = {}
    for model in models:
        scalar = sorted(
            {f.name.lower() for f in model.fields if f.related_model is None and f.name.lower() not in BOOKKEEPING_FIELDS}
        )[: thresholds.pattern_field_limit]
        for combo in combinations(scalar, 3):
            combos.setdefault(combo, []).append(model.name)

    covered = [frozenset(w.lower() for w in p.fields) for p in patterns]
    # Combinations found in exactly the same models describe one field group
    merged: dict[tuple[str, ...], set[str]] = {}
    for combo, owners in combos.items():
        if len(owners) < thresholds.pattern_min_models:
            continue
        if any(c <= frozenset(combo) for c in covered):
            continue
        merged.setdefault(tuple(owners), set()).update(combo)

    for owners, keys in sorted(merged.items(), key=lambda item: (-len(item[0]), sorted(item[1]))):
        display = lookups[owners[0]]
        patterns.append(FieldPattern(fields=[display[k] for k in sorted(keys)], models=list(owners)))
    return patterns


def detect_components(schema: Schema, config: AuditConfig) -> ComponentFacts:
    thresholds = config.components
    facts = ComponentFacts()
    usage = schema.component_usage()
    depths = nesting_depths(schema, thresholds.nesting_search_limit)

    for component in sorted(schema.custom_components(), key=lambda c: c.name):
        used_in = usage.get(component.name, [])
        facts.components.append(
            ComponentUsage(
                name=component.name,
                used_in=used_in,
                field_count=len(component.fields),
                nesting_depth=depths.get(component.name, 1),
            )
        )
    facts.unused = [c.name for c in facts.components if not c.used_in]
    facts.deep_nested = [c.name for c in facts.components if c.nesting_depth > thresholds.max_nesting]
    facts.well_reused = [c.name for c in facts.components if len(c.used_in) >= thresholds.well_reused_min_users]
    facts.patterns = find_field_patterns(schema, thresholds)
    facts.duplicate_groups = find_duplicate_components(schema.custom_components(), config.duplicates)
    if facts.components:
        avg_usage = sum(len(c.used_in) for c in facts.components) / len(facts.components)
        facts.reuse_score = min(100.0, avg_usage * 25)
    return facts


def score_components(facts: ComponentFacts) -> ScoreCard:
    card = ScoreCard(floor=COMPONENT_SCORE_FLOOR)
    if facts.unused:
        card.add("Unused components", -PENALTY_UNUSED * len(facts.unused), preview(facts.unused))
    if facts.patterns:
        card.add("Repeated field patterns", -PENALTY_PATTERN * len(facts.patterns), f"{len(facts.patterns)} pattern(s)")
    if facts.deep_nested:
        card.add("Deep component nesting", -PENALTY_DEEP_NESTING * len(facts.deep_nested), preview(facts.deep_nested))
    if facts.duplicate_groups:
        card.add(
            "Duplicate components",
            -PENALTY_DUPLICATE_COMPONENT * len(facts.duplicate_groups),
            f"{len(facts.duplicate_groups)} group(s)",
        )
    if facts.well_reused:
        card.add("Well-reused components", BONUS_WELL_REUSED * len(facts.well_reused), preview(facts.well_reused))
    if facts.components and facts.patterns:
        card.add("Components available for repeated fields", BONUS_COMPONENTS_AVAILABLE)
    return card


def component_checkpoints(facts: ComponentFacts, config: AuditConfig) -> list[CheckpointResult]:
    thresholds = config.components
    checkpoints: list[CheckpointResult] = []

    if not facts.components:
        usage_status = CheckpointStatus.WARNING if facts.patterns else CheckpointStatus.GOOD
        usage_findings = ["No custom components are defined"]
    else:
        usage_status = status_for_count(len(facts.unused), 0, 3)
        usage_findings = [
            f"{len(facts.components)} component(s); {len(facts.well_reused)} used by "
            f"{thresholds.well_reused_min_users}+ types",
            *([f"{len(facts.unused)} component(s) are unused"] if facts.unused else []),
        ]
    checkpoints.append(
        CheckpointResult(
            title="Component Usage",
            status=usage_status,
            findings=usage_findings,
            examples=[example(facts.unused, "Not embedded by any model or component")] if facts.unused else [],
            action_items=[f'Remove unused component "{name}" or adopt it' for name in facts.unused],
        )
    )

    checkpoints.append(
        CheckpointResult(
            title="Repeated Field Patterns",
            status=status_for_count(len(facts.patterns), 0, 2),
            findings=(
                [f"{len(facts.patterns)} field group(s) repeat across models"]
                if facts.patterns
                else ["No repeated field groups found"]
            ),
            examples=[example(p.models, f"Fields: {', '.join(p.fields)}") for p in facts.patterns[:5]],
            action_items=[p.recommendation for p in facts.patterns],
        )
    )

    checkpoints.append(
        CheckpointResult(
            title="Component Nesting",
            status=status_for_count(len(facts.deep_nested), 0, 2),
            findings=(
                [f"{len(facts.deep_nested)} component(s) nest deeper than {thresholds.max_nesting} levels"]
                if facts.deep_nested
                else ["Component nesting stays shallow"]
            ),
            examples=[example(facts.deep_nested, "Deeply nested components")] if facts.deep_nested else [],
            action_items=[f'Flatten the structure of "{name}"' for name in facts.deep_nested],
        )
    )

    checkpoints.append(
        CheckpointResult(
            title="Duplicate Components",
            status=status_for_count(len(facts.duplicate_groups), 0, 1),
            findings=(
                [f"{len(facts.duplicate_groups)} group(s) of near-identical components"]
                if facts.duplicate_groups
                else ["No near-identical components"]
            ),
            examples=[example(g.members, g.reason) for g in facts.duplicate_groups],
            action_items=[g.recommendation for g in facts.duplicate_groups],
        )
    )
    return checkpoints


def component_issues(facts: ComponentFacts, config: AuditConfig) -> list[AuditIssue]:
    category = Dimension.COMPONENTS.value
    issues: list[AuditIssue] = []
    for name in facts.unused:
        issues.append(
            AuditIssue(
                id=issue_id("unused-component", name),
                severity=Severity.INFO,
                category=category,
                title="Unused Component",
                description=f'Component "{name}" is not used in any model',
                impact="Unused components add schema complexity without providing value",
                recommendation="Remove the component if it's no longer needed",
                affected_items=[name],
                effort=Effort.LOW,
            )
        )
    for pattern in facts.patterns:
        issues.append(
            AuditIssue(
                id=issue_id("duplicate-pattern", *pattern.fields),
                severity=Severity.WARNING,
                category=category,
                title="Duplicate Field Pattern",
                description=f"Fields [{', '.join(pattern.fields)}] appear in {len(pattern.models)} models",
                impact="Duplicated fields increase maintenance burden and inconsistency risk",
                recommendation=pattern.recommendation,
                affected_items=list(pattern.models),
                effort=Effort.MEDIUM,
            )
        )
    by_name = {c.name: c for c in facts.components}
    for name in facts.deep_nested:
        issues.append(
            AuditIssue(
                id=issue_id("deep-component", name),
                severity=Severity.WARNING,
                category=category,
                title="Deep Component Nesting",
                description=f'Component "{name}" has {by_name[name].nesting_depth} levels of nesting',
                impact="Deep nesting complicates the editorial experience and query structure",
                recommendation="Consider flattening the component structure",
                affected_items=[name],
                effort=Effort.HIGH,
            )
        )
    for group in facts.duplicate_groups:
        issues.append(
            AuditIssue(
                id=issue_id("duplicate-component", *group.members),
                severity=Severity.WARNING,
                category=category,
                title="Near-Identical Components",
                description=f"{', '.join(group.members)}: {group.reason}",
                impact="Parallel components drift apart and confuse editors",
                recommendation=group.recommendation,
                affected_items=list(group.members),
                effort=Effort.MEDIUM,
            )
        )
    if facts.well_reused:
        issues.append(
            AuditIssue(
                id="good-reuse",
                severity=Severity.INFO,
                category=category,
                title="Good Component Reuse",
                description=f"{len(facts.well_reused)} component(s) are well-reused across multiple models",
                impact="Well-reused components promote consistency and reduce maintenance",
                recommendation="Continue this pattern for new shared functionality",
                affected_items=list(facts.well_reused),
                effort=Effort.LOW,
                score_bonus=10,
            )
        )
    if not facts.components and facts.patterns:
        issues.append(
            AuditIssue(
                id="no-components",
                severity=Severity.WARNING,
                category=category,
                title="No Components Defined",
                description="Schema has no reusable components but has duplicate field patterns",
                impact="Missing an opportunity for consistency and reduced maintenance",
                recommendation="Create components for the identified duplicate patterns",
                effort=Effort.MEDIUM,
            )
        )
    return issues


def analyze(
    schema: Schema,
    entry_counts: EntryCounts,
    config: AuditConfig,
    registry: PatternRegistry = DEFAULT_REGISTRY,
) -> DimensionResult:
    facts = detect_components(schema, config)
    checkpoints = component_checkpoints(facts, config)
    result = DimensionResult(
        category=Dimension.COMPONENTS.value,
        card=score_components(facts),
        checkpoints=checkpoints,
        issues=component_issues(facts, config),
        recommendations=[a for c in checkpoints for a in c.action_items][:10],
        details=facts.to_dict(),
    )
    logger.debug(
        "components_analyzed",
        score=result.score,
        components=len(facts.components),
        patterns=len(facts.patterns),
    )
    return result
