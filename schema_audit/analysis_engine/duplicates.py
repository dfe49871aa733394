"""
Structural-similarity duplicate detection for enums, components and models.

Overlap between two types is |shared| / min(|A|, |B|), computed after the
universal fields (id, createdAt, slug, title, ...) are removed from both
sides. Field names and enum values compare case-insensitively.

Grouping is greedy and single-assignment: candidates are walked in name
order, each unassigned candidate anchors a group and absorbs every later
unassigned candidate whose overlap with the anchor clears the thresholds.
Sorting first makes the result independent of input order.

Models get one extra rule, applied before field overlap: names sharing a
stem with a trailing version suffix (ProductV2, Product_v3, Product2) are
grouped with each other and with the bare stem, regardless of fields.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from schema_audit.audit_logging import get_logger
from schema_audit.config import DuplicateThresholds
from schema_audit.patterns import DEFAULT_REGISTRY, PatternRegistry, PatternTag, version_stem
from schema_audit.schema_graph import EnumType, ModelType

logger = get_logger(__name__)


class DuplicateKind(str, Enum):
    ENUM = "enum"
    COMPONENT = "component"
    MODEL = "model"


class GroupingRule(str, Enum):
    FIELD_OVERLAP = "field-overlap"
    VALUE_OVERLAP = "value-overlap"
    VERSION_SUFFIX = "version-suffix"


@dataclass
class DuplicateGroup:
    kind: DuplicateKind
    members: list[str]
    similarity: int
    """0-100."""
    shared_attributes: list[str]
    reason: str
    recommendation: str
    rule: GroupingRule

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "members": list(self.members),
            "similarity": self.similarity,
            "shared_attributes": list(self.shared_attributes),
            "reason": self.reason,
            "recommendation": self.recommendation,
            "rule": self.rule.value,
        }


@dataclass
class BooleanToggle:
    owner: str
    field: str
    pattern: str

    def to_dict(self) -> dict[str, str]:
        return {"owner": self.owner, "field": self.field, "pattern": self.pattern}


@dataclass
class _Candidate:
    name: str
    keys: frozenset[str]
    """Comparable attributes (universal fields removed)."""
    ordered: list[str] = field(default_factory=list)
    """Display spelling of keys, in declaration order."""
    raw_size: int = 0

    def display(self, keys: Iterable[str]) -> list[str]:
        wanted = set(keys)
        return [label for label in self.ordered if _norm_key(label) in wanted]


def _norm_key(label: str) -> str:
    return label.lower()


def _field_candidate(t: ModelType, universal: frozenset[str]) -> _Candidate:
    ordered: list[str] = []
    seen: set[str] = set()
    for f in t.fields:
        key = _norm_key(f.name)
        if key in universal or key in seen:
            continue
        seen.add(key)
        ordered.append(f.name)
    return _Candidate(name=t.name, keys=frozenset(seen), ordered=ordered, raw_size=len(t.fields))


def _enum_candidate(e: EnumType) -> _Candidate:
    ordered = list(dict.fromkeys(e.values))
    return _Candidate(
        name=e.name,
        keys=frozenset(v.lower() for v in ordered),
        ordered=ordered,
        raw_size=len(ordered),
    )


def _canonical(candidates: Iterable[_Candidate], limit: int, kind: DuplicateKind) -> list[_Candidate]:
    ordered = sorted(candidates, key=lambda c: c.name)
    if len(ordered) > limit:
        logger.warning(
            "duplicate_candidates_truncated",
            kind=kind.value,
            candidates=len(ordered),
            limit=limit,
        )
        ordered = ordered[:limit]
    return ordered


def overlap_ratio(a: frozenset[str], b: frozenset[str]) -> float:
    """|a & b| / min(|a|, |b|); 0.0 when either side is empty."""
    smallest = min(len(a), len(b))
    if smallest == 0:
        return 0.0
    return len(a & b) / smallest


def _greedy_groups(
    candidates: Sequence[_Candidate],
    *,
    min_overlap: float,
    min_shared: int,
    assigned: set[str],
) -> list[list[_Candidate]]:
    groups: list[list[_Candidate]] = []
    for i, anchor in enumerate(candidates):
        if anchor.name in assigned:
            continue
        members = [anchor]
        for other in candidates[i + 1:]:
            if other.name in assigned:
                continue
            shared = anchor.keys & other.keys
            if len(shared) >= min_shared and overlap_ratio(anchor.keys, other.keys) >= min_overlap:
                members.append(other)
                assigned.add(other.name)
        if len(members) > 1:
            assigned.add(anchor.name)
            groups.append(members)
    return groups


def _group_stats(members: Sequence[_Candidate], max_listed: int) -> tuple[int, list[str]]:
    """Similarity over the whole group: |intersection of all| / smallest member."""
    common = frozenset.intersection(*(m.keys for m in members))
    smallest = min(len(m.keys) for m in members)
    similarity = round(len(common) / smallest * 100) if smallest else 0
    return similarity, members[0].display(common)[:max_listed]


def find_duplicate_enums(
    enums: Iterable[EnumType],
    thresholds: DuplicateThresholds = DuplicateThresholds(),
) -> list[DuplicateGroup]:
    """Enums whose value sets overlap enough to be one enum."""
    candidates = _canonical((_enum_candidate(e) for e in enums), thresholds.max_candidates, DuplicateKind.ENUM)
    groups: list[DuplicateGroup] = []
    for members in _greedy_groups(
        candidates,
        min_overlap=thresholds.enum_min_overlap,
        min_shared=thresholds.enum_min_shared,
        assigned=set(),
    ):
        similarity, shared = _group_stats(members, thresholds.max_shared_listed)
        names = [m.name for m in members]
        if len(names) == 2:
            recommendation = f'Consolidate "{names[0]}" and "{names[1]}" into a single enum'
        else:
            recommendation = (
                f"Consolidate {len(names)} enums ({', '.join(names)}) into a single base enum"
            )
        groups.append(
            DuplicateGroup(
                kind=DuplicateKind.ENUM,
                members=names,
                similarity=similarity,
                shared_attributes=shared,
                reason=f"{similarity}% value overlap ({len(shared)} shared values)",
                recommendation=recommendation,
                rule=GroupingRule.VALUE_OVERLAP,
            )
        )
    if groups:
        logger.info("duplicate_groups_detected", kind=DuplicateKind.ENUM.value, groups=len(groups))
    return groups


def find_duplicate_components(
    components: Iterable[ModelType],
    thresholds: DuplicateThresholds = DuplicateThresholds(),
) -> list[DuplicateGroup]:
    """Components with mostly the same fields; candidates for one component with a variant enum."""
    candidates = _canonical(
        (_field_candidate(c, thresholds.universal_fields) for c in components),
        thresholds.max_candidates,
        DuplicateKind.COMPONENT,
    )
    groups: list[DuplicateGroup] = []
    for members in _greedy_groups(
        candidates,
        min_overlap=thresholds.component_min_overlap,
        min_shared=thresholds.component_min_shared,
        assigned=set(),
    ):
        similarity, shared = _group_stats(members, thresholds.max_shared_listed)
        names = [m.name for m in members]
        groups.append(
            DuplicateGroup(
                kind=DuplicateKind.COMPONENT,
                members=names,
                similarity=similarity,
                shared_attributes=shared,
                reason=f"{similarity}% field overlap ({len(shared)} shared fields)",
                recommendation=(
                    f'Consolidate {", ".join(names)} into one component with a "variant" or "style" enum field'
                ),
                rule=GroupingRule.FIELD_OVERLAP,
            )
        )
    if groups:
        logger.info("duplicate_groups_detected", kind=DuplicateKind.COMPONENT.value, groups=len(groups))
    return groups


def _version_groups(
    candidates: Sequence[_Candidate],
    thresholds: DuplicateThresholds,
) -> list[DuplicateGroup]:
    by_stem: dict[str, list[_Candidate]] = {}
    versioned_stems: set[str] = set()
    for c in candidates:
        stem = version_stem(c.name)
        if stem is not None:
            versioned_stems.add(stem)
        by_stem.setdefault(stem if stem is not None else c.name, []).append(c)

    groups: list[DuplicateGroup] = []
    for stem in sorted(versioned_stems):
        members = by_stem.get(stem, [])
        if len(members) < 2:
            continue
        names = [m.name for m in members]
        common = frozenset.intersection(*(m.keys for m in members))
        groups.append(
            DuplicateGroup(
                kind=DuplicateKind.MODEL,
                members=names,
                similarity=thresholds.version_similarity,
                shared_attributes=members[0].display(common)[: thresholds.max_shared_listed],
                reason=f'Versioned models of "{stem}"',
                recommendation=(
                    f'Consolidate {", ".join(names)} into a single "{stem}" model and deprecate old versions'
                ),
                rule=GroupingRule.VERSION_SUFFIX,
            )
        )
    return groups


def find_duplicate_models(
    models: Iterable[ModelType],
    thresholds: DuplicateThresholds = DuplicateThresholds(),
    registry: PatternRegistry = DEFAULT_REGISTRY,
) -> list[DuplicateGroup]:
    """
    Versioned models first, then models with heavy field overlap.

    Embedded wrapper types are ignored. Field overlap only considers models
    with at least model_min_fields raw fields.
    """
    user_models = [m for m in models if not registry.matches(PatternTag.EMBEDDED_WRAPPER, m.name)]
    candidates = _canonical(
        (_field_candidate(m, thresholds.universal_fields) for m in user_models),
        thresholds.max_candidates,
        DuplicateKind.MODEL,
    )

    groups = _version_groups(candidates, thresholds)
    assigned = {name for g in groups for name in g.members}

    sized = [c for c in candidates if c.raw_size >= thresholds.model_min_fields]
    for members in _greedy_groups(
        sized,
        min_overlap=thresholds.model_min_overlap,
        min_shared=thresholds.model_min_shared,
        assigned=assigned,
    ):
        similarity, shared = _group_stats(members, thresholds.max_shared_listed)
        names = [m.name for m in members]
        groups.append(
            DuplicateGroup(
                kind=DuplicateKind.MODEL,
                members=names,
                similarity=similarity,
                shared_attributes=shared,
                reason=f"{similarity}% field overlap ({len(shared)} shared fields)",
                recommendation=(
                    f'Consider consolidating {" and ".join(names)} into a single model with a "type" discriminator field'
                ),
                rule=GroupingRule.FIELD_OVERLAP,
            )
        )
    if groups:
        logger.info("duplicate_groups_detected", kind=DuplicateKind.MODEL.value, groups=len(groups))
    return groups


def find_boolean_toggles(
    types: Iterable[ModelType],
    registry: PatternRegistry = DEFAULT_REGISTRY,
) -> list[BooleanToggle]:
    """Boolean show*/hide*/enable*/disable*/is* fields, in type then field order."""
    toggles: list[BooleanToggle] = []
    for t in sorted(types, key=lambda t: t.name):
        for f in t.fields:
            if f.type_name != "Boolean":
                continue
            matcher = registry.first_match(PatternTag.BOOLEAN_TOGGLE, f.name)
            if matcher is not None:
                toggles.append(BooleanToggle(owner=t.name, field=f.name, pattern=matcher.label))
    return toggles
