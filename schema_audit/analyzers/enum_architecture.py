"""
Enum architecture dimension: what each enum is for and whether it scales.

Responsibilities:
- Profile every custom enum: purpose category (first match over
  ENUM_CATEGORY_ORDER), purpose text, usage and health.
- Detect architecture axes encoded as enums (multi-brand, multi-region,
  multi-tenant, multi-site) and flag the ones that have outgrown an enum.
- Single-value, unused, oversized and overlapping enums.

A tenancy enum (brands, sites, tenants as enum values) is healthy only while
small; past critical_tenancy_values it should become a dedicated model.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from schema_audit.analysis_engine.duplicates import DuplicateGroup, find_duplicate_enums
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
from schema_audit.config import AuditConfig, EnumThresholds
from schema_audit.patterns import (
    DEFAULT_REGISTRY,
    ENUM_ARCHITECTURE_PATTERNS,
    ENUM_CATEGORY_ORDER,
    PatternRegistry,
    PatternTag,
)
from schema_audit.schema_graph import EntryCounts, EnumType, Schema

logger = get_logger(__name__)

OTHER_CATEGORY = "other"

RISK_PENALTIES = {"high": 20, "medium": 10, "low": 5}
PENALTY_SINGLE_VALUE = 2
PENALTY_OVERSIZED = 5
PENALTY_OVERLAP = 3
PENALTY_UNCOVERED_TENANCY = 10
BONUS_SMALL_BRAND_ENUM = 5
BONUS_SMALL_REGION_ENUM = 5
SMALL_BRAND_VALUES = 5
SMALL_REGION_VALUES = 10

FLAW_RECOMMENDATIONS = {
    PatternTag.MULTI_BRAND: (
        'Create a dedicated "Brand" or "Shop" content model with fields for name, logo, settings, etc. '
        "Replace enum references with model relations for better scalability and brand-specific metadata."
    ),
    PatternTag.MULTI_REGION: (
        "Consider the platform's built-in localization features or create a \"Region\" content model "
        "for region-specific settings and content."
    ),
    PatternTag.MULTI_TENANT: (
        "Multi-tenant architectures should use proper content models with relations, not enums. "
        'Create a "Tenant" or "Organization" model with proper relations and permissions.'
    ),
}


class EnumHealth(str, Enum):
    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass
class EnumProfile:
    name: str
    values: tuple[str, ...]
    category: str
    purpose: str
    used_in: list[str]
    health: EnumHealth = EnumHealth.HEALTHY
    problems: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "values": list(self.values),
            "category": self.category,
            "purpose": self.purpose,
            "used_in": list(self.used_in),
            "health": self.health.value,
            "issues": list(self.problems),
            "recommendations": list(self.recommendations),
        }


@dataclass
class ArchitecturePattern:
    tag: PatternTag
    enum_name: str
    values: tuple[str, ...]
    recommendation: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "pattern": self.tag.value,
            "enum": self.enum_name,
            "value_count": len(self.values),
            "recommendation": self.recommendation,
        }


@dataclass
class ArchitectureFlaw:
    tag: PatternTag
    enum_name: str
    issue: str
    current_approach: str
    risk: str
    recommendation: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.tag.value,
            "enum": self.enum_name,
            "issue": self.issue,
            "current_approach": self.current_approach,
            "scalability_risk": self.risk,
            "recommendation": self.recommendation,
        }


@dataclass
class EnumFacts:
    profiles: list[EnumProfile] = field(default_factory=list)
    patterns: dict[PatternTag, ArchitecturePattern] = field(default_factory=dict)
    flaws: list[ArchitectureFlaw] = field(default_factory=list)
    overlaps: list[DuplicateGroup] = field(default_factory=list)

    def with_health(self, health: EnumHealth) -> list[EnumProfile]:
        return [p for p in self.profiles if p.health == health]

    @property
    def single_value(self) -> list[EnumProfile]:
        return [p for p in self.profiles if len(p.values) == 1]

    @property
    def unused(self) -> list[EnumProfile]:
        return [p for p in self.profiles if not p.used_in]

    def oversized(self, thresholds: EnumThresholds) -> list[EnumProfile]:
        return [p for p in self.profiles if len(p.values) > thresholds.oversized_values]

    def to_dict(self) -> dict[str, Any]:
        return {
            "enums": [p.to_dict() for p in self.profiles],
            "health_summary": {h.value: len(self.with_health(h)) for h in EnumHealth},
            "architecture_patterns": {tag.value: p.to_dict() for tag, p in self.patterns.items()},
            "flaws": [f.to_dict() for f in self.flaws],
            "overlapping_enums": [g.to_dict() for g in self.overlaps],
        }


def _values_preview(values: tuple[str, ...], limit: int = 5) -> str:
    return preview(list(values), limit)


def enum_purpose(enum: EnumType, registry: PatternRegistry) -> tuple[str, str]:
    """(category, purpose text) from the first matching category."""
    tag = registry.classify(enum.name, enum.values, order=ENUM_CATEGORY_ORDER)
    if tag is None:
        return (
            OTHER_CATEGORY,
            f"Custom enumeration with {len(enum.values)} values. "
            "Review if this could be simplified or if purpose is clear to editors.",
        )
    matcher = registry.first_match(tag, enum.name, enum.values)
    purpose = matcher.description if matcher is not None else ""
    if tag == PatternTag.STYLING and enum.values:
        purpose = f"{purpose} Values: {_values_preview(enum.values)}"
    return tag.value, purpose


def assess_health(profile: EnumProfile, thresholds: EnumThresholds) -> None:
    """Fill health, problems and recommendations; the worst finding wins."""
    def flag(health: EnumHealth, problem: str, recommendation: str) -> None:
        profile.problems.append(problem)
        profile.recommendations.append(recommendation)
        if health == EnumHealth.CRITICAL or profile.health == EnumHealth.HEALTHY:
            profile.health = health

    count = len(profile.values)
    if count == 1:
        flag(
            EnumHealth.WARNING,
            "Single-value enum provides no selection benefit",
            "Remove enum and use constant, or add meaningful values if selection is planned",
        )
    if not profile.used_in:
        flag(
            EnumHealth.WARNING,
            "Enum is not used in any model",
            "Remove unused enum or implement in relevant models",
        )
    if count > thresholds.oversized_values:
        flag(
            EnumHealth.WARNING,
            f"Large enum with {count} values may be hard to manage",
            "Consider migrating to a content model for better manageability and metadata support",
        )
    if profile.category == PatternTag.TENANCY.value:
        if count > thresholds.critical_tenancy_values:
            flag(
                EnumHealth.CRITICAL,
                "Using enum for multi-tenant/brand architecture limits scalability",
                "Create a dedicated content model (Brand, Site, etc.) with proper relationships",
            )
        else:
            flag(
                EnumHealth.WARNING,
                "Small tenancy enum is acceptable but monitor growth",
                "Plan migration to content model if brands/sites exceed 10",
            )


def _pattern_recommendation(enum: EnumType, noun: str) -> str:
    count = len(enum.values)
    if count > 10:
        return (
            f"Consider migrating {enum.name} enum to a dedicated content model "
            "for better scalability and metadata support."
        )
    if count > 5:
        return f"{enum.name} enum is growing. Plan for migration to a content model if you expect to add more {noun}."
    return f"{enum.name} enum is appropriate for current scale. Monitor growth and plan migration if values exceed 10."


def detect_patterns(enums: list[EnumType], registry: PatternRegistry) -> dict[PatternTag, ArchitecturePattern]:
    """First enum (name order) matching each architecture axis."""
    found: dict[PatternTag, ArchitecturePattern] = {}
    for tag in ENUM_ARCHITECTURE_PATTERNS:
        for enum in enums:
            matcher = registry.first_match(tag, enum.name)
            if matcher is not None:
                found[tag] = ArchitecturePattern(
                    tag=tag,
                    enum_name=enum.name,
                    values=enum.values,
                    recommendation=_pattern_recommendation(enum, matcher.description or "values"),
                )
                break
    return found


def detect_flaws(
    patterns: dict[PatternTag, ArchitecturePattern],
    usage: dict[str, list[str]],
    thresholds: EnumThresholds,
) -> list[ArchitectureFlaw]:
    flaws: list[ArchitectureFlaw] = []

    brand = patterns.get(PatternTag.MULTI_BRAND)
    if brand is not None and len(brand.values) >= thresholds.multi_brand_min_values:
        used = len(usage.get(brand.enum_name, []))
        if used >= thresholds.multi_brand_min_usage:
            count = len(brand.values)
            flaws.append(
                ArchitectureFlaw(
                    tag=PatternTag.MULTI_BRAND,
                    enum_name=brand.enum_name,
                    issue=f'Using "{brand.enum_name}" enum across {used} models for multi-brand architecture',
                    current_approach=f"Enum with {count} values: {_values_preview(brand.values)}",
                    risk="high" if count > 7 else "medium" if count > 5 else "low",
                    recommendation=FLAW_RECOMMENDATIONS[PatternTag.MULTI_BRAND],
                )
            )

    region = patterns.get(PatternTag.MULTI_REGION)
    if region is not None and len(region.values) >= thresholds.multi_region_min_values:
        if len(usage.get(region.enum_name, [])) >= thresholds.multi_region_min_usage:
            flaws.append(
                ArchitectureFlaw(
                    tag=PatternTag.MULTI_REGION,
                    enum_name=region.enum_name,
                    issue=f'Using "{region.enum_name}" enum for multi-region content management',
                    current_approach=f"Enum with {len(region.values)} values for region-based content",
                    risk="high" if len(region.values) > 10 else "medium",
                    recommendation=FLAW_RECOMMENDATIONS[PatternTag.MULTI_REGION],
                )
            )

    tenant = patterns.get(PatternTag.MULTI_TENANT)
    if tenant is not None and usage.get(tenant.enum_name):
        flaws.append(
            ArchitectureFlaw(
                tag=PatternTag.MULTI_TENANT,
                enum_name=tenant.enum_name,
                issue=(
                    f'Using "{tenant.enum_name}" enum for multi-tenant architecture - critical scalability concern'
                ),
                current_approach=f"Enum-based tenancy with {len(tenant.values)} tenants",
                risk="high",
                recommendation=FLAW_RECOMMENDATIONS[PatternTag.MULTI_TENANT],
            )
        )
    return flaws


def detect_enums(schema: Schema, config: AuditConfig, registry: PatternRegistry = DEFAULT_REGISTRY) -> EnumFacts:
    thresholds = config.enums
    enums = sorted(schema.custom_enums(), key=lambda e: e.name)
    usage = schema.enum_usage()
    facts = EnumFacts()
    for enum in enums:
        category, purpose = enum_purpose(enum, registry)
        profile = EnumProfile(
            name=enum.name,
            values=enum.values,
            category=category,
            purpose=purpose,
            used_in=usage.get(enum.name, []),
        )
        assess_health(profile, thresholds)
        facts.profiles.append(profile)
    facts.patterns = detect_patterns(enums, registry)
    facts.flaws = detect_flaws(facts.patterns, usage, thresholds)
    facts.overlaps = find_duplicate_enums(enums, config.duplicates)
    return facts


def _uncovered_critical(facts: EnumFacts) -> list[EnumProfile]:
    covered = {f.enum_name for f in facts.flaws}
    return [p for p in facts.with_health(EnumHealth.CRITICAL) if p.name not in covered]


def score_enums(facts: EnumFacts, config: AuditConfig) -> ScoreCard:
    card = ScoreCard()
    for flaw in facts.flaws:
        card.add(f"Enum-based {flaw.tag.value} architecture", -RISK_PENALTIES[flaw.risk], f"{flaw.risk} risk")
    uncovered = _uncovered_critical(facts)
    if uncovered:
        card.add(
            "Tenancy enums past their scale",
            -PENALTY_UNCOVERED_TENANCY * len(uncovered),
            preview([p.name for p in uncovered]),
        )
    single = facts.single_value
    if single:
        card.add("Single-value enums", -PENALTY_SINGLE_VALUE * len(single), preview([p.name for p in single]))
    oversized = facts.oversized(config.enums)
    if oversized:
        card.add("Oversized enums", -PENALTY_OVERSIZED * len(oversized), preview([p.name for p in oversized]))
    if facts.overlaps:
        card.add("Overlapping enums", -PENALTY_OVERLAP * len(facts.overlaps))
    brand = facts.patterns.get(PatternTag.MULTI_BRAND)
    if brand is not None and len(brand.values) <= SMALL_BRAND_VALUES:
        card.add("Brand enum within scale", BONUS_SMALL_BRAND_ENUM, brand.enum_name)
    region = facts.patterns.get(PatternTag.MULTI_REGION)
    if region is not None and len(region.values) <= SMALL_REGION_VALUES:
        card.add("Region enum within scale", BONUS_SMALL_REGION_ENUM, region.enum_name)
    return card


def enum_checkpoints(facts: EnumFacts, config: AuditConfig) -> list[CheckpointResult]:
    if not facts.profiles:
        return []
    thresholds = config.enums
    flaws = facts.flaws
    if any(f.risk == "high" for f in flaws) or _uncovered_critical(facts):
        arch_status = CheckpointStatus.ISSUE
    elif flaws:
        arch_status = CheckpointStatus.WARNING
    else:
        arch_status = CheckpointStatus.GOOD
    detected = [f"{tag.value} via {p.enum_name}" for tag, p in facts.patterns.items()]
    checkpoints = [
        CheckpointResult(
            title="Enum-Based Architecture",
            status=arch_status,
            findings=[
                f"Architecture patterns: {', '.join(detected)}" if detected else "No enum-based architecture patterns",
                *[f.issue for f in flaws],
            ],
            examples=[example([f.enum_name], f.current_approach) for f in flaws],
            action_items=[
                *[f.recommendation for f in flaws],
                *[p.recommendations[-1] for p in _uncovered_critical(facts)],
            ],
        ),
    ]

    problems = facts.single_value + facts.unused + facts.oversized(thresholds)
    problem_names = sorted({p.name for p in problems})
    checkpoints.append(
        CheckpointResult(
            title="Enum Health",
            status=status_for_count(len(problem_names), 0, 3),
            findings=[
                f"{len(facts.profiles)} enum(s): "
                + ", ".join(f"{len(facts.with_health(h))} {h.value}" for h in EnumHealth),
            ],
            examples=[
                example([p.name], "; ".join(p.problems))
                for p in facts.profiles
                if p.name in problem_names
            ][:5],
            action_items=[
                f'{p.name}: {p.recommendations[0]}' for p in facts.profiles if p.name in problem_names
            ],
        )
    )

    checkpoints.append(
        CheckpointResult(
            title="Enum Overlap",
            status=status_for_count(len(facts.overlaps), 0, 1),
            findings=(
                [f"{len(facts.overlaps)} group(s) of enums share most of their values"]
                if facts.overlaps
                else ["Enum value sets are distinct"]
            ),
            examples=[example(g.members, f"Shared: {', '.join(g.shared_attributes[:5])}") for g in facts.overlaps],
            action_items=[g.recommendation for g in facts.overlaps],
        )
    )
    return checkpoints


def enum_issues(facts: EnumFacts, config: AuditConfig) -> list[AuditIssue]:
    category = Dimension.ENUM_ARCHITECTURE.value
    issues: list[AuditIssue] = []
    for flaw in facts.flaws:
        issues.append(
            AuditIssue(
                id=issue_id("enum-arch", flaw.tag.value),
                severity=Severity.CRITICAL if flaw.risk == "high" else Severity.WARNING,
                category=category,
                title=f"Lightweight {flaw.tag.value} Architecture via Enum",
                description=flaw.issue,
                impact=(
                    f"{flaw.current_approach}. This approach limits scalability, prevents adding metadata, "
                    "and complicates content filtering."
                ),
                recommendation=flaw.recommendation,
                affected_items=[flaw.enum_name],
                effort=Effort.HIGH,
            )
        )
    for profile in _uncovered_critical(facts):
        issues.append(
            AuditIssue(
                id=issue_id("enum-tenancy", profile.name),
                severity=Severity.CRITICAL,
                category=category,
                title=f"Tenancy Enum: {profile.name}",
                description=f'Enum "{profile.name}" segments content across {len(profile.values)} values',
                impact=profile.problems[-1],
                recommendation=profile.recommendations[-1],
                affected_items=[profile.name],
                effort=Effort.HIGH,
            )
        )
    for profile in facts.single_value:
        issues.append(
            AuditIssue(
                id=issue_id("enum-single", profile.name),
                severity=Severity.INFO,
                category=category,
                title=f"Single-Value Enum: {profile.name}",
                description=f'Enum "{profile.name}" has only one value: "{profile.values[0]}"',
                impact="Single-value enum provides no selection benefit and adds schema complexity",
                recommendation=(
                    "Remove the enum and use a constant, or add more meaningful values if selection will be needed."
                ),
                affected_items=[profile.name],
                effort=Effort.LOW,
            )
        )
    for profile in facts.unused:
        issues.append(
            AuditIssue(
                id=issue_id("enum-unused", profile.name),
                severity=Severity.INFO,
                category=category,
                title=f"Unused Enum: {profile.name}",
                description=f'Enum "{profile.name}" is not used by any model or component',
                impact="Unused enums clutter the schema",
                recommendation="Remove unused enum or implement in relevant models",
                affected_items=[profile.name],
                effort=Effort.LOW,
            )
        )
    for profile in facts.oversized(config.enums):
        issues.append(
            AuditIssue(
                id=issue_id("enum-oversized", profile.name),
                severity=Severity.WARNING,
                category=category,
                title=f"Oversized Enum: {profile.name}",
                description=f'Enum "{profile.name}" has {len(profile.values)} values',
                impact=(
                    "Large enums are difficult to maintain, slow to load in editors, "
                    "and may indicate a need for a proper content model."
                ),
                recommendation=(
                    f'Consider migrating "{profile.name}" ({len(profile.values)} values) '
                    "to a dedicated content model for better manageability"
                ),
                affected_items=[profile.name],
                effort=Effort.MEDIUM,
            )
        )
    for group in facts.overlaps:
        issues.append(
            AuditIssue(
                id=issue_id("enum-overlap", *group.members),
                severity=Severity.INFO,
                category=category,
                title=f"Overlapping Enums: {' & '.join(group.members)}",
                description=(
                    f"These enums share {len(group.shared_attributes)} values: {', '.join(group.shared_attributes[:5])}"
                ),
                impact="Duplicate values across enums may indicate a need for consolidation or a shared base enum.",
                recommendation="Consider merging these enums or extracting common values to a shared enum.",
                affected_items=list(group.members),
                effort=Effort.LOW,
            )
        )
    return issues


def analyze(
    schema: Schema,
    entry_counts: EntryCounts,
    config: AuditConfig,
    registry: PatternRegistry = DEFAULT_REGISTRY,
) -> DimensionResult:
    facts = detect_enums(schema, config, registry)
    checkpoints = enum_checkpoints(facts, config)
    result = DimensionResult(
        category=Dimension.ENUM_ARCHITECTURE.value,
        card=score_enums(facts, config),
        checkpoints=checkpoints,
        issues=enum_issues(facts, config),
        recommendations=[a for c in checkpoints for a in c.action_items][:10],
        details=facts.to_dict(),
    )
    if not facts.profiles:
        result.notes.append("No custom enums to evaluate")
    logger.debug(
        "enum_architecture_analyzed",
        score=result.score,
        enums=len(facts.profiles),
        flaws=len(facts.flaws),
    )
    return result
