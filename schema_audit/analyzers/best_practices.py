"""
Best-practices dimension: conventions a maintainable schema follows.

Responsibilities:
- Naming: PascalCase models, camelCase fields (snake_case and kebab-case are
  reported with a suggested rename).
- Unique constraints on identifier-like fields (slug, sku, email, ...).
- String fields that should be enumerations, and fields that need format
  validation.
- Presentation fields on content models, classified through
  FIELD_ROLE_ORDER (presentation beats configuration).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from schema_audit.analysis_engine.models import (
    AuditIssue,
    CheckpointResult,
    Dimension,
    DimensionResult,
    Effort,
    Severity,
    status_for_count,
)
from schema_audit.analysis_engine.scorer import ScoreCard, capped_penalty
from schema_audit.analyzers.common import example, qualified
from schema_audit.audit_logging import get_logger
from schema_audit.config import AuditConfig
from schema_audit.patterns import DEFAULT_REGISTRY, FIELD_ROLE_ORDER, PatternRegistry, PatternTag
from schema_audit.schema_graph import EntryCounts, Schema

logger = get_logger(__name__)

CAMEL_CASE = re.compile(r"^[a-z][a-zA-Z0-9]*$")
PASCAL_CASE = re.compile(r"^[A-Z][a-zA-Z0-9]*$")
SNAKE_CASE = re.compile(r"^[a-z][a-z0-9_]*$")

# (per item, cap)
NAMING_PENALTY = (2, 20)
UNIQUE_PENALTY = (3, 15)
SLUG_UNIQUE_PENALTY = 5
ENUM_CANDIDATE_PENALTY = (1, 10)
VALIDATION_PENALTY = (1, 10)
PRESENTATION_PENALTY = (1, 10)
CONSISTENT_NAMING_BONUS = 5


@dataclass
class NamingFinding:
    item: str
    current: str
    problem: str
    suggestion: str

    def to_dict(self) -> dict[str, str]:
        return {"item": self.item, "current": self.current, "issue": self.problem, "suggestion": self.suggestion}


@dataclass
class FieldAdvice:
    model: str
    field: str
    advice: str

    @property
    def item(self) -> str:
        return qualified(self.model, self.field)

    def to_dict(self) -> dict[str, str]:
        return {"model": self.model, "field": self.field, "advice": self.advice}


@dataclass
class BestPracticeFacts:
    naming: list[NamingFinding] = field(default_factory=list)
    unique: list[FieldAdvice] = field(default_factory=list)
    enum_candidates: list[FieldAdvice] = field(default_factory=list)
    validation: list[FieldAdvice] = field(default_factory=list)
    presentation: list[FieldAdvice] = field(default_factory=list)
    config_fields: list[FieldAdvice] = field(default_factory=list)

    @property
    def slug_not_unique(self) -> list[FieldAdvice]:
        return [u for u in self.unique if u.field.lower() == "slug"]

    def to_dict(self) -> dict[str, Any]:
        return {
            "naming": [n.to_dict() for n in self.naming],
            "missing_unique": [u.to_dict() for u in self.unique],
            "enum_candidates": [e.to_dict() for e in self.enum_candidates],
            "missing_validation": [v.to_dict() for v in self.validation],
            "presentation_fields": [p.to_dict() for p in self.presentation],
            "configuration_fields": [c.to_dict() for c in self.config_fields],
        }


def _to_pascal(name: str) -> str:
    camel = re.sub(r"[_-]([a-zA-Z0-9])", lambda m: m.group(1).upper(), name)
    return camel[:1].upper() + camel[1:]


def _to_camel(name: str) -> str:
    return re.sub(r"[_-]([a-z0-9])", lambda m: m.group(1).upper(), name)


def detect_best_practices(
    schema: Schema,
    registry: PatternRegistry = DEFAULT_REGISTRY,
) -> BestPracticeFacts:
    facts = BestPracticeFacts()
    models = sorted(schema.custom_models(), key=lambda m: m.name)
    for model in models:
        if not PASCAL_CASE.match(model.name):
            facts.naming.append(
                NamingFinding(model.name, model.name, "Model names should be PascalCase", _to_pascal(model.name))
            )
    for model in models:
        for f in model.fields:
            item = qualified(model.name, f.name)
            if f.name != "id" and not CAMEL_CASE.match(f.name):
                if SNAKE_CASE.match(f.name):
                    facts.naming.append(
                        NamingFinding(item, f.name, "Field uses snake_case instead of camelCase", _to_camel(f.name))
                    )
                elif "-" in f.name:
                    facts.naming.append(
                        NamingFinding(item, f.name, "Field uses kebab-case instead of camelCase", _to_camel(f.name))
                    )

            if not f.is_unique:
                unique = registry.first_match(PatternTag.UNIQUE_CANDIDATE, f.name)
                if unique is not None:
                    facts.unique.append(FieldAdvice(model.name, f.name, unique.description))

            if f.type_name == "String" and f.related_model is None:
                if registry.matches(PatternTag.ENUM_CANDIDATE, f.name):
                    facts.enum_candidates.append(
                        FieldAdvice(model.name, f.name, f'Consider converting "{f.name}" to an Enumeration for validation')
                    )
                validation = registry.first_match(PatternTag.FORMAT_VALIDATION, f.name)
                if validation is not None:
                    facts.validation.append(FieldAdvice(model.name, f.name, validation.description))

            role = registry.classify(f.name, order=FIELD_ROLE_ORDER)
            if role == PatternTag.PRESENTATION:
                matcher = registry.first_match(role, f.name)
                facts.presentation.append(FieldAdvice(model.name, f.name, matcher.description if matcher else ""))
            elif role == PatternTag.CONFIG_FIELD:
                matcher = registry.first_match(role, f.name)
                facts.config_fields.append(FieldAdvice(model.name, f.name, matcher.description if matcher else ""))
    return facts


def score_best_practices(facts: BestPracticeFacts) -> ScoreCard:
    card = ScoreCard()
    capped_penalty(card, "Naming convention issues", len(facts.naming), *NAMING_PENALTY)
    capped_penalty(card, "Missing unique constraints", len(facts.unique), *UNIQUE_PENALTY)
    slugs = facts.slug_not_unique
    if slugs:
        card.add("Slug fields not unique", -SLUG_UNIQUE_PENALTY * len(slugs), ", ".join(s.item for s in slugs))
    capped_penalty(card, "String fields that should be enums", len(facts.enum_candidates), *ENUM_CANDIDATE_PENALTY)
    capped_penalty(card, "Fields without format validation", len(facts.validation), *VALIDATION_PENALTY)
    capped_penalty(card, "Presentation fields on content models", len(facts.presentation), *PRESENTATION_PENALTY)
    if not facts.naming:
        card.add("Consistent naming conventions", CONSISTENT_NAMING_BONUS)
    return card


def best_practice_checkpoints(facts: BestPracticeFacts) -> list[CheckpointResult]:
    return [
        CheckpointResult(
            title="Naming Conventions",
            status=status_for_count(len(facts.naming), 0, 5),
            findings=(
                [f"{len(facts.naming)} naming convention issue(s)"]
                if facts.naming
                else ["Models use PascalCase and fields use camelCase"]
            ),
            examples=[example([n.item], f"{n.problem}; rename to {n.suggestion}") for n in facts.naming[:5]],
            action_items=[f'Rename "{n.item}" to "{n.suggestion}"' for n in facts.naming[:5]],
        ),
        CheckpointResult(
            title="Unique Constraints",
            status=status_for_count(len(facts.unique), 0, 2),
            findings=(
                [f"{len(facts.unique)} identifier field(s) lack a unique constraint"]
                if facts.unique
                else ["Identifier fields are unique"]
            ),
            examples=[example([u.item], u.advice) for u in facts.unique[:5]],
            action_items=[f'Mark "{u.item}" as unique' for u in facts.unique],
        ),
        CheckpointResult(
            title="Field Validation",
            status=status_for_count(len(facts.enum_candidates) + len(facts.validation), 2, 8),
            findings=[
                f"{len(facts.enum_candidates)} string field(s) could be enumerations",
                f"{len(facts.validation)} field(s) would benefit from format validation",
            ],
            examples=[example([a.item], a.advice) for a in (facts.enum_candidates + facts.validation)[:5]],
            action_items=[f"{a.item}: {a.advice}" for a in (facts.enum_candidates + facts.validation)[:5]],
        ),
        CheckpointResult(
            title="Presentation in Content",
            status=status_for_count(len(facts.presentation), 2, 6),
            findings=[
                f"{len(facts.presentation)} presentation field(s) on content models",
                f"{len(facts.config_fields)} configuration field(s) on content models",
            ],
            examples=[example([p.item], p.advice) for p in facts.presentation[:5]],
            action_items=(
                ["Move styling and layout fields into components or frontend configuration"]
                if facts.presentation
                else []
            ),
        ),
    ]


def best_practice_issues(facts: BestPracticeFacts) -> list[AuditIssue]:
    category = Dimension.BEST_PRACTICES.value
    issues: list[AuditIssue] = []
    snake = [n for n in facts.naming if "snake_case" in n.problem]
    if snake:
        issues.append(
            AuditIssue(
                id="naming-snake-case",
                severity=Severity.INFO,
                category=category,
                title="Inconsistent Naming (snake_case)",
                description=f"{len(snake)} field(s) use snake_case instead of camelCase",
                impact="Inconsistent naming makes the API harder to use",
                recommendation="Rename fields to camelCase",
                affected_items=[n.item for n in snake],
                effort=Effort.LOW,
            )
        )
    other = [n for n in facts.naming if n not in snake]
    if other:
        issues.append(
            AuditIssue(
                id="naming-conventions",
                severity=Severity.INFO,
                category=category,
                title="Naming Convention Issues",
                description=f"{len(other)} name(s) break PascalCase/camelCase conventions",
                impact="Inconsistent naming makes the API harder to use",
                recommendation="Use PascalCase for models and camelCase for fields",
                affected_items=[n.item for n in other],
                effort=Effort.LOW,
            )
        )
    if facts.unique:
        issues.append(
            AuditIssue(
                id="missing-unique-constraints",
                severity=Severity.WARNING if facts.slug_not_unique else Severity.INFO,
                category=category,
                title="Missing Unique Constraint",
                description=f"{len(facts.unique)} identifier field(s) are not unique",
                impact="Duplicate slugs or codes break routing and lookups",
                recommendation="Add unique constraints to identifier fields",
                affected_items=[u.item for u in facts.unique],
                effort=Effort.LOW,
            )
        )
    if facts.enum_candidates:
        issues.append(
            AuditIssue(
                id="potential-enum-fields",
                severity=Severity.INFO,
                category=category,
                title="Potential Enum Fields",
                description=f"{len(facts.enum_candidates)} string field(s) hold a fixed set of values",
                impact="Free-text values drift and break filtering",
                recommendation="Convert these fields to enumerations",
                affected_items=[e.item for e in facts.enum_candidates],
                effort=Effort.LOW,
            )
        )
    if facts.validation:
        issues.append(
            AuditIssue(
                id="missing-field-validation",
                severity=Severity.INFO,
                category=category,
                title="Missing Field Validation",
                description=f"{len(facts.validation)} field(s) would benefit from format validation",
                impact="Malformed emails, URLs or phone numbers reach production",
                recommendation="Add format validation to these fields",
                affected_items=[v.item for v in facts.validation],
                effort=Effort.LOW,
            )
        )
    if facts.presentation:
        issues.append(
            AuditIssue(
                id="presentation-fields",
                severity=Severity.INFO,
                category=category,
                title="Presentation Fields in Content Models",
                description=f"{len(facts.presentation)} field(s) store styling or layout",
                impact="Presentation in content ties entries to one frontend design",
                recommendation="Move presentation into components, variant enums or frontend code",
                affected_items=[p.item for p in facts.presentation],
                effort=Effort.MEDIUM,
            )
        )
    if not facts.naming:
        issues.append(
            AuditIssue(
                id="consistent-naming",
                severity=Severity.INFO,
                category=category,
                title="Consistent Naming Conventions",
                description="Models and fields follow PascalCase/camelCase conventions",
                impact="Consistent naming keeps the API predictable",
                recommendation="Keep the conventions for new models and fields",
                effort=Effort.LOW,
                score_bonus=10,
            )
        )
    return issues


def analyze(
    schema: Schema,
    entry_counts: EntryCounts,
    config: AuditConfig,
    registry: PatternRegistry = DEFAULT_REGISTRY,
) -> DimensionResult:
    facts = detect_best_practices(schema, registry)
    checkpoints = best_practice_checkpoints(facts)
    result = DimensionResult(
        category=Dimension.BEST_PRACTICES.value,
        card=score_best_practices(facts),
        checkpoints=checkpoints,
        issues=best_practice_issues(facts),
        recommendations=[a for c in checkpoints for a in c.action_items][:10],
        details=facts.to_dict(),
    )
    logger.debug("best_practices_analyzed", score=result.score, naming_issues=len(facts.naming))
    return result
