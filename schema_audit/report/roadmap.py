"""
Implementation roadmap: audit issues bucketed into phases by effort.

low -> Quick Wins, medium -> Medium Efforts, high -> Strategic Improvements,
followed by a fixed Maintenance phase. Task ids derive from issue ids so the
same schema always produces the same roadmap.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from schema_audit.analysis_engine.models import AuditIssue, Effort

PHASES: tuple[tuple[int, str, str, str, Effort], ...] = (
    (1, "Quick Wins", "1-2 weeks", "Low-effort improvements with immediate impact on data quality and documentation", Effort.LOW),
    (2, "Medium Efforts", "2-4 weeks", "Validation rules, cleanup, and targeted improvements", Effort.MEDIUM),
    (3, "Strategic Improvements", "4+ weeks", "Major architectural changes and refactoring", Effort.HIGH),
)

MAINTENANCE_TASKS: tuple[tuple[str, str, str, str], ...] = (
    (
        "maintenance-schema-review",
        "Establish quarterly schema review process",
        "Regular review of schema health, unused fields, and new patterns",
        "Prevents schema drift; maintains quality",
    ),
    (
        "maintenance-unused-elements",
        "Monitor unused fields and components",
        "Periodic cleanup of unused schema elements",
        "Keeps schema clean and manageable",
    ),
    (
        "maintenance-documentation",
        "Update documentation as schema evolves",
        "Keep field descriptions and guidelines current",
        "Ensures editor guidance remains accurate",
    ),
)

# Effort estimate thresholds on the number of high / medium tasks
HIGH_TASKS_FOR_MONTHS = 3
MEDIUM_TASKS_FOR_WEEKS = 5


@dataclass
class RoadmapTask:
    id: str
    task: str
    description: str
    effort: Effort
    impact: str
    category: str | None = None
    affected_items: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "task": self.task,
            "description": self.description,
            "effort": self.effort.value,
            "impact": self.impact,
            "category": self.category,
            "affected_items": list(self.affected_items),
        }


@dataclass
class RoadmapPhase:
    phase: int
    name: str
    duration: str
    description: str
    tasks: list[RoadmapTask] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "phase": self.phase,
            "name": self.name,
            "duration": self.duration,
            "description": self.description,
            "tasks": [t.to_dict() for t in self.tasks],
        }


@dataclass
class Roadmap:
    phases: list[RoadmapPhase]
    quick_wins: list[RoadmapTask]
    maintenance_tasks: list[RoadmapTask]
    total_estimated_effort: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "phases": [p.to_dict() for p in self.phases],
            "quick_wins": [t.to_dict() for t in self.quick_wins],
            "maintenance_tasks": [t.to_dict() for t in self.maintenance_tasks],
            "total_estimated_effort": self.total_estimated_effort,
        }


def task_from_issue(issue: AuditIssue) -> RoadmapTask:
    return RoadmapTask(
        id=f"task-{issue.id}",
        task=issue.recommendation,
        description=issue.description,
        effort=issue.effort,
        impact=issue.impact,
        category=issue.category,
        affected_items=list(issue.affected_items),
    )


def estimate_total_effort(tasks: Iterable[RoadmapTask]) -> str:
    tasks = list(tasks)
    high = sum(1 for t in tasks if t.effort == Effort.HIGH)
    medium = sum(1 for t in tasks if t.effort == Effort.MEDIUM)
    if high > HIGH_TASKS_FOR_MONTHS:
        return "2-3 months for full implementation"
    if high > 0 or medium > MEDIUM_TASKS_FOR_WEEKS:
        return "4-6 weeks for full implementation"
    return "2-3 weeks for full implementation"


def build_roadmap(issues: Iterable[AuditIssue]) -> Roadmap:
    """
    Phase tasks from already sorted issues.

    Positive findings (issues carrying only a score_bonus for good practice)
    produce no work. Empty phases are omitted; Maintenance is always present.
    """
    tasks: list[RoadmapTask] = []
    seen: set[str] = set()
    for issue in issues:
        if issue.score_bonus is not None or issue.id in seen:
            continue
        seen.add(issue.id)
        tasks.append(task_from_issue(issue))

    phases: list[RoadmapPhase] = []
    for number, name, duration, description, effort in PHASES:
        phase_tasks = [t for t in tasks if t.effort == effort]
        if phase_tasks:
            phases.append(RoadmapPhase(number, name, duration, description, phase_tasks))

    maintenance = [
        RoadmapTask(id=task_id, task=task, description=description, effort=Effort.LOW, impact=impact)
        for task_id, task, description, impact in MAINTENANCE_TASKS
    ]
    phases.append(
        RoadmapPhase(4, "Maintenance", "Ongoing", "Continuous improvement and governance", maintenance)
    )
    return Roadmap(
        phases=phases,
        quick_wins=[t for t in tasks if t.effort == Effort.LOW],
        maintenance_tasks=maintenance,
        total_estimated_effort=estimate_total_effort(tasks),
    )
