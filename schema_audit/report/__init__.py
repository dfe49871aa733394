"""
Report assembly: aggregator, roadmap, strengths and executive summary.
"""

from schema_audit.report.aggregator import StrategicAuditReport, run_audit, run_isolated, sort_issues
from schema_audit.report.roadmap import Roadmap, RoadmapPhase, RoadmapTask, build_roadmap
from schema_audit.report.strengths import SchemaStrength, StrengthsReport, find_strengths
from schema_audit.report.summary import Assessment, ExecutiveSummary, build_summary

__all__ = [
    "Assessment",
    "ExecutiveSummary",
    "Roadmap",
    "RoadmapPhase",
    "RoadmapTask",
    "SchemaStrength",
    "StrategicAuditReport",
    "StrengthsReport",
    "build_roadmap",
    "build_summary",
    "find_strengths",
    "run_audit",
    "run_isolated",
    "sort_issues",
]
