"""
Schema audit engine for headless content platforms.

Consumes an introspected schema plus entry counts and produces a strategic
audit report: dimension scores, findings, duplicates, roadmap.
"""

__version__ = "0.1.0"
