"""Small helpers shared by the dimension analyzers."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from schema_audit.analysis_engine.models import CheckpointExample

_NON_ID = re.compile(r"[^a-z0-9]+")


def issue_id(*parts: str) -> str:
    """Deterministic kebab-case id from name parts."""
    joined = "-".join(p for p in parts if p)
    return _NON_ID.sub("-", joined.lower()).strip("-")


def preview(items: Sequence[str], limit: int = 5) -> str:
    """'a, b, c...' with an ellipsis when items were cut."""
    shown = ", ".join(items[:limit])
    return f"{shown}..." if len(items) > limit else shown


def example(items: Iterable[str], details: str | None = None) -> CheckpointExample:
    return CheckpointExample(items=list(items), details=details)


def qualified(owner: str, field_name: str) -> str:
    return f"{owner}.{field_name}"
