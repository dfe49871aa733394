"""
Structured logging for schema audits.

Responsibilities:
- Configure structlog once per process: JSON lines for pipelines, a
  console renderer for terminals (LOG_FORMAT=console).
- Stamp each JSON record with timestamp, level, logger and event_type.
- Hand out module loggers and run-scoped loggers carrying run_id.

Records go to stderr; the CLI owns stdout for the report. This module
imports nothing from schema_audit so any module may import it.
"""

from __future__ import annotations

import logging
import os
import sys
from contextlib import contextmanager
from typing import Any, Iterator

import structlog
from structlog.typing import EventDict, Processor

LOG_FORMATS = ("json", "console")
RUN_LOGGER_NAME = "schema_audit.run"


def level_from_env() -> int:
    """LOG_LEVEL as a logging level; unknown names mean INFO."""
    level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def format_from_env() -> str:
    fmt = os.getenv("LOG_FORMAT", "json").strip().lower()
    return fmt if fmt in LOG_FORMATS else "json"


def event_to_event_type(_logger: Any, _method: str, event_dict: EventDict) -> EventDict:
    """The positional event becomes event_type; message mirrors it unless given."""
    event = event_dict.pop("event", None)
    if event is not None:
        event_dict.setdefault("event_type", event)
        event_dict.setdefault("message", str(event))
    return event_dict


def build_processors(fmt: str) -> list[Processor]:
    chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True, key="timestamp"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if fmt == "console":
        # ConsoleRenderer reads the event key itself
        chain.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))
    else:
        chain.extend([event_to_event_type, structlog.processors.JSONRenderer(sort_keys=True)])
    return chain


def configure_logging(level: int | None = None, fmt: str | None = None) -> None:
    structlog.configure(
        processors=build_processors(fmt or format_from_env()),
        wrapper_class=structlog.make_filtering_bound_logger(level_from_env() if level is None else level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


if not structlog.is_configured():
    configure_logging()


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Module logger with its name bound under "logger".

        logger = get_logger(__name__)
        logger.info("duplicate_groups_detected", kind="model", groups=2)
    """
    return structlog.get_logger(name).bind(logger=name)


def bind_run(run_id: str) -> structlog.BoundLogger:
    return get_logger(RUN_LOGGER_NAME).bind(run_id=run_id)


@contextmanager
def run_context(run_id: str, **context: Any) -> Iterator[structlog.BoundLogger]:
    """
    Tag every record logged inside the block with run_id.

    Module loggers pick run_id up through contextvars; the yielded logger
    carries it as bound context for the run's own start/finish events.
    """
    with structlog.contextvars.bound_contextvars(run_id=run_id, **context):
        yield bind_run(run_id)
