"""
Structured logging for the schema audit engine.

get_logger() per module; run_context() around one audit run.
"""

from schema_audit.audit_logging.logger import bind_run, configure_logging, get_logger, run_context

__all__ = ["bind_run", "configure_logging", "get_logger", "run_context"]
