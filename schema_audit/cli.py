"""
Command-line entry point: audit a schema JSON file and print the report.

  schema-audit schema.json --entry-counts counts.json --output report.json --pretty

Exit codes: 0 on success, 2 when an input file is missing or invalid.
Logs go to stderr; the report goes to stdout unless --output is given.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Sequence

from schema_audit.audit_logging import get_logger
from schema_audit.config import get_settings
from schema_audit.report import run_audit
from schema_audit.schema_graph import SchemaLoadError, load_entry_counts, load_schema

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 2


def _read_json(path: Path) -> Any:
    with path.open(encoding="utf-8") as f:
        return json.load(f)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schema-audit",
        description="Audit a headless CMS content schema (models, components, enums).",
    )
    parser.add_argument(
        "schema_json",
        type=Path,
        help="Path to schema JSON ({models, components, enums})",
    )
    parser.add_argument(
        "--entry-counts",
        type=Path,
        default=None,
        help="Path to entry counts JSON ({model: {draft, published}})",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the report here instead of stdout",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Indent the JSON report",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        schema = load_schema(_read_json(args.schema_json))
        counts_payload = _read_json(args.entry_counts) if args.entry_counts else None
        entry_counts = load_entry_counts(counts_payload)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, SchemaLoadError) as e:
        logger.error("audit_input_invalid", error=str(e), error_type=type(e).__name__)
        print(f"schema-audit: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    report = run_audit(schema, entry_counts, config=get_settings())
    text = json.dumps(report.to_dict(), indent=2 if args.pretty else None)
    if args.output:
        args.output.write_text(text + "\n", encoding="utf-8")
        logger.info("audit_report_written", path=str(args.output), overall_score=report.overall_score)
    else:
        print(text)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
