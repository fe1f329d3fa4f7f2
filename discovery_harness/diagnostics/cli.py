# ABOUTME: Provides a command-line entrypoint that renders a saved diagnostics artifact as a summary.
# ABOUTME: Supports JSON counts, a per-operator outcome table, ASCII glyphs, and error-driven exit codes.

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from discovery_harness.config import ASCII_GLYPHS, load_settings
from discovery_harness.diagnostics.artifacts import load_diagnostics
from discovery_harness.diagnostics.frames import OUTCOME_COLUMNS, operator_outcome_table
from discovery_harness.diagnostics.summary import format_diagnostic_summary, summary_counts


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render an action discovery diagnostics artifact.")
    parser.add_argument("--input", required=True, help="Path to a diagnostics.json artifact.")
    parser.add_argument("--json", action="store_true", help="Print summary counts as JSON instead of text.")
    parser.add_argument("--table", action="store_true", help="Also print per-operator pass/fail counts.")
    parser.add_argument("--ascii", action="store_true", help="Use PASS/FAIL instead of emoji glyphs.")
    parser.add_argument("--fail-on-errors", action="store_true")
    return parser


def _print_operator_table(rows: list[dict[str, Any]]) -> None:
    if not rows:
        print("No operator evaluations were recorded.")
        return
    widths: dict[str, int] = {header: len(header) for header in OUTCOME_COLUMNS}
    for row in rows:
        for header in OUTCOME_COLUMNS:
            widths[header] = max(widths[header], len(str(row.get(header, ""))))
    print(" | ".join(header.ljust(widths[header]) for header in OUTCOME_COLUMNS))
    print("-+-".join("-" * widths[header] for header in OUTCOME_COLUMNS))
    for row in rows:
        print(" | ".join(str(row.get(header, "")).ljust(widths[header]) for header in OUTCOME_COLUMNS))


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = load_settings()
    try:
        diagnostics = load_diagnostics(args.input)
    except (OSError, ValueError) as exc:
        print(f"Unable to read diagnostics from {args.input}: {exc}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(summary_counts(diagnostics), indent=2, sort_keys=True))
    else:
        glyphs = ASCII_GLYPHS if args.ascii else settings.glyphs
        print(format_diagnostic_summary(diagnostics, glyphs=glyphs))

    if args.table:
        _print_operator_table(operator_outcome_table(diagnostics).to_dict(orient="records"))

    if args.fail_on_errors and diagnostics.error_logs:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
