# ABOUTME: Renders discovery diagnostics into the human-readable end-of-test summary block.
# ABOUTME: Reports trace log and error counts, per-operator outcomes, and per-scope candidate breakdowns.

from __future__ import annotations

from typing import Any

from discovery_harness.config import UNICODE_GLYPHS, SummaryGlyphs
from discovery_harness.tracing.contracts import DiscoveryDiagnostics


SUMMARY_TITLE = "=== Action Discovery Diagnostics ==="


def _coerce(diagnostics: DiscoveryDiagnostics | dict[str, Any] | None) -> DiscoveryDiagnostics:
    if diagnostics is None:
        return DiscoveryDiagnostics()
    if isinstance(diagnostics, DiscoveryDiagnostics):
        return diagnostics
    return DiscoveryDiagnostics.from_dict(diagnostics)


def format_diagnostic_summary(
    diagnostics: DiscoveryDiagnostics | dict[str, Any] | None,
    *,
    glyphs: SummaryGlyphs | None = None,
) -> str:
    active = _coerce(diagnostics)
    marks = glyphs or UNICODE_GLYPHS
    lines = ["", SUMMARY_TITLE, ""]

    error_logs = active.error_logs
    lines.append(f"Trace Logs: {len(active.logs)} entries")
    lines.append(f"  Errors: {len(error_logs)}")
    for entry in error_logs:
        lines.append(f"    - {entry.message}")
    lines.append("")

    lines.append(f"Operator Evaluations: {len(active.operator_evaluations)}")
    for evaluation in active.operator_evaluations:
        mark = marks.passed if evaluation.success else marks.failed
        lines.append(f"  - {evaluation.operator}: {mark}")
    lines.append("")

    lines.append(f"Scope Evaluations: {len(active.scope_evaluations)}")
    for evaluation in active.scope_evaluations:
        lines.append(f"  - {evaluation.scope_id}:")
        lines.append(f"      Candidates: {evaluation.candidate_count}")
        lines.append(f"      Resolved: {evaluation.resolved_count}")
        lines.append(f"      Filtered: {evaluation.filtered_count}")
        if evaluation.error:
            lines.append(f"      Error: {evaluation.error}")
    lines.append("")

    return "\n".join(lines)


def summary_counts(diagnostics: DiscoveryDiagnostics | dict[str, Any] | None) -> dict[str, int]:
    active = _coerce(diagnostics)
    passed = sum(1 for evaluation in active.operator_evaluations if evaluation.success)
    return {
        "trace_logs": len(active.logs),
        "errors": len(active.error_logs),
        "operator_evaluations": len(active.operator_evaluations),
        "operators_passed": passed,
        "operators_failed": len(active.operator_evaluations) - passed,
        "scope_evaluations": len(active.scope_evaluations),
        "candidates": sum(evaluation.candidate_count for evaluation in active.scope_evaluations),
        "resolved": sum(evaluation.resolved_count for evaluation in active.scope_evaluations),
        "filtered": sum(evaluation.filtered_count for evaluation in active.scope_evaluations),
    }
