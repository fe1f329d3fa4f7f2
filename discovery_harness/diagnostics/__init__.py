# ABOUTME: Exposes diagnostics summary rendering, tabular views, and artifact persistence helpers.
# ABOUTME: Keeps a stable import location for end-of-test reporting.

from discovery_harness.diagnostics.artifacts import load_diagnostics, write_diagnostics
from discovery_harness.diagnostics.frames import (
    logs_frame,
    operator_frame,
    operator_outcome_table,
    scope_frame,
)
from discovery_harness.diagnostics.summary import format_diagnostic_summary, summary_counts

__all__ = [
    "format_diagnostic_summary",
    "load_diagnostics",
    "logs_frame",
    "operator_frame",
    "operator_outcome_table",
    "scope_frame",
    "summary_counts",
    "write_diagnostics",
]
