# ABOUTME: Builds pandas DataFrame views of discovery diagnostics for tabular inspection.
# ABOUTME: Aggregates operator outcomes per operator name and exposes stable column layouts.

from __future__ import annotations

import pandas as pd

from discovery_harness.tracing.contracts import DiscoveryDiagnostics


LOG_COLUMNS = ["type", "message", "source", "timestamp"]
OPERATOR_COLUMNS = ["operator", "success", "entity_id", "reason", "timestamp"]
SCOPE_COLUMNS = ["scope_id", "actor_id", "candidates", "resolved", "filtered", "error"]
OUTCOME_COLUMNS = ["operator", "passed", "failed", "total"]


def logs_frame(diagnostics: DiscoveryDiagnostics) -> pd.DataFrame:
    rows = [
        {
            "type": entry.type,
            "message": entry.message,
            "source": entry.source,
            "timestamp": entry.timestamp,
        }
        for entry in diagnostics.logs
    ]
    return pd.DataFrame(rows, columns=LOG_COLUMNS)


def operator_frame(diagnostics: DiscoveryDiagnostics) -> pd.DataFrame:
    rows = [
        {
            "operator": evaluation.operator,
            "success": bool(evaluation.success),
            "entity_id": evaluation.entity_id,
            "reason": evaluation.reason,
            "timestamp": evaluation.timestamp,
        }
        for evaluation in diagnostics.operator_evaluations
    ]
    return pd.DataFrame(rows, columns=OPERATOR_COLUMNS)


def scope_frame(diagnostics: DiscoveryDiagnostics) -> pd.DataFrame:
    rows = [
        {
            "scope_id": evaluation.scope_id,
            "actor_id": evaluation.actor_id,
            "candidates": evaluation.candidate_count,
            "resolved": evaluation.resolved_count,
            "filtered": evaluation.filtered_count,
            "error": evaluation.error,
        }
        for evaluation in diagnostics.scope_evaluations
    ]
    return pd.DataFrame(rows, columns=SCOPE_COLUMNS)


def operator_outcome_table(diagnostics: DiscoveryDiagnostics) -> pd.DataFrame:
    frame = operator_frame(diagnostics)
    if frame.empty:
        return pd.DataFrame(columns=OUTCOME_COLUMNS)
    successes = frame["success"].astype(bool)
    table = (
        frame.assign(passed=successes.astype(int), failed=(~successes).astype(int))
        .groupby("operator", sort=True)[["passed", "failed"]]
        .sum()
        .reset_index()
    )
    table["total"] = table["passed"] + table["failed"]
    return table[OUTCOME_COLUMNS].reset_index(drop=True)
