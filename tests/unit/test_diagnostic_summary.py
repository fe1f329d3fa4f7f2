# ABOUTME: Validates the end-of-test diagnostics summary layout for trace, operator, and scope sections.
# ABOUTME: Ensures displayed totals always equal the sizes of the underlying collections.

from __future__ import annotations

from discovery_harness.config import ASCII_GLYPHS
from discovery_harness.diagnostics.summary import format_diagnostic_summary, summary_counts
from discovery_harness.tracing.contracts import (
    DiscoveryDiagnostics,
    OperatorEvaluation,
    ScopeEvaluation,
    TraceLogEntry,
)


def _example_diagnostics() -> DiscoveryDiagnostics:
    logs = [TraceLogEntry(type="info", message=f"log {index}", source="test") for index in range(15)]
    return DiscoveryDiagnostics(
        logs=logs,
        operator_evaluations=[
            OperatorEvaluation(operator="==", success=True),
            OperatorEvaluation(operator="var", success=True),
            OperatorEvaluation(operator="!=", success=False),
        ],
        scope_evaluations=[
            ScopeEvaluation(
                scope_id="affection:close_actors_facing_each_other",
                actor_id="actor1",
                candidate_entities=["target1", "target2", "target3"],
                resolved_entities=["target1"],
            )
        ],
    )


def test_summary_renders_all_sections_with_example_counts() -> None:
    summary = format_diagnostic_summary(_example_diagnostics())

    expected = "\n".join(
        [
            "",
            "=== Action Discovery Diagnostics ===",
            "",
            "Trace Logs: 15 entries",
            "  Errors: 0",
            "",
            "Operator Evaluations: 3",
            "  - ==: ✅",
            "  - var: ✅",
            "  - !=: ❌",
            "",
            "Scope Evaluations: 1",
            "  - affection:close_actors_facing_each_other:",
            "      Candidates: 3",
            "      Resolved: 1",
            "      Filtered: 2",
            "",
        ]
    )
    assert summary == expected


def test_summary_lists_error_messages_under_error_count() -> None:
    diagnostics = DiscoveryDiagnostics(
        logs=[
            TraceLogEntry(type="info", message="start", source="test"),
            TraceLogEntry(type="error", message="scope exploded", source="test"),
            TraceLogEntry(type="error", message="bad prerequisite", source="test"),
        ]
    )

    lines = format_diagnostic_summary(diagnostics).split("\n")

    assert "Trace Logs: 3 entries" in lines
    errors_index = lines.index("  Errors: 2")
    assert lines[errors_index + 1] == "    - scope exploded"
    assert lines[errors_index + 2] == "    - bad prerequisite"


def test_summary_accepts_dict_payload_with_missing_collections() -> None:
    summary = format_diagnostic_summary({"logs": []})

    assert "Trace Logs: 0 entries" in summary
    assert "Operator Evaluations: 0" in summary
    assert "Scope Evaluations: 0" in summary


def test_summary_handles_none_as_empty_diagnostics() -> None:
    summary = format_diagnostic_summary(None)

    assert summary.startswith("\n=== Action Discovery Diagnostics ===\n")
    assert "Trace Logs: 0 entries" in summary


def test_summary_uses_ascii_glyphs_when_requested() -> None:
    summary = format_diagnostic_summary(_example_diagnostics(), glyphs=ASCII_GLYPHS)

    assert "  - ==: PASS" in summary
    assert "  - !=: FAIL" in summary
    assert "✅" not in summary


def test_summary_shows_scope_error_and_zero_filtered() -> None:
    diagnostics = DiscoveryDiagnostics(
        scope_evaluations=[
            ScopeEvaluation(
                scope_id="core:missing",
                actor_id="actor1",
                error="Scope 'core:missing' is not registered.",
            )
        ]
    )

    summary = format_diagnostic_summary(diagnostics)

    assert "      Candidates: 0" in summary
    assert "      Filtered: 0" in summary
    assert "      Error: Scope 'core:missing' is not registered." in summary


def test_summary_counts_match_collection_sizes() -> None:
    diagnostics = _example_diagnostics()

    counts = summary_counts(diagnostics)

    assert counts["trace_logs"] == len(diagnostics.logs)
    assert counts["errors"] == 0
    assert counts["operator_evaluations"] == len(diagnostics.operator_evaluations)
    assert counts["operators_passed"] == 2
    assert counts["operators_failed"] == 1
    assert counts["scope_evaluations"] == 1
    assert (counts["candidates"], counts["resolved"], counts["filtered"]) == (3, 1, 2)
