# ABOUTME: Implements the trace log store and evaluation accumulator passed through action discovery.
# ABOUTME: Collects typed log entries plus operator and scope evaluations for end-of-test diagnostics.

from __future__ import annotations

import copy
from typing import Any

from discovery_harness.tracing.contracts import (
    LOG_TYPES,
    DiscoveryDiagnostics,
    LogType,
    OperatorEvaluation,
    ScopeEvaluation,
    TraceLogEntry,
)


class TraceContext:
    def __init__(self) -> None:
        self._logs: list[TraceLogEntry] = []
        self._operator_evaluations: list[OperatorEvaluation] = []
        self._scope_evaluations: list[ScopeEvaluation] = []

    @property
    def logs(self) -> list[TraceLogEntry]:
        return list(self._logs)

    def add_log(
        self,
        type: LogType,
        message: str,
        source: str,
        data: dict[str, Any] | None = None,
    ) -> TraceLogEntry:
        if type not in LOG_TYPES:
            raise ValueError(f"Unknown trace log type: {type}. Expected one of {list(LOG_TYPES)}.")
        entry = TraceLogEntry(
            type=type,
            message=str(message),
            source=str(source),
            data=dict(data) if data is not None else None,
        )
        self._logs.append(entry)
        return entry

    def info(self, message: str, source: str, data: dict[str, Any] | None = None) -> TraceLogEntry:
        return self.add_log("info", message, source, data)

    def success(self, message: str, source: str, data: dict[str, Any] | None = None) -> TraceLogEntry:
        return self.add_log("success", message, source, data)

    def failure(self, message: str, source: str, data: dict[str, Any] | None = None) -> TraceLogEntry:
        return self.add_log("failure", message, source, data)

    def step(self, message: str, source: str, data: dict[str, Any] | None = None) -> TraceLogEntry:
        return self.add_log("step", message, source, data)

    def error(self, message: str, source: str, data: dict[str, Any] | None = None) -> TraceLogEntry:
        return self.add_log("error", message, source, data)

    def data(self, message: str, source: str, data: dict[str, Any] | None = None) -> TraceLogEntry:
        return self.add_log("data", message, source, data)

    def errors(self) -> list[TraceLogEntry]:
        return [entry for entry in self._logs if entry.type == "error"]

    def capture_operator_evaluation(
        self,
        operator: str,
        *,
        success: bool | None = None,
        result: Any = None,
        entity_id: str | None = None,
        reason: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> OperatorEvaluation:
        evaluation = OperatorEvaluation(
            operator=str(operator),
            success=bool(result) if success is None else bool(success),
            entity_id=entity_id,
            result=result,
            reason=reason,
            details=dict(details or {}),
        )
        self._operator_evaluations.append(evaluation)
        return evaluation

    def capture_scope_evaluation(
        self,
        scope_id: str,
        *,
        actor_id: str | None,
        candidate_entities: list[str],
        resolved_entities: list[str],
        error: str | None = None,
    ) -> ScopeEvaluation:
        evaluation = ScopeEvaluation(
            scope_id=str(scope_id),
            actor_id=actor_id,
            candidate_entities=[str(entity_id) for entity_id in candidate_entities],
            resolved_entities=[str(entity_id) for entity_id in resolved_entities],
            error=error,
        )
        self._scope_evaluations.append(evaluation)
        return evaluation

    def get_operator_evaluations(self) -> list[OperatorEvaluation]:
        return list(self._operator_evaluations)

    def get_scope_evaluations(self) -> list[ScopeEvaluation]:
        return list(self._scope_evaluations)

    def clear(self) -> None:
        self._logs.clear()
        self._operator_evaluations.clear()
        self._scope_evaluations.clear()

    def to_diagnostics(self) -> DiscoveryDiagnostics:
        return DiscoveryDiagnostics(
            logs=copy.deepcopy(self._logs),
            operator_evaluations=copy.deepcopy(self._operator_evaluations),
            scope_evaluations=copy.deepcopy(self._scope_evaluations),
        )
