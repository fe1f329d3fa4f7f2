# ABOUTME: Defines dataclass contracts for trace logs, operator evaluations, and scope evaluations.
# ABOUTME: Provides stable serialization helpers used by trace capture, summaries, and artifacts.

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal


DIAGNOSTICS_SCHEMA_VERSION = "1.0.0"

LogType = Literal["info", "success", "failure", "step", "error", "data"]
LOG_TYPES = ("info", "success", "failure", "step", "error", "data")


def utc_now_rfc3339() -> str:
    return datetime.now(tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass
class TraceLogEntry:
    type: LogType
    message: str
    source: str
    timestamp: str = field(default_factory=utc_now_rfc3339)
    data: dict[str, Any] | None = None


@dataclass
class OperatorEvaluation:
    operator: str
    success: bool
    entity_id: str | None = None
    result: Any = None
    reason: str | None = None
    details: dict[str, Any] = field(default_factory=dict)
    timestamp: str = field(default_factory=utc_now_rfc3339)


@dataclass
class ScopeEvaluation:
    scope_id: str
    actor_id: str | None
    candidate_entities: list[str] = field(default_factory=list)
    resolved_entities: list[str] = field(default_factory=list)
    error: str | None = None
    timestamp: str = field(default_factory=utc_now_rfc3339)

    @property
    def candidate_count(self) -> int:
        return len(self.candidate_entities)

    @property
    def resolved_count(self) -> int:
        return len(self.resolved_entities)

    @property
    def filtered_count(self) -> int:
        return max(0, self.candidate_count - self.resolved_count)

    @property
    def filtered_entities(self) -> list[str]:
        resolved = set(self.resolved_entities)
        return [entity_id for entity_id in self.candidate_entities if entity_id not in resolved]


def _as_list(value: Any, *, path: str) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    raise ValueError(f"{path} must be a list.")


_TRUTHY_STRINGS = {"1", "true", "yes", "on"}


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY_STRINGS
    if isinstance(value, (int, float)):
        return value != 0
    return False


@dataclass
class DiscoveryDiagnostics:
    logs: list[TraceLogEntry] = field(default_factory=list)
    operator_evaluations: list[OperatorEvaluation] = field(default_factory=list)
    scope_evaluations: list[ScopeEvaluation] = field(default_factory=list)
    schema_version: str = DIAGNOSTICS_SCHEMA_VERSION

    @property
    def error_logs(self) -> list[TraceLogEntry]:
        return [entry for entry in self.logs if entry.type == "error"]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> DiscoveryDiagnostics:
        if not isinstance(payload, dict):
            raise ValueError("Diagnostics payload must be an object.")
        logs = [
            TraceLogEntry(
                type=item.get("type") or "info",
                message=str(item.get("message") or ""),
                source=str(item.get("source") or ""),
                timestamp=str(item.get("timestamp") or utc_now_rfc3339()),
                data=item.get("data") if isinstance(item.get("data"), dict) else None,
            )
            for item in _as_list(payload.get("logs"), path="logs")
            if isinstance(item, dict)
        ]
        operator_evaluations = [
            OperatorEvaluation(
                operator=str(item.get("operator") or ""),
                success=_as_bool(item.get("success")),
                entity_id=item.get("entity_id"),
                result=item.get("result"),
                reason=item.get("reason"),
                details=dict(item["details"]) if isinstance(item.get("details"), dict) else {},
                timestamp=str(item.get("timestamp") or utc_now_rfc3339()),
            )
            for item in _as_list(payload.get("operator_evaluations"), path="operator_evaluations")
            if isinstance(item, dict)
        ]
        scope_evaluations = [
            ScopeEvaluation(
                scope_id=str(item.get("scope_id") or ""),
                actor_id=item.get("actor_id"),
                candidate_entities=[
                    str(entity_id)
                    for entity_id in _as_list(item.get("candidate_entities"), path="candidate_entities")
                ],
                resolved_entities=[
                    str(entity_id)
                    for entity_id in _as_list(item.get("resolved_entities"), path="resolved_entities")
                ],
                error=item.get("error"),
                timestamp=str(item.get("timestamp") or utc_now_rfc3339()),
            )
            for item in _as_list(payload.get("scope_evaluations"), path="scope_evaluations")
            if isinstance(item, dict)
        ]
        return cls(
            logs=logs,
            operator_evaluations=operator_evaluations,
            scope_evaluations=scope_evaluations,
            schema_version=str(payload.get("schema_version") or DIAGNOSTICS_SCHEMA_VERSION),
        )
