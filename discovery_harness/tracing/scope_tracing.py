# ABOUTME: Defines the scope resolver protocol and a tracing wrapper that records scope evaluations.
# ABOUTME: Captures candidate/resolved entity sets and resolver failures into a TraceContext.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from discovery_harness.tracing.trace_context import TraceContext

if TYPE_CHECKING:
    from discovery_harness.discovery.entities import Entity


SOURCE = "ScopeResolver"


@dataclass
class ScopeResolution:
    scope_id: str
    candidate_entities: list[str] = field(default_factory=list)
    resolved_entities: list[str] = field(default_factory=list)


class ScopeResolver(Protocol):
    def resolve(
        self,
        scope_id: str,
        actor: Entity,
        *,
        trace: TraceContext | None = None,
    ) -> ScopeResolution:
        raise NotImplementedError


class TracedScopeResolver:
    def __init__(self, *, resolver: ScopeResolver, trace: TraceContext) -> None:
        self._resolver = resolver
        self._trace = trace

    @property
    def inner(self) -> ScopeResolver:
        return self._resolver

    def resolve(
        self,
        scope_id: str,
        actor: Entity,
        *,
        trace: TraceContext | None = None,
    ) -> ScopeResolution:
        self._trace.step(
            f"Resolving scope '{scope_id}' for actor '{actor.id}'",
            SOURCE,
            {"scope_id": scope_id, "actor_id": actor.id},
        )
        try:
            resolution = self._resolver.resolve(scope_id, actor, trace=trace or self._trace)
        except Exception as exc:
            self._trace.capture_scope_evaluation(
                scope_id,
                actor_id=actor.id,
                candidate_entities=[],
                resolved_entities=[],
                error=str(exc),
            )
            self._trace.error(
                f"Scope '{scope_id}' failed to resolve: {exc}",
                SOURCE,
                {"scope_id": scope_id, "actor_id": actor.id},
            )
            raise

        evaluation = self._trace.capture_scope_evaluation(
            scope_id,
            actor_id=actor.id,
            candidate_entities=resolution.candidate_entities,
            resolved_entities=resolution.resolved_entities,
        )
        self._trace.success(
            f"Scope '{scope_id}' resolved {evaluation.resolved_count} of "
            f"{evaluation.candidate_count} candidate(s)",
            SOURCE,
            {
                "scope_id": scope_id,
                "resolved": list(evaluation.resolved_entities),
                "filtered": evaluation.filtered_entities,
            },
        )
        return resolution


def create_traced_scope_resolver(resolver: ScopeResolver, trace: TraceContext) -> TracedScopeResolver:
    if isinstance(resolver, TracedScopeResolver):
        resolver = resolver.inner
    return TracedScopeResolver(resolver=resolver, trace=trace)
