# ABOUTME: Registers named entity scopes and resolves them into candidate and filtered target sets.
# ABOUTME: Supplies reusable candidate sources such as closeness partners and same-location actors.

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from discovery_harness.discovery.entities import (
    ACTOR_COMPONENT,
    Entity,
    SimpleEntityManager,
)
from discovery_harness.logic.evaluator import LogicEvaluator
from discovery_harness.tracing.scope_tracing import ScopeResolution
from discovery_harness.tracing.trace_context import TraceContext


CandidateSource = Callable[[Entity, SimpleEntityManager], list[str]]

SELF_SCOPE = "self"


class ScopeNotFoundError(RuntimeError):
    pass


@dataclass
class ScopeDefinition:
    scope_id: str
    source: CandidateSource
    filter: dict[str, Any] | None = None
    includes_actor: bool = False


def self_source() -> CandidateSource:
    def _source(actor: Entity, entity_manager: SimpleEntityManager) -> list[str]:
        del entity_manager
        return [actor.id]

    return _source


def component_holders(component_id: str) -> CandidateSource:
    def _source(actor: Entity, entity_manager: SimpleEntityManager) -> list[str]:
        del actor
        return entity_manager.get_entity_ids_with_component(component_id)

    return _source


def component_list(component_id: str, field: str) -> CandidateSource:
    def _source(actor: Entity, entity_manager: SimpleEntityManager) -> list[str]:
        del entity_manager
        data = actor.get_component(component_id) or {}
        values = data.get(field)
        if not isinstance(values, list):
            return []
        return [str(value) for value in values if value]

    return _source


def same_location(component_id: str = ACTOR_COMPONENT) -> CandidateSource:
    def _source(actor: Entity, entity_manager: SimpleEntityManager) -> list[str]:
        location_id = actor.location_id
        if location_id is None:
            return []
        matches: list[str] = []
        for entity_id in entity_manager.get_entity_ids_with_component(component_id):
            entity = entity_manager.get_entity_instance(entity_id)
            if entity is not None and entity.location_id == location_id:
                matches.append(entity_id)
        return matches

    return _source


def _entity_view(entity: Entity) -> dict[str, Any]:
    return {"id": entity.id, "components": entity.components}


class ScopeRegistry:
    def __init__(
        self,
        *,
        entity_manager: SimpleEntityManager,
        evaluator: LogicEvaluator | None = None,
    ) -> None:
        self._entity_manager = entity_manager
        self._evaluator = evaluator or LogicEvaluator(entity_manager=entity_manager)
        self._definitions: dict[str, ScopeDefinition] = {}
        self.register(ScopeDefinition(scope_id=SELF_SCOPE, source=self_source(), includes_actor=True))

    def register(self, definition: ScopeDefinition) -> ScopeDefinition:
        if not str(definition.scope_id or "").strip():
            raise ValueError("Scope definition requires a non-empty scope_id.")
        self._definitions[definition.scope_id] = definition
        return definition

    def get(self, scope_id: str) -> ScopeDefinition:
        definition = self._definitions.get(scope_id)
        if definition is None:
            raise ScopeNotFoundError(f"Scope '{scope_id}' is not registered.")
        return definition

    def _candidates(self, definition: ScopeDefinition, actor: Entity) -> list[str]:
        candidates: list[str] = []
        for entity_id in definition.source(actor, self._entity_manager):
            if entity_id in candidates:
                continue
            if entity_id == actor.id and not definition.includes_actor:
                continue
            if entity_id != actor.id and self._entity_manager.get_entity_instance(entity_id) is None:
                continue
            candidates.append(entity_id)
        return candidates

    def resolve(
        self,
        scope_id: str,
        actor: Entity,
        *,
        trace: TraceContext | None = None,
    ) -> ScopeResolution:
        definition = self.get(scope_id)
        candidates = self._candidates(definition, actor)
        if definition.filter is None:
            return ScopeResolution(
                scope_id=scope_id,
                candidate_entities=candidates,
                resolved_entities=list(candidates),
            )

        resolved: list[str] = []
        actor_view = _entity_view(actor)
        for entity_id in candidates:
            entity = self._entity_manager.get_entity_instance(entity_id)
            entity_view = _entity_view(entity) if entity is not None else actor_view
            matched = self._evaluator.evaluate(
                definition.filter,
                {"actor": actor_view, "entity": entity_view},
                trace=trace,
                entity_id=entity_id,
            )
            if matched:
                resolved.append(entity_id)
        return ScopeResolution(
            scope_id=scope_id,
            candidate_entities=candidates,
            resolved_entities=resolved,
        )
