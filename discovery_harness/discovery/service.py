# ABOUTME: Discovers the valid actions for an actor from action definitions, prerequisites, and scopes.
# ABOUTME: Writes per-stage trace entries and isolates per-action failures as discovery errors.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from discovery_harness.discovery.entities import Entity, SimpleEntityManager
from discovery_harness.discovery.scopes import SELF_SCOPE
from discovery_harness.logic.evaluator import LogicEvaluator
from discovery_harness.tracing.scope_tracing import ScopeResolver
from discovery_harness.tracing.trace_context import TraceContext


SOURCE = "ActionDiscoveryService"
TARGET_PLACEHOLDER = "{target}"


@dataclass
class ActionDefinition:
    id: str
    name: str
    scope: str
    template: str
    prerequisites: list[dict[str, Any]] = field(default_factory=list)
    required_components: list[str] = field(default_factory=list)


@dataclass
class DiscoveredAction:
    id: str
    name: str
    command: str
    target_id: str | None = None


@dataclass
class DiscoveryError:
    action_id: str
    stage: str
    message: str


@dataclass
class DiscoveryResult:
    actions: list[DiscoveredAction] = field(default_factory=list)
    errors: list[DiscoveryError] = field(default_factory=list)


class ActionDiscoveryService:
    def __init__(
        self,
        *,
        entity_manager: SimpleEntityManager,
        scope_resolver: ScopeResolver,
        actions: list[ActionDefinition] | None = None,
        evaluator: LogicEvaluator | None = None,
    ) -> None:
        self._entity_manager = entity_manager
        self.scope_resolver = scope_resolver
        self._actions: list[ActionDefinition] = list(actions or [])
        self._evaluator = evaluator or LogicEvaluator(entity_manager=entity_manager)

    @property
    def actions(self) -> list[ActionDefinition]:
        return list(self._actions)

    def register_action(self, action: ActionDefinition) -> ActionDefinition:
        self._actions = [existing for existing in self._actions if existing.id != action.id]
        self._actions.append(action)
        return action

    def _missing_components(self, actor: Entity, action: ActionDefinition) -> list[str]:
        return [component_id for component_id in action.required_components if not actor.has_component(component_id)]

    def _prerequisites_pass(
        self,
        actor: Entity,
        action: ActionDefinition,
        context: dict[str, Any],
        trace: TraceContext | None,
    ) -> bool:
        data = {"actor": {"id": actor.id, "components": actor.components}, "context": context}
        for index, prerequisite in enumerate(action.prerequisites):
            logic = prerequisite.get("logic", prerequisite) if isinstance(prerequisite, dict) else prerequisite
            if not self._evaluator.evaluate(logic, data, trace=trace, entity_id=actor.id):
                if trace is not None:
                    message = prerequisite.get("failure_message") if isinstance(prerequisite, dict) else None
                    trace.failure(
                        f"Action '{action.id}' failed prerequisite {index}"
                        + (f": {message}" if message else ""),
                        SOURCE,
                        {"action_id": action.id, "prerequisite_index": index},
                    )
                return False
        return True

    def _format_command(self, action: ActionDefinition, target_id: str | None) -> str:
        if target_id is None or TARGET_PLACEHOLDER not in action.template:
            return action.template
        target = self._entity_manager.get_entity_instance(target_id)
        display_name = target.display_name if target is not None else target_id
        return action.template.replace(TARGET_PLACEHOLDER, display_name)

    def _discover_one(
        self,
        actor: Entity,
        action: ActionDefinition,
        context: dict[str, Any],
        trace: TraceContext | None,
    ) -> list[DiscoveredAction]:
        missing = self._missing_components(actor, action)
        if missing:
            if trace is not None:
                trace.failure(
                    f"Action '{action.id}' skipped; actor lacks components {missing}",
                    SOURCE,
                    {"action_id": action.id, "missing_components": missing},
                )
            return []

        if not self._prerequisites_pass(actor, action, context, trace):
            return []

        resolution = self.scope_resolver.resolve(action.scope, actor, trace=trace)
        if action.scope == SELF_SCOPE:
            return [
                DiscoveredAction(
                    id=action.id,
                    name=action.name,
                    command=self._format_command(action, None),
                    target_id=None,
                )
            ]
        return [
            DiscoveredAction(
                id=action.id,
                name=action.name,
                command=self._format_command(action, target_id),
                target_id=target_id,
            )
            for target_id in resolution.resolved_entities
        ]

    def get_valid_actions(
        self,
        actor: Entity,
        context: dict[str, Any] | None = None,
        *,
        trace: TraceContext | None = None,
    ) -> DiscoveryResult:
        active_context = dict(context or {})
        result = DiscoveryResult()
        if trace is not None:
            trace.info(
                f"Starting action discovery for actor '{actor.id}'",
                SOURCE,
                {"actor_id": actor.id, "candidate_actions": len(self._actions)},
            )

        for action in self._actions:
            if trace is not None:
                trace.step(f"Evaluating action '{action.id}'", SOURCE, {"action_id": action.id})
            try:
                discovered = self._discover_one(actor, action, active_context, trace)
            except Exception as exc:
                result.errors.append(DiscoveryError(action_id=action.id, stage="discovery", message=str(exc)))
                if trace is not None:
                    trace.error(
                        f"Action '{action.id}' failed during discovery: {exc}",
                        SOURCE,
                        {"action_id": action.id, "error_type": type(exc).__name__},
                    )
                continue
            result.actions.extend(discovered)
            if discovered and trace is not None:
                trace.success(
                    f"Action '{action.id}' discovered with {len(discovered)} command(s)",
                    SOURCE,
                    {"action_id": action.id, "targets": [item.target_id for item in discovered]},
                )

        if trace is not None:
            trace.data(
                f"Discovery finished with {len(result.actions)} action(s) and {len(result.errors)} error(s)",
                SOURCE,
                {"action_count": len(result.actions), "error_count": len(result.errors)},
            )
        return result
