# ABOUTME: Provides an integration test bed that builds actors, runs discovery, and collects diagnostics.
# ABOUTME: Wires the entity manager, scope registry, and discovery service behind validated helper methods.

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from discovery_harness.config import DiagnosticsSettings, load_settings
from discovery_harness.diagnostics.artifacts import write_diagnostics
from discovery_harness.diagnostics.summary import format_diagnostic_summary
from discovery_harness.discovery.entities import (
    CLOSENESS_COMPONENT,
    Entity,
    EntityBuilder,
    EntityNotFoundError,
    SimpleEntityManager,
)
from discovery_harness.discovery.scopes import ScopeDefinition, ScopeRegistry
from discovery_harness.discovery.service import (
    ActionDefinition,
    ActionDiscoveryService,
    DiscoveredAction,
    DiscoveryError,
)
from discovery_harness.tracing.contracts import DiscoveryDiagnostics
from discovery_harness.tracing.scope_tracing import create_traced_scope_resolver
from discovery_harness.tracing.trace_context import TraceContext


@dataclass
class DiscoveryRun:
    actions: list[DiscoveredAction]
    diagnostics: DiscoveryDiagnostics | None = None
    errors: list[DiscoveryError] = field(default_factory=list)


def _entity_id(entity: Entity | str) -> str:
    return entity if isinstance(entity, str) else entity.id


class ActionDiscoveryTestBed:
    def __init__(self, *, settings: DiagnosticsSettings | None = None) -> None:
        self.settings = settings or load_settings()
        self.entity_manager = SimpleEntityManager()
        self.scope_registry = ScopeRegistry(entity_manager=self.entity_manager)
        self.service = ActionDiscoveryService(
            entity_manager=self.entity_manager,
            scope_resolver=self.scope_registry,
        )

    def register_scope(self, definition: ScopeDefinition) -> ScopeDefinition:
        return self.scope_registry.register(definition)

    def register_action(self, action: ActionDefinition) -> ActionDefinition:
        return self.service.register_action(action)

    def _require_entity(self, entity_id: str, message: str) -> Entity:
        entity = self.entity_manager.get_entity_instance(entity_id)
        if entity is None:
            raise EntityNotFoundError(message)
        return entity

    def create_actor_with_validation(
        self,
        actor_id: str,
        *,
        components: dict[str, dict[str, Any]] | None = None,
        location: str | None = None,
    ) -> Entity:
        builder = EntityBuilder(actor_id).as_actor()
        if location:
            builder.at_location(location)
        for component_id, data in (components or {}).items():
            builder.with_component(component_id, data)
        entity = builder.validate().build()
        return self.entity_manager.add_entity(entity)

    def establish_closeness_with_validation(self, actor: Entity | str, target: Entity | str) -> None:
        actor_id = _entity_id(actor)
        target_id = _entity_id(target)
        actor_entity = self._require_entity(
            actor_id,
            f"Cannot establish closeness: Actor '{actor_id}' not found in entity manager",
        )
        target_entity = self._require_entity(
            target_id,
            f"Cannot establish closeness: Target '{target_id}' not found in entity manager",
        )

        actor_partners = list((actor_entity.get_component(CLOSENESS_COMPONENT) or {}).get("partners") or [])
        target_partners = list((target_entity.get_component(CLOSENESS_COMPONENT) or {}).get("partners") or [])
        if target_id not in actor_partners:
            actor_partners.append(target_id)
        if actor_id not in target_partners:
            target_partners.append(actor_id)

        self.entity_manager.add_component(actor_id, CLOSENESS_COMPONENT, {"partners": actor_partners})
        self.entity_manager.add_component(target_id, CLOSENESS_COMPONENT, {"partners": target_partners})

    def create_actor_target_scenario(
        self,
        *,
        actor_id: str = "actor1",
        target_id: str = "target1",
        location: str = "test-location",
        close_proximity: bool = True,
        actor_components: dict[str, dict[str, Any]] | None = None,
        target_components: dict[str, dict[str, Any]] | None = None,
    ) -> tuple[Entity, Entity]:
        actor = self.create_actor_with_validation(actor_id, components=actor_components, location=location)
        target = self.create_actor_with_validation(target_id, components=target_components, location=location)
        if close_proximity:
            self.establish_closeness_with_validation(actor, target)
        return (
            self._require_entity(actor_id, f"Actor '{actor_id}' not found"),
            self._require_entity(target_id, f"Target '{target_id}' not found"),
        )

    def discover_actions_with_diagnostics(
        self,
        actor: Entity | str,
        *,
        include_diagnostics: bool = False,
        trace_scope_resolution: bool = False,
        context: dict[str, Any] | None = None,
    ) -> DiscoveryRun:
        actor_id = _entity_id(actor)
        actor_entity = self._require_entity(actor_id, f"Cannot discover actions: Actor '{actor_id}' not found")

        trace = TraceContext() if include_diagnostics else None
        original_resolver = self.service.scope_resolver
        if trace is not None and trace_scope_resolution:
            self.service.scope_resolver = create_traced_scope_resolver(original_resolver, trace)
        try:
            result = self.service.get_valid_actions(actor_entity, context, trace=trace)
        finally:
            self.service.scope_resolver = original_resolver

        return DiscoveryRun(
            actions=result.actions,
            diagnostics=trace.to_diagnostics() if trace is not None else None,
            errors=result.errors,
        )

    def format_diagnostic_summary(self, diagnostics: DiscoveryDiagnostics | dict[str, Any] | None) -> str:
        return format_diagnostic_summary(diagnostics, glyphs=self.settings.glyphs)

    def save_diagnostics(self, diagnostics: DiscoveryDiagnostics, *, run_id: str | None = None) -> Path:
        return write_diagnostics(diagnostics, run_id=run_id, artifacts_root=self.settings.artifacts_dir)

    def cleanup(self) -> None:
        self.entity_manager.clear()
