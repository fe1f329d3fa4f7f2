# ABOUTME: Provides an in-memory entity manager and a validating entity builder for discovery tests.
# ABOUTME: Stores namespaced component data per entity and rejects malformed entity definitions early.

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any


ACTOR_COMPONENT = "core:actor"
NAME_COMPONENT = "core:name"
POSITION_COMPONENT = "core:position"
CLOSENESS_COMPONENT = "positioning:closeness"


class EntityValidationError(RuntimeError):
    pass


class EntityNotFoundError(RuntimeError):
    pass


@dataclass
class Entity:
    id: str
    components: dict[str, dict[str, Any]] = field(default_factory=dict)

    def has_component(self, component_id: str) -> bool:
        return component_id in self.components

    def get_component(self, component_id: str) -> dict[str, Any] | None:
        return self.components.get(component_id)

    @property
    def display_name(self) -> str:
        name = self.components.get(NAME_COMPONENT) or {}
        text = str(name.get("text") or "").strip()
        return text or self.id

    @property
    def location_id(self) -> str | None:
        position = self.components.get(POSITION_COMPONENT) or {}
        location = position.get("locationId")
        return str(location) if location else None


def _is_namespaced(component_id: Any) -> bool:
    if not isinstance(component_id, str):
        return False
    namespace, sep, name = component_id.partition(":")
    return bool(sep and namespace.strip() and name.strip())


class SimpleEntityManager:
    def __init__(self, entities: list[Entity] | None = None) -> None:
        self._entities: dict[str, Entity] = {}
        for entity in entities or []:
            self.add_entity(entity)

    @property
    def entity_ids(self) -> list[str]:
        return list(self._entities)

    def add_entity(self, entity: Entity) -> Entity:
        stored = Entity(id=entity.id, components=copy.deepcopy(entity.components))
        self._entities[entity.id] = stored
        return stored

    def get_entity_instance(self, entity_id: str) -> Entity | None:
        return self._entities.get(entity_id)

    def remove_entity(self, entity_id: str) -> bool:
        return self._entities.pop(entity_id, None) is not None

    def add_component(self, entity_id: str, component_id: str, data: dict[str, Any]) -> None:
        entity = self._entities.get(entity_id)
        if entity is None:
            raise EntityNotFoundError(f"Entity '{entity_id}' not found in entity manager")
        if not _is_namespaced(component_id):
            raise EntityValidationError(f"Component id must be namespaced (mod:component): {component_id!r}")
        entity.components[component_id] = copy.deepcopy(data)

    def remove_component(self, entity_id: str, component_id: str) -> bool:
        entity = self._entities.get(entity_id)
        if entity is None:
            return False
        return entity.components.pop(component_id, None) is not None

    def get_component_data(self, entity_id: str, component_id: str) -> dict[str, Any] | None:
        entity = self._entities.get(entity_id)
        if entity is None:
            return None
        return entity.components.get(component_id)

    def has_component(self, entity_id: str, component_id: str) -> bool:
        entity = self._entities.get(entity_id)
        return entity is not None and entity.has_component(component_id)

    def get_entity_ids_with_component(self, component_id: str) -> list[str]:
        return [entity_id for entity_id, entity in self._entities.items() if entity.has_component(component_id)]

    def clear(self) -> None:
        self._entities.clear()


class EntityBuilder:
    def __init__(self, entity_id: str) -> None:
        self._entity_id = entity_id
        self._components: dict[Any, Any] = {}

    def as_actor(self) -> EntityBuilder:
        self._components[ACTOR_COMPONENT] = {}
        return self

    def with_name(self, name: str) -> EntityBuilder:
        self._components[NAME_COMPONENT] = {"text": name}
        return self

    def at_location(self, location_id: str) -> EntityBuilder:
        self._components[POSITION_COMPONENT] = {"locationId": location_id}
        return self

    def closeness_with(self, *partner_ids: str) -> EntityBuilder:
        partners = list((self._components.get(CLOSENESS_COMPONENT) or {}).get("partners") or [])
        for partner_id in partner_ids:
            if partner_id not in partners:
                partners.append(partner_id)
        self._components[CLOSENESS_COMPONENT] = {"partners": partners}
        return self

    def with_component(self, component_id: str, data: dict[str, Any] | None = None) -> EntityBuilder:
        self._components[component_id] = {} if data is None else data
        return self

    def validate(self) -> EntityBuilder:
        if not isinstance(self._entity_id, str) or not self._entity_id.strip():
            raise EntityValidationError("Entity id must be a non-empty string.")
        for component_id, data in self._components.items():
            if not _is_namespaced(component_id):
                raise EntityValidationError(
                    f"Entity '{self._entity_id}' has invalid component id {component_id!r}; "
                    "expected namespaced form mod:component."
                )
            if not isinstance(data, dict):
                raise EntityValidationError(
                    f"Entity '{self._entity_id}' component '{component_id}' data must be an object."
                )
        return self

    def build(self) -> Entity:
        return Entity(id=self._entity_id, components=copy.deepcopy(self._components))
