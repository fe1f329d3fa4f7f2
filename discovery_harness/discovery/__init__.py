# ABOUTME: Exposes entities, scopes, and the action discovery service used by the test bed.
# ABOUTME: Keeps a stable module boundary for discovery capability implementation.

from discovery_harness.discovery.entities import (
    Entity,
    EntityBuilder,
    EntityNotFoundError,
    EntityValidationError,
    SimpleEntityManager,
)
from discovery_harness.discovery.scopes import (
    ScopeDefinition,
    ScopeNotFoundError,
    ScopeRegistry,
    component_holders,
    component_list,
    same_location,
    self_source,
)
from discovery_harness.discovery.service import (
    ActionDefinition,
    ActionDiscoveryService,
    DiscoveredAction,
    DiscoveryError,
    DiscoveryResult,
)

__all__ = [
    "ActionDefinition",
    "ActionDiscoveryService",
    "DiscoveredAction",
    "DiscoveryError",
    "DiscoveryResult",
    "Entity",
    "EntityBuilder",
    "EntityNotFoundError",
    "EntityValidationError",
    "ScopeDefinition",
    "ScopeNotFoundError",
    "ScopeRegistry",
    "SimpleEntityManager",
    "component_holders",
    "component_list",
    "same_location",
    "self_source",
]
