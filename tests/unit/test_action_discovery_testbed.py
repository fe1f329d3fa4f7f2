# ABOUTME: Validates the action discovery test bed scenario helpers and diagnostics collection.
# ABOUTME: Ensures traced scope resolution only applies for the duration of one discovery call.

from __future__ import annotations

import json
from pathlib import Path

import pytest

from discovery_harness.config import DiagnosticsSettings
from discovery_harness.discovery.entities import EntityNotFoundError
from discovery_harness.discovery.scopes import ScopeDefinition, component_list
from discovery_harness.discovery.service import ActionDefinition
from discovery_harness.testbed.action_discovery import ActionDiscoveryTestBed


FACING_SCOPE = "affection:close_actors_facing_each_other"


def _bed(tmp_path: Path) -> ActionDiscoveryTestBed:
    bed = ActionDiscoveryTestBed(settings=DiagnosticsSettings(artifacts_dir=str(tmp_path / "artifacts")))
    bed.register_scope(
        ScopeDefinition(
            scope_id=FACING_SCOPE,
            source=component_list("positioning:closeness", "partners"),
            filter={
                "and": [
                    {"==": [{"var": "entity.components.core:position.locationId"}, "test-location"]},
                    {"!": {"has_component": [{"var": "entity"}, "positioning:facing_away"]}},
                ]
            },
        )
    )
    bed.register_action(
        ActionDefinition(
            id="affection:place_hands_on_shoulders",
            name="Place hands on shoulders",
            scope=FACING_SCOPE,
            template="place your hands on {target}'s shoulders",
            required_components=["positioning:closeness"],
        )
    )
    return bed


def test_scenario_establishes_bidirectional_closeness(tmp_path: Path) -> None:
    bed = _bed(tmp_path)

    actor, target = bed.create_actor_target_scenario()

    assert actor.get_component("positioning:closeness") == {"partners": ["target1"]}
    assert target.get_component("positioning:closeness") == {"partners": ["actor1"]}
    assert actor.location_id == target.location_id == "test-location"


def test_closeness_is_idempotent(tmp_path: Path) -> None:
    bed = _bed(tmp_path)
    actor, target = bed.create_actor_target_scenario()

    bed.establish_closeness_with_validation(actor.id, target.id)

    refreshed = bed.entity_manager.get_entity_instance("actor1")
    assert refreshed.get_component("positioning:closeness") == {"partners": ["target1"]}


def test_closeness_requires_both_entities(tmp_path: Path) -> None:
    bed = _bed(tmp_path)
    bed.create_actor_with_validation("actor1", location="test-location")

    with pytest.raises(EntityNotFoundError) as exc_info:
        bed.establish_closeness_with_validation("actor1", "ghost")
    assert str(exc_info.value) == "Cannot establish closeness: Target 'ghost' not found in entity manager"

    with pytest.raises(EntityNotFoundError) as exc_info:
        bed.establish_closeness_with_validation("ghost", "actor1")
    assert str(exc_info.value) == "Cannot establish closeness: Actor 'ghost' not found in entity manager"


def test_discovery_without_diagnostics_returns_actions_only(tmp_path: Path) -> None:
    bed = _bed(tmp_path)
    actor, _ = bed.create_actor_target_scenario(target_components={"core:name": {"text": "Bob"}})

    run = bed.discover_actions_with_diagnostics(actor)

    assert [item.command for item in run.actions] == ["place your hands on Bob's shoulders"]
    assert run.diagnostics is None


def test_discovery_with_scope_tracing_collects_all_categories(tmp_path: Path) -> None:
    bed = _bed(tmp_path)
    actor, _ = bed.create_actor_target_scenario()
    bed.create_actor_with_validation(
        "target2",
        location="test-location",
        components={"positioning:facing_away": {"facing_away_from": ["actor1"]}},
    )
    bed.create_actor_with_validation("target3", location="elsewhere")
    bed.establish_closeness_with_validation("actor1", "target2")
    bed.establish_closeness_with_validation("actor1", "target3")

    run = bed.discover_actions_with_diagnostics(
        "actor1",
        include_diagnostics=True,
        trace_scope_resolution=True,
    )

    assert [item.target_id for item in run.actions] == ["target1"]
    diagnostics = run.diagnostics
    assert diagnostics is not None
    assert len(diagnostics.scope_evaluations) == 1
    scope = diagnostics.scope_evaluations[0]
    assert (scope.scope_id, scope.candidate_count, scope.resolved_count, scope.filtered_count) == (
        FACING_SCOPE,
        3,
        1,
        2,
    )
    assert diagnostics.operator_evaluations
    assert diagnostics.error_logs == []

    summary = bed.format_diagnostic_summary(diagnostics)
    assert f"Trace Logs: {len(diagnostics.logs)} entries" in summary
    assert f"Operator Evaluations: {len(diagnostics.operator_evaluations)}" in summary
    assert "Scope Evaluations: 1" in summary
    assert "      Filtered: 2" in summary
    assert bed.service.scope_resolver is bed.scope_registry


def test_diagnostics_without_scope_tracing_have_no_scope_evaluations(tmp_path: Path) -> None:
    bed = _bed(tmp_path)
    actor, _ = bed.create_actor_target_scenario()

    run = bed.discover_actions_with_diagnostics(actor, include_diagnostics=True)

    assert run.diagnostics is not None
    assert run.diagnostics.scope_evaluations == []
    assert run.diagnostics.operator_evaluations


def test_discovery_rejects_unknown_actor(tmp_path: Path) -> None:
    bed = _bed(tmp_path)

    with pytest.raises(EntityNotFoundError) as exc_info:
        bed.discover_actions_with_diagnostics("nobody")
    assert str(exc_info.value) == "Cannot discover actions: Actor 'nobody' not found"


def test_save_diagnostics_writes_run_artifact(tmp_path: Path) -> None:
    bed = _bed(tmp_path)
    actor, _ = bed.create_actor_target_scenario()
    run = bed.discover_actions_with_diagnostics(actor, include_diagnostics=True, trace_scope_resolution=True)

    path = bed.save_diagnostics(run.diagnostics, run_id="run-testbed")

    assert path == tmp_path / "artifacts" / "run-testbed" / "diagnostics.json"
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert len(payload["scope_evaluations"]) == 1


def test_cleanup_clears_entities(tmp_path: Path) -> None:
    bed = _bed(tmp_path)
    bed.create_actor_target_scenario()

    bed.cleanup()

    assert bed.entity_manager.entity_ids == []
