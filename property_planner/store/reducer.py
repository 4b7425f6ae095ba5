"""
Store State and Transition Function

DESIGN DECISION: The store is a pure fold over commands.
- StoreState is an immutable snapshot; every transition builds a new one.
- reduce() never performs I/O, never reads the clock and never generates
  ids. Those inputs arrive inside the command.
- A transition that changes nothing returns the SAME state object, so the
  store can skip notifying listeners (and therefore skip persisting).
- Referential errors (unknown scenario ids) are silent no-ops because the
  UI may race with a deletion.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Optional

from property_planner.models.commands import (
    ClearSelectedScenarios,
    CreateScenario,
    DeleteScenario,
    MarkHydrated,
    RestoreSnapshot,
    SetComparisonMode,
    SetCurrentScenario,
    StoreCommand,
    ToggleScenarioSelection,
    UpdateScenario,
)
from property_planner.models.scenario import Scenario, ScenarioId


@dataclass(frozen=True)
class StoreState:
    """
    One immutable snapshot of the scenario store.

    Invariants:
    - `scenarios_array` holds exactly the values of `scenarios`, ordered by
      `created_at` (ties keep insertion order).
    - `current_scenario_id` is None or a key of `scenarios`.
    - `selected_scenarios` is a subset of the keys of `scenarios`.

    `scenarios` is a read-only view; transitions build a new dict.
    """

    scenarios: Mapping[ScenarioId, Scenario] = field(default_factory=lambda: MappingProxyType({}))
    scenarios_array: tuple[Scenario, ...] = ()
    current_scenario_id: Optional[ScenarioId] = None
    comparison_mode: bool = False
    selected_scenarios: frozenset[ScenarioId] = frozenset()
    hydrated: bool = False

    @property
    def current_scenario(self) -> Optional[Scenario]:
        if self.current_scenario_id is None:
            return None
        return self.scenarios.get(self.current_scenario_id)

    @property
    def selected_scenario_list(self) -> list[Scenario]:
        """Selected scenarios in creation order."""
        return [s for s in self.scenarios_array if s.id in self.selected_scenarios]


def _ordered(scenarios: Iterable[Scenario]) -> tuple[Scenario, ...]:
    # sorted() is stable, so equal timestamps keep insertion order
    return tuple(sorted(scenarios, key=lambda s: s.created_at))


def _with_scenarios(state: StoreState, scenarios: dict[ScenarioId, Scenario], **changes) -> StoreState:
    return replace(
        state,
        scenarios=MappingProxyType(scenarios),
        scenarios_array=_ordered(scenarios.values()),
        **changes,
    )


# =============================================================================
# TRANSITIONS
# =============================================================================

def _create_scenario(state: StoreState, command: CreateScenario) -> StoreState:
    scenario = command.scenario
    if scenario.id in state.scenarios:
        return state

    scenarios = dict(state.scenarios)
    scenarios[scenario.id] = scenario
    return _with_scenarios(state, scenarios)


def _set_current_scenario(state: StoreState, command: SetCurrentScenario) -> StoreState:
    if command.scenario_id not in state.scenarios:
        return state
    if command.scenario_id == state.current_scenario_id:
        return state
    return replace(state, current_scenario_id=command.scenario_id)


def _update_scenario(state: StoreState, command: UpdateScenario) -> StoreState:
    existing = state.scenarios.get(command.scenario_id)
    if existing is None:
        return state

    changes = command.update.changes()
    if not changes:
        return state

    # id and created_at are never part of an update
    updated = existing.model_copy(update={**changes, "updated_at": command.updated_at})

    scenarios = dict(state.scenarios)
    scenarios[existing.id] = updated
    return _with_scenarios(state, scenarios)


def _delete_scenario(state: StoreState, command: DeleteScenario) -> StoreState:
    scenario_id = command.scenario_id
    if scenario_id not in state.scenarios:
        return state

    scenarios = {key: value for key, value in state.scenarios.items() if key != scenario_id}
    current = None if state.current_scenario_id == scenario_id else state.current_scenario_id
    return _with_scenarios(
        state,
        scenarios,
        current_scenario_id=current,
        selected_scenarios=state.selected_scenarios - {scenario_id},
    )


def _set_comparison_mode(state: StoreState, command: SetComparisonMode) -> StoreState:
    if command.enabled == state.comparison_mode:
        return state
    if command.enabled:
        return replace(state, comparison_mode=True)
    return replace(state, comparison_mode=False, selected_scenarios=frozenset())


def _toggle_scenario_selection(state: StoreState, command: ToggleScenarioSelection) -> StoreState:
    scenario_id = command.scenario_id
    if scenario_id not in state.scenarios:
        return state

    if scenario_id in state.selected_scenarios:
        selected = state.selected_scenarios - {scenario_id}
    else:
        selected = state.selected_scenarios | {scenario_id}
    return replace(state, selected_scenarios=selected)


def _clear_selected_scenarios(state: StoreState, command: ClearSelectedScenarios) -> StoreState:
    if not state.selected_scenarios:
        return state
    return replace(state, selected_scenarios=frozenset())


def _restore_snapshot(state: StoreState, command: RestoreSnapshot) -> StoreState:
    scenarios = {scenario.id: scenario for scenario in command.scenarios}
    ordered = _ordered(scenarios.values())

    current = command.current_scenario_id
    if current not in scenarios:
        current = ordered[0].id if ordered else None

    if command.comparison_mode:
        selected = frozenset(s for s in command.selected_scenarios if s in scenarios)
    else:
        selected = frozenset()

    return StoreState(
        scenarios=MappingProxyType(scenarios),
        scenarios_array=ordered,
        current_scenario_id=current,
        comparison_mode=command.comparison_mode,
        selected_scenarios=selected,
        hydrated=True,
    )


def _mark_hydrated(state: StoreState, command: MarkHydrated) -> StoreState:
    if state.hydrated:
        return state
    return replace(state, hydrated=True)


_TRANSITIONS: dict[str, Callable[[StoreState, StoreCommand], StoreState]] = {
    "create_scenario": _create_scenario,
    "set_current_scenario": _set_current_scenario,
    "update_scenario": _update_scenario,
    "delete_scenario": _delete_scenario,
    "set_comparison_mode": _set_comparison_mode,
    "toggle_scenario_selection": _toggle_scenario_selection,
    "clear_selected_scenarios": _clear_selected_scenarios,
    "restore_snapshot": _restore_snapshot,
    "mark_hydrated": _mark_hydrated,
}


def reduce(state: StoreState, command: StoreCommand) -> StoreState:
    """
    Apply one command to a state snapshot.

    Returns:
        The next state, or `state` itself when nothing changed.

    Raises:
        TypeError: if `command` is not a known store command
    """
    handler = _TRANSITIONS.get(getattr(command, "kind", None))
    if handler is None:
        raise TypeError(f"Unknown store command: {command!r}")
    return handler(state, command)
