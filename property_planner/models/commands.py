"""
Store Commands

Every store transition is a command: a small frozen model tagged by a
`kind` literal. The union below is consumed by one state-transition
function (property_planner.store.reducer.reduce).

DESIGN DECISION: Commands carry every non-deterministic input (fresh ids,
timestamps) so the transition function itself stays pure.
"""

from datetime import datetime
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import Field, TypeAdapter

from property_planner.models.property import PlannerModel
from property_planner.models.scenario import (
    Scenario,
    ScenarioId,
    ScenarioUpdate,
    utc_now,
)


class CreateScenario(PlannerModel):
    """Insert a new scenario. Does not select it."""
    kind: Literal["create_scenario"] = "create_scenario"
    scenario: Scenario


class SetCurrentScenario(PlannerModel):
    """Point the current selection at an existing scenario."""
    kind: Literal["set_current_scenario"] = "set_current_scenario"
    scenario_id: ScenarioId


class UpdateScenario(PlannerModel):
    """Shallow-merge top-level fields into an existing scenario."""
    kind: Literal["update_scenario"] = "update_scenario"
    scenario_id: ScenarioId
    update: ScenarioUpdate
    updated_at: datetime = Field(default_factory=utc_now)


class DeleteScenario(PlannerModel):
    """Remove a scenario and every reference to it."""
    kind: Literal["delete_scenario"] = "delete_scenario"
    scenario_id: ScenarioId


class SetComparisonMode(PlannerModel):
    """Enter or leave comparison mode. Leaving clears the selection."""
    kind: Literal["set_comparison_mode"] = "set_comparison_mode"
    enabled: bool


class ToggleScenarioSelection(PlannerModel):
    """Add a scenario to, or remove it from, the comparison selection."""
    kind: Literal["toggle_scenario_selection"] = "toggle_scenario_selection"
    scenario_id: ScenarioId


class ClearSelectedScenarios(PlannerModel):
    kind: Literal["clear_selected_scenarios"] = "clear_selected_scenarios"


class RestoreSnapshot(PlannerModel):
    """
    Replace the whole state with a restored snapshot and mark it hydrated.

    Scenarios must already be de-duplicated and sorted by created_at.
    """
    kind: Literal["restore_snapshot"] = "restore_snapshot"
    scenarios: list[Scenario]
    current_scenario_id: Optional[ScenarioId] = None
    comparison_mode: bool = False
    selected_scenarios: list[ScenarioId] = Field(default_factory=list)


class MarkHydrated(PlannerModel):
    """Hydration finished without restoring anything; defaults stand."""
    kind: Literal["mark_hydrated"] = "mark_hydrated"


StoreCommand = Annotated[
    Union[
        CreateScenario,
        SetCurrentScenario,
        UpdateScenario,
        DeleteScenario,
        SetComparisonMode,
        ToggleScenarioSelection,
        ClearSelectedScenarios,
        RestoreSnapshot,
        MarkHydrated,
    ],
    Field(discriminator="kind"),
]

_command_adapter: TypeAdapter[StoreCommand] = TypeAdapter(StoreCommand)


def parse_command(payload: dict[str, Any]) -> StoreCommand:
    """
    Build a command from a plain dict, e.g. one sent by a UI layer.

    Raises:
        pydantic.ValidationError: unknown kind or malformed fields
    """
    return _command_adapter.validate_python(payload)
