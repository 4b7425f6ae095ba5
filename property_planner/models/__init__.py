"""
Data Models Package

This package contains all Pydantic models used by the Property Planner.
Everything the store holds or persists conforms to these schemas.
"""

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
    parse_command,
)
from property_planner.models.property import (
    Expenses,
    LoanDetails,
    OngoingExpenses,
    Projection,
    PropertyData,
    PropertyType,
    StateCode,
    default_property_data,
)
from property_planner.models.scenario import (
    PersistedScenarioStore,
    Scenario,
    ScenarioId,
    ScenarioUpdate,
    generate_scenario_id,
)

__all__ = [
    # Property models
    "Expenses",
    "LoanDetails",
    "OngoingExpenses",
    "Projection",
    "PropertyData",
    "PropertyType",
    "StateCode",
    "default_property_data",
    # Scenario models
    "PersistedScenarioStore",
    "Scenario",
    "ScenarioId",
    "ScenarioUpdate",
    "generate_scenario_id",
    # Commands
    "ClearSelectedScenarios",
    "CreateScenario",
    "DeleteScenario",
    "MarkHydrated",
    "RestoreSnapshot",
    "SetComparisonMode",
    "SetCurrentScenario",
    "StoreCommand",
    "ToggleScenarioSelection",
    "UpdateScenario",
    "parse_command",
]
