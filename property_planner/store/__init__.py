"""Scenario store: immutable state snapshots folded by a pure reducer."""

from property_planner.store.reducer import StoreState, reduce
from property_planner.store.scenario_store import ScenarioStore, StoreListener

__all__ = [
    "ScenarioStore",
    "StoreListener",
    "StoreState",
    "reduce",
]
