"""
Scenario Store

The in-memory, authoritative owner of every scenario.

DESIGN DECISION: Explicit instance, explicit subscription.
- There is no module-level singleton. The application builds one store at
  startup (see property_planner.orchestrator) and passes it around; tests
  build as many as they like.
- Every mutation is a command folded through reduce(). The new state is
  swapped in with a single assignment, so readers never see a half-applied
  change.
- Listeners are told about every committed change. The persistence gateway
  is just one such listener.
"""

from typing import Any, Callable, Optional, Union

from property_planner.config import get_settings
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
from property_planner.models.property import PropertyData, default_property_data
from property_planner.models.scenario import (
    Scenario,
    ScenarioId,
    ScenarioUpdate,
    generate_scenario_id,
    utc_now,
)
from property_planner.observability import get_logger
from property_planner.store.reducer import StoreState, reduce
from property_planner.validation import ErrorMap, validate_property_data

logger = get_logger(__name__)

StoreListener = Callable[[StoreState, StoreState, StoreCommand], None]


class ScenarioStore:
    """
    Holds the current StoreState and applies commands to it.

    All mutations are synchronous and complete before returning.
    """

    def __init__(self, state: Optional[StoreState] = None):
        self._state = state if state is not None else StoreState()
        self._listeners: list[StoreListener] = []

    @classmethod
    def with_default_scenario(cls, name: Optional[str] = None) -> "ScenarioStore":
        """
        A store seeded the way the application starts: one default
        scenario, selected as current.
        """
        store = cls()
        scenario_id = store.create_scenario(name or get_settings().app.default_scenario_name)
        store.set_current_scenario(scenario_id)
        return store

    # -------------------------
    # Reads
    # -------------------------

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def scenarios(self):
        return self._state.scenarios

    @property
    def scenarios_array(self) -> tuple[Scenario, ...]:
        return self._state.scenarios_array

    @property
    def current_scenario_id(self) -> Optional[ScenarioId]:
        return self._state.current_scenario_id

    @property
    def current_scenario(self) -> Optional[Scenario]:
        return self._state.current_scenario

    @property
    def comparison_mode(self) -> bool:
        return self._state.comparison_mode

    @property
    def selected_scenarios(self) -> frozenset[ScenarioId]:
        return self._state.selected_scenarios

    @property
    def selected_scenario_list(self) -> list[Scenario]:
        return self._state.selected_scenario_list

    @property
    def hydrated(self) -> bool:
        return self._state.hydrated

    def get_scenario(self, scenario_id: ScenarioId) -> Optional[Scenario]:
        return self._state.scenarios.get(scenario_id)

    def errors_for(self, scenario_id: ScenarioId) -> Optional[ErrorMap]:
        """Validation errors for a scenario, or None if it does not exist."""
        scenario = self.get_scenario(scenario_id)
        if scenario is None:
            return None
        return validate_property_data(scenario.data)

    # -------------------------
    # Subscription
    # -------------------------

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """
        Register a listener for committed changes.

        Returns:
            A function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify_listeners(self, state: StoreState, previous: StoreState, command: StoreCommand) -> None:
        for listener in list(self._listeners):
            try:
                listener(state, previous, command)
            except Exception as e:
                logger.error(
                    "store_listener_failed",
                    command=command.kind,
                    error=str(e),
                )

    # -------------------------
    # Mutations
    # -------------------------

    def dispatch(self, command: StoreCommand) -> StoreState:
        """
        Apply a command and notify listeners if the state changed.

        Raises:
            TypeError: for objects that are not store commands
        """
        previous = self._state
        state = reduce(previous, command)
        if state is previous:
            logger.debug("store_command_noop", command=command.kind)
            return state

        self._state = state
        self._notify_listeners(state, previous, command)
        return state

    def create_scenario(self, name: str, data: Optional[PropertyData] = None) -> ScenarioId:
        """Insert a new scenario with default data. Does not select it."""
        now = utc_now()
        scenario = Scenario(
            id=generate_scenario_id(),
            name=name,
            data=data if data is not None else default_property_data(),
            created_at=now,
            updated_at=now,
        )
        self.dispatch(CreateScenario(scenario=scenario))
        logger.info("scenario_created", scenario_id=scenario.id)
        return scenario.id

    def set_current_scenario(self, scenario_id: ScenarioId) -> None:
        self.dispatch(SetCurrentScenario(scenario_id=scenario_id))

    def update_scenario(
        self,
        scenario_id: ScenarioId,
        partial: Union[ScenarioUpdate, dict[str, Any]],
    ) -> None:
        """
        Shallow-merge `partial` into a scenario.

        `data`, when given, replaces the whole PropertyData.
        """
        if not isinstance(partial, ScenarioUpdate):
            partial = ScenarioUpdate.model_validate(partial)
        self.dispatch(UpdateScenario(scenario_id=scenario_id, update=partial))

    def delete_scenario(self, scenario_id: ScenarioId) -> None:
        """Remove a scenario. Clears the current pointer if it pointed here."""
        self.dispatch(DeleteScenario(scenario_id=scenario_id))

    def set_comparison_mode(self, enabled: bool) -> None:
        self.dispatch(SetComparisonMode(enabled=enabled))

    def toggle_scenario_selection(self, scenario_id: ScenarioId) -> None:
        self.dispatch(ToggleScenarioSelection(scenario_id=scenario_id))

    def clear_selected_scenarios(self) -> None:
        self.dispatch(ClearSelectedScenarios())

    def restore(
        self,
        scenarios: list[Scenario],
        current_scenario_id: Optional[ScenarioId],
        comparison_mode: bool,
        selected_scenarios: list[ScenarioId],
    ) -> None:
        """Replace the whole state with a restored snapshot (hydration)."""
        self.dispatch(
            RestoreSnapshot(
                scenarios=scenarios,
                current_scenario_id=current_scenario_id,
                comparison_mode=comparison_mode,
                selected_scenarios=selected_scenarios,
            )
        )

    def mark_hydrated(self) -> None:
        self.dispatch(MarkHydrated())
