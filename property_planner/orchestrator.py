"""
Main Orchestrator for Property Planner

This module ties the components together and defines the caller-side
flows on top of the store:
1. Startup (hydrate from storage → start auto-persist)
2. Scenario management (add, remove with reselection, rename)
3. Data edits (merge inputs → recalculate → replace data wholesale)
4. Export (comparison CSV)

DESIGN DECISION: Policies live HERE, not in the store.
The store deliberately imposes no reselection or keep-one-scenario rule.
The application does: the last scenario can never be removed, and
removing the current scenario selects its neighbour.
"""

from typing import Any, Optional, Sequence

from property_planner.calculations import calculate_property_data
from property_planner.config import Settings, get_settings
from property_planner.export import ExportRow, build_comparison_rows, build_csv
from property_planner.models.property import PropertyData
from property_planner.models.scenario import Scenario, ScenarioId, ScenarioUpdate
from property_planner.observability import get_logger
from property_planner.services.persistence import PersistenceGateway
from property_planner.services.storage import BlobStorageInterface, FileBlobStorage
from property_planner.store import ScenarioStore
from property_planner.validation import (
    ErrorMap,
    ScenarioValidator,
    ValidationResult,
    validate_property_data,
)

logger = get_logger(__name__)


class ScenarioWorkspace:
    """
    The application's view of its scenarios.

    Owns one store and one persistence gateway. UI code talks to the
    workspace for anything that involves a policy and reads state straight
    from `workspace.store`.
    """

    def __init__(
        self,
        store: ScenarioStore,
        gateway: PersistenceGateway,
        storage: BlobStorageInterface,
        settings: Optional[Settings] = None,
        validator: Optional[ScenarioValidator] = None,
    ):
        self._store = store
        self._gateway = gateway
        self._storage = storage
        self._settings = settings or get_settings()
        self._validator = validator or ScenarioValidator()

    @property
    def store(self) -> ScenarioStore:
        return self._store

    @property
    def gateway(self) -> PersistenceGateway:
        return self._gateway

    @property
    def storage(self) -> BlobStorageInterface:
        return self._storage

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    async def startup(self) -> bool:
        """
        Restore saved scenarios and start saving changes.

        Returns:
            True if saved scenarios were restored.

        Raises:
            StorageError: If storage cannot be read. Auto-persist is not
                          started in that case.
        """
        restored = await self._gateway.hydrate()
        self._gateway.start()
        logger.info(
            "workspace_started",
            restored=restored,
            scenarios=len(self._store.scenarios),
        )
        return restored

    async def shutdown(self) -> None:
        """Write any pending change and stop listening to the store."""
        try:
            await self._gateway.flush()
        finally:
            await self._gateway.stop()
        logger.info("workspace_stopped")

    # =========================================================================
    # SCENARIO MANAGEMENT
    # =========================================================================

    def add_scenario(self, name: str, select: bool = True) -> ScenarioId:
        """Create a scenario with default data, derived figures included."""
        data = calculate_property_data(
            PropertyData(),
            years=self._settings.app.projection_years,
        )
        scenario_id = self._store.create_scenario(name, data=data)
        if select:
            self._store.set_current_scenario(scenario_id)
        return scenario_id

    def remove_scenario(self, scenario_id: ScenarioId) -> bool:
        """
        Delete a scenario, keeping at least one.

        When the current scenario is removed, the one before it (in
        creation order) becomes current, or the one after it if it was
        the first.

        Returns:
            False if the scenario does not exist or is the last one.
        """
        ordered = self._store.scenarios_array
        ids = [scenario.id for scenario in ordered]

        if scenario_id not in ids:
            return False
        if len(ids) <= 1:
            logger.info("scenario_delete_refused_last", scenario_id=scenario_id)
            return False

        replacement: Optional[ScenarioId] = None
        if self._store.current_scenario_id == scenario_id:
            index = ids.index(scenario_id)
            replacement = ids[index - 1] if index > 0 else ids[1]

        self._store.delete_scenario(scenario_id)
        if replacement is not None:
            self._store.set_current_scenario(replacement)

        logger.info("scenario_deleted", scenario_id=scenario_id, new_current=replacement)
        return True

    def rename_scenario(self, scenario_id: ScenarioId, name: str) -> None:
        self._store.update_scenario(scenario_id, ScenarioUpdate(name=name))

    def update_scenario_data(
        self,
        scenario_id: ScenarioId,
        changes: dict[str, Any],
    ) -> Optional[ErrorMap]:
        """
        Apply input changes to a scenario and recalculate it.

        `changes` uses PropertyData field names and is merged one level
        deep: a nested value such as `loan` replaces the whole LoanDetails.

        Returns:
            Validation errors of the new data, or None if the scenario
            does not exist.
        """
        scenario = self._store.get_scenario(scenario_id)
        if scenario is None:
            return None

        merged = PropertyData.model_validate({**scenario.data.model_dump(), **changes})
        data = calculate_property_data(merged, years=self._settings.app.projection_years)
        self._store.update_scenario(scenario_id, ScenarioUpdate(data=data))
        return validate_property_data(data)

    def validate_scenario(self, scenario_id: ScenarioId) -> Optional[ValidationResult]:
        scenario = self._store.get_scenario(scenario_id)
        if scenario is None:
            return None
        return self._validator.validate(scenario)

    # =========================================================================
    # EXPORT
    # =========================================================================

    def comparison_scenarios(self) -> list[Scenario]:
        """
        Scenarios being compared: the selection in comparison mode,
        otherwise every scenario. Always in creation order.
        """
        if self._store.comparison_mode and self._store.selected_scenarios:
            return self._store.selected_scenario_list
        return list(self._store.scenarios_array)

    def export_comparison_csv(self, rows: Optional[Sequence[ExportRow]] = None) -> str:
        scenarios = self.comparison_scenarios()
        csv_text = build_csv(rows if rows is not None else build_comparison_rows(), scenarios)
        logger.info("comparison_exported", scenarios=len(scenarios), size=len(csv_text))
        return csv_text


def create_app_components(
    storage: Optional[BlobStorageInterface] = None,
    settings: Optional[Settings] = None,
) -> ScenarioWorkspace:
    """
    Create and wire up all application components.

    Args:
        storage: Blob store to persist to. Defaults to a file-backed store
                 under PersistenceSettings.data_dir.
        settings: Settings to use. Defaults to get_settings().

    Returns:
        A workspace seeded with the default scenario. Call
        `await workspace.startup()` to restore saved scenarios.
    """
    settings = settings or get_settings()
    persistence_settings = settings.persistence

    if storage is None:
        storage = FileBlobStorage(
            data_dir=persistence_settings.data_dir,
            read_attempts=persistence_settings.read_attempts,
        )

    store = ScenarioStore.with_default_scenario(settings.app.default_scenario_name)
    gateway = PersistenceGateway(store, storage, persistence_settings)

    return ScenarioWorkspace(store, gateway, storage, settings)
