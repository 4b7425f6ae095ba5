"""
Scenario Persistence Gateway

Moves ScenarioStore snapshots to and from a blob store.

DESIGN DECISION: Best effort, never block startup.
- Hydration recovers locally from every problem with the stored DOCUMENT
  (unparsable JSON, wrong shape, wrong version): defaults stand and the
  store is still marked hydrated. Only a failing BACKEND propagates.
- Writes are suppressed until hydration has finished, so transient
  defaults can never clobber the durable copy.
- Writes are debounced: each committed change cancels and re-arms one
  timer handle owned by this instance. A burst of edits produces a single
  write of the final state.
- In-flight writes are never cancelled. Writes are serialized by a lock
  and always serialize the state current at the time they start.
"""

import asyncio
import json
from typing import Optional

from pydantic import ValidationError

from property_planner.config import PersistenceSettings, get_settings
from property_planner.models.commands import MarkHydrated, RestoreSnapshot, StoreCommand
from property_planner.models.scenario import PersistedScenarioStore
from property_planner.observability import get_logger
from property_planner.services.storage.interface import BlobStorageInterface, StorageError
from property_planner.store import ScenarioStore, StoreState

logger = get_logger(__name__)


class PersistenceGateway:
    """
    Hydrates a ScenarioStore once and keeps the durable copy up to date.

    Usage:
        gateway = PersistenceGateway(store, storage)
        await gateway.hydrate()
        gateway.start()
        ...
        await gateway.stop()
    """

    def __init__(
        self,
        store: ScenarioStore,
        storage: BlobStorageInterface,
        settings: Optional[PersistenceSettings] = None,
    ):
        self._store = store
        self._storage = storage
        self._settings = settings or get_settings().persistence

        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._timer: Optional[asyncio.TimerHandle] = None
        self._unsubscribe = None
        self._write_lock = asyncio.Lock()
        self._tasks: set[asyncio.Task] = set()

    @property
    def storage_key(self) -> str:
        return self._settings.storage_key

    @property
    def version(self) -> int:
        return self._settings.store_version

    @property
    def is_running(self) -> bool:
        return self._unsubscribe is not None

    @property
    def has_pending_write(self) -> bool:
        return self._timer is not None

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    def serialize(self, state: StoreState) -> PersistedScenarioStore:
        """Flatten a store state into the durable document model."""
        return PersistedScenarioStore(
            version=self.version,
            scenarios=list(state.scenarios_array),
            current_scenario_id=state.current_scenario_id,
            comparison_mode=state.comparison_mode,
            selected_scenarios=[s.id for s in state.selected_scenario_list],
        )

    def dumps(self, state: StoreState) -> str:
        """
        JSON text for a state.

        Scenarios and selection are written in creation order, so the same
        logical state always yields the same bytes.
        """
        return self.serialize(state).model_dump_json(by_alias=True)

    # =========================================================================
    # HYDRATION
    # =========================================================================

    async def hydrate(self) -> bool:
        """
        Restore the store from durable storage.

        Returns:
            True if scenarios were restored, False if defaults stand.

        Raises:
            StorageError: If the backend cannot be read. The store is left
                          un-hydrated so nothing is written over the durable copy.
        """
        raw = await self._storage.get_item(self.storage_key)

        if not raw:
            logger.info("scenario_hydration_empty", key=self.storage_key)
            self._store.mark_hydrated()
            return False

        try:
            document = json.loads(raw)
        except ValueError as e:
            logger.warning("scenario_hydration_corrupted", key=self.storage_key, error=str(e))
            await self._discard_corrupted()
            self._store.mark_hydrated()
            return False

        version = document.get("version") if isinstance(document, dict) else None
        # JSON true and 1.0 compare equal to 1 in Python
        if type(version) is not int or version != self.version:
            logger.warning(
                "scenario_hydration_version_mismatch",
                key=self.storage_key,
                found=version,
                expected=self.version,
            )
            self._store.mark_hydrated()
            return False

        try:
            snapshot = PersistedScenarioStore.model_validate(document)
        except ValidationError as e:
            logger.warning(
                "scenario_hydration_invalid",
                key=self.storage_key,
                error_count=e.error_count(),
            )
            await self._discard_corrupted()
            self._store.mark_hydrated()
            return False

        if not snapshot.scenarios:
            logger.info("scenario_hydration_no_scenarios", key=self.storage_key)
            self._store.mark_hydrated()
            return False

        # Last occurrence of a duplicated id wins
        unique = {scenario.id: scenario for scenario in snapshot.scenarios}
        ordered = sorted(unique.values(), key=lambda s: s.created_at)

        self._store.restore(
            scenarios=ordered,
            current_scenario_id=snapshot.current_scenario_id,
            comparison_mode=snapshot.comparison_mode,
            selected_scenarios=snapshot.selected_scenarios,
        )
        logger.info(
            "scenario_hydration_restored",
            count=len(ordered),
            duplicates=len(snapshot.scenarios) - len(ordered),
            current_scenario_id=self._store.current_scenario_id,
        )
        return True

    async def _discard_corrupted(self) -> None:
        try:
            await self._storage.remove_item(self.storage_key)
        except StorageError as e:
            logger.error("scenario_corrupted_remove_failed", key=self.storage_key, error=str(e))

    # =========================================================================
    # AUTO-PERSIST
    # =========================================================================

    def start(self) -> None:
        """
        Subscribe to the store and persist changes after the debounce window.

        Must be called from a running event loop.
        """
        if self.is_running:
            return
        self._loop = asyncio.get_running_loop()
        self._unsubscribe = self._store.subscribe(self._on_state_change)
        logger.debug("scenario_persistence_started", debounce_ms=self._settings.debounce_ms)

    async def stop(self) -> None:
        """Unsubscribe, drop any pending write and wait for in-flight ones."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._cancel_timer()
        await self._wait_in_flight()

    async def flush(self) -> None:
        """
        Write a pending change now instead of waiting for the timer.

        Raises:
            StorageError: If the write fails
        """
        if self._timer is not None:
            self._cancel_timer()
            await self.persist()
        await self._wait_in_flight()

    async def persist(self) -> None:
        """
        Write the store's current state.

        Raises:
            StorageError: If the write fails
        """
        async with self._write_lock:
            payload = self.dumps(self._store.state)
            await self._storage.set_item(self.storage_key, payload)
        logger.debug("scenario_persisted", key=self.storage_key, size=len(payload))

    async def clear(self) -> None:
        """Delete the durable copy. In-memory state is left as it is."""
        self._cancel_timer()
        await self._wait_in_flight()
        await self._storage.remove_item(self.storage_key)
        logger.info("scenario_storage_cleared", key=self.storage_key)

    def _on_state_change(
        self,
        state: StoreState,
        previous: StoreState,
        command: StoreCommand,
    ) -> None:
        if not state.hydrated:
            logger.debug("scenario_persist_skipped_not_hydrated", command=command.kind)
            return
        # The restored state is what storage already holds
        if isinstance(command, (RestoreSnapshot, MarkHydrated)):
            return
        self._schedule_write()

    def _schedule_write(self) -> None:
        self._cancel_timer()
        self._timer = self._loop.call_later(self._settings.debounce_seconds, self._fire)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self) -> None:
        self._timer = None
        task = self._loop.create_task(self._persist_in_background())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _persist_in_background(self) -> None:
        try:
            await self.persist()
        except StorageError as e:
            # Not retried; the next change schedules another write
            logger.error("scenario_persist_failed", key=self.storage_key, error=str(e))

    async def _wait_in_flight(self) -> None:
        if self._tasks:
            await asyncio.gather(*list(self._tasks))
