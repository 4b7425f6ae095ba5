"""
Scenario Models

A Scenario is one named, saved property plan. The store owns every
Scenario; outside the store they are read-only snapshots (models are
frozen, edits go through ScenarioStore.update_scenario).
"""

import secrets
import string
import time
from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from property_planner.models.property import (
    PlannerModel,
    PropertyData,
    default_property_data,
)

ScenarioId = str

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_scenario_id() -> ScenarioId:
    """Opaque id: scenario_<epoch-ms>_<9 random chars>."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"scenario_{int(time.time() * 1000)}_{suffix}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Scenario(PlannerModel):
    """
    A named property plan.

    `id` and `created_at` never change after creation.
    `data` is replaced wholesale on edit.
    """

    id: ScenarioId = Field(
        ...,
        min_length=1,
        description="Opaque unique id"
    )
    name: str = Field(
        ...,
        description="User-facing scenario name"
    )
    data: PropertyData = Field(default_factory=default_property_data)
    created_at: datetime = Field(
        default_factory=utc_now,
        description="Creation time; defines list order"
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        description="Last edit time"
    )


class ScenarioUpdate(PlannerModel):
    """
    Partial update for a scenario's top-level fields.

    Fields left as None are untouched. `data`, when given, replaces the
    whole PropertyData (no deep merge).
    """

    name: Optional[str] = None
    data: Optional[PropertyData] = None

    def changes(self) -> dict:
        """Only the fields that were actually provided."""
        return {
            key: getattr(self, key)
            for key in ("name", "data")
            if getattr(self, key) is not None
        }


class PersistedScenarioStore(PlannerModel):
    """
    The durable snapshot document.

    Flattened, JSON-serialisable projection of the store state. Scenarios
    are written in creation order so identical state yields identical bytes.
    """

    version: int
    scenarios: list[Scenario] = Field(default_factory=list)
    current_scenario_id: Optional[ScenarioId] = None
    comparison_mode: bool = False
    selected_scenarios: list[ScenarioId] = Field(default_factory=list)
