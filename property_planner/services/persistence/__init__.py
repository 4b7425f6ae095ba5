"""Scenario snapshot persistence."""

from property_planner.services.persistence.gateway import PersistenceGateway

__all__ = ["PersistenceGateway"]
