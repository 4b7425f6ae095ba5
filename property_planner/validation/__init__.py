"""Validation package."""

from property_planner.validation.validator import (
    ERROR_MESSAGES,
    ErrorKey,
    ErrorMap,
    ScenarioValidator,
    ValidationResult,
    is_valid,
    validate_property_data,
)

__all__ = [
    "ERROR_MESSAGES",
    "ErrorKey",
    "ErrorMap",
    "ScenarioValidator",
    "ValidationResult",
    "is_valid",
    "validate_property_data",
]
