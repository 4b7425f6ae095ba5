"""
Scenario Input Validation

DESIGN DECISION: Validation is a pure function of PropertyData.
- Every rule is evaluated; there is no short-circuit, so the UI can show
  all problems at once.
- Errors are returned as data keyed by stable identifiers (ErrorKey),
  never raised.
- Nothing is corrected. A deposit larger than the property value stays
  in the data and is reported.

Called on every relevant render and mutation, so it must stay cheap.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from property_planner.models.property import PropertyData
from property_planner.models.scenario import Scenario, ScenarioId

MAX_LOAN_TERM_YEARS = 30
MAX_INTEREST_RATE = 20.0


class ErrorKey(str, Enum):
    """Stable field identifiers for validation messages."""
    PROPERTY_VALUE = "propertyValue"
    DEPOSIT = "deposit"
    DEPOSIT_TOO_BIG = "depositTooBig"
    LOAN_TERM = "loanTerm"
    LOAN_INTEREST = "loanInterest"


ErrorMap = dict[ErrorKey, str]

ERROR_MESSAGES: dict[ErrorKey, str] = {
    ErrorKey.PROPERTY_VALUE: "Enter or select a valid property value.",
    ErrorKey.DEPOSIT: "Enter or select a valid deposit.",
    ErrorKey.DEPOSIT_TOO_BIG: "Deposit cannot exceed property value.",
    ErrorKey.LOAN_TERM: "Loan term must be between 1 and 30 years.",
    ErrorKey.LOAN_INTEREST: "Interest rate must be between 0% and 20%.",
}


def _is_positive(value: Optional[float]) -> bool:
    return value is not None and value > 0


def validate_property_data(data: PropertyData) -> ErrorMap:
    """
    Check a plan's inputs against the business rules.

    Returns:
        Mapping of ErrorKey -> message. Empty means valid.
    """
    errors: ErrorMap = {}

    if not _is_positive(data.property_value):
        errors[ErrorKey.PROPERTY_VALUE] = ERROR_MESSAGES[ErrorKey.PROPERTY_VALUE]

    if not _is_positive(data.deposit):
        errors[ErrorKey.DEPOSIT] = ERROR_MESSAGES[ErrorKey.DEPOSIT]

    # Reported alongside the per-field errors, not instead of them.
    # A zero on either side is already a per-field error.
    if data.property_value and data.deposit and data.deposit > data.property_value:
        errors[ErrorKey.DEPOSIT_TOO_BIG] = ERROR_MESSAGES[ErrorKey.DEPOSIT_TOO_BIG]

    # No lower bound on the term
    if data.loan.term > MAX_LOAN_TERM_YEARS:
        errors[ErrorKey.LOAN_TERM] = ERROR_MESSAGES[ErrorKey.LOAN_TERM]

    interest = data.loan.interest
    if not _is_positive(interest) or interest > MAX_INTEREST_RATE:
        errors[ErrorKey.LOAN_INTEREST] = ERROR_MESSAGES[ErrorKey.LOAN_INTEREST]

    return errors


def is_valid(data: PropertyData) -> bool:
    """A plan is valid iff it has no validation errors."""
    return not validate_property_data(data)


class ValidationResult(BaseModel):
    """Validation outcome for one scenario."""

    scenario_id: ScenarioId
    errors: dict[ErrorKey, str] = Field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def error_count(self) -> int:
        return len(self.errors)

    def message_for(self, key: ErrorKey) -> Optional[str]:
        return self.errors.get(key)


class ScenarioValidator:
    """Validates whole scenarios and renders summaries for the user."""

    def validate(self, scenario: Scenario) -> ValidationResult:
        return ValidationResult(
            scenario_id=scenario.id,
            errors=validate_property_data(scenario.data),
        )

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """
        Generate a short summary of validation results.

        This is what we show next to the scenario name.
        """
        if result.is_valid:
            return "All inputs look good."

        lines = ["Please fix the following:"]
        for key in ErrorKey:
            message = result.errors.get(key)
            if message:
                lines.append(f"   - {message}")
        return "\n".join(lines)
