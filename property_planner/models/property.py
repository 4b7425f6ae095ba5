"""
Property Plan Models

These models describe one property purchase plan: the user's inputs plus
the values derived from them (loan figures, expense totals, projections).

DESIGN DECISION: Models are permissive about VALUES and strict about TYPES.
A deposit larger than the property value is representable; it is the
validator's job to report it, never the model's job to reject or fix it.

Field names are snake_case in Python and camelCase on the wire, so a
persisted snapshot keeps the document shape of the mobile application.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# DEFAULTS
# =============================================================================

DEFAULT_INTEREST_RATE = 5.5
DEFAULT_LOAN_TERM = 30
DEFAULT_WEEKLY_RENT = 600.0
DEFAULT_RENTAL_GROWTH = 30.0  # dollars per week, per year
DEFAULT_STRATA_FEES = 1500.0  # per quarter
DEFAULT_CAPITAL_GROWTH = 3.0  # percent per year
DEFAULT_ONE_TIME_EXPENSES = 3500.0


class PlannerModel(BaseModel):
    """Base model: immutable, camelCase aliases, populated by either name."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# =============================================================================
# ENUMS
# =============================================================================

class PropertyType(str, Enum):
    """Kind of property being purchased."""
    HOUSE = "house"
    TOWNHOUSE = "townhouse"
    APARTMENT = "apartment"
    LAND = "land"


class StateCode(str, Enum):
    """Australian state or territory; drives stamp duty and government fees."""
    NSW = "NSW"
    VIC = "VIC"
    QLD = "QLD"
    SA = "SA"
    WA = "WA"
    TAS = "TAS"
    NT = "NT"
    ACT = "ACT"


# =============================================================================
# NESTED VALUE OBJECTS
# =============================================================================

class LoanDetails(PlannerModel):
    """
    Loan inputs and derived loan figures.

    Inputs: term, interest, is_interest_only, include_stamp_duty.
    Derived: amount, lvr, lmi, monthly_mortgage.
    """

    term: int = Field(
        default=DEFAULT_LOAN_TERM,
        description="Loan term in years"
    )
    interest: Optional[float] = Field(
        default=DEFAULT_INTEREST_RATE,
        description="Annual interest rate in percent"
    )
    is_interest_only: bool = False
    include_stamp_duty: bool = Field(
        default=False,
        description="Borrow the stamp duty on top of the purchase price"
    )

    amount: Optional[float] = Field(
        default=None,
        description="Total borrowed, including capitalised LMI"
    )
    lvr: Optional[float] = Field(
        default=None,
        description="Loan to value ratio in percent"
    )
    lmi: Optional[float] = Field(
        default=None,
        description="Lenders mortgage insurance premium"
    )
    monthly_mortgage: Optional[float] = None


class OngoingExpenses(PlannerModel):
    """Annual ongoing costs, one entry per line item."""

    council: float = 1200.0
    water: float = 800.0
    land_tax: float = 1000.0
    insurance: float = 500.0
    property_manager: float = 1500.0
    maintenance: float = 1500.0


class Expenses(PlannerModel):
    """Purchase and holding costs."""

    one_time_total: float = Field(
        default=DEFAULT_ONE_TIME_EXPENSES,
        description="Up-front costs entered by the user (solicitor, inspections, ...)"
    )
    ongoing: OngoingExpenses = Field(default_factory=OngoingExpenses)
    ongoing_total: float = Field(
        default=6500.0,
        description="Annual ongoing total after visibility rules"
    )


class Projection(PlannerModel):
    """One modelled year of a scenario. Cumulative figures run from purchase."""

    year: int
    property_value: float
    loan_balance: float
    weekly_rent: float
    rental_income: float
    annual_interest: float
    taxable_amount: float
    tax_return: float
    net_cash_flow: float
    spent: float
    equity: float
    returns: float
    roi: float


# =============================================================================
# PROPERTY DATA
# =============================================================================

class PropertyData(PlannerModel):
    """
    Everything describing one property plan.

    `projections` is derived from the other fields by
    property_planner.calculations and is never edited on its own.
    """

    property_value: Optional[float] = None
    deposit: Optional[float] = None
    stamp_duty: Optional[float] = 0.0

    property_type: PropertyType = PropertyType.HOUSE
    state: StateCode = StateCode.NSW

    first_home_buyer: bool = False
    is_living_here: bool = False
    is_brand_new: bool = False

    weekly_rent: float = DEFAULT_WEEKLY_RENT
    rental_growth: float = DEFAULT_RENTAL_GROWTH
    capital_growth: float = DEFAULT_CAPITAL_GROWTH
    strata_fees: Optional[float] = DEFAULT_STRATA_FEES

    loan: LoanDetails = Field(default_factory=LoanDetails)
    expenses: Expenses = Field(default_factory=Expenses)

    projections: list[Projection] = Field(default_factory=list)

    @property
    def is_land(self) -> bool:
        return self.property_type == PropertyType.LAND

    @property
    def is_investment(self) -> bool:
        return not self.is_living_here


def default_property_data() -> PropertyData:
    """Fresh PropertyData for a new scenario."""
    return PropertyData()
