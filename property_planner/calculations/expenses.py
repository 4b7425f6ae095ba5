"""
Expense Calculations

Which ongoing costs apply depends on what is being bought and who lives
there:

    council, maintenance     always
    land tax                 land, or any investment property
    water, insurance         anything but land
    property manager         investment properties that are not land

Government mortgage registration and transfer fees depend on the state
and are added to the up-front costs.
"""

from typing import Optional, Union

from property_planner.models.property import Expenses, StateCode
from property_planner.sync.number_format import round_half_up

WEEKS_PER_YEAR = 52
QUARTERS_PER_YEAR = 4

# (mortgage registration, transfer) fees per state
STATE_GOVERNMENT_FEES: dict[StateCode, tuple[float, float]] = {
    StateCode.NSW: (175.7, 175.7),
    StateCode.VIC: (135.8, 135.8),
    StateCode.QLD: (238.14, 238.14),
    StateCode.SA: (198.0, 198.0),
    StateCode.WA: (216.6, 216.6),
    StateCode.TAS: (202.46, 202.46),
    StateCode.NT: (176.0, 176.0),
    StateCode.ACT: (178.0, 178.0),
}


def government_fees(state: Optional[Union[StateCode, str]] = None) -> float:
    """Registration plus transfer fee. Missing or unknown states use NSW."""
    try:
        code = StateCode(state) if state is not None else StateCode.NSW
    except ValueError:
        code = StateCode.NSW
    registration, transfer = STATE_GOVERNMENT_FEES[code]
    return registration + transfer


def calculate_one_time_expenses(one_time_total: float, state: Optional[StateCode] = None) -> float:
    """User-entered up-front costs plus government fees, whole dollars."""
    return round_half_up(one_time_total + government_fees(state))


def calculate_ongoing_expenses(expenses: Expenses, is_land: bool, is_investment: bool) -> float:
    """Annual ongoing total after the visibility rules, whole dollars."""
    ongoing = expenses.ongoing
    total = ongoing.council + ongoing.maintenance

    if is_land or is_investment:
        total += ongoing.land_tax

    if not is_land:
        total += ongoing.water + ongoing.insurance

    if is_investment and not is_land:
        total += ongoing.property_manager

    return round_half_up(total)


def calculate_expenses(
    expenses: Optional[Expenses],
    is_land: bool,
    is_investment: bool,
) -> Expenses:
    """
    Expenses with `ongoing_total` recomputed.

    `one_time_total` stays as entered; government fees are added where the
    up-front cost is used (see calculate_one_time_expenses), so
    recalculating repeatedly never accumulates them.
    """
    expenses = expenses or Expenses()
    return expenses.model_copy(
        update={"ongoing_total": calculate_ongoing_expenses(expenses, is_land, is_investment)}
    )


def annual_rental_income(weekly_rent: float) -> float:
    return round_half_up(weekly_rent * WEEKS_PER_YEAR)


def annual_strata_fees(quarterly_fees: Optional[float]) -> float:
    return round_half_up((quarterly_fees or 0) * QUARTERS_PER_YEAR)
