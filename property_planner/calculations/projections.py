"""
Multi-Year Projections

Turns one PropertyData into a year-by-year outlook.

DESIGN DECISION: Everything is derived from the user's INPUTS.
compute_projections() recomputes stamp duty, loan figures and expense
totals itself instead of trusting the derived fields stored on the data,
so the result is a pure function of the inputs (and the start year).

Per modelled year y (1-based):
- property value compounds by `capital_growth` percent per year
- weekly rent grows by `rental_growth` dollars per year
- tax return = 30 % of a positive taxable amount (interest + expenses +
  strata + vacancy + depreciation - rent)
- spent and returns are cumulative from purchase; spent includes the
  up-front costs (deposit, stamp duty, LMI, one-time expenses, fees)
- equity = deposit + principal repaid; roi = returns / spent * 100
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from property_planner.calculations.expenses import (
    annual_rental_income,
    annual_strata_fees,
    calculate_expenses,
    calculate_one_time_expenses,
)
from property_planner.calculations.loan import (
    MONTHS_PER_YEAR,
    annual_breakdown,
    calculate_loan_details,
)
from property_planner.calculations.stamp_duty import calculate_stamp_duty
from property_planner.config import get_settings
from property_planner.models.property import (
    DEFAULT_INTEREST_RATE,
    Expenses,
    LoanDetails,
    Projection,
    PropertyData,
)
from property_planner.sync.number_format import round_half_up

TAX_BRACKET = 0.3
VACANCY_RATE = 0.03
DEPRECIATION_RATE = 0.025


@dataclass(frozen=True)
class _Derived:
    stamp_duty: float
    loan: LoanDetails
    expenses: Expenses


def _derive(data: PropertyData) -> _Derived:
    value = data.property_value or 0.0
    deposit = data.deposit or 0.0

    stamp_duty = calculate_stamp_duty(value, data.first_home_buyer, data.is_land, data.state)
    loan = calculate_loan_details(value, deposit, stamp_duty, data.loan)
    expenses = calculate_expenses(data.expenses, data.is_land, data.is_investment)
    return _Derived(stamp_duty=stamp_duty, loan=loan, expenses=expenses)


def _project(
    data: PropertyData,
    derived: _Derived,
    years: int,
    start_year: int,
) -> list[Projection]:
    value = data.property_value
    if not value or value <= 0:
        return []

    deposit = data.deposit or 0.0
    loan = derived.loan
    amount = loan.amount or 0.0
    interest_rate = loan.interest if loan.interest is not None else DEFAULT_INTEREST_RATE
    annual_mortgage = (loan.monthly_mortgage or 0.0) * MONTHS_PER_YEAR

    strata = annual_strata_fees(data.strata_fees)
    depreciation = round_half_up(value * DEPRECIATION_RATE)
    one_time = calculate_one_time_expenses(derived.expenses.one_time_total, data.state)
    ongoing = derived.expenses.ongoing_total

    upfront = deposit + derived.stamp_duty + (loan.lmi or 0.0) + one_time

    projections: list[Projection] = []
    spent = upfront
    income = 0.0
    principal_repaid = 0.0

    for year in range(1, years + 1):
        breakdown = annual_breakdown(year, amount, interest_rate, loan.term, loan.is_interest_only)
        principal_repaid += breakdown.principal
        # No repayments once the term has run out
        mortgage = annual_mortgage if year <= max(1, loan.term) else 0.0

        weekly_rent = data.weekly_rent + data.rental_growth * (year - 1)
        rental_income = annual_rental_income(weekly_rent)
        vacancy = round_half_up(rental_income * VACANCY_RATE)

        deductible = ongoing + (one_time if year == 1 else 0.0)
        taxable = (
            round_half_up(breakdown.interest)
            + deductible
            + strata
            + vacancy
            + depreciation
            - rental_income
        )
        tax_return = round_half_up(taxable * TAX_BRACKET) if taxable > 0 else 0.0

        net_cash_flow = rental_income - strata - mortgage

        spent += mortgage + strata + vacancy + ongoing
        income += rental_income + tax_return

        property_value = round_half_up(value * (1 + data.capital_growth / 100) ** year)
        returns = income + (property_value - value)
        roi = returns / spent * 100 if spent > 0 else 0.0

        projections.append(
            Projection(
                year=start_year + year - 1,
                property_value=property_value,
                loan_balance=round_half_up(amount - principal_repaid, 2),
                weekly_rent=weekly_rent,
                rental_income=rental_income,
                annual_interest=breakdown.interest,
                taxable_amount=taxable,
                tax_return=tax_return,
                net_cash_flow=round_half_up(net_cash_flow, 2),
                spent=round_half_up(spent, 2),
                equity=round_half_up(deposit + principal_repaid, 2),
                returns=round_half_up(returns, 2),
                roi=roi,
            )
        )

    return projections


def compute_projections(
    data: PropertyData,
    years: Optional[int] = None,
    start_year: Optional[int] = None,
) -> list[Projection]:
    """
    Year-by-year projections for a property plan.

    Args:
        data: The plan. Only its inputs are used.
        years: Number of years. Defaults to AppSettings.projection_years.
        start_year: Calendar year of the first projection. Defaults to this year.

    Returns:
        One Projection per year, or an empty list without a property value.
    """
    years = years if years is not None else get_settings().app.projection_years
    start_year = start_year if start_year is not None else date.today().year
    return _project(data, _derive(data), years, start_year)


def calculate_property_data(
    data: PropertyData,
    years: Optional[int] = None,
    start_year: Optional[int] = None,
) -> PropertyData:
    """
    A copy of `data` with every derived field recomputed.

    Stamp duty, loan amount/LVR/LMI/repayment, the ongoing expense total and
    the projections are replaced; inputs are left untouched.
    """
    years = years if years is not None else get_settings().app.projection_years
    start_year = start_year if start_year is not None else date.today().year

    derived = _derive(data)
    return data.model_copy(
        update={
            "stamp_duty": derived.stamp_duty,
            "loan": derived.loan,
            "expenses": derived.expenses,
            "projections": _project(data, derived, years, start_year),
        }
    )
