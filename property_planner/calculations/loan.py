"""
Loan Calculations

Repayments, amortisation and lenders mortgage insurance (LMI).

Rates are annual percentages (5.5 means 5.5 % p.a.). Amounts are dollars,
rounded to the cent unless noted.
"""

import math
from dataclasses import dataclass
from typing import Optional

from property_planner.models.property import DEFAULT_INTEREST_RATE, DEFAULT_LOAN_TERM, LoanDetails
from property_planner.sync.number_format import round_half_up

MONTHS_PER_YEAR = 12

# (upper LVR bound in percent, premium rate); above the last band LMI is unavailable
LMI_BANDS: tuple[tuple[float, float], ...] = (
    (80, 0.0),
    (82, 0.0037),
    (84, 0.007),
    (86, 0.0125),
    (88, 0.0175),
    (90, 0.023),
    (91, 0.028),
    (92, 0.033),
    (93, 0.042),
    (94, 0.052),
    (95, 0.06),
)


@dataclass(frozen=True)
class YearBreakdown:
    """Principal and interest paid during one loan year."""
    principal: float
    interest: float


def _months(term_years: int) -> int:
    return max(1, int(term_years or 0) * MONTHS_PER_YEAR)


def monthly_repayment(
    principal: float,
    annual_rate_pct: float,
    term_years: int = DEFAULT_LOAN_TERM,
    is_interest_only: bool = False,
) -> float:
    """
    Monthly repayment for a principal & interest or interest-only loan.

    Returns 0 when there is nothing to repay or no interest is charged.
    """
    rate = (annual_rate_pct or 0) / 100 / MONTHS_PER_YEAR
    if not principal or principal <= 0 or rate <= 0:
        return 0.0

    if is_interest_only:
        return round_half_up(principal * rate, 2)

    n = _months(term_years)
    payment = principal * rate / (1 - (1 + rate) ** -n)
    return round_half_up(payment, 2)


def annual_breakdown(
    year: int,
    principal: float,
    annual_rate_pct: float,
    term_years: int = DEFAULT_LOAN_TERM,
    is_interest_only: bool = False,
) -> YearBreakdown:
    """
    Principal and interest paid in loan year `year` (1-based).

    Years after the end of the term pay nothing.
    """
    year = max(1, int(year))
    rate = (annual_rate_pct or 0) / 100 / MONTHS_PER_YEAR
    n = _months(term_years)
    if not principal or principal <= 0 or rate <= 0:
        return YearBreakdown(0.0, 0.0)

    start_month = (year - 1) * MONTHS_PER_YEAR + 1
    end_month = min(year * MONTHS_PER_YEAR, n)
    if start_month > n:
        return YearBreakdown(0.0, 0.0)

    if is_interest_only:
        months = end_month - start_month + 1
        return YearBreakdown(0.0, round_half_up(principal * rate * months, 2))

    payment = principal * rate / (1 - (1 + rate) ** -n)
    balance = principal
    principal_paid = 0.0
    interest_paid = 0.0

    for month in range(1, end_month + 1):
        interest = balance * rate
        principal_part = min(payment - interest, balance)
        if month >= start_month:
            interest_paid += interest
            principal_paid += principal_part
        balance -= principal_part
        if balance <= 0:
            break

    return YearBreakdown(round_half_up(principal_paid, 2), round_half_up(interest_paid, 2))


def calculate_lmi(lvr: float, loan_amount: float) -> Optional[float]:
    """
    LMI premium in whole dollars.

    Returns:
        0 at or below 80 % LVR, None above 95 % (not offered by lenders).
    """
    if not math.isfinite(loan_amount) or loan_amount <= 0:
        return 0.0
    if not math.isfinite(lvr):
        return 0.0

    normalized = round_half_up(max(0.0, min(100.0, lvr)), 2)
    for upper, rate in LMI_BANDS:
        if normalized <= upper:
            return round_half_up(loan_amount * rate)
    return None


def calculate_deposit_from_lvr(
    property_value: float,
    lvr: float,
    include_stamp_duty: bool = False,
    stamp_duty: float = 0.0,
) -> float:
    """Deposit (whole dollars) needed for a target LVR."""
    if not property_value or property_value <= 0 or not lvr or lvr <= 0 or lvr >= 100:
        return 0.0
    deposit = property_value * (1 - lvr / 100)
    if include_stamp_duty:
        deposit += stamp_duty or 0
    return round_half_up(deposit)


def calculate_loan_details(
    property_value: float,
    deposit: float,
    stamp_duty: float,
    loan: Optional[LoanDetails] = None,
) -> LoanDetails:
    """
    Fill in the derived loan figures (amount, LVR, LMI, monthly repayment).

    LMI is capitalised into the loan amount when available.
    """
    loan = loan or LoanDetails()

    borrowed = property_value - deposit
    if loan.include_stamp_duty:
        borrowed += stamp_duty

    lvr = borrowed / property_value * 100 if property_value > 0 and borrowed > 0 else 0.0
    lmi = calculate_lmi(lvr, borrowed)
    amount = borrowed + (lmi or 0)

    interest = loan.interest if loan.interest is not None else DEFAULT_INTEREST_RATE
    monthly = monthly_repayment(amount, interest, loan.term, loan.is_interest_only)

    return loan.model_copy(
        update={
            "amount": amount,
            "lvr": lvr,
            "lmi": lmi,
            "monthly_mortgage": monthly,
        }
    )
