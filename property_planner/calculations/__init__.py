"""
Calculations Package

Pure functions deriving figures from a property plan's inputs:
stamp duty, loan figures, expense totals and multi-year projections.
"""

from property_planner.calculations.expenses import (
    calculate_expenses,
    calculate_one_time_expenses,
    calculate_ongoing_expenses,
    government_fees,
)
from property_planner.calculations.loan import (
    annual_breakdown,
    calculate_deposit_from_lvr,
    calculate_lmi,
    calculate_loan_details,
    monthly_repayment,
)
from property_planner.calculations.projections import (
    calculate_property_data,
    compute_projections,
)
from property_planner.calculations.stamp_duty import calculate_stamp_duty

__all__ = [
    "annual_breakdown",
    "calculate_deposit_from_lvr",
    "calculate_expenses",
    "calculate_lmi",
    "calculate_loan_details",
    "calculate_one_time_expenses",
    "calculate_ongoing_expenses",
    "calculate_property_data",
    "calculate_stamp_duty",
    "compute_projections",
    "government_fees",
    "monthly_repayment",
]
