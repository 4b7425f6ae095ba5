"""
Export Row Definitions

An export is a table: one row per metric, one column per scenario. Each
ExportRow knows how to render its cell for a scenario.

Accessors are pure functions of a Scenario snapshot. They never look at
the store, so exports of the same scenarios are always identical.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from property_planner.models.property import Projection, PropertyData
from property_planner.models.scenario import Scenario
from property_planner.sync.number_format import format_currency, format_percent_text

HEADER_SECTION = "header"
ALL_SECTIONS = "all"

Accessor = Callable[[Scenario], str]


@dataclass(frozen=True)
class ExportRow:
    key: str
    label: str
    accessor: Accessor
    section: Optional[str] = None
    highlight: bool = False

    @property
    def is_header(self) -> bool:
        return self.section == HEADER_SECTION


def _header(key: str, label: str) -> ExportRow:
    return ExportRow(key=key, label=label, accessor=lambda _: "", section=HEADER_SECTION)


def _money_or_dash(value: Optional[float]) -> str:
    return format_currency(value) if value else "-"


def _percent_or_dash(value: Optional[float]) -> str:
    return f"{format_percent_text(value)}%" if value else "-"


def _yes_no(value: bool) -> str:
    return "Yes" if value else "No"


def _first_projection(data: PropertyData) -> Optional[Projection]:
    return data.projections[0] if data.projections else None


def _projected(field: str, render: Callable[[float], str] = format_currency) -> Accessor:
    def accessor(scenario: Scenario) -> str:
        projection = _first_projection(scenario.data)
        if projection is None:
            return "-"
        return render(getattr(projection, field))
    return accessor


# =============================================================================
# COMPARISON TABLE
# =============================================================================

def build_comparison_rows() -> list[ExportRow]:
    """Rows of the side-by-side comparison table."""
    return [
        ExportRow(
            key="propertyValue",
            label="Property Value",
            accessor=lambda s: format_currency(s.data.property_value),
        ),
        ExportRow(
            key="deposit",
            label="Deposit",
            accessor=lambda s: format_currency(s.data.deposit),
        ),
        ExportRow(
            key="fhb",
            label="First Home Buyer",
            accessor=lambda s: _yes_no(s.data.first_home_buyer),
        ),
        ExportRow(
            key="occupancy",
            label="Occupancy",
            accessor=lambda s: "Owner-Occupied" if s.data.is_living_here else "Investment",
        ),
        ExportRow(
            key="propertyType",
            label="Property Type",
            accessor=lambda s: s.data.property_type.value.capitalize(),
        ),
        ExportRow(
            key="stampDuty",
            label="Stamp Duty",
            accessor=lambda s: format_currency(s.data.stamp_duty),
        ),
        ExportRow(
            key="lmi",
            label="LMI",
            accessor=lambda s: format_currency(s.data.loan.lmi),
        ),
        ExportRow(
            key="totalLoan",
            label="Total Loan",
            accessor=lambda s: format_currency(s.data.loan.amount),
        ),
        ExportRow(
            key="monthlyMortgage",
            label="Monthly Mortgage",
            accessor=lambda s: format_currency(s.data.loan.monthly_mortgage),
            highlight=True,
        ),
        ExportRow(
            key="netCashFlow",
            label="Annual Net Cash Flow",
            accessor=_projected("net_cash_flow"),
            highlight=True,
        ),
    ]


# =============================================================================
# DETAILED TABLE
# =============================================================================

def build_detailed_rows() -> list[ExportRow]:
    """
    Every input and derived figure, grouped into sections.

    Each group starts with a header row; data rows carry their section id
    so the table can be filtered (see filter_rows). Cash flow and net
    position figures come from the first projected year.
    """
    return [
        _header("property-header", "PROPERTY DETAILS"),
        ExportRow("propertyValue", "Property Value",
                  lambda s: _money_or_dash(s.data.property_value), "property"),
        ExportRow("deposit", "Deposit",
                  lambda s: _money_or_dash(s.data.deposit), "property"),
        ExportRow("propertyType", "Property Type",
                  lambda s: s.data.property_type.value.capitalize(), "property"),
        ExportRow("state", "State",
                  lambda s: s.data.state.value, "property"),
        ExportRow("firstHomeBuyer", "First Home Buyer",
                  lambda s: _yes_no(s.data.first_home_buyer), "property"),
        ExportRow("isLivingHere", "Living Here",
                  lambda s: _yes_no(s.data.is_living_here), "property"),
        ExportRow("isBrandNew", "Brand New",
                  lambda s: _yes_no(s.data.is_brand_new), "property"),
        ExportRow("stampDuty", "Stamp Duty",
                  lambda s: _money_or_dash(s.data.stamp_duty), "property"),

        _header("loan-header", "LOAN DETAILS"),
        ExportRow("loanAmount", "Loan Amount",
                  lambda s: _money_or_dash(s.data.loan.amount), "loan"),
        ExportRow("loanTerm", "Loan Term",
                  lambda s: f"{s.data.loan.term} years", "loan"),
        ExportRow("loanInterest", "Interest Rate",
                  lambda s: _percent_or_dash(s.data.loan.interest), "loan"),
        ExportRow("isInterestOnly", "Interest Only",
                  lambda s: _yes_no(s.data.loan.is_interest_only), "loan"),
        ExportRow("lvr", "LVR",
                  lambda s: _percent_or_dash(s.data.loan.lvr), "loan"),
        ExportRow("lmi", "LMI",
                  lambda s: _money_or_dash(s.data.loan.lmi), "loan"),
        ExportRow("monthlyMortgage", "Monthly Mortgage",
                  lambda s: _money_or_dash(s.data.loan.monthly_mortgage), "loan",
                  highlight=True),

        _header("expenses-header", "EXPENSES"),
        ExportRow("oneTimeTotal", "One-time Total",
                  lambda s: format_currency(s.data.expenses.one_time_total), "expenses"),
        ExportRow("council", "Council Rates",
                  lambda s: format_currency(s.data.expenses.ongoing.council), "expenses"),
        ExportRow("water", "Water",
                  lambda s: format_currency(s.data.expenses.ongoing.water), "expenses"),
        ExportRow("landTax", "Land Tax",
                  lambda s: format_currency(s.data.expenses.ongoing.land_tax), "expenses"),
        ExportRow("insurance", "Insurance",
                  lambda s: format_currency(s.data.expenses.ongoing.insurance), "expenses"),
        ExportRow("propertyManager", "Property Manager",
                  lambda s: format_currency(s.data.expenses.ongoing.property_manager), "expenses"),
        ExportRow("maintenance", "Maintenance",
                  lambda s: format_currency(s.data.expenses.ongoing.maintenance), "expenses"),
        ExportRow("ongoingTotal", "Ongoing Total",
                  lambda s: format_currency(s.data.expenses.ongoing_total), "expenses"),
        ExportRow("strataFees", "Strata Fees",
                  lambda s: _money_or_dash(s.data.strata_fees), "expenses"),

        _header("cashflow-header", "CASH FLOW"),
        ExportRow("weeklyRent", "Rent (pw)",
                  _projected("weekly_rent", _money_or_dash), "cashflow"),
        ExportRow("rentalIncome", "Rental Income",
                  _projected("rental_income", _money_or_dash), "cashflow"),
        ExportRow("interestPaid", "Interest Paid",
                  _projected("annual_interest", _money_or_dash), "cashflow"),
        ExportRow("taxDeductions", "Tax Deductions",
                  _projected("taxable_amount"), "cashflow"),
        ExportRow("taxReturn", "Tax Return",
                  _projected("tax_return", _money_or_dash), "cashflow"),
        ExportRow("netCashFlow", "Net Cash Flow",
                  _projected("net_cash_flow"), "cashflow", highlight=True),

        _header("netposition-header", "NET POSITION"),
        ExportRow("rentalGrowth", "Rental Growth (pw per year)",
                  lambda s: _money_or_dash(s.data.rental_growth), "netposition"),
        ExportRow("capitalGrowth", "Capital Growth",
                  lambda s: f"{format_percent_text(s.data.capital_growth)}%", "netposition"),
        ExportRow("totalSpent", "Total Spent",
                  _projected("spent"), "netposition"),
        ExportRow("equity", "Equity",
                  _projected("equity"), "netposition"),
        ExportRow("totalReturns", "Total Returns",
                  _projected("returns"), "netposition"),
        ExportRow("roi", "ROI",
                  _projected("roi", lambda roi: f"{roi:.2f}%"), "netposition", highlight=True),
    ]


def filter_rows(rows: list[ExportRow], section: str) -> list[ExportRow]:
    """
    Keep the rows of one section plus the header that introduces it.

    A header belongs to the section of the first data row after it.
    `section="all"` returns every row.
    """
    if section == ALL_SECTIONS:
        return list(rows)

    result: list[ExportRow] = []
    for index, row in enumerate(rows):
        if row.is_header:
            group = next(
                (r.section for r in rows[index + 1:] if r.section and not r.is_header),
                None,
            )
            if group == section:
                result.append(row)
        elif row.section == section:
            result.append(row)
    return result
