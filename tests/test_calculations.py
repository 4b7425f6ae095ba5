"""Tests for stamp duty, loan, expense and projection calculations."""

import pytest

from property_planner.calculations import (
    annual_breakdown,
    calculate_deposit_from_lvr,
    calculate_expenses,
    calculate_lmi,
    calculate_loan_details,
    calculate_one_time_expenses,
    calculate_property_data,
    calculate_stamp_duty,
    compute_projections,
    government_fees,
    monthly_repayment,
)
from property_planner.models import (
    Expenses,
    LoanDetails,
    PropertyData,
    PropertyType,
    StateCode,
)


class TestStampDuty:
    """Tests for state duty tables and first home buyer rules."""

    @pytest.mark.parametrize(
        "value,state,expected",
        [
            (300_000, StateCode.NSW, 8_632),
            (10_000, StateCode.NSW, 125),
            (1_000_000, StateCode.VIC, 55_000),
            (500_000, StateCode.WA, 17_975),
        ],
    )
    def test_base_duty(self, value, state, expected):
        assert calculate_stamp_duty(value, state=state) == pytest.approx(expected)

    def test_minimum_duty(self):
        assert calculate_stamp_duty(1_000, state=StateCode.NSW) == 20

    @pytest.mark.parametrize("value", [None, 0, -10, float("nan")])
    def test_no_value_no_duty(self, value):
        assert calculate_stamp_duty(value) == 0

    def test_unknown_state_falls_back_to_nsw(self):
        assert calculate_stamp_duty(300_000, state="XX") == calculate_stamp_duty(300_000, state="NSW")

    def test_first_home_buyer_full_exemption(self):
        assert calculate_stamp_duty(750_000, first_home_buyer=True) == 0

    def test_nsw_first_home_buyer_phase_out(self):
        assert calculate_stamp_duty(900_000, first_home_buyer=True) == 19_706

    def test_first_home_buyer_above_threshold_pays_full_duty(self):
        assert calculate_stamp_duty(1_200_000, first_home_buyer=True) == calculate_stamp_duty(1_200_000)

    def test_linear_concession(self):
        # SA: half way through the concession band pays half the duty
        assert calculate_stamp_duty(625_000, first_home_buyer=True, state=StateCode.SA) == 14_040

    def test_exemption_without_graduation(self):
        assert calculate_stamp_duty(400_000, first_home_buyer=True, state=StateCode.WA) == 0
        assert calculate_stamp_duty(500_000, first_home_buyer=True, state=StateCode.WA) == pytest.approx(17_975)


class TestLoan:
    """Tests for repayments, amortisation and LMI."""

    def test_interest_only_repayment(self):
        assert monthly_repayment(400_000, 6, 30, is_interest_only=True) == 2_000

    def test_principal_and_interest_repayment(self):
        assert monthly_repayment(100_000, 12, 1) == pytest.approx(8_884.88)

    @pytest.mark.parametrize("principal,rate", [(0, 5), (100_000, 0), (-5, 5)])
    def test_nothing_to_repay(self, principal, rate):
        assert monthly_repayment(principal, rate) == 0

    def test_breakdown_repays_whole_loan_over_term(self):
        year = annual_breakdown(1, 100_000, 12, 1)
        assert year.principal == pytest.approx(100_000, abs=0.01)
        assert year.interest == pytest.approx(12 * 8_884.88 - 100_000, abs=0.1)

    def test_breakdown_after_term_is_zero(self):
        year = annual_breakdown(2, 100_000, 12, 1)
        assert (year.principal, year.interest) == (0, 0)

    def test_breakdown_interest_only(self):
        year = annual_breakdown(1, 400_000, 6, 30, is_interest_only=True)
        assert year.principal == 0
        assert year.interest == 24_000

    def test_principal_grows_each_year(self):
        first = annual_breakdown(1, 400_000, 5.5, 30)
        second = annual_breakdown(2, 400_000, 5.5, 30)
        assert second.principal > first.principal
        assert second.interest < first.interest

    @pytest.mark.parametrize(
        "lvr,expected",
        [(70, 0), (80, 0), (81, 1_480), (90, 9_200), (95, 24_000)],
    )
    def test_lmi_bands(self, lvr, expected):
        assert calculate_lmi(lvr, 400_000) == expected

    def test_lmi_unavailable_above_95(self):
        assert calculate_lmi(96, 400_000) is None

    def test_lmi_without_loan(self):
        assert calculate_lmi(90, 0) == 0

    def test_deposit_from_lvr(self):
        assert calculate_deposit_from_lvr(500_000, 80) == 100_000
        assert calculate_deposit_from_lvr(500_000, 80, True, 16_912) == 116_912
        assert calculate_deposit_from_lvr(500_000, 100) == 0

    def test_loan_details(self):
        loan = calculate_loan_details(500_000, 100_000, 16_912, LoanDetails())
        assert loan.amount == 400_000
        assert loan.lvr == pytest.approx(80)
        assert loan.lmi == 0
        assert loan.monthly_mortgage == monthly_repayment(400_000, 5.5, 30)

    def test_loan_details_with_stamp_duty_and_lmi(self):
        loan = calculate_loan_details(500_000, 100_000, 20_000, LoanDetails(include_stamp_duty=True))
        assert loan.lvr == pytest.approx(84)
        assert loan.lmi == 2_940
        assert loan.amount == 422_940

    def test_loan_details_keep_inputs(self):
        loan = calculate_loan_details(
            500_000, 100_000, 0, LoanDetails(term=25, interest=6.1, is_interest_only=True)
        )
        assert (loan.term, loan.interest, loan.is_interest_only) == (25, 6.1, True)


class TestExpenses:
    """Tests for ongoing expense visibility and government fees."""

    @pytest.mark.parametrize(
        "is_land,is_investment,expected",
        [
            (False, True, 6_500),
            (False, False, 4_000),
            (True, True, 3_700),
            (True, False, 3_700),
        ],
    )
    def test_visibility_rules(self, is_land, is_investment, expected):
        assert calculate_expenses(Expenses(), is_land, is_investment).ongoing_total == expected

    def test_one_time_total_is_not_modified(self):
        expenses = calculate_expenses(Expenses(one_time_total=5_000), False, True)
        assert expenses.one_time_total == 5_000

    def test_government_fees(self):
        assert government_fees(StateCode.NSW) == pytest.approx(351.4)
        assert government_fees("QLD") == pytest.approx(476.28)
        assert government_fees(None) == government_fees(StateCode.NSW)
        assert government_fees("XX") == government_fees(StateCode.NSW)

    def test_one_time_expenses_include_fees(self):
        assert calculate_one_time_expenses(3_500, StateCode.NSW) == 3_851


class TestProjections:
    """Tests for multi-year projections."""

    def make_data(self, **overrides) -> PropertyData:
        values = {"property_value": 500_000, "deposit": 100_000}
        values.update(overrides)
        return PropertyData(**values)

    def test_no_property_value_no_projections(self):
        assert compute_projections(PropertyData(), years=5, start_year=2025) == []

    def test_one_projection_per_year(self):
        projections = compute_projections(self.make_data(), years=5, start_year=2025)
        assert [p.year for p in projections] == [2025, 2026, 2027, 2028, 2029]

    def test_growth_compounds(self):
        first, second = compute_projections(self.make_data(), years=2, start_year=2025)
        assert first.property_value == 515_000
        assert second.property_value == 530_450
        assert first.weekly_rent == 600
        assert second.weekly_rent == 630
        assert first.rental_income == 31_200

    def test_first_year_spent(self):
        data = calculate_property_data(self.make_data(), years=1, start_year=2025)
        first = data.projections[0]
        upfront = 100_000 + 16_912 + 3_851
        yearly = data.loan.monthly_mortgage * 12 + 6_000 + 936 + 6_500
        assert first.spent == pytest.approx(upfront + yearly, abs=0.01)

    def test_equity_and_balance_account_for_principal(self):
        projections = compute_projections(self.make_data(), years=3, start_year=2025)
        for projection in projections:
            assert projection.equity + projection.loan_balance == pytest.approx(500_000, abs=0.05)
        assert projections[2].equity > projections[0].equity

    def test_interest_only_balance_does_not_fall(self):
        data = self.make_data(loan=LoanDetails(is_interest_only=True))
        projections = compute_projections(data, years=3, start_year=2025)
        assert all(p.loan_balance == 400_000 for p in projections)
        assert all(p.equity == 100_000 for p in projections)

    def test_roi_is_returns_over_spent(self):
        for projection in compute_projections(self.make_data(), years=3, start_year=2025):
            assert projection.roi == pytest.approx(projection.returns / projection.spent * 100)

    def test_tax_return_only_for_positive_taxable_amount(self):
        rich_rent = self.make_data(weekly_rent=5_000)
        projection = compute_projections(rich_rent, years=1, start_year=2025)[0]
        assert projection.taxable_amount < 0
        assert projection.tax_return == 0

    def test_deterministic(self):
        data = self.make_data()
        assert compute_projections(data, years=5, start_year=2025) == compute_projections(
            data, years=5, start_year=2025
        )

    def test_default_years_from_settings(self):
        assert len(compute_projections(self.make_data(), start_year=2025)) == 5


class TestCalculatePropertyData:
    """Tests for recomputing every derived field."""

    def test_derived_fields(self):
        data = calculate_property_data(
            PropertyData(property_value=500_000, deposit=100_000), years=5, start_year=2025
        )
        assert data.stamp_duty == pytest.approx(16_912)
        assert data.loan.amount == 400_000
        assert data.expenses.ongoing_total == 6_500
        assert data.expenses.one_time_total == 3_500
        assert len(data.projections) == 5

    def test_inputs_untouched(self):
        source = PropertyData(
            property_value=650_000,
            deposit=130_000,
            property_type=PropertyType.APARTMENT,
            state=StateCode.VIC,
            first_home_buyer=True,
        )
        data = calculate_property_data(source, years=1, start_year=2025)
        assert data.property_value == source.property_value
        assert data.deposit == source.deposit
        assert data.state == StateCode.VIC
        assert data.property_type == PropertyType.APARTMENT

    def test_recalculation_is_idempotent(self):
        once = calculate_property_data(
            PropertyData(property_value=500_000, deposit=100_000), years=3, start_year=2025
        )
        twice = calculate_property_data(once, years=3, start_year=2025)
        assert twice == once
