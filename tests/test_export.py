"""Tests for export rows and CSV rendering."""

from datetime import datetime, timezone

from property_planner.calculations import calculate_property_data
from property_planner.export import (
    ExportRow,
    build_comparison_rows,
    build_csv,
    build_detailed_rows,
    filter_rows,
)
from property_planner.models import PropertyData, Scenario

CREATED = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_scenario(name: str, value: float, calculated: bool = True) -> Scenario:
    data = PropertyData(property_value=value, deposit=value / 5)
    if calculated:
        data = calculate_property_data(data, years=1, start_year=2025)
    return Scenario(id=name.lower(), name=name, data=data, created_at=CREATED, updated_at=CREATED)


class TestRows:
    """Tests for row definitions."""

    def test_comparison_rows(self):
        rows = build_comparison_rows()
        keys = [row.key for row in rows]
        assert keys[:2] == ["propertyValue", "deposit"]
        assert {row.key for row in rows if row.highlight} == {"monthlyMortgage", "netCashFlow"}

        scenario = make_scenario("Home", 500_000)
        values = {row.key: row.accessor(scenario) for row in rows}
        assert values["propertyValue"] == "$500,000"
        assert values["fhb"] == "No"
        assert values["occupancy"] == "Investment"
        assert values["propertyType"] == "House"
        assert values["totalLoan"] == "$400,000"

    def test_detailed_rows_have_sections(self):
        rows = build_detailed_rows()
        headers = [row.key for row in rows if row.is_header]
        assert headers == [
            "property-header",
            "loan-header",
            "expenses-header",
            "cashflow-header",
            "netposition-header",
        ]
        assert all(row.section for row in rows)

    def test_detailed_rows_without_projections(self):
        scenario = make_scenario("Draft", 500_000, calculated=False)
        values = {row.key: row.accessor(scenario) for row in build_detailed_rows()}
        assert values["netCashFlow"] == "-"
        assert values["roi"] == "-"
        assert values["loanTerm"] == "30 years"
        assert values["loanInterest"] == "5.5%"

    def test_detailed_rows_use_first_projection(self):
        scenario = make_scenario("Home", 500_000)
        values = {row.key: row.accessor(scenario) for row in build_detailed_rows()}
        assert values["rentalIncome"] == "$31,200"
        assert values["roi"].endswith("%")

    def test_accessors_are_pure(self):
        scenario = make_scenario("Home", 500_000)
        rows = build_detailed_rows()
        assert [r.accessor(scenario) for r in rows] == [r.accessor(scenario) for r in rows]

    def test_filter_keeps_matching_header(self):
        rows = filter_rows(build_detailed_rows(), "loan")
        assert rows[0].key == "loan-header"
        assert all(row.section == "loan" for row in rows[1:])
        assert len(rows) > 1

    def test_filter_all(self):
        rows = build_detailed_rows()
        assert filter_rows(rows, "all") == rows

    def test_filter_unknown_section(self):
        assert filter_rows(build_detailed_rows(), "nothing") == []


class TestCsv:
    """Tests for CSV rendering."""

    def test_header_and_values(self):
        rows = [ExportRow("propertyValue", "Property Value", lambda s: f"{s.data.property_value:.0f}")]
        scenarios = [make_scenario("A", 500_000), make_scenario("B", 650_000)]

        assert build_csv(rows, scenarios) == "Metric,A,B\nProperty Value,500000,650000\n"

    def test_values_with_commas_are_quoted(self):
        scenarios = [make_scenario("Home, Sydney", 500_000)]
        text = build_csv(build_comparison_rows()[:1], scenarios)
        lines = text.splitlines()
        assert lines[0] == 'Metric,"Home, Sydney"'
        assert lines[1] == 'Property Value,"$500,000"'

    def test_quotes_are_escaped(self):
        scenarios = [make_scenario('The "big" one', 500_000)]
        assert build_csv([], scenarios) == 'Metric,"The ""big"" one"\n'

    def test_section_headers_padded_after_blank_line(self):
        rows = filter_rows(build_detailed_rows(), "loan")
        scenarios = [make_scenario("A", 500_000), make_scenario("B", 650_000)]
        lines = build_csv(rows, scenarios).split("\n")
        assert lines[1] == ""
        assert lines[2] == "LOAN DETAILS,,"
        assert lines[3].startswith("Loan Amount,")

    def test_no_scenarios(self):
        assert build_csv(build_comparison_rows()[:1], []) == "Metric\nProperty Value\n"
