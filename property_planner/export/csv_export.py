"""
CSV Export

Renders export rows for a list of scenarios:

    Metric,Scenario A,Scenario B
    Property Value,"$500,000","$650,000"

    LOAN DETAILS,,
    Loan Amount,...

Section headers get a blank line before them and empty cells after them
so every line has the same number of columns.
"""

import csv
import io
from typing import Sequence

from property_planner.export.rows import ExportRow
from property_planner.models.scenario import Scenario


def build_csv(rows: Sequence[ExportRow], scenarios: Sequence[Scenario]) -> str:
    """CSV text with a Metric column and one column per scenario."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")

    writer.writerow(["Metric", *(scenario.name for scenario in scenarios)])

    for row in rows:
        if row.is_header:
            writer.writerow([])
            writer.writerow([row.label, *([""] * len(scenarios))])
            continue
        writer.writerow([row.label, *(row.accessor(scenario) for scenario in scenarios)])

    return output.getvalue()
