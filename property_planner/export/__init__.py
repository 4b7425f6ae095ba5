"""Export rows and CSV rendering for scenario comparisons."""

from property_planner.export.csv_export import build_csv
from property_planner.export.rows import (
    ALL_SECTIONS,
    HEADER_SECTION,
    ExportRow,
    build_comparison_rows,
    build_detailed_rows,
    filter_rows,
)

__all__ = [
    "ALL_SECTIONS",
    "HEADER_SECTION",
    "ExportRow",
    "build_comparison_rows",
    "build_csv",
    "build_detailed_rows",
    "filter_rows",
]
