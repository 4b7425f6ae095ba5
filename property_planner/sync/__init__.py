"""Field synchronisation package: number formatting and currency/percent sync."""

from property_planner.sync.field_sync import CurrencyPercentSync, InputMode
from property_planner.sync.number_format import (
    currency_from_percent,
    format_currency,
    format_percent_text,
    parse_number,
    percent_from_currency,
    round_half_up,
)

__all__ = [
    "CurrencyPercentSync",
    "InputMode",
    "currency_from_percent",
    "format_currency",
    "format_percent_text",
    "parse_number",
    "percent_from_currency",
    "round_half_up",
]
