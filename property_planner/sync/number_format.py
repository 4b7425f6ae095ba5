"""
Number parsing and display formatting for money and percentage fields.

Currency is shown in whole Australian dollars ("$100,000", "-$1,250").
Percentages are shown with at most two decimals and no trailing zeros
("20", "20.5", "12.35").

Rounding is half-up (away from zero for .5), matching what users expect
from a calculator rather than Python's banker's rounding.
"""

import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

_NON_NUMERIC = re.compile(r"[^0-9.\-]")


def round_half_up(value: float, places: int = 0) -> float:
    """Round to `places` decimals, .5 away from zero."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def parse_number(text: Optional[str]) -> Optional[float]:
    """
    Lenient parse of user input.

    Strips everything except digits, one decimal point and a leading
    minus sign, so "$1,250.50" and "20%" both parse. Returns None for
    empty or non-numeric input.
    """
    if not text:
        return None

    cleaned = _NON_NUMERIC.sub("", text)
    if not cleaned:
        return None

    first_dot = cleaned.find(".")
    if first_dot != -1:
        cleaned = cleaned[:first_dot + 1] + cleaned[first_dot + 1:].replace(".", "")

    negative = cleaned.startswith("-")
    cleaned = cleaned.replace("-", "")
    if negative:
        cleaned = "-" + cleaned

    if cleaned in ("-", ".", "-.", ""):
        return None

    try:
        number = float(cleaned)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def format_currency(value: Optional[float]) -> str:
    """Whole-dollar display string, empty for missing values."""
    if value is None or not math.isfinite(value):
        return ""
    rounded = int(round_half_up(abs(value)))
    sign = "-" if value < 0 and rounded != 0 else ""
    return f"{sign}${rounded:,}"


def format_percent_text(percent: float) -> str:
    """At most two decimals, trailing zeros dropped."""
    text = f"{round_half_up(percent, 2):.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def percent_from_currency(amount: float, base_value: Optional[float]) -> Optional[float]:
    """`amount` as a percentage of `base_value`, two decimals. None if base unusable."""
    if not base_value or base_value <= 0:
        return None
    percent = amount / base_value * 100
    return round_half_up(percent, 2) if math.isfinite(percent) else None


def currency_from_percent(percent: float, base_value: Optional[float]) -> Optional[float]:
    """`percent` of `base_value`, whole dollars. None if base unusable."""
    if not base_value or base_value <= 0:
        return None
    return round_half_up(percent / 100 * base_value)
