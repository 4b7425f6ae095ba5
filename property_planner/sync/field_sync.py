"""
Currency <-> Percentage Field Synchronisation

Keeps a money field and a "percent of base value" field consistent while
the user edits either one freely, e.g. deposit in dollars vs deposit as a
percentage of the property value.

DESIGN DECISION: Both fields hold display TEXT, not numbers.
- Typed text is stored verbatim; formatting only happens on blur or when a
  field is derived from the other one.
- The authoritative amount lives outside (the scenario data). The engine
  emits parsed amounts through `on_change` and receives the amount back
  through `sync_value`.
- A watermark of the last value seen or emitted tells a genuine outside
  change apart from the echo of our own emission. Without it, the echo
  would reformat the field the user is typing in.
"""

from enum import Enum
from typing import Callable, Optional

from property_planner.sync.number_format import (
    currency_from_percent,
    format_currency,
    format_percent_text,
    parse_number,
    percent_from_currency,
)

ChangeCallback = Callable[[Optional[float]], None]
BlurCallback = Callable[[], None]

_UNSET = object()


class InputMode(str, Enum):
    """Which field the user edited last."""
    CURRENCY = "currency"
    PERCENT = "percent"


def _usable_base(base_value: Optional[float]) -> bool:
    return base_value is not None and base_value > 0


class CurrencyPercentSync:
    """
    Stateful synchroniser for one currency/percent field pair.

    Args:
        base_value: Value the percentage is relative to. Zero, negative or
                    None disables every percent-based recomputation.
        value: Initial authoritative amount (synced as on mount).
        on_change: Called with the parsed amount, or None when cleared.
        on_blur: Called after either field is committed.
    """

    def __init__(
        self,
        base_value: Optional[float] = None,
        value: Optional[float] = None,
        on_change: Optional[ChangeCallback] = None,
        on_blur: Optional[BlurCallback] = None,
    ):
        self.currency_text = ""
        self.percent_text = ""
        self.input_mode: Optional[InputMode] = None

        self._base_value = base_value
        self._on_change = on_change
        self._on_blur = on_blur
        self._last_external_value: object = _UNSET

        self.sync_value(value)

    @property
    def base_value(self) -> Optional[float]:
        return self._base_value

    # -------------------------
    # Change handlers
    # -------------------------

    def on_currency_change(self, text: str) -> None:
        self.currency_text = text
        self.input_mode = InputMode.CURRENCY

        parsed = parse_number(text)
        if parsed is not None:
            if _usable_base(self._base_value):
                percent = percent_from_currency(parsed, self._base_value)
                if percent is not None:
                    self.percent_text = format_percent_text(percent)
            self._emit(parsed)
        elif text == "":
            self.percent_text = ""
            self._emit(None)

    def on_percent_change(self, text: str) -> None:
        self.percent_text = text
        self.input_mode = InputMode.PERCENT

        parsed = parse_number(text)
        if parsed is not None and _usable_base(self._base_value):
            amount = currency_from_percent(parsed, self._base_value)
            if amount is not None:
                self.currency_text = format_currency(amount)
                self._emit(amount)
        elif text == "":
            self.currency_text = ""
            self._emit(None)

    def on_currency_blur(self) -> None:
        parsed = parse_number(self.currency_text)
        if parsed is not None:
            self.currency_text = format_currency(parsed)
        if self._on_blur:
            self._on_blur()

    def on_percent_blur(self) -> None:
        parsed = parse_number(self.percent_text)
        if parsed is not None:
            self.percent_text = format_percent_text(parsed)
        if self._on_blur:
            self._on_blur()

    # -------------------------
    # Outside changes
    # -------------------------

    def sync_value(self, value: Optional[float]) -> bool:
        """
        Push the authoritative amount in from outside.

        Only acts when `value` differs from the watermark, so the echo of
        our own emission leaves the user's text alone.

        Returns:
            True if the fields were rewritten.
        """
        if value == self._last_external_value:
            return False
        self._last_external_value = value

        if value is None:
            self.currency_text = ""
            self.percent_text = ""
            return True

        self.currency_text = format_currency(value)
        percent = percent_from_currency(value, self._base_value)
        self.percent_text = format_percent_text(percent) if percent is not None else ""
        return True

    def set_base_value(self, base_value: Optional[float]) -> None:
        """
        Change the base value.

        The field the user edited last wins: in percent mode the amount is
        recomputed (and emitted), otherwise the percentage is recomputed
        from the amount. Unusable bases leave both fields untouched.
        """
        if base_value == self._base_value:
            return
        self._base_value = base_value
        if not _usable_base(base_value):
            return

        amount = parse_number(self.currency_text)
        percent = parse_number(self.percent_text)

        if self.input_mode is InputMode.PERCENT and percent is not None:
            new_amount = currency_from_percent(percent, base_value)
            if new_amount is not None:
                self.currency_text = format_currency(new_amount)
                self._emit(new_amount)
        elif amount is not None:
            new_percent = percent_from_currency(amount, base_value)
            if new_percent is not None:
                self.percent_text = format_percent_text(new_percent)

    def _emit(self, value: Optional[float]) -> None:
        self._last_external_value = value
        if self._on_change:
            self._on_change(value)
