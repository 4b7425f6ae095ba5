"""Tests for number formatting and currency/percent field synchronisation."""

import pytest

from property_planner.sync import (
    CurrencyPercentSync,
    InputMode,
    currency_from_percent,
    format_currency,
    format_percent_text,
    parse_number,
    percent_from_currency,
    round_half_up,
)


class TestNumberFormat:
    """Tests for parsing and display helpers."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("100000", 100000.0),
            ("$1,250.50", 1250.5),
            ("20%", 20.0),
            ("-42", -42.0),
            ("1.2.3", 1.23),
            ("  7 ", 7.0),
        ],
    )
    def test_parse_number(self, text, expected):
        assert parse_number(text) == expected

    @pytest.mark.parametrize("text", ["", None, "abc", "-", ".", "-.", "$"])
    def test_parse_number_rejects(self, text):
        assert parse_number(text) is None

    def test_format_currency(self):
        assert format_currency(100000) == "$100,000"
        assert format_currency(1234.5) == "$1,235"
        assert format_currency(-1250) == "-$1,250"
        assert format_currency(0) == "$0"
        assert format_currency(None) == ""
        assert format_currency(float("nan")) == ""

    def test_format_percent_text(self):
        assert format_percent_text(20) == "20"
        assert format_percent_text(20.5) == "20.5"
        assert format_percent_text(12.345) == "12.35"
        assert format_percent_text(0) == "0"
        assert format_percent_text(-0.001) == "0"

    def test_round_half_up(self):
        assert round_half_up(2.5) == 3
        assert round_half_up(-2.5) == -3
        assert round_half_up(1.005, 2) == 1.01

    def test_conversions(self):
        assert percent_from_currency(100_000, 500_000) == 20
        assert currency_from_percent(20, 500_000) == 100_000

    @pytest.mark.parametrize("base", [None, 0, -1])
    def test_conversions_need_positive_base(self, base):
        assert percent_from_currency(100, base) is None
        assert currency_from_percent(10, base) is None


class TestCurrencyPercentSync:
    """Tests for the sync engine."""

    def make(self, base=500_000, value=None):
        emitted = []
        engine = CurrencyPercentSync(base_value=base, value=value, on_change=emitted.append)
        return engine, emitted

    def test_mount_syncs_external_value(self):
        engine, emitted = self.make(value=100_000)
        assert engine.currency_text == "$100,000"
        assert engine.percent_text == "20"
        assert emitted == []

    def test_percent_edit_derives_currency(self):
        engine, emitted = self.make()
        engine.on_percent_change("20")
        assert engine.percent_text == "20"
        assert engine.currency_text == "$100,000"
        assert engine.input_mode is InputMode.PERCENT
        assert emitted == [100_000]

    def test_currency_edit_derives_percent(self):
        engine, emitted = self.make()
        engine.on_currency_change("100000")
        assert engine.currency_text == "100000"  # verbatim while typing
        assert engine.percent_text == "20"
        assert engine.input_mode is InputMode.CURRENCY
        assert emitted == [100_000]

    def test_blur_formats_own_field_only(self):
        engine, _ = self.make()
        engine.on_currency_change("100000")
        engine.percent_text = "20.000"
        engine.on_currency_blur()
        assert engine.currency_text == "$100,000"
        assert engine.percent_text == "20.000"

        engine.on_percent_blur()
        assert engine.percent_text == "20"

    def test_blur_calls_callback(self):
        calls = []
        engine = CurrencyPercentSync(base_value=100, on_blur=lambda: calls.append(True))
        engine.on_currency_blur()
        engine.on_percent_blur()
        assert calls == [True, True]

    def test_clearing_currency_clears_percent(self):
        engine, emitted = self.make(value=100_000)
        engine.on_currency_change("")
        assert engine.percent_text == ""
        assert emitted == [None]

    def test_clearing_percent_clears_currency(self):
        engine, emitted = self.make(value=100_000)
        engine.on_percent_change("")
        assert engine.currency_text == ""
        assert emitted == [None]

    def test_unparsable_text_kept_without_emitting(self):
        engine, emitted = self.make(value=100_000)
        engine.on_currency_change("-")
        assert engine.currency_text == "-"
        assert engine.percent_text == "20"
        assert emitted == []

    def test_echo_of_own_emission_is_ignored(self):
        """The parent feeding our value back must not reformat typing."""
        engine, emitted = self.make()
        engine.on_currency_change("100000")
        assert engine.sync_value(emitted[-1]) is False
        assert engine.currency_text == "100000"

    def test_genuine_external_change_overwrites(self):
        engine, _ = self.make()
        engine.on_currency_change("100000")
        assert engine.sync_value(150_000) is True
        assert engine.currency_text == "$150,000"
        assert engine.percent_text == "30"

    def test_external_none_clears_both(self):
        engine, _ = self.make(value=100_000)
        engine.sync_value(None)
        assert engine.currency_text == ""
        assert engine.percent_text == ""

    def test_external_value_without_base_clears_percent(self):
        engine, _ = self.make(base=None, value=50_000)
        assert engine.currency_text == "$50,000"
        assert engine.percent_text == ""

    def test_round_trip_is_stable(self):
        """Deriving again from derived text changes nothing."""
        engine, _ = self.make()
        engine.on_percent_change("20")
        currency = engine.currency_text
        engine.on_currency_change(currency)
        assert engine.percent_text == "20"
        engine.on_percent_change(engine.percent_text)
        assert engine.currency_text == currency

    def test_null_base_never_touches_currency(self):
        engine, emitted = self.make(base=None, value=80_000)
        engine.on_percent_change("25")
        assert engine.currency_text == "$80,000"
        assert engine.percent_text == "25"
        assert emitted == []

    @pytest.mark.parametrize("base", [0, -100])
    def test_unusable_base_leaves_percent_as_typed(self, base):
        engine, emitted = self.make(base=base)
        engine.on_currency_change("5000")
        assert engine.percent_text == ""
        assert emitted == [5000]

    def test_base_change_in_percent_mode_keeps_percent(self):
        engine, emitted = self.make()
        engine.on_percent_change("20")
        engine.set_base_value(600_000)
        assert engine.percent_text == "20"
        assert engine.currency_text == "$120,000"
        assert emitted == [100_000, 120_000]

    def test_base_change_in_currency_mode_keeps_currency(self):
        engine, emitted = self.make()
        engine.on_currency_change("100000")
        engine.set_base_value(400_000)
        assert engine.currency_text == "100000"
        assert engine.percent_text == "25"
        assert emitted == [100_000]

    def test_base_change_alone_does_not_resync_value(self):
        """Only the base moved; the watermark keeps the typed text."""
        engine, _ = self.make()
        engine.on_currency_change("100000")
        engine.set_base_value(400_000)
        assert engine.sync_value(100_000) is False
        assert engine.currency_text == "100000"

    def test_base_change_to_unusable_value_keeps_fields(self):
        engine, emitted = self.make()
        engine.on_percent_change("20")
        engine.set_base_value(0)
        assert engine.currency_text == "$100,000"
        assert engine.percent_text == "20"
        assert emitted == [100_000]
        assert engine.base_value == 0
