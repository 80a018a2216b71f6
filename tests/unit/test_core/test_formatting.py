"""
test_formatting.py - Babel 기반 숫자/통화/날짜 포맷 테스트

DoD:
- 숫자 shorthand (N/F/P) + CLDR 패턴
- 통화 기호 위치는 locale 통화 패턴을 따름
- 날짜 shorthand (d/D/t/T/g/G), LDML 패턴, preset
"""

from datetime import date, datetime
from decimal import Decimal

import pytest
from babel import Locale

from docbinder.core.formatting import (
    coerce_datetime,
    format_currency_amount,
    format_date_preset,
    format_date_value,
    format_number,
    number_pattern,
)

EN = Locale.parse("en_US")
DE = Locale.parse("de_DE")

ISSUED = datetime(2024, 1, 15, 14, 30)


# =============================================================================
# 숫자
# =============================================================================

class TestNumberPattern:
    """포맷 문자열 → CLDR 패턴."""

    @pytest.mark.parametrize(
        "fmt,expected",
        [
            (None, ("#,##0.00", False)),
            ("N", ("#,##0.00", False)),
            ("N0", ("#,##0", False)),
            ("n3", ("#,##0.000", False)),
            ("F1", ("0.0", False)),
            ("P1", ("#,##0.0%", True)),
            ("#,##0.###", ("#,##0.###", False)),
        ],
    )
    def test_patterns(self, fmt, expected):
        assert number_pattern(fmt) == expected


class TestFormatNumber:
    """format_number 테스트."""

    def test_default_grouping_two_decimals(self):
        assert format_number(Decimal("1234.5"), "N", EN) == "1,234.50"

    def test_german_separators(self):
        """de_DE: 그룹 '.', 소수 ','."""
        assert format_number(Decimal("1234.5"), "N2", DE) == "1.234,50"

    def test_fixed_without_grouping(self):
        assert format_number(1234.5, "F1", DE) == "1234,5"

    def test_percent(self):
        assert format_number(0.125, "P1", EN) == "12.5%"

    def test_custom_pattern(self):
        assert format_number(1.5, "#,##0.000", EN) == "1.500"

    def test_float_has_no_binary_noise(self):
        assert format_number(0.1 + 0.2, "N2", EN) == "0.30"

    def test_integer(self):
        assert format_number(1234567, "N0", EN) == "1,234,567"


# =============================================================================
# 통화
# =============================================================================

class TestFormatCurrencyAmount:
    """format_currency_amount 테스트."""

    def test_symbol_after_number_in_german(self):
        assert format_currency_amount(Decimal("1234.56"), "€", 2, DE) == "1.234,56 €"

    def test_symbol_before_number_in_english(self):
        """en_US 통화 패턴은 ¤로 시작 (공백 없음)."""
        assert format_currency_amount(Decimal("1234.56"), "€", 2, EN) == "€1,234.56"

    def test_symbol_after_number_with_dot_decimal(self):
        """en_150: 점 소수 구분 + 통화 패턴이 숫자로 시작 → 공백 후 기호."""
        locale = Locale.parse("en_150")

        assert format_currency_amount(Decimal("1234.56"), "€", 2, locale) == "1,234.56 €"

    def test_decimals(self):
        assert format_currency_amount(Decimal("1234.5"), "€", 0, DE) == "1.234 €"
        assert format_currency_amount(Decimal("1234.5"), "€", 3, DE) == "1.234,500 €"

    def test_negative_decimals_treated_as_zero(self):
        assert format_currency_amount(Decimal("12"), "$", -1, EN) == "$12"


# =============================================================================
# 날짜
# =============================================================================

class TestCoerceDatetime:
    """날짜 해석 테스트."""

    def test_datetime_passthrough(self):
        assert coerce_datetime(ISSUED) is ISSUED

    def test_date_to_midnight(self):
        assert coerce_datetime(date(2024, 1, 15)) == datetime(2024, 1, 15)

    def test_iso_string(self):
        assert coerce_datetime("2024-01-15T14:30:00") == ISSUED

    def test_unparseable(self):
        assert coerce_datetime("not a date") is None
        assert coerce_datetime(42) is None
        assert coerce_datetime(None) is None


class TestFormatDateValue:
    """format_date_value 테스트."""

    def test_short_date(self):
        assert format_date_value(ISSUED, "d", EN) == "1/15/24"
        assert format_date_value(ISSUED, "d", DE) == "15.01.24"

    def test_long_date(self):
        assert format_date_value(ISSUED, "D", EN) == "January 15, 2024"
        assert format_date_value(ISSUED, "D", DE) == "15. Januar 2024"

    def test_times_in_german(self):
        assert format_date_value(ISSUED, "t", DE) == "14:30"
        assert format_date_value(ISSUED, "T", DE) == "14:30:00"

    def test_general_date_time(self):
        assert format_date_value(ISSUED, "g", DE) == "15.01.24 14:30"
        assert format_date_value(ISSUED, "G", DE) == "15.01.24 14:30:00"

    def test_ldml_pattern(self):
        assert format_date_value(ISSUED, "dd/MM/yyyy", EN) == "15/01/2024"
        assert format_date_value(ISSUED, "yyyy-MM-dd HH:mm", EN) == "2024-01-15 14:30"

    def test_date_object(self):
        assert format_date_value(date(2024, 1, 15), "dd/MM/yyyy", EN) == "15/01/2024"


class TestFormatDatePreset:
    """format_date_preset 테스트."""

    def test_short_and_long(self):
        assert format_date_preset(ISSUED, "short", DE) == "15.01.24"
        assert format_date_preset(ISSUED, "long", DE) == "15. Januar 2024"

    def test_full(self):
        assert format_date_preset(ISSUED, "full", DE) == "Montag, 15. Januar 2024 14:30:00"

    def test_fixed_presets(self):
        assert format_date_preset(ISSUED, "iso", DE) == "2024-01-15"
        assert format_date_preset(ISSUED, "monthyear", EN) == "January 2024"
        assert format_date_preset(ISSUED, "monthyear", DE) == "Januar 2024"

    def test_preset_is_case_insensitive(self):
        assert format_date_preset(ISSUED, "ISO", EN) == "2024-01-15"

    def test_unknown_preset_falls_back(self):
        assert format_date_preset(ISSUED, "whatever", EN) == "15/01/2024"

    def test_non_date_returned_as_text(self):
        assert format_date_preset("soon", "short", EN) == "soon"
