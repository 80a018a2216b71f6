"""
test_values.py - 값 placeholder 테스트

DoD:
- resolve는 순수 함수 (같은 입력 → 같은 출력)
- override locale이 호출 locale보다 우선
- None 값 처리
"""

from dataclasses import FrozenInstanceError
from datetime import datetime
from decimal import Decimal

import pytest
from babel import Locale

from docbinder.domain.schemas import NumericAndTextValue
from docbinder.placeholders import (
    CheckboxPlaceholder,
    CollectionPlaceholder,
    DatePlaceholder,
    FlagPlaceholder,
    LocalizedDatePlaceholder,
    LocalizedNumericPlaceholder,
    NumericAndTextPlaceholder,
    NumericPlaceholder,
    TextPlaceholder,
    ValueKind,
)

EN = Locale.parse("en_US")
DE = Locale.parse("de_DE")


class TestTextPlaceholder:
    """TextPlaceholder 테스트."""

    def test_resolves_string(self, invoice):
        placeholder = TextPlaceholder("Customer", lambda m: m.customer)

        assert placeholder.resolve(invoice, EN) == "ACME GmbH"
        assert placeholder.value_kind == ValueKind.TEXT

    def test_converts_to_string(self, invoice):
        placeholder = TextPlaceholder("Qty", lambda m: len(m.lines))

        assert placeholder.resolve(invoice, EN) == "3"

    def test_none(self, invoice):
        assert TextPlaceholder("Missing", lambda m: None).resolve(invoice, EN) is None

    def test_immutable(self):
        placeholder = TextPlaceholder("Customer", lambda m: m.customer)

        with pytest.raises(FrozenInstanceError):
            placeholder.name = "Other"

    def test_pure(self, invoice):
        """같은 입력 → 같은 출력."""
        placeholder = TextPlaceholder("Customer", lambda m: m.customer)

        assert placeholder.resolve(invoice, EN) == placeholder.resolve(invoice, EN)


class TestNumericPlaceholders:
    """숫자 placeholder 테스트."""

    def test_raw_number_passthrough(self, invoice):
        placeholder = NumericPlaceholder("Total", lambda m: m.total)

        assert placeholder.resolve(invoice, DE) == Decimal("1234.56")

    def test_localized_uses_call_locale(self, invoice):
        placeholder = LocalizedNumericPlaceholder("Total", lambda m: m.total, "N2")

        assert placeholder.resolve(invoice, DE) == "1.234,56"
        assert placeholder.resolve(invoice, EN) == "1,234.56"

    def test_default_format(self, invoice):
        placeholder = LocalizedNumericPlaceholder("Total", lambda m: m.total)

        assert placeholder.resolve(invoice, EN) == "1,234.56"

    def test_override_locale_wins(self, invoice):
        placeholder = LocalizedNumericPlaceholder(
            "Total", lambda m: m.total, "N2", override_locale="de_DE"
        )

        assert placeholder.resolve(invoice, EN) == "1.234,56"

    def test_none_value(self, invoice):
        placeholder = LocalizedNumericPlaceholder("Total", lambda m: None)

        assert placeholder.resolve(invoice, EN) is None


class TestDatePlaceholders:
    """날짜 placeholder 테스트."""

    def test_raw_date_passthrough(self, invoice):
        placeholder = DatePlaceholder("Issued", lambda m: m.issued)

        assert placeholder.resolve(invoice, EN) == datetime(2024, 1, 15, 14, 30)

    def test_localized_date(self, invoice):
        placeholder = LocalizedDatePlaceholder("Issued", lambda m: m.issued, "d")

        assert placeholder.resolve(invoice, DE) == "15.01.24"

    def test_localized_default_format(self, invoice):
        placeholder = LocalizedDatePlaceholder("Issued", lambda m: m.issued)

        assert placeholder.resolve(invoice, DE) == "15.01.24 14:30:00"

    def test_none_value(self, invoice):
        placeholder = LocalizedDatePlaceholder("Issued", lambda m: None, "d")

        assert placeholder.resolve(invoice, DE) is None


class TestNumericAndTextPlaceholder:
    """복합 값 placeholder 테스트."""

    def test_formats_number_and_text(self, invoice):
        placeholder = NumericAndTextPlaceholder("Weight", lambda m: m.weight, "N1")

        assert placeholder.resolve(invoice, DE) == "12,5 kg"
        assert placeholder.value_kind == ValueKind.COMPOSITE

    def test_missing_number(self, invoice):
        placeholder = NumericAndTextPlaceholder(
            "Weight", lambda m: NumericAndTextValue(None, "kg")
        )

        assert placeholder.resolve(invoice, DE) is None

    def test_missing_value(self, invoice):
        placeholder = NumericAndTextPlaceholder("Weight", lambda m: None)

        assert placeholder.resolve(invoice, DE) is None


class TestBooleanAndCollection:
    """불리언 / 컬렉션 placeholder 테스트."""

    def test_flag(self, invoice):
        assert FlagPlaceholder("Paid", lambda m: m.paid).resolve(invoice, EN) is True
        assert FlagPlaceholder("Notes", lambda m: "").resolve(invoice, EN) is False

    def test_checkbox_states(self, invoice):
        assert CheckboxPlaceholder("Paid", lambda m: m.paid).resolve(invoice, EN) == "Yes"
        assert CheckboxPlaceholder("Paid", lambda m: not m.paid).resolve(invoice, EN) == "Off"

    def test_collection_unchanged(self, invoice):
        placeholder = CollectionPlaceholder("Lines", lambda m: m.lines)

        assert placeholder.resolve(invoice, EN) is invoice.lines
        assert placeholder.value_kind == ValueKind.COLLECTION
