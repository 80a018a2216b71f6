"""
값 placeholder variant: text, number, date, boolean, collection, composite.

raw variant (NumericPlaceholder, DatePlaceholder)는 값을 그대로 넘기고
포맷은 마크업 템플릿 필터에 맡김. Localized variant는 문자열로 포맷.
"""

from dataclasses import dataclass
from typing import Any

from babel import Locale

from docbinder.core.formatting import format_date_value, format_number
from docbinder.domain.constants import (
    CHECKBOX_OFF,
    CHECKBOX_ON,
    DEFAULT_DATE_FORMAT,
    DEFAULT_NUMBER_FORMAT,
)

from .base import LocalizedPlaceholder, Placeholder, ValueKind


@dataclass(frozen=True)
class TextPlaceholder(Placeholder):
    """문자열 값."""

    value_kind = ValueKind.TEXT

    def resolve(self, data: Any, locale: Locale) -> str | None:
        value = self.selector(data)
        return None if value is None else str(value)


@dataclass(frozen=True)
class NumericPlaceholder(Placeholder):
    """숫자 원시 값 (템플릿에서 포맷)."""

    value_kind = ValueKind.NUMBER

    def resolve(self, data: Any, locale: Locale) -> Any:
        return self.selector(data)


@dataclass(frozen=True)
class LocalizedNumericPlaceholder(LocalizedPlaceholder):
    """
    locale 규칙으로 포맷된 숫자.

    format: "N" (기본), "N0", "F2", "P1" 또는 CLDR 패턴
    """

    value_kind = ValueKind.NUMBER

    def resolve(self, data: Any, locale: Locale) -> str | None:
        value = self.selector(data)
        if value is None:
            return None
        return format_number(
            value,
            self.format or DEFAULT_NUMBER_FORMAT,
            self.effective_locale(locale),
        )


@dataclass(frozen=True)
class DatePlaceholder(Placeholder):
    """날짜 원시 값 (템플릿에서 포맷)."""

    value_kind = ValueKind.DATE

    def resolve(self, data: Any, locale: Locale) -> Any:
        return self.selector(data)


@dataclass(frozen=True)
class LocalizedDatePlaceholder(LocalizedPlaceholder):
    """
    locale 규칙으로 포맷된 날짜.

    format: "G" (기본), "d", "D", "t", "T", "g" 또는 LDML 패턴
    """

    value_kind = ValueKind.DATE

    def resolve(self, data: Any, locale: Locale) -> str | None:
        value = self.selector(data)
        if value is None:
            return None
        return format_date_value(
            value,
            self.format or DEFAULT_DATE_FORMAT,
            self.effective_locale(locale),
        )


@dataclass(frozen=True)
class NumericAndTextPlaceholder(LocalizedPlaceholder):
    """
    "<포맷된 숫자> <텍스트>" 복합 값.

    selector는 NumericAndTextValue를 반환. 숫자가 None이면 None.
    """

    value_kind = ValueKind.COMPOSITE

    def resolve(self, data: Any, locale: Locale) -> str | None:
        value = self.selector(data)
        if value is None or value.numeric_value is None:
            return None
        number = format_number(
            value.numeric_value,
            self.format or DEFAULT_NUMBER_FORMAT,
            self.effective_locale(locale),
        )
        return f"{number} {value.text_value}"


@dataclass(frozen=True)
class FlagPlaceholder(Placeholder):
    """불리언 값 (템플릿 조건문용)."""

    value_kind = ValueKind.BOOLEAN

    def resolve(self, data: Any, locale: Locale) -> bool:
        return bool(self.selector(data))


@dataclass(frozen=True)
class CheckboxPlaceholder(Placeholder):
    """폼 체크박스 상태값: "Yes" / "Off"."""

    value_kind = ValueKind.BOOLEAN

    def resolve(self, data: Any, locale: Locale) -> str:
        return CHECKBOX_ON if self.selector(data) else CHECKBOX_OFF


@dataclass(frozen=True)
class CollectionPlaceholder(Placeholder):
    """원소 시퀀스를 그대로 전달 (템플릿 반복문용)."""

    value_kind = ValueKind.COLLECTION

    def resolve(self, data: Any, locale: Locale) -> Any:
        return self.selector(data)
