"""
Jinja2 locale-aware filters: format_currency, format_date, format_datetime,
format_date_preset.

생성 호출마다 build_filters(locale)로 새로 만들어 환경에 설치.
모든 필터는 locale= 인자로 호출 단위 override 가능:

    {{ Model.total | format_currency("€", 2) }}
    {{ Model.total | format_currency("$", locale="en_US") }}
    {{ Model.issued | format_date_preset("long") }}
"""

from collections.abc import Callable
from decimal import Decimal, InvalidOperation
from typing import Any

from babel import Locale

from docbinder.core.formatting import (
    coerce_datetime,
    format_currency_amount,
    format_date_preset,
    format_date_value,
)
from docbinder.core.locale_scope import LocaleLike, as_locale
from docbinder.domain.constants import (
    FILTER_CURRENCY_DECIMALS,
    FILTER_DATE_FORMAT,
    FILTER_DATE_PRESET,
    FILTER_DATETIME_FORMAT,
)


def _as_amount(value: Any) -> Decimal | float | int | None:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, Decimal | float | int):
        return value
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None


def build_filters(locale: Locale) -> dict[str, Callable[..., str]]:
    """
    호출 locale에 묶인 필터 dict 생성.

    Args:
        locale: 기본 렌더링 locale (placeholder와 동일)

    Returns:
        Jinja2 Environment.filters에 설치할 dict
    """

    def pick(override: LocaleLike | None) -> Locale:
        return as_locale(override) or locale

    def currency(
        value: Any,
        symbol: str = "",
        decimals: int = FILTER_CURRENCY_DECIMALS,
        locale: LocaleLike | None = None,
    ) -> str:
        if value is None:
            return ""
        amount = _as_amount(value)
        if amount is None:
            return str(value)
        return format_currency_amount(amount, symbol, decimals, pick(locale))

    def date(value: Any, fmt: str | None = None, locale: LocaleLike | None = None) -> str:
        dt = coerce_datetime(value)
        if dt is None:
            return "" if value is None else str(value)
        return format_date_value(dt, fmt or FILTER_DATE_FORMAT, pick(locale))

    def datetime_(value: Any, fmt: str | None = None, locale: LocaleLike | None = None) -> str:
        dt = coerce_datetime(value)
        if dt is None:
            return "" if value is None else str(value)
        return format_date_value(dt, fmt or FILTER_DATETIME_FORMAT, pick(locale))

    def date_preset(value: Any, preset: str | None = None, locale: LocaleLike | None = None) -> str:
        dt = coerce_datetime(value)
        if dt is None:
            return "" if value is None else str(value)
        return format_date_preset(dt, preset or FILTER_DATE_PRESET, pick(locale))

    return {
        "format_currency": currency,
        "format_date": date,
        "format_datetime": datetime_,
        "format_date_preset": date_preset,
    }
