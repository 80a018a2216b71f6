"""
Locale-aware formatting: Babel 기반.

모든 함수는 locale을 명시적 인자로 받음 (ambient locale에 의존하지 않음).

숫자 포맷:
- "N" / "N<d>": 그룹 구분 + 소수 d자리 (기본 2)
- "F<d>": 그룹 구분 없음 + 소수 d자리
- "P<d>": 백분율 (0.125 → 12.5%)
- 그 외: CLDR 숫자 패턴 그대로 (예: "#,##0.000")

날짜 포맷:
- "d" / "D": short / long 날짜
- "t" / "T": short / medium 시간
- "g" / "G": short 날짜 + short / medium 시간
- 그 외: LDML 패턴 그대로 (예: "dd/MM/yyyy")
"""

import re
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from babel import Locale
from babel.dates import format_date, format_datetime, format_time
from babel.numbers import format_decimal, format_percent

from docbinder.domain.constants import (
    DEFAULT_NUMBER_DECIMALS,
    FILTER_DATE_FORMAT,
    FIXED_DATE_PRESETS,
)

_NUMBER_SHORTHAND = re.compile(r"^([NnFfPp])(\d{0,2})$")

Number = Decimal | float | int


def _fraction(decimals: int) -> str:
    return "." + "0" * decimals if decimals > 0 else ""


def number_pattern(fmt: str | None) -> tuple[str, bool]:
    """
    숫자 포맷 문자열 → (CLDR 패턴, 백분율 여부).

    Examples:
        "N"  → ("#,##0.00", False)
        "F1" → ("0.0", False)
        "P0" → ("#,##0%", True)
    """
    if not fmt:
        fmt = "N"
    match = _NUMBER_SHORTHAND.match(fmt)
    if not match:
        return fmt, "%" in fmt

    kind = match.group(1).upper()
    digits = int(match.group(2)) if match.group(2) else DEFAULT_NUMBER_DECIMALS
    if kind == "N":
        return "#,##0" + _fraction(digits), False
    if kind == "F":
        return "0" + _fraction(digits), False
    return "#,##0" + _fraction(digits) + "%", True


def _as_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # 이진 부동소수 오차 방지 (numpy float64 포함)
        return Decimal(repr(float(value)))
    if isinstance(value, int):
        return Decimal(int(value))
    return Decimal(str(value))


def format_number(value: Number, fmt: str | None, locale: Locale) -> str:
    """숫자를 locale 규칙으로 포맷."""
    pattern, is_percent = number_pattern(fmt)
    number = _as_decimal(value)
    if is_percent:
        return format_percent(number, format=pattern, locale=locale)
    return format_decimal(number, format=pattern, locale=locale)


def format_currency_amount(
    amount: Number,
    symbol: str,
    decimals: int,
    locale: Locale,
) -> str:
    """
    통화 금액 포맷.

    숫자/구분자는 locale 규칙, 기호 위치는 locale의 CLDR 통화 패턴:
    - 패턴이 ¤로 시작 → 기호 앞 (패턴에 공백이 있을 때만 공백)
    - 그 외 → "<숫자> <기호>"

    Examples:
        de_DE: 1234.56, "€", 2 → "1.234,56 €"
        en_US: 1234.56, "€", 2 → "€1,234.56"
    """
    number = format_decimal(
        _as_decimal(amount),
        format="#,##0" + _fraction(max(0, int(decimals))),
        locale=locale,
    )
    positive = locale.currency_formats["standard"].pattern.split(";")[0].strip()
    if positive.startswith("¤"):
        rest = positive[1:]
        spacer = " " if rest[:1].isspace() else ""
        return f"{symbol}{spacer}{number}"
    return f"{number} {symbol}"


def coerce_datetime(value: Any) -> datetime | None:
    """
    날짜로 해석 가능한 값 → datetime.

    date/datetime 객체, ISO 8601 문자열 지원. 해석 불가 시 None.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def _datetime_kwargs(value: datetime) -> dict[str, Any]:
    # aware datetime은 자기 tz 유지 (UTC 변환 방지)
    return {"tzinfo": value.tzinfo} if value.tzinfo is not None else {}


def format_date_value(value: date | datetime, fmt: str | None, locale: Locale) -> str:
    """날짜/시간을 locale 규칙으로 포맷."""
    dt = coerce_datetime(value)
    if dt is None:
        return str(value)

    fmt = fmt or "G"
    kwargs = _datetime_kwargs(dt)
    if fmt == "d":
        return format_date(dt, "short", locale=locale)
    if fmt == "D":
        return format_date(dt, "long", locale=locale)
    if fmt == "t":
        return format_time(dt, "short", locale=locale, **kwargs)
    if fmt == "T":
        return format_time(dt, "medium", locale=locale, **kwargs)
    if fmt == "g":
        return f"{format_date(dt, 'short', locale=locale)} {format_time(dt, 'short', locale=locale, **kwargs)}"
    if fmt == "G":
        return f"{format_date(dt, 'short', locale=locale)} {format_time(dt, 'medium', locale=locale, **kwargs)}"
    return format_datetime(dt, fmt, locale=locale, **kwargs)


def format_date_preset(value: date | datetime, preset: str | None, locale: Locale) -> str:
    """
    이름 있는 preset으로 날짜 포맷.

    short, long, shorttime, longtime, full → locale 패턴
    monthyear, iso → 고정 패턴
    알 수 없는 preset → dd/MM/yyyy
    """
    dt = coerce_datetime(value)
    if dt is None:
        return str(value)

    name = (preset or "short").lower()
    kwargs = _datetime_kwargs(dt)
    if name == "short":
        return format_date(dt, "short", locale=locale)
    if name == "long":
        return format_date(dt, "long", locale=locale)
    if name == "shorttime":
        return format_time(dt, "short", locale=locale, **kwargs)
    if name == "longtime":
        return format_time(dt, "medium", locale=locale, **kwargs)
    if name == "full":
        return f"{format_date(dt, 'full', locale=locale)} {format_time(dt, 'medium', locale=locale, **kwargs)}"

    pattern = FIXED_DATE_PRESETS.get(name, FILTER_DATE_FORMAT)
    return format_datetime(dt, pattern, locale=locale, **kwargs)
