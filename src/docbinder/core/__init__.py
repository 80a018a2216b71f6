"""
Core layer: 생성 호출 공통 기반.

역할:
- locale 스코프, 포맷팅, 취소, 진단 로그, 설정
"""

from .cancellation import CancellationToken, ensure_token
from .config import GeneratorSettings, load_config, load_settings
from .formatting import (
    format_currency_amount,
    format_date_preset,
    format_date_value,
    format_number,
)
from .ids import generate_generation_id
from .locale_scope import LocaleScope, as_locale, current_locale, set_default_locale
from .logging import (
    complete_generation_log,
    create_generation_log,
    emit_warning,
    save_generation_log,
    truncate_for_log,
)

__all__ = [
    # cancellation
    "CancellationToken",
    "ensure_token",
    # config
    "GeneratorSettings",
    "load_config",
    "load_settings",
    # formatting
    "format_number",
    "format_currency_amount",
    "format_date_value",
    "format_date_preset",
    # ids
    "generate_generation_id",
    # locale
    "LocaleScope",
    "as_locale",
    "current_locale",
    "set_default_locale",
    # logging
    "create_generation_log",
    "emit_warning",
    "complete_generation_log",
    "save_generation_log",
    "truncate_for_log",
]
