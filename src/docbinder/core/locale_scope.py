"""
Ambient locale scope.

규칙:
- 포맷팅은 가능한 한 명시적 locale 인자로 전달
- ambient locale은 LocaleScope로만 변경 → 모든 종료 경로에서 복원 보장
- ContextVar 기반: 스레드/태스크마다 독립 → 동시 생성 호출 간 간섭 없음
"""

from contextvars import ContextVar, Token
from types import TracebackType

from babel import Locale

from docbinder.domain.constants import DEFAULT_LOCALE

_ambient_locale: ContextVar[Locale | None] = ContextVar("docbinder_locale", default=None)
_default_locale: Locale = Locale.parse(DEFAULT_LOCALE)

LocaleLike = Locale | str


def as_locale(value: LocaleLike | None) -> Locale | None:
    """
    str/Locale → Locale 정규화.

    "de_DE", "de-DE", "de" 모두 허용. None은 그대로 None.
    """
    if value is None:
        return None
    if isinstance(value, Locale):
        return value
    text = str(value).strip()
    if not text:
        return None
    sep = "-" if "-" in text else "_"
    return Locale.parse(text, sep=sep)


def current_locale() -> Locale:
    """현재 ambient locale (스코프 밖이면 기본 locale)."""
    return _ambient_locale.get() or _default_locale


def set_default_locale(value: LocaleLike) -> None:
    """스코프 밖에서 쓰이는 기본 locale 변경 (설정 로드 시 1회)."""
    global _default_locale
    locale = as_locale(value)
    if locale is not None:
        _default_locale = locale


class LocaleScope:
    """
    ambient locale을 일시적으로 바꾸는 스코프.

    Usage:
        with LocaleScope("de_DE"):
            ...  # current_locale() == de_DE
        # 이전 locale 복원

    locale이 None이면 아무것도 바꾸지 않고 아무것도 복원하지 않음.
    """

    def __init__(self, locale: LocaleLike | None) -> None:
        self.locale = as_locale(locale)
        self._token: Token[Locale | None] | None = None

    @classmethod
    def enter(cls, locale: LocaleLike | None) -> "LocaleScope":
        """스코프 진입 후 handle 반환. handle.exit()로 복원."""
        scope = cls(locale)
        scope._activate()
        return scope

    def _activate(self) -> None:
        if self.locale is None or self._token is not None:
            return
        self._token = _ambient_locale.set(self.locale)

    def exit(self) -> None:
        """이전 ambient locale 복원 (중복 호출 안전)."""
        if self._token is None:
            return
        _ambient_locale.reset(self._token)
        self._token = None

    @property
    def active(self) -> bool:
        return self._token is not None

    def __enter__(self) -> "LocaleScope":
        self._activate()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.exit()
