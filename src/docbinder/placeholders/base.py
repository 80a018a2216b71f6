"""
Placeholder 기본 계약.

규칙:
- placeholder는 이름 + 선택자(selector)를 가진 불변 값
- resolve(data, locale)는 순수 함수: 같은 입력 → 같은 출력
- None 반환 = "쓸 값 없음" (form 경로에서는 빈 문자열로 기록)
- 지역화 variant는 override_locale이 있으면 호출 locale보다 우선
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from babel import Locale

from docbinder.core.locale_scope import LocaleLike, as_locale

Selector = Callable[[Any], Any]


class ValueKind(str, Enum):
    """resolve 결과의 종류."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"
    COLLECTION = "collection"
    COMPOSITE = "composite"
    GRAPHIC = "graphic"


@dataclass(frozen=True)
class Placeholder(ABC):
    """
    템플릿 슬롯 하나에 대응하는 이름 있는 resolver.

    Attributes:
        name: 슬롯 이름 (폼 필드명 또는 렌더링 컨텍스트 키)
        selector: 데이터 아이템 → 원시 값
    """

    name: str
    selector: Selector

    value_kind: ClassVar[ValueKind]

    @abstractmethod
    def resolve(self, data: Any, locale: Locale) -> Any:
        """데이터 아이템을 슬롯에 쓸 값으로 변환."""


@dataclass(frozen=True)
class LocalizedPlaceholder(Placeholder):
    """포맷 문자열과 override locale을 가진 placeholder."""

    format: str | None = None
    override_locale: LocaleLike | None = None

    def effective_locale(self, locale: Locale) -> Locale:
        """override_locale 우선, 없으면 호출 locale."""
        return as_locale(self.override_locale) or locale
