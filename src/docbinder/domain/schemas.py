"""
Data schemas for document generation.

규칙:
- 값 객체는 불변 (frozen dataclass)
- 숫자 값은 Decimal 권장 (float도 허용)
- 로그 스키마는 to_dict()로 JSON 직렬화
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any

# =============================================================================
# Placeholder Values
# =============================================================================

@dataclass(frozen=True)
class NumericAndTextValue:
    """숫자 + 텍스트 복합 값 (예: 12,5 kg)."""
    numeric_value: Decimal | float | int | None
    text_value: str = ""


# =============================================================================
# Chart Configuration
# =============================================================================

class BarChartOrientation(str, Enum):
    """막대 방향."""
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


class LabelPlacement(str, Enum):
    """막대 값 라벨 위치."""
    NONE = "none"
    INSIDE = "inside"
    OUTSIDE = "outside"


@dataclass(frozen=True)
class PieChartConfig:
    """파이 차트 설정."""
    title: str = ""
    legend: str | None = None
    inside_label_format: str | None = "0.##"  # 조각 안쪽 값 라벨 (LDML 숫자 패턴)
    show_outside_labels: bool = True  # 조각 바깥 카테고리 라벨
    palette_hex: tuple[str, ...] | None = None
    width: int | None = None
    height: int | None = None


@dataclass(frozen=True)
class BarChartConfig:
    """막대 차트 설정."""
    title: str = ""
    legend: str | None = None
    fill_color_hex: str | None = None
    orientation: BarChartOrientation = BarChartOrientation.VERTICAL
    label_placement: LabelPlacement = LabelPlacement.OUTSIDE
    label_format: str | None = "#,##0.##"
    width: int | None = None
    height: int | None = None


@dataclass(frozen=True)
class GroupedBarChartConfig:
    """
    그룹 막대 차트 설정.

    카테고리마다 시리즈별 막대 하나. 범례는 항상 시리즈 이름으로 표시.
    """
    title: str = ""
    legend: str | None = None  # 범례 제목
    label_format: str | None = None  # None이면 값 라벨 없음
    palette_hex: tuple[str, ...] | None = None  # 시리즈 순서대로 순환
    orientation: BarChartOrientation = BarChartOrientation.VERTICAL
    label_placement: LabelPlacement = LabelPlacement.OUTSIDE
    width: int | None = None
    height: int | None = None


# =============================================================================
# Diagnostics Schemas
# =============================================================================

@dataclass
class WarningLog:
    """
    경고 로그.

    경고 필수 컨텍스트: level, code, action_id, field_or_slot,
                       original_value, resolved_value, message
    """
    level: str  # warning
    code: str
    action_id: str
    field_or_slot: str
    message: str
    original_value: str | None = None
    resolved_value: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "code": self.code,
            "action_id": self.action_id,
            "field_or_slot": self.field_or_slot,
            "original_value": self.original_value,
            "resolved_value": self.resolved_value,
            "message": self.message,
        }


@dataclass
class GenerationLog:
    """
    한 번의 문서 생성 기록.

    generator가 placeholder 순서대로 경고를 누적 → chain-of-custody 진단용.
    """
    generation_id: str
    template: str
    started_at: str  # ISO 8601
    result: str  # pending, success, failed, cancelled
    locale: str | None = None
    finished_at: str | None = None
    elapsed_ms: int | None = None
    output_size: int | None = None
    warnings: list[WarningLog] = field(default_factory=list)
    error_code: str | None = None
    error_context: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "generation_id": self.generation_id,
            "template": self.template,
            "started_at": self.started_at,
            "finished_at": self.finished_at,
            "result": self.result,
            "locale": self.locale,
            "elapsed_ms": self.elapsed_ms,
            "output_size": self.output_size,
            "warnings": [w.to_dict() for w in self.warnings],
            "error_code": self.error_code,
            "error_context": self.error_context,
        }
