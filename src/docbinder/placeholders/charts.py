"""
차트 placeholder: 컬렉션 → SVG 마크업 (matplotlib). 파이, 막대, 그룹 막대.

흐름:
1. selector로 원소 컬렉션 획득 (None → None)
2. label/value 함수로 (라벨, 값) 쌍 생성, 빈 라벨 제외
3. matplotlib Figure → SVG (텍스트는 <text>로 유지)
4. XML prolog 제거 + width/height 제거 (viewBox로 반응형)

숫자 라벨은 Babel로 포맷 → override locale 또는 호출 locale 규칙.
"""

import io
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

import matplotlib
from babel import Locale
from markupsafe import Markup
from matplotlib.figure import Figure
from matplotlib.ticker import FuncFormatter

from docbinder.core.formatting import format_number
from docbinder.domain.constants import DEFAULT_CHART_HEIGHT, DEFAULT_CHART_WIDTH
from docbinder.domain.schemas import (
    BarChartConfig,
    BarChartOrientation,
    GroupedBarChartConfig,
    LabelPlacement,
    PieChartConfig,
)

from .base import LocalizedPlaceholder, ValueKind

_SVG_TAG = re.compile(r"<svg\b[^>]*>", re.IGNORECASE)
_WIDTH_ATTR = re.compile(r'\s+\bwidth="(?P<v>[\d.]+)(?:pt|px)?"', re.IGNORECASE)
_HEIGHT_ATTR = re.compile(r'\s+\bheight="(?P<v>[\d.]+)(?:pt|px)?"', re.IGNORECASE)
_VIEWBOX_ATTR = re.compile(r'\bviewBox="', re.IGNORECASE)

_AXIS_TICK_FORMAT = "#,##0.##"

# =============================================================================
# SVG Post-processing
# =============================================================================


def remove_xml_headers(svg: str) -> str:
    """<svg 이전의 XML 선언/DOCTYPE 제거."""
    idx = svg.lower().find("<svg")
    return svg[idx:].strip() if idx >= 0 else svg


def make_responsive(svg: str) -> str:
    """
    <svg> 태그의 width/height 제거, viewBox 없으면 추가.

    width/height 중 하나라도 없으면 원본 그대로.
    """
    if not svg or not svg.strip():
        return svg

    match = _SVG_TAG.search(svg)
    if not match:
        return svg

    tag = match.group(0)
    width = _WIDTH_ATTR.search(tag)
    height = _HEIGHT_ATTR.search(tag)
    if not width or not height:
        return svg

    new_tag = _WIDTH_ATTR.sub("", tag, count=1)
    new_tag = _HEIGHT_ATTR.sub("", new_tag, count=1)
    if not _VIEWBOX_ATTR.search(new_tag):
        view_box = f'viewBox="0 0 {width.group("v")} {height.group("v")}"'
        new_tag = "<svg " + view_box + new_tag[len("<svg"):]

    return svg[: match.start()] + new_tag + svg[match.end():]


def _new_figure(width: int | None, height: int | None) -> Figure:
    w = width or DEFAULT_CHART_WIDTH
    h = height or DEFAULT_CHART_HEIGHT
    return Figure(figsize=(w / 100, h / 100), dpi=100)


def _export_svg(figure: Figure) -> str:
    buffer = io.StringIO()
    # 텍스트를 path가 아닌 <text>로 유지, 날짜 메타데이터 제외 → 결정론적 출력
    with matplotlib.rc_context({"svg.fonttype": "none", "svg.hashsalt": "docbinder"}):
        figure.savefig(buffer, format="svg", metadata={"Date": None})
    return make_responsive(remove_xml_headers(buffer.getvalue()))


def _tick_formatter(locale: Locale) -> FuncFormatter:
    return FuncFormatter(lambda v, _pos: format_number(v, _AXIS_TICK_FORMAT, locale))


def _label_bars(
    ax: Any,
    bars: Any,
    values: list[float],
    placement: LabelPlacement,
    fmt: str | None,
    locale: Locale,
) -> None:
    """막대 값 라벨 (placement NONE 또는 포맷 없음 → 라벨 없음)."""
    if placement == LabelPlacement.NONE or not fmt or not values:
        return
    inside = placement == LabelPlacement.INSIDE
    ax.bar_label(
        bars,
        labels=[format_number(v, fmt, locale) for v in values],
        label_type="center" if inside else "edge",
        padding=0 if inside else 3,
    )


# =============================================================================
# Chart Rendering
# =============================================================================


def render_pie_svg(
    data: list[tuple[str, float]],
    config: PieChartConfig,
    locale: Locale,
) -> str:
    """
    파이 차트 SVG.

    Args:
        data: (라벨, 값) 쌍 (빈 라벨 제외 완료)
        config: PieChartConfig
        locale: 숫자 라벨 locale

    Returns:
        반응형 SVG 문자열
    """
    figure = _new_figure(config.width, config.height)
    ax = figure.add_subplot()
    ax.set_title(config.title or "")
    ax.set_aspect("equal")

    values = [value for _, value in data]
    total = sum(values)

    if data and total > 0:
        colors = None
        if config.palette_hex:
            colors = [config.palette_hex[i % len(config.palette_hex)] for i in range(len(data))]

        autopct = None
        if config.inside_label_format:
            fmt = config.inside_label_format

            def autopct(pct: float) -> str:
                return format_number(pct * total / 100, fmt, locale)

        wedges, *_ = ax.pie(
            values,
            labels=[label for label, _ in data] if config.show_outside_labels else None,
            colors=colors,
            autopct=autopct,
            pctdistance=0.8,
            startangle=0,
            counterclock=False,
            wedgeprops={"linewidth": 0.5, "edgecolor": "white"},
        )
        if config.legend:
            ax.legend(
                wedges,
                [label for label, _ in data],
                title=config.legend,
                loc="upper left",
                bbox_to_anchor=(1.0, 1.0),
            )
    else:
        ax.axis("off")

    return _export_svg(figure)


def render_bar_svg(
    data: list[tuple[str, float]],
    config: BarChartConfig,
    locale: Locale,
) -> str:
    """
    막대 차트 SVG.

    Args:
        data: (라벨, 값) 쌍 (빈 라벨 제외 완료)
        config: BarChartConfig
        locale: 축/값 라벨 locale

    Returns:
        반응형 SVG 문자열
    """
    figure = _new_figure(config.width, config.height)
    ax = figure.add_subplot()
    ax.set_title(config.title or "")

    labels = [label for label, _ in data]
    values = [value for _, value in data]
    positions = list(range(len(data)))
    color = config.fill_color_hex or None
    tick_formatter = _tick_formatter(locale)

    if config.orientation == BarChartOrientation.HORIZONTAL:
        bars = ax.barh(positions, values, color=color, label=config.legend or None)
        ax.set_yticks(positions, labels)
        ax.invert_yaxis()
        ax.xaxis.set_major_formatter(tick_formatter)
    else:
        bars = ax.bar(positions, values, color=color, label=config.legend or None)
        ax.set_xticks(positions, labels)
        ax.yaxis.set_major_formatter(tick_formatter)

    _label_bars(ax, bars, values, config.label_placement, config.label_format, locale)

    if config.legend:
        ax.legend(title=config.legend, loc="upper right")

    figure.tight_layout()
    return _export_svg(figure)


def render_grouped_bar_svg(
    rows: list[tuple[str, str, float]],
    config: GroupedBarChartConfig,
    locale: Locale,
) -> str:
    """
    그룹 막대 차트 SVG.

    카테고리/시리즈 순서는 처음 등장한 순서. 같은 (카테고리, 시리즈)는 합산,
    없는 조합은 0.

    Args:
        rows: (카테고리, 시리즈, 값) (빈 카테고리/시리즈 제외 완료)
        config: GroupedBarChartConfig
        locale: 축/값 라벨 locale

    Returns:
        반응형 SVG 문자열
    """
    categories: list[str] = []
    series: list[str] = []
    totals: dict[tuple[str, str], float] = {}
    for category, name, value in rows:
        if category not in categories:
            categories.append(category)
        if name not in series:
            series.append(name)
        totals[(category, name)] = totals.get((category, name), 0.0) + value

    figure = _new_figure(config.width, config.height)
    ax = figure.add_subplot()
    ax.set_title(config.title or "")

    horizontal = config.orientation == BarChartOrientation.HORIZONTAL
    positions = list(range(len(categories)))
    band = 0.8 / max(len(series), 1)

    for index, name in enumerate(series):
        offset = (index - (len(series) - 1) / 2) * band
        slots = [p + offset for p in positions]
        values = [totals.get((category, name), 0.0) for category in categories]
        color = None
        if config.palette_hex:
            color = config.palette_hex[index % len(config.palette_hex)]

        if horizontal:
            bars = ax.barh(slots, values, height=band, color=color, label=name)
        else:
            bars = ax.bar(slots, values, width=band, color=color, label=name)
        _label_bars(ax, bars, values, config.label_placement, config.label_format, locale)

    if horizontal:
        ax.set_yticks(positions, categories)
        ax.invert_yaxis()
        ax.xaxis.set_major_formatter(_tick_formatter(locale))
    else:
        ax.set_xticks(positions, categories)
        ax.yaxis.set_major_formatter(_tick_formatter(locale))

    if series:
        ax.legend(title=config.legend or None, loc="upper right")

    figure.tight_layout()
    return _export_svg(figure)


# =============================================================================
# Chart Placeholders
# =============================================================================


def _pairs(
    items: Iterable[Any],
    label: Callable[[Any], str | None],
    value: Callable[[Any], float],
) -> list[tuple[str, float]]:
    pairs = []
    for item in items:
        text = label(item) or ""
        if not text.strip():
            continue
        pairs.append((text, float(value(item))))
    return pairs


@dataclass(frozen=True)
class PieChartPlaceholder(LocalizedPlaceholder):
    """
    컬렉션 → 파이 차트 SVG.

    Attributes:
        label: 원소 → 조각 라벨
        value: 원소 → 조각 값
        config: PieChartConfig
    """

    label: Callable[[Any], str | None] = str
    value: Callable[[Any], float] = float
    config: PieChartConfig = field(default_factory=PieChartConfig)

    value_kind = ValueKind.GRAPHIC

    def resolve(self, data: Any, locale: Locale) -> Markup | None:
        items = self.selector(data)
        if items is None:
            return None
        svg = render_pie_svg(
            _pairs(items, self.label, self.value),
            self.config,
            self.effective_locale(locale),
        )
        return Markup(svg)


@dataclass(frozen=True)
class BarChartPlaceholder(LocalizedPlaceholder):
    """
    컬렉션 → 막대 차트 SVG.

    Attributes:
        label: 원소 → 카테고리 라벨
        value: 원소 → 막대 값
        config: BarChartConfig
    """

    label: Callable[[Any], str | None] = str
    value: Callable[[Any], float] = float
    config: BarChartConfig = field(default_factory=BarChartConfig)

    value_kind = ValueKind.GRAPHIC

    def resolve(self, data: Any, locale: Locale) -> Markup | None:
        items = self.selector(data)
        if items is None:
            return None
        svg = render_bar_svg(
            _pairs(items, self.label, self.value),
            self.config,
            self.effective_locale(locale),
        )
        return Markup(svg)


@dataclass(frozen=True)
class GroupedBarChartPlaceholder(LocalizedPlaceholder):
    """
    컬렉션 → 그룹 막대 차트 SVG.

    Attributes:
        label: 원소 → 카테고리 라벨
        series: 원소 → 시리즈 이름 (범례 항목)
        value: 원소 → 막대 값
        config: GroupedBarChartConfig
    """

    label: Callable[[Any], str | None] = str
    series: Callable[[Any], str | None] = str
    value: Callable[[Any], float] = float
    config: GroupedBarChartConfig = field(default_factory=GroupedBarChartConfig)

    value_kind = ValueKind.GRAPHIC

    def resolve(self, data: Any, locale: Locale) -> Markup | None:
        items = self.selector(data)
        if items is None:
            return None

        rows = []
        for item in items:
            category = self.label(item) or ""
            name = self.series(item) or ""
            if not category.strip() or not name.strip():
                continue
            rows.append((category, name, float(self.value(item))))

        svg = render_grouped_bar_svg(rows, self.config, self.effective_locale(locale))
        return Markup(svg)
