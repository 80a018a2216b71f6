"""
test_charts.py - 차트 placeholder / SVG 후처리 테스트

DoD:
- XML prolog 제거, width/height 제거 + viewBox 유지
- 빈 라벨 제외
- None 컬렉션 → None
- 그룹 막대: 시리즈 범례 + 팔레트
"""

from dataclasses import dataclass

from babel import Locale
from markupsafe import Markup

from docbinder.domain.schemas import (
    BarChartConfig,
    BarChartOrientation,
    GroupedBarChartConfig,
    LabelPlacement,
    PieChartConfig,
)
from docbinder.placeholders import (
    BarChartPlaceholder,
    GroupedBarChartPlaceholder,
    PieChartPlaceholder,
    ValueKind,
    make_responsive,
    remove_xml_headers,
)

EN = Locale.parse("en_US")
DE = Locale.parse("de_DE")


@dataclass
class Sale:
    month: str | None
    amount: float


SALES = [Sale("January", 1200.5), Sale("February", 800.0), Sale("  ", 50.0), Sale("March", 400.25)]


def _svg_tag(svg: str) -> str:
    return svg[: svg.index(">") + 1]


# =============================================================================
# SVG 후처리
# =============================================================================

class TestRemoveXmlHeaders:
    """remove_xml_headers 테스트."""

    def test_strips_prolog_and_doctype(self):
        svg = '<?xml version="1.0"?>\n<!DOCTYPE svg>\n<svg width="10" height="10"></svg>'

        assert remove_xml_headers(svg) == '<svg width="10" height="10"></svg>'

    def test_no_svg_unchanged(self):
        assert remove_xml_headers("<div></div>") == "<div></div>"


class TestMakeResponsive:
    """make_responsive 테스트."""

    def test_adds_viewbox(self):
        svg = '<svg width="800" height="450" xmlns="http://www.w3.org/2000/svg"><g/></svg>'

        result = make_responsive(svg)

        assert result.startswith('<svg viewBox="0 0 800 450"')
        assert "width=" not in _svg_tag(result)
        assert "height=" not in _svg_tag(result)
        assert result.endswith("<g/></svg>")

    def test_keeps_existing_viewbox(self):
        svg = '<svg width="576pt" height="432pt" viewBox="0 0 576 432"></svg>'

        result = make_responsive(svg)

        assert result == '<svg viewBox="0 0 576 432"></svg>'

    def test_missing_height_unchanged(self):
        svg = '<svg width="800"></svg>'

        assert make_responsive(svg) == svg

    def test_blank_unchanged(self):
        assert make_responsive("") == ""


# =============================================================================
# Chart placeholders
# =============================================================================

class TestPieChartPlaceholder:
    """PieChartPlaceholder 테스트."""

    def test_renders_responsive_svg(self):
        placeholder = PieChartPlaceholder(
            "Sales",
            lambda m: m,
            label=lambda s: s.month,
            value=lambda s: s.amount,
            config=PieChartConfig(title="Sales by month"),
        )

        svg = placeholder.resolve(SALES, EN)

        assert isinstance(svg, Markup)
        assert svg.startswith("<svg")
        assert "viewBox=" in _svg_tag(svg)
        assert "width=" not in _svg_tag(svg)
        assert "January" in svg
        assert "Sales by month" in svg
        assert placeholder.value_kind == ValueKind.GRAPHIC

    def test_inside_labels_use_locale(self):
        placeholder = PieChartPlaceholder(
            "Sales",
            lambda m: m,
            override_locale="de_DE",
            label=lambda s: s.month,
            value=lambda s: s.amount,
            config=PieChartConfig(inside_label_format="#,##0.00"),
        )

        svg = placeholder.resolve(SALES, EN)

        assert "1.200,50" in svg

    def test_none_collection(self):
        placeholder = PieChartPlaceholder("Sales", lambda m: None)

        assert placeholder.resolve(SALES, EN) is None

    def test_empty_collection_still_svg(self):
        placeholder = PieChartPlaceholder("Sales", lambda m: [], label=lambda s: s.month)

        assert placeholder.resolve(SALES, EN).startswith("<svg")


class TestBarChartPlaceholder:
    """BarChartPlaceholder 테스트."""

    def test_vertical_bars(self):
        placeholder = BarChartPlaceholder(
            "Sales",
            lambda m: m,
            label=lambda s: s.month,
            value=lambda s: s.amount,
            config=BarChartConfig(title="Monthly", fill_color_hex="#336699"),
        )

        svg = placeholder.resolve(SALES, EN)

        assert svg.startswith("<svg")
        assert "March" in svg
        assert "1,200.5" in svg

    def test_horizontal_without_labels(self):
        placeholder = BarChartPlaceholder(
            "Sales",
            lambda m: m,
            label=lambda s: s.month,
            value=lambda s: s.amount,
            config=BarChartConfig(
                orientation=BarChartOrientation.HORIZONTAL,
                label_placement=LabelPlacement.NONE,
            ),
        )

        svg = placeholder.resolve(SALES, DE)

        assert svg.startswith("<svg")
        assert "1.200,5" not in svg

    def test_value_labels_localized(self):
        placeholder = BarChartPlaceholder(
            "Sales",
            lambda m: m,
            override_locale="de_DE",
            label=lambda s: s.month,
            value=lambda s: s.amount,
            config=BarChartConfig(label_placement=LabelPlacement.INSIDE),
        )

        svg = placeholder.resolve(SALES, EN)

        assert "1.200,5" in svg

    def test_none_collection(self):
        placeholder = BarChartPlaceholder("Sales", lambda m: None)

        assert placeholder.resolve(SALES, EN) is None


@dataclass
class YearlySale:
    month: str
    year: str | None
    amount: float


YEARLY = [
    YearlySale("Jan", "2024", 10.12),
    YearlySale("Jan", "2025", 12.34),
    YearlySale("Feb", "2024", 7.0),
    YearlySale("Feb", None, 99.0),
    YearlySale("Feb", "2025", 15.0),
]


def _grouped(**kwargs) -> GroupedBarChartPlaceholder:
    return GroupedBarChartPlaceholder(
        "Yearly",
        lambda m: m,
        label=lambda s: s.month,
        series=lambda s: s.year,
        value=lambda s: s.amount,
        **kwargs,
    )


class TestGroupedBarChartPlaceholder:
    """GroupedBarChartPlaceholder 테스트."""

    def test_vertical_with_legend_and_palette(self):
        placeholder = _grouped(
            config=GroupedBarChartConfig(
                title="Grouped",
                legend="Years",
                palette_hex=("#ff0000", "#00ff00"),
            ),
        )

        svg = placeholder.resolve(YEARLY, EN)

        assert isinstance(svg, Markup)
        assert svg.startswith("<svg")
        assert "Grouped" in svg
        assert "Years" in svg
        assert "2024" in svg
        assert "2025" in svg
        assert "#ff0000" in svg.lower()
        assert "#00ff00" in svg.lower()
        assert placeholder.value_kind == ValueKind.GRAPHIC

    def test_horizontal(self):
        placeholder = _grouped(
            config=GroupedBarChartConfig(
                title="Grouped",
                orientation=BarChartOrientation.HORIZONTAL,
            ),
        )

        svg = placeholder.resolve(YEARLY, EN)

        assert svg.startswith("<svg")
        assert "Jan" in svg
        assert "Feb" in svg

    def test_blank_series_skipped(self):
        """시리즈 이름이 없는 원소는 제외."""
        svg = _grouped(config=GroupedBarChartConfig(label_format="0")).resolve(YEARLY, EN)

        assert ">99<" not in svg

    def test_label_format_uses_override_locale(self):
        placeholder = _grouped(
            override_locale="de_DE",
            config=GroupedBarChartConfig(label_format="0.0"),
        )

        svg = placeholder.resolve(YEARLY, EN)

        assert "10,1" in svg
        assert "12,3" in svg

    def test_none_collection(self):
        assert _grouped().resolve(None, EN) is None

    def test_empty_collection_still_svg(self):
        assert _grouped().resolve([], EN).startswith("<svg")
