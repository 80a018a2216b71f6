"""
Sheet 생성기: XLSX 템플릿 채우기 + 템플릿 없는 워크북 생성 (openpyxl).

- Named Range 값 매핑: 이름 있는 범위의 모든 셀에 값 기록
- Named Range 테이블: 범위 첫 셀을 기준(헤더 행)으로 행 단위 기록
  - insert_rows=True → 기존 행을 아래로 밀고 삽입 (템플릿 행 스타일 복사)
  - insert_rows=False → 제자리 덮어쓰기
- for_worksheet: 매핑을 특정 시트의 Named Range로 제한
- 없는 Named Range는 경고 후 건너뜀
- 워크시트 생성: 열 매핑(order 순) → 헤더(굵게) + 아이템당 한 행
  - 템플릿 워크북에 추가(add_worksheet) 또는 새 워크북(WorkbookBuilder)
"""

import io
import logging
import re
import time
from collections.abc import Callable, Iterable, Sequence
from copy import copy
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Union

from babel import Locale
from openpyxl import load_workbook
from openpyxl.styles import Alignment, Font
from openpyxl.utils import get_column_letter
from openpyxl.utils.cell import range_boundaries
from openpyxl.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from docbinder.core.cancellation import CancellationToken, ensure_token
from docbinder.core.locale_scope import LocaleLike, LocaleScope, as_locale
from docbinder.core.logging import emit_warning, run_tracked
from docbinder.domain.errors import (
    ConfigurationError,
    DocumentGenerationError,
    ErrorCodes,
    RenderError,
    TemplateNotFoundError,
)
from docbinder.domain.schemas import GenerationLog

logger = logging.getLogger(__name__)

Selector = Callable[[Any], Any]

# 부호/천 단위 구분 없는 소수점 숫자만
_DECIMAL_TEXT = re.compile(r"^\d*\.?\d+$")


# =============================================================================
# Column Mappings
# =============================================================================


def _suffixed(header: str, suffixes: Sequence[str], index: int) -> str:
    """'{header} {suffix}', suffix가 없으면 1부터 시작하는 번호."""
    suffix = suffixes[index] if index < len(suffixes) else None
    return f"{header} {suffix or index + 1}"


def _element_at(values: list[Any], index: int) -> Any:
    return values[index] if index < len(values) else None


@dataclass(frozen=True)
class SheetColumn:
    """
    열 하나: 헤더, 원소 → 값 selector, 선택적 Excel 숫자 포맷.

    Attributes:
        order: 워크시트/테이블 안의 열 순서 (작을수록 왼쪽, 같으면 선언 순)
        alignment: 가로 정렬 ("left", "center", "right"), None이면 셀 스타일 유지
    """

    header: str
    selector: Selector
    number_format: str | None = None
    order: int = 0
    alignment: str | None = None

    def headers(self) -> list[str]:
        return [self.header]

    def cells(self, item: Any) -> list[tuple[Any, str | None]]:
        return [(self.selector(item), self.number_format)]


@dataclass(frozen=True)
class MultiColumn:
    """
    값 시퀀스 하나를 total_columns개 열로 펼침.

    헤더는 "{header} {suffix}" (suffix가 없으면 1, 2, ...).
    시퀀스가 짧으면 남는 열은 빈 셀.

    Usage:
        MultiColumn("Q", lambda r: r.quarters, 4, header_suffixes=("1st", "2nd"))
        # → "Q 1st", "Q 2nd", "Q 3", "Q 4"
    """

    header: str
    selector: Selector
    total_columns: int
    header_suffixes: Sequence[str] = ()
    number_format: str | None = None
    order: int = 0
    alignment: str | None = None

    def __post_init__(self) -> None:
        if self.total_columns <= 0:
            raise ConfigurationError(
                ErrorCodes.INVALID_OPTION,
                option="total_columns",
                value=self.total_columns,
                column=self.header,
            )

    def headers(self) -> list[str]:
        return [_suffixed(self.header, self.header_suffixes, i) for i in range(self.total_columns)]

    def cells(self, item: Any) -> list[tuple[Any, str | None]]:
        values = list(self.selector(item) or [])
        return [(_element_at(values, i), self.number_format) for i in range(self.total_columns)]


@dataclass(frozen=True)
class PairedColumns:
    """
    두 값 시퀀스를 (첫째, 둘째) 쌍으로 total_columns번 반복.

    total_columns=2 → [A 1] [B 1] [A 2] [B 2]
    show_second_column=False면 둘째 열은 출력하지 않음.
    """

    header: str
    second_header: str
    selector: Selector
    second_selector: Selector
    total_columns: int
    header_suffixes: Sequence[str] = ()
    second_header_suffixes: Sequence[str] = ()
    number_format: str | None = None
    second_number_format: str | None = None
    show_second_column: bool = True
    order: int = 0
    alignment: str | None = None

    def __post_init__(self) -> None:
        if self.total_columns <= 0:
            raise ConfigurationError(
                ErrorCodes.INVALID_OPTION,
                option="total_columns",
                value=self.total_columns,
                column=self.header,
            )

    def headers(self) -> list[str]:
        headers = []
        for i in range(self.total_columns):
            headers.append(_suffixed(self.header, self.header_suffixes, i))
            if self.show_second_column:
                headers.append(_suffixed(self.second_header, self.second_header_suffixes, i))
        return headers

    def cells(self, item: Any) -> list[tuple[Any, str | None]]:
        first = list(self.selector(item) or [])
        second = list(self.second_selector(item) or []) if self.show_second_column else []
        cells = []
        for i in range(self.total_columns):
            cells.append((_element_at(first, i), self.number_format))
            if self.show_second_column:
                cells.append((_element_at(second, i), self.second_number_format))
        return cells


ColumnMapping = Union[SheetColumn, MultiColumn, PairedColumns]


def _ordered(columns: Iterable[ColumnMapping]) -> tuple[ColumnMapping, ...]:
    return tuple(sorted(columns, key=lambda c: c.order))


def _total_width(columns: Iterable[ColumnMapping]) -> int:
    return sum(len(column.headers()) for column in columns)


# =============================================================================
# Mapping Definitions
# =============================================================================


@dataclass(frozen=True)
class NamedRangeValue:
    """Named Range 하나에 값 하나. worksheet가 있으면 그 시트의 범위만."""

    name: str
    selector: Selector
    number_format: str | None = None
    worksheet: str | None = None


@dataclass(frozen=True)
class NamedRangeTable:
    """
    Named Range 기준 테이블.

    Attributes:
        header_row_is_named_range: True면 범위 행이 헤더, 데이터는 그 다음 행부터
        write_headers: 헤더 텍스트 기록 여부
        insert_rows: 행 삽입(True) / 덮어쓰기(False)
        copy_template_style: 삽입된 행에 템플릿 데이터 행 스타일 복사
        worksheet: 범위를 찾을 시트 (None이면 전체)
    """

    name: str
    items_selector: Selector
    columns: tuple[ColumnMapping, ...]
    header_row_is_named_range: bool = True
    write_headers: bool = False
    insert_rows: bool = True
    copy_template_style: bool = True
    worksheet: str | None = None


@dataclass(frozen=True)
class WorksheetDefinition:
    """
    생성할 워크시트: 이름, 아이템, 열 매핑.

    헤더는 1행(굵게), 데이터는 2행부터. include_headers=False면 1행부터.
    """

    name: str
    items: Iterable[Any]
    columns: tuple[ColumnMapping, ...]
    include_headers: bool = True

    def validate(self) -> None:
        """
        Raises:
            ConfigurationError: 이름 공백, 아이템 누락, 열 없음
        """
        if not self.name or not str(self.name).strip():
            raise ConfigurationError(ErrorCodes.INVALID_OPTION, option="worksheet_name", value=self.name)
        if self.items is None:
            raise ConfigurationError(ErrorCodes.MISSING_DATA_ITEM, worksheet=self.name)
        if not self.columns:
            raise ConfigurationError(ErrorCodes.INVALID_OPTION, option="columns", worksheet=self.name)


def _worksheet(
    name: str,
    items: Iterable[Any],
    columns: Sequence[ColumnMapping],
    include_headers: bool,
) -> WorksheetDefinition:
    definition = WorksheetDefinition(
        name=name,
        items=items,
        columns=tuple(columns or ()),
        include_headers=include_headers,
    )
    definition.validate()
    return definition


@dataclass(frozen=True)
class SheetConfiguration:
    """한 번의 XLSX 템플릿 생성 입력."""

    template_path: str | None
    data: Any
    locale: Locale | None = None
    values: tuple[NamedRangeValue, ...] = ()
    tables: tuple[NamedRangeTable, ...] = ()
    worksheets: tuple[WorksheetDefinition, ...] = ()

    def validate(self) -> None:
        """
        Raises:
            ConfigurationError: 템플릿 경로 누락, 데이터 누락, 매핑 없음
        """
        if not self.template_path or not str(self.template_path).strip():
            raise ConfigurationError(ErrorCodes.MISSING_TEMPLATE_PATH)
        if self.data is None:
            raise ConfigurationError(ErrorCodes.MISSING_DATA_ITEM, template=self.template_path)
        if not self.values and not self.tables and not self.worksheets:
            raise ConfigurationError(ErrorCodes.EMPTY_PLACEHOLDERS, template=self.template_path)


@dataclass(frozen=True)
class WorkbookConfiguration:
    """템플릿 없이 새 워크북을 만드는 입력."""

    worksheets: tuple[WorksheetDefinition, ...]
    locale: Locale | None = None

    def validate(self) -> None:
        if not self.worksheets:
            raise ConfigurationError(ErrorCodes.EMPTY_PLACEHOLDERS, template=None)


class WorksheetScope:
    """for_worksheet 콜백에 전달: 매핑을 한 시트의 Named Range로 제한."""

    def __init__(self, builder: "SheetGenerationBuilder", worksheet: str) -> None:
        self._builder = builder
        self.worksheet = worksheet

    def named_range(self, name: str, selector: Selector, number_format: str | None = None) -> "WorksheetScope":
        self._builder.named_range(name, selector, number_format, worksheet=self.worksheet)
        return self

    def table(
        self,
        name: str,
        items_selector: Selector,
        columns: Sequence[ColumnMapping],
        **options: Any,
    ) -> "WorksheetScope":
        self._builder.table(name, items_selector, columns, worksheet=self.worksheet, **options)
        return self


class SheetGenerationBuilder:
    """
    XLSX 템플릿 설정.

    Usage:
        config = (
            SheetGenerationBuilder()
            .use_template_path("report.xlsx")
            .set_data(report)
            .named_range("Title", lambda m: m.title)
            .named_range("Total", lambda m: m.total, "#,##0.00")
            .table(
                "LinesHeader",
                lambda m: m.lines,
                [SheetColumn("Item", lambda l: l.name), SheetColumn("Qty", lambda l: l.qty, "0")],
            )
            .for_worksheet("Summary", lambda ws: ws.named_range("Title", lambda m: m.title))
            .add_worksheet("Raw", report.lines, [SheetColumn("Item", lambda l: l.name)])
            .build()
        )
    """

    def __init__(self) -> None:
        self._template_path: str | None = None
        self._data: Any = None
        self._locale: Locale | None = None
        self._values: list[NamedRangeValue] = []
        self._tables: list[NamedRangeTable] = []
        self._worksheets: list[WorksheetDefinition] = []

    def use_template_path(self, path: str) -> "SheetGenerationBuilder":
        if path is None or not str(path).strip():
            raise ConfigurationError(ErrorCodes.INVALID_OPTION, option="template_path", value=path)
        self._template_path = str(path)
        return self

    def set_data(self, data: Any) -> "SheetGenerationBuilder":
        self._data = data
        return self

    def use_locale(self, locale: LocaleLike | None) -> "SheetGenerationBuilder":
        self._locale = as_locale(locale)
        return self

    def named_range(
        self,
        name: str,
        selector: Selector,
        number_format: str | None = None,
        worksheet: str | None = None,
    ) -> "SheetGenerationBuilder":
        self._values.append(NamedRangeValue(name, selector, number_format, worksheet))
        return self

    def table(
        self,
        name: str,
        items_selector: Selector,
        columns: Sequence[ColumnMapping],
        insert_rows: bool = True,
        write_headers: bool = False,
        header_row_is_named_range: bool = True,
        copy_template_style: bool = True,
        worksheet: str | None = None,
    ) -> "SheetGenerationBuilder":
        if not columns:
            raise ConfigurationError(ErrorCodes.INVALID_OPTION, option="columns", table=name)
        self._tables.append(
            NamedRangeTable(
                name=name,
                items_selector=items_selector,
                columns=tuple(columns),
                header_row_is_named_range=header_row_is_named_range,
                write_headers=write_headers,
                insert_rows=insert_rows,
                copy_template_style=copy_template_style,
                worksheet=worksheet,
            )
        )
        return self

    def for_worksheet(
        self,
        worksheet: str,
        configure: Callable[[WorksheetScope], Any],
    ) -> "SheetGenerationBuilder":
        """
        configure 안에서 추가한 매핑은 worksheet 시트의 Named Range에만 적용.

        Args:
            worksheet: 시트 이름 (대소문자 무시)
            configure: WorksheetScope를 받는 콜백

        Raises:
            ConfigurationError: 시트 이름 공백
        """
        if not worksheet or not str(worksheet).strip():
            raise ConfigurationError(ErrorCodes.INVALID_OPTION, option="worksheet", value=worksheet)
        configure(WorksheetScope(self, worksheet))
        return self

    def add_worksheet(
        self,
        name: str,
        items: Iterable[Any],
        columns: Sequence[ColumnMapping],
        include_headers: bool = True,
    ) -> "SheetGenerationBuilder":
        """템플릿 워크북 끝에 생성 시트 추가."""
        self._worksheets.append(_worksheet(name, items, columns, include_headers))
        return self

    def build(self) -> SheetConfiguration:
        return SheetConfiguration(
            template_path=self._template_path,
            data=self._data,
            locale=self._locale,
            values=tuple(self._values),
            tables=tuple(self._tables),
            worksheets=tuple(self._worksheets),
        )


class WorkbookBuilder:
    """
    템플릿 없는 워크북 설정.

    Usage:
        config = (
            WorkbookBuilder()
            .add_worksheet(
                "Sales",
                sales,
                [
                    SheetColumn("Region", lambda s: s.region, order=1),
                    SheetColumn("Total", lambda s: s.total, "#,##0.00", order=2),
                    MultiColumn("Month", lambda s: s.months, 3, ("Jan", "Feb", "Mar"), order=3),
                ],
            )
            .build()
        )
        xlsx_bytes = SheetGenerator().generate_workbook(config)
    """

    def __init__(self) -> None:
        self._locale: Locale | None = None
        self._worksheets: list[WorksheetDefinition] = []

    def use_locale(self, locale: LocaleLike | None) -> "WorkbookBuilder":
        self._locale = as_locale(locale)
        return self

    def add_worksheet(
        self,
        name: str,
        items: Iterable[Any],
        columns: Sequence[ColumnMapping],
        include_headers: bool = True,
    ) -> "WorkbookBuilder":
        """
        Raises:
            ConfigurationError: 이름 공백, 아이템 누락, 열 없음
        """
        self._worksheets.append(_worksheet(name, items, columns, include_headers))
        return self

    def build(self) -> WorkbookConfiguration:
        return WorkbookConfiguration(worksheets=tuple(self._worksheets), locale=self._locale)


# =============================================================================
# Named Range Helpers
# =============================================================================


def _destinations(wb: Workbook, defined: Any, owner: Worksheet | None) -> list[tuple[Worksheet, tuple[int, int, int, int]]]:
    if defined is None:
        return []
    targets = []
    for sheet_name, ref in defined.destinations:
        target = wb[sheet_name] if sheet_name else owner
        targets.append((target, range_boundaries(ref.replace("$", ""))))
    return targets


def find_named_range(
    wb: Workbook,
    name: str,
    worksheet: str | None = None,
) -> list[tuple[Worksheet, tuple[int, int, int, int]]]:
    """
    이름 → (시트, (min_col, min_row, max_col, max_row)) 목록.

    worksheet 없음: 워크북 범위 이름 우선, 없으면 시트 범위 이름.
    worksheet 있음: 두 범위 모두에서 해당 시트(대소문자 무시)에 있는 것만.
    """
    workbook_level = _destinations(wb, wb.defined_names.get(name), None)
    sheet_level = []
    for ws in wb.worksheets:
        sheet_level.extend(_destinations(wb, ws.defined_names.get(name), ws))

    if worksheet is None:
        return workbook_level or sheet_level

    wanted = worksheet.casefold()
    return [t for t in workbook_level + sheet_level if t[0].title.casefold() == wanted]


def _convert_value(value: Any, parse_text: bool = False) -> Any:
    """
    값 변환 (Decimal → float 등).

    parse_text=True면 숫자 문자열 → float, ISO 날짜 문자열 → datetime.
    """
    if isinstance(value, Decimal):
        # Excel은 Decimal을 직접 지원하지 않음
        return float(value)
    if parse_text and isinstance(value, str):
        text = value.strip()
        if _DECIMAL_TEXT.match(text):
            return float(text)
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return value
    return value


def _set_cell(
    ws: Worksheet,
    row: int,
    column: int,
    value: Any,
    number_format: str | None,
    alignment: str | None = None,
    parse_text: bool = False,
) -> None:
    cell = ws.cell(row=row, column=column)
    cell.value = _convert_value(value, parse_text)
    if number_format:
        cell.number_format = number_format
    if alignment:
        cell.alignment = Alignment(horizontal=alignment)


def _write_headers(ws: Worksheet, row: int, start_col: int, columns: Sequence[ColumnMapping], bold: bool = False) -> None:
    col = start_col
    for column in columns:
        for header in column.headers():
            cell = ws.cell(row=row, column=col)
            cell.value = header
            if bold:
                cell.font = Font(bold=True)
            col += 1


def _write_row(
    ws: Worksheet,
    row: int,
    start_col: int,
    columns: Sequence[ColumnMapping],
    item: Any,
    parse_text: bool = False,
) -> None:
    col = start_col
    for column in columns:
        for value, number_format in column.cells(item):
            _set_cell(ws, row, col, value, number_format, column.alignment, parse_text)
            col += 1


def _fit_columns(ws: Worksheet) -> None:
    """가장 긴 값 기준으로 열 너비 조정."""
    widths: dict[int, int] = {}
    for row in ws.iter_rows():
        for cell in row:
            if cell.value is not None:
                widths[cell.column] = max(widths.get(cell.column, 0), len(str(cell.value)))
    for column, width in widths.items():
        ws.column_dimensions[get_column_letter(column)].width = width + 2


# =============================================================================
# Generator
# =============================================================================


class SheetGenerator:
    """
    XLSX 렌더러.

    Usage:
        generator = SheetGenerator()
        xlsx_bytes = generator.generate(config)             # 템플릿 채우기
        xlsx_bytes = generator.generate_workbook(wb_config)  # 새 워크북
    """

    def generate(
        self,
        config: SheetConfiguration,
        cancellation: CancellationToken | None = None,
        generation_log: GenerationLog | None = None,
    ) -> bytes:
        """
        템플릿에 데이터를 채워 XLSX 바이트 생성.

        Raises:
            ConfigurationError: 설정 누락, 이미 있는 시트 이름
            TemplateNotFoundError: 템플릿 없음
            RenderError: RENDER_FAILED
            GenerationCancelledError: 취소
        """
        token = ensure_token(cancellation)
        return run_tracked(
            generation_log,
            lambda: self._generate(config, token, generation_log),
        )

    def generate_workbook(
        self,
        config: WorkbookConfiguration,
        cancellation: CancellationToken | None = None,
        generation_log: GenerationLog | None = None,
    ) -> bytes:
        """
        템플릿 없이 워크시트들을 새 워크북으로 생성.

        Raises:
            ConfigurationError: 워크시트 없음, 중복 시트 이름
            RenderError: RENDER_FAILED
            GenerationCancelledError: 취소
        """
        token = ensure_token(cancellation)
        return run_tracked(
            generation_log,
            lambda: self._generate_workbook(config, token),
        )

    def _generate(
        self,
        config: SheetConfiguration,
        token: CancellationToken,
        generation_log: GenerationLog | None,
    ) -> bytes:
        token.raise_if_cancelled("validate")
        config.validate()

        template_path = Path(str(config.template_path))
        if not template_path.exists():
            raise TemplateNotFoundError(
                ErrorCodes.TEMPLATE_NOT_FOUND,
                path=str(template_path),
            )

        with LocaleScope(config.locale):
            try:
                wb = load_workbook(template_path)
                token.raise_if_cancelled("template_loaded")

                for mapping in config.values:
                    token.raise_if_cancelled(f"named_range:{mapping.name}")
                    self._fill_value(wb, mapping, config.data, generation_log)

                for table in config.tables:
                    token.raise_if_cancelled(f"table:{table.name}")
                    self._fill_table(wb, table, config.data, generation_log)

                for definition in config.worksheets:
                    self._write_worksheet(wb, definition, token)

                token.raise_if_cancelled("serialize")
                buffer = io.BytesIO()
                wb.save(buffer)

            except DocumentGenerationError:
                raise
            except Exception as e:
                raise RenderError(
                    ErrorCodes.RENDER_FAILED,
                    template=str(template_path),
                    error=str(e),
                ) from e

        logger.info(f"Generated workbook from {template_path.name}")
        return buffer.getvalue()

    def _generate_workbook(self, config: WorkbookConfiguration, token: CancellationToken) -> bytes:
        token.raise_if_cancelled("validate")
        config.validate()

        with LocaleScope(config.locale):
            try:
                wb = Workbook()
                wb.remove(wb.active)

                for definition in config.worksheets:
                    self._write_worksheet(wb, definition, token)

                token.raise_if_cancelled("serialize")
                buffer = io.BytesIO()
                wb.save(buffer)

            except DocumentGenerationError:
                raise
            except Exception as e:
                raise RenderError(
                    ErrorCodes.RENDER_FAILED,
                    worksheets=[d.name for d in config.worksheets],
                    error=str(e),
                ) from e

        logger.info(f"Generated workbook with {len(config.worksheets)} worksheet(s)")
        return buffer.getvalue()

    def _write_worksheet(self, wb: Workbook, definition: WorksheetDefinition, token: CancellationToken) -> None:
        """새 시트에 헤더 + 아이템 행 기록."""
        token.raise_if_cancelled(f"worksheet:{definition.name}")
        if definition.name.casefold() in (title.casefold() for title in wb.sheetnames):
            raise ConfigurationError(
                ErrorCodes.INVALID_OPTION,
                option="worksheet_name",
                value=definition.name,
                message="Worksheet already exists in workbook.",
            )

        logger.info(f"Starting worksheet {definition.name} generation.")
        started = time.perf_counter()

        ws = wb.create_sheet(title=definition.name)
        columns = _ordered(definition.columns)

        row = 1
        if definition.include_headers:
            _write_headers(ws, row, 1, columns, bold=True)
            row += 1

        rows_added = 0
        for item in definition.items:
            token.raise_if_cancelled(f"worksheet:{definition.name}")
            _write_row(ws, row, 1, columns, item, parse_text=True)
            row += 1
            rows_added += 1

        _fit_columns(ws)

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        logger.info(
            f"Finished worksheet {definition.name} generation. "
            f"Rows added {rows_added}. Elapsed {elapsed_ms} ms."
        )

    def _warn_missing(self, generation_log: GenerationLog | None, name: str, worksheet: str | None) -> None:
        if worksheet:
            message = f"Named range not found in worksheet {worksheet}"
        else:
            message = "Named range not found in workbook template"
        emit_warning(
            generation_log,
            code=ErrorCodes.SLOT_NOT_FOUND,
            action_id="fill_named_range",
            field_or_slot=name,
            message=message,
        )

    def _fill_value(
        self,
        wb: Workbook,
        mapping: NamedRangeValue,
        data: Any,
        generation_log: GenerationLog | None,
    ) -> None:
        """Named Range의 모든 셀에 값 설정."""
        targets = find_named_range(wb, mapping.name, mapping.worksheet)
        if not targets:
            self._warn_missing(generation_log, mapping.name, mapping.worksheet)
            return

        value = mapping.selector(data)
        for ws, (min_col, min_row, max_col, max_row) in targets:
            for row in range(min_row, max_row + 1):
                for col in range(min_col, max_col + 1):
                    _set_cell(ws, row, col, value, mapping.number_format)

    def _fill_table(
        self,
        wb: Workbook,
        table: NamedRangeTable,
        data: Any,
        generation_log: GenerationLog | None,
    ) -> None:
        """범위 첫 셀 기준으로 헤더/데이터 행 기록."""
        targets = find_named_range(wb, table.name, table.worksheet)
        if not targets:
            self._warn_missing(generation_log, table.name, table.worksheet)
            return

        items = list(table.items_selector(data) or [])
        columns = _ordered(table.columns)
        width = _total_width(columns)
        for ws, (start_col, header_row, _max_col, _max_row) in targets:
            if table.header_row_is_named_range or table.write_headers:
                data_start = header_row + 1
            else:
                data_start = header_row

            if table.write_headers:
                _write_headers(ws, header_row, start_col, columns)

            if table.insert_rows and len(items) > 1:
                ws.insert_rows(data_start + 1, amount=len(items) - 1)
                if table.copy_template_style:
                    self._copy_row_style(ws, data_start, len(items), start_col, width)

            for index, item in enumerate(items):
                _write_row(ws, data_start + index, start_col, columns, item)

    def _copy_row_style(
        self,
        ws: Worksheet,
        template_row: int,
        count: int,
        start_col: int,
        width: int,
    ) -> None:
        """템플릿 행 스타일을 아래 삽입 행들에 복사."""
        for row in range(template_row + 1, template_row + count):
            for col in range(start_col, start_col + width):
                source = ws.cell(row=template_row, column=col)
                if source.has_style:
                    ws.cell(row=row, column=col)._style = copy(source._style)
