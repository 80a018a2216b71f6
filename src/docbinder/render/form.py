"""
Form PDF 생성기: AcroForm 필드 채우기 (pypdf).

흐름:
1. 설정 검증
2. 선택적 라이선스 파일 확인 (없으면 경고 후 계속)
3. LocaleScope 진입
4. 템플릿 로드 → 필드 이름 공간
5. 제거 대상 필드 삭제 (없는 이름은 경고)
6. placeholder 순서대로 resolve → 값 기록 (실패/없는 슬롯은 경고 후 계속)
7. 평탄화 (선택)
8. 직렬화
9. LocaleScope 종료 → post-processor 체인

취소는 단계 사이와 각 placeholder resolve 전에 확인.
같은 이름의 placeholder가 여러 개면 마지막 값이 기록됨.
"""

import io
import logging
import time
from pathlib import Path
from typing import Any

from pypdf import PdfReader, PdfWriter
from pypdf.generic import ArrayObject, DictionaryObject, NameObject

from docbinder.core.cancellation import CancellationToken, ensure_token
from docbinder.core.locale_scope import LocaleScope, current_locale
from docbinder.core.logging import emit_warning, run_tracked
from docbinder.domain.constants import CHECKBOX_OFF
from docbinder.domain.errors import (
    DocumentGenerationError,
    ErrorCodes,
    GenerationCancelledError,
    RenderError,
    TemplateNotFoundError,
)
from docbinder.domain.schemas import GenerationLog
from docbinder.postprocess import run_post_processors

from .configuration import GenerationConfiguration
from .license import load_license_file

logger = logging.getLogger(__name__)

FILLABLE_FIELD_TYPES = ("/Tx", "/Btn", "/Ch")


# =============================================================================
# AcroForm Helpers
# =============================================================================


def qualified_field_name(obj: DictionaryObject) -> str:
    """/Parent 체인을 따라 완전한 필드 이름 (a.b.c)."""
    parts = []
    node: Any = obj
    while node is not None:
        if "/T" in node:
            parts.append(str(node["/T"]))
        parent = node.get("/Parent")
        node = parent.get_object() if parent is not None else None
    return ".".join(reversed(parts))


def list_form_fields(reader: PdfReader) -> dict[str, dict[str, Any]]:
    """필드 이름 → pypdf 필드 dict (폼이 없으면 빈 dict)."""
    return dict(reader.get_fields() or {})


def remove_form_field(writer: PdfWriter, name: str) -> None:
    """
    필드 삭제: 모든 페이지의 위젯 주석 + /AcroForm /Fields 항목.
    """
    for page in writer.pages:
        annots = page.get("/Annots")
        if annots is None:
            continue
        kept = ArrayObject(
            ref for ref in annots.get_object()
            if qualified_field_name(ref.get_object()) != name
        )
        page[NameObject("/Annots")] = kept

    acroform = writer.root_object.get("/AcroForm")
    if acroform is None:
        return
    acroform = acroform.get_object()
    fields = acroform.get("/Fields")
    if fields is None:
        return
    _prune_fields(fields.get_object(), name)


def _prune_fields(fields: ArrayObject, name: str) -> None:
    for ref in list(fields):
        field = ref.get_object()
        if qualified_field_name(field) == name:
            fields.remove(ref)
            continue
        kids = field.get("/Kids")
        if kids is not None:
            _prune_fields(kids.get_object(), name)


def _checkbox_state(field: dict[str, Any], value: str) -> str:
    """체크박스 값 → 외형 상태 이름 (/Off 또는 템플릿의 on 상태)."""
    if value == CHECKBOX_OFF:
        return "/Off"
    states = [str(s) for s in field.get("/_States_", []) if str(s) != "/Off"]
    return states[0] if states else "/Yes"


def _current_value(field: dict[str, Any]) -> str:
    value = field.get("/V")
    if field.get("/FT") == "/Btn":
        return str(value) if value else "/Off"
    return "" if value is None else str(value)


def flatten_form(writer: PdfWriter) -> None:
    """위젯 주석과 /AcroForm 제거 → 더 이상 편집 불가."""
    writer.remove_annotations(subtypes="/Widget")
    if "/AcroForm" in writer.root_object:
        del writer.root_object["/AcroForm"]


# =============================================================================
# Generator
# =============================================================================


class FormPdfGenerator:
    """
    AcroForm PDF 채우기.

    Usage:
        generator = FormPdfGenerator()
        pdf_bytes = generator.generate(config)
    """

    def generate(
        self,
        config: GenerationConfiguration,
        cancellation: CancellationToken | None = None,
        generation_log: GenerationLog | None = None,
    ) -> bytes:
        """
        폼 채우기 → PDF 바이트.

        Args:
            config: FormGenerationBuilder().build() 결과
            cancellation: 취소 토큰
            generation_log: 경고/결과를 기록할 GenerationLog (선택)

        Returns:
            post-processor 체인까지 적용된 PDF 바이트

        Raises:
            ConfigurationError: 설정 누락
            TemplateNotFoundError: 템플릿 없음
            RenderError: pypdf 처리 실패
            PostProcessorExecutionError: 후처리 실패
            GenerationCancelledError: 취소
        """
        token = ensure_token(cancellation)
        return run_tracked(
            generation_log,
            lambda: self._generate(config, token, generation_log),
        )

    def _generate(
        self,
        config: GenerationConfiguration,
        token: CancellationToken,
        generation_log: GenerationLog | None,
    ) -> bytes:
        token.raise_if_cancelled("validate")
        config.validate()

        template_path = Path(str(config.template_path))
        if not template_path.is_file():
            raise TemplateNotFoundError(
                ErrorCodes.TEMPLATE_NOT_FOUND,
                path=str(template_path),
            )

        logger.info(f"Starting PDF form generation using template {template_path}")
        if not load_license_file(config.license_path):
            emit_warning(
                generation_log,
                code=ErrorCodes.LICENSE_NOT_FOUND,
                action_id="load_license",
                field_or_slot="license_path",
                message="No license file found or wrong path. Running in unlicensed mode.",
                original_value=config.license_path,
            )
        token.raise_if_cancelled("license")

        with LocaleScope(config.locale):
            started = time.perf_counter()
            locale = config.locale or current_locale()
            try:
                pdf = self._fill(template_path, config, locale, token, generation_log)
            except DocumentGenerationError:
                raise
            except Exception as e:
                raise RenderError(
                    ErrorCodes.RENDER_FAILED,
                    template=str(template_path),
                    error=str(e),
                ) from e
            elapsed_ms = int((time.perf_counter() - started) * 1000)
            logger.info(f"Generated PDF from {template_path.name}, took {elapsed_ms}ms")

        return run_post_processors(pdf, config.post_processors, token)

    def _fill(
        self,
        template_path: Path,
        config: GenerationConfiguration,
        locale: Any,
        token: CancellationToken,
        generation_log: GenerationLog | None,
    ) -> bytes:
        reader = PdfReader(template_path)
        writer = PdfWriter(clone_from=reader)
        slots = list_form_fields(reader)
        logger.debug(f"Form fields in {template_path.name}: {sorted(slots)}")
        token.raise_if_cancelled("template_loaded")

        for name in config.fields_to_remove:
            if name not in slots:
                emit_warning(
                    generation_log,
                    code=ErrorCodes.REMOVE_TARGET_NOT_FOUND,
                    action_id="remove_field",
                    field_or_slot=name,
                    message="Form element to remove not found in template",
                )
                continue
            remove_form_field(writer, name)
            del slots[name]
        token.raise_if_cancelled("fields_removed")

        values: dict[str, str] = {}
        for placeholder in config.placeholders:
            token.raise_if_cancelled(f"placeholder:{placeholder.name}")
            if placeholder.name not in slots:
                emit_warning(
                    generation_log,
                    code=ErrorCodes.SLOT_NOT_FOUND,
                    action_id="fill_field",
                    field_or_slot=placeholder.name,
                    message="Field not found in form template",
                )
                continue
            try:
                value = placeholder.resolve(config.data, locale)
            except GenerationCancelledError:
                raise
            except Exception as e:
                emit_warning(
                    generation_log,
                    code=ErrorCodes.PLACEHOLDER_RESOLUTION_FAILED,
                    action_id="fill_field",
                    field_or_slot=placeholder.name,
                    message=f"Error processing placeholder: {e}",
                )
                continue

            text = "" if value is None else str(value)
            if slots[placeholder.name].get("/FT") == "/Btn":
                text = _checkbox_state(slots[placeholder.name], text)
            values[placeholder.name] = text

        self._write_values(writer, slots, values, config.flatten)
        if config.flatten:
            flatten_form(writer)

        token.raise_if_cancelled("serialize")
        output = io.BytesIO()
        writer.write(output)
        return output.getvalue()

    def _write_values(
        self,
        writer: PdfWriter,
        slots: dict[str, dict[str, Any]],
        values: dict[str, str],
        flatten: bool,
    ) -> None:
        """
        값 기록. 평탄화 시에는 채우지 않은 필드도 현재 값으로 외형 생성.
        """
        if flatten:
            merged = {
                name: _current_value(field)
                for name, field in slots.items()
                if field.get("/FT") in FILLABLE_FIELD_TYPES and "/Kids" not in field
            }
            merged.update(values)
            values = merged

        if not values:
            return

        for page in writer.pages:
            if not page.get("/Annots"):
                continue
            writer.update_page_form_field_values(
                page,
                values,
                auto_regenerate=False,
                flatten=flatten,
            )
