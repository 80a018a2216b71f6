"""
Markup 템플릿 생성기: Jinja2 HTML → PDF (또는 docxtpl DOCX).

흐름:
1. 설정 검증 + 선택적 라이선스 파일 확인
2. LocaleScope 진입
3. placeholder를 이름으로 렌더링 컨텍스트에 등록 (중복 이름 → ConfigurationError)
4. 데이터 아이템 자체는 "Model"로 등록
5. locale 필터 설치 후 렌더링
6. 렌더링 결과 로그 (선택, 최대 길이 초과 시 truncation)
7. 변환기로 PDF 변환 (ResourceAccessPolicy 전달)
8. post-processor 체인

form 경로와 달리 placeholder resolve 실패는 경고가 아닌 RenderError.
"""

import logging
import time
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from babel import Locale
from jinja2 import (
    Environment,
    FileSystemLoader,
    TemplateNotFound,
    TemplateSyntaxError,
)

from docbinder.core.cancellation import CancellationToken, ensure_token
from docbinder.core.locale_scope import LocaleLike, LocaleScope, as_locale, current_locale
from docbinder.core.logging import emit_warning, run_tracked, truncate_for_log
from docbinder.domain.constants import DOCX_TEMPLATE_SUFFIXES, MODEL_CONTEXT_KEY
from docbinder.domain.errors import (
    ConfigurationError,
    DocumentGenerationError,
    ErrorCodes,
    GenerationCancelledError,
    RenderError,
    TemplateNotFoundError,
    TemplateParseError,
)
from docbinder.domain.schemas import GenerationLog
from docbinder.placeholders import Placeholder
from docbinder.postprocess import PostProcessor, run_post_processors

from .configuration import GenerationConfiguration
from .converter import MarkupConverter, WeasyPrintConverter
from .filters import build_filters
from .license import load_license_file
from .resources import ResourceAccessPolicy
from .word import DocxRenderer

logger = logging.getLogger(__name__)


def build_environment(template_dir: Path, locale: Locale) -> Environment:
    """템플릿 디렉터리 기준 Jinja2 환경 + locale 필터."""
    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=True,
    )
    env.filters.update(build_filters(locale))
    return env


def build_context(
    data: Any,
    placeholders: Iterable[Placeholder],
    locale: Locale,
    token: CancellationToken | None = None,
) -> dict[str, Any]:
    """
    placeholder → 렌더링 컨텍스트.

    Raises:
        ConfigurationError: 중복 이름 또는 예약 이름(Model)
    """
    context: dict[str, Any] = {}
    for placeholder in placeholders:
        if token is not None:
            token.raise_if_cancelled(f"placeholder:{placeholder.name}")
        if placeholder.name == MODEL_CONTEXT_KEY:
            raise ConfigurationError(
                ErrorCodes.RESERVED_PLACEHOLDER_NAME,
                name=placeholder.name,
            )
        if placeholder.name in context:
            raise ConfigurationError(
                ErrorCodes.DUPLICATE_PLACEHOLDER,
                name=placeholder.name,
                message=(
                    f"Duplicate placeholder name '{placeholder.name}'. "
                    "Placeholder names must be unique."
                ),
            )
        context[placeholder.name] = placeholder.resolve(data, locale)

    context[MODEL_CONTEXT_KEY] = data
    return context


def _is_docx(template_path: Path) -> bool:
    return template_path.suffix.lower() in DOCX_TEMPLATE_SUFFIXES


class MarkupGenerator:
    """
    마크업 템플릿 → 문서.

    Usage:
        generator = MarkupGenerator()
        pdf_bytes = generator.generate(config)

        # 변환 없이 렌더링 결과만
        html = generator.render_markup(config)

    Args:
        converter: 마크업 → PDF 변환기 (기본: WeasyPrintConverter)
    """

    def __init__(self, converter: MarkupConverter | None = None) -> None:
        self.converter: MarkupConverter = converter or WeasyPrintConverter()

    # =========================================================================
    # Public API
    # =========================================================================

    def render_markup(
        self,
        config: GenerationConfiguration,
        cancellation: CancellationToken | None = None,
        generation_log: GenerationLog | None = None,
    ) -> str:
        """
        placeholder를 채운 마크업 텍스트 (변환 없음).

        Raises:
            ConfigurationError: 설정 누락, 중복 placeholder, DOCX 템플릿
            TemplateNotFoundError: 템플릿 없음
            TemplateParseError: 템플릿 문법 오류
            RenderError: 렌더링 실패
        """
        token = ensure_token(cancellation)
        template_path = self._prepare(config, token, generation_log)
        if _is_docx(template_path):
            raise ConfigurationError(
                ErrorCodes.UNSUPPORTED_TEMPLATE,
                template=str(template_path),
                reason="DOCX templates have no text rendering",
            )

        with LocaleScope(config.locale):
            locale = config.locale or current_locale()
            context = self._context(config, locale, token)
            return self._render_text(template_path, context, locale, token)

    def generate(
        self,
        config: GenerationConfiguration,
        cancellation: CancellationToken | None = None,
        generation_log: GenerationLog | None = None,
    ) -> bytes:
        """
        마크업 템플릿 → PDF 바이트 (DOCX 템플릿이면 DOCX 바이트).

        Raises:
            ConfigurationError: 설정 누락, 중복 placeholder
            TemplateNotFoundError: 템플릿 없음
            TemplateParseError: 템플릿 문법 오류
            RenderError: 렌더링/변환 실패
            PostProcessorExecutionError: 후처리 실패
            GenerationCancelledError: 취소
        """
        token = ensure_token(cancellation)
        return run_tracked(
            generation_log,
            lambda: self._generate(config, token, generation_log),
        )

    def generate_from_model(
        self,
        template_path: str | Path,
        model: Mapping[str, Any],
        locale: LocaleLike | None = None,
        license_path: str | None = None,
        resource_policy: ResourceAccessPolicy | None = None,
        post_processors: Iterable[PostProcessor] = (),
        cancellation: CancellationToken | None = None,
        generation_log: GenerationLog | None = None,
    ) -> bytes:
        """
        placeholder 없이 dict 모델을 그대로 컨텍스트로 사용해 생성.

        모델의 각 키 + "Model"(모델 전체)로 접근 가능.
        """
        config = GenerationConfiguration(
            template_path=str(template_path) if template_path else None,
            data=model,
            locale=as_locale(locale),
            resource_policy=resource_policy,
            post_processors=tuple(post_processors),
            license_path=license_path,
        )
        token = ensure_token(cancellation)
        return run_tracked(
            generation_log,
            lambda: self._generate(config, token, generation_log, from_model=True),
        )

    def render_model(
        self,
        template_path: str | Path,
        model: Mapping[str, Any],
        locale: LocaleLike | None = None,
        cancellation: CancellationToken | None = None,
    ) -> str:
        """dict 모델로 마크업 텍스트만 렌더링."""
        config = GenerationConfiguration(
            template_path=str(template_path) if template_path else None,
            data=model,
            locale=as_locale(locale),
        )
        token = ensure_token(cancellation)
        path = self._prepare(config, token, None, require_placeholders=False)
        with LocaleScope(config.locale):
            active = config.locale or current_locale()
            return self._render_text(path, self._model_context(model), active, token)

    # =========================================================================
    # Internals
    # =========================================================================

    def _prepare(
        self,
        config: GenerationConfiguration,
        token: CancellationToken,
        generation_log: GenerationLog | None,
        require_placeholders: bool = True,
    ) -> Path:
        """검증 + 템플릿 존재 확인 + 라이선스 확인."""
        token.raise_if_cancelled("validate")
        config.validate(require_placeholders=require_placeholders)

        template_path = Path(str(config.template_path))
        if not template_path.is_file():
            raise TemplateNotFoundError(
                ErrorCodes.TEMPLATE_NOT_FOUND,
                path=str(template_path),
            )

        logger.info(f"Starting markup generation using template {template_path}")
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
        return template_path

    def _model_context(self, model: Any) -> dict[str, Any]:
        if not isinstance(model, Mapping):
            raise ConfigurationError(
                ErrorCodes.INVALID_OPTION,
                option="model",
                value=type(model).__name__,
                message="model must be a mapping of names to values.",
            )
        context = dict(model)
        context[MODEL_CONTEXT_KEY] = model
        return context

    def _context(
        self,
        config: GenerationConfiguration,
        locale: Locale,
        token: CancellationToken,
    ) -> dict[str, Any]:
        try:
            return build_context(config.data, config.placeholders, locale, token)
        except DocumentGenerationError:
            raise
        except Exception as e:
            raise RenderError(
                ErrorCodes.RENDER_FAILED,
                template=str(config.template_path),
                error=str(e),
            ) from e

    def _render_text(
        self,
        template_path: Path,
        context: dict[str, Any],
        locale: Locale,
        token: CancellationToken,
    ) -> str:
        env = build_environment(template_path.parent, locale)
        try:
            template = env.get_template(template_path.name)
        except TemplateSyntaxError as e:
            raise TemplateParseError(
                ErrorCodes.TEMPLATE_PARSE_ERROR,
                path=str(template_path),
                line=e.lineno,
                error=e.message,
            ) from e
        except TemplateNotFound as e:
            raise TemplateNotFoundError(
                ErrorCodes.TEMPLATE_NOT_FOUND,
                path=str(template_path),
            ) from e

        token.raise_if_cancelled("render")
        try:
            return template.render(context)
        except GenerationCancelledError:
            raise
        except Exception as e:
            raise RenderError(
                ErrorCodes.RENDER_FAILED,
                template=str(template_path),
                error=str(e),
            ) from e

    def _generate(
        self,
        config: GenerationConfiguration,
        token: CancellationToken,
        generation_log: GenerationLog | None,
        from_model: bool = False,
    ) -> bytes:
        template_path = self._prepare(
            config, token, generation_log, require_placeholders=not from_model
        )

        with LocaleScope(config.locale):
            started = time.perf_counter()
            locale = config.locale or current_locale()
            if from_model:
                context = self._model_context(config.data)
            else:
                context = self._context(config, locale, token)

            if _is_docx(template_path):
                token.raise_if_cancelled("render")
                output = DocxRenderer(template_path).render(
                    context, build_environment(template_path.parent, locale)
                )
            else:
                text = self._render_text(template_path, context, locale, token)
                elapsed_ms = int((time.perf_counter() - started) * 1000)
                logger.info(f"Rendered template {template_path.name} in {elapsed_ms}ms")
                if config.log_rendered_markup:
                    logger.debug(
                        f"Rendered markup: {truncate_for_log(text, config.log_max_length)}"
                    )

                token.raise_if_cancelled("convert")
                output = self._convert(text, template_path, config, token, generation_log)

            elapsed_ms = int((time.perf_counter() - started) * 1000)
            logger.info(f"Finished generation for {template_path.name} in {elapsed_ms}ms")

        return run_post_processors(output, config.post_processors, token)

    def _convert(
        self,
        text: str,
        template_path: Path,
        config: GenerationConfiguration,
        token: CancellationToken,
        generation_log: GenerationLog | None,
    ) -> bytes:
        try:
            return self.converter.convert(
                text,
                str(template_path.parent),
                config.resource_policy,
                token,
                generation_log=generation_log,
            )
        except DocumentGenerationError:
            raise
        except Exception as e:
            raise RenderError(
                ErrorCodes.RENDER_FAILED,
                template=str(template_path),
                stage="convert",
                error=str(e),
            ) from e
