"""
Generation configuration + builders.

규칙:
- setter는 서로 독립: 교차 검증 없음
- 숫자 옵션(로그 최대 길이)은 setter 호출 시점에 범위 검사
- 템플릿 경로 / 데이터 / placeholder 목록은 생성 시작 시 validate()에서 검사
- build() 결과는 불변, 생성 호출 1회에 소비
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from babel import Locale

from docbinder.core.locale_scope import LocaleLike, as_locale
from docbinder.domain.errors import ConfigurationError, ErrorCodes
from docbinder.domain.schemas import BarChartConfig, GroupedBarChartConfig, PieChartConfig
from docbinder.placeholders import (
    BarChartPlaceholder,
    CheckboxPlaceholder,
    CollectionPlaceholder,
    DatePlaceholder,
    FlagPlaceholder,
    GroupedBarChartPlaceholder,
    LocalizedDatePlaceholder,
    LocalizedNumericPlaceholder,
    NumericAndTextPlaceholder,
    NumericPlaceholder,
    PieChartPlaceholder,
    Placeholder,
    TextPlaceholder,
)
from docbinder.postprocess import (
    Classification,
    DocumentClassifierPostProcessor,
    PasswordProtectPostProcessor,
    PdfSignatureOptions,
    PfxSignaturePostProcessor,
    PostProcessor,
)

from .resources import ResourceAccessPolicy

if TYPE_CHECKING:
    from docbinder.core.config import GeneratorSettings

Selector = Callable[[Any], Any]


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True)
class GenerationConfiguration:
    """
    한 번의 생성 호출 입력.

    Attributes:
        template_path: 템플릿 파일 경로
        data: 데이터 아이템 (정확히 1개)
        locale: 생성 locale (None → ambient locale)
        placeholders: 등록 순서의 placeholder
        fields_to_remove: 제거할 폼 필드 (form 경로)
        flatten: 채운 뒤 폼 평탄화 여부 (form 경로)
        resource_policy: asset fetch 허용 목록 (markup 경로)
        post_processors: 등록 순서의 후처리 단계
        license_path: 선택적 라이선스 파일
        log_rendered_markup: 렌더링 결과 debug 로그 여부 (markup 경로)
        log_max_length: 렌더링 로그 최대 길이 (None = 제한 없음)
    """

    template_path: str | None
    data: Any
    locale: Locale | None = None
    placeholders: tuple[Placeholder, ...] = ()
    fields_to_remove: tuple[str, ...] = ()
    flatten: bool = False
    resource_policy: ResourceAccessPolicy | None = None
    post_processors: tuple[PostProcessor, ...] = ()
    license_path: str | None = None
    log_rendered_markup: bool = True
    log_max_length: int | None = None

    def validate(self, require_placeholders: bool = True) -> None:
        """
        생성 시작 시 검증.

        Raises:
            ConfigurationError: 템플릿 경로 누락, 데이터 누락, placeholder 없음
        """
        if not self.template_path or not str(self.template_path).strip():
            raise ConfigurationError(ErrorCodes.MISSING_TEMPLATE_PATH)
        if self.data is None:
            raise ConfigurationError(
                ErrorCodes.MISSING_DATA_ITEM,
                template=self.template_path,
            )
        if require_placeholders and not self.placeholders:
            raise ConfigurationError(
                ErrorCodes.EMPTY_PLACEHOLDERS,
                template=self.template_path,
            )


def _require_text(value: str | None, option: str) -> str:
    if value is None or not str(value).strip():
        raise ConfigurationError(ErrorCodes.INVALID_OPTION, option=option, value=value)
    return str(value)


# =============================================================================
# Builders
# =============================================================================


class _GenerationBuilder:
    """공통 setter. 모든 setter는 self 반환 (체이닝)."""

    def __init__(self) -> None:
        self._template_path: str | None = None
        self._data: Any = None
        self._locale: Locale | None = None
        self._license_path: str | None = None
        self._placeholders: list[Placeholder] = []
        self._post_processors: list[PostProcessor] = []

    # === 공통 입력 ===

    def use_template_path(self, path: str) -> "_GenerationBuilder":
        """템플릿 경로 (공백 불가)."""
        self._template_path = _require_text(str(path) if path is not None else None, "template_path")
        return self

    def set_data(self, data: Any) -> "_GenerationBuilder":
        self._data = data
        return self

    def use_locale(self, locale: LocaleLike | None) -> "_GenerationBuilder":
        self._locale = as_locale(locale)
        return self

    def use_license_file(self, path: str) -> "_GenerationBuilder":
        """라이선스 파일 경로 (공백 불가). 파일 존재 여부는 생성 시 확인."""
        self._license_path = _require_text(str(path) if path is not None else None, "license_path")
        return self

    def apply_settings(self, settings: "GeneratorSettings") -> "_GenerationBuilder":
        """프로세스 설정의 기본값 적용 (locale, license_path)."""
        if self._locale is None:
            self._locale = as_locale(settings.locale)
        if self._license_path is None and settings.license_path:
            self._license_path = settings.license_path
        return self

    # === placeholder ===

    def add_placeholder(self, placeholder: Placeholder) -> "_GenerationBuilder":
        self._placeholders.append(placeholder)
        return self

    def add_placeholders(self, placeholders: Iterable[Placeholder]) -> "_GenerationBuilder":
        self._placeholders.extend(placeholders)
        return self

    def add_text(self, name: str, selector: Selector) -> "_GenerationBuilder":
        return self.add_placeholder(TextPlaceholder(name, selector))

    # === post-processors ===

    def add_post_processor(self, processor: PostProcessor) -> "_GenerationBuilder":
        self._post_processors.append(processor)
        return self

    def add_password_protection(self, owner_password: str, user_password: str) -> "_GenerationBuilder":
        return self.add_post_processor(PasswordProtectPostProcessor(owner_password, user_password))

    def add_document_classifier(
        self,
        classification: Classification | str,
        additional_values: dict[str, str] | None = None,
    ) -> "_GenerationBuilder":
        return self.add_post_processor(
            DocumentClassifierPostProcessor(classification, additional_values)
        )

    def add_pfx_signature(
        self,
        pfx_bytes: bytes,
        options: PdfSignatureOptions | None = None,
    ) -> "_GenerationBuilder":
        return self.add_post_processor(PfxSignaturePostProcessor(pfx_bytes, options))

    def _base_kwargs(self) -> dict[str, Any]:
        return {
            "template_path": self._template_path,
            "data": self._data,
            "locale": self._locale,
            "placeholders": tuple(self._placeholders),
            "post_processors": tuple(self._post_processors),
            "license_path": self._license_path,
        }


class FormGenerationBuilder(_GenerationBuilder):
    """
    폼 채우기 설정.

    Usage:
        config = (
            FormGenerationBuilder()
            .use_template_path("invoice.pdf")
            .set_data(invoice)
            .use_locale("de_DE")
            .add_text("Customer", lambda m: m.customer)
            .add_numeric("Total", lambda m: m.total, "N2")
            .add_checkbox("Paid", lambda m: m.paid)
            .remove_fields("InternalNotes")
            .set_flatten(True)
            .build()
        )
    """

    def __init__(self) -> None:
        super().__init__()
        self._fields_to_remove: list[str] = []
        self._flatten = False

    def add_numeric(
        self,
        name: str,
        selector: Selector,
        fmt: str = "N",
        locale: LocaleLike | None = None,
    ) -> "FormGenerationBuilder":
        self.add_placeholder(LocalizedNumericPlaceholder(name, selector, fmt, locale))
        return self

    def add_numeric_and_text(
        self,
        name: str,
        selector: Selector,
        fmt: str = "N",
        locale: LocaleLike | None = None,
    ) -> "FormGenerationBuilder":
        self.add_placeholder(NumericAndTextPlaceholder(name, selector, fmt, locale))
        return self

    def add_date(
        self,
        name: str,
        selector: Selector,
        fmt: str = "G",
        locale: LocaleLike | None = None,
    ) -> "FormGenerationBuilder":
        self.add_placeholder(LocalizedDatePlaceholder(name, selector, fmt, locale))
        return self

    def add_checkbox(self, name: str, selector: Selector) -> "FormGenerationBuilder":
        self.add_placeholder(CheckboxPlaceholder(name, selector))
        return self

    def remove_fields(self, *names: str) -> "FormGenerationBuilder":
        self._fields_to_remove.extend(n for n in names if n)
        return self

    def set_flatten(self, flatten: bool) -> "FormGenerationBuilder":
        self._flatten = bool(flatten)
        return self

    def build(self) -> GenerationConfiguration:
        return GenerationConfiguration(
            **self._base_kwargs(),
            fields_to_remove=tuple(self._fields_to_remove),
            flatten=self._flatten,
        )


class MarkupGenerationBuilder(_GenerationBuilder):
    """
    마크업 템플릿 렌더링 설정.

    Usage:
        config = (
            MarkupGenerationBuilder()
            .use_template_path("report.html")
            .set_data(report)
            .use_locale("es_ES")
            .add_text("Title", lambda m: m.title)
            .add_collection("Lines", lambda m: m.lines)
            .add_bar_chart("Sales", lambda m: m.sales, label=lambda s: s.month, value=lambda s: s.amount)
            .use_resource_policy(ResourceAccessPolicy(allowed_schemes=["file"]))
            .set_log_max_length(2000)
            .build()
        )
    """

    def __init__(self) -> None:
        super().__init__()
        self._resource_policy: ResourceAccessPolicy | None = None
        self._log_rendered = True
        self._log_max_length: int | None = None

    def apply_settings(self, settings: "GeneratorSettings") -> "MarkupGenerationBuilder":
        super().apply_settings(settings)
        self._log_rendered = settings.log_rendered_markup
        if settings.log_max_length is not None:
            self.set_log_max_length(settings.log_max_length)
        if self._resource_policy is None and (settings.allowed_schemes or settings.allowed_hosts):
            self._resource_policy = ResourceAccessPolicy(
                allowed_schemes=frozenset(settings.allowed_schemes),
                allowed_hosts=frozenset(settings.allowed_hosts),
            )
        return self

    # === placeholders ===

    def add_numeric(self, name: str, selector: Selector) -> "MarkupGenerationBuilder":
        """원시 숫자 (템플릿 필터로 포맷)."""
        self.add_placeholder(NumericPlaceholder(name, selector))
        return self

    def add_localized_numeric(
        self,
        name: str,
        selector: Selector,
        fmt: str = "N",
        locale: LocaleLike | None = None,
    ) -> "MarkupGenerationBuilder":
        self.add_placeholder(LocalizedNumericPlaceholder(name, selector, fmt, locale))
        return self

    def add_localized_numeric_and_text(
        self,
        name: str,
        selector: Selector,
        fmt: str = "N",
        locale: LocaleLike | None = None,
    ) -> "MarkupGenerationBuilder":
        self.add_placeholder(NumericAndTextPlaceholder(name, selector, fmt, locale))
        return self

    def add_date(self, name: str, selector: Selector) -> "MarkupGenerationBuilder":
        """원시 날짜 (템플릿 필터로 포맷)."""
        self.add_placeholder(DatePlaceholder(name, selector))
        return self

    def add_localized_date(
        self,
        name: str,
        selector: Selector,
        fmt: str = "G",
        locale: LocaleLike | None = None,
    ) -> "MarkupGenerationBuilder":
        self.add_placeholder(LocalizedDatePlaceholder(name, selector, fmt, locale))
        return self

    def add_flag(self, name: str, selector: Selector) -> "MarkupGenerationBuilder":
        self.add_placeholder(FlagPlaceholder(name, selector))
        return self

    def add_collection(self, name: str, selector: Selector) -> "MarkupGenerationBuilder":
        self.add_placeholder(CollectionPlaceholder(name, selector))
        return self

    def add_pie_chart(
        self,
        name: str,
        selector: Selector,
        label: Callable[[Any], str | None],
        value: Callable[[Any], float],
        config: PieChartConfig | None = None,
        locale: LocaleLike | None = None,
    ) -> "MarkupGenerationBuilder":
        self.add_placeholder(
            PieChartPlaceholder(
                name,
                selector,
                override_locale=locale,
                label=label,
                value=value,
                config=config or PieChartConfig(),
            )
        )
        return self

    def add_bar_chart(
        self,
        name: str,
        selector: Selector,
        label: Callable[[Any], str | None],
        value: Callable[[Any], float],
        config: BarChartConfig | None = None,
        locale: LocaleLike | None = None,
    ) -> "MarkupGenerationBuilder":
        self.add_placeholder(
            BarChartPlaceholder(
                name,
                selector,
                override_locale=locale,
                label=label,
                value=value,
                config=config or BarChartConfig(),
            )
        )
        return self

    def add_grouped_bar_chart(
        self,
        name: str,
        selector: Selector,
        label: Callable[[Any], str | None],
        series: Callable[[Any], str | None],
        value: Callable[[Any], float],
        config: GroupedBarChartConfig | None = None,
        locale: LocaleLike | None = None,
    ) -> "MarkupGenerationBuilder":
        """카테고리별로 시리즈 막대를 나란히 그리는 차트."""
        self.add_placeholder(
            GroupedBarChartPlaceholder(
                name,
                selector,
                override_locale=locale,
                label=label,
                series=series,
                value=value,
                config=config or GroupedBarChartConfig(),
            )
        )
        return self

    # === options ===

    def use_resource_policy(self, policy: ResourceAccessPolicy | None) -> "MarkupGenerationBuilder":
        self._resource_policy = policy
        return self

    def log_rendered_markup(self, enabled: bool) -> "MarkupGenerationBuilder":
        self._log_rendered = bool(enabled)
        return self

    def set_log_max_length(self, max_length: int) -> "MarkupGenerationBuilder":
        """
        렌더링 로그 최대 길이.

        Raises:
            ConfigurationError: 양수가 아님 (즉시)
        """
        if not isinstance(max_length, int) or isinstance(max_length, bool) or max_length <= 0:
            raise ConfigurationError(
                ErrorCodes.INVALID_OPTION,
                option="log_max_length",
                value=max_length,
                message="log_max_length must be greater than zero.",
            )
        self._log_max_length = max_length
        return self

    def build(self) -> GenerationConfiguration:
        return GenerationConfiguration(
            **self._base_kwargs(),
            resource_policy=self._resource_policy,
            log_rendered_markup=self._log_rendered,
            log_max_length=self._log_max_length,
        )
