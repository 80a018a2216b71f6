"""
Error definitions for document generation.

규칙:
- 경고(warning)는 로컬에서 복구 → 로그만 남기고 계속 진행
- 에러(error)는 호출 중단 → DocumentGenerationError 계열로 명시적 실패
- 취소(cancellation)는 에러가 아닌 포기 신호 → 감싸지 않고 그대로 전파
"""

from typing import Any


class DocumentGenerationError(Exception):
    """
    문서 생성 실패 시 발생하는 에러의 기본 클래스.

    Usage:
        raise ConfigurationError(ErrorCodes.MISSING_DATA_ITEM, template="a.pdf")
    """

    default_code = "GENERATION_FAILED"

    def __init__(self, code: str | None = None, **context: Any) -> None:
        self.code = code or self.default_code
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"[{self.code}] {ctx_str}" if ctx_str else f"[{self.code}]"

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            **self.context,
        }


class ConfigurationError(DocumentGenerationError):
    """설정 오류: 필수 값 누락, 범위 밖 옵션, 중복 placeholder 등."""

    default_code = "INVALID_CONFIGURATION"


class TemplateNotFoundError(DocumentGenerationError):
    """템플릿 파일이 존재하지 않음."""

    default_code = "TEMPLATE_NOT_FOUND"


class TemplateParseError(DocumentGenerationError):
    """마크업 템플릿 문법 오류."""

    default_code = "TEMPLATE_PARSE_ERROR"


class RenderError(DocumentGenerationError):
    """템플릿 채우기/변환 중 예상치 못한 라이브러리 오류."""

    default_code = "RENDER_FAILED"


class PostProcessorExecutionError(DocumentGenerationError):
    """후처리 단계 실패. 남은 체인은 실행되지 않음."""

    default_code = "POST_PROCESSOR_FAILED"


class GenerationCancelledError(DocumentGenerationError):
    """취소 신호 감지. 부분 결과는 반환하지 않음."""

    default_code = "GENERATION_CANCELLED"


class ResourceAccessDenied(ValueError):
    """
    리소스 접근 정책에 의해 차단된 fetch.

    에러가 아닌 soft denial: 변환기는 해당 asset을 생략하고 계속 진행.
    """

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Resource blocked by access policy: {url}")


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러/경고 코드 상수."""

    # === Configuration ===
    MISSING_TEMPLATE_PATH = "MISSING_TEMPLATE_PATH"
    MISSING_DATA_ITEM = "MISSING_DATA_ITEM"
    EMPTY_PLACEHOLDERS = "EMPTY_PLACEHOLDERS"
    INVALID_OPTION = "INVALID_OPTION"
    DUPLICATE_PLACEHOLDER = "DUPLICATE_PLACEHOLDER"
    RESERVED_PLACEHOLDER_NAME = "RESERVED_PLACEHOLDER_NAME"
    MULTIPLE_TERMINAL_POST_PROCESSORS = "MULTIPLE_TERMINAL_POST_PROCESSORS"
    INVALID_POLICY_ENTRY = "INVALID_POLICY_ENTRY"
    UNSUPPORTED_TEMPLATE = "UNSUPPORTED_TEMPLATE"

    # === Render ===
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"
    TEMPLATE_PARSE_ERROR = "TEMPLATE_PARSE_ERROR"
    RENDER_FAILED = "RENDER_FAILED"

    # === Post-processing ===
    POST_PROCESSOR_FAILED = "POST_PROCESSOR_FAILED"

    # === Cancellation ===
    GENERATION_CANCELLED = "GENERATION_CANCELLED"

    # === Warnings (raise 하지 않음) ===
    SLOT_NOT_FOUND = "SLOT_NOT_FOUND"
    PLACEHOLDER_RESOLUTION_FAILED = "PLACEHOLDER_RESOLUTION_FAILED"
    REMOVE_TARGET_NOT_FOUND = "REMOVE_TARGET_NOT_FOUND"
    LICENSE_NOT_FOUND = "LICENSE_NOT_FOUND"
    RESOURCE_ACCESS_DENIED = "RESOURCE_ACCESS_DENIED"
