"""
Generation logging: generation log schema, warnings, rendered markup truncation

규칙:
- 경고 필수 컨텍스트: level, code, action_id, field_or_slot,
                    original_value, resolved_value, message
- 경고는 표준 logger와 GenerationLog 양쪽에 기록 (GenerationLog는 선택)
"""

import json
import logging
import os
import tempfile
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from docbinder.core.ids import generate_generation_id
from docbinder.domain.constants import TRUNCATION_MARKER
from docbinder.domain.errors import DocumentGenerationError, GenerationCancelledError
from docbinder.domain.schemas import GenerationLog, WarningLog

logger = logging.getLogger(__name__)

# =============================================================================
# Generation Log Management
# =============================================================================


def create_generation_log(template: str, locale: str | None = None) -> GenerationLog:
    """
    새 GenerationLog 생성.

    Args:
        template: 템플릿 경로
        locale: 생성 locale (예: de_DE)

    Returns:
        초기화된 GenerationLog
    """
    now = datetime.now(UTC).isoformat()

    return GenerationLog(
        generation_id=generate_generation_id(),
        template=template,
        started_at=now,
        result="pending",
        locale=locale,
    )


def emit_warning(
    generation_log: GenerationLog | None,
    code: str,
    action_id: str,
    field_or_slot: str,
    message: str,
    original_value: str | None = None,
    resolved_value: str | None = None,
) -> None:
    """
    경고 이벤트 기록.

    Args:
        generation_log: GenerationLog 인스턴스 (None이면 logger에만 기록)
        code: 경고 코드 (ErrorCodes)
        action_id: 액션 ID (예: fill_field, remove_field)
        field_or_slot: 필드 또는 슬롯 이름
        message: 경고 메시지
        original_value: 원래 값
        resolved_value: 해결된 값
    """
    logger.warning(f"[{code}] {action_id} {field_or_slot}: {message}")

    if generation_log is None:
        return

    warning = WarningLog(
        level="warning",
        code=code,
        action_id=action_id,
        field_or_slot=field_or_slot,
        original_value=original_value,
        resolved_value=resolved_value,
        message=message,
    )
    generation_log.warnings.append(warning)


def complete_generation_log(
    generation_log: GenerationLog,
    result: str,
    output_size: int | None = None,
    error: Exception | None = None,
) -> None:
    """
    GenerationLog 완료 처리.

    Args:
        generation_log: GenerationLog 인스턴스
        result: success, failed, cancelled
        output_size: 출력 바이트 수 (성공 시)
        error: 실패 원인 (실패/취소 시). 분류 밖 예외는 클래스 이름을 코드로 기록
    """
    finished = datetime.now(UTC)
    generation_log.finished_at = finished.isoformat()
    generation_log.result = result
    generation_log.output_size = output_size

    started = datetime.fromisoformat(generation_log.started_at)
    generation_log.elapsed_ms = int((finished - started).total_seconds() * 1000)

    if isinstance(error, DocumentGenerationError):
        generation_log.error_code = error.code
        generation_log.error_context = {k: str(v) for k, v in error.context.items()}
    elif error is not None:
        generation_log.error_code = type(error).__name__
        generation_log.error_context = {"error": str(error)}


def save_generation_log(generation_log: GenerationLog, logs_dir: Path) -> Path:
    """
    GenerationLog를 JSON 파일로 저장 (temp → rename).

    Args:
        generation_log: GenerationLog 인스턴스
        logs_dir: 로그 디렉터리 경로

    Returns:
        저장된 파일 경로
    """
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_path = logs_dir / f"generation_{generation_log.generation_id}.json"

    temp_path = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=logs_dir,
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        ) as f:
            temp_path = Path(f.name)
            json.dump(generation_log.to_dict(), f, indent=2, ensure_ascii=False)
        os.replace(temp_path, log_path)
    except BaseException:
        if temp_path is not None and temp_path.exists():
            temp_path.unlink()
        raise

    return log_path


def load_generation_log(log_path: Path) -> dict[str, Any]:
    """
    GenerationLog 파일 로드.

    Args:
        log_path: 로그 파일 경로

    Returns:
        GenerationLog 데이터 (dict)
    """
    data: dict[str, Any] = json.loads(log_path.read_text(encoding="utf-8"))
    return data


# =============================================================================
# Rendered Markup Logging
# =============================================================================


def truncate_for_log(text: str, max_length: int | None) -> str:
    """
    로그용 텍스트 자르기.

    max_length를 넘으면 앞부분 + truncation marker.
    max_length가 None이면 그대로.
    """
    if max_length is None or len(text) <= max_length:
        return text
    return text[:max_length] + TRUNCATION_MARKER


def run_tracked(
    generation_log: GenerationLog | None,
    generate: Callable[[], bytes],
) -> bytes:
    """
    생성 함수를 실행하고 결과를 GenerationLog에 기록.

    성공 → success (output_size), 취소 → cancelled, 그 외 모든 예외 → failed.
    예외는 그대로 전파.
    """
    try:
        result = generate()
    except GenerationCancelledError as e:
        if generation_log is not None:
            complete_generation_log(generation_log, "cancelled", error=e)
        raise
    except Exception as e:
        if generation_log is not None:
            complete_generation_log(generation_log, "failed", error=e)
        raise

    if generation_log is not None:
        complete_generation_log(generation_log, "success", output_size=len(result))
    return result
