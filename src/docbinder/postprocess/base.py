"""
Post-processor chain: 출력 바이트에 대한 순서 있는 변환.

규칙:
- 비터미널 processor는 등록 순서대로 실행
- 터미널 processor(서명 등)는 최대 1개, 항상 마지막에 실행
- 터미널이 2개 이상이면 아무것도 실행하기 전에 ConfigurationError
- 단계 실패는 체인 중단 (단계별 복구 없음)
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable

from docbinder.core.cancellation import CancellationToken, ensure_token
from docbinder.domain.errors import (
    ConfigurationError,
    DocumentGenerationError,
    ErrorCodes,
    PostProcessorExecutionError,
)

logger = logging.getLogger(__name__)


class PostProcessor(ABC):
    """
    바이트 → 바이트 변환 단계.

    Attributes:
        is_terminal: True면 체인의 마지막에 실행 (이후 수정이 서명을 깨뜨리는 경우)
    """

    is_terminal: bool = False

    @abstractmethod
    def process(self, data: bytes, cancellation: CancellationToken) -> bytes:
        """
        변환 실행.

        Args:
            data: 입력 문서 바이트
            cancellation: 취소 토큰

        Returns:
            변환된 문서 바이트
        """

    @property
    def name(self) -> str:
        return type(self).__name__


def order_post_processors(processors: Iterable[PostProcessor] | None) -> list[PostProcessor]:
    """
    실행 순서 결정: 비터미널(등록 순서) + 터미널(최대 1개).

    Raises:
        ConfigurationError: 터미널 processor가 2개 이상
    """
    items = list(processors or ())
    terminal = [p for p in items if p.is_terminal]
    normal = [p for p in items if not p.is_terminal]

    if len(terminal) > 1:
        raise ConfigurationError(
            ErrorCodes.MULTIPLE_TERMINAL_POST_PROCESSORS,
            count=len(terminal),
            processors=[p.name for p in terminal],
            message="Only one terminal post-processor is allowed (typically the signer).",
        )

    return normal + terminal


def run_post_processors(
    data: bytes,
    processors: Iterable[PostProcessor] | None,
    cancellation: CancellationToken | None = None,
) -> bytes:
    """
    체인 실행.

    Args:
        data: 생성된 문서 바이트
        processors: 등록 순서의 processor 목록
        cancellation: 취소 토큰 (단계 사이마다 확인)

    Returns:
        최종 문서 바이트

    Raises:
        ConfigurationError: 터미널 processor 중복 (실행 전)
        PostProcessorExecutionError: 단계 실패
        GenerationCancelledError: 취소
    """
    token = ensure_token(cancellation)
    ordered = order_post_processors(processors)

    for index, processor in enumerate(ordered):
        token.raise_if_cancelled(f"post_processor:{index}")
        logger.debug(f"Running post-processor {index}: {processor.name}")
        try:
            data = processor.process(data, token)
        except DocumentGenerationError:
            raise
        except Exception as e:
            raise PostProcessorExecutionError(
                ErrorCodes.POST_PROCESSOR_FAILED,
                processor=processor.name,
                index=index,
                reason=str(e),
            ) from e

    return data
