"""
Cooperative cancellation.

생성 호출은 체크포인트마다 raise_if_cancelled()를 호출 → 취소 시 즉시 중단,
부분 결과는 반환하지 않음.
"""

import threading

from docbinder.domain.errors import ErrorCodes, GenerationCancelledError


class CancellationToken:
    """
    스레드 간 공유 가능한 취소 신호.

    Usage:
        token = CancellationToken()
        threading.Thread(target=lambda: generator.generate(config, cancellation=token)).start()
        token.cancel()
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self, checkpoint: str = "") -> None:
        """
        취소되었으면 GenerationCancelledError.

        Args:
            checkpoint: 로그/에러 컨텍스트용 체크포인트 이름
        """
        if self._event.is_set():
            raise GenerationCancelledError(
                ErrorCodes.GENERATION_CANCELLED,
                checkpoint=checkpoint,
            )


def ensure_token(token: CancellationToken | None) -> CancellationToken:
    """None → 호출 전용 새 토큰 (외부에서 취소할 수 없음)."""
    return token if token is not None else CancellationToken()
