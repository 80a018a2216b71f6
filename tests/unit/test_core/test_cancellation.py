"""
test_cancellation.py - 취소 토큰 테스트
"""

import pytest

from docbinder.core.cancellation import CancellationToken, ensure_token
from docbinder.domain.errors import ErrorCodes, GenerationCancelledError


class TestCancellationToken:
    """CancellationToken 테스트."""

    def test_not_cancelled_by_default(self):
        token = CancellationToken()

        assert not token.is_cancelled
        token.raise_if_cancelled("start")

    def test_raises_after_cancel(self):
        """취소 후 체크포인트에서 GenerationCancelledError."""
        token = CancellationToken()
        token.cancel()

        with pytest.raises(GenerationCancelledError) as exc_info:
            token.raise_if_cancelled("render")

        assert exc_info.value.code == ErrorCodes.GENERATION_CANCELLED
        assert exc_info.value.context["checkpoint"] == "render"


class TestEnsureToken:
    """ensure_token 테스트."""

    def test_returns_given_token(self):
        token = CancellationToken()
        assert ensure_token(token) is token

    def test_none_gives_fresh_token(self):
        """None이면 호출마다 새 토큰."""
        first = ensure_token(None)
        second = ensure_token(None)

        assert first is not second
        assert not first.is_cancelled
