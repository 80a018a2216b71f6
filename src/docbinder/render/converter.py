"""
마크업 → PDF 변환기.

MarkupConverter 프로토콜만 만족하면 교체 가능 (테스트에서는 fake 사용).
기본 구현은 WeasyPrint + FilteringResourceRetriever (render/fetcher.py).
"""

import logging
from pathlib import Path
from typing import Protocol

from docbinder.core.cancellation import CancellationToken
from docbinder.domain.schemas import GenerationLog

from .resources import ResourceAccessPolicy

logger = logging.getLogger(__name__)


class MarkupConverter(Protocol):
    """렌더링된 마크업 → 최종 출력 바이트."""

    def convert(
        self,
        text: str,
        base_path: str,
        policy: ResourceAccessPolicy | None,
        cancellation: CancellationToken,
        generation_log: GenerationLog | None = None,
    ) -> bytes: ...


def base_url_for(base_path: str) -> str:
    """상대 asset 해석용 디렉터리 URL (끝 슬래시 포함)."""
    uri = Path(base_path).resolve().as_uri()
    return uri if uri.endswith("/") else uri + "/"


class WeasyPrintConverter:
    """
    WeasyPrint HTML → PDF.

    정책에 제한이 있으면 FilteringResourceRetriever를 url_fetcher로 설치
    → 차단된 asset은 생략되고 변환은 계속됨.
    """

    def convert(
        self,
        text: str,
        base_path: str,
        policy: ResourceAccessPolicy | None,
        cancellation: CancellationToken,
        generation_log: GenerationLog | None = None,
    ) -> bytes:
        if text is None:
            raise ValueError("text parameter is mandatory")

        from weasyprint import HTML

        from .fetcher import FilteringResourceRetriever

        kwargs = {}
        if policy is not None and policy.has_restrictions:
            kwargs["url_fetcher"] = FilteringResourceRetriever(
                policy,
                generation_log=generation_log,
            )

        cancellation.raise_if_cancelled("convert")
        pdf: bytes = HTML(string=text, base_url=base_url_for(base_path), **kwargs).write_pdf()
        cancellation.raise_if_cancelled("convert")

        logger.debug(f"Converted markup to PDF ({len(pdf)} bytes)")
        return pdf
