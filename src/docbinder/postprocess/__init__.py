"""
Post-processing layer: 생성된 문서 바이트 변환 체인.

역할:
- 비밀번호 보호, 분류 메타데이터, 디지털 서명 (터미널)
"""

from .base import PostProcessor, order_post_processors, run_post_processors
from .classifier import Classification, DocumentClassifierPostProcessor
from .password import PasswordProtectPostProcessor
from .signature import PdfSignatureOptions, PfxSignaturePostProcessor

__all__ = [
    "PostProcessor",
    "order_post_processors",
    "run_post_processors",
    "PasswordProtectPostProcessor",
    "Classification",
    "DocumentClassifierPostProcessor",
    "PdfSignatureOptions",
    "PfxSignaturePostProcessor",
]
