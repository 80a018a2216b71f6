"""
PKCS#12(PFX) 디지털 서명 (pyHanko).

터미널 processor: 서명 이후의 수정은 서명을 무효화 → 항상 체인 마지막.
서명은 증분 업데이트(incremental update)로 기록 → 원본 리비전 보존.
"""

import io
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from pyhanko.pdf_utils.incremental_writer import IncrementalPdfFileWriter
from pyhanko.sign import fields, signers

from docbinder.core.cancellation import CancellationToken

from .base import PostProcessor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PdfSignatureOptions:
    """
    서명 옵션.

    Attributes:
        pfx_password: PFX 비밀번호 (없으면 빈 문자열)
        field_name: 서명 필드 이름
        digest_algorithm: 해시 알고리즘 (sha256 등)
        visible: 페이지에 서명 박스 표시 여부
        page_number: 서명 박스 페이지 (1부터)
        x, y, width, height: 서명 박스 위치/크기 (pt, 좌하단 원점)
        reason, location: 서명 사유/장소
        existing_pdf_password: 입력 PDF가 암호화된 경우 비밀번호
    """

    pfx_password: str = ""
    field_name: str = "Signature1"
    digest_algorithm: str = "sha256"
    visible: bool = False
    page_number: int = 1
    x: float = 36
    y: float = 36
    width: float = 200
    height: float = 60
    reason: str | None = None
    location: str | None = None
    existing_pdf_password: str | None = None


def load_pfx_signer(pfx_bytes: bytes, password: str) -> signers.SimpleSigner:
    """
    PFX 바이트 → pyHanko SimpleSigner.

    Raises:
        ValueError: 개인키/인증서를 읽을 수 없음
    """
    # load_pkcs12는 파일 경로를 받음 → 임시 파일 경유
    fd, temp_name = tempfile.mkstemp(suffix=".pfx")
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(pfx_bytes)
        signer = signers.SimpleSigner.load_pkcs12(
            str(temp_path),
            passphrase=password.encode("utf-8") if password else None,
        )
    finally:
        temp_path.unlink(missing_ok=True)

    if signer is None:
        raise ValueError("No private key entry found in the PFX.")
    return signer


class PfxSignaturePostProcessor(PostProcessor):
    """
    PFX 인증서로 detached CMS 서명.

    Args:
        pfx_bytes: PKCS#12 바이트
        options: PdfSignatureOptions

    Raises:
        ValueError: pfx_bytes가 비어 있음
    """

    is_terminal = True

    def __init__(self, pfx_bytes: bytes, options: PdfSignatureOptions | None = None) -> None:
        if pfx_bytes is None:
            raise ValueError("pfx_bytes parameter is mandatory")
        if len(pfx_bytes) == 0:
            raise ValueError("PFX bytes are empty.")
        self._pfx_bytes = pfx_bytes
        self.options = options or PdfSignatureOptions()

    def _field_spec(self) -> fields.SigFieldSpec | None:
        if not self.options.visible:
            return None
        o = self.options
        return fields.SigFieldSpec(
            sig_field_name=o.field_name,
            on_page=o.page_number - 1,
            box=(int(o.x), int(o.y), int(o.x + o.width), int(o.y + o.height)),
        )

    def process(self, data: bytes, cancellation: CancellationToken) -> bytes:
        if not data:
            raise ValueError("PDF data is empty.")

        signer = load_pfx_signer(self._pfx_bytes, self.options.pfx_password)
        cancellation.raise_if_cancelled("pfx_signature")

        writer = IncrementalPdfFileWriter(io.BytesIO(data))
        if self.options.existing_pdf_password:
            writer.encrypt(self.options.existing_pdf_password)

        metadata = signers.PdfSignatureMetadata(
            field_name=self.options.field_name,
            md_algorithm=self.options.digest_algorithm.lower(),
            reason=self.options.reason,
            location=self.options.location,
        )
        cancellation.raise_if_cancelled("pfx_signature")

        output = io.BytesIO()
        signers.sign_pdf(
            writer,
            metadata,
            signer=signer,
            new_field_spec=self._field_spec(),
            output=output,
        )
        logger.info(f"Signed PDF with field {self.options.field_name}")
        return output.getvalue()
