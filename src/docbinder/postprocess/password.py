"""PDF 비밀번호 보호 (pypdf, AES-256, 인쇄만 허용)."""

import io

from pypdf import PdfReader, PdfWriter
from pypdf.constants import UserAccessPermissions

from docbinder.core.cancellation import CancellationToken

from .base import PostProcessor

# 인쇄 + 예약 비트(7, 8, 13-32)만 설정
PRINT_ONLY_PERMISSIONS = UserAccessPermissions(0xFFFFF0C4)


class PasswordProtectPostProcessor(PostProcessor):
    """
    소유자/사용자 비밀번호로 PDF 암호화.

    Args:
        owner_password: 권한 변경용 비밀번호
        user_password: 문서 열기용 비밀번호
    """

    is_terminal = False

    def __init__(self, owner_password: str | None, user_password: str | None) -> None:
        self.owner_password = owner_password
        self.user_password = user_password

    def process(self, data: bytes, cancellation: CancellationToken) -> bytes:
        if not data:
            raise ValueError("data parameter is mandatory or needs data")
        if not self.owner_password:
            raise ValueError("owner_password parameter is mandatory or needs data")
        if not self.user_password:
            raise ValueError("user_password parameter is mandatory or needs data")

        reader = PdfReader(io.BytesIO(data))
        writer = PdfWriter(clone_from=reader)
        cancellation.raise_if_cancelled("password_protect")

        writer.encrypt(
            user_password=self.user_password,
            owner_password=self.owner_password,
            permissions_flag=PRINT_ONLY_PERMISSIONS,
            algorithm="AES-256",
        )

        output = io.BytesIO()
        writer.write(output)
        cancellation.raise_if_cancelled("password_protect")
        return output.getvalue()
