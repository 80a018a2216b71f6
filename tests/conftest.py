"""
Pytest fixtures for docbinder tests.

- reportlab으로 AcroForm 템플릿 / 단순 PDF 생성
- WeasyPrint 대신 호출을 기록하는 fake 변환기
- cryptography로 자체 서명 PFX 생성
"""

import io
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from pathlib import Path

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.serialization import pkcs12
from cryptography.x509.oid import NameOID
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from docbinder.core.cancellation import CancellationToken
from docbinder.core.logging import create_generation_log
from docbinder.domain.schemas import GenerationLog, NumericAndTextValue
from docbinder.render.resources import ResourceAccessPolicy

# =============================================================================
# PDF Fixtures
# =============================================================================


def _build_pdf(text: str) -> bytes:
    buffer = io.BytesIO()
    c = canvas.Canvas(buffer, pagesize=A4)
    c.drawString(72, 760, text)
    c.showPage()
    c.save()
    return buffer.getvalue()


@pytest.fixture
def make_pdf() -> Callable[[str], bytes]:
    """텍스트 한 줄짜리 PDF 바이트 생성기."""
    return _build_pdf


@pytest.fixture
def simple_pdf() -> bytes:
    """단순 1페이지 PDF."""
    return _build_pdf("Hello docbinder")


@pytest.fixture
def form_template(tmp_path: Path) -> Path:
    """
    AcroForm 템플릿.

    텍스트 필드: Customer, Total, Issued, Weight, Notes
    체크박스: Paid
    """
    template_path = tmp_path / "invoice_form.pdf"
    c = canvas.Canvas(str(template_path), pagesize=A4)
    form = c.acroForm

    y = 760
    for name in ("Customer", "Total", "Issued", "Weight", "Notes"):
        c.drawString(72, y + 5, name)
        form.textfield(
            name=name,
            x=180,
            y=y,
            width=300,
            height=20,
            borderStyle="inset",
            forceBorder=True,
        )
        y -= 40

    c.drawString(72, y + 5, "Paid")
    form.checkbox(name="Paid", x=180, y=y, size=16, buttonStyle="check", checked=False)

    c.showPage()
    c.save()
    return template_path


# =============================================================================
# Data Item Fixtures
# =============================================================================


@dataclass
class InvoiceLine:
    name: str
    quantity: int
    price: Decimal


@dataclass
class Invoice:
    customer: str
    total: Decimal
    issued: datetime
    weight: NumericAndTextValue
    paid: bool
    notes: str = ""
    lines: list[InvoiceLine] = field(default_factory=list)


@pytest.fixture
def invoice() -> Invoice:
    """정상 데이터 아이템."""
    return Invoice(
        customer="ACME GmbH",
        total=Decimal("1234.56"),
        issued=datetime(2024, 1, 15, 14, 30),
        weight=NumericAndTextValue(Decimal("12.5"), "kg"),
        paid=True,
        notes="internal",
        lines=[
            InvoiceLine("Bolts", 10, Decimal("1.50")),
            InvoiceLine("Nuts", 20, Decimal("0.75")),
            InvoiceLine("Washers", 5, Decimal("0.20")),
        ],
    )


# =============================================================================
# Markup Fixtures
# =============================================================================


@dataclass
class ConvertCall:
    text: str
    base_path: str
    policy: ResourceAccessPolicy | None


class FakeConverter:
    """호출을 기록하고 고정 PDF를 반환하는 변환기."""

    def __init__(self, output: bytes | None = None, error: Exception | None = None) -> None:
        self.output = output if output is not None else _build_pdf("converted")
        self.error = error
        self.calls: list[ConvertCall] = []

    def convert(
        self,
        text: str,
        base_path: str,
        policy: ResourceAccessPolicy | None,
        cancellation: CancellationToken,
        generation_log: GenerationLog | None = None,
    ) -> bytes:
        self.calls.append(ConvertCall(text, base_path, policy))
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def fake_converter() -> FakeConverter:
    return FakeConverter()


@pytest.fixture
def make_converter() -> type[FakeConverter]:
    """output / error를 지정한 fake 변환기 생성용."""
    return FakeConverter


@pytest.fixture
def write_template(tmp_path: Path) -> Callable[[str, str], Path]:
    """이름/내용으로 마크업 템플릿 파일 생성."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def generation_log() -> GenerationLog:
    return create_generation_log("test-template", locale="en_US")


# =============================================================================
# Signature Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def pfx_password() -> str:
    return "pfx-secret"


@pytest.fixture(scope="session")
def pfx_bytes(pfx_password: str) -> bytes:
    """자체 서명 인증서 + RSA 키 PKCS#12."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    name = x509.Name([
        x509.NameAttribute(NameOID.COMMON_NAME, "docbinder test signer"),
        x509.NameAttribute(NameOID.ORGANIZATION_NAME, "docbinder"),
    ])
    now = datetime.now(UTC)
    cert = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))
        .not_valid_after(now + timedelta(days=30))
        .add_extension(
            x509.KeyUsage(
                digital_signature=True,
                content_commitment=True,
                key_encipherment=False,
                data_encipherment=False,
                key_agreement=False,
                key_cert_sign=False,
                crl_sign=False,
                encipher_only=False,
                decipher_only=False,
            ),
            critical=True,
        )
        .sign(key, hashes.SHA256())
    )
    return pkcs12.serialize_key_and_certificates(
        b"signer",
        key,
        cert,
        None,
        serialization.BestAvailableEncryption(pfx_password.encode()),
    )
