"""
문서 분류 메타데이터 (pypdf).

기록 항목:
- /Subject: "Classification: <분류>"
- /Keywords: "classification=<분류 소문자>"
- /Classification: <분류>
- /SI_DATA: 분류 라벨 (Information Protection 호환 문자열)
- 추가 메타데이터 (예약 키 제외)
"""

import io
from enum import Enum

from pypdf import PdfReader, PdfWriter

from docbinder.core.cancellation import CancellationToken

from .base import PostProcessor


class Classification(str, Enum):
    """문서 분류 등급."""

    CONFIDENTIAL = "Confidential"
    INTERNAL = "Internal"
    PUBLIC = "Public"


RESERVED_METADATA_KEYS = frozenset({"Classification", "SI_DATA"})

SI_DATA_VALUES = {
    Classification.CONFIDENTIAL: (
        "DataClass%2b9d401f75-6608-41d3-bd1f-efe1542cdc01=I%3D9d401f75-6608-41d3-bd1f-efe1542cdc01"
        "%26N%3DConfidential%26V%3D1.3%26U%3DSystem%26D%3DMidalaNET%26A%3DAssociated%26H%3DFalse"
    ),
    Classification.INTERNAL: (
        "DataClass%2b5e2ccede-aa3d-4eba-b8ed-43e293c7fd2e=I%3d5e2ccede-aa3d-4eba-b8ed-43e293c7fd2e"
        "%26N%3dInternal%26V%3d1.3%26U%3dSystem%26D%3DMidalaNET%26A%3DAssociated%26H%3DFalse"
    ),
    Classification.PUBLIC: (
        "DataClass%2b304a34c9-5b17-4e2a-bdc3-dec6a43f35e7=I%3d304a34c9-5b17-4e2a-bdc3-dec6a43f35e7"
        "%26N%3dPublic%26V%3d1.3%26U%3dSystem%26D%3DMidalaNET%26A%3DAssociated%26H%3DFalse"
    ),
}


class DocumentClassifierPostProcessor(PostProcessor):
    """
    PDF 정보 사전에 분류 메타데이터 기록.

    Args:
        classification: Classification (또는 값 문자열)
        additional_values: 추가 메타데이터 (키는 공백 불가, 예약 키 불가)
    """

    is_terminal = False

    def __init__(
        self,
        classification: Classification | str | None,
        additional_values: dict[str, str] | None = None,
    ) -> None:
        self.classification = Classification(classification) if classification else None
        self.additional_values = additional_values

    def _metadata(self) -> dict[str, str]:
        if self.classification is None:
            raise ValueError("classification parameter is mandatory")

        cls = self.classification.value
        metadata = {
            "/Subject": f"Classification: {cls}",
            "/Keywords": f"classification={cls.lower()}",
            "/Classification": cls,
            "/SI_DATA": SI_DATA_VALUES[self.classification],
        }

        for key, value in (self.additional_values or {}).items():
            if not key or not key.strip():
                raise ValueError("Metadata key cannot be null or empty.")
            if key in RESERVED_METADATA_KEYS:
                raise ValueError(f"The metadata key '{key}' is reserved and cannot be overridden.")
            metadata[f"/{key}"] = value or ""

        return metadata

    def process(self, data: bytes, cancellation: CancellationToken) -> bytes:
        if not data:
            raise ValueError("data parameter is mandatory or needs data")

        metadata = self._metadata()
        cancellation.raise_if_cancelled("document_classifier")

        reader = PdfReader(io.BytesIO(data))
        writer = PdfWriter(clone_from=reader)
        writer.add_metadata(metadata)

        output = io.BytesIO()
        writer.write(output)
        cancellation.raise_if_cancelled("document_classifier")
        return output.getvalue()
