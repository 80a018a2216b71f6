"""
test_classifier.py - 문서 분류 메타데이터 post-processor 테스트 (pypdf)
"""

import io

import pytest
from pypdf import PdfReader

from docbinder.core.cancellation import CancellationToken
from docbinder.postprocess import Classification, DocumentClassifierPostProcessor
from docbinder.postprocess.classifier import SI_DATA_VALUES


def _metadata(pdf_bytes: bytes) -> dict:
    return dict(PdfReader(io.BytesIO(pdf_bytes)).metadata or {})


class TestDocumentClassifier:
    """DocumentClassifierPostProcessor 테스트."""

    def test_writes_classification(self, simple_pdf):
        processor = DocumentClassifierPostProcessor(Classification.CONFIDENTIAL)

        metadata = _metadata(processor.process(simple_pdf, CancellationToken()))

        assert metadata["/Subject"] == "Classification: Confidential"
        assert metadata["/Keywords"] == "classification=confidential"
        assert metadata["/Classification"] == "Confidential"
        assert metadata["/SI_DATA"] == SI_DATA_VALUES[Classification.CONFIDENTIAL]

    def test_accepts_string_value(self, simple_pdf):
        processor = DocumentClassifierPostProcessor("Internal")

        metadata = _metadata(processor.process(simple_pdf, CancellationToken()))

        assert metadata["/Classification"] == "Internal"

    def test_additional_values(self, simple_pdf):
        processor = DocumentClassifierPostProcessor(
            Classification.PUBLIC,
            {"Department": "Finance", "Owner": ""},
        )

        metadata = _metadata(processor.process(simple_pdf, CancellationToken()))

        assert metadata["/Department"] == "Finance"
        assert metadata["/Owner"] == ""
        assert metadata["/Classification"] == "Public"

    @pytest.mark.parametrize("key", ["Classification", "SI_DATA"])
    def test_reserved_keys_rejected(self, simple_pdf, key):
        processor = DocumentClassifierPostProcessor(Classification.PUBLIC, {key: "override"})

        with pytest.raises(ValueError, match="reserved"):
            processor.process(simple_pdf, CancellationToken())

    def test_blank_key_rejected(self, simple_pdf):
        processor = DocumentClassifierPostProcessor(Classification.PUBLIC, {" ": "x"})

        with pytest.raises(ValueError):
            processor.process(simple_pdf, CancellationToken())

    def test_unknown_classification(self):
        with pytest.raises(ValueError):
            DocumentClassifierPostProcessor("Secret")

    def test_empty_data_rejected(self):
        with pytest.raises(ValueError):
            DocumentClassifierPostProcessor(Classification.PUBLIC).process(b"", CancellationToken())
