"""
Text extraction engine.

Dispatches file bytes to the OCR backend (images) or the PDF text-layer
backend (pdf) based on the declared filename, extension or MIME type.
Unsupported kinds fail before any backend is touched. No retries.

Dependencies: ocrchat.core.text_extraction backends
System role: First stage of the upload -> chat pipeline
"""

import logging

from ocrchat.core.exceptions import UnsupportedFileTypeError
from ocrchat.core.text_extraction.file_types import (
    ExtractionKind,
    normalize_file_type,
    resolve_extraction_kind,
)
from ocrchat.core.text_extraction.ocr_engine import TesseractOcrEngine
from ocrchat.core.text_extraction.pdf_text import PdfTextReader

logger = logging.getLogger(__name__)


def placeholder_for_empty_text(file_name: str | None) -> str:
    """Human-readable stand-in for a file that yielded no text."""
    return f"[OCR was unable to extract text from {file_name or 'the uploaded file'}]"


def text_or_placeholder(text: str | None, file_name: str | None) -> str:
    """Return text unless it is blank, in which case return the placeholder."""
    if text and text.strip():
        return text
    return placeholder_for_empty_text(file_name)


class TextExtractor:
    """Route file bytes to the matching extraction backend."""

    def __init__(
        self,
        ocr_engine: TesseractOcrEngine | None = None,
        pdf_reader: PdfTextReader | None = None,
    ) -> None:
        self._ocr_engine = ocr_engine or TesseractOcrEngine()
        self._pdf_reader = pdf_reader or PdfTextReader()

    def extract(self, file_bytes: bytes, declared_name_or_type: str | None) -> str:
        """
        Extract plain text from a file.

        Args:
            file_bytes: Raw file content
            declared_name_or_type: Filename, extension or MIME type

        Returns:
            str: Extracted text, stripped; empty when nothing was recognized

        Raises:
            UnsupportedFileTypeError: If the kind has no backend
            ExtractionEngineError: If the backend crashes
        """
        kind = resolve_extraction_kind(declared_name_or_type)
        if kind is None:
            raise UnsupportedFileTypeError(normalize_file_type(declared_name_or_type))

        if kind is ExtractionKind.IMAGE:
            text = self._ocr_engine.recognize(file_bytes)
        else:
            text = self._pdf_reader.read(file_bytes)

        text = text.strip()
        logger.info(
            f"{__name__}:extract - {kind.value} extraction produced {len(text)} chars"
        )
        return text
