"""Text extraction engine: image OCR and PDF text-layer backends."""

from ocrchat.core.text_extraction.extractor import (
    TextExtractor,
    placeholder_for_empty_text,
    text_or_placeholder,
)
from ocrchat.core.text_extraction.file_types import (
    ExtractionKind,
    normalize_file_type,
    resolve_extraction_kind,
)
from ocrchat.core.text_extraction.ocr_engine import TesseractOcrEngine
from ocrchat.core.text_extraction.pdf_text import PdfTextReader

__all__ = [
    "ExtractionKind",
    "PdfTextReader",
    "TesseractOcrEngine",
    "TextExtractor",
    "normalize_file_type",
    "placeholder_for_empty_text",
    "resolve_extraction_kind",
    "text_or_placeholder",
]
