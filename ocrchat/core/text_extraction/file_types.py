"""
File kind resolution for extraction and export.

Accepts a filename, a bare extension or a MIME type and reduces it to a
lowercase extension.
"""

from enum import Enum


class ExtractionKind(str, Enum):
    IMAGE = "image"
    PDF = "pdf"


IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "tiff", "tif", "bmp", "webp"})
PDF_EXTENSIONS = frozenset({"pdf"})

MIME_TO_EXTENSION = {
    "application/pdf": "pdf",
    "image/png": "png",
    "image/jpeg": "jpeg",
    "image/jpg": "jpg",
    "image/pjpeg": "jpeg",
    "image/tiff": "tiff",
    "image/bmp": "bmp",
    "image/x-ms-bmp": "bmp",
    "image/webp": "webp",
}


def normalize_file_type(declared: str | None) -> str:
    """
    Reduce a filename, extension or MIME type to a lowercase extension.

    Examples:
        "Scan.PNG" -> "png", ".jpg" -> "jpg", "application/pdf" -> "pdf",
        "uploads/u1/abc-invoice.pdf" -> "pdf", "" -> ""
    """
    if not declared:
        return ""
    value = declared.strip().lower()
    mime = value.split(";", 1)[0].strip()
    if mime in MIME_TO_EXTENSION:
        return MIME_TO_EXTENSION[mime]
    if "." in value:
        return value.rsplit(".", 1)[1]
    return value


def resolve_extraction_kind(declared: str | None) -> ExtractionKind | None:
    """Map a declared name/type to its extraction backend, or None if unsupported."""
    extension = normalize_file_type(declared)
    if extension in IMAGE_EXTENSIONS:
        return ExtractionKind.IMAGE
    if extension in PDF_EXTENSIONS:
        return ExtractionKind.PDF
    return None
