"""Compiled document export: sanitization, layout and PDF rendering."""

from ocrchat.core.pdf_export.layout import Canvas, FontSpec, TextFlow
from ocrchat.core.pdf_export.renderer import (
    CompiledDocumentRenderer,
    FitzCanvas,
    RenderResult,
    embeddable_kind,
    format_timestamp,
)
from ocrchat.core.pdf_export.sanitizer import sanitize_for_winansi

__all__ = [
    "Canvas",
    "CompiledDocumentRenderer",
    "FitzCanvas",
    "FontSpec",
    "RenderResult",
    "TextFlow",
    "embeddable_kind",
    "format_timestamp",
    "sanitize_for_winansi",
]
