"""
Compiled document PDF renderer.

Builds one A4 document with three sections: the original file (embedded
PDF pages or a centered raster image), the extracted text, and the chat
transcript. A failing original-file embed degrades to a placeholder page
for that section only.

Dependencies: PyMuPDF (fitz), Pillow
System role: Export stage of the compiled document pipeline
"""

import io
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import fitz  # PyMuPDF
from PIL import Image

from ocrchat.configs.export import ExportSettings
from ocrchat.core.exceptions import RenderError
from ocrchat.core.pdf_export.layout import FontSpec, TextFlow
from ocrchat.core.pdf_export.sanitizer import sanitize_for_winansi
from ocrchat.core.text_extraction.file_types import normalize_file_type

logger = logging.getLogger(__name__)

REGULAR_FONT = "helv"
BOLD_FONT = "hebo"

OCR_SECTION_TITLE = "OCR Extracted Text"
HISTORY_SECTION_TITLE = "Chat History"
NO_ORIGINAL_MESSAGE = "Original file was not available for embedding."
PDF_EMBED_ERROR_MESSAGE = "Error: Could not embed the original PDF document."
IMAGE_EMBED_ERROR_MESSAGE = "Error: Could not embed the original image document."
NO_OCR_TEXT_MESSAGE = "No OCR text extracted."
NO_HISTORY_MESSAGE = "No chat history available."

EMBEDDABLE_KINDS = {"pdf": "pdf", "png": "png", "jpg": "jpeg", "jpeg": "jpeg"}


def embeddable_kind(file_name: str | None) -> str:
    """Return 'pdf', 'png', 'jpeg' or 'unsupported' for a file name."""
    return EMBEDDABLE_KINDS.get(normalize_file_type(file_name), "unsupported")


def format_timestamp(value: str | None) -> str:
    """Render an ISO timestamp in local time, or echo it back if unparsable."""
    if not value:
        return ""
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return value
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone().strftime("%Y-%m-%d %H:%M:%S")


@dataclass(frozen=True)
class RenderResult:
    pdf_bytes: bytes
    page_count: int


class FitzCanvas:
    """Canvas over a PyMuPDF document, translating from PDF user space."""

    def __init__(self, doc: fitz.Document) -> None:
        self.doc = doc
        rect = fitz.paper_rect("a4")
        self.page_width = rect.width
        self.page_height = rect.height

    def new_page(self) -> fitz.Page:
        return self.doc.new_page(width=self.page_width, height=self.page_height)

    def draw_text(self, page: fitz.Page, x: float, y: float, text: str, font: FontSpec) -> None:
        page.insert_text(
            fitz.Point(x, self.page_height - y),
            text,
            fontname=font.name,
            fontsize=font.size,
        )

    def text_width(self, text: str, font: FontSpec) -> float:
        return fitz.get_text_length(text, fontname=font.name, fontsize=font.size)


class CompiledDocumentRenderer:
    """Render original file, extracted text and transcript into one PDF."""

    def __init__(self, settings: ExportSettings | None = None) -> None:
        settings = settings or ExportSettings()
        self.margin = settings.page_margin
        self.title_font = FontSpec(BOLD_FONT, settings.title_size, settings.title_size)
        self.body_font = FontSpec(REGULAR_FONT, settings.body_size, settings.body_line_height)
        self.header_font = FontSpec(BOLD_FONT, settings.body_size, settings.body_line_height)
        self.notice_font = FontSpec(
            REGULAR_FONT, settings.notice_size, settings.notice_line_height
        )
        self.attachment_font = FontSpec(
            REGULAR_FONT, settings.attachment_size, settings.attachment_line_height
        )

    def render(
        self,
        original_bytes: bytes | None,
        original_kind: str,
        extracted_text: str | None,
        chat_history: list[dict[str, Any]] | None,
        original_file_name: str = "",
    ) -> RenderResult:
        """
        Render the compiled document.

        Args:
            original_bytes: Source file bytes, or None if unavailable
            original_kind: 'pdf', 'png', 'jpeg' or 'unsupported'
            extracted_text: OCR / text-layer output
            chat_history: Snapshot entries {sender, content, createdAt, fileName?}
            original_file_name: User-facing name, used in the unsupported notice

        Returns:
            RenderResult: PDF bytes and page count
        """
        doc = fitz.open()
        try:
            canvas = FitzCanvas(doc)
            flow = TextFlow(canvas, self.margin)

            self._render_original(doc, flow, original_bytes, original_kind, original_file_name)
            ocr_page_index = self._render_extracted_text(flow, extracted_text)
            self._render_history(flow, chat_history, ocr_page_index)

            pdf_bytes = doc.tobytes(garbage=3, deflate=True)
            page_count = doc.page_count
        finally:
            doc.close()

        logger.info(
            f"{__name__}:render - Rendered {page_count} pages ({len(pdf_bytes)} bytes)"
        )
        return RenderResult(pdf_bytes=pdf_bytes, page_count=page_count)

    def _notice_page(self, flow: TextFlow, message: str) -> None:
        flow.start_section_page()
        flow.write(message, self.notice_font)

    def _render_original(
        self,
        doc: fitz.Document,
        flow: TextFlow,
        data: bytes | None,
        kind: str,
        file_name: str,
    ) -> None:
        if not data:
            self._notice_page(flow, NO_ORIGINAL_MESSAGE)
            return

        if kind == "pdf":
            try:
                self._embed_pdf(doc, data)
            except RenderError as e:
                logger.error(f"{__name__}:_render_original - {e}")
                self._notice_page(flow, PDF_EMBED_ERROR_MESSAGE)
        elif kind in ("png", "jpeg"):
            try:
                self._embed_image(flow, data)
            except RenderError as e:
                logger.error(f"{__name__}:_render_original - {e}")
                self._notice_page(flow, IMAGE_EMBED_ERROR_MESSAGE)
        else:
            name = sanitize_for_winansi(file_name)
            self._notice_page(
                flow,
                f"Original file ({name}) is of an unsupported type for direct embedding.",
            )

    def _embed_pdf(self, doc: fitz.Document, data: bytes) -> None:
        try:
            source = fitz.open(stream=data, filetype="pdf")
        except Exception as e:
            raise RenderError(f"Could not open original PDF: {e}", section="original") from e
        try:
            if source.page_count == 0:
                raise RenderError("Original PDF has no pages", section="original")
            doc.insert_pdf(source)
        except RenderError:
            raise
        except Exception as e:
            raise RenderError(f"Could not copy original PDF pages: {e}", section="original") from e
        finally:
            source.close()
        logger.info(f"{__name__}:_embed_pdf - Embedded {doc.page_count} pages from original PDF")

    def _embed_image(self, flow: TextFlow, data: bytes) -> None:
        try:
            with Image.open(io.BytesIO(data)) as image:
                image.verify()
                width, height = image.size
        except Exception as e:
            raise RenderError(f"Could not decode original image: {e}", section="original") from e

        canvas = flow.canvas
        scale = min(flow.content_width / width, flow.content_height / height)
        draw_width, draw_height = width * scale, height * scale
        left = (canvas.page_width - draw_width) / 2
        top = (canvas.page_height - draw_height) / 2

        page = flow.new_page()
        try:
            page.insert_image(
                fitz.Rect(left, top, left + draw_width, top + draw_height),
                stream=data,
            )
        except Exception as e:
            raise RenderError(f"Could not embed original image: {e}", section="original") from e

    def _render_extracted_text(self, flow: TextFlow, extracted_text: str | None) -> int:
        flow.start_section_page()
        ocr_page_index = flow.page_index
        flow.draw_line(OCR_SECTION_TITLE, self.title_font, self.margin)
        flow.move_down(25 - self.title_font.line_height)

        text = sanitize_for_winansi(extracted_text or NO_OCR_TEXT_MESSAGE)
        flow.write(text, self.body_font)
        return ocr_page_index

    def _render_history(
        self,
        flow: TextFlow,
        chat_history: list[dict[str, Any]] | None,
        ocr_page_index: int,
    ) -> None:
        if flow.page_index != ocr_page_index or flow.y < self.margin + 100:
            flow.start_section_page()
        else:
            flow.move_down(20)

        flow.draw_line(HISTORY_SECTION_TITLE, self.title_font, self.margin)
        flow.move_down(25 - self.title_font.line_height)

        if not chat_history:
            flow.write(NO_HISTORY_MESSAGE, self.body_font)
            return

        for entry in chat_history:
            sender = "User" if entry.get("sender") == "USER" else "AI"
            timestamp = format_timestamp(entry.get("createdAt"))
            flow.write(sanitize_for_winansi(f"{sender} [{timestamp}]:"), self.header_font)
            flow.move_down(5)

            flow.write(sanitize_for_winansi(entry.get("content")), self.body_font)

            file_name = entry.get("fileName")
            if file_name:
                flow.write(
                    f"(Attached file: {sanitize_for_winansi(file_name)})",
                    self.attachment_font,
                    x=self.margin + 10,
                    max_width=flow.content_width - 10,
                )
            flow.move_down(15)
