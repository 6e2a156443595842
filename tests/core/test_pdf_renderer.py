"""
Test suite for the compiled document renderer.

Renders real PDFs with PyMuPDF and reads them back to check sections,
placeholders, sanitization and pagination.

System role: Verification of the export renderer
"""

import fitz
import pytest

from ocrchat.core.pdf_export import (
    CompiledDocumentRenderer,
    embeddable_kind,
    format_timestamp,
)

HISTORY = [
    {
        "sender": "USER",
        "content": "What's the total?",
        "createdAt": "2025-06-14T10:30:00+00:00",
        "isSourceDocument": True,
        "fileName": "invoice.pdf",
    },
    {"sender": "BOT", "content": "The total is $42.00.", "createdAt": "2025-06-14T10:30:05+00:00"},
]


@pytest.fixture
def renderer() -> CompiledDocumentRenderer:
    return CompiledDocumentRenderer()


def page_texts(pdf_bytes: bytes) -> list[str]:
    doc = fitz.open(stream=pdf_bytes, filetype="pdf")
    try:
        return [page.get_text() for page in doc]
    finally:
        doc.close()


class TestEmbeddableKind:
    @pytest.mark.parametrize(
        "name, kind",
        [
            ("invoice.pdf", "pdf"),
            ("scan.PNG", "png"),
            ("photo.jpg", "jpeg"),
            ("photo.jpeg", "jpeg"),
            ("scan.tiff", "unsupported"),
            ("", "unsupported"),
        ],
    )
    def test_kinds(self, name: str, kind: str) -> None:
        assert embeddable_kind(name) == kind


class TestFormatTimestamp:
    def test_unparsable_value_is_echoed(self) -> None:
        assert format_timestamp("yesterday") == "yesterday"

    def test_iso_value_is_formatted(self) -> None:
        assert format_timestamp("2025-06-14T10:30:00+00:00").startswith("2025-06-1")


class TestOriginalSection:
    """Test suite for the original document section."""

    def test_embeds_pdf_pages(self, renderer: CompiledDocumentRenderer, pdf_bytes: bytes) -> None:
        result = renderer.render(pdf_bytes, "pdf", "Total: $42.00", HISTORY, "invoice.pdf")

        texts = page_texts(result.pdf_bytes)
        assert result.page_count == 2
        assert "Total: $42.00" in texts[0]
        assert "OCR Extracted Text" in texts[1]

    def test_embeds_png_on_its_own_page(
        self, renderer: CompiledDocumentRenderer, png_bytes: bytes
    ) -> None:
        result = renderer.render(png_bytes, "png", "text", HISTORY, "scan.png")

        doc = fitz.open(stream=result.pdf_bytes, filetype="pdf")
        try:
            assert len(doc[0].get_images()) == 1
        finally:
            doc.close()

    def test_embeds_jpeg(self, renderer: CompiledDocumentRenderer, jpeg_bytes: bytes) -> None:
        result = renderer.render(jpeg_bytes, "jpeg", "text", HISTORY, "photo.jpg")

        assert result.page_count == 2

    def test_missing_bytes_render_placeholder(self, renderer: CompiledDocumentRenderer) -> None:
        result = renderer.render(None, "pdf", "text", HISTORY, "invoice.pdf")

        assert "Original file was not available for embedding." in page_texts(result.pdf_bytes)[0]

    def test_corrupt_pdf_renders_error_page_and_continues(
        self, renderer: CompiledDocumentRenderer
    ) -> None:
        result = renderer.render(b"%PDF-garbage", "pdf", "text", HISTORY, "invoice.pdf")

        texts = page_texts(result.pdf_bytes)
        assert "Could not embed the original PDF document." in texts[0]
        assert "Chat History" in "".join(texts)

    def test_corrupt_image_renders_error_page(self, renderer: CompiledDocumentRenderer) -> None:
        result = renderer.render(b"not a png", "png", "text", HISTORY, "scan.png")

        assert "Could not embed the original image document." in page_texts(result.pdf_bytes)[0]

    def test_unsupported_kind_names_the_file(self, renderer: CompiledDocumentRenderer) -> None:
        result = renderer.render(b"II*\x00", "unsupported", "text", HISTORY, "scan.tiff")

        first = page_texts(result.pdf_bytes)[0]
        assert "scan.tiff" in first
        assert "unsupported" in first


class TestTextSections:
    """Test suite for the extracted-text and chat-history sections."""

    def test_history_lists_senders_and_attachment(
        self, renderer: CompiledDocumentRenderer
    ) -> None:
        result = renderer.render(None, "pdf", "Total: $42.00", HISTORY, "invoice.pdf")

        text = "".join(page_texts(result.pdf_bytes))
        assert "Chat History" in text
        assert "User [" in text
        assert "AI [" in text
        assert "The total is $42.00." in text
        assert "(Attached file: invoice.pdf)" in text

    def test_empty_inputs_render_notices(self, renderer: CompiledDocumentRenderer) -> None:
        result = renderer.render(None, "pdf", "", [], "invoice.pdf")

        text = "".join(page_texts(result.pdf_bytes))
        assert "No OCR text extracted." in text
        assert "No chat history available." in text

    def test_unsupported_glyphs_are_sanitized(self, renderer: CompiledDocumentRenderer) -> None:
        history = [{"sender": "USER", "content": "● done ✓", "createdAt": "2025-06-14T10:30:00"}]

        result = renderer.render(None, "pdf", "● Item one\n● Item two", history, "a.pdf")

        text = "".join(page_texts(result.pdf_bytes))
        assert "●" not in text
        assert "? Item one" in text

    def test_long_text_paginates(self, renderer: CompiledDocumentRenderer) -> None:
        long_text = "\n".join(f"Line {i}: lorem ipsum dolor sit amet" for i in range(300))

        result = renderer.render(None, "pdf", long_text, HISTORY, "a.pdf")

        # placeholder page + several OCR pages + history
        assert result.page_count > 3

    def test_history_moves_to_new_page_after_ocr_overflow(
        self, renderer: CompiledDocumentRenderer
    ) -> None:
        long_text = "\n".join(f"Line {i}" for i in range(100))

        result = renderer.render(None, "pdf", long_text, HISTORY, "a.pdf")

        texts = page_texts(result.pdf_bytes)
        history_pages = [i for i, t in enumerate(texts) if "Chat History" in t]
        assert history_pages == [len(texts) - 1]
        assert "Line 99" not in texts[-1]
