"""
Test suite for the text extraction engine.

Covers file kind resolution, dispatch, unsupported types, scoped OCR
resource release and the caller-side placeholder.

System role: Verification of the extraction stage
"""

from unittest.mock import MagicMock, patch

import pytest

from ocrchat.core.exceptions import ExtractionEngineError, UnsupportedFileTypeError
from ocrchat.core.text_extraction import (
    ExtractionKind,
    PdfTextReader,
    TesseractOcrEngine,
    TextExtractor,
    normalize_file_type,
    placeholder_for_empty_text,
    resolve_extraction_kind,
    text_or_placeholder,
)


class TestFileKindResolution:
    """Test suite for normalize_file_type / resolve_extraction_kind."""

    @pytest.mark.parametrize(
        "declared, expected",
        [
            ("Scan.PNG", "png"),
            (".jpg", "jpg"),
            ("pdf", "pdf"),
            ("application/pdf", "pdf"),
            ("image/jpeg", "jpeg"),
            ("uploads/user-1/abc-invoice.pdf", "pdf"),
            ("", ""),
            (None, ""),
        ],
    )
    def test_normalize_file_type(self, declared, expected) -> None:
        assert normalize_file_type(declared) == expected

    @pytest.mark.parametrize("declared", ["a.png", "b.jpeg", "c.jpg", "d.tiff", "e.bmp", "f.webp"])
    def test_images_route_to_ocr(self, declared: str) -> None:
        assert resolve_extraction_kind(declared) is ExtractionKind.IMAGE

    def test_pdf_routes_to_pdf_reader(self) -> None:
        assert resolve_extraction_kind("invoice.pdf") is ExtractionKind.PDF

    @pytest.mark.parametrize("declared", ["report.docx", "notes.txt", "archive", ""])
    def test_unknown_kinds_are_unsupported(self, declared: str) -> None:
        assert resolve_extraction_kind(declared) is None


class TestTextExtractorDispatch:
    """Test suite for TextExtractor.extract()."""

    def test_image_goes_to_ocr_engine(self) -> None:
        # Arrange
        ocr_engine = MagicMock(spec=TesseractOcrEngine)
        ocr_engine.recognize.return_value = "  Hello OCR \n"
        pdf_reader = MagicMock(spec=PdfTextReader)
        extractor = TextExtractor(ocr_engine=ocr_engine, pdf_reader=pdf_reader)

        # Act
        text = extractor.extract(b"img", "photo.png")

        # Assert
        assert text == "Hello OCR"
        ocr_engine.recognize.assert_called_once_with(b"img")
        pdf_reader.read.assert_not_called()

    def test_pdf_goes_to_pdf_reader(self) -> None:
        ocr_engine = MagicMock(spec=TesseractOcrEngine)
        pdf_reader = MagicMock(spec=PdfTextReader)
        pdf_reader.read.return_value = "Total: $42.00"
        extractor = TextExtractor(ocr_engine=ocr_engine, pdf_reader=pdf_reader)

        assert extractor.extract(b"%PDF", "application/pdf") == "Total: $42.00"
        ocr_engine.recognize.assert_not_called()

    def test_unsupported_type_fails_before_any_backend_call(self) -> None:
        # Arrange
        ocr_engine = MagicMock(spec=TesseractOcrEngine)
        pdf_reader = MagicMock(spec=PdfTextReader)
        extractor = TextExtractor(ocr_engine=ocr_engine, pdf_reader=pdf_reader)

        # Act / Assert
        with pytest.raises(UnsupportedFileTypeError) as exc_info:
            extractor.extract(b"PK..", "report.docx")

        assert exc_info.value.file_type == "docx"
        ocr_engine.recognize.assert_not_called()
        pdf_reader.read.assert_not_called()

    def test_whitespace_only_result_returns_empty_string(self) -> None:
        ocr_engine = MagicMock(spec=TesseractOcrEngine)
        ocr_engine.recognize.return_value = " \n\t "
        extractor = TextExtractor(ocr_engine=ocr_engine, pdf_reader=MagicMock())

        assert extractor.extract(b"img", "blank.png") == ""

    def test_engine_failure_propagates_without_retry(self) -> None:
        ocr_engine = MagicMock(spec=TesseractOcrEngine)
        ocr_engine.recognize.side_effect = ExtractionEngineError("boom", file_type="image")
        extractor = TextExtractor(ocr_engine=ocr_engine, pdf_reader=MagicMock())

        with pytest.raises(ExtractionEngineError):
            extractor.extract(b"img", "photo.png")
        assert ocr_engine.recognize.call_count == 1


class TestTesseractOcrEngine:
    """Test suite for the scoped OCR resource."""

    def test_recognize_returns_text_and_closes_image(self, png_bytes: bytes) -> None:
        # Arrange
        engine = TesseractOcrEngine()
        image = MagicMock()

        # Act
        with patch("ocrchat.core.text_extraction.ocr_engine.Image.open", return_value=image), patch(
            "ocrchat.core.text_extraction.ocr_engine.pytesseract.image_to_string",
            return_value="Invoice 42",
        ) as image_to_string:
            text = engine.recognize(png_bytes)

        # Assert
        assert text == "Invoice 42"
        image_to_string.assert_called_once_with(image, lang="eng")
        image.close.assert_called_once()

    def test_image_released_when_recognition_raises(self, png_bytes: bytes) -> None:
        # Arrange
        engine = TesseractOcrEngine()
        image = MagicMock()

        # Act
        with patch("ocrchat.core.text_extraction.ocr_engine.Image.open", return_value=image), patch(
            "ocrchat.core.text_extraction.ocr_engine.pytesseract.image_to_string",
            side_effect=RuntimeError("tesseract crashed"),
        ):
            with pytest.raises(ExtractionEngineError):
                engine.recognize(png_bytes)

        # Assert
        image.close.assert_called_once()

    def test_undecodable_bytes_raise_engine_error(self) -> None:
        engine = TesseractOcrEngine()

        with pytest.raises(ExtractionEngineError):
            engine.recognize(b"not an image")


class TestPdfTextReader:
    """Test suite for the PDF text-layer backend."""

    def test_reads_text_layer(self, pdf_bytes: bytes) -> None:
        text = PdfTextReader().read(pdf_bytes)

        assert "Total" in text
        assert "42.00" in text

    def test_corrupt_pdf_raises_engine_error(self) -> None:
        with pytest.raises(ExtractionEngineError):
            PdfTextReader().read(b"this is not a pdf")


class TestPlaceholder:
    """Test suite for caller-side placeholder substitution."""

    def test_placeholder_names_the_file(self) -> None:
        assert (
            placeholder_for_empty_text("scan.png")
            == "[OCR was unable to extract text from scan.png]"
        )

    def test_blank_text_is_replaced(self) -> None:
        assert text_or_placeholder("   ", "scan.png").startswith("[OCR was unable")

    def test_real_text_is_kept(self) -> None:
        assert text_or_placeholder("Total: $42.00", "invoice.pdf") == "Total: $42.00"
