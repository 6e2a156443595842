"""
Image OCR backend.

Runs tesseract over raw image bytes. The decoded image is a scoped
resource: opened right before recognition and closed right after, on
success and on failure.

Dependencies: pytesseract, Pillow
System role: OCR backend of the text extraction engine
"""

import io
import logging
from collections.abc import Iterator
from contextlib import contextmanager

import pytesseract
from PIL import Image

from ocrchat.core.exceptions import ExtractionEngineError

logger = logging.getLogger(__name__)


class TesseractOcrEngine:
    """Tesseract OCR over in-memory images."""

    def __init__(self, language: str = "eng", tesseract_cmd: str | None = None) -> None:
        """
        Args:
            language: Trained tesseract language
            tesseract_cmd: Path to the tesseract binary when it is not on PATH
        """
        self.language = language
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    @contextmanager
    def session(self, file_bytes: bytes) -> Iterator[Image.Image]:
        """
        Open the image for recognition and always release it.

        Args:
            file_bytes: Encoded image bytes

        Yields:
            Image.Image: Decoded image
        """
        image = None
        try:
            image = Image.open(io.BytesIO(file_bytes))
            yield image
        finally:
            if image is not None:
                image.close()

    def recognize(self, file_bytes: bytes) -> str:
        """
        Recognize text in an image.

        Args:
            file_bytes: Encoded image bytes

        Returns:
            str: Recognized text (may be empty)

        Raises:
            ExtractionEngineError: If decoding or recognition fails
        """
        try:
            with self.session(file_bytes) as image:
                return pytesseract.image_to_string(image, lang=self.language) or ""
        except Exception as e:
            logger.error(f"{__name__}:recognize - OCR failed: {e}")
            raise ExtractionEngineError(f"OCR failed: {e}", file_type="image") from e
