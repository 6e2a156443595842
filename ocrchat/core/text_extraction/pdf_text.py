"""
PDF text-layer backend.

Reads the embedded text layer with LangChain's PyPDFLoader. Scanned,
image-only PDFs yield empty text; there is no OCR fallback.

Dependencies: langchain_community.document_loaders (pypdf)
System role: PDF backend of the text extraction engine
"""

import logging
import os
import tempfile

from langchain_community.document_loaders import PyPDFLoader

from ocrchat.core.exceptions import ExtractionEngineError

logger = logging.getLogger(__name__)


class PdfTextReader:
    """Extract the text layer of a PDF held in memory."""

    def read(self, file_bytes: bytes) -> str:
        """
        Parse a PDF and join its pages' text with newlines.

        Args:
            file_bytes: PDF bytes

        Returns:
            str: Text layer content (may be empty)

        Raises:
            ExtractionEngineError: If the PDF cannot be parsed
        """
        fd, path = tempfile.mkstemp(suffix=".pdf")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(file_bytes)
            documents = PyPDFLoader(path).load()
            return "\n".join(doc.page_content for doc in documents)
        except Exception as e:
            logger.error(f"{__name__}:read - PDF parsing failed: {e}")
            raise ExtractionEngineError(f"Failed to parse PDF: {e}", file_type="pdf") from e
        finally:
            try:
                os.remove(path)
            except OSError:
                logger.warning(f"{__name__}:read - Could not remove temp file {path}")
