"""
Upload and extraction service.

Entry points ahead of the chat pipeline: store an uploaded file, and run
the text extraction engine over a stored file.

Dependencies: fastapi.concurrency, ocrchat.core.text_extraction, ocrchat.boundary.aws
System role: Upload -> OCR stage of the pipeline
"""

import logging
import uuid

from fastapi.concurrency import run_in_threadpool

from ocrchat.application.services.file_naming import blob_base_name, safe_file_name
from ocrchat.boundary.aws.s3_client import S3BlobStore
from ocrchat.core.exceptions import BadRequestError, UnsupportedFileTypeError
from ocrchat.core.text_extraction import (
    TextExtractor,
    normalize_file_type,
    resolve_extraction_kind,
    text_or_placeholder,
)
from ocrchat.models.ocr import UploadResponse
from ocrchat.models.principal import Principal

logger = logging.getLogger(__name__)


class ExtractionService:
    """Store uploads and extract their text."""

    def __init__(
        self,
        blob_store: S3BlobStore,
        extractor: TextExtractor,
        upload_prefix: str = "uploads",
    ) -> None:
        """
        Args:
            blob_store: Storage for uploaded files
            extractor: Text extraction engine
            upload_prefix: Key prefix for stored uploads
        """
        self.blob_store = blob_store
        self.extractor = extractor
        self.upload_prefix = upload_prefix.strip("/")

    async def extract_from_blob(self, blob_pointer: str, original_file_name: str) -> str:
        """
        Fetch a stored file and extract its text.

        Blank results are replaced by a readable placeholder naming the file.

        Args:
            blob_pointer: Storage pathname of the file
            original_file_name: User-facing name, used to pick the backend

        Returns:
            str: Extracted text or placeholder

        Raises:
            BlobNotFoundError: If nothing is stored at the pointer
            StoreUnavailableError: If the store is unreachable
            UnsupportedFileTypeError: If the file kind has no backend
            ExtractionEngineError: If the backend crashes
        """
        file_bytes = await run_in_threadpool(self.blob_store.get, blob_pointer)
        logger.info(
            f"{__name__}:extract_from_blob - Fetched {len(file_bytes)} bytes for "
            f"{original_file_name}"
        )
        text = await run_in_threadpool(
            self.extractor.extract, file_bytes, original_file_name
        )
        return text_or_placeholder(text, original_file_name)

    def build_blob_pointer(self, owner_id: str, file_name: str) -> str:
        """Storage key <prefix>/<owner>/<uuid>-<safe name>."""
        name = safe_file_name(blob_base_name(file_name))
        owner = safe_file_name(owner_id)
        return f"{self.upload_prefix}/{owner}/{uuid.uuid4().hex}-{name}"

    async def upload_document(
        self,
        principal: Principal,
        file_name: str,
        data: bytes,
        content_type: str | None = None,
    ) -> UploadResponse:
        """
        Store an uploaded document.

        Raises:
            BadRequestError: Missing name or empty file
            UnsupportedFileTypeError: File kind cannot be extracted
            StoreUnavailableError: If the store is unreachable
        """
        if not file_name:
            raise BadRequestError("Uploaded file has no name", field="file")
        if not data:
            raise BadRequestError("Uploaded file is empty", field="file")
        if resolve_extraction_kind(file_name) is None:
            raise UnsupportedFileTypeError(normalize_file_type(file_name))

        content_type = content_type or "application/octet-stream"
        pointer = self.build_blob_pointer(principal.owner_id, file_name)
        await run_in_threadpool(self.blob_store.put, pointer, data, content_type)

        return UploadResponse(
            blob_pointer=pointer,
            file_name=file_name,
            content_type=content_type,
            size=len(data),
        )
