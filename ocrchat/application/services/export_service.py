"""
Compiled document export service.

Fetches the compiled document, re-reads the original file from the blob
store (tolerating failures) and renders the PDF off the event loop.

Dependencies: fastapi.concurrency, ocrchat.core.pdf_export, ocrchat.boundary
System role: Export stage of the compiled document pipeline
"""

import logging
from dataclasses import dataclass
from uuid import UUID

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from ocrchat.application.services.access import get_owned_conversation
from ocrchat.application.services.file_naming import export_file_name
from ocrchat.boundary.aws.s3_client import S3BlobStore
from ocrchat.boundary.db.CRUD.compiled_document_crud import compiled_document_crud
from ocrchat.core.exceptions import CompiledDocumentNotFoundError, OcrChatException
from ocrchat.core.pdf_export import CompiledDocumentRenderer, embeddable_kind
from ocrchat.models.principal import Principal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportedDocument:
    file_name: str
    pdf_bytes: bytes
    page_count: int


class ExportService:
    """Render compiled documents to downloadable PDFs."""

    def __init__(
        self,
        db: AsyncSession,
        blob_store: S3BlobStore,
        renderer: CompiledDocumentRenderer,
    ) -> None:
        self.db = db
        self.blob_store = blob_store
        self.renderer = renderer

    async def _fetch_original(self, blob_pointer: str, conversation_id: UUID) -> bytes | None:
        try:
            return await run_in_threadpool(self.blob_store.get, blob_pointer)
        except OcrChatException as e:
            logger.warning(
                f"{__name__}:_fetch_original - Original file unavailable for "
                f"{conversation_id}: {e}"
            )
            return None

    async def export_compiled_document(
        self, principal: Principal, conversation_id: UUID
    ) -> ExportedDocument:
        """
        Render a conversation's compiled document as a PDF.

        Args:
            principal: Authenticated caller
            conversation_id: Conversation to export

        Returns:
            ExportedDocument: Download name, PDF bytes and page count

        Raises:
            ConversationNotFoundError: Unknown conversation id
            ForbiddenError: Conversation owned by someone else
            CompiledDocumentNotFoundError: No compiled document yet
        """
        await get_owned_conversation(self.db, principal, conversation_id)
        document = await compiled_document_crud.get_by_conversation_id(
            self.db, conversation_id
        )
        if document is None:
            raise CompiledDocumentNotFoundError(conversation_id)

        original_bytes = await self._fetch_original(document.blob_pointer, conversation_id)

        kind = embeddable_kind(document.original_file_name)
        if kind == "unsupported":
            kind = embeddable_kind(document.blob_pointer)

        result = await run_in_threadpool(
            self.renderer.render,
            original_bytes,
            kind,
            document.extracted_text,
            document.chat_history,
            document.original_file_name,
        )

        file_name = export_file_name(document.original_file_name, str(conversation_id))
        logger.info(
            f"{__name__}:export_compiled_document - Exported {conversation_id} as "
            f"{file_name} ({result.page_count} pages)"
        )
        return ExportedDocument(
            file_name=file_name,
            pdf_bytes=result.pdf_bytes,
            page_count=result.page_count,
        )
