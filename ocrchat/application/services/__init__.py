"""Use-case services."""

from ocrchat.application.services.chat_service import ChatService
from ocrchat.application.services.compiled_document_service import CompiledDocumentService
from ocrchat.application.services.export_service import ExportedDocument, ExportService
from ocrchat.application.services.extraction_service import ExtractionService

__all__ = [
    "ChatService",
    "CompiledDocumentService",
    "ExportService",
    "ExportedDocument",
    "ExtractionService",
]
