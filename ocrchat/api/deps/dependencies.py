"""
Dependency injection container.

Factory functions for FastAPI dependencies. Long-lived collaborators
(completion client, text extractor, renderer, blob store) live in a
ServiceCache with an explicit shutdown hook; services are built per
request around the request's database session.

Dependencies: ocrchat.configs, ocrchat.application, ocrchat.boundary, ocrchat.core
System role: DI container for service injection
"""

import logging

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from ocrchat.application.services import (
    ChatService,
    CompiledDocumentService,
    ExportService,
    ExtractionService,
)
from ocrchat.boundary.aws.s3_client import S3BlobStore
from ocrchat.boundary.db import get_async_db
from ocrchat.configs import Settings, get_settings
from ocrchat.core.completion import CompletionClient
from ocrchat.core.pdf_export import CompiledDocumentRenderer
from ocrchat.core.text_extraction import PdfTextReader, TesseractOcrEngine, TextExtractor
from ocrchat.models.principal import Principal

logger = logging.getLogger(__name__)


class ServiceCache:
    """Container for cached collaborator instances."""

    def __init__(self) -> None:
        self._completion_client: CompletionClient | None = None
        self._text_extractor: TextExtractor | None = None
        self._renderer: CompiledDocumentRenderer | None = None
        self._blob_store: S3BlobStore | None = None

    @property
    def completion_client(self) -> CompletionClient:
        """Get cached completion client."""
        if self._completion_client is None:
            llm = get_settings().llm
            self._completion_client = CompletionClient.from_settings(
                model_id=llm.model_id,
                temperature=llm.temperature,
                max_context_chars=llm.max_context_chars,
            )
        return self._completion_client

    @property
    def text_extractor(self) -> TextExtractor:
        """Get cached text extraction engine."""
        if self._text_extractor is None:
            ocr = get_settings().ocr
            self._text_extractor = TextExtractor(
                ocr_engine=TesseractOcrEngine(
                    language=ocr.language, tesseract_cmd=ocr.tesseract_cmd
                ),
                pdf_reader=PdfTextReader(),
            )
        return self._text_extractor

    @property
    def renderer(self) -> CompiledDocumentRenderer:
        """Get cached PDF renderer."""
        if self._renderer is None:
            self._renderer = CompiledDocumentRenderer(get_settings().export)
        return self._renderer

    @property
    def blob_store(self) -> S3BlobStore:
        """Get cached blob store."""
        if self._blob_store is None:
            config = get_settings().blob_store
            self._blob_store = S3BlobStore(
                bucket=config.bucket,
                region=config.region,
                endpoint_url=config.endpoint_url,
            )
        return self._blob_store

    async def aclose(self) -> None:
        """Tear down clients that hold resources, then clear the cache."""
        if self._completion_client is not None:
            await self._completion_client.aclose()
        self.clear()

    def clear(self) -> None:
        """Clear all cached instances."""
        self._completion_client = None
        self._text_extractor = None
        self._renderer = None
        self._blob_store = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_current_principal(
    request: Request,
    settings: Settings = Depends(get_settings_dependency),
) -> Principal:
    """
    Resolve the authenticated owner from the trusted auth header.

    Raises:
        HTTPException: 401 when the header is missing or blank
    """
    owner_id = (request.headers.get(settings.auth.owner_header) or "").strip()
    if not owner_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return Principal(owner_id=owner_id)


def get_completion_client(
    cache: ServiceCache = Depends(get_service_cache),
) -> CompletionClient:
    return cache.completion_client


def get_text_extractor(cache: ServiceCache = Depends(get_service_cache)) -> TextExtractor:
    return cache.text_extractor


def get_renderer(
    cache: ServiceCache = Depends(get_service_cache),
) -> CompiledDocumentRenderer:
    return cache.renderer


def get_blob_store(cache: ServiceCache = Depends(get_service_cache)) -> S3BlobStore:
    return cache.blob_store


def get_chat_service(
    db: AsyncSession = Depends(get_async_db),
    completion_client: CompletionClient = Depends(get_completion_client),
    settings: Settings = Depends(get_settings_dependency),
) -> ChatService:
    """
    Get chat service instance.

    Args:
        db: Async database session (injected via Depends)
        completion_client: Cached completion client
        settings: Application settings

    Returns:
        ChatService: Conversation orchestrator for this request
    """
    return ChatService(
        db=db,
        completion_client=completion_client,
        max_history_turns=settings.llm.max_history_turns,
    )


def get_compiled_document_service(
    db: AsyncSession = Depends(get_async_db),
) -> CompiledDocumentService:
    """Get compiled document service instance."""
    return CompiledDocumentService(db=db)


def get_export_service(
    db: AsyncSession = Depends(get_async_db),
    blob_store: S3BlobStore = Depends(get_blob_store),
    renderer: CompiledDocumentRenderer = Depends(get_renderer),
) -> ExportService:
    """Get export service instance."""
    return ExportService(db=db, blob_store=blob_store, renderer=renderer)


def get_extraction_service(
    blob_store: S3BlobStore = Depends(get_blob_store),
    extractor: TextExtractor = Depends(get_text_extractor),
    settings: Settings = Depends(get_settings_dependency),
) -> ExtractionService:
    """Get upload / extraction service instance."""
    return ExtractionService(
        blob_store=blob_store,
        extractor=extractor,
        upload_prefix=settings.blob_store.upload_prefix,
    )
