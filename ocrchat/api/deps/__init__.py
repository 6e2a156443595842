"""FastAPI dependency factories."""

from ocrchat.api.deps.dependencies import (
    ServiceCache,
    get_blob_store,
    get_chat_service,
    get_compiled_document_service,
    get_completion_client,
    get_current_principal,
    get_export_service,
    get_extraction_service,
    get_renderer,
    get_service_cache,
    get_settings_dependency,
    get_text_extractor,
)

__all__ = [
    "ServiceCache",
    "get_blob_store",
    "get_chat_service",
    "get_compiled_document_service",
    "get_completion_client",
    "get_current_principal",
    "get_export_service",
    "get_extraction_service",
    "get_renderer",
    "get_service_cache",
    "get_settings_dependency",
    "get_text_extractor",
]
