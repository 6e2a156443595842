"""API routers."""

from ocrchat.api.routers.chat import router as chat_router
from ocrchat.api.routers.documents import router as documents_router
from ocrchat.api.routers.health import router as health_router
from ocrchat.api.routers.ocr import router as ocr_router

__all__ = ["chat_router", "documents_router", "health_router", "ocr_router"]
