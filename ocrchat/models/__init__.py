"""API request/response schemas."""

from ocrchat.models.chat import (
    BotTurnResponse,
    ConversationResponse,
    CreateConversationRequest,
    DocumentItemResponse,
    ProcessTurnRequest,
    ProcessTurnResponse,
    TurnResponse,
)
from ocrchat.models.common import CamelModel, ErrorResponse
from ocrchat.models.compiled_document import ChatHistoryItem, CompiledDocumentResponse
from ocrchat.models.health import HealthResponse
from ocrchat.models.ocr import ExtractTextRequest, ExtractTextResponse, UploadResponse
from ocrchat.models.principal import Principal

__all__ = [
    "BotTurnResponse",
    "CamelModel",
    "ChatHistoryItem",
    "CompiledDocumentResponse",
    "ConversationResponse",
    "CreateConversationRequest",
    "DocumentItemResponse",
    "ErrorResponse",
    "ExtractTextRequest",
    "ExtractTextResponse",
    "HealthResponse",
    "Principal",
    "ProcessTurnRequest",
    "ProcessTurnResponse",
    "TurnResponse",
    "UploadResponse",
]
