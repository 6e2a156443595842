"""
Chat API endpoints.

Routes:
- POST /chat/message - Process one user turn
- POST /chat/new - Create a conversation explicitly
- GET /chat/list - List the caller's conversations
- GET /chat/documents - List files the caller attached to turns
- GET /chat/{conversation_id}/messages - Ordered turns of a conversation
- GET /chat/compiled-document/{conversation_id} - Compiled document view
- GET /chat/{conversation_id}/download-compiled - Compiled document as PDF

Dependencies: ocrchat.application.services
System role: Chat HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from ocrchat.api.deps import (
    get_chat_service,
    get_compiled_document_service,
    get_current_principal,
    get_export_service,
)
from ocrchat.api.error_handling import handle_service_errors
from ocrchat.application.services import (
    ChatService,
    CompiledDocumentService,
    ExportService,
)
from ocrchat.models.chat import (
    ConversationResponse,
    CreateConversationRequest,
    DocumentItemResponse,
    ProcessTurnRequest,
    ProcessTurnResponse,
    TurnResponse,
)
from ocrchat.models.compiled_document import CompiledDocumentResponse
from ocrchat.models.principal import Principal

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("/message", response_model=ProcessTurnResponse)
@handle_service_errors
async def process_message(
    request: ProcessTurnRequest,
    principal: Principal = Depends(get_current_principal),
    chat_service: ChatService = Depends(get_chat_service),
) -> ProcessTurnResponse:
    """
    Send a user message, optionally carrying an extracted document.

    A request without conversationId starts a new conversation and must
    include blobPointer.
    """
    return await chat_service.process_turn(
        principal,
        request.message,
        conversation_id=request.conversation_id,
        extracted_text=request.extracted_text,
        blob_pointer=request.blob_pointer,
        original_file_name=request.original_file_name,
    )


@router.post("/new", response_model=ConversationResponse, status_code=status.HTTP_201_CREATED)
@handle_service_errors
async def create_conversation(
    request: CreateConversationRequest,
    principal: Principal = Depends(get_current_principal),
    chat_service: ChatService = Depends(get_chat_service),
) -> ConversationResponse:
    """Create a conversation, optionally seeded with a first message."""
    return await chat_service.create_conversation(
        principal,
        title=request.title,
        initial_message=request.initial_message,
        extracted_text=request.extracted_text,
        blob_pointer=request.blob_pointer,
        original_file_name=request.original_file_name,
    )


@router.get("/list", response_model=list[ConversationResponse])
@handle_service_errors
async def list_conversations(
    principal: Principal = Depends(get_current_principal),
    chat_service: ChatService = Depends(get_chat_service),
) -> list[ConversationResponse]:
    """List the caller's conversations, most recently active first."""
    return await chat_service.list_conversations(principal)


@router.get("/documents", response_model=list[DocumentItemResponse])
@handle_service_errors
async def list_documents(
    principal: Principal = Depends(get_current_principal),
    chat_service: ChatService = Depends(get_chat_service),
) -> list[DocumentItemResponse]:
    """List the files the caller has attached to conversations."""
    return await chat_service.list_documents(principal)


@router.get("/compiled-document/{conversation_id}", response_model=CompiledDocumentResponse)
@handle_service_errors
async def get_compiled_document(
    conversation_id: UUID,
    principal: Principal = Depends(get_current_principal),
    compiled_document_service: CompiledDocumentService = Depends(
        get_compiled_document_service
    ),
) -> CompiledDocumentResponse:
    """Get the compiled document (source file, extracted text, transcript)."""
    return await compiled_document_service.get_compiled_document(principal, conversation_id)


@router.get("/{conversation_id}/messages", response_model=list[TurnResponse])
@handle_service_errors
async def get_messages(
    conversation_id: UUID,
    principal: Principal = Depends(get_current_principal),
    chat_service: ChatService = Depends(get_chat_service),
) -> list[TurnResponse]:
    """Get a conversation's turns, oldest first."""
    return await chat_service.get_turns(principal, conversation_id)


@router.get(
    "/{conversation_id}/download-compiled",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
@handle_service_errors
async def download_compiled_document(
    conversation_id: UUID,
    principal: Principal = Depends(get_current_principal),
    export_service: ExportService = Depends(get_export_service),
) -> Response:
    """Download the compiled document as a PDF attachment."""
    exported = await export_service.export_compiled_document(principal, conversation_id)
    return Response(
        content=exported.pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{exported.file_name}"'},
    )
