"""
Chat domain schemas.

Request/response schemas for conversations and turns.

Dependencies: pydantic
System role: Chat API contracts
"""

import uuid
from datetime import datetime

from pydantic import Field, field_validator

from ocrchat.models.common import CamelModel


class ProcessTurnRequest(CamelModel):
    """One user message, optionally carrying an extracted document."""

    conversation_id: uuid.UUID | None = Field(
        default=None, description="Existing conversation; omit to start a new one"
    )
    message: str = Field(description="User message text")
    extracted_text: str | None = Field(
        default=None, alias="extractedOcrText", description="Text extracted from the file"
    )
    blob_pointer: str | None = Field(default=None, description="Storage pathname of the file")
    original_file_name: str | None = Field(
        default=None, description="User-facing file name"
    )


class TurnResponse(CamelModel):
    """Single persisted turn."""

    id: uuid.UUID
    conversation_id: uuid.UUID
    author: str = Field(alias="sender", description="USER or BOT")
    content: str
    extracted_text: str | None = Field(default=None, alias="extractedOcrText")
    blob_pointer: str | None = None
    original_file_name: str | None = None
    created_at: datetime

    @field_validator("author", mode="before")
    @classmethod
    def _author_value(cls, value):
        return getattr(value, "value", value)


class BotTurnResponse(CamelModel):
    id: uuid.UUID
    content: str


class ProcessTurnResponse(CamelModel):
    """Outcome of one processed turn."""

    conversation_id: uuid.UUID
    title: str
    user_turn: TurnResponse
    bot_turn: BotTurnResponse
    is_new_conversation: bool


class CreateConversationRequest(CamelModel):
    """Explicit conversation creation, optionally seeded with a first message."""

    title: str | None = Field(default=None, max_length=255)
    initial_message: str | None = Field(default=None, alias="initialUserMessage")
    extracted_text: str | None = Field(default=None, alias="extractedOcrText")
    blob_pointer: str | None = None
    original_file_name: str | None = None


class ConversationResponse(CamelModel):
    id: uuid.UUID
    title: str
    created_at: datetime
    updated_at: datetime


class DocumentItemResponse(CamelModel):
    """An uploaded document, identified by the turn that carried it."""

    document_id: uuid.UUID = Field(description="Id of the turn carrying the file")
    conversation_id: uuid.UUID
    file_name: str
    upload_date: datetime
    conversation_title: str | None = None
