"""
Compiled document schemas.

Dependencies: pydantic
System role: Compiled document API contract
"""

import uuid
from datetime import datetime

from pydantic import Field

from ocrchat.models.common import CamelModel


class ChatHistoryItem(CamelModel):
    """One entry of the chat-history snapshot."""

    sender: str = Field(description="USER or BOT")
    content: str
    created_at: str = Field(description="ISO timestamp")
    is_source_document: bool | None = None
    file_name: str | None = None


class CompiledDocumentResponse(CamelModel):
    """Read view of a compiled document."""

    id: uuid.UUID
    conversation_id: uuid.UUID
    source_turn_id: uuid.UUID = Field(alias="sourceMessageId")
    original_file_name: str
    extracted_text: str = Field(alias="extractedOcrText")
    blob_pointer: str
    chat_history: list[ChatHistoryItem] = Field(alias="chatHistoryJson")
    created_at: datetime
    updated_at: datetime
