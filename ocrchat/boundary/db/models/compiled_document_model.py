"""
Compiled document ORM model.

Denormalized, read-optimized snapshot of a conversation's source document
plus its chat transcript. At most one row per conversation.

Dependencies: sqlalchemy, ocrchat.boundary.db.base
System role: Compiled document cache
"""

from uuid import UUID

from sqlalchemy import JSON, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ocrchat.boundary.db.base import Base, TimestampMixin, UUIDMixin


class CompiledDocumentModel(Base, UUIDMixin, TimestampMixin):
    """
    Compiled document ORM model.

    Identity fields (source_turn_id, original_file_name, blob_pointer,
    extracted_text) are written once at creation. chat_history is fully
    replaced on every upsert.

    Attributes:
        conversation_id: Owning conversation (unique)
        source_turn_id: Turn that introduced the document
        original_file_name: User-facing file name
        extracted_text: Text extracted from the source file
        blob_pointer: Storage pathname of the source file
        chat_history: List of {sender, content, createdAt[, isSourceDocument, fileName]}
    """

    __tablename__ = "compiled_documents"

    conversation_id: Mapped[UUID] = mapped_column(
        ForeignKey("conversations.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    source_turn_id: Mapped[UUID] = mapped_column(
        ForeignKey("turns.id", ondelete="CASCADE"),
        nullable=False,
    )
    original_file_name: Mapped[str] = mapped_column(String(255), nullable=False)
    extracted_text: Mapped[str] = mapped_column(Text, nullable=False)
    blob_pointer: Mapped[str] = mapped_column(String(1024), nullable=False)
    chat_history: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    def __repr__(self) -> str:
        return (
            f"<CompiledDocumentModel(id={self.id}, "
            f"conversation_id={self.conversation_id})>"
        )
