"""
Turn ORM model.

One USER or BOT utterance in a conversation. Turns are immutable once
written; a conversation's turns are ordered by created_at.

Dependencies: sqlalchemy, ocrchat.boundary.db.base
System role: Source of truth for chat content
"""

import enum
from uuid import UUID

from sqlalchemy import Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ocrchat.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class TurnAuthor(str, enum.Enum):
    """Closed set of turn authors."""

    USER = "USER"
    BOT = "BOT"


class TurnModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Turn ORM model.

    BOT turns never carry extracted_text, blob_pointer or original_file_name.

    Attributes:
        id: UUID primary key
        conversation_id: Parent conversation (cascade delete)
        author: USER or BOT
        content: Message text
        extracted_text: Text extracted from the attached file, if any
        blob_pointer: Internal storage pathname of the attached file
        original_file_name: User-facing name of the attached file
        created_at: Creation timestamp (UTC)
    """

    __tablename__ = "turns"

    conversation_id: Mapped[UUID] = mapped_column(
        ForeignKey("conversations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author: Mapped[TurnAuthor] = mapped_column(
        Enum(TurnAuthor, native_enum=False, length=8, name="turn_author"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    extracted_text: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    blob_pointer: Mapped[str | None] = mapped_column(String(1024), nullable=True, default=None)
    original_file_name: Mapped[str | None] = mapped_column(
        String(255), nullable=True, default=None
    )

    conversation = relationship("ConversationModel", back_populates="turns")

    @property
    def is_document_turn(self) -> bool:
        """True when the turn carries both a blob pointer and extracted text."""
        return self.blob_pointer is not None and self.extracted_text is not None

    def __repr__(self) -> str:
        return f"<TurnModel(id={self.id}, author={self.author.value})>"
