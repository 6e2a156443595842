"""
Conversation ORM model.

A named chat thread owned by exactly one user. Owns its turns.

Dependencies: sqlalchemy, ocrchat.boundary.db.base
System role: Conversation persistence
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ocrchat.boundary.db.base import Base, TimestampMixin, UUIDMixin


class ConversationModel(Base, UUIDMixin, TimestampMixin):
    """
    Conversation ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        owner_id: Opaque id of the authenticated owner (never changes)
        title: Display title, never empty
        turns: Ordered turns of this conversation (cascading delete)
        created_at: Creation timestamp (UTC)
        updated_at: Bumped on every new turn
    """

    __tablename__ = "conversations"

    owner_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        doc="Authenticated owner id supplied by the auth layer",
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)

    turns = relationship(
        "TurnModel",
        back_populates="conversation",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="TurnModel.created_at",
    )

    def __repr__(self) -> str:
        return f"<ConversationModel(id={self.id}, owner_id={self.owner_id!r})>"
