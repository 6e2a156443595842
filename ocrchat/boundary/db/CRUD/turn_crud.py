"""
Turn CRUD operations.

Turn queries are always conversation-scoped and ordered oldest-first.

Dependencies: sqlalchemy, ocrchat.boundary.db.CRUD.base_crud
System role: Turn persistence queries
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ocrchat.boundary.db.CRUD.base_crud import BaseCRUD
from ocrchat.boundary.db.models.conversation_model import ConversationModel
from ocrchat.boundary.db.models.turn_model import TurnAuthor, TurnModel


class TurnCRUD(BaseCRUD[TurnModel]):
    """CRUD operations for TurnModel."""

    def __init__(self) -> None:
        super().__init__(TurnModel)

    async def list_by_conversation(
        self,
        session: AsyncSession,
        conversation_id: UUID,
        exclude_id: UUID | None = None,
    ) -> Sequence[TurnModel]:
        """
        List a conversation's turns ordered by created_at ascending.

        Args:
            session: Async database session
            conversation_id: Conversation to read
            exclude_id: Optional turn id to leave out (the turn being answered)

        Returns:
            Ordered turns
        """
        stmt = select(TurnModel).where(TurnModel.conversation_id == conversation_id)
        if exclude_id is not None:
            stmt = stmt.where(TurnModel.id != exclude_id)
        stmt = stmt.order_by(TurnModel.created_at.asc())
        result = await session.execute(stmt)
        return result.scalars().all()

    async def list_document_turns_for_owner(
        self, session: AsyncSession, owner_id: str
    ) -> Sequence[tuple[TurnModel, str]]:
        """
        List every USER turn of an owner that carries a file, newest first.

        Args:
            session: Async database session
            owner_id: Authenticated owner id

        Returns:
            (turn, conversation title) pairs
        """
        stmt = (
            select(TurnModel, ConversationModel.title)
            .join(ConversationModel, TurnModel.conversation_id == ConversationModel.id)
            .where(
                ConversationModel.owner_id == owner_id,
                TurnModel.author == TurnAuthor.USER,
                TurnModel.blob_pointer.is_not(None),
            )
            .order_by(TurnModel.created_at.desc())
        )
        result = await session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]


turn_crud = TurnCRUD()
