"""
Conversation CRUD operations.

Dependencies: sqlalchemy, ocrchat.boundary.db.CRUD.base_crud
System role: Conversation persistence queries
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ocrchat.boundary.db.base import utcnow
from ocrchat.boundary.db.CRUD.base_crud import BaseCRUD
from ocrchat.boundary.db.models.conversation_model import ConversationModel


class ConversationCRUD(BaseCRUD[ConversationModel]):
    """CRUD operations for ConversationModel."""

    def __init__(self) -> None:
        super().__init__(ConversationModel)

    async def list_by_owner(
        self, session: AsyncSession, owner_id: str
    ) -> Sequence[ConversationModel]:
        """
        List an owner's conversations, most recently active first.

        Args:
            session: Async database session
            owner_id: Authenticated owner id

        Returns:
            Conversations ordered by updated_at descending
        """
        stmt = (
            select(ConversationModel)
            .where(ConversationModel.owner_id == owner_id)
            .order_by(ConversationModel.updated_at.desc())
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def touch(
        self, session: AsyncSession, conversation: ConversationModel
    ) -> ConversationModel:
        """Bump updated_at after a new turn."""
        conversation.updated_at = utcnow()
        await session.flush()
        return conversation


conversation_crud = ConversationCRUD()
