"""
Compiled document CRUD operations.

Dependencies: sqlalchemy, ocrchat.boundary.db.CRUD.base_crud
System role: Compiled document persistence queries
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ocrchat.boundary.db.base import utcnow
from ocrchat.boundary.db.CRUD.base_crud import BaseCRUD
from ocrchat.boundary.db.models.compiled_document_model import CompiledDocumentModel


class CompiledDocumentCRUD(BaseCRUD[CompiledDocumentModel]):
    """CRUD operations for CompiledDocumentModel."""

    def __init__(self) -> None:
        super().__init__(CompiledDocumentModel)

    async def get_by_conversation_id(
        self, session: AsyncSession, conversation_id: UUID
    ) -> CompiledDocumentModel | None:
        """Fetch the (unique) compiled document of a conversation."""
        stmt = select(CompiledDocumentModel).where(
            CompiledDocumentModel.conversation_id == conversation_id
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def replace_history(
        self,
        session: AsyncSession,
        document: CompiledDocumentModel,
        chat_history: list[dict],
    ) -> CompiledDocumentModel:
        """
        Replace the history snapshot and bump updated_at.

        Identity fields are left untouched.

        Args:
            session: Async database session
            document: Existing compiled document
            chat_history: Freshly built snapshot

        Returns:
            The updated compiled document
        """
        document.chat_history = chat_history
        document.updated_at = utcnow()
        await session.flush()
        return document


compiled_document_crud = CompiledDocumentCRUD()
