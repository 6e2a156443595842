"""
Conversation ownership checks shared by the services.

Dependencies: ocrchat.boundary.db.CRUD
System role: Existence and ownership guard for every conversation-scoped call
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ocrchat.boundary.db.CRUD.conversation_crud import conversation_crud
from ocrchat.boundary.db.models.conversation_model import ConversationModel
from ocrchat.core.exceptions import ConversationNotFoundError, ForbiddenError
from ocrchat.models.principal import Principal

logger = logging.getLogger(__name__)


async def get_owned_conversation(
    db: AsyncSession,
    principal: Principal,
    conversation_id: UUID,
) -> ConversationModel:
    """
    Load a conversation and verify the caller owns it.

    Args:
        db: Async database session
        principal: Authenticated caller
        conversation_id: Conversation to load

    Returns:
        ConversationModel: The owned conversation

    Raises:
        ConversationNotFoundError: If no such conversation exists
        ForbiddenError: If it belongs to another owner
    """
    conversation = await conversation_crud.get_by_id(db, conversation_id)
    if conversation is None:
        raise ConversationNotFoundError(conversation_id)
    if conversation.owner_id != principal.owner_id:
        logger.warning(
            f"{__name__}:get_owned_conversation - Owner mismatch for {conversation_id}"
        )
        raise ForbiddenError(
            "You do not have access to this conversation",
            owner_id=principal.owner_id,
        )
    return conversation


def isoformat_utc(value: datetime) -> str:
    """ISO-8601 string, treating naive datetimes as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()
