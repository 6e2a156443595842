"""
Compiled document aggregator.

Keeps the per-conversation compiled document in sync with the turn
history. The aggregate is a rebuildable cache: identity fields are
written once, the history snapshot is rebuilt from all turns on every
upsert, and persistence failures never reach the caller.

Dependencies: ocrchat.boundary.db.CRUD, ocrchat.observability
System role: Document compilation stage of the chat pipeline
"""

import logging
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ocrchat.application.services.access import get_owned_conversation, isoformat_utc
from ocrchat.application.services.file_naming import blob_base_name
from ocrchat.boundary.db.CRUD.compiled_document_crud import compiled_document_crud
from ocrchat.boundary.db.CRUD.turn_crud import turn_crud
from ocrchat.boundary.db.models.compiled_document_model import CompiledDocumentModel
from ocrchat.boundary.db.models.turn_model import TurnModel
from ocrchat.core.exceptions import CompiledDocumentNotFoundError
from ocrchat.models.compiled_document import CompiledDocumentResponse
from ocrchat.models.principal import Principal
from ocrchat.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


def source_file_name(turn: TurnModel) -> str:
    """User-facing name of a source turn's file, falling back to the pointer's basename."""
    if turn.original_file_name:
        return turn.original_file_name
    return blob_base_name(turn.blob_pointer or "")


def build_history_snapshot(
    turns: Sequence[TurnModel], source_turn: TurnModel
) -> list[dict[str, Any]]:
    """
    Project ordered turns into snapshot entries.

    The entry for the source turn carries isSourceDocument and fileName.

    Args:
        turns: All turns of the conversation, oldest first
        source_turn: Turn that introduced the document

    Returns:
        list[dict]: Entries {sender, content, createdAt[, isSourceDocument, fileName]}
    """
    file_name = source_file_name(source_turn)
    history = []
    for turn in turns:
        entry: dict[str, Any] = {
            "sender": turn.author.value,
            "content": turn.content,
            "createdAt": isoformat_utc(turn.created_at),
        }
        if turn.id == source_turn.id:
            entry["isSourceDocument"] = True
            entry["fileName"] = file_name
        history.append(entry)
    return history


class CompiledDocumentService:
    """Upsert and read compiled documents."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Args:
            db: Async SQLAlchemy session
        """
        self.db = db

    async def upsert(
        self, conversation_id: UUID, source_turn: TurnModel
    ) -> CompiledDocumentModel | None:
        """
        Create or refresh the compiled document of a conversation.

        On create every identity field is copied from the source turn; on
        update only the history snapshot is replaced. Any persistence error
        is rolled back, logged and reported as None.

        Args:
            conversation_id: Conversation the aggregate belongs to
            source_turn: Turn that introduced the document

        Returns:
            CompiledDocumentModel | None: The stored aggregate, or None when
            the source turn does not qualify or persistence failed
        """
        if source_turn.blob_pointer is None or source_turn.extracted_text is None:
            logger.warning(
                f"{__name__}:upsert - Turn {source_turn.id} carries no document; skipped"
            )
            return None

        source_turn_id = source_turn.id
        try:
            turns = await turn_crud.list_by_conversation(self.db, conversation_id)
            history = build_history_snapshot(turns, source_turn)

            document = await compiled_document_crud.get_by_conversation_id(
                self.db, conversation_id
            )
            if document is None:
                document = await compiled_document_crud.create(
                    self.db,
                    conversation_id=conversation_id,
                    source_turn_id=source_turn.id,
                    original_file_name=source_file_name(source_turn),
                    extracted_text=source_turn.extracted_text,
                    blob_pointer=source_turn.blob_pointer,
                    chat_history=history,
                )
                action = "created"
            else:
                document = await compiled_document_crud.replace_history(
                    self.db, document, history
                )
                action = "updated"

            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            log_exception_with_context(
                logger,
                "Compiled document upsert failed",
                e,
                conversation_id=str(conversation_id),
                source_turn_id=str(source_turn_id),
            )
            return None

        logger.info(
            f"{__name__}:upsert - Compiled document {action} for {conversation_id} "
            f"({len(history)} history entries)"
        )
        return document

    async def get_compiled_document(
        self, principal: Principal, conversation_id: UUID
    ) -> CompiledDocumentResponse:
        """
        Read a conversation's compiled document.

        Raises:
            ConversationNotFoundError: If the conversation does not exist
            ForbiddenError: If the caller does not own it
            CompiledDocumentNotFoundError: If no aggregate exists yet
        """
        await get_owned_conversation(self.db, principal, conversation_id)
        document = await compiled_document_crud.get_by_conversation_id(
            self.db, conversation_id
        )
        if document is None:
            raise CompiledDocumentNotFoundError(conversation_id)
        return CompiledDocumentResponse.model_validate(document)
