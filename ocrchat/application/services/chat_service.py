"""
Conversation orchestrator.

Runs one chat turn end to end: resolve or create the conversation,
persist the user turn, identify the source-document turn, ask the
completion client for a reply, persist the bot turn and refresh the
compiled document.

Transaction boundaries: the user turn is committed before the AI call,
the bot turn before the compiled document sync. An AI failure leaves the
committed user turn in place.

Dependencies: ocrchat.boundary.db.CRUD, ocrchat.core.completion
System role: Chat service orchestration layer
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ocrchat.application.services.access import get_owned_conversation
from ocrchat.application.services.compiled_document_service import (
    CompiledDocumentService,
    source_file_name,
)
from ocrchat.boundary.db.CRUD.compiled_document_crud import compiled_document_crud
from ocrchat.boundary.db.CRUD.conversation_crud import conversation_crud
from ocrchat.boundary.db.CRUD.turn_crud import turn_crud
from ocrchat.boundary.db.models.turn_model import TurnAuthor, TurnModel
from ocrchat.core.completion import CompletionClient, PriorTurn
from ocrchat.core.exceptions import BadRequestError
from ocrchat.core.text_extraction import text_or_placeholder
from ocrchat.models.chat import (
    BotTurnResponse,
    ConversationResponse,
    DocumentItemResponse,
    ProcessTurnResponse,
    TurnResponse,
)
from ocrchat.models.principal import Principal
from ocrchat.observability.log_utils import safe_log_value

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 50
DEFAULT_TITLE = "New Chat"
GREETING = "Hello! How can I assist you today?"


def _truncate(text: str, limit: int = TITLE_MAX_LENGTH) -> str:
    return text if len(text) <= limit else text[: limit - 3] + "..."


def derive_turn_title(original_file_name: str | None, text: str | None) -> str:
    """
    Title for a conversation created implicitly by its first turn.

    Prefers "Document: <name>", then the start of the user text, then
    the static fallback.
    """
    if original_file_name and original_file_name.strip():
        return _truncate(f"Document: {original_file_name.strip()}")
    if text and text.strip():
        return _truncate(" ".join(text.split()))
    return DEFAULT_TITLE


def generate_title(first_message: str | None) -> str:
    """Title from the first five words of a message, capped with an ellipsis."""
    if not first_message or not first_message.strip():
        return DEFAULT_TITLE
    return _truncate(" ".join(first_message.split()[:5]))


class ChatService:
    """
    Conversation orchestrator.

    Coordinates ownership checks, turn persistence, completion calls and
    compiled document sync for multi-turn document conversations.
    """

    def __init__(
        self,
        db: AsyncSession,
        completion_client: CompletionClient,
        max_history_turns: int = 20,
    ) -> None:
        """
        Initialize chat service.

        Args:
            db: AsyncSession for database operations
            completion_client: Client producing assistant replies
            max_history_turns: Most recent prior turns sent to the model (0 = all)
        """
        self.db = db
        self.completion_client = completion_client
        self.max_history_turns = max_history_turns
        self.compiled_documents = CompiledDocumentService(db)

    async def process_turn(
        self,
        principal: Principal,
        message: str,
        conversation_id: UUID | None = None,
        extracted_text: str | None = None,
        blob_pointer: str | None = None,
        original_file_name: str | None = None,
    ) -> ProcessTurnResponse:
        """
        Process one user message through the full conversation flow.

        Flow:
        1. Resolve the conversation (ownership check or implicit creation)
        2. Persist the user turn
        3. Identify the source-document turn
        4. Build context from prior turns and call the completion client
        5. Persist the bot turn
        6. Sync the compiled document (best-effort)

        Args:
            principal: Authenticated caller
            message: User text
            conversation_id: Existing conversation, or None to start one
            extracted_text: Text extracted from the attached file
            blob_pointer: Storage pathname of the attached file
            original_file_name: User-facing name of the attached file

        Returns:
            ProcessTurnResponse: Conversation id/title, both turns, creation flag

        Raises:
            BadRequestError: New conversation without a document
            ConversationNotFoundError: Unknown conversation id
            ForbiddenError: Conversation owned by someone else
            AIFailureError: Completion failed (user turn stays persisted)
        """
        logger.info(
            f"{__name__}:process_turn - owner={principal.owner_id} "
            f"conversation={conversation_id} message={safe_log_value(message, 30)!r}"
        )

        # Step 1: resolve conversation
        is_new_conversation = conversation_id is None
        if is_new_conversation:
            if not blob_pointer:
                raise BadRequestError(
                    "A new conversation must start from a document upload",
                    field="blobPointer",
                )
            conversation = await conversation_crud.create(
                self.db,
                owner_id=principal.owner_id,
                title=derive_turn_title(original_file_name, message),
            )
            logger.info(f"{__name__}:process_turn - Created conversation {conversation.id}")
        else:
            conversation = await get_owned_conversation(self.db, principal, conversation_id)

        # Step 2: persist user turn
        user_turn = await turn_crud.create(
            self.db,
            conversation_id=conversation.id,
            author=TurnAuthor.USER,
            content=message,
            extracted_text=extracted_text,
            blob_pointer=blob_pointer,
            original_file_name=original_file_name,
        )
        await conversation_crud.touch(self.db, conversation)
        await self.db.commit()

        # Step 3: identify source-document turn
        source_turn = await self._identify_source_turn(
            conversation.id, user_turn, is_new_conversation
        )

        # Step 4: build context and call the model
        reply = await self._generate_reply(conversation.id, user_turn, source_turn)

        # Step 5: persist bot turn
        bot_turn = await turn_crud.create(
            self.db,
            conversation_id=conversation.id,
            author=TurnAuthor.BOT,
            content=reply,
        )
        await conversation_crud.touch(self.db, conversation)
        await self.db.commit()

        response = ProcessTurnResponse(
            conversation_id=conversation.id,
            title=conversation.title,
            user_turn=TurnResponse.model_validate(user_turn),
            bot_turn=BotTurnResponse(id=bot_turn.id, content=bot_turn.content),
            is_new_conversation=is_new_conversation,
        )

        # Step 6: sync compiled document
        await self._sync_compiled_document(conversation.id, source_turn)
        return response

    async def _identify_source_turn(
        self,
        conversation_id: UUID,
        user_turn: TurnModel,
        is_new_conversation: bool,
    ) -> TurnModel | None:
        """
        Pick the turn that owns the conversation's document.

        First qualifying turn wins: an existing compiled document keeps its
        source; otherwise the current turn is promoted if it carries a file
        and extracted text.
        """
        if is_new_conversation and user_turn.is_document_turn:
            return user_turn

        existing = await compiled_document_crud.get_by_conversation_id(
            self.db, conversation_id
        )
        if existing is not None:
            source_turn = await turn_crud.get_by_id(self.db, existing.source_turn_id)
            if source_turn is not None:
                return source_turn

        if user_turn.is_document_turn:
            return user_turn

        logger.info(
            f"{__name__}:_identify_source_turn - No source document for {conversation_id}; "
            "compilation skipped"
        )
        return None

    async def _generate_reply(
        self,
        conversation_id: UUID,
        user_turn: TurnModel,
        source_turn: TurnModel | None,
    ) -> str:
        prior_turns = await turn_crud.list_by_conversation(
            self.db, conversation_id, exclude_id=user_turn.id
        )
        if self.max_history_turns > 0:
            prior_turns = prior_turns[-self.max_history_turns:]

        context = [
            PriorTurn(
                role="user" if turn.author == TurnAuthor.USER else "assistant",
                content=turn.content,
            )
            for turn in prior_turns
        ]

        # Follow-up turns without a file keep the source document in context
        document_turn = user_turn if user_turn.blob_pointer else source_turn
        extracted_text = None
        file_name = None
        if document_turn is not None:
            file_name = source_file_name(document_turn)
            extracted_text = text_or_placeholder(document_turn.extracted_text, file_name)

        return await self.completion_client.complete(
            user_turn.content,
            context,
            extracted_text=extracted_text,
            file_name=file_name,
        )

    async def _sync_compiled_document(
        self, conversation_id: UUID, source_turn: TurnModel | None
    ) -> None:
        if source_turn is None:
            return
        try:
            await self.compiled_documents.upsert(conversation_id, source_turn)
        except Exception as e:
            logger.error(
                f"{__name__}:_sync_compiled_document - Sync failed for {conversation_id}: {e}"
            )

    async def create_conversation(
        self,
        principal: Principal,
        title: str | None = None,
        initial_message: str | None = None,
        extracted_text: str | None = None,
        blob_pointer: str | None = None,
        original_file_name: str | None = None,
    ) -> ConversationResponse:
        """
        Explicitly create a conversation, optionally seeded with a first message.

        A seeded conversation gets the USER turn plus a BOT greeting. If the
        seeded turn carries a document, the compiled document is synced.

        Args:
            principal: Authenticated caller
            title: Explicit title (else derived from initial_message)
            initial_message: Optional first user message
            extracted_text: Text extracted from the attached file
            blob_pointer: Storage pathname of the attached file
            original_file_name: User-facing name of the attached file

        Returns:
            ConversationResponse: The new conversation
        """
        conversation_title = (title or "").strip() or generate_title(initial_message)
        conversation = await conversation_crud.create(
            self.db, owner_id=principal.owner_id, title=conversation_title
        )

        seeded_turn = None
        if initial_message:
            seeded_turn = await turn_crud.create(
                self.db,
                conversation_id=conversation.id,
                author=TurnAuthor.USER,
                content=initial_message,
                extracted_text=extracted_text,
                blob_pointer=blob_pointer,
                original_file_name=original_file_name,
            )
            await turn_crud.create(
                self.db,
                conversation_id=conversation.id,
                author=TurnAuthor.BOT,
                content=GREETING,
            )
            await conversation_crud.touch(self.db, conversation)
        await self.db.commit()

        response = ConversationResponse.model_validate(conversation)
        logger.info(
            f"{__name__}:create_conversation - Created {conversation.id} "
            f"title={safe_log_value(conversation_title, 50)!r}"
        )

        if seeded_turn is not None and seeded_turn.is_document_turn:
            await self._sync_compiled_document(conversation.id, seeded_turn)
        return response

    async def list_conversations(self, principal: Principal) -> list[ConversationResponse]:
        """List the caller's conversations, most recently active first."""
        conversations = await conversation_crud.list_by_owner(self.db, principal.owner_id)
        return [ConversationResponse.model_validate(c) for c in conversations]

    async def get_turns(
        self, principal: Principal, conversation_id: UUID
    ) -> list[TurnResponse]:
        """
        List a conversation's turns oldest first.

        Raises:
            ConversationNotFoundError: Unknown conversation id
            ForbiddenError: Conversation owned by someone else
        """
        await get_owned_conversation(self.db, principal, conversation_id)
        turns = await turn_crud.list_by_conversation(self.db, conversation_id)
        return [TurnResponse.model_validate(turn) for turn in turns]

    async def list_documents(self, principal: Principal) -> list[DocumentItemResponse]:
        """List every file the caller attached to a turn, newest first."""
        rows = await turn_crud.list_document_turns_for_owner(self.db, principal.owner_id)
        return [
            DocumentItemResponse(
                document_id=turn.id,
                conversation_id=turn.conversation_id,
                file_name=source_file_name(turn),
                upload_date=turn.created_at,
                conversation_title=title,
            )
            for turn, title in rows
        ]
