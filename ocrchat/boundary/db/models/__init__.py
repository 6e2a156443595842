"""ORM models registered on Base.metadata."""

from ocrchat.boundary.db.models.compiled_document_model import CompiledDocumentModel
from ocrchat.boundary.db.models.conversation_model import ConversationModel
from ocrchat.boundary.db.models.turn_model import TurnAuthor, TurnModel

__all__ = [
    "CompiledDocumentModel",
    "ConversationModel",
    "TurnAuthor",
    "TurnModel",
]
