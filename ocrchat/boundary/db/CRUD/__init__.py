"""CRUD singletons for the ORM models."""

from ocrchat.boundary.db.CRUD.compiled_document_crud import (
    CompiledDocumentCRUD,
    compiled_document_crud,
)
from ocrchat.boundary.db.CRUD.conversation_crud import ConversationCRUD, conversation_crud
from ocrchat.boundary.db.CRUD.turn_crud import TurnCRUD, turn_crud

__all__ = [
    "CompiledDocumentCRUD",
    "ConversationCRUD",
    "TurnCRUD",
    "compiled_document_crud",
    "conversation_crud",
    "turn_crud",
]
