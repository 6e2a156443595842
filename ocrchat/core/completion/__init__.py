"""Completion function over a LangChain chat model."""

from ocrchat.core.completion.completion_client import CompletionClient, PriorTurn

__all__ = ["CompletionClient", "PriorTurn"]
