"""
Completion client.

Text-in/text-out wrapper around a LangChain chat model. The model is an
explicitly constructed dependency with an explicit teardown hook.

Dependencies: langchain_core, langchain_google_genai
System role: AI reply generation for the conversation orchestrator
"""

import logging
from dataclasses import dataclass
from typing import Literal

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage

from ocrchat.core.completion.completion_prompt import (
    COMPLETION_PROMPT,
    build_system_message,
)
from ocrchat.core.exceptions import AIFailureError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PriorTurn:
    """One earlier turn passed as context."""

    role: Literal["user", "assistant"]
    content: str


def _content_to_text(content: str | list) -> str:
    # Some providers return a list of content parts
    if isinstance(content, str):
        return content
    parts = []
    for part in content:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type") == "text":
            parts.append(part.get("text", ""))
    return "".join(parts)


class CompletionClient:
    """Generate assistant replies from a chat model."""

    def __init__(self, chat_model: BaseChatModel, max_context_chars: int = 12000) -> None:
        """
        Args:
            chat_model: LangChain chat model used for every call
            max_context_chars: Cap on extracted text characters sent to the model
        """
        self._chat_model: BaseChatModel | None = chat_model
        self._max_context_chars = max_context_chars

    @classmethod
    def from_settings(cls, model_id: str, temperature: float, max_context_chars: int) -> "CompletionClient":
        """Build a client around ChatGoogleGenerativeAI."""
        from langchain_google_genai import ChatGoogleGenerativeAI

        chat_model = ChatGoogleGenerativeAI(model=model_id, temperature=temperature)
        logger.info(f"{__name__}:from_settings - Initialized chat model {model_id}")
        return cls(chat_model=chat_model, max_context_chars=max_context_chars)

    def build_messages(
        self,
        current_text: str,
        prior_turns: list[PriorTurn],
        extracted_text: str | None = None,
        file_name: str | None = None,
    ) -> list[BaseMessage]:
        """Assemble system, history and current messages in order."""
        history: list[BaseMessage] = [
            HumanMessage(content=turn.content)
            if turn.role == "user"
            else AIMessage(content=turn.content)
            for turn in prior_turns
        ]
        return COMPLETION_PROMPT.format_messages(
            system=build_system_message(extracted_text, file_name, self._max_context_chars),
            history=history,
            question=current_text,
        )

    async def complete(
        self,
        current_text: str,
        prior_turns: list[PriorTurn],
        extracted_text: str | None = None,
        file_name: str | None = None,
    ) -> str:
        """
        Produce the assistant reply for the current user text.

        Args:
            current_text: The user's message
            prior_turns: Earlier turns, oldest first
            extracted_text: Text of the document attached to this turn, if any
            file_name: User-facing name of that document

        Returns:
            str: Reply text, stripped

        Raises:
            AIFailureError: If the provider fails or returns no usable content
        """
        if self._chat_model is None:
            raise AIFailureError("Completion client is closed")

        messages = self.build_messages(current_text, prior_turns, extracted_text, file_name)
        try:
            response = await self._chat_model.ainvoke(messages)
        except Exception as e:
            logger.error(f"{__name__}:complete - Provider call failed: {type(e).__name__}: {e}")
            raise AIFailureError(
                "AI provider call failed", details={"error": type(e).__name__}
            ) from e

        text = _content_to_text(response.content).strip()
        if not text:
            logger.error(f"{__name__}:complete - Provider returned empty content")
            raise AIFailureError("AI provider returned no usable content")

        logger.info(
            f"{__name__}:complete - Reply generated "
            f"(history={len(prior_turns)}, reply_chars={len(text)})"
        )
        return text

    async def aclose(self) -> None:
        """Release the chat model; later calls fail with AIFailureError."""
        self._chat_model = None
        logger.info(f"{__name__}:aclose - Completion client closed")
