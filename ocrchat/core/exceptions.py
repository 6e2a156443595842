"""
Exception hierarchy for the OCR document chat application.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class OcrChatException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class BadRequestError(OcrChatException):
    """Raised when required input is missing or malformed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class NotFoundError(OcrChatException):
    """Raised when a requested resource does not exist."""

    pass


class ConversationNotFoundError(NotFoundError):
    """Raised when a conversation cannot be found."""

    def __init__(self, conversation_id: Any, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["conversation_id"] = str(conversation_id)
        super().__init__(f"Conversation not found: {conversation_id}", details)


class CompiledDocumentNotFoundError(NotFoundError):
    """Raised when a conversation has no compiled document."""

    def __init__(self, conversation_id: Any, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["conversation_id"] = str(conversation_id)
        super().__init__(
            f"Compiled document not found for conversation: {conversation_id}", details
        )


class BlobNotFoundError(NotFoundError):
    """Raised when the blob store has no object at the given pathname."""

    def __init__(self, pathname: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["pathname"] = pathname
        super().__init__(f"Blob not found: {pathname}", details)


class ForbiddenError(OcrChatException):
    """Raised when the caller does not own the requested conversation."""

    def __init__(
        self,
        message: str,
        owner_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if owner_id:
            details["owner_id"] = owner_id
        super().__init__(message, details)


class UnsupportedFileTypeError(OcrChatException):
    """Raised when a file kind has no extraction backend."""

    def __init__(self, file_type: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["file_type"] = file_type
        self.file_type = file_type
        super().__init__(f"Unsupported file type for OCR: {file_type or '<none>'}", details)


class ExtractionEngineError(OcrChatException):
    """Raised when the OCR engine or PDF parser crashes."""

    def __init__(
        self,
        message: str,
        file_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if file_type:
            details["file_type"] = file_type
        super().__init__(message, details)


class AIFailureError(OcrChatException):
    """Raised when the completion provider returns no usable content."""

    pass


class StoreUnavailableError(OcrChatException):
    """Raised when the blob store is unconfigured or unreachable."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class RenderError(OcrChatException):
    """Raised when one section of an export cannot be rendered (non-fatal)."""

    def __init__(
        self,
        message: str,
        section: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if section:
            details["section"] = section
        super().__init__(message, details)
