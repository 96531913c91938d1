"""
Exception hierarchy for DocChat.

Provides layered exception structure for domain-specific errors.
All exceptions carry a ``details`` dict for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class DocChatException(Exception):
    """Base exception for all DocChat errors."""

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


class ValidationError(DocChatException):
    """Raised when input validation fails at a boundary."""

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


class MissingPreconditionError(DocChatException):
    """
    Raised when a required precondition is absent.

    Examples: no download URL recorded for a document, no authenticated
    user context. Never retried.
    """

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)


class DocumentProcessingError(DocChatException):
    """Base exception for document fetch / extraction errors."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)


class DownloadError(DocumentProcessingError):
    """Raised when the document bytes cannot be fetched."""

    pass


class ParsingError(DocumentProcessingError):
    """Raised when text cannot be extracted from the document."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        file_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if file_type:
            details["file_type"] = file_type
        super().__init__(message, document_id, details)


class EmbeddingError(DocChatException):
    """Raised by a single embedding attempt; absorbed by EmbeddingService."""

    pass


class VectorStoreError(DocChatException):
    """Raised when vector index operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        namespace: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (describe, upsert, query, delete)
            namespace: Namespace the operation targeted
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        if namespace:
            details["namespace"] = namespace
        super().__init__(message, details)


class RAGPipelineError(DocChatException):
    """
    Raised when any stage of answering a question fails.

    The original exception is chained as ``__cause__``.
    """

    def __init__(
        self,
        message: str,
        stage: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        details["stage"] = stage
        if document_id:
            details["document_id"] = document_id
        self.stage = stage
        super().__init__(message, details)
