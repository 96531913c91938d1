"""
Domain exception to HTTP status mapping.

Dependencies: fastapi, docchat.core.exceptions
System role: Error translation for API routes
"""

from fastapi import HTTPException

from docchat.core.exceptions import (
    DocChatException,
    DocumentProcessingError,
    MissingPreconditionError,
    RAGPipelineError,
    ValidationError,
    VectorStoreError,
)


def status_code_for(exc: DocChatException) -> int:
    if isinstance(exc, ValidationError):
        return 422
    if isinstance(exc, MissingPreconditionError):
        return 404
    if isinstance(exc, (RAGPipelineError, DocumentProcessingError, VectorStoreError)):
        return 502
    return 500


def to_http_exception(exc: DocChatException) -> HTTPException:
    """HTTPException carrying the message and details of a domain error."""
    return HTTPException(
        status_code=status_code_for(exc),
        detail={"error": exc.message, "details": exc.details},
    )
