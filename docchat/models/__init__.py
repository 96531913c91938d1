"""API request/response schemas."""

from docchat.models.chat import (
    AnswerResponse,
    ChatHistoryResponse,
    ChatTurnResponse,
    QuestionRequest,
    SourceResponse,
)
from docchat.models.common import ErrorResponse
from docchat.models.document import (
    DeletionResponse,
    DocumentCreateRequest,
    DocumentListResponse,
    DocumentResponse,
    IngestionResponse,
)

__all__ = [
    "AnswerResponse",
    "ChatHistoryResponse",
    "ChatTurnResponse",
    "DeletionResponse",
    "DocumentCreateRequest",
    "DocumentListResponse",
    "DocumentResponse",
    "ErrorResponse",
    "IngestionResponse",
    "QuestionRequest",
    "SourceResponse",
]
