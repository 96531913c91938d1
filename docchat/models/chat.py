"""
Chat API schemas.

Dependencies: pydantic
System role: Question answering and history API contracts
"""

from datetime import datetime

from pydantic import BaseModel, Field


class QuestionRequest(BaseModel):
    """Request schema for a question about a document."""

    question: str = Field(min_length=1, description="User question")
    conversation_id: str | None = Field(
        default=None,
        description="Conversation identifier (defaults to the user id)",
    )


class SourceResponse(BaseModel):
    """Chunk the answer was conditioned on."""

    vector_id: str
    sequence: int | None = None
    content_snippet: str
    score: float


class AnswerResponse(BaseModel):
    """Response schema for an answered question."""

    answer: str
    standalone_query: str = Field(description="Search query used for retrieval")
    sources: list[SourceResponse]


class ChatTurnResponse(BaseModel):
    """Single turn in history."""

    role: str = Field(description="'human' or 'assistant'")
    message: str
    created_at: datetime


class ChatHistoryResponse(BaseModel):
    """Conversation history, oldest first."""

    document_id: str
    conversation_id: str
    turns: list[ChatTurnResponse]
    total: int
