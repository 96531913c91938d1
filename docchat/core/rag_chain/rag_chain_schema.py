"""
Conversational RAG response schemas.

Dependencies: pydantic
System role: Chain output definitions
"""

from pydantic import BaseModel, Field


class RAGSource(BaseModel):
    """Retrieved chunk that was placed in the answer context."""

    vector_id: str = Field(description="Deterministic chunk vector id")
    sequence: int | None = Field(default=None, description="Chunk position within the document")
    content_snippet: str = Field(description="Brief excerpt from the chunk (first 200 chars)")
    score: float = Field(description="Retrieval similarity score (higher is closer)")


class RAGAnswer(BaseModel):
    """Answer produced by the conversational RAG chain."""

    answer: str = Field(description="Model answer grounded in the retrieved context")
    standalone_query: str = Field(description="Search query used for retrieval")
    sources: list[RAGSource] = Field(
        default_factory=list,
        description="Chunks the answer was conditioned on, best first",
    )
