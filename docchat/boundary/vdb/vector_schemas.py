"""
Vector index schemas.

Pydantic models exchanged with namespaced vector indexes: the record
written on upsert and the match returned by a query.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Any

from pydantic import BaseModel, Field


class VectorRecord(BaseModel):
    """Single vector written to a namespace."""

    id: str = Field(min_length=1, description="Deterministic vector identifier")
    values: list[float] = Field(description="Embedding vector")
    text: str = Field(description="Chunk text stored alongside the vector")
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Chunk metadata (document_id, sequence, start_index)",
    )


class VectorMatch(BaseModel):
    """Single result from a namespace query."""

    id: str = Field(description="Vector identifier")
    text: str = Field(description="Chunk text content")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Chunk metadata")
    score: float = Field(description="Similarity score (higher is closer)")
