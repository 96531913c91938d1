"""
Embeddings.

Embedding service, its fallback policy and the Gemini model client.
"""

from docchat.core.embeddings.embedding_service import EmbeddingService
from docchat.core.embeddings.fallback_policy import (
    EmbeddingFallbackPolicy,
    EmbeddingOutcome,
    EmbeddingPath,
    aggressive_sanitize,
    is_safety_rejection,
    sanitize_text,
)

__all__ = [
    "EmbeddingFallbackPolicy",
    "EmbeddingOutcome",
    "EmbeddingPath",
    "EmbeddingService",
    "aggressive_sanitize",
    "is_safety_rejection",
    "sanitize_text",
]
