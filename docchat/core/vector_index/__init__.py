"""Idempotent per-document ingestion into the namespaced vector index."""

from docchat.core.vector_index.index_manager import (
    ChunkSource,
    NamespaceHandle,
    VectorIndexManager,
)

__all__ = ["ChunkSource", "NamespaceHandle", "VectorIndexManager"]
