"""
Vector index manager.

Guarantees that a document's chunks are embedded and stored exactly once,
under the namespace equal to the document id, and hands back a handle for
similarity search over that namespace.

Concurrent first-time calls for the same document may both ingest. Vector
ids are deterministic per chunk, so the second writer overwrites the first
instead of duplicating it.

Dependencies: docchat.boundary.vdb, docchat.core.embeddings
System role: Idempotent ingestion and namespace lifecycle
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Iterable

from langchain_core.documents import Document

from docchat.boundary.vdb.namespace_index import NamespacedVectorIndex
from docchat.boundary.vdb.vector_schemas import VectorRecord
from docchat.core.document_processing.models.chunk import Chunk
from docchat.core.embeddings.embedding_service import EmbeddingService
from docchat.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

ChunkSource = Callable[[], Awaitable[Iterable[Chunk]]]


@dataclass(frozen=True)
class NamespaceHandle:
    """
    Query handle bound to one document namespace.

    Attributes:
        namespace: Namespace (document id)
        created: True when this call ingested the document
        chunk_count: Vectors written by this call (0 when already present)
    """

    namespace: str
    created: bool
    chunk_count: int
    index: NamespacedVectorIndex
    embedding_service: EmbeddingService

    async def similarity_search(self, query: str, k: int = 4) -> list[Document]:
        """
        Embed the query and return the k nearest chunks as Documents.

        Document metadata carries the vector id and its score.
        """
        vector = await self.embedding_service.embed(query)
        matches = await self.index.query(self.namespace, vector, k)
        return [
            Document(
                page_content=match.text,
                metadata={**match.metadata, "vector_id": match.id, "score": match.score},
            )
            for match in matches
        ]

    def as_retriever(self, k: int = 4):
        """LangChain retriever over this namespace."""
        from docchat.core.rag_chain.retriever import NamespaceRetriever

        return NamespaceRetriever(handle=self, k=k)


class VectorIndexManager:
    """Ensures per-document namespaces exist and removes them on deletion."""

    def __init__(
        self,
        index: NamespacedVectorIndex,
        embedding_service: EmbeddingService,
        upsert_batch_size: int = 100,
    ) -> None:
        """
        Initialize index manager.

        Args:
            index: Namespaced vector index backend
            embedding_service: Service used to embed chunks
            upsert_batch_size: Records per upsert call
        """
        if upsert_batch_size <= 0:
            raise ValueError("upsert_batch_size must be positive")
        self._index = index
        self._embedding_service = embedding_service
        self._upsert_batch_size = upsert_batch_size

    def _handle(self, namespace: str, created: bool, chunk_count: int) -> NamespaceHandle:
        return NamespaceHandle(
            namespace=namespace,
            created=created,
            chunk_count=chunk_count,
            index=self._index,
            embedding_service=self._embedding_service,
        )

    async def ensure_ingested(self, document_id: str, chunk_source: ChunkSource) -> NamespaceHandle:
        """
        Ingest a document unless its namespace already holds vectors.

        ``chunk_source`` is only awaited when ingestion is needed, so an
        already-indexed document costs one existence check and nothing else.

        Args:
            document_id: Document identifier (also the namespace)
            chunk_source: Coroutine factory yielding the document's chunks

        Returns:
            NamespaceHandle: Handle for querying the namespace

        Raises:
            ValidationError: Empty document id
            DocumentProcessingError: Propagated from chunk_source
            VectorStoreError: Index describe/upsert failed
        """
        if not document_id:
            raise ValidationError("document_id must be non-empty", field="document_id")

        namespace = document_id
        if await self._index.namespace_exists(namespace):
            logger.info(
                f"{__name__}:ensure_ingested - Namespace already populated, skipping ingestion",
                extra={"namespace": namespace},
            )
            return self._handle(namespace, created=False, chunk_count=0)

        chunks = list(await chunk_source())
        if not chunks:
            logger.warning(
                f"{__name__}:ensure_ingested - Document produced no chunks; namespace not created",
                extra={"namespace": namespace},
            )
            return self._handle(namespace, created=False, chunk_count=0)

        vectors = await self._embedding_service.embed_batch([chunk.text for chunk in chunks])
        records = [
            VectorRecord(
                id=chunk.vector_id,
                values=vector,
                text=chunk.text,
                metadata=chunk.to_metadata(),
            )
            for chunk, vector in zip(chunks, vectors)
        ]

        for start in range(0, len(records), self._upsert_batch_size):
            await self._index.upsert(namespace, records[start:start + self._upsert_batch_size])

        logger.info(
            f"{__name__}:ensure_ingested - Ingested {len(records)} chunks",
            extra={"namespace": namespace},
        )
        return self._handle(namespace, created=True, chunk_count=len(records))

    async def delete_namespace(self, document_id: str) -> None:
        """
        Remove every vector stored for a document.

        Deleting a namespace that does not exist succeeds.

        Raises:
            VectorStoreError: Index delete failed
        """
        await self._index.delete_namespace(document_id)
        logger.info(
            f"{__name__}:delete_namespace - Namespace deleted",
            extra={"namespace": document_id},
        )
