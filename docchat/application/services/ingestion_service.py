"""
Ingestion service.

Wires the document source (metadata store -> download -> PDF text ->
chunks) into the vector index manager. The chunk source is lazy: nothing
is fetched when the document's namespace already exists. PDF extraction
is blocking and runs in the threadpool.

Dependencies: docchat.core.document_processing, docchat.core.vector_index,
    docchat.boundary.db
System role: On-demand document ingestion
"""

import logging

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.CRUD.document_crud import document_crud
from docchat.core.document_processing.models.chunk import Chunk
from docchat.core.document_processing.models.document_source import DocumentSource
from docchat.core.document_processing.tasks.chunking_task import ChunkingTask
from docchat.core.document_processing.tasks.download_task import DownloadTask
from docchat.core.document_processing.tasks.parsing_task import ParsingTask
from docchat.core.exceptions import MissingPreconditionError
from docchat.core.vector_index.index_manager import (
    ChunkSource,
    NamespaceHandle,
    VectorIndexManager,
)

logger = logging.getLogger(__name__)


class IngestionService:
    """Ensures a document is embedded and indexed before it is queried."""

    def __init__(
        self,
        db: AsyncSession,
        index_manager: VectorIndexManager,
        download_task: DownloadTask,
        parsing_task: ParsingTask,
        chunking_task: ChunkingTask,
    ) -> None:
        self.db = db
        self.index_manager = index_manager
        self.download_task = download_task
        self.parsing_task = parsing_task
        self.chunking_task = chunking_task

    def chunk_source(self, document_id: str, owner_id: str) -> ChunkSource:
        """
        Build the lazy chunk source for a document.

        Args:
            document_id: Document identifier
            owner_id: Document owner

        Returns:
            ChunkSource: Coroutine factory returning the document's chunks
        """

        async def load_chunks() -> list[Chunk]:
            url = await document_crud.get_download_url(self.db, document_id, owner_id)
            source = DocumentSource(document_id=document_id, owner_id=owner_id, download_url=url)
            logger.info(
                f"{__name__}:load_chunks - Fetching document",
                extra={"document_id": document_id},
            )
            data = await self.download_task.download(str(source.download_url), document_id=document_id)
            text = await run_in_threadpool(self.parsing_task.parse, data, document_id=document_id)
            chunks = list(self.chunking_task.chunk(text, document_id))
            logger.info(
                f"{__name__}:load_chunks - Produced {len(chunks)} chunks from {len(text)} chars",
                extra={"document_id": document_id},
            )
            return chunks

        return load_chunks

    async def ensure_ingested(self, document_id: str, owner_id: str) -> NamespaceHandle:
        """
        Ingest the document unless it is already indexed.

        Ownership is checked on every call, including when the namespace
        already exists.

        Raises:
            MissingPreconditionError: Document unknown for this owner or has
                no download URL
            DocumentProcessingError: Download or text extraction failed
            VectorStoreError: Index operation failed
        """
        if await document_crud.get_for_owner(self.db, document_id, owner_id) is None:
            raise MissingPreconditionError("Document not found", document_id=document_id)

        return await self.index_manager.ensure_ingested(
            document_id,
            self.chunk_source(document_id, owner_id),
        )
