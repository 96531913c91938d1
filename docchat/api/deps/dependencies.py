"""
Dependency injection container.

Long-lived clients (embedding model, vector index, chat model) live in a
process-wide ServiceCache built from Settings; request-scoped services are
created per request around the request's database session.

Dependencies: docchat.configs, docchat.application, docchat.boundary
System role: DI container for service injection
"""

from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.application.services import (
    ChatService,
    DocumentCleanupService,
    DocumentService,
    IngestionService,
)
from docchat.boundary.db import get_async_db
from docchat.configs import Settings, get_settings


class ServiceCache:
    """Lazily built, process-wide service instances."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._embedding_service = None
        self._vector_index = None
        self._index_manager = None
        self._rag_chain = None
        self._download_task = None
        self._parsing_task = None
        self._chunking_task = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def embedding_service(self):
        if self._embedding_service is None:
            from docchat.core.embeddings import EmbeddingService

            self._embedding_service = EmbeddingService.from_settings(
                self.settings.embedding,
                google_api_key=self.settings.google_api_key,
            )
        return self._embedding_service

    @property
    def vector_index(self):
        if self._vector_index is None:
            from docchat.boundary.vdb import get_vector_index

            self._vector_index = get_vector_index(self.settings, self.embedding_service)
        return self._vector_index

    @property
    def index_manager(self):
        if self._index_manager is None:
            from docchat.core.vector_index import VectorIndexManager

            self._index_manager = VectorIndexManager(
                index=self.vector_index,
                embedding_service=self.embedding_service,
                upsert_batch_size=self.settings.ingestion.upsert_batch_size,
            )
        return self._index_manager

    @property
    def rag_chain(self):
        if self._rag_chain is None:
            from docchat.core.rag_chain import ConversationalRAGChain

            self._rag_chain = ConversationalRAGChain.from_settings(self.settings.llm)
        return self._rag_chain

    @property
    def download_task(self):
        if self._download_task is None:
            from docchat.core.document_processing import DownloadTask

            self._download_task = DownloadTask(
                timeout_seconds=self.settings.ingestion.download_timeout_seconds,
            )
        return self._download_task

    @property
    def parsing_task(self):
        if self._parsing_task is None:
            from docchat.core.document_processing import ParsingTask

            self._parsing_task = ParsingTask()
        return self._parsing_task

    @property
    def chunking_task(self):
        if self._chunking_task is None:
            from docchat.core.document_processing import ChunkingTask

            self._chunking_task = ChunkingTask(
                chunk_size=self.settings.ingestion.chunk_size,
                chunk_overlap=self.settings.ingestion.chunk_overlap,
            )
        return self._chunking_task

    def clear(self) -> None:
        """Drop every cached instance."""
        self._embedding_service = None
        self._vector_index = None
        self._index_manager = None
        self._rag_chain = None
        self._download_task = None
        self._parsing_task = None
        self._chunking_task = None


_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_current_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """
    Authenticated user id from the X-User-Id header.

    Raises:
        HTTPException(401): Header missing or blank
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id.strip()


def get_document_service(db: AsyncSession = Depends(get_async_db)) -> DocumentService:
    return DocumentService(db=db)


def get_ingestion_service(
    db: AsyncSession = Depends(get_async_db),
    cache: ServiceCache = Depends(get_service_cache),
) -> IngestionService:
    return IngestionService(
        db=db,
        index_manager=cache.index_manager,
        download_task=cache.download_task,
        parsing_task=cache.parsing_task,
        chunking_task=cache.chunking_task,
    )


def get_chat_service(
    db: AsyncSession = Depends(get_async_db),
    ingestion_service: IngestionService = Depends(get_ingestion_service),
    cache: ServiceCache = Depends(get_service_cache),
) -> ChatService:
    return ChatService(
        db=db,
        ingestion_service=ingestion_service,
        rag_chain=cache.rag_chain,
        top_k=cache.settings.vector_store.top_k,
        history_limit=cache.settings.database.history_limit,
    )


def get_cleanup_service(
    db: AsyncSession = Depends(get_async_db),
    cache: ServiceCache = Depends(get_service_cache),
) -> DocumentCleanupService:
    return DocumentCleanupService(db=db, index_manager=cache.index_manager)
