"""Application services."""

from docchat.application.services.chat_service import ChatService
from docchat.application.services.document_cleanup_service import (
    DeletionReport,
    DocumentCleanupService,
)
from docchat.application.services.document_service import DocumentService
from docchat.application.services.ingestion_service import IngestionService

__all__ = [
    "ChatService",
    "DeletionReport",
    "DocumentCleanupService",
    "DocumentService",
    "IngestionService",
]
