"""FastAPI dependencies."""

from docchat.api.deps.dependencies import (
    ServiceCache,
    get_chat_service,
    get_cleanup_service,
    get_current_user_id,
    get_document_service,
    get_ingestion_service,
    get_service_cache,
)

__all__ = [
    "ServiceCache",
    "get_chat_service",
    "get_cleanup_service",
    "get_current_user_id",
    "get_document_service",
    "get_ingestion_service",
    "get_service_cache",
]
