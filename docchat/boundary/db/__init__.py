"""
Database boundary layer: ORM models, CRUD operations and connection management.

Dependencies: sqlalchemy, docchat.configs
System role: Persistent storage for document metadata and chat history
"""

from docchat.boundary.db.base import Base, TimestampMixin
from docchat.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from docchat.boundary.db.CRUD import (
    BaseCRUD,
    ChatTurnCRUD,
    DocumentCRUD,
    chat_turn_crud,
    document_crud,
)
from docchat.boundary.db.models import ChatTurnModel, DocumentModel

__all__ = [
    "Base",
    "TimestampMixin",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    "ChatTurnModel",
    "DocumentModel",
    "BaseCRUD",
    "ChatTurnCRUD",
    "DocumentCRUD",
    "chat_turn_crud",
    "document_crud",
]
