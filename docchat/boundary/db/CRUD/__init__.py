"""
CRUD operations for database models.

Usage:
    from docchat.boundary.db.CRUD import document_crud, chat_turn_crud

    url = await document_crud.get_download_url(db, document_id, owner_id)
"""

from docchat.boundary.db.CRUD.base_crud import BaseCRUD
from docchat.boundary.db.CRUD.chat_turn_crud import ChatTurnCRUD, chat_turn_crud
from docchat.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud

__all__ = [
    "BaseCRUD",
    "ChatTurnCRUD",
    "DocumentCRUD",
    "chat_turn_crud",
    "document_crud",
]
