"""
Database models package.

Exports:
  - DocumentModel: Document metadata ORM model
  - ChatTurnModel: Conversation history ORM model (with role constants)
"""

from docchat.boundary.db.models.chat_turn_model import ASSISTANT_ROLE, HUMAN_ROLE, ChatTurnModel
from docchat.boundary.db.models.document_model import DocumentModel

__all__ = [
    "ASSISTANT_ROLE",
    "HUMAN_ROLE",
    "ChatTurnModel",
    "DocumentModel",
]
