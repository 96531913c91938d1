"""
Chat turn ORM model.

Append-only conversation history for one (document, conversation) pair.
Turns are never updated; ordering is by created_at then id.

Dependencies: sqlalchemy, docchat.boundary.db.base
System role: Conversation history persistence
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from docchat.boundary.db.base import Base, utc_now

HUMAN_ROLE = "human"
ASSISTANT_ROLE = "assistant"


class ChatTurnModel(Base):
    """
    Chat turn ORM model.

    Attributes:
        id: Autoincrement primary key (insertion order tiebreaker)
        document_id: Document the conversation is about
        conversation_id: Conversation within the document (owner id by default)
        role: "human" or "assistant"
        message: Turn text
        created_at: Append timestamp (UTC)
    """

    __tablename__ = "chat_turns"
    __table_args__ = (
        Index("ix_chat_turns_document_conversation", "document_id", "conversation_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    document_id: Mapped[str] = mapped_column(String(255), nullable=False)
    conversation_id: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<ChatTurnModel(id={self.id}, document_id={self.document_id}, role={self.role})>"
