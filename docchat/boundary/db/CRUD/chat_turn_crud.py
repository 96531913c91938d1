"""
Chat turn CRUD operations.

Append-only storage of conversation turns scoped by
(document_id, conversation_id). Reads return turns in chronological order,
optionally limited to the most recent N.

Dependencies: sqlalchemy, docchat.boundary.db.models.chat_turn_model
System role: Conversation history persistence operations
"""

from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.CRUD.base_crud import BaseCRUD
from docchat.boundary.db.models.chat_turn_model import (
    ASSISTANT_ROLE,
    HUMAN_ROLE,
    ChatTurnModel,
)
from docchat.core.exceptions import ValidationError

VALID_ROLES = (HUMAN_ROLE, ASSISTANT_ROLE)


class ChatTurnCRUD(BaseCRUD[ChatTurnModel]):
    """CRUD operations for ChatTurnModel."""

    def __init__(self) -> None:
        super().__init__(ChatTurnModel)

    async def append(
        self,
        session: AsyncSession,
        document_id: str,
        conversation_id: str,
        role: str,
        message: str,
    ) -> ChatTurnModel:
        """
        Append one turn.

        Raises:
            ValidationError: Unknown role
        """
        if role not in VALID_ROLES:
            raise ValidationError(f"Unknown chat role: {role}", field="role")
        return await self.create(
            session,
            document_id=document_id,
            conversation_id=conversation_id,
            role=role,
            message=message,
        )

    async def get_recent(
        self,
        session: AsyncSession,
        document_id: str,
        conversation_id: str,
        limit: int | None = None,
    ) -> Sequence[ChatTurnModel]:
        """
        Retrieve turns oldest first.

        The newest ``limit`` turns are selected (all when None) and then
        returned in chronological order.

        Args:
            session: Async database session
            document_id: Document identifier
            conversation_id: Conversation identifier
            limit: Maximum number of most recent turns

        Returns:
            Sequence of ChatTurnModel, oldest first
        """
        stmt = (
            select(ChatTurnModel)
            .where(
                ChatTurnModel.document_id == document_id,
                ChatTurnModel.conversation_id == conversation_id,
            )
            .order_by(ChatTurnModel.created_at.desc(), ChatTurnModel.id.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return list(reversed(result.scalars().all()))

    async def delete_by_document(self, session: AsyncSession, document_id: str) -> int:
        """Delete every turn for a document; returns the number removed."""
        stmt = delete(ChatTurnModel).where(ChatTurnModel.document_id == document_id)
        result = await session.execute(stmt)
        return result.rowcount


chat_turn_crud = ChatTurnCRUD()
