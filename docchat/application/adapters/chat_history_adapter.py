"""
Chat history adapter.

Conversation history for one (document, conversation) pair, exposed both
as ChatTurn records (API responses) and as LangChain messages (prompting).
Turns always come back oldest first.

Dependencies: docchat.boundary.db.CRUD.chat_turn_crud, langchain_core.messages
System role: Conversation history store consumed by the chat service
"""

from datetime import datetime
from typing import Literal

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.CRUD.chat_turn_crud import chat_turn_crud
from docchat.boundary.db.models.chat_turn_model import ASSISTANT_ROLE, HUMAN_ROLE


class ChatTurn(BaseModel):
    """One stored conversation turn."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    role: Literal["human", "assistant"] = Field(description="Who produced the message")
    message: str = Field(description="Turn text")
    created_at: datetime = Field(description="Append timestamp (UTC)")

    def to_message(self) -> BaseMessage:
        if self.role == HUMAN_ROLE:
            return HumanMessage(content=self.message)
        return AIMessage(content=self.message)


class ChatHistoryAdapter:
    """History store scoped to one document conversation."""

    def __init__(self, document_id: str, conversation_id: str, db: AsyncSession) -> None:
        """
        Initialize chat history adapter.

        Args:
            document_id: Document the conversation is about
            conversation_id: Conversation identifier (owner id by default)
            db: AsyncSession for database operations
        """
        self.document_id = document_id
        self.conversation_id = conversation_id
        self.db = db

    async def get_recent_turns(self, limit: int | None = None) -> list[ChatTurn]:
        """
        Most recent turns, in chronological order.

        Args:
            limit: Maximum number of most recent turns (None = all)

        Returns:
            list[ChatTurn]: Oldest first
        """
        rows = await chat_turn_crud.get_recent(
            self.db,
            self.document_id,
            self.conversation_id,
            limit=limit,
        )
        return [ChatTurn.model_validate(row) for row in rows]

    async def get_messages(self, limit: int | None = None) -> list[BaseMessage]:
        """Recent turns as HumanMessage / AIMessage, oldest first."""
        turns = await self.get_recent_turns(limit)
        return [turn.to_message() for turn in turns]

    async def append_turn(self, role: str, message: str) -> ChatTurn:
        """
        Append a turn.

        Raises:
            ValidationError: role is not "human" or "assistant"
        """
        row = await chat_turn_crud.append(
            self.db,
            document_id=self.document_id,
            conversation_id=self.conversation_id,
            role=role,
            message=message,
        )
        return ChatTurn.model_validate(row)

    async def add_user_message(self, content: str) -> ChatTurn:
        return await self.append_turn(HUMAN_ROLE, content)

    async def add_ai_message(self, content: str) -> ChatTurn:
        return await self.append_turn(ASSISTANT_ROLE, content)
