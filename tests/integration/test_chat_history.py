"""
Test suite for chat turn persistence.

Runs ChatTurnCRUD and ChatHistoryAdapter against in-memory SQLite.

System role: Verification of conversation history store
"""

from datetime import datetime, timedelta, timezone

import pytest
from langchain_core.messages import AIMessage, HumanMessage
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.application.adapters.chat_history_adapter import ChatHistoryAdapter
from docchat.boundary.db.CRUD.chat_turn_crud import chat_turn_crud
from docchat.boundary.db.models.chat_turn_model import ChatTurnModel
from docchat.core.exceptions import ValidationError


class TestChatTurnCRUD:
    """Test suite for ChatTurnCRUD."""

    async def test_get_recent_should_return_chronological_order(self, test_async_db: AsyncSession) -> None:
        # Arrange: insert out of timestamp order
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        for minutes, message in [(2, "third"), (0, "first"), (1, "second")]:
            test_async_db.add(ChatTurnModel(
                document_id="doc-1",
                conversation_id="user-1",
                role="human",
                message=message,
                created_at=base + timedelta(minutes=minutes),
            ))
        await test_async_db.flush()

        # Act
        turns = await chat_turn_crud.get_recent(test_async_db, "doc-1", "user-1")

        # Assert
        assert [turn.message for turn in turns] == ["first", "second", "third"]
        timestamps = [turn.created_at for turn in turns]
        assert timestamps == sorted(timestamps)

    async def test_get_recent_with_limit_should_keep_newest(self, test_async_db: AsyncSession) -> None:
        for i in range(5):
            await chat_turn_crud.append(test_async_db, "doc-1", "user-1", "human", f"message {i}")

        turns = await chat_turn_crud.get_recent(test_async_db, "doc-1", "user-1", limit=2)

        assert [turn.message for turn in turns] == ["message 3", "message 4"]

    async def test_turns_should_be_scoped_by_document_and_conversation(
        self,
        test_async_db: AsyncSession,
    ) -> None:
        await chat_turn_crud.append(test_async_db, "doc-1", "user-1", "human", "mine")
        await chat_turn_crud.append(test_async_db, "doc-2", "user-1", "human", "other document")
        await chat_turn_crud.append(test_async_db, "doc-1", "user-2", "human", "other user")

        turns = await chat_turn_crud.get_recent(test_async_db, "doc-1", "user-1")

        assert [turn.message for turn in turns] == ["mine"]

    async def test_append_should_reject_unknown_role(self, test_async_db: AsyncSession) -> None:
        with pytest.raises(ValidationError):
            await chat_turn_crud.append(test_async_db, "doc-1", "user-1", "system", "nope")

    async def test_delete_by_document_should_remove_all_conversations(
        self,
        test_async_db: AsyncSession,
    ) -> None:
        await chat_turn_crud.append(test_async_db, "doc-1", "user-1", "human", "a")
        await chat_turn_crud.append(test_async_db, "doc-1", "user-2", "assistant", "b")
        await chat_turn_crud.append(test_async_db, "doc-2", "user-1", "human", "c")

        removed = await chat_turn_crud.delete_by_document(test_async_db, "doc-1")

        assert removed == 2
        assert await chat_turn_crud.get_recent(test_async_db, "doc-1", "user-1") == []
        assert len(await chat_turn_crud.get_recent(test_async_db, "doc-2", "user-1")) == 1


class TestChatHistoryAdapter:
    """Test suite for ChatHistoryAdapter."""

    async def test_messages_should_map_roles(self, test_async_db: AsyncSession) -> None:
        # Arrange
        adapter = ChatHistoryAdapter(document_id="doc-1", conversation_id="user-1", db=test_async_db)
        await adapter.add_user_message("What is this?")
        await adapter.add_ai_message("A test document.")

        # Act
        messages = await adapter.get_messages()

        # Assert
        assert messages == [
            HumanMessage(content="What is this?"),
            AIMessage(content="A test document."),
        ]

    async def test_get_recent_turns_should_return_records(self, test_async_db: AsyncSession) -> None:
        adapter = ChatHistoryAdapter(document_id="doc-1", conversation_id="user-1", db=test_async_db)
        await adapter.append_turn("human", "hello")

        turns = await adapter.get_recent_turns()

        assert len(turns) == 1
        assert turns[0].role == "human"
        assert turns[0].message == "hello"
        assert turns[0].created_at is not None

    async def test_empty_history_should_return_empty_list(self, test_async_db: AsyncSession) -> None:
        adapter = ChatHistoryAdapter(document_id="doc-1", conversation_id="user-1", db=test_async_db)

        assert await adapter.get_messages() == []
