"""
Shared test fixtures and configuration for entire test suite.

Provides: in-memory SQLite session, fake embedding model, in-memory vector
index, scripted chat model, chat history messages
Dependencies: pytest, sqlalchemy, aiosqlite, langchain_core
System role: Test infrastructure and fixture management
"""

import pytest
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage

from tests.fakes import (
    TEST_DIMENSION,
    FakeEmbeddingModel,
    InMemoryVectorIndex,
    ScriptedChatModel,
)


@pytest.fixture
def fake_embedding_model() -> FakeEmbeddingModel:
    return FakeEmbeddingModel()


@pytest.fixture
def embedding_service(fake_embedding_model: FakeEmbeddingModel):
    from docchat.core.embeddings.embedding_service import EmbeddingService

    return EmbeddingService(
        model=fake_embedding_model,
        dimension=TEST_DIMENSION,
        batch_size=5,
        batch_pause_seconds=0.0,
    )


@pytest.fixture
def vector_index() -> InMemoryVectorIndex:
    return InMemoryVectorIndex()


@pytest.fixture
def index_manager(vector_index: InMemoryVectorIndex, embedding_service):
    from docchat.core.vector_index.index_manager import VectorIndexManager

    return VectorIndexManager(index=vector_index, embedding_service=embedding_service, upsert_batch_size=2)


@pytest.fixture
def scripted_chat_model() -> ScriptedChatModel:
    return ScriptedChatModel(received=[])


@pytest.fixture
def history_messages() -> list[BaseMessage]:
    return [
        HumanMessage(content="What is the first part about?"),
        AIMessage(content="The first part greets the world."),
    ]


@pytest.fixture
async def test_async_db():
    """
    In-memory SQLite async database.

    Yields:
        AsyncSession: Session over freshly created tables
    """
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
    from sqlalchemy.pool import StaticPool

    from docchat.boundary.db.base import Base
    import docchat.boundary.db.models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with async_session() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()
