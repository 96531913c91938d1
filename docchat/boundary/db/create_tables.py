"""
Database table creation.

Creates the documents and chat_turns tables from the ORM metadata.

Usage:
    python -m docchat.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from docchat.boundary.db.base import Base
from docchat.boundary.db.connection import get_async_engine

# Import models to register them with Base.metadata
from docchat.boundary.db.models.chat_turn_model import ChatTurnModel  # noqa: F401
from docchat.boundary.db.models.document_model import DocumentModel  # noqa: F401

logger = logging.getLogger(__name__)


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all tables (CREATE TABLE IF NOT EXISTS; safe to rerun).

    Args:
        engine: Target engine (settings-derived engine if None)
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"{__name__}:create_all_tables - Tables created")


async def drop_all_tables(engine: AsyncEngine | None = None) -> None:
    """Drop all tables. Irreversible; development only."""
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info(f"{__name__}:drop_all_tables - Tables dropped")


if __name__ == "__main__":
    asyncio.run(create_all_tables())
