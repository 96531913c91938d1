"""
Unified application settings.

Aggregates all configuration modules into a single Settings object that is
built once at startup and handed to each component's constructor.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import BaseModel, Field

from docchat.configs.base import AppSettings
from docchat.configs.database import DatabaseSettings
from docchat.configs.embedding import EmbeddingSettings
from docchat.configs.ingestion import IngestionSettings
from docchat.configs.llm import LLMSettings
from docchat.configs.vector_store import VectorStoreSettings


class Settings(BaseModel):
    """Unified application settings aggregating all config modules."""

    app: AppSettings = Field(default_factory=AppSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)

    @property
    def google_api_key(self) -> str:
        """API key for embeddings, falling back to the chat model key."""
        key = self.embedding.google_api_key.get_secret_value()
        return key or self.llm.google_api_key.get_secret_value()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables and .env are read once; callers pass the result
    (or the relevant sub-settings) into constructors explicitly.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
