"""
Ingestion pipeline configuration settings.

Chunking policy, document download and vector upsert batching.

Dependencies: pydantic, pydantic_settings
System role: Document ingestion configuration
"""

from pydantic import Field, model_validator
from pydantic_settings import SettingsConfigDict

from docchat.configs.base import DocChatBaseSettings


class IngestionSettings(DocChatBaseSettings):
    """Settings for turning a document into indexed chunks."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INGESTION_",
        case_sensitive=False,
        extra="ignore",
    )

    chunk_size: int = Field(
        default=1000,
        gt=0,
        description="Maximum chunk size in characters",
    )
    chunk_overlap: int = Field(
        default=200,
        ge=0,
        description="Overlap between consecutive chunks",
    )
    download_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for fetching the document from its download URL",
    )
    upsert_batch_size: int = Field(
        default=100,
        gt=0,
        description="Vectors written per upsert call",
    )

    @model_validator(mode="after")
    def _overlap_below_size(self) -> "IngestionSettings":
        if self.chunk_overlap >= self.chunk_size:
            raise ValueError(
                f"chunk_overlap ({self.chunk_overlap}) must be smaller than "
                f"chunk_size ({self.chunk_size})"
            )
        return self
