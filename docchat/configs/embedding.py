"""
Embedding configuration settings.

Covers the Gemini embedding model, the fixed vector dimension and the
sanitization / batching knobs of the embedding service.

Dependencies: pydantic, pydantic_settings
System role: Embedding service configuration
"""

from pydantic import Field, SecretStr
from pydantic_settings import SettingsConfigDict

from docchat.configs.base import DocChatBaseSettings


class EmbeddingSettings(DocChatBaseSettings):
    """Embedding model and batching configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="EMBEDDING_",
        case_sensitive=False,
        extra="ignore",
    )

    google_api_key: SecretStr = Field(
        default=SecretStr(""),
        description="Google Generative AI API key (falls back to LLM key when empty)",
    )
    model: str = Field(
        default="models/gemini-embedding-001",
        description="Gemini embedding model ID",
    )
    dimension: int = Field(
        default=768,
        gt=0,
        description="Length of every vector produced, including zero-filled fallbacks",
    )
    max_chars: int = Field(
        default=2000,
        gt=0,
        description="Sanitized text is truncated to this many characters",
    )
    batch_size: int = Field(
        default=5,
        gt=0,
        description="Texts embedded concurrently per batch",
    )
    batch_pause_seconds: float = Field(
        default=0.1,
        ge=0.0,
        description="Pause between batches to stay under rate limits",
    )
