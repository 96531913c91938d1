"""
Language model configuration settings.

Gemini chat model used for query rephrasing and answer synthesis.

Dependencies: pydantic, pydantic_settings
System role: Chat model configuration for the RAG chain
"""

from pydantic import Field, SecretStr
from pydantic_settings import SettingsConfigDict

from docchat.configs.base import DocChatBaseSettings


class LLMSettings(DocChatBaseSettings):
    """Google Gemini chat model configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LLM_",
        case_sensitive=False,
        extra="ignore",
    )

    google_api_key: SecretStr = Field(
        default=SecretStr(""),
        description="Google Generative AI API key",
    )
    chat_model: str = Field(
        default="gemini-2.0-flash",
        description="Gemini chat model used for rephrasing and synthesis",
    )
    temperature: float = Field(default=0.0, ge=0.0, le=2.0)
    max_output_tokens: int = Field(default=2048, gt=0)
