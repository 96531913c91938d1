"""
Database configuration settings.

PostgreSQL connection parameters for the document metadata and chat history
tables. A full SQLAlchemy URL can override the PostgreSQL parts (SQLite for
local runs and tests).

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for ORM
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from docchat.configs.base import DocChatBaseSettings


class DatabaseSettings(DocChatBaseSettings):
    """PostgreSQL database configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POSTGRES_",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="localhost", description="PostgreSQL host")
    port: int = Field(default=5432, description="PostgreSQL port")
    user: str = Field(default="postgres", description="PostgreSQL user")
    password: str = Field(default="postgres", description="PostgreSQL password")
    db: str = Field(default="docchat", description="PostgreSQL database name")

    url: str | None = Field(
        default=None,
        description="Full async SQLAlchemy URL; overrides host/port/user/password/db",
    )
    pool_size: int = Field(default=10, description="Connection pool size")
    max_overflow: int = Field(default=20, description="Maximum overflow connections")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    history_limit: int | None = Field(
        default=None,
        gt=0,
        description="Most recent chat turns fed to the chain (None = all)",
    )

    @property
    def async_database_url(self) -> str:
        """
        Construct async SQLAlchemy connection URL.

        Returns:
            str: Explicit url override, or an asyncpg PostgreSQL URL
        """
        if self.url:
            return self.url
        return (
            f"postgresql+asyncpg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.db}"
        )
