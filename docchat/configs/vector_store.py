"""
Vector store configuration settings.

Selects the namespaced vector index backend (FAISS for local development,
S3 Vectors for production) and its retrieval defaults.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from docchat.configs.base import DocChatBaseSettings


class VectorStoreSettings(DocChatBaseSettings):
    """Vector index configuration (FAISS for dev, S3 Vectors for prod)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: Literal["faiss", "s3"] = Field(
        default="faiss",
        description="Vector index backend: 'faiss' for local dev, 's3' for production",
    )
    index_name: str = Field(
        default="docchat",
        description="Name of the shared index; namespaces live inside it",
    )
    faiss_index_dir: str = Field(
        default="/tmp/.docchat_faiss",
        description="Directory holding one FAISS index per namespace",
    )
    vectors_bucket: str = Field(
        default="docchat-dev-vectors",
        description="S3 Vectors bucket name",
    )
    aws_region: str = Field(default="us-east-1", description="AWS region for S3 Vectors")
    distance_metric: Literal["cosine", "euclidean"] = Field(
        default="cosine",
        description="Distance metric for newly created S3 Vectors indexes",
    )
    top_k: int = Field(default=4, gt=0, description="Chunks retrieved per question")
