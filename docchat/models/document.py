"""
Document API schemas.

Dependencies: pydantic
System role: Document and ingestion API contracts
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, HttpUrl


class DocumentCreateRequest(BaseModel):
    """Request schema for registering an uploaded document."""

    id: str = Field(min_length=1, max_length=255, description="Document identifier assigned at upload")
    name: str = Field(default="", max_length=255, description="Original filename")
    download_url: HttpUrl = Field(description="Where the document bytes can be fetched")


class DocumentResponse(BaseModel):
    """Document metadata."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: str
    name: str
    download_url: str | None
    created_at: datetime


class DocumentListResponse(BaseModel):
    """Documents owned by the requesting user."""

    documents: list[DocumentResponse]
    total: int


class IngestionResponse(BaseModel):
    """Result of ensuring a document is indexed."""

    document_id: str
    namespace: str
    created: bool = Field(description="True if this request performed the ingestion")
    chunk_count: int = Field(description="Vectors written by this request")


class DeletionResponse(BaseModel):
    """Per-step result of the deletion workflow."""

    document_id: str
    record_deleted: bool
    history_turns_deleted: int
    namespace_deleted: bool
    errors: list[str] = Field(default_factory=list)
