"""
Document source record.

The ingestion boundary's view of an uploaded document: where to fetch it
from and who owns it.

Dependencies: pydantic
System role: Validated document reference for ingestion
"""

from pydantic import BaseModel, Field, HttpUrl


class DocumentSource(BaseModel):
    """Fetchable location of a document owned by a user."""

    document_id: str = Field(min_length=1, description="Caller-supplied document identifier")
    owner_id: str = Field(min_length=1, description="Owning user identifier")
    download_url: HttpUrl = Field(description="URL the document bytes are fetched from")
