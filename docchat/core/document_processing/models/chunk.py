"""
Chunk domain model for the ingestion pipeline.

A bounded span of a document's text. Chunks exist only while a document is
being ingested; their text and position travel into the vector index as
metadata.

Dependencies: pydantic
System role: Data structure for document chunks in ingestion pipeline
"""

import hashlib

from pydantic import BaseModel, ConfigDict, Field


class Chunk(BaseModel):
    """Ordered span of a document's text."""

    model_config = ConfigDict(frozen=True)

    document_id: str = Field(min_length=1, description="Source document identifier")
    sequence: int = Field(ge=0, description="Position of the chunk within the document")
    text: str = Field(min_length=1, description="Chunk text content")
    start_index: int = Field(ge=0, description="Character offset of the chunk in the source text")

    @property
    def vector_id(self) -> str:
        """
        Deterministic vector ID for this chunk.

        Returns:
            str: SHA-256 prefix (16 chars) of document id, sequence and text
        """
        hash_input = f"{self.document_id}:{self.sequence}:{self.text}"
        return hashlib.sha256(hash_input.encode()).hexdigest()[:16]

    def to_metadata(self) -> dict:
        """Metadata stored next to the chunk's vector."""
        return {
            "document_id": self.document_id,
            "sequence": self.sequence,
            "start_index": self.start_index,
        }
