"""
Document ORM model.

One row per uploaded document. The document id is assigned by the upload
flow (not generated here) and doubles as the vector index namespace.

Dependencies: sqlalchemy, docchat.boundary.db.base
System role: Document metadata persistence
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from docchat.boundary.db.base import Base, TimestampMixin


class DocumentModel(Base, TimestampMixin):
    """
    Document ORM model.

    Attributes:
        id: Caller-supplied document identifier (primary key)
        owner_id: User who uploaded the document
        name: Original filename
        download_url: Where the document bytes can be fetched from
        created_at: Upload timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
    """

    __tablename__ = "documents"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)

    owner_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        doc="User who owns the document",
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        default="",
        doc="Original filename",
    )

    download_url: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
        doc="Fetchable location of the document bytes",
    )

    def __repr__(self) -> str:
        return f"<DocumentModel(id={self.id}, owner_id={self.owner_id}, name={self.name})>"
