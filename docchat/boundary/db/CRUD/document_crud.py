"""
Document CRUD operations.

Extends BaseCRUD with owner-scoped lookups. ``get_download_url`` is the
document source used by ingestion: a document without a recorded URL
cannot be ingested.

Dependencies: sqlalchemy, docchat.boundary.db.models.document_model
System role: Document metadata persistence operations
"""

from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.CRUD.base_crud import BaseCRUD
from docchat.boundary.db.models.document_model import DocumentModel
from docchat.core.exceptions import MissingPreconditionError


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """CRUD operations for DocumentModel."""

    def __init__(self) -> None:
        super().__init__(DocumentModel)

    async def get_for_owner(
        self,
        session: AsyncSession,
        document_id: str,
        owner_id: str,
    ) -> DocumentModel | None:
        """
        Retrieve a document only if it belongs to the owner.

        Args:
            session: Async database session
            document_id: Document identifier
            owner_id: Requesting user

        Returns:
            DocumentModel or None when missing or owned by someone else
        """
        stmt = select(DocumentModel).where(
            DocumentModel.id == document_id,
            DocumentModel.owner_id == owner_id,
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_owner(
        self,
        session: AsyncSession,
        owner_id: str,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[DocumentModel]:
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.owner_id == owner_id)
            .order_by(DocumentModel.created_at.desc())
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_download_url(
        self,
        session: AsyncSession,
        document_id: str,
        owner_id: str,
    ) -> str:
        """
        Look up where a document's bytes can be fetched.

        Args:
            session: Async database session
            document_id: Document identifier
            owner_id: Requesting user

        Returns:
            str: Download URL

        Raises:
            MissingPreconditionError: Document unknown or has no download URL
        """
        document = await self.get_for_owner(session, document_id, owner_id)
        if document is None:
            raise MissingPreconditionError("Document not found", document_id=document_id)
        if not document.download_url:
            raise MissingPreconditionError("Document has no download URL", document_id=document_id)
        return document.download_url

    async def delete_for_owner(
        self,
        session: AsyncSession,
        document_id: str,
        owner_id: str,
    ) -> bool:
        """
        Delete a document record owned by the user.

        Returns:
            True if a record was deleted, False if none matched
        """
        stmt = delete(DocumentModel).where(
            DocumentModel.id == document_id,
            DocumentModel.owner_id == owner_id,
        )
        result = await session.execute(stmt)
        return result.rowcount > 0


document_crud = DocumentCRUD()
