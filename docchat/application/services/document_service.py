"""
Document service.

Registers uploaded documents (id, owner, name, download URL) and reads
them back for their owner. The upload itself happens elsewhere; this is
the metadata store the ingestion path reads download URLs from.

Dependencies: docchat.boundary.db.CRUD.document_crud
System role: Document metadata business logic
"""

import logging
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.CRUD.document_crud import document_crud
from docchat.boundary.db.models.document_model import DocumentModel
from docchat.core.exceptions import MissingPreconditionError, ValidationError

logger = logging.getLogger(__name__)


class DocumentService:
    """Document metadata operations scoped to an owner."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def register(
        self,
        document_id: str,
        owner_id: str,
        name: str,
        download_url: str,
    ) -> DocumentModel:
        """
        Record a finished upload.

        Raises:
            ValidationError: A document with this id already exists
        """
        if await document_crud.get_by_id(self.db, document_id) is not None:
            raise ValidationError(f"Document {document_id} already exists", field="document_id")

        document = await document_crud.create(
            self.db,
            id=document_id,
            owner_id=owner_id,
            name=name,
            download_url=download_url,
        )
        logger.info(f"{__name__}:register - Registered document", extra={"document_id": document_id})
        return document

    async def get(self, document_id: str, owner_id: str) -> DocumentModel:
        """
        Raises:
            MissingPreconditionError: Unknown document for this owner
        """
        document = await document_crud.get_for_owner(self.db, document_id, owner_id)
        if document is None:
            raise MissingPreconditionError("Document not found", document_id=document_id)
        return document

    async def list_for_owner(self, owner_id: str, limit: int | None = None) -> Sequence[DocumentModel]:
        return await document_crud.get_by_owner(self.db, owner_id, limit=limit)
