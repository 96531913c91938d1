"""
Document cleanup service.

Deletion workflow for a document: remove its metadata record and chat
history, then drop its vector namespace so no orphaned vectors remain.
Each step is attempted even when an earlier one fails; failures are
logged and reported back to the caller.

Dependencies: docchat.boundary.db, docchat.core.vector_index
System role: Deletion hook for documents
"""

import logging
from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from docchat.boundary.db.CRUD.chat_turn_crud import chat_turn_crud
from docchat.boundary.db.CRUD.document_crud import document_crud
from docchat.core.vector_index.index_manager import VectorIndexManager

logger = logging.getLogger(__name__)


@dataclass
class DeletionReport:
    """Outcome of each deletion step."""

    document_id: str
    record_deleted: bool = False
    history_turns_deleted: int = 0
    namespace_deleted: bool = False
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class DocumentCleanupService:
    """Removes a document and everything derived from it."""

    def __init__(self, db: AsyncSession, index_manager: VectorIndexManager) -> None:
        self.db = db
        self.index_manager = index_manager

    async def delete_document(self, document_id: str, owner_id: str) -> DeletionReport:
        """
        Delete the document record, its chat history and its namespace.

        The namespace is dropped only for a document the owner actually
        has (or had) a record for, so one user cannot purge another's
        vectors; a missing record still clears a stale namespace.

        Args:
            document_id: Document identifier
            owner_id: Requesting user

        Returns:
            DeletionReport: Per-step results and logged errors
        """
        report = DeletionReport(document_id=document_id)

        try:
            existing = await document_crud.get_by_id(self.db, document_id)
            foreign = existing is not None and existing.owner_id != owner_id
            if foreign:
                report.errors.append("record: document belongs to another owner")
                logger.warning(
                    f"{__name__}:delete_document - Owner mismatch, nothing deleted",
                    extra={"document_id": document_id},
                )
                return report

            report.record_deleted = await document_crud.delete_for_owner(self.db, document_id, owner_id)
            report.history_turns_deleted = await chat_turn_crud.delete_by_document(self.db, document_id)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            report.errors.append(f"record: {e}")
            logger.error(
                f"{__name__}:delete_document - Record deletion failed: {type(e).__name__}: {e}",
                extra={"document_id": document_id},
            )

        try:
            await self.index_manager.delete_namespace(document_id)
            report.namespace_deleted = True
        except Exception as e:
            report.errors.append(f"namespace: {e}")
            logger.error(
                f"{__name__}:delete_document - Namespace deletion failed: {type(e).__name__}: {e}",
                extra={"document_id": document_id},
            )

        logger.info(
            f"{__name__}:delete_document - DONE record={report.record_deleted}, "
            f"turns={report.history_turns_deleted}, namespace={report.namespace_deleted}",
            extra={"document_id": document_id},
        )
        return report
