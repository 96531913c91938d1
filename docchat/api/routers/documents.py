"""Document API endpoints.

Routes:
- POST /documents - Register an uploaded document
- GET /documents - List the user's documents
- GET /documents/{document_id} - Document metadata
- POST /documents/{document_id}/embeddings - Ensure the document is indexed
- DELETE /documents/{document_id} - Delete document, history and vectors

Dependencies: docchat.application.services
System role: Document lifecycle HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from docchat.api.deps import (
    get_cleanup_service,
    get_current_user_id,
    get_document_service,
    get_ingestion_service,
)
from docchat.api.errors import to_http_exception
from docchat.application.services import (
    DocumentCleanupService,
    DocumentService,
    IngestionService,
)
from docchat.core.exceptions import DocChatException
from docchat.models.document import (
    DeletionResponse,
    DocumentCreateRequest,
    DocumentListResponse,
    DocumentResponse,
    IngestionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def register_document(
    request: DocumentCreateRequest,
    user_id: str = Depends(get_current_user_id),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """Record a finished upload so it can be ingested and queried."""
    try:
        document = await document_service.register(
            document_id=request.id,
            owner_id=user_id,
            name=request.name,
            download_url=str(request.download_url),
        )
    except DocChatException as e:
        raise to_http_exception(e) from e
    return DocumentResponse.model_validate(document)


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    limit: int | None = None,
    user_id: str = Depends(get_current_user_id),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentListResponse:
    documents = await document_service.list_for_owner(user_id, limit=limit)
    return DocumentListResponse(
        documents=[DocumentResponse.model_validate(doc) for doc in documents],
        total=len(documents),
    )


@router.get("/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str,
    user_id: str = Depends(get_current_user_id),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    try:
        document = await document_service.get(document_id, user_id)
    except DocChatException as e:
        raise to_http_exception(e) from e
    return DocumentResponse.model_validate(document)


@router.post("/{document_id}/embeddings", response_model=IngestionResponse)
async def create_embeddings(
    document_id: str,
    user_id: str = Depends(get_current_user_id),
    ingestion_service: IngestionService = Depends(get_ingestion_service),
) -> IngestionResponse:
    """Embed and index the document unless it is already indexed.

    Raises:
        HTTPException(404): Unknown document or no download URL
        HTTPException(502): Download, extraction or vector index failure
    """
    try:
        handle = await ingestion_service.ensure_ingested(document_id, user_id)
    except DocChatException as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.error(f"{__name__}:create_embeddings - {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail=f"Ingestion failed: {e}") from e

    return IngestionResponse(
        document_id=document_id,
        namespace=handle.namespace,
        created=handle.created,
        chunk_count=handle.chunk_count,
    )


@router.delete("/{document_id}", response_model=DeletionResponse)
async def delete_document(
    document_id: str,
    user_id: str = Depends(get_current_user_id),
    cleanup_service: DocumentCleanupService = Depends(get_cleanup_service),
) -> DeletionResponse:
    """Delete the document record, its chat history and its vectors.

    Steps are independent: the response lists any step that failed.
    """
    report = await cleanup_service.delete_document(document_id, user_id)
    return DeletionResponse(
        document_id=report.document_id,
        record_deleted=report.record_deleted,
        history_turns_deleted=report.history_turns_deleted,
        namespace_deleted=report.namespace_deleted,
        errors=report.errors,
    )
