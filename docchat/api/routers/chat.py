"""Chat API endpoints.

Routes:
- POST /documents/{document_id}/questions - Ask a question about a document
- GET /documents/{document_id}/history - Conversation history, oldest first

Dependencies: docchat.application.services.chat_service
System role: Question answering HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from docchat.api.deps import get_chat_service, get_current_user_id
from docchat.api.errors import to_http_exception
from docchat.application.services import ChatService
from docchat.core.exceptions import DocChatException, RAGPipelineError
from docchat.models.chat import (
    AnswerResponse,
    ChatHistoryResponse,
    ChatTurnResponse,
    QuestionRequest,
    SourceResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["chat"])


@router.post("/{document_id}/questions", response_model=AnswerResponse)
async def ask_question(
    document_id: str,
    request: QuestionRequest,
    user_id: str = Depends(get_current_user_id),
    chat_service: ChatService = Depends(get_chat_service),
) -> AnswerResponse:
    """Answer a question about a document with conversational memory.

    Flow:
    1. ChatService loads history, ingests on demand and runs the chain
    2. The question and answer are appended to history only on success

    Raises:
        HTTPException(404): Unknown document or no download URL
        HTTPException(422): Empty question
        HTTPException(502): A pipeline stage failed
    """
    conversation_id = request.conversation_id or user_id
    try:
        result = await chat_service.ask(
            document_id=document_id,
            owner_id=user_id,
            question=request.question,
            conversation_id=conversation_id,
        )
        await chat_service.record_exchange(
            document_id=document_id,
            conversation_id=conversation_id,
            question=request.question,
            answer=result.answer,
        )
    except RAGPipelineError as e:
        logger.error(
            f"{__name__}:ask_question - Pipeline failed at stage={e.stage}: {e}",
            extra={"document_id": document_id},
        )
        raise to_http_exception(e) from e
    except DocChatException as e:
        raise to_http_exception(e) from e
    except Exception as e:
        logger.error(f"{__name__}:ask_question - {type(e).__name__}: {e}")
        raise HTTPException(status_code=500, detail=f"Chat processing failed: {e}") from e

    return AnswerResponse(
        answer=result.answer,
        standalone_query=result.standalone_query,
        sources=[SourceResponse(**source.model_dump()) for source in result.sources],
    )


@router.get("/{document_id}/history", response_model=ChatHistoryResponse)
async def get_history(
    document_id: str,
    conversation_id: str | None = None,
    limit: int | None = None,
    user_id: str = Depends(get_current_user_id),
    chat_service: ChatService = Depends(get_chat_service),
) -> ChatHistoryResponse:
    """Conversation turns for a document the user owns, oldest first.

    Raises:
        HTTPException(404): Unknown document for this user
    """
    conversation_id = conversation_id or user_id
    try:
        turns = await chat_service.get_history(
            document_id,
            user_id,
            conversation_id=conversation_id,
            limit=limit,
        )
    except DocChatException as e:
        raise to_http_exception(e) from e
    return ChatHistoryResponse(
        document_id=document_id,
        conversation_id=conversation_id,
        turns=[ChatTurnResponse(**turn.model_dump()) for turn in turns],
        total=len(turns),
    )
