"""
Chat service for conversational Q&A over one document.

Flow per question:
1. Load recent history for (document, conversation)
2. Ensure the document is ingested (first question builds the index)
3. Run the conversational RAG chain

Recording the exchange is a separate step (``record_exchange``) that the
caller performs only after it has a successful answer.

Dependencies: docchat.core.rag_chain, docchat.application.adapters,
    docchat.application.services.ingestion_service
System role: Chat service orchestration layer
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from docchat.application.adapters.chat_history_adapter import ChatHistoryAdapter, ChatTurn
from docchat.application.services.ingestion_service import IngestionService
from docchat.boundary.db.CRUD.document_crud import document_crud
from docchat.core.exceptions import (
    MissingPreconditionError,
    RAGPipelineError,
    ValidationError,
)
from docchat.core.rag_chain.rag_chain import ConversationalRAGChain
from docchat.core.rag_chain.rag_chain_schema import RAGAnswer

logger = logging.getLogger(__name__)


class ChatService:
    """Answers questions about a document using its conversation history."""

    def __init__(
        self,
        db: AsyncSession,
        ingestion_service: IngestionService,
        rag_chain: ConversationalRAGChain,
        top_k: int = 4,
        history_limit: int | None = None,
    ) -> None:
        """
        Initialize chat service.

        Args:
            db: AsyncSession for history reads and writes
            ingestion_service: On-demand ingestion
            rag_chain: Conversational RAG chain
            top_k: Chunks retrieved per question
            history_limit: Most recent turns fed to the chain (None = all)
        """
        self.db = db
        self.ingestion_service = ingestion_service
        self.rag_chain = rag_chain
        self.top_k = top_k
        self.history_limit = history_limit

    def _history(self, document_id: str, conversation_id: str) -> ChatHistoryAdapter:
        return ChatHistoryAdapter(document_id=document_id, conversation_id=conversation_id, db=self.db)

    async def ask(
        self,
        document_id: str,
        owner_id: str,
        question: str,
        conversation_id: str | None = None,
    ) -> RAGAnswer:
        """
        Answer a question about a document.

        Args:
            document_id: Document identifier
            owner_id: Requesting user
            question: User question
            conversation_id: Conversation identifier (defaults to owner_id)

        Returns:
            RAGAnswer: Answer with the retrieval query and sources

        Raises:
            ValidationError: Empty question
            MissingPreconditionError: Unknown document or no download URL
            RAGPipelineError: Any stage failed (history, ingest, rephrase,
                retrieve, synthesize)
        """
        if not question or not question.strip():
            raise ValidationError("question must be non-empty", field="question")

        conversation_id = conversation_id or owner_id
        logger.info(
            f"{__name__}:ask - START",
            extra={"document_id": document_id, "conversation_id": conversation_id},
        )

        try:
            chat_history = await self._history(document_id, conversation_id).get_messages(
                limit=self.history_limit
            )
        except Exception as e:
            raise RAGPipelineError(
                f"Loading chat history failed: {e}",
                stage="history",
                document_id=document_id,
            ) from e

        try:
            handle = await self.ingestion_service.ensure_ingested(document_id, owner_id)
        except MissingPreconditionError:
            raise
        except Exception as e:
            raise RAGPipelineError(
                f"Document ingestion failed: {e}",
                stage="ingest",
                document_id=document_id,
            ) from e

        return await self.rag_chain.ainvoke(
            question=question,
            chat_history=chat_history,
            retriever=handle.as_retriever(k=self.top_k),
        )

    async def record_exchange(
        self,
        document_id: str,
        conversation_id: str,
        question: str,
        answer: str,
    ) -> list[ChatTurn]:
        """Append the human question and assistant answer, in that order."""
        history = self._history(document_id, conversation_id)
        return [
            await history.add_user_message(question),
            await history.add_ai_message(answer),
        ]

    async def get_history(
        self,
        document_id: str,
        owner_id: str,
        conversation_id: str | None = None,
        limit: int | None = None,
    ) -> list[ChatTurn]:
        """
        Stored turns, oldest first.

        Raises:
            MissingPreconditionError: Document unknown for this owner
        """
        if await document_crud.get_for_owner(self.db, document_id, owner_id) is None:
            raise MissingPreconditionError("Document not found", document_id=document_id)
        history = self._history(document_id, conversation_id or owner_id)
        return await history.get_recent_turns(limit)
