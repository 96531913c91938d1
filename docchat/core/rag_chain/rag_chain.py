"""
Conversational retrieval-augmented chain.

Answers one question about one document in four strictly sequential
stages: the caller supplies history, then the chain rephrases, retrieves
and synthesizes. Unlike embedding, nothing here degrades silently: every
stage failure (including no retrieved chunks and an empty answer) raises
RAGPipelineError tagged with the stage, chained to its cause.

Dependencies: langchain_core, langchain_google_genai
System role: Question answering over a document namespace
"""

import logging

from langchain_core.documents import Document
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage
from langchain_core.output_parsers import StrOutputParser
from langchain_core.retrievers import BaseRetriever

from docchat.configs.llm import LLMSettings
from docchat.core.exceptions import RAGPipelineError, ValidationError
from docchat.core.rag_chain.rag_chain_prompt import (
    ANSWER_PROMPT,
    CONTEXT_SEPARATOR,
    REPHRASE_PROMPT,
)
from docchat.core.rag_chain.rag_chain_schema import RAGAnswer, RAGSource

logger = logging.getLogger(__name__)


class ConversationalRAGChain:
    """History-aware retrieval chain with an explicit stage per step."""

    def __init__(self, llm: BaseChatModel) -> None:
        """
        Initialize chain.

        Args:
            llm: Chat model used for both rephrasing and synthesis
        """
        self._llm = llm
        self._rephrase_chain = REPHRASE_PROMPT | llm | StrOutputParser()
        self._answer_chain = ANSWER_PROMPT | llm | StrOutputParser()

    @classmethod
    def from_settings(cls, settings: LLMSettings) -> "ConversationalRAGChain":
        """Build the chain around a Gemini chat model."""
        from langchain_google_genai import ChatGoogleGenerativeAI

        api_key = settings.google_api_key.get_secret_value()
        model_kwargs = {"google_api_key": api_key} if api_key else {}
        llm = ChatGoogleGenerativeAI(
            model=settings.chat_model,
            temperature=settings.temperature,
            max_output_tokens=settings.max_output_tokens,
            **model_kwargs,
        )
        return cls(llm)

    async def rephrase(self, question: str, chat_history: list[BaseMessage]) -> str:
        """
        Produce a standalone search query.

        With no history the question already stands alone and is returned
        unchanged without calling the model.
        """
        if not chat_history:
            return question

        try:
            query = await self._rephrase_chain.ainvoke({
                "chat_history": chat_history,
                "input": question,
            })
        except Exception as e:
            raise RAGPipelineError(f"Query rephrase failed: {e}", stage="rephrase") from e

        query = query.strip()
        if not query:
            raise RAGPipelineError("Model returned an empty search query", stage="rephrase")
        return query

    async def retrieve(self, query: str, retriever: BaseRetriever) -> list[Document]:
        """
        Fetch the nearest chunks for the query.

        Raises:
            RAGPipelineError: Retrieval failed or found nothing
        """
        try:
            documents = await retriever.ainvoke(query)
        except Exception as e:
            raise RAGPipelineError(f"Retrieval failed: {e}", stage="retrieve") from e

        if not documents:
            raise RAGPipelineError(
                "No indexed content found for this document",
                stage="retrieve",
            )
        return documents

    async def synthesize(
        self,
        question: str,
        chat_history: list[BaseMessage],
        documents: list[Document],
    ) -> str:
        """
        Answer the original question from the retrieved context.

        Raises:
            RAGPipelineError: Model call failed or returned an empty answer
        """
        context = CONTEXT_SEPARATOR.join(doc.page_content for doc in documents)
        try:
            answer = await self._answer_chain.ainvoke({
                "context": context,
                "chat_history": chat_history,
                "input": question,
            })
        except Exception as e:
            raise RAGPipelineError(f"Answer synthesis failed: {e}", stage="synthesize") from e

        if not answer.strip():
            raise RAGPipelineError("Model returned an empty answer", stage="synthesize")
        return answer

    async def ainvoke(
        self,
        question: str,
        chat_history: list[BaseMessage],
        retriever: BaseRetriever,
    ) -> RAGAnswer:
        """
        Answer a question against one document.

        Args:
            question: User question
            chat_history: Prior turns, oldest first
            retriever: Retriever bound to the document namespace

        Returns:
            RAGAnswer: Answer, the query used for retrieval and the sources

        Raises:
            ValidationError: Empty question
            RAGPipelineError: Any stage failed
        """
        if not question or not question.strip():
            raise ValidationError("question must be non-empty", field="question")

        logger.info(
            f"{__name__}:ainvoke - START question_len={len(question)}, history_len={len(chat_history)}"
        )

        standalone_query = await self.rephrase(question, chat_history)
        documents = await self.retrieve(standalone_query, retriever)
        answer = await self.synthesize(question, chat_history, documents)

        sources = [
            RAGSource(
                vector_id=doc.metadata.get("vector_id", ""),
                sequence=doc.metadata.get("sequence"),
                content_snippet=doc.page_content[:200],
                score=float(doc.metadata.get("score", 0.0)),
            )
            for doc in documents
        ]

        logger.info(
            f"{__name__}:ainvoke - DONE sources={len(sources)}, answer_len={len(answer)}"
        )
        return RAGAnswer(answer=answer, standalone_query=standalone_query, sources=sources)
