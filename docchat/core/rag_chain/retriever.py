"""
LangChain retriever over one document namespace.

Dependencies: langchain_core.retrievers, docchat.core.vector_index
System role: Query-time retrieval for the conversational RAG chain
"""

from langchain_core.callbacks import (
    AsyncCallbackManagerForRetrieverRun,
    CallbackManagerForRetrieverRun,
)
from langchain_core.documents import Document
from langchain_core.retrievers import BaseRetriever

from docchat.core.vector_index.index_manager import NamespaceHandle


class NamespaceRetriever(BaseRetriever):
    """
    Embeds the query and returns the k nearest chunks of one namespace.

    Async only: the namespaced index exposes coroutines exclusively.
    """

    handle: NamespaceHandle
    k: int = 4

    def _get_relevant_documents(
        self,
        query: str,
        *,
        run_manager: CallbackManagerForRetrieverRun,
    ) -> list[Document]:
        raise NotImplementedError("NamespaceRetriever is async-only; use ainvoke()")

    async def _aget_relevant_documents(
        self,
        query: str,
        *,
        run_manager: AsyncCallbackManagerForRetrieverRun,
    ) -> list[Document]:
        return await self.handle.similarity_search(query, k=self.k)
