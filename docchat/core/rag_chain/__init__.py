"""
Conversational RAG chain.

Exports:
  - ConversationalRAGChain: rephrase -> retrieve -> synthesize
  - NamespaceRetriever: LangChain retriever over one document namespace
  - RAGAnswer, RAGSource: chain output
"""

from docchat.core.rag_chain.rag_chain import ConversationalRAGChain
from docchat.core.rag_chain.rag_chain_schema import RAGAnswer, RAGSource
from docchat.core.rag_chain.retriever import NamespaceRetriever

__all__ = [
    "ConversationalRAGChain",
    "NamespaceRetriever",
    "RAGAnswer",
    "RAGSource",
]
