"""
DocChat: chat with an uploaded document.

Ingests a document into a namespaced vector index once and answers
questions about it with a history-aware retrieval-augmented chain.
"""

__version__ = "0.1.0"
