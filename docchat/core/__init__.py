"""
Core domain layer.

Chunking, embedding, namespaced indexing and the conversational RAG chain.
"""
