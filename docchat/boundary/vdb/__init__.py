"""
Vector database boundary.

Namespaced vector index contract and its FAISS / S3 Vectors backends.
"""

from docchat.boundary.vdb.namespace_index import NamespacedVectorIndex, namespace_slug
from docchat.boundary.vdb.vector_schemas import VectorMatch, VectorRecord
from docchat.boundary.vdb.vector_store_factory import get_vector_index

__all__ = [
    "NamespacedVectorIndex",
    "VectorMatch",
    "VectorRecord",
    "get_vector_index",
    "namespace_slug",
]
