"""
Vector index factory for selecting between FAISS (dev) and S3 Vectors (prod).

Depends on VECTOR_STORE_STORE_TYPE. Both backends satisfy
NamespacedVectorIndex, so callers never branch on the backend.

Dependencies: docchat.boundary.vdb, docchat.configs
System role: Vector index instantiation and selection
"""

import logging

from langchain_core.embeddings import Embeddings

from docchat.boundary.vdb.namespace_index import NamespacedVectorIndex
from docchat.configs.settings import Settings

logger = logging.getLogger(__name__)


def get_vector_index(settings: Settings, embeddings: Embeddings) -> NamespacedVectorIndex:
    """
    Build the configured vector index backend.

    Args:
        settings: Application settings
        embeddings: Embedding function (FAISS keeps it for text queries)

    Returns:
        NamespacedVectorIndex: FAISSNamespaceStore or S3VectorsNamespaceStore

    Raises:
        ValueError: If the store type is unknown
    """
    store_type = settings.vector_store.store_type.lower()

    if store_type == "faiss":
        from docchat.boundary.vdb.faiss_namespace_store import FAISSNamespaceStore

        logger.info(f"{__name__}:get_vector_index - Creating FAISS index (local dev mode)")
        return FAISSNamespaceStore(
            embeddings=embeddings,
            index_dir=settings.vector_store.faiss_index_dir,
        )

    if store_type == "s3":
        from docchat.boundary.vdb.s3_vectors_namespace_store import S3VectorsNamespaceStore

        logger.info(f"{__name__}:get_vector_index - Creating S3 Vectors index (production mode)")
        return S3VectorsNamespaceStore(
            vectors_bucket=settings.vector_store.vectors_bucket,
            index_name=settings.vector_store.index_name,
            dimension=settings.embedding.dimension,
            distance_metric=settings.vector_store.distance_metric,
            region=settings.vector_store.aws_region,
        )

    raise ValueError(
        f"Invalid vector store type: {store_type}. "
        f"Must be 'faiss' (dev) or 's3' (production)."
    )
