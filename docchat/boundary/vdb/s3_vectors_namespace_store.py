"""
S3 Vectors namespaced vector index for production.

Namespaces map to separate indexes inside one S3 Vectors bucket, named
``<index_name>-<namespace slug>``. An index is created on the first upsert
into its namespace; dropping the index deletes the namespace.

Metadata Keys:
- Filterable: document_id, sequence, start_index
- Non-filterable: text

Zero vectors (the embedding fallback default) are rejected by cosine
indexes; use the euclidean metric when those must be stored.

Dependencies: boto3 (s3vectors), tenacity
System role: Production vector index (S3 Vectors)
"""

import logging
from typing import Any

import boto3
from botocore.exceptions import ClientError
from fastapi.concurrency import run_in_threadpool
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from docchat.boundary.vdb.namespace_index import namespace_slug
from docchat.boundary.vdb.vector_schemas import VectorMatch, VectorRecord
from docchat.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)

TEXT_KEY = "text"
PUT_VECTORS_LIMIT = 500
THROTTLING_CODES = {"ThrottlingException", "TooManyRequestsException", "ServiceUnavailableException"}


def _error_code(error: ClientError) -> str:
    return error.response.get("Error", {}).get("Code", "")


def _is_throttled(error: BaseException) -> bool:
    return isinstance(error, ClientError) and _error_code(error) in THROTTLING_CODES


_retry_on_throttling = retry(
    retry=retry_if_exception(_is_throttled),
    stop=stop_after_attempt(5),
    wait=wait_exponential_jitter(initial=1, max=30, jitter=5),
    before_sleep=lambda retry_state: logger.warning(
        f"{__name__}:retry - Attempt {retry_state.attempt_number}/5 throttled"
    ),
    reraise=True,
)


class S3VectorsNamespaceStore:
    """One S3 Vectors index per namespace inside a shared vector bucket."""

    def __init__(
        self,
        vectors_bucket: str,
        index_name: str = "docchat",
        dimension: int = 768,
        distance_metric: str = "cosine",
        region: str = "us-east-1",
        client: Any = None,
    ) -> None:
        """
        Initialize S3 Vectors store.

        Args:
            vectors_bucket: S3 Vectors bucket name
            index_name: Prefix for per-namespace index names
            dimension: Vector dimension for newly created indexes
            distance_metric: "cosine" or "euclidean"
            region: AWS region
            client: Pre-built s3vectors client (created from region if None)
        """
        self._bucket = vectors_bucket
        self._index_prefix = index_name[:20].strip("-")
        self._dimension = dimension
        self._distance_metric = distance_metric
        self._client = client or boto3.client("s3vectors", region_name=region)

    def index_name_for(self, namespace: str) -> str:
        """S3 Vectors index name (3-63 chars, lowercase) for a namespace."""
        return f"{self._index_prefix}-{namespace_slug(namespace, max_prefix=16)}"

    @_retry_on_throttling
    def _namespace_exists_sync(self, namespace: str) -> bool:
        try:
            response = self._client.list_vectors(
                vectorBucketName=self._bucket,
                indexName=self.index_name_for(namespace),
                maxResults=1,
            )
        except ClientError as e:
            if _error_code(e) == "NotFoundException":
                return False
            raise
        return bool(response.get("vectors"))

    async def namespace_exists(self, namespace: str) -> bool:
        try:
            return await run_in_threadpool(self._namespace_exists_sync, namespace)
        except ClientError as e:
            logger.error(f"{__name__}:namespace_exists - ClientError: {e}", extra={"namespace": namespace})
            raise VectorStoreError(str(e), operation="describe", namespace=namespace) from e

    def _ensure_index(self, index_name: str) -> None:
        try:
            self._client.create_index(
                vectorBucketName=self._bucket,
                indexName=index_name,
                dataType="float32",
                dimension=self._dimension,
                distanceMetric=self._distance_metric,
                metadataConfiguration={"nonFilterableMetadataKeys": [TEXT_KEY]},
            )
            logger.info(f"{__name__}:_ensure_index - Created index {index_name}")
        except ClientError as e:
            if _error_code(e) != "ConflictException":
                raise

    @_retry_on_throttling
    def _put_vectors(self, index_name: str, vectors: list[dict[str, Any]]) -> None:
        self._client.put_vectors(
            vectorBucketName=self._bucket,
            indexName=index_name,
            vectors=vectors,
        )

    def _upsert_sync(self, namespace: str, records: list[VectorRecord]) -> None:
        index_name = self.index_name_for(namespace)
        self._ensure_index(index_name)

        vectors = [
            {
                "key": record.id,
                "data": {"float32": [float(value) for value in record.values]},
                "metadata": {**record.metadata, TEXT_KEY: record.text},
            }
            for record in records
        ]
        for start in range(0, len(vectors), PUT_VECTORS_LIMIT):
            self._put_vectors(index_name, vectors[start:start + PUT_VECTORS_LIMIT])

    async def upsert(self, namespace: str, records: list[VectorRecord]) -> None:
        if not records:
            return
        try:
            await run_in_threadpool(self._upsert_sync, namespace, records)
        except ClientError as e:
            logger.error(f"{__name__}:upsert - ClientError: {e}", extra={"namespace": namespace})
            raise VectorStoreError(str(e), operation="upsert", namespace=namespace) from e

        logger.info(
            f"{__name__}:upsert - Upserted {len(records)} vectors",
            extra={"namespace": namespace},
        )

    @_retry_on_throttling
    def _query_sync(self, namespace: str, vector: list[float], top_k: int) -> list[VectorMatch]:
        try:
            response = self._client.query_vectors(
                vectorBucketName=self._bucket,
                indexName=self.index_name_for(namespace),
                queryVector={"float32": [float(value) for value in vector]},
                topK=top_k,
                returnMetadata=True,
                returnDistance=True,
            )
        except ClientError as e:
            if _error_code(e) == "NotFoundException":
                return []
            raise

        matches = []
        for item in response.get("vectors", []):
            metadata = dict(item.get("metadata") or {})
            text = metadata.pop(TEXT_KEY, "")
            distance = float(item.get("distance", 0.0))
            # S3 Vectors returns distances; cosine distance is 1 - similarity
            score = 1.0 - distance if self._distance_metric == "cosine" else 1.0 / (1.0 + distance)
            matches.append(VectorMatch(id=item["key"], text=text, metadata=metadata, score=score))
        return matches

    async def query(self, namespace: str, vector: list[float], top_k: int) -> list[VectorMatch]:
        try:
            matches = await run_in_threadpool(self._query_sync, namespace, vector, top_k)
        except ClientError as e:
            logger.error(f"{__name__}:query - ClientError: {e}", extra={"namespace": namespace})
            raise VectorStoreError(str(e), operation="query", namespace=namespace) from e

        logger.info(
            f"{__name__}:query - Found {len(matches)} results",
            extra={"namespace": namespace, "k": top_k},
        )
        return matches

    @_retry_on_throttling
    def _delete_sync(self, namespace: str) -> None:
        try:
            self._client.delete_index(
                vectorBucketName=self._bucket,
                indexName=self.index_name_for(namespace),
            )
        except ClientError as e:
            if _error_code(e) != "NotFoundException":
                raise

    async def delete_namespace(self, namespace: str) -> None:
        try:
            await run_in_threadpool(self._delete_sync, namespace)
        except ClientError as e:
            logger.error(f"{__name__}:delete_namespace - ClientError: {e}", extra={"namespace": namespace})
            raise VectorStoreError(str(e), operation="delete", namespace=namespace) from e
        logger.info(f"{__name__}:delete_namespace - Namespace removed", extra={"namespace": namespace})
