"""
FAISS namespaced vector index for local development.

Each namespace is its own FAISS index persisted under ``index_dir`` as
``<slug>.faiss`` / ``<slug>.pkl``. Existence of the ``.faiss`` file is the
namespace-exists signal, and deleting a namespace removes both files.

FAISS calls are synchronous, so every operation runs in the threadpool.

Dependencies: faiss-cpu, langchain_community.vectorstores.FAISS
System role: Local vector index
"""

import logging
import threading
from pathlib import Path

from fastapi.concurrency import run_in_threadpool
from langchain_community.vectorstores import FAISS
from langchain_core.embeddings import Embeddings

from docchat.boundary.vdb.namespace_index import namespace_slug
from docchat.boundary.vdb.vector_schemas import VectorMatch, VectorRecord
from docchat.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)

VECTOR_ID_KEY = "vector_id"


class FAISSNamespaceStore:
    """
    One FAISS index per namespace, persisted to disk.

    Scores are ``1 / (1 + l2_distance)`` so higher means closer, matching
    the S3 backend's ordering.
    """

    def __init__(self, embeddings: Embeddings, index_dir: str | Path = "/tmp/.docchat_faiss") -> None:
        """
        Initialize FAISS store.

        Args:
            embeddings: Embedding function FAISS keeps for text queries
            index_dir: Directory holding one index file pair per namespace
        """
        self._embeddings = embeddings
        self._index_dir = Path(index_dir)
        self._index_dir.mkdir(parents=True, exist_ok=True)
        self._write_lock = threading.Lock()
        logger.info(f"{__name__}:__init__ - FAISS index dir: {self._index_dir}")

    def _index_path(self, namespace: str) -> Path:
        return self._index_dir / f"{namespace_slug(namespace)}.faiss"

    def _load(self, namespace: str) -> FAISS | None:
        if not self._index_path(namespace).exists():
            return None
        return FAISS.load_local(
            str(self._index_dir),
            self._embeddings,
            index_name=namespace_slug(namespace),
            allow_dangerous_deserialization=True,
        )

    async def namespace_exists(self, namespace: str) -> bool:
        return await run_in_threadpool(self._index_path(namespace).exists)

    def _upsert_sync(self, namespace: str, records: list[VectorRecord]) -> None:
        # Last record wins for duplicate ids within one call
        unique = list({record.id: record for record in records}.values())
        text_embeddings = [(record.text, record.values) for record in unique]
        metadatas = [{**record.metadata, VECTOR_ID_KEY: record.id} for record in unique]
        ids = [record.id for record in unique]

        with self._write_lock:
            store = self._load(namespace)
            if store is None:
                store = FAISS.from_embeddings(
                    text_embeddings,
                    self._embeddings,
                    metadatas=metadatas,
                    ids=ids,
                )
            else:
                known = set(store.index_to_docstore_id.values())
                stale = [vector_id for vector_id in ids if vector_id in known]
                if stale:
                    store.delete(ids=stale)
                store.add_embeddings(text_embeddings, metadatas=metadatas, ids=ids)
            store.save_local(str(self._index_dir), index_name=namespace_slug(namespace))

    async def upsert(self, namespace: str, records: list[VectorRecord]) -> None:
        if not records:
            return
        try:
            await run_in_threadpool(self._upsert_sync, namespace, records)
        except Exception as e:
            logger.error(f"{__name__}:upsert - {type(e).__name__}: {e}", extra={"namespace": namespace})
            raise VectorStoreError(str(e), operation="upsert", namespace=namespace) from e

        logger.info(
            f"{__name__}:upsert - Upserted {len(records)} vectors",
            extra={"namespace": namespace},
        )

    def _query_sync(self, namespace: str, vector: list[float], top_k: int) -> list[VectorMatch]:
        store = self._load(namespace)
        if store is None:
            return []
        results = store.similarity_search_with_score_by_vector(vector, k=top_k)

        matches = []
        for doc, distance in results:
            metadata = dict(doc.metadata or {})
            vector_id = metadata.pop(VECTOR_ID_KEY, "")
            matches.append(
                VectorMatch(
                    id=vector_id,
                    text=doc.page_content,
                    metadata=metadata,
                    score=1.0 / (1.0 + float(distance)),
                )
            )
        return matches

    async def query(self, namespace: str, vector: list[float], top_k: int) -> list[VectorMatch]:
        try:
            matches = await run_in_threadpool(self._query_sync, namespace, vector, top_k)
        except Exception as e:
            logger.error(f"{__name__}:query - {type(e).__name__}: {e}", extra={"namespace": namespace})
            raise VectorStoreError(str(e), operation="query", namespace=namespace) from e

        logger.info(
            f"{__name__}:query - Found {len(matches)} results",
            extra={"namespace": namespace, "k": top_k},
        )
        return matches

    def _delete_sync(self, namespace: str) -> None:
        slug = namespace_slug(namespace)
        with self._write_lock:
            for suffix in (".faiss", ".pkl"):
                (self._index_dir / f"{slug}{suffix}").unlink(missing_ok=True)

    async def delete_namespace(self, namespace: str) -> None:
        try:
            await run_in_threadpool(self._delete_sync, namespace)
        except OSError as e:
            raise VectorStoreError(str(e), operation="delete", namespace=namespace) from e
        logger.info(f"{__name__}:delete_namespace - Namespace removed", extra={"namespace": namespace})
