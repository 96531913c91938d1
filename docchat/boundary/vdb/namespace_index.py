"""
Namespaced vector index contract.

A namespace is a named partition of one vector index; each document owns
the namespace equal to its document id. Backends map that id to whatever
their storage accepts via ``namespace_slug``.

Dependencies: docchat.boundary.vdb.vector_schemas
System role: Backend-agnostic interface for the vector index
"""

import hashlib
import re
from typing import Protocol, runtime_checkable

from docchat.boundary.vdb.vector_schemas import VectorMatch, VectorRecord

_UNSAFE = re.compile(r"[^a-z0-9-]+")


def namespace_slug(namespace: str, max_prefix: int = 24) -> str:
    """
    Map a namespace to a storage-safe, collision-resistant key.

    The readable prefix keeps keys recognisable in storage listings; the
    hash suffix keeps distinct namespaces distinct after normalisation.

    Args:
        namespace: Raw namespace (document id)
        max_prefix: Maximum length of the readable prefix

    Returns:
        str: Lowercase key of ``[a-z0-9-]`` characters
    """
    digest = hashlib.sha256(namespace.encode("utf-8")).hexdigest()[:16]
    prefix = _UNSAFE.sub("-", namespace.lower()).strip("-")[:max_prefix].strip("-")
    return f"{prefix}-{digest}" if prefix else digest


@runtime_checkable
class NamespacedVectorIndex(Protocol):
    """Async operations every vector backend provides."""

    async def namespace_exists(self, namespace: str) -> bool:
        """Return True when the namespace holds at least one vector."""
        ...

    async def upsert(self, namespace: str, records: list[VectorRecord]) -> None:
        """Insert or overwrite records (by id) in the namespace."""
        ...

    async def query(self, namespace: str, vector: list[float], top_k: int) -> list[VectorMatch]:
        """Return up to ``top_k`` nearest records, best first."""
        ...

    async def delete_namespace(self, namespace: str) -> None:
        """Remove every record in the namespace. Missing namespaces are ignored."""
        ...
