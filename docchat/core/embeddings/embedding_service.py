"""
Embedding service.

Turns text into fixed-length vectors for indexing and retrieval. Every
input yields exactly one vector of the configured dimension: sanitization,
the content-safety fallback and the zero-vector default live in
EmbeddingFallbackPolicy, so no embedding failure escapes this service.

Batches are embedded ``batch_size`` texts at a time, concurrently within a
batch, with a short pause between batches. Output order always matches
input order.

Implements the LangChain ``Embeddings`` interface so the service can be
handed to LangChain vector stores and retrievers directly.

Dependencies: langchain_core.embeddings, docchat.core.embeddings.fallback_policy
System role: Embedding generation for ingestion and query retrieval
"""

import asyncio
import logging
import time

from langchain_core.embeddings import Embeddings

from docchat.configs.embedding import EmbeddingSettings
from docchat.core.embeddings.fallback_policy import (
    EmbeddingFallbackPolicy,
    EmbeddingOutcome,
)
from docchat.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


class EmbeddingService(Embeddings):
    """Sanitizing, failure-absorbing, rate-paced embedding service."""

    def __init__(
        self,
        model: Embeddings,
        dimension: int = 768,
        max_chars: int = 2000,
        batch_size: int = 5,
        batch_pause_seconds: float = 0.1,
        policy: EmbeddingFallbackPolicy | None = None,
    ) -> None:
        """
        Initialize embedding service.

        Args:
            model: Remote embedding model (one request per text)
            dimension: Length of every returned vector
            max_chars: Truncation length for sanitized text
            batch_size: Texts embedded concurrently per batch
            batch_pause_seconds: Pause between consecutive batches
            policy: Retry ladder override (built from dimension/max_chars if None)

        Raises:
            ValueError: When batch_size or dimension is not positive
        """
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        if dimension <= 0:
            raise ValueError("dimension must be positive")

        self._model = model
        self.dimension = dimension
        self.batch_size = batch_size
        self.batch_pause_seconds = batch_pause_seconds
        self.policy = policy or EmbeddingFallbackPolicy(
            dimension=dimension,
            max_chars=max_chars,
        )

    @classmethod
    def from_settings(cls, settings: EmbeddingSettings, google_api_key: str = "") -> "EmbeddingService":
        """
        Build the service around a Gemini embedding model.

        Args:
            settings: Embedding settings
            google_api_key: API key (empty means GOOGLE_API_KEY from the environment)

        Returns:
            EmbeddingService: Configured service
        """
        from docchat.core.embeddings.gemini_embeddings import FixedDimensionEmbeddings

        model_kwargs = {"google_api_key": google_api_key} if google_api_key else {}
        model = FixedDimensionEmbeddings(
            model=settings.model,
            output_dimensionality=settings.dimension,
            **model_kwargs,
        )
        return cls(
            model=model,
            dimension=settings.dimension,
            max_chars=settings.max_chars,
            batch_size=settings.batch_size,
            batch_pause_seconds=settings.batch_pause_seconds,
        )

    async def embed_with_outcome(self, text: str) -> EmbeddingOutcome:
        """Embed one text and report which ladder rung produced the vector."""
        return await self.policy.aembed(text, self._model.aembed_query)

    async def embed(self, text: str) -> list[float]:
        """
        Embed a single text.

        Args:
            text: Raw text (chunk or query)

        Returns:
            list[float]: Vector of ``dimension`` floats (zero-filled on failure)
        """
        outcome = await self.embed_with_outcome(text)
        return outcome.vector

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """
        Embed texts in paced, concurrent batches.

        Args:
            texts: Raw texts

        Returns:
            list[list[float]]: One vector per input, in input order
        """
        vectors: list[list[float]] = []
        degraded = 0
        total_batches = (len(texts) + self.batch_size - 1) // self.batch_size

        for batch_number, start in enumerate(range(0, len(texts), self.batch_size), start=1):
            batch = texts[start:start + self.batch_size]
            outcomes = await asyncio.gather(*(self.embed_with_outcome(text) for text in batch))
            vectors.extend(outcome.vector for outcome in outcomes)
            degraded += sum(1 for outcome in outcomes if outcome.degraded)

            logger.debug(f"{__name__}:embed_batch - Batch {batch_number}/{total_batches} done")
            if start + self.batch_size < len(texts):
                await asyncio.sleep(self.batch_pause_seconds)

        if degraded:
            log_with_context(
                logger,
                logging.WARNING,
                f"{__name__}:embed_batch - Some texts fell back to zero embeddings",
                degraded=degraded,
                total=len(texts),
            )
        return vectors

    # LangChain Embeddings interface

    async def aembed_query(self, text: str) -> list[float]:
        return await self.embed(text)

    async def aembed_documents(self, texts: list[str]) -> list[list[float]]:
        return await self.embed_batch(texts)

    def embed_query(self, text: str) -> list[float]:
        return self.policy.embed(text, self._model.embed_query).vector

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        vectors: list[list[float]] = []
        for start in range(0, len(texts), self.batch_size):
            batch = texts[start:start + self.batch_size]
            vectors.extend(self.embed_query(text) for text in batch)
            if start + self.batch_size < len(texts):
                time.sleep(self.batch_pause_seconds)
        return vectors
