"""
Test suite for EmbeddingService.

Covers fixed output dimension on every path, order preservation under
out-of-order completion, batching with pauses, and the LangChain
Embeddings interface.

System role: Verification of embedding generation
"""

import random
from unittest.mock import AsyncMock, patch

import pytest

from docchat.core.embeddings.embedding_service import EmbeddingService
from tests.fakes import TEST_DIMENSION, FakeEmbeddingModel


class TestEmbeddingServiceInit:
    """Test suite for EmbeddingService construction."""

    def test_init_should_reject_non_positive_batch_size(self, fake_embedding_model: FakeEmbeddingModel) -> None:
        with pytest.raises(ValueError, match="batch_size"):
            EmbeddingService(model=fake_embedding_model, dimension=TEST_DIMENSION, batch_size=0)

    def test_init_should_build_policy_from_dimension(self, fake_embedding_model: FakeEmbeddingModel) -> None:
        service = EmbeddingService(model=fake_embedding_model, dimension=16, max_chars=100)

        assert service.policy.dimension == 16
        assert service.policy.max_chars == 100


class TestEmbeddingServiceEmbed:
    """Test suite for EmbeddingService.embed()."""

    @pytest.mark.parametrize(
        "text",
        ["Hello world.", "", "   ", "@@@###", "x" * 5000, "Ünïcödé text 123"],
    )
    async def test_embed_should_always_return_configured_dimension(
        self,
        embedding_service: EmbeddingService,
        text: str,
    ) -> None:
        vector = await embedding_service.embed(text)

        assert len(vector) == TEST_DIMENSION

    async def test_embed_should_not_call_model_for_symbol_only_text(
        self,
        embedding_service: EmbeddingService,
        fake_embedding_model: FakeEmbeddingModel,
    ) -> None:
        vector = await embedding_service.embed("  !@#$%^&*  ")

        assert vector == [0.0] * TEST_DIMENSION
        assert fake_embedding_model.calls == []

    async def test_embed_should_absorb_model_failure(
        self,
        embedding_service: EmbeddingService,
        fake_embedding_model: FakeEmbeddingModel,
    ) -> None:
        # Arrange
        fake_embedding_model.fail_on["boom"] = ConnectionError("unreachable")

        # Act
        vector = await embedding_service.embed("boom goes the network")

        # Assert
        assert vector == [0.0] * TEST_DIMENSION

    async def test_embed_should_use_fallback_after_safety_block(
        self,
        embedding_service: EmbeddingService,
        fake_embedding_model: FakeEmbeddingModel,
    ) -> None:
        # Arrange: the capitalised primary text is blocked, the lowercased fallback is not
        fake_embedding_model.fail_on["Risky"] = RuntimeError("blocked by SAFETY filter")

        # Act
        vector = await embedding_service.embed("Risky content 42!")

        # Assert
        assert fake_embedding_model.calls == ["Risky content 42!", "risky content n"]
        assert vector == fake_embedding_model._vector("risky content n")


class TestEmbeddingServiceEmbedBatch:
    """Test suite for EmbeddingService.embed_batch()."""

    async def test_embed_batch_should_preserve_order_under_random_delays(
        self,
        embedding_service: EmbeddingService,
        fake_embedding_model: FakeEmbeddingModel,
    ) -> None:
        # Arrange
        texts = [f"text number {i}" for i in range(12)]
        rng = random.Random(7)
        for text in texts:
            fake_embedding_model.delays[text] = rng.uniform(0.0, 0.02)

        # Act
        vectors = await embedding_service.embed_batch(texts)

        # Assert
        assert len(vectors) == len(texts)
        for text, vector in zip(texts, vectors):
            assert vector == fake_embedding_model._vector(text)

    async def test_embed_batch_should_pause_between_batches_only(
        self,
        fake_embedding_model: FakeEmbeddingModel,
    ) -> None:
        # Arrange
        service = EmbeddingService(
            model=fake_embedding_model,
            dimension=TEST_DIMENSION,
            batch_size=5,
            batch_pause_seconds=0.1,
        )
        texts = [f"chunk {i}" for i in range(11)]

        # Act
        with patch(
            "docchat.core.embeddings.embedding_service.asyncio.sleep",
            new_callable=AsyncMock,
        ) as mock_sleep:
            vectors = await service.embed_batch(texts)

        # Assert: 3 batches (5, 5, 1) -> 2 pauses
        assert len(vectors) == 11
        assert mock_sleep.await_count == 2
        mock_sleep.assert_awaited_with(0.1)

    async def test_embed_batch_should_isolate_failures(
        self,
        embedding_service: EmbeddingService,
        fake_embedding_model: FakeEmbeddingModel,
    ) -> None:
        fake_embedding_model.fail_on["bad"] = TimeoutError("slow")

        vectors = await embedding_service.embed_batch(["good one", "bad one", "good two"])

        assert vectors[0] == fake_embedding_model._vector("good one")
        assert vectors[1] == [0.0] * TEST_DIMENSION
        assert vectors[2] == fake_embedding_model._vector("good two")

    async def test_embed_batch_should_return_empty_for_empty_input(
        self,
        embedding_service: EmbeddingService,
    ) -> None:
        assert await embedding_service.embed_batch([]) == []


class TestEmbeddingServiceLangChainInterface:
    """Test suite for the Embeddings interface methods."""

    def test_embed_query_should_sanitize_and_return_dimension(
        self,
        embedding_service: EmbeddingService,
        fake_embedding_model: FakeEmbeddingModel,
    ) -> None:
        vector = embedding_service.embed_query("Hello   <world>")

        assert len(vector) == TEST_DIMENSION
        assert fake_embedding_model.calls == ["Hello world"]

    def test_embed_documents_should_preserve_order(
        self,
        embedding_service: EmbeddingService,
        fake_embedding_model: FakeEmbeddingModel,
    ) -> None:
        texts = [f"doc {i}" for i in range(7)]

        vectors = embedding_service.embed_documents(texts)

        assert vectors == [fake_embedding_model._vector(text) for text in texts]

    async def test_aembed_documents_should_delegate_to_embed_batch(
        self,
        embedding_service: EmbeddingService,
    ) -> None:
        vectors = await embedding_service.aembed_documents(["a", "b"])

        assert len(vectors) == 2
        assert all(len(vector) == TEST_DIMENSION for vector in vectors)
