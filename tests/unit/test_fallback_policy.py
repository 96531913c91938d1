"""
Test suite for the embedding fallback policy.

Exercises the retry ladder with plain functions instead of a network
client: sanitization, empty-input short circuit, safety fallback and the
zero-vector default.

System role: Verification of embedding failure policy
"""

import pytest

from docchat.core.embeddings.fallback_policy import (
    EmbeddingFallbackPolicy,
    EmbeddingPath,
    aggressive_sanitize,
    is_safety_rejection,
    sanitize_text,
)

DIMENSION = 4


@pytest.fixture
def policy() -> EmbeddingFallbackPolicy:
    return EmbeddingFallbackPolicy(dimension=DIMENSION, max_chars=50)


class TestSanitizeText:
    """Test suite for sanitize_text()."""

    def test_should_strip_disallowed_characters(self) -> None:
        assert sanitize_text("Hello, <world>! #1 @home?") == "Hello, world! 1 home?"

    def test_should_collapse_and_trim_whitespace(self) -> None:
        assert sanitize_text("  a \n\n b\t\tc  ") == "a b c"

    def test_should_truncate(self) -> None:
        assert sanitize_text("x" * 3000) == "x" * 2000
        assert sanitize_text("abcdef", max_chars=3) == "abc"

    def test_symbol_only_text_should_become_empty(self) -> None:
        assert sanitize_text("  @#$%^&*()  ") == ""

    def test_should_keep_unicode_word_characters(self) -> None:
        assert sanitize_text("Grüße aus Köln") == "Grüße aus Köln"


class TestAggressiveSanitize:
    """Test suite for aggressive_sanitize()."""

    def test_should_drop_punctuation_replace_digits_and_lowercase(self) -> None:
        assert aggressive_sanitize("Call 555-1234, NOW!") == "call n n now"

    def test_should_return_empty_for_punctuation_only(self) -> None:
        assert aggressive_sanitize("...,,,!!!") == ""


class TestIsSafetyRejection:
    """Test suite for is_safety_rejection()."""

    @pytest.mark.parametrize("message", ["Response blocked: SAFETY", "request was Blocked", "finish_reason=safety"])
    def test_should_detect_safety_messages(self, message: str) -> None:
        assert is_safety_rejection(RuntimeError(message))

    def test_should_ignore_other_errors(self) -> None:
        assert not is_safety_rejection(TimeoutError("deadline exceeded"))


class TestEmbeddingFallbackPolicy:
    """Test suite for EmbeddingFallbackPolicy.embed() / aembed()."""

    def test_primary_success_should_use_sanitized_text(self, policy: EmbeddingFallbackPolicy) -> None:
        # Arrange
        seen = []

        def call(text: str) -> list[float]:
            seen.append(text)
            return [1.0, 2.0, 3.0, 4.0]

        # Act
        outcome = policy.embed("Hello <b>world</b>", call)

        # Assert
        assert outcome.path == EmbeddingPath.PRIMARY
        assert outcome.vector == [1.0, 2.0, 3.0, 4.0]
        assert seen == ["Hello bworldb"]
        assert not outcome.degraded

    def test_empty_after_sanitization_should_skip_model(self, policy: EmbeddingFallbackPolicy) -> None:
        def call(text: str) -> list[float]:
            raise AssertionError("model must not be called")

        outcome = policy.embed("   $$$   ", call)

        assert outcome.path == EmbeddingPath.EMPTY_INPUT
        assert outcome.vector == [0.0] * DIMENSION
        assert outcome.degraded

    def test_safety_rejection_should_retry_with_aggressive_transform(
        self,
        policy: EmbeddingFallbackPolicy,
    ) -> None:
        # Arrange
        seen = []

        def call(text: str) -> list[float]:
            seen.append(text)
            if len(seen) == 1:
                raise RuntimeError("content blocked for SAFETY")
            return [0.5] * DIMENSION

        # Act
        outcome = policy.embed("Room 101, Floor 3!", call)

        # Assert
        assert outcome.path == EmbeddingPath.FALLBACK
        assert seen == ["Room 101, Floor 3!", "room n floor n"]

    def test_failed_fallback_should_return_zero_vector(self, policy: EmbeddingFallbackPolicy) -> None:
        calls = []

        def call(text: str) -> list[float]:
            calls.append(text)
            raise RuntimeError("SAFETY")

        outcome = policy.embed("anything", call)

        assert outcome.path == EmbeddingPath.ZERO_DEFAULT
        assert outcome.vector == [0.0] * DIMENSION
        assert len(calls) == 2

    def test_non_safety_error_should_not_retry(self, policy: EmbeddingFallbackPolicy) -> None:
        calls = []

        def call(text: str) -> list[float]:
            calls.append(text)
            raise ConnectionError("network down")

        outcome = policy.embed("anything", call)

        assert outcome.path == EmbeddingPath.ZERO_DEFAULT
        assert len(calls) == 1

    def test_wrong_dimension_should_degrade_to_zero_vector(self, policy: EmbeddingFallbackPolicy) -> None:
        outcome = policy.embed("anything", lambda text: [1.0, 2.0])

        assert outcome.path == EmbeddingPath.ZERO_DEFAULT
        assert len(outcome.vector) == DIMENSION

    async def test_aembed_should_follow_same_ladder(self, policy: EmbeddingFallbackPolicy) -> None:
        # Arrange
        seen = []

        async def call(text: str) -> list[float]:
            seen.append(text)
            if len(seen) == 1:
                raise RuntimeError("BLOCKED")
            return [1.0] * DIMENSION

        # Act
        outcome = await policy.aembed("Item #7", call)

        # Assert
        assert outcome.path == EmbeddingPath.FALLBACK
        assert seen == ["Item 7", "item n"]

    async def test_aembed_empty_input_should_skip_model(self, policy: EmbeddingFallbackPolicy) -> None:
        async def call(text: str) -> list[float]:
            raise AssertionError("model must not be called")

        outcome = await policy.aembed("", call)

        assert outcome.path == EmbeddingPath.EMPTY_INPUT
        assert outcome.vector == [0.0] * DIMENSION
