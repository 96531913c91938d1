"""
Embedding retry ladder.

Two attempts and a terminal default, independent of any network client:

1. primary transform (whitelist sanitization) -> model call
2. on a content-safety rejection only: aggressive transform -> model call
3. otherwise, or when the fallback also fails: zero-filled vector

Text that sanitizes to nothing never reaches the model.

Dependencies: re (stdlib), docchat.observability.log_utils
System role: Failure policy for the embedding service
"""

import enum
import logging
import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from docchat.core.exceptions import EmbeddingError
from docchat.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

_DISALLOWED_CHARS = re.compile(r"[^\w\s.,?!-]")
_WHITESPACE_RUN = re.compile(r"\s+")
_PUNCTUATION = re.compile(r"[.,?!-]")
_DIGIT_RUN = re.compile(r"\d+")

DIGIT_PLACEHOLDER = "n"
SAFETY_MARKERS = ("SAFETY", "BLOCKED")


def sanitize_text(text: str, max_chars: int = 2000) -> str:
    """
    Whitelist sanitization applied before every embedding call.

    Keeps word characters, whitespace and ``.,?!-``, collapses whitespace
    runs to one space, trims and truncates.

    Args:
        text: Raw text
        max_chars: Maximum length of the result

    Returns:
        str: Sanitized text (possibly empty)
    """
    cleaned = _DISALLOWED_CHARS.sub("", text)
    cleaned = _WHITESPACE_RUN.sub(" ", cleaned).strip()
    return cleaned[:max_chars]


def aggressive_sanitize(text: str, max_chars: int = 2000) -> str:
    """
    Transform used after a content-safety rejection.

    Sanitizes, then drops all punctuation, replaces digit runs with a
    placeholder token and lowercases.

    Args:
        text: Raw text
        max_chars: Maximum length of the result

    Returns:
        str: Transformed text (possibly empty)
    """
    cleaned = _PUNCTUATION.sub(" ", sanitize_text(text, max_chars))
    cleaned = _DIGIT_RUN.sub(DIGIT_PLACEHOLDER, cleaned).lower()
    return _WHITESPACE_RUN.sub(" ", cleaned).strip()


def is_safety_rejection(error: BaseException) -> bool:
    """True when the model refused the input on content-safety grounds."""
    message = str(error).upper()
    return any(marker in message for marker in SAFETY_MARKERS)


class EmbeddingPath(str, enum.Enum):
    """Which rung of the ladder produced a vector."""

    PRIMARY = "primary"
    FALLBACK = "fallback"
    EMPTY_INPUT = "empty_input"
    ZERO_DEFAULT = "zero_default"


@dataclass(frozen=True)
class EmbeddingOutcome:
    """Vector plus the ladder rung that produced it."""

    vector: list[float]
    path: EmbeddingPath

    @property
    def degraded(self) -> bool:
        return self.path in (EmbeddingPath.EMPTY_INPUT, EmbeddingPath.ZERO_DEFAULT)


@dataclass(frozen=True)
class EmbeddingFallbackPolicy:
    """
    Primary transform, safety fallback transform and zero-vector default.

    ``aembed`` / ``embed`` take the model call as an argument so the ladder
    can be exercised with plain functions in tests.
    """

    dimension: int
    max_chars: int = 2000
    primary_transform: Callable[[str, int], str] = sanitize_text
    fallback_transform: Callable[[str, int], str] = aggressive_sanitize
    is_safety_error: Callable[[BaseException], bool] = is_safety_rejection

    def zero_vector(self) -> list[float]:
        """Zero-filled vector of the configured dimension."""
        return [0.0] * self.dimension

    def _checked(self, vector: list[float]) -> list[float]:
        values = [float(v) for v in vector]
        if len(values) != self.dimension:
            raise EmbeddingError(
                f"Model returned {len(values)} dimensions, expected {self.dimension}",
                details={"dimension": len(values)},
            )
        return values

    def _zero(self, path: EmbeddingPath = EmbeddingPath.ZERO_DEFAULT) -> EmbeddingOutcome:
        return EmbeddingOutcome(self.zero_vector(), path)

    async def aembed(
        self,
        text: str,
        call: Callable[[str], Awaitable[list[float]]],
    ) -> EmbeddingOutcome:
        """
        Run the ladder against an async model call.

        Args:
            text: Raw text to embed
            call: Coroutine function performing one model request

        Returns:
            EmbeddingOutcome: Always carries a vector of ``dimension`` floats
        """
        primary = self.primary_transform(text, self.max_chars)
        if not primary:
            logger.warning(f"{__name__}:aembed - Empty text after sanitization, returning zero embedding")
            return self._zero(EmbeddingPath.EMPTY_INPUT)

        try:
            return EmbeddingOutcome(self._checked(await call(primary)), EmbeddingPath.PRIMARY)
        except Exception as e:
            if not self.is_safety_error(e):
                log_exception_with_context(
                    logger, f"{__name__}:aembed - Embedding failed, returning zero embedding",
                    e, text_preview=primary,
                )
                return self._zero()
            logger.warning(f"{__name__}:aembed - Safety block encountered, attempting fallback processing")

        fallback = self.fallback_transform(text, self.max_chars)
        if not fallback:
            return self._zero(EmbeddingPath.EMPTY_INPUT)
        try:
            return EmbeddingOutcome(self._checked(await call(fallback)), EmbeddingPath.FALLBACK)
        except Exception as e:
            log_exception_with_context(
                logger, f"{__name__}:aembed - Fallback embedding failed, returning zero embedding",
                e, text_preview=fallback,
            )
            return self._zero()

    def embed(self, text: str, call: Callable[[str], list[float]]) -> EmbeddingOutcome:
        """Synchronous twin of ``aembed`` for blocking model calls."""
        primary = self.primary_transform(text, self.max_chars)
        if not primary:
            logger.warning(f"{__name__}:embed - Empty text after sanitization, returning zero embedding")
            return self._zero(EmbeddingPath.EMPTY_INPUT)

        try:
            return EmbeddingOutcome(self._checked(call(primary)), EmbeddingPath.PRIMARY)
        except Exception as e:
            if not self.is_safety_error(e):
                log_exception_with_context(
                    logger, f"{__name__}:embed - Embedding failed, returning zero embedding",
                    e, text_preview=primary,
                )
                return self._zero()
            logger.warning(f"{__name__}:embed - Safety block encountered, attempting fallback processing")

        fallback = self.fallback_transform(text, self.max_chars)
        if not fallback:
            return self._zero(EmbeddingPath.EMPTY_INPUT)
        try:
            return EmbeddingOutcome(self._checked(call(fallback)), EmbeddingPath.FALLBACK)
        except Exception as e:
            log_exception_with_context(
                logger, f"{__name__}:embed - Fallback embedding failed, returning zero embedding",
                e, text_preview=fallback,
            )
            return self._zero()
