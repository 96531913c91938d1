"""
Text chunking task using RecursiveCharacterTextSplitter.

Splits extracted document text on the largest natural boundary available
(paragraph, line, sentence, word, character) into contiguous core spans of
at most ``chunk_size - chunk_overlap`` characters. Every chunk after the
first is its core span prefixed with the ``chunk_overlap`` characters that
precede it, so consecutive chunks always share at least ``chunk_overlap``
characters and no chunk exceeds ``chunk_size``.

Dependencies: langchain_text_splitters
System role: Chunking stage of the document ingestion pipeline
"""

import logging
from collections.abc import Iterator

from langchain_text_splitters import RecursiveCharacterTextSplitter

from docchat.core.document_processing.models import Chunk

logger = logging.getLogger(__name__)

# Largest boundary first. Separators stay attached to the end of the piece
# they terminate so chunks remain exact substrings of the source text.
SEPARATORS = ["\n\n", "\n", ". ", "? ", "! ", " ", ""]


def widen_to_word_start(text: str, start: int, limit: int) -> int:
    """
    Move ``start`` back to the beginning of the word it falls in.

    Never moves below ``limit``; when no word boundary lies between
    ``limit`` and ``start`` the original offset is kept.
    """
    pos = start
    while pos > limit and not text[pos - 1].isspace():
        pos -= 1
    if pos == 0 or text[pos - 1].isspace():
        return pos
    return start


class ChunkStream:
    """
    Lazy, restartable sequence of chunks for one document.

    Splitting runs each time the stream is iterated, so iterating twice
    yields the same chunks twice.
    """

    def __init__(
        self,
        splitter: RecursiveCharacterTextSplitter,
        text: str,
        document_id: str,
        chunk_size: int,
        chunk_overlap: int,
    ) -> None:
        self._splitter = splitter
        self._text = text
        self._document_id = document_id
        self._chunk_size = chunk_size
        self._chunk_overlap = chunk_overlap

    def __iter__(self) -> Iterator[Chunk]:
        if not self._text:
            return
        cores = self._splitter.create_documents([self._text])

        spans: list[tuple[int, int]] = []
        for index, core in enumerate(cores):
            core_start = core.metadata["start_index"]
            core_end = core_start + len(core.page_content)
            start = core_start
            if index > 0 and self._chunk_overlap:
                start = widen_to_word_start(
                    self._text,
                    max(0, core_start - self._chunk_overlap),
                    max(0, core_end - self._chunk_size),
                )
            # A chunk that contains the previous one entirely replaces it
            while spans and spans[-1][0] >= start:
                spans.pop()
            spans.append((start, core_end))

        for sequence, (start, end) in enumerate(spans):
            yield Chunk(
                document_id=self._document_id,
                sequence=sequence,
                text=self._text[start:end],
                start_index=start,
            )


class ChunkingTask:
    """Split document text into overlapping chunks."""

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
    ) -> None:
        """
        Initialize chunking task with splitter configuration.

        Args:
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Minimum characters shared by consecutive chunks

        Raises:
            ValueError: When overlap is not smaller than chunk size
        """
        if chunk_overlap >= chunk_size:
            raise ValueError(
                f"chunk_overlap ({chunk_overlap}) must be smaller than chunk_size ({chunk_size})"
            )
        if chunk_overlap < 0:
            raise ValueError(f"chunk_overlap ({chunk_overlap}) must not be negative")
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        # Core spans are contiguous; the overlap prefix is added per chunk
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size - chunk_overlap,
            chunk_overlap=0,
            separators=SEPARATORS,
            keep_separator="end",
            strip_whitespace=False,
            add_start_index=True,
            length_function=len,
        )

    def chunk(self, text: str, document_id: str) -> ChunkStream:
        """
        Split document text into chunks.

        Args:
            text: Raw text already extracted from the document container
            document_id: Identifier stamped on every chunk

        Returns:
            ChunkStream: Lazy sequence of chunks (empty when text is empty)
        """
        logger.debug(
            f"{__name__}:chunk - document_id={document_id}, text_len={len(text)}, "
            f"chunk_size={self.chunk_size}, chunk_overlap={self.chunk_overlap}"
        )
        return ChunkStream(self._splitter, text, document_id, self.chunk_size, self.chunk_overlap)
