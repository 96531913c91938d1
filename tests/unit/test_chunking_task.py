"""
Test suite for ChunkingTask.

Covers chunk size bounds, reconstruction of the source text, overlap
between consecutive chunks, empty input, determinism and restartability.

System role: Verification of the chunking stage
"""

import pytest

from docchat.core.document_processing.models import Chunk
from docchat.core.document_processing.tasks.chunking_task import ChunkingTask, widen_to_word_start

LONG_TEXT = (
    "Retrieval augmented generation answers questions from documents.\n\n"
    "The first paragraph introduces the idea. It has several sentences! "
    "Does it split on question marks? It should.\n"
    "A single newline separates this line from the previous one.\n\n"
    + " ".join(f"word{i}" for i in range(300))
)

SENTENCE_TEXT = " ".join(
    f"Sentence number {i} talks about topic {i % 7}." for i in range(20)
)


def reconstruct(chunks: list[Chunk]) -> str:
    """Concatenate the non-overlapping tail of every chunk."""
    text = ""
    for chunk in chunks:
        covered = len(text) - chunk.start_index
        text += chunk.text[covered:]
    return text


class TestChunkingTaskInit:
    """Test suite for ChunkingTask construction."""

    def test_init_should_reject_overlap_not_smaller_than_size(self) -> None:
        with pytest.raises(ValueError, match="chunk_overlap"):
            ChunkingTask(chunk_size=100, chunk_overlap=100)

    def test_init_should_store_configuration(self) -> None:
        task = ChunkingTask(chunk_size=500, chunk_overlap=50)

        assert task.chunk_size == 500
        assert task.chunk_overlap == 50


class TestChunkingTaskChunk:
    """Test suite for ChunkingTask.chunk()."""

    @pytest.mark.parametrize("chunk_size,chunk_overlap", [(50, 10), (120, 30), (400, 0)])
    def test_chunks_should_respect_size_budget(self, chunk_size: int, chunk_overlap: int) -> None:
        # Arrange
        task = ChunkingTask(chunk_size=chunk_size, chunk_overlap=chunk_overlap)

        # Act
        chunks = list(task.chunk(LONG_TEXT, "doc-1"))

        # Assert
        assert len(chunks) > 1
        assert all(len(chunk.text) <= chunk_size for chunk in chunks)

    @pytest.mark.parametrize("chunk_size,chunk_overlap", [(50, 10), (120, 30), (400, 0)])
    def test_chunks_should_reconstruct_original_text(self, chunk_size: int, chunk_overlap: int) -> None:
        task = ChunkingTask(chunk_size=chunk_size, chunk_overlap=chunk_overlap)

        chunks = list(task.chunk(LONG_TEXT, "doc-1"))

        assert reconstruct(chunks) == LONG_TEXT

    def test_chunks_should_be_exact_substrings_at_start_index(self) -> None:
        task = ChunkingTask(chunk_size=80, chunk_overlap=20)

        for chunk in task.chunk(LONG_TEXT, "doc-1"):
            assert LONG_TEXT[chunk.start_index:chunk.start_index + len(chunk.text)] == chunk.text

    @pytest.mark.parametrize(
        "text,chunk_size,chunk_overlap",
        [
            (SENTENCE_TEXT, 60, 20),
            (SENTENCE_TEXT, 100, 30),
            (LONG_TEXT, 50, 10),
            (LONG_TEXT, 120, 30),
            (" ".join(f"word{i}" for i in range(100)), 50, 15),
        ],
    )
    def test_consecutive_chunks_should_share_at_least_overlap(
        self,
        text: str,
        chunk_size: int,
        chunk_overlap: int,
    ) -> None:
        # Arrange
        task = ChunkingTask(chunk_size=chunk_size, chunk_overlap=chunk_overlap)

        # Act
        chunks = list(task.chunk(text, "doc-1"))

        # Assert
        assert len(chunks) > 1
        for previous, current in zip(chunks, chunks[1:]):
            shared = previous.start_index + len(previous.text) - current.start_index
            assert shared >= chunk_overlap
            assert len(current.text) <= chunk_size
        assert reconstruct(chunks) == text

    def test_short_leading_paragraph_should_still_overlap(self) -> None:
        text = "Title.\n\n" + SENTENCE_TEXT
        task = ChunkingTask(chunk_size=60, chunk_overlap=20)

        chunks = list(task.chunk(text, "doc-1"))

        for previous, current in zip(chunks, chunks[1:]):
            assert previous.start_index + len(previous.text) - current.start_index >= 20
        assert reconstruct(chunks) == text
        assert all(len(chunk.text) <= 60 for chunk in chunks)

    def test_widen_to_word_start_should_move_back_to_word_start(self) -> None:
        text = "alpha beta gamma"

        assert widen_to_word_start(text, start=8, limit=0) == 6
        assert widen_to_word_start(text, start=6, limit=0) == 6
        assert widen_to_word_start(text, start=3, limit=0) == 0

    def test_widen_to_word_start_should_keep_offset_past_limit(self) -> None:
        text = "alpha beta gamma"

        assert widen_to_word_start(text, start=9, limit=8) == 9

    def test_chunks_should_be_numbered_in_order(self) -> None:
        task = ChunkingTask(chunk_size=60, chunk_overlap=10)

        chunks = list(task.chunk(LONG_TEXT, "doc-42"))

        assert [chunk.sequence for chunk in chunks] == list(range(len(chunks)))
        assert {chunk.document_id for chunk in chunks} == {"doc-42"}

    def test_empty_text_should_yield_no_chunks(self) -> None:
        task = ChunkingTask()

        assert list(task.chunk("", "doc-1")) == []

    def test_short_text_should_yield_single_chunk(self) -> None:
        task = ChunkingTask(chunk_size=1000, chunk_overlap=200)

        chunks = list(task.chunk("Hello world. This is a test.", "doc-1"))

        assert len(chunks) == 1
        assert chunks[0].text == "Hello world. This is a test."
        assert chunks[0].start_index == 0

    def test_chunking_should_be_deterministic(self) -> None:
        first = list(ChunkingTask(chunk_size=70, chunk_overlap=20).chunk(LONG_TEXT, "doc-1"))
        second = list(ChunkingTask(chunk_size=70, chunk_overlap=20).chunk(LONG_TEXT, "doc-1"))

        assert first == second

    def test_stream_should_be_restartable(self) -> None:
        # Arrange
        stream = ChunkingTask(chunk_size=70, chunk_overlap=20).chunk(LONG_TEXT, "doc-1")

        # Act
        first_pass = list(stream)
        second_pass = list(stream)

        # Assert
        assert first_pass == second_pass
        assert len(first_pass) > 1


class TestChunkModel:
    """Test suite for the Chunk record."""

    def test_vector_id_should_be_deterministic(self) -> None:
        chunk = Chunk(document_id="doc-1", sequence=0, text="hello", start_index=0)
        same = Chunk(document_id="doc-1", sequence=0, text="hello", start_index=0)

        assert chunk.vector_id == same.vector_id
        assert len(chunk.vector_id) == 16

    def test_vector_id_should_differ_by_sequence(self) -> None:
        first = Chunk(document_id="doc-1", sequence=0, text="hello", start_index=0)
        second = Chunk(document_id="doc-1", sequence=1, text="hello", start_index=10)

        assert first.vector_id != second.vector_id

    def test_chunk_should_reject_empty_text(self) -> None:
        from pydantic import ValidationError

        with pytest.raises(ValidationError):
            Chunk(document_id="doc-1", sequence=0, text="", start_index=0)

    def test_to_metadata_should_carry_position(self) -> None:
        chunk = Chunk(document_id="doc-1", sequence=3, text="hello", start_index=42)

        assert chunk.to_metadata() == {"document_id": "doc-1", "sequence": 3, "start_index": 42}
