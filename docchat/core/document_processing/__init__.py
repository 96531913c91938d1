"""
Document processing.

Download, text extraction and chunking of uploaded documents.
"""

from .models import Chunk, DocumentSource
from .tasks import ChunkingTask, ChunkStream, DownloadTask, ParsingTask

__all__ = [
    "Chunk",
    "ChunkStream",
    "ChunkingTask",
    "DocumentSource",
    "DownloadTask",
    "ParsingTask",
]
