"""Document ingestion pipeline tasks."""

from .chunking_task import ChunkingTask, ChunkStream
from .download_task import DownloadTask
from .parsing_task import ParsingTask

__all__ = ["ChunkingTask", "ChunkStream", "DownloadTask", "ParsingTask"]
