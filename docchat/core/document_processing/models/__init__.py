"""Document processing models."""

from .chunk import Chunk
from .document_source import DocumentSource

__all__ = ["Chunk", "DocumentSource"]
