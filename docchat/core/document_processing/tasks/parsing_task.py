"""
Document parsing task using LangChain PyPDFLoader.

Extracts plain text from PDF bytes. Pages are joined with a blank line so
the chunker sees page breaks as paragraph boundaries.

Dependencies: langchain_community.document_loaders, pypdf
System role: Text extraction stage of document ingestion pipeline
"""

import logging
import os
import tempfile

from langchain_community.document_loaders import PyPDFLoader

from docchat.core.exceptions import ParsingError

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF"
PAGE_SEPARATOR = "\n\n"


class ParsingTask:
    """Parse PDF bytes into raw text."""

    def parse(self, data: bytes, document_id: str | None = None) -> str:
        """
        Extract text from a PDF document.

        Args:
            data: PDF file contents
            document_id: Document identifier for error context

        Returns:
            str: Text of all pages, in page order

        Raises:
            ParsingError: When the bytes are not a PDF or extraction fails
        """
        if not data.startswith(PDF_MAGIC):
            raise ParsingError(
                "Unsupported file format. Only PDF files are supported.",
                document_id=document_id,
                file_type="unknown",
            )

        # PyPDFLoader reads from a path
        fd, path = tempfile.mkstemp(prefix="docchat_", suffix=".pdf")
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(data)
            pages = PyPDFLoader(path).load()
        except Exception as e:
            raise ParsingError(
                f"Failed to parse PDF: {e}",
                document_id=document_id,
                file_type="pdf",
            ) from e
        finally:
            os.unlink(path)

        text = PAGE_SEPARATOR.join(page.page_content for page in pages)
        logger.info(
            f"{__name__}:parse - Extracted {len(pages)} pages, {len(text)} chars",
            extra={"document_id": document_id},
        )
        return text
