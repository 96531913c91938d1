"""
Document download task.

Fetches the raw bytes of an uploaded document from its download URL.

Dependencies: httpx
System role: First stage of document ingestion pipeline
"""

import logging

import httpx

from docchat.core.exceptions import DownloadError

logger = logging.getLogger(__name__)


class DownloadTask:
    """Download document bytes over HTTP(S)."""

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize download task.

        Args:
            timeout_seconds: Total request timeout
            transport: Optional httpx transport (mock transport in tests)
        """
        self._timeout = httpx.Timeout(timeout_seconds)
        self._transport = transport

    async def download(self, url: str, document_id: str | None = None) -> bytes:
        """
        Download document bytes.

        Args:
            url: Fetchable document location
            document_id: Document identifier for error context

        Returns:
            bytes: Response body

        Raises:
            DownloadError: On transport errors, non-2xx status or empty body
        """
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise DownloadError(
                f"Download failed with status {e.response.status_code}",
                document_id=document_id,
                details={"status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            raise DownloadError(
                f"Download failed: {type(e).__name__}: {e}",
                document_id=document_id,
            ) from e

        if not response.content:
            raise DownloadError("Downloaded document is empty", document_id=document_id)

        logger.info(
            f"{__name__}:download - Fetched {len(response.content)} bytes",
            extra={"document_id": document_id},
        )
        return response.content
