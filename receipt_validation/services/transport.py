"""
verifyReceipt transport.

The validator only needs "POST these bytes, give me the body back within a
deadline". Anything else about the HTTP client (pooling, TLS, keep-alive)
belongs to whoever owns it.
"""

import asyncio
from typing import Protocol

import httpx
from structlog import get_logger

from receipt_validation.exceptions import TransportError, TransportTimeoutError

logger = get_logger(__name__)


class ReceiptTransport(Protocol):
    """Capability to execute one JSON POST with a deadline."""

    async def post(self, url: str, body: bytes, timeout: float) -> bytes:
        """
        POST a JSON body and return the raw response body.

        Raises:
            TransportTimeoutError: If no response arrives within ``timeout`` seconds
            TransportError: On any other network or HTTP-level failure
        """
        ...


class HttpxTransport:
    """ReceiptTransport backed by an httpx.AsyncClient.

    A client passed in stays owned by the caller; otherwise one is created on
    first use and released by ``close()``.
    """

    def __init__(self, http_client: httpx.AsyncClient | None = None) -> None:
        self._http_client = http_client
        self._owns_client = http_client is None

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Get HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient()
        return self._http_client

    async def post(self, url: str, body: bytes, timeout: float) -> bytes:
        """POST ``body`` to ``url``; ``timeout`` bounds the whole exchange."""
        try:
            async with asyncio.timeout(timeout):
                response = await self.http_client.post(
                    url,
                    content=body,
                    headers={"Content-Type": "application/json"},
                    timeout=timeout,
                )
            response.raise_for_status()

        except (TimeoutError, httpx.TimeoutException) as exc:
            logger.warning("verify_receipt_timeout", url=url, timeout=timeout)
            raise TransportTimeoutError(url, timeout) from exc
        except httpx.HTTPStatusError as exc:
            logger.error(
                "verify_receipt_http_error",
                url=url,
                status=exc.response.status_code,
            )
            raise TransportError(f"HTTP {exc.response.status_code}", url) from exc
        except httpx.HTTPError as exc:
            logger.error("verify_receipt_request_failed", url=url, error=str(exc))
            raise TransportError(str(exc) or type(exc).__name__, url) from exc

        return response.content

    async def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client and self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
