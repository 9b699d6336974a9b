"""HTTP access to an RSSHub instance.

``HttpFetcher`` owns the single ``httpx.AsyncClient`` shared by the catalog
client and the feed fetcher.  Every GET goes through ``get_with_retry``:
transport-level failures (connection refused, DNS, timeouts) are retried up to
``retries`` times with a fixed back-off, while a response that does arrive is
returned as-is, whatever its status.  Status checking is left to
``get_ok`` so that non-2xx answers are surfaced immediately and never retried.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import httpx

from rsshub_mcp.main.tools.errors import (
    DeserializationError,
    TransportFailure,
    UpstreamStatusError,
)

logger = logging.getLogger(__name__)

DEFAULT_HOST = "https://rsshub.akjong.com"
DEFAULT_TIMEOUT = 120.0
DEFAULT_RETRIES = 3
DEFAULT_RETRY_BACKOFF_MS = 150

USER_AGENT = "rsshub-mcp/0.1"


class HttpFetcher:
    """Retrying GET helper bound to one RSSHub host."""

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        retries: int = DEFAULT_RETRIES,
        retry_backoff_ms: int = DEFAULT_RETRY_BACKOFF_MS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if retries < 1:
            raise ValueError("retries must be at least 1")
        self.host = host.rstrip("/")
        self.retries = retries
        self.retry_backoff = retry_backoff_ms / 1000.0
        self._client = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
        )

    def url_for(self, path: str) -> str:
        """Join *path* onto the host, dropping one leading ``/`` if present."""
        if path.startswith("/"):
            path = path[1:]
        return f"{self.host}/{path}"

    async def get_with_retry(self, url: str) -> httpx.Response:
        """GET *url*, retrying only when no response was received at all."""
        last_exc: Optional[Exception] = None
        for attempt in range(1, self.retries + 1):
            try:
                return await self._client.get(url)
            except httpx.TransportError as exc:
                last_exc = exc
                logger.warning(
                    "GET %s failed (attempt %d/%d): %s", url, attempt, self.retries, exc
                )
                if attempt < self.retries:
                    await asyncio.sleep(self.retry_backoff)
        raise TransportFailure(
            f"HTTP GET failed after {self.retries} attempts: {last_exc}"
        )

    async def get_ok(self, path: str) -> httpx.Response:
        """GET *path* relative to the host and require a 2xx status."""
        response = await self.get_with_retry(self.url_for(path))
        if not response.is_success:
            raise UpstreamStatusError(path, response.status_code)
        return response

    async def get_json(self, path: str) -> Any:
        response = await self.get_ok(path)
        try:
            return response.json()
        except ValueError as exc:
            raise DeserializationError(f"Invalid JSON from {path}: {exc}") from exc

    async def aclose(self) -> None:
        await self._client.aclose()
