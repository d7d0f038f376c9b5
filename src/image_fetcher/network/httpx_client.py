"""
httpx network transport.

Downloads image bytes with an ``httpx.AsyncClient``. Timeouts come from the
client configuration; there is no retry.
"""

from functools import partial

import httpx
from loguru import logger

from .base import FetchCompletion, FetchTask, NetworkService, Resource
from .task import AsyncFetchTask


class HttpxNetworkService(NetworkService):
    """Network transport backed by httpx."""

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: str = "image-fetcher/0.1.0",
        client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the transport.

        Args:
            timeout: HTTP request timeout in seconds
            user_agent: User-Agent header value
            client: Optional shared client. When omitted, each download opens
                and closes its own client.
        """
        self.timeout = timeout
        self.user_agent = user_agent
        self._client = client
        logger.debug("HttpxNetworkService initialized: timeout={}s", timeout)

    def fetch(self, resource: Resource, on_complete: FetchCompletion) -> FetchTask:
        return AsyncFetchTask(
            partial(self._download, resource),
            on_complete,
            label=resource.url,
        )

    async def _download(self, resource: Resource) -> bytes:
        if self._client is not None:
            return await self._get(self._client, resource.url)

        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers={"User-Agent": self.user_agent},
        ) as client:
            return await self._get(client, resource.url)

    async def _get(self, client: httpx.AsyncClient, url: str) -> bytes:
        response = await client.get(url)
        response.raise_for_status()
        content_type = response.headers.get("content-type", "unknown")
        logger.debug("Fetched {}: {} bytes, type={}", url[:60], len(response.content), content_type)
        return response.content
