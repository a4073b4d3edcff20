"""httpx-based origin client.

Sends one request per call over a shared ``httpx.AsyncClient`` and
buffers the whole response body before returning it. Redirects are not
followed, so the caller sees the origin's own status.
"""

import logging

import httpx

from image_cache_proxy.config import Settings
from image_cache_proxy.entities import OriginRequest, UpstreamResponse

logger = logging.getLogger(__name__)


class HttpxOriginClient:
    """httpx implementation of the OriginClient protocol.

    Example:
        ```python
        client = HttpxOriginClient.create(settings)
        response = await client.send(OriginRequest("GET", "https://origin/logo.png"))
        await client.aclose()
        ```
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        """Initialize the origin client.

        Args:
            client: The httpx client to send requests with. Tests pass one
                built on ``httpx.MockTransport``.
        """
        self._client = client

    @classmethod
    def create(cls, settings: Settings) -> "HttpxOriginClient":
        """Factory method to create a client with the configured timeout."""
        return cls(
            client=httpx.AsyncClient(
                timeout=settings.upstream_timeout,
                follow_redirects=False,
            )
        )

    async def send(self, request: OriginRequest) -> UpstreamResponse | None:
        upstream_request = self._client.build_request(
            request.method,
            request.url,
            headers=request.headers,
        )
        response = await self._client.send(upstream_request)
        if response is None:
            return None

        # send() without stream=True has already read the body
        logger.debug("Upstream %s answered %s", request.url, response.status_code)
        return UpstreamResponse(
            status_code=response.status_code,
            headers=list(response.headers.multi_items()),
            content=response.content,
        )

    async def aclose(self) -> None:
        await self._client.aclose()
