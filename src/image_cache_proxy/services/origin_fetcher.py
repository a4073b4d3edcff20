"""Origin fetcher.

Builds the upstream request for a cache miss and classifies what came
back. A single attempt is made per request; transport failures raised
by the origin client propagate unchanged.
"""

import logging

from image_cache_proxy.entities import (
    FailureResponse,
    InboundRequest,
    NoResponse,
    OriginRequest,
    OriginResult,
    Success,
)
from image_cache_proxy.protocols import OriginClient
from image_cache_proxy.utils import HOP_BY_HOP_HEADERS, strip_headers

from .request_policy import encode_params

logger = logging.getLogger(__name__)

# The HTTP client sets these itself for the upstream connection.
DROPPED_REQUEST_HEADERS = HOP_BY_HOP_HEADERS | {"host", "content-length", "accept-encoding"}


class OriginFetcher:
    """Fetches images from the single configured upstream origin.

    The upstream URL keeps the inbound path verbatim, is pinned to https
    on the default port, and carries only the normalized parameters.
    """

    def __init__(self, client: OriginClient, upstream_host: str) -> None:
        """Initialize the fetcher.

        Args:
            client: Client used to send the request (required).
            upstream_host: Host name of the origin.
        """
        self._client = client
        self._upstream_host = upstream_host

    def build_request(self, request: InboundRequest, params: list[tuple[str, str]]) -> OriginRequest:
        """Build the upstream request for an inbound request.

        Args:
            request: The caller's request
            params: Normalized query parameters

        Returns:
            The request to send to the origin
        """
        url = f"https://{self._upstream_host}{request.path}"
        query = encode_params(params)
        if query:
            url = f"{url}?{query}"

        return OriginRequest(
            method=request.method,
            url=url,
            headers=strip_headers(request.headers, DROPPED_REQUEST_HEADERS),
        )

    async def fetch(self, request: InboundRequest, params: list[tuple[str, str]]) -> OriginResult:
        """Fetch from the origin and classify the outcome.

        Returns:
            Success for a 2xx response, FailureResponse for any other
            status, NoResponse when the client returned nothing
        """
        origin_request = self.build_request(request, params)
        logger.info("Fetching from upstream: %s", origin_request.url)

        response = await self._client.send(origin_request)
        if response is None:
            return NoResponse()
        if response.is_success:
            return Success(response)
        return FailureResponse(response)
