"""HTTP handler for proxied image requests.

Converts between the ASGI request/response and the proxy service's
entities, and is the single top-level error boundary: any fault raised
while producing a response becomes a generic 500.
"""

import logging

from fastapi import Request
from fastapi.responses import PlainTextResponse, Response

from image_cache_proxy.entities import InboundRequest, ProxyResponse
from image_cache_proxy.services import ProxyService
from image_cache_proxy.utils import HOP_BY_HOP_HEADERS, strip_headers

from .scheduler import BackgroundTaskScheduler

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Something wrong. please contact admin ASAP."

# Bodies are already decoded and re-framed by the server.
DROPPED_RESPONSE_HEADERS = HOP_BY_HOP_HEADERS | {"content-length", "content-encoding"}


class ProxyHandler:
    """HTTP handler for the catch-all proxy route.

    Example:
        ```python
        handler = ProxyHandler(proxy_service=service)

        @app.api_route("/{full_path:path}", methods=[...])
        async def proxy(request: Request):
            return await handler.handle(request)
        ```
    """

    def __init__(self, proxy_service: ProxyService) -> None:
        """Initialize the proxy handler.

        Args:
            proxy_service: The proxy service for business logic (required).
        """
        self._proxy = proxy_service

    async def handle(self, request: Request) -> Response:
        """Handle any proxied request.

        Args:
            request: The incoming FastAPI request

        Returns:
            The response for the caller, with the write-back (if any)
            attached as a background task
        """
        scheduler = BackgroundTaskScheduler()
        try:
            result = await self._proxy.handle(self.to_inbound(request), scheduler)
        except Exception:
            logger.exception("Error happened when accessing %s", request.url)
            return PlainTextResponse(INTERNAL_ERROR_MESSAGE, status_code=500)

        return self.to_response(result, scheduler)

    @staticmethod
    def to_inbound(request: Request) -> InboundRequest:
        """Build an InboundRequest from the ASGI scope.

        The raw path is used so percent-encoding reaches the cache key
        and the origin unchanged.
        """
        raw_path = request.scope.get("raw_path")
        if raw_path:
            path = raw_path.split(b"?", 1)[0].decode("latin-1")
        else:
            path = request.url.path

        return InboundRequest(
            method=request.method,
            path=path,
            query_string=request.scope.get("query_string", b"").decode("latin-1"),
            headers=list(request.headers.items()),
        )

    @staticmethod
    def to_response(result: ProxyResponse, scheduler: BackgroundTaskScheduler) -> Response:
        response = Response(
            content=result.body,
            status_code=result.status_code,
            background=scheduler.background,
        )
        for key, value in strip_headers(result.headers, DROPPED_RESPONSE_HEADERS):
            response.headers.append(key, value)
        return response
