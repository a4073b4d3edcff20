"""Origin client protocol.

Defines the interface for sending a single request to the upstream
origin. Transport failures are raised, not returned.
"""

from typing import Protocol, runtime_checkable

from image_cache_proxy.entities import OriginRequest, UpstreamResponse


@runtime_checkable
class OriginClient(Protocol):
    """Protocol for upstream HTTP clients."""

    async def send(self, request: OriginRequest) -> UpstreamResponse | None:
        """Send a request and buffer the full response.

        Args:
            request: The request to send upstream

        Returns:
            The buffered response, or None when no response object
            could be obtained

        Raises:
            Exception: Any transport-level failure from the underlying client
        """
        ...

    async def aclose(self) -> None:
        """Release network resources."""
        ...
