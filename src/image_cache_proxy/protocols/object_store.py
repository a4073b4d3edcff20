"""Object store protocol.

Defines the interface for the durable blob store that holds cached
image bytes. Keys are opaque strings; namespacing is the caller's job.

Implementations can include:
- Redis (default)
- In-memory dict (tests, local runs)
- Any S3-compatible bucket
"""

from typing import Protocol, runtime_checkable

from image_cache_proxy.entities import CachedObject


@runtime_checkable
class ObjectStore(Protocol):
    """Protocol for object storage backends.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed.

    Implementations must be safe for concurrent independent reads and
    writes. A ``put`` fully replaces whatever was stored under the key
    and either writes everything or nothing.
    """

    async def get(self, key: str) -> CachedObject | None:
        """Fetch an object.

        Args:
            key: The full storage key

        Returns:
            The stored object, or None if the key does not exist
        """
        ...

    async def put(self, key: str, body: bytes, content_type: str) -> CachedObject:
        """Write an object, replacing any previous value.

        Args:
            key: The full storage key
            body: Bytes to store
            content_type: MIME type recorded as metadata

        Returns:
            The stored object including its computed etag
        """
        ...

    async def health_check(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...
