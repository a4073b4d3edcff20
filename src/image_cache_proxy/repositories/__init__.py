"""Repository layer for data access.

This layer abstracts external dependencies (Redis, the upstream origin)
behind protocol-based interfaces. This enables:
- Easy swapping of implementations
- Unit testing with in-memory fakes
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from image_cache_proxy.protocols import ObjectStore, OriginClient

from .httpx_origin_client import HttpxOriginClient
from .memory_object_store import MemoryObjectStore
from .redis_object_store import RedisObjectStore

__all__ = [
    "ObjectStore",
    "OriginClient",
    "HttpxOriginClient",
    "MemoryObjectStore",
    "RedisObjectStore",
]
