"""Image Cache Proxy - cache-aside HTTP proxy for image assets.

This package provides a layered architecture for proxying images from a
single origin through a durable object store:

Layers:
    - protocols: Interface contracts (ObjectStore, OriginClient, TaskScheduler)
    - repositories: Redis / in-memory stores and the httpx origin client
    - services: Admission, cache keys, cache adapter, origin fetch, write-back
    - handlers: HTTP request handling and the top-level error boundary
    - dto: Data transfer objects (JSON API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from image_cache_proxy.services import ProxyService

    service = ProxyService.create(settings, object_store, origin_client)
    ```

For HTTP API:
    ```python
    from image_cache_proxy.api.app import app, create_app
    ```
"""

from image_cache_proxy.config import Settings, get_settings
from image_cache_proxy.entities import CachedObject, InboundRequest, ProxyResponse
from image_cache_proxy.handlers import ProxyHandler
from image_cache_proxy.protocols import ObjectStore, OriginClient, TaskScheduler
from image_cache_proxy.repositories import HttpxOriginClient, MemoryObjectStore, RedisObjectStore
from image_cache_proxy.services import CacheStoreAdapter, ProxyService, build_cache_key

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    # Protocols (interfaces)
    "ObjectStore",
    "OriginClient",
    "TaskScheduler",
    # Services (business logic)
    "ProxyService",
    "CacheStoreAdapter",
    "build_cache_key",
    # Handlers (HTTP)
    "ProxyHandler",
    # Repositories (data access)
    "RedisObjectStore",
    "MemoryObjectStore",
    "HttpxOriginClient",
    # Entities (domain models)
    "CachedObject",
    "InboundRequest",
    "ProxyResponse",
]
