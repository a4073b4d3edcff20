"""Service layer for business logic.

This layer contains the request-handling pipeline and its parts.
Services depend on protocols (interfaces), not concrete implementations,
making them testable with in-memory fakes.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from image_cache_proxy.services import ProxyService

    service = ProxyService.create(settings, object_store, origin_client)
    ```
"""

from .cache_store import CacheStoreAdapter
from .origin_fetcher import OriginFetcher
from .proxy_service import ProxyService
from .request_policy import (
    build_cache_key,
    encode_params,
    is_admitted,
    normalize_params,
    resolve_dot_segments,
)

__all__ = [
    "CacheStoreAdapter",
    "OriginFetcher",
    "ProxyService",
    "build_cache_key",
    "encode_params",
    "is_admitted",
    "normalize_params",
    "resolve_dot_segments",
]
