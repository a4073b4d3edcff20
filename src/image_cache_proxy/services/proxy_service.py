"""Proxy service for the request-handling pipeline.

This service orchestrates one request end to end:

    validate path -> derive cache key -> cache lookup -> origin fetch

and schedules the write-back of a fetched image without making the
caller wait for it.
"""

import logging
from dataclasses import replace

from image_cache_proxy.config import Settings
from image_cache_proxy.entities import (
    FailureResponse,
    InboundRequest,
    NoResponse,
    ProxyResponse,
    Success,
    UpstreamResponse,
)
from image_cache_proxy.protocols import ObjectStore, OriginClient, TaskScheduler

from .cache_store import CacheStoreAdapter
from .origin_fetcher import OriginFetcher
from .request_policy import build_cache_key, is_admitted, normalize_params, resolve_dot_segments

logger = logging.getLogger(__name__)

FORBIDDEN_MESSAGE = "Access URI is forbidden."
NOT_FOUND_MESSAGE = "Access URI is not found"


class ProxyService:
    """Core cache-aside orchestration.

    This service depends on PROTOCOLS, not concrete implementations:
    - ObjectStore: Redis, in-memory, etc. (wrapped by CacheStoreAdapter)
    - OriginClient: httpx or a test fake
    - TaskScheduler: supplied per request by the hosting layer

    Concurrent misses for the same key are not coordinated: each one
    fetches from the origin and writes back, and the last write wins.

    Example:
        ```python
        service = ProxyService.create(
            settings=settings,
            object_store=MemoryObjectStore(),
            origin_client=HttpxOriginClient.create(settings),
        )
        response = await service.handle(inbound, scheduler)
        ```
    """

    def __init__(
        self,
        cache: CacheStoreAdapter,
        fetcher: OriginFetcher,
        allowed_paths: tuple[str, ...],
        allowed_params: tuple[str, ...],
    ) -> None:
        """Initialize the proxy service.

        Args:
            cache: Adapter over the object store (required).
            fetcher: Upstream fetcher (required).
            allowed_paths: Path prefixes admitted for proxying.
            allowed_params: Query parameter names that affect caching.
        """
        self._cache = cache
        self._fetcher = fetcher
        self._allowed_paths = allowed_paths
        self._allowed_params = allowed_params

    @classmethod
    def create(
        cls,
        settings: Settings,
        object_store: ObjectStore,
        origin_client: OriginClient,
    ) -> "ProxyService":
        """Factory method wiring the adapter and fetcher from settings.

        Args:
            settings: Immutable application settings.
            object_store: Backend for cached images.
            origin_client: Client for the upstream origin.

        Returns:
            Configured ProxyService instance
        """
        settings.require_upstream()
        return cls(
            cache=CacheStoreAdapter(
                store=object_store,
                prefix=settings.cache_prefix,
                image_content_types=settings.image_content_types,
            ),
            fetcher=OriginFetcher(client=origin_client, upstream_host=settings.upstream_host),
            allowed_paths=settings.allowed_paths,
            allowed_params=settings.allowed_params,
        )

    async def handle(self, request: InboundRequest, scheduler: TaskScheduler) -> ProxyResponse:
        """Handle one inbound request.

        Business logic:
        1. Resolve dot-segments so admission, key and upstream URL all
           see the path the origin would actually serve
        2. Reject paths outside the allowlist with 403
        3. Derive the cache key from path and recognized parameters
        4. Serve a valid cached image if present
        5. Otherwise fetch from the origin; on success schedule a write-back

        Args:
            request: The caller's request
            scheduler: Runs the write-back after the response is sent

        Returns:
            The response for the caller

        Raises:
            Exception: Origin transport failures, for the top-level handler
        """
        request = replace(request, path=resolve_dot_segments(request.path))

        if not is_admitted(request.path, self._allowed_paths):
            logger.debug("Rejected %s: path not allowlisted", request.path)
            return ProxyResponse.text(403, FORBIDDEN_MESSAGE)

        params = normalize_params(request.query_string, self._allowed_params)
        key = build_cache_key(request.path, params)
        logger.debug("Cache key: %s", key)

        cached = await self._cache.lookup(key)
        if cached is not None:
            logger.info("Cache hit: %s", key)
            return ProxyResponse(
                status_code=200,
                headers=[("content-type", cached.content_type), ("etag", cached.etag)],
                body=cached.body,
            )

        logger.info("Cache miss: %s", key)
        result = await self._fetcher.fetch(request, params)

        if isinstance(result, Success):
            scheduler.schedule(self.write_back, key, result.response)
            return ProxyResponse.from_upstream(result.response)
        if isinstance(result, FailureResponse):
            return ProxyResponse.from_upstream(result.response)
        if isinstance(result, NoResponse):
            return ProxyResponse.text(404, NOT_FOUND_MESSAGE)
        raise TypeError(f"Unexpected origin result: {result!r}")

    async def write_back(self, key: str, response: UpstreamResponse) -> bool:
        """Persist a fetched image under its cache key, best effort.

        Runs after the caller already has the response, so nothing here
        may raise: a rejected content type or a store failure is logged
        and dropped.

        Args:
            key: The cache key for the request
            response: The buffered upstream response

        Returns:
            True if the image was stored
        """
        try:
            stored = await self._cache.store(key, response.content, response.content_type)
        except Exception:
            logger.exception("Write-back failed for %s", key)
            return False

        if stored:
            logger.info("Put %s successfully", key)
        else:
            logger.info("Skipped write-back for %s: content type %r not allowed", key, response.content_type)
        return stored

    async def is_healthy(self) -> bool:
        """Check if the object store is reachable."""
        try:
            return await self._cache.object_store.health_check()
        except Exception:
            logger.warning("Object store health check failed", exc_info=True)
            return False
