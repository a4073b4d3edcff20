"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from image_cache_proxy.config import Settings, configure_logging
from image_cache_proxy.handlers import ProxyHandler
from image_cache_proxy.protocols import ObjectStore, OriginClient
from image_cache_proxy.repositories import HttpxOriginClient, RedisObjectStore
from image_cache_proxy.services import ProxyService

logger = logging.getLogger(__name__)


def get_proxy_service(request: Request) -> ProxyService:
    """Dependency injection for ProxyService from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The ProxyService instance from app.state

    Raises:
        RuntimeError: If service is not initialized
    """
    service = getattr(request.app.state, "proxy_service", None)
    if service is None:
        raise RuntimeError("ProxyService not initialized. Check lifespan setup.")
    return service


def get_handler(request: Request) -> ProxyHandler:
    """Dependency injection for ProxyHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The ProxyHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "proxy_handler", None)
    if handler is None:
        raise RuntimeError("ProxyHandler not initialized. Check lifespan setup.")
    return handler


def build_lifespan(
    settings: Settings,
    object_store: ObjectStore | None = None,
    origin_client: OriginClient | None = None,
) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
    """Create the lifespan context manager for the FastAPI app.

    Backends passed in are used as-is and left open on shutdown; the
    defaults (Redis store, httpx client) are created here and closed here.

    Args:
        settings: Immutable application settings
        object_store: Substitute object store, e.g. MemoryObjectStore
        origin_client: Substitute origin client

    Returns:
        A lifespan function for ``FastAPI(lifespan=...)``
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Initialize all layers and store them in app.state:

        1. Repositories (object store, origin client)
        2. Service (business logic) - app.state.proxy_service
        3. Handler (HTTP endpoints) - app.state.proxy_handler
        """
        configure_logging(settings)

        store = object_store if object_store is not None else RedisObjectStore.create(settings)
        client = origin_client if origin_client is not None else HttpxOriginClient.create(settings)

        proxy_service = ProxyService.create(
            settings=settings,
            object_store=store,
            origin_client=client,
        )

        app.state.settings = settings
        app.state.object_store = store
        app.state.origin_client = client
        app.state.proxy_service = proxy_service
        app.state.proxy_handler = ProxyHandler(proxy_service=proxy_service)

        logger.info("Image cache proxy started, upstream: %s", settings.upstream_host)
        logger.info("Object store healthy: %s", await proxy_service.is_healthy())

        try:
            yield
        finally:
            del app.state.proxy_handler
            del app.state.proxy_service
            del app.state.origin_client
            del app.state.object_store

            if origin_client is None:
                await client.aclose()
            if object_store is None:
                await store.aclose()
            logger.info("Image cache proxy shut down")

    return lifespan


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[ProxyHandler, Depends(get_handler)]
ServiceDep = Annotated[ProxyService, Depends(get_proxy_service)]
