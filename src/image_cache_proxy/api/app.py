from fastapi import FastAPI, Request, Response

from image_cache_proxy.config import Settings, get_settings
from image_cache_proxy.dto import HealthCheckResponse
from image_cache_proxy.protocols import ObjectStore, OriginClient

from .dependencies import HandlerDep, ServiceDep, build_lifespan

PROXY_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(
    settings: Settings | None = None,
    object_store: ObjectStore | None = None,
    origin_client: OriginClient | None = None,
) -> FastAPI:
    """Create the proxy application.

    Args:
        settings: Settings to use. Defaults to the environment.
        object_store: Substitute object store (defaults to Redis).
        origin_client: Substitute origin client (defaults to httpx).

    Returns:
        The configured FastAPI app
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Image Cache Proxy",
        description="Cache-aside proxy serving images from an object store in front of one origin",
        version="0.1.0",
        lifespan=build_lifespan(settings, object_store, origin_client),
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.get("/healthz", response_model=HealthCheckResponse)
    async def health(service: ServiceDep) -> HealthCheckResponse:
        """Health check endpoint."""
        is_healthy = await service.is_healthy()
        return HealthCheckResponse(
            status="healthy" if is_healthy else "unhealthy",
            object_store_healthy=is_healthy,
            upstream_host=settings.upstream_host,
        )

    @app.api_route("/{full_path:path}", methods=PROXY_METHODS, include_in_schema=False)
    async def proxy(request: Request, handler: HandlerDep) -> Response:
        """Proxy every other request through the image cache."""
        return await handler.handle(request)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "image_cache_proxy.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
