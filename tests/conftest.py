"""
Shared fixtures for the image cache proxy tests.
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from image_cache_proxy.api.app import create_app
from image_cache_proxy.config import Settings
from image_cache_proxy.repositories import HttpxOriginClient, MemoryObjectStore

UPSTREAM_URL = "https://origin.example.com"
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00\x01\x02\x03" * 8


class FakeOrigin:
    """Upstream stand-in served through ``httpx.MockTransport``.

    Every request is recorded. The reply can be changed per test, or
    ``error`` set to make the transport raise.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.headers: dict[str, str] = {"content-type": "image/png"}
        self.content = PNG_BYTES
        self.error: Exception | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, headers=self.headers, content=self.content)

    @property
    def call_count(self) -> int:
        return len(self.requests)


class RecordingScheduler:
    """TaskScheduler that holds tasks until ``run_all`` is awaited."""

    def __init__(self) -> None:
        self.tasks: list = []

    def schedule(self, func, *args, **kwargs) -> None:
        self.tasks.append((func, args, kwargs))

    async def run_all(self) -> list:
        results = [await func(*args, **kwargs) for func, args, kwargs in self.tasks]
        self.tasks.clear()
        return results


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings():
    """Settings pointing at a fake origin with the default allowlists."""
    return Settings(upstream_url=UPSTREAM_URL, cache_prefix="cache/")


@pytest.fixture
def origin():
    return FakeOrigin()


@pytest.fixture
def origin_client(origin):
    """HttpxOriginClient whose transport is the fake origin."""
    return HttpxOriginClient(client=httpx.AsyncClient(transport=httpx.MockTransport(origin)))


@pytest.fixture
def store():
    return MemoryObjectStore()


@pytest.fixture
def scheduler():
    return RecordingScheduler()


@pytest.fixture
def client(settings, store, origin_client):
    """Create a test client with in-memory collaborators."""
    app = create_app(settings=settings, object_store=store, origin_client=origin_client)
    with TestClient(app) as test_client:
        yield test_client
