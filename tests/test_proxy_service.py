"""
Tests for the proxy pipeline and its write-back contract.
"""

import httpx
import pytest
from conftest import PNG_BYTES

from image_cache_proxy.entities import InboundRequest, UpstreamResponse
from image_cache_proxy.repositories import MemoryObjectStore
from image_cache_proxy.services import ProxyService

pytestmark = pytest.mark.anyio


class NullOriginClient:
    """Origin client that never produces a response object."""

    def __init__(self) -> None:
        self.calls = 0

    async def send(self, request):
        self.calls += 1
        return None

    async def aclose(self) -> None:
        pass


class FailingPutStore(MemoryObjectStore):
    async def put(self, key, body, content_type):
        raise ConnectionError("store unavailable")


@pytest.fixture
def service(settings, store, origin_client):
    return ProxyService.create(settings=settings, object_store=store, origin_client=origin_client)


def get(path: str, query: str = "") -> InboundRequest:
    return InboundRequest(method="GET", path=path, query_string=query, headers=[("accept", "image/*")])


async def test_miss_returns_before_write_back(service, store, origin, scheduler):
    """The response is built while the write-back is still only queued."""
    response = await service.handle(get("/assets/logo.png", "w=200&h=100&z=ignored"), scheduler)

    assert response.status_code == 200
    assert response.body == PNG_BYTES
    assert response.header("content-type") == "image/png"
    assert len(scheduler.tasks) == 1
    assert len(store) == 0

    assert await scheduler.run_all() == [True]
    assert store.keys() == ["cache/assets/logo.png?h=100&w=200"]


async def test_hit_skips_origin(service, origin, scheduler):
    await service.handle(get("/assets/logo.png", "w=200&h=100"), scheduler)
    await scheduler.run_all()

    response = await service.handle(get("/assets/logo.png", "h=100&w=200&z=1"), scheduler)

    assert origin.call_count == 1
    assert response.status_code == 200
    assert response.body == PNG_BYTES
    assert response.header("content-type") == "image/png"
    assert response.header("etag")
    assert scheduler.tasks == []


async def test_forbidden_path_touches_nothing(service, store, origin, scheduler):
    response = await service.handle(get("/private/data", "w=1"), scheduler)

    assert response.status_code == 403
    assert response.body == b"Access URI is forbidden."
    assert origin.call_count == 0
    assert store.get_calls == []
    assert scheduler.tasks == []


async def test_non_image_success_is_not_written(service, store, origin, scheduler):
    origin.headers = {"content-type": "text/html"}
    origin.content = b"<html></html>"

    response = await service.handle(get("/logo"), scheduler)
    assert response.status_code == 200
    assert response.body == b"<html></html>"

    assert await scheduler.run_all() == [False]
    assert len(store) == 0


async def test_failure_status_is_passed_through_without_write_back(service, store, origin, scheduler):
    origin.status_code = 404
    origin.content = b"missing"

    response = await service.handle(get("/logo"), scheduler)

    assert response.status_code == 404
    assert response.body == b"missing"
    assert scheduler.tasks == []
    assert len(store) == 0


async def test_transport_failure_propagates(service, origin, scheduler):
    origin.error = httpx.ConnectError("connection refused")

    with pytest.raises(httpx.ConnectError):
        await service.handle(get("/logo"), scheduler)


async def test_no_response_becomes_not_found(settings, store, scheduler):
    null_client = NullOriginClient()
    service = ProxyService.create(settings=settings, object_store=store, origin_client=null_client)

    response = await service.handle(get("/logo"), scheduler)

    assert null_client.calls == 1
    assert response.status_code == 404
    assert response.body == b"Access URI is not found"


async def test_write_back_absorbs_store_errors(settings, origin_client):
    service = ProxyService.create(settings=settings, object_store=FailingPutStore(), origin_client=origin_client)
    response = UpstreamResponse(status_code=200, headers=[("content-type", "image/png")], content=PNG_BYTES)

    assert await service.write_back("logo", response) is False


async def test_write_back_without_content_type(service, store):
    response = UpstreamResponse(status_code=200, headers=[], content=PNG_BYTES)

    assert await service.write_back("logo", response) is False
    assert store.put_calls == []


async def test_concurrent_misses_last_write_wins(service, store, origin, scheduler):
    """Two misses for one key both fetch; the later write is kept."""
    await service.handle(get("/logo"), scheduler)
    origin.headers = {"content-type": "image/webp"}
    origin.content = b"second"
    await service.handle(get("/logo"), scheduler)

    assert origin.call_count == 2
    await scheduler.run_all()

    stored = await store.get("cache/logo")
    assert (stored.body, stored.content_type) == (b"second", "image/webp")


async def test_health_uses_object_store(service):
    assert await service.is_healthy() is True


@pytest.mark.parametrize("path", ["/assets/../private/data", "/assets/%2e%2e/private/data"])
async def test_dot_segments_outside_allowlist_are_forbidden(service, store, origin, scheduler, path):
    response = await service.handle(get(path), scheduler)

    assert response.status_code == 403
    assert origin.call_count == 0
    assert store.get_calls == []
    assert scheduler.tasks == []


async def test_dot_segments_inside_allowlist_share_resolved_path(service, store, origin, scheduler):
    """Key and upstream URL both use the resolved path."""
    response = await service.handle(get("/assets/sub/%2e%2e/logo.png", "w=1"), scheduler)
    await scheduler.run_all()

    assert response.status_code == 200
    assert str(origin.requests[0].url) == "https://origin.example.com/assets/logo.png?w=1"
    assert store.keys() == ["cache/assets/logo.png?w=1"]
