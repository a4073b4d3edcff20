"""
End-to-end tests for the image cache proxy API.
"""

import httpx
import pytest
from conftest import PNG_BYTES
from fastapi.testclient import TestClient

from image_cache_proxy.api.app import create_app
from image_cache_proxy.config import Settings
from image_cache_proxy.handlers import INTERNAL_ERROR_MESSAGE


def test_miss_then_hit(client, origin, store):
    """A fetched image is written back and served from cache next time."""
    first = client.get("/assets/logo.png?w=200&h=100&z=ignored")
    assert first.status_code == 200
    assert first.headers["content-type"] == "image/png"
    assert first.content == PNG_BYTES
    assert origin.call_count == 1
    assert str(origin.requests[0].url) == "https://origin.example.com/assets/logo.png?h=100&w=200"

    # TestClient returns once background tasks have finished
    assert store.keys() == ["cache/assets/logo.png?h=100&w=200"]

    second = client.get("/assets/logo.png?h=100&w=200")
    assert second.status_code == 200
    assert second.content == first.content
    assert second.headers["content-type"] == first.headers["content-type"]
    assert second.headers["etag"]
    assert origin.call_count == 1


def test_repeated_hits_are_identical(client, origin):
    client.get("/banner?q=80")
    bodies = {client.get("/banner?q=80").content for _ in range(3)}

    assert bodies == {PNG_BYTES}
    assert origin.call_count == 1


def test_forbidden_path(client, origin, store):
    response = client.get("/private/data?w=100")

    assert response.status_code == 403
    assert response.text == "Access URI is forbidden."
    assert origin.call_count == 0
    assert store.get_calls == []


def test_html_from_origin_is_passed_through_and_not_cached(client, origin, store):
    origin.headers = {"content-type": "text/html"}
    origin.content = b"<html>maintenance</html>"

    response = client.get("/logo")
    assert response.status_code == 200
    assert response.headers["content-type"] == "text/html"
    assert response.content == b"<html>maintenance</html>"
    assert len(store) == 0

    client.get("/logo")
    assert origin.call_count == 2


def test_origin_error_status_is_passed_through(client, origin, store):
    origin.status_code = 404
    origin.headers = {"content-type": "text/plain", "x-origin": "yes"}
    origin.content = b"no such image"

    response = client.get("/organizations/1/avatar.png")

    assert response.status_code == 404
    assert response.text == "no such image"
    assert response.headers["x-origin"] == "yes"
    assert len(store) == 0


def test_transport_failure_returns_500(client, origin):
    origin.error = httpx.ConnectError("connection refused")

    response = client.get("/logo")

    assert response.status_code == 500
    assert response.text == INTERNAL_ERROR_MESSAGE


def test_poisoned_cache_entry_is_refetched(client, origin, store):
    store.seed("cache/logo", b"<html>", "text/html")

    response = client.get("/logo")

    assert response.status_code == 200
    assert response.content == PNG_BYTES
    assert origin.call_count == 1


def test_encoded_dot_segments_cannot_escape_allowlist(client, origin, store):
    response = client.get("/assets/%2e%2e/private/data")

    assert response.status_code == 403
    assert origin.call_count == 0
    assert store.get_calls == []


def test_only_recognized_params_reach_origin(client, origin):
    client.get("/fec-event/banner.jpg?utm_source=mail&f=webp")

    assert str(origin.requests[0].url) == "https://origin.example.com/fec-event/banner.jpg?f=webp"


def test_encoded_path_is_forwarded_verbatim(client, origin):
    client.get("/assets/a%20b.png")

    assert origin.requests[0].url.raw_path == b"/assets/a%20b.png"


def test_method_and_headers_are_forwarded(client, origin):
    client.get("/logo", headers={"x-request-id": "abc"})

    upstream = origin.requests[0]
    assert upstream.method == "GET"
    assert upstream.headers["x-request-id"] == "abc"
    assert upstream.headers["host"] == "origin.example.com"


def test_health(client):
    response = client.get("/healthz")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["upstream_host"] == "origin.example.com"


def test_startup_requires_upstream(store, origin_client):
    app = create_app(settings=Settings(upstream_url=""), object_store=store, origin_client=origin_client)

    with pytest.raises(ValueError, match="UPSTREAM_URL"):
        with TestClient(app):
            pass
