"""In-memory implementation of ObjectStore, for tests and local runs."""

from image_cache_proxy.entities import CachedObject
from image_cache_proxy.utils import compute_etag


class MemoryObjectStore:
    """Dict-backed object store.

    Records every key passed to ``get`` and ``put`` so tests can assert
    which storage operations a request triggered.
    """

    def __init__(self) -> None:
        self._objects: dict[str, CachedObject] = {}
        self.get_calls: list[str] = []
        self.put_calls: list[str] = []

    async def get(self, key: str) -> CachedObject | None:
        self.get_calls.append(key)
        return self._objects.get(key)

    async def put(self, key: str, body: bytes, content_type: str) -> CachedObject:
        self.put_calls.append(key)
        obj = CachedObject(body=bytes(body), content_type=content_type, etag=compute_etag(body))
        self._objects[key] = obj
        return obj

    async def health_check(self) -> bool:
        return True

    def seed(self, key: str, body: bytes, content_type: str | None) -> None:
        """Insert an object directly, bypassing any validation."""
        self._objects[key] = CachedObject(body=body, content_type=content_type, etag=compute_etag(body))

    def keys(self) -> list[str]:
        return list(self._objects)

    def __len__(self) -> int:
        return len(self._objects)
