"""Cache store adapter.

Sits between the proxy service and the raw object store. It owns the
key namespace and the image content-type gate, applied on both reads
and writes.
"""

import logging
from collections.abc import Iterable

from image_cache_proxy.entities import CachedObject
from image_cache_proxy.protocols import ObjectStore

logger = logging.getLogger(__name__)


class CacheStoreAdapter:
    """Namespaced, content-type-gated access to an ObjectStore.

    Example:
        ```python
        adapter = CacheStoreAdapter(
            store=MemoryObjectStore(),
            prefix="cache/",
            image_content_types=["image/png"],
        )
        await adapter.store("logo.png", b"...", "image/png")
        hit = await adapter.lookup("logo.png")
        ```
    """

    def __init__(
        self,
        store: ObjectStore,
        prefix: str,
        image_content_types: Iterable[str],
    ) -> None:
        """Initialize the adapter.

        Args:
            store: Backend holding the objects (required).
            prefix: Namespace prepended to every cache key.
            image_content_types: MIME types that may be stored and served.
        """
        self._store = store
        self._prefix = prefix
        self._content_types = frozenset(t.strip().lower() for t in image_content_types)

    def storage_key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def is_allowed_content_type(self, content_type: str | None) -> bool:
        """Check a declared content type against the image allowlist.

        Matching is exact apart from case and surrounding whitespace;
        a value carrying parameters is not an allowed type.
        """
        if not content_type:
            return False
        return content_type.strip().lower() in self._content_types

    async def lookup(self, key: str) -> CachedObject | None:
        """Look up a servable cached image.

        A stored entry counts as a hit only if it exists, is non-empty and
        declares an allowlisted content type. Anything else, including a
        backend error, is reported as a miss.

        Args:
            key: The cache key (without namespace)

        Returns:
            The cached object on a hit, None on a miss
        """
        try:
            cached = await self._store.get(self.storage_key(key))
        except Exception:
            logger.warning("Object store read failed for %s, treating as miss", key, exc_info=True)
            return None

        if cached is None or cached.size == 0:
            return None
        if not self.is_allowed_content_type(cached.content_type):
            logger.info("Ignoring cached %s with content type %r", key, cached.content_type)
            return None
        return cached

    async def store(self, key: str, body: bytes, content_type: str | None) -> bool:
        """Write an image under the namespaced key.

        Args:
            key: The cache key (without namespace)
            body: The image bytes
            content_type: Declared MIME type of the body

        Returns:
            True if written, False if the content type was rejected
        """
        if not self.is_allowed_content_type(content_type):
            return False

        await self._store.put(self.storage_key(key), body, content_type.strip())
        return True

    @property
    def object_store(self) -> ObjectStore:
        """Get the underlying object store (for testing)."""
        return self._store
