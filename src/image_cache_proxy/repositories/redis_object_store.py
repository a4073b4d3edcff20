"""Redis implementation of ObjectStore.

Each object is one Redis hash with the fields ``body``, ``content_type``
and ``etag``. It satisfies the ObjectStore protocol.
"""

import redis.asyncio as redis
from redis.exceptions import RedisError

from image_cache_proxy.config import Settings, get_redis_client
from image_cache_proxy.entities import CachedObject
from image_cache_proxy.utils import compute_etag


class RedisObjectStore:
    """Redis-backed blob store.

    This class satisfies the ObjectStore protocol through structural
    typing - no explicit inheritance needed.

    Writes run inside a MULTI/EXEC transaction that deletes the old hash
    before writing the new one, so a put is all-or-nothing and never
    leaves fields from a previous value behind. Entries carry no TTL.
    """

    def __init__(self, redis_client: redis.Redis) -> None:
        """Initialize the Redis object store.

        Args:
            redis_client: asyncio Redis client instance.
        """
        self._client = redis_client

    @classmethod
    def create(cls, settings: Settings) -> "RedisObjectStore":
        """Factory method to create RedisObjectStore from settings.

        Args:
            settings: Application settings providing the Redis URL.

        Returns:
            Configured RedisObjectStore
        """
        return cls(redis_client=get_redis_client(settings))

    async def get(self, key: str) -> CachedObject | None:
        fields = await self._client.hgetall(key)
        if not fields:
            return None

        content_type = fields.get(b"content_type")
        etag = fields.get(b"etag")
        return CachedObject(
            body=fields.get(b"body", b""),
            content_type=content_type.decode() if content_type else None,
            etag=etag.decode() if etag else "",
        )

    async def put(self, key: str, body: bytes, content_type: str) -> CachedObject:
        etag = compute_etag(body)

        pipe = self._client.pipeline(transaction=True)
        pipe.delete(key)
        pipe.hset(
            key,
            mapping={
                "body": body,
                "content_type": content_type,
                "etag": etag,
            },
        )
        await pipe.execute()

        return CachedObject(body=body, content_type=content_type, etag=etag)

    async def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except RedisError:
            return False

    async def aclose(self) -> None:
        await self._client.aclose()
