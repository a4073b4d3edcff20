"""Cached object domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CachedObject:
    """An image payload as held by the object store.

    Attributes:
        body: The raw image bytes
        content_type: Declared MIME type recorded at write time, if any
        etag: Quoted integrity tag for the body
    """

    body: bytes
    content_type: str | None
    etag: str

    @property
    def size(self) -> int:
        return len(self.body)
