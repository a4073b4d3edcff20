"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (Redis → S3-compatible buckets, etc.)
- Unit testing with in-memory fakes
- Clear separation of concerns

Usage:
    ```python
    from image_cache_proxy.protocols import ObjectStore, OriginClient

    store: ObjectStore = RedisObjectStore.create(settings)  # works
    store: ObjectStore = MemoryObjectStore()                # also works
    ```
"""

from .object_store import ObjectStore
from .origin_client import OriginClient
from .task_scheduler import TaskScheduler

__all__ = [
    "ObjectStore",
    "OriginClient",
    "TaskScheduler",
]
