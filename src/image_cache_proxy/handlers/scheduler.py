"""TaskScheduler backed by Starlette background tasks.

Tasks added here run after the response body has been sent, while the
server still holds the request, so a write-back is not cut off mid-flight.
"""

from collections.abc import Callable
from typing import Any

from fastapi import BackgroundTasks


class BackgroundTaskScheduler:
    """Adapts a per-request ``BackgroundTasks`` to the TaskScheduler protocol."""

    def __init__(self, background: BackgroundTasks | None = None) -> None:
        self._background = background if background is not None else BackgroundTasks()

    def schedule(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        self._background.add_task(func, *args, **kwargs)

    @property
    def background(self) -> BackgroundTasks:
        return self._background
