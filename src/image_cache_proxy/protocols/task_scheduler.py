"""Background task scheduling protocol.

The hosting environment guarantees a scheduled task runs to completion
even after the response has been sent. Failures inside the task are
never observable to the response already returned.
"""

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class TaskScheduler(Protocol):
    """Protocol for fire-and-forget work tied to a response's lifetime."""

    def schedule(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        """Queue ``func(*args, **kwargs)`` to run after the response is sent."""
        ...
