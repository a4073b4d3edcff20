"""Handler layer for HTTP endpoints.

This layer contains the HTTP request/response handlers.
Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .proxy_handler import INTERNAL_ERROR_MESSAGE, ProxyHandler
from .scheduler import BackgroundTaskScheduler

__all__ = [
    "BackgroundTaskScheduler",
    "INTERNAL_ERROR_MESSAGE",
    "ProxyHandler",
]
