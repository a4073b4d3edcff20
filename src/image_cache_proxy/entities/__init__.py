"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services,
repositories and handlers. They carry no framework types, so the
proxy pipeline can be exercised without a running server.
"""

from .cached_object import CachedObject
from .origin_result import FailureResponse, NoResponse, OriginResult, Success
from .requests import InboundRequest, OriginRequest
from .responses import ProxyResponse, UpstreamResponse

__all__ = [
    "CachedObject",
    "InboundRequest",
    "OriginRequest",
    "UpstreamResponse",
    "ProxyResponse",
    "OriginResult",
    "Success",
    "FailureResponse",
    "NoResponse",
]
