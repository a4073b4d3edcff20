"""Request entities passed between the handler, services and origin client."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class InboundRequest:
    """A caller's request, reduced to what the proxy pipeline inspects.

    Attributes:
        method: HTTP method as received
        path: Raw (percent-encoded) path including the leading slash
        query_string: Raw query string without the leading ``?``
        headers: Header pairs in received order
    """

    method: str
    path: str
    query_string: str = ""
    headers: list[tuple[str, str]] = field(default_factory=list)


@dataclass(frozen=True)
class OriginRequest:
    """A fully built request for the upstream origin."""

    method: str
    url: str
    headers: list[tuple[str, str]] = field(default_factory=list)
