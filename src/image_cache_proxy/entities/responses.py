"""Response entities."""

from dataclasses import dataclass, field


def _header(headers: list[tuple[str, str]], name: str) -> str | None:
    name = name.lower()
    for key, value in headers:
        if key.lower() == name:
            return value
    return None


@dataclass(frozen=True)
class UpstreamResponse:
    """A fully buffered response received from the origin.

    Attributes:
        status_code: HTTP status returned by the origin
        headers: Header pairs as returned (multi-valued headers repeat)
        content: Decoded response body
    """

    status_code: int
    headers: list[tuple[str, str]] = field(default_factory=list)
    content: bytes = b""

    @property
    def is_success(self) -> bool:
        """True for 2xx statuses."""
        return 200 <= self.status_code < 300

    @property
    def content_type(self) -> str | None:
        return _header(self.headers, "content-type")


@dataclass(frozen=True)
class ProxyResponse:
    """What the proxy hands back to the caller."""

    status_code: int
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: bytes = b""

    @classmethod
    def text(cls, status_code: int, message: str) -> "ProxyResponse":
        """Build a plain-text response."""
        return cls(
            status_code=status_code,
            headers=[("content-type", "text/plain; charset=utf-8")],
            body=message.encode("utf-8"),
        )

    @classmethod
    def from_upstream(cls, response: UpstreamResponse) -> "ProxyResponse":
        """Pass an origin response through unmodified."""
        return cls(
            status_code=response.status_code,
            headers=list(response.headers),
            body=response.content,
        )

    def header(self, name: str) -> str | None:
        return _header(self.headers, name)
