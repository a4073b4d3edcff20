"""Admission control and cache-key derivation.

Both steps are pure functions of the inbound path and query string, so
they run before any I/O happens.
"""

from collections.abc import Iterable
from urllib.parse import parse_qsl, quote_plus, urlencode

# Segments a URL parser treats as "." and "..", percent-encoded dots included.
SINGLE_DOT_SEGMENTS = frozenset({".", "%2e"})
DOUBLE_DOT_SEGMENTS = frozenset({"..", ".%2e", "%2e.", "%2e%2e"})


def resolve_dot_segments(path: str) -> str:
    """Resolve "." and ".." segments the way a URL parser does.

    Backslashes count as separators and "%2e" counts as a dot, so the
    result is the path an HTTP client would actually request. ".." never
    climbs above the root.

    Example:
        >>> resolve_dot_segments("/assets/%2e%2e/private/data")
        '/private/data'
    """
    segments = path.replace("\\", "/").split("/")
    if segments and segments[0] == "":
        segments = segments[1:]

    resolved: list[str] = []
    for index, segment in enumerate(segments):
        is_last = index == len(segments) - 1
        lowered = segment.lower()
        if lowered in DOUBLE_DOT_SEGMENTS:
            if resolved:
                resolved.pop()
            if is_last:
                resolved.append("")
        elif lowered in SINGLE_DOT_SEGMENTS:
            if is_last:
                resolved.append("")
        else:
            resolved.append(segment)

    return "/" + "/".join(resolved)


def is_admitted(path: str, allowed_prefixes: Iterable[str]) -> bool:
    """Check the path against the allowlisted prefixes.

    Args:
        path: Inbound path including its leading slash
        allowed_prefixes: Path prefixes eligible for proxying

    Returns:
        True if the path starts with any prefix
    """
    return any(path.startswith(prefix) for prefix in allowed_prefixes)


def normalize_params(query_string: str, recognized: Iterable[str]) -> list[tuple[str, str]]:
    """Keep only recognized query parameters, sorted by name.

    Values are carried over as opaque strings. When a name repeats, the
    first occurrence wins. Unrecognized names are dropped.

    Args:
        query_string: Raw query string without the leading ``?``
        recognized: Parameter names that affect caching

    Returns:
        ``(name, value)`` pairs ordered by name
    """
    received: dict[str, str] = {}
    for name, value in parse_qsl(query_string, keep_blank_values=True):
        received.setdefault(name, value)

    retained = [(name, received[name]) for name in recognized if name in received]
    return sorted(retained, key=lambda pair: pair[0])


def _form_quote(value: str, safe: str = "", encoding: str | None = None, errors: str | None = None) -> str:
    # Same safe set as URLSearchParams: alphanumerics and *-._
    return quote_plus(value, safe="*", encoding=encoding, errors=errors).replace("~", "%7E")


def encode_params(params: list[tuple[str, str]]) -> str:
    """Serialize normalized parameters as a form-encoded query string."""
    return urlencode(params, quote_via=_form_quote)


def build_cache_key(path: str, params: list[tuple[str, str]]) -> str:
    """Combine a path and normalized parameters into a cache key.

    The leading slash is dropped. With no parameters the key is the
    bare path, so ``/logo`` and ``/logo?z=1`` share one entry.

    Example:
        >>> build_cache_key("/assets/logo.png", [("h", "100"), ("w", "200")])
        'assets/logo.png?h=100&w=200'
    """
    key = path[1:] if path.startswith("/") else path
    query = encode_params(params)
    return f"{key}?{query}" if query else key
