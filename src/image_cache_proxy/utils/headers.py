HOP_BY_HOP_HEADERS = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "te",
        "trailer",
        "transfer-encoding",
        "upgrade",
    }
)


def strip_headers(headers: list[tuple[str, str]], names: frozenset[str]) -> list[tuple[str, str]]:
    """Return the header pairs whose (case-insensitive) name is not in ``names``."""
    return [(key, value) for key, value in headers if key.lower() not in names]
