import hashlib


def compute_etag(body: bytes) -> str:
    """Return a quoted strong etag (MD5 hex digest) for a body."""
    return f'"{hashlib.md5(body).hexdigest()}"'
