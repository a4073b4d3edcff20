"""Utility helpers for the image cache proxy."""

from .etag import compute_etag
from .headers import HOP_BY_HOP_HEADERS, strip_headers

__all__ = [
    "compute_etag",
    "HOP_BY_HOP_HEADERS",
    "strip_headers",
]
