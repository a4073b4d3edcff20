"""Outcome of a single upstream fetch.

The origin fetcher yields exactly one of three variants, and callers
branch on them with ``isinstance``:

    - Success: a response with a 2xx status
    - FailureResponse: a response with any other status
    - NoResponse: the client produced no response object at all
"""

from dataclasses import dataclass

from .responses import UpstreamResponse


@dataclass(frozen=True)
class Success:
    response: UpstreamResponse


@dataclass(frozen=True)
class FailureResponse:
    response: UpstreamResponse


@dataclass(frozen=True)
class NoResponse:
    pass


OriginResult = Success | FailureResponse | NoResponse
