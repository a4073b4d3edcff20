"""Data Transfer Objects for API contracts.

These Pydantic models define the JSON endpoints' external contract.
Proxied image responses are raw bytes and have no DTO.
"""

from .responses import HealthCheckResponse

__all__ = [
    "HealthCheckResponse",
]
