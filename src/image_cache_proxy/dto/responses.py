"""Response DTOs for API endpoints."""

from pydantic import BaseModel, Field


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    object_store_healthy: bool = Field(..., description="Whether the object store is reachable")
    upstream_host: str = Field(..., description="Host name of the configured origin")
