"""Q&A Service — Health Check Schema."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """
    Returned by GET /health for monitoring and load balancer health checks.

    A service that cannot reach its database cannot serve any request, so the
    database state decides the overall status.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
