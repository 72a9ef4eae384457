"""
TravelMap Backend - Shared Response Schemas
============================================

What:  Response bodies shared by every resource: delete acknowledgement,
       error payload, and health status.
"""

from pydantic import BaseModel, Field

# Upper bound of a PostgreSQL serial (int4) key
MAX_SERIAL_ID = 2**31 - 1


class SuccessResponse(BaseModel):
    """
    Acknowledgement returned by every delete endpoint.

    Deletes are idempotent: the acknowledgement is the same whether or not a
    row with the given id existed.
    """
    success: bool = Field(default=True)


class ErrorResponse(BaseModel):
    """
    Error format for all API errors.

    Example:
        {"error": "minLon, maxLat query parameters are required"}
    """
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer health checks."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
