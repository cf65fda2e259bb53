"""
Health check endpoint schemas.

The health endpoint is PUBLIC (no authentication required).
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """
    Response model for GET /health endpoint.

    Used by load balancers, monitoring systems, and deployment checks.
    """

    status: str = Field(
        default="healthy",
        description="Health status of the API",
        examples=["healthy"]
    )
    service: str = Field(
        default="taste-expansion-backend",
        description="Service name"
    )
