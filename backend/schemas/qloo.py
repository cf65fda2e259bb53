"""
Pydantic schema for the cultural-graph passthrough endpoint (POST /qloo-api).

The response is the provider JSON as-is, so only the request is modeled.
"""

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field


class QlooRequest(BaseModel):
    """Forward one request to the Qloo API."""

    endpoint: str = Field(
        ...,
        min_length=1,
        max_length=200,
        pattern=r"^[A-Za-z0-9_\-/]+$",
        description="Path relative to the Qloo API root",
        examples=["v2/tags", "insights", "recipes/antitheses"]
    )
    method: Literal["GET", "POST"] = Field("GET", description="HTTP method")
    params: Optional[Dict[str, Any]] = Field(
        None,
        description="Query parameters (GET only)"
    )
    body: Optional[Dict[str, Any]] = Field(
        None,
        description="JSON body (POST only)"
    )
