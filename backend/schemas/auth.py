"""
Pydantic schemas for authentication endpoints.

These models define the strict request/response contracts for auth endpoints.
"""

from typing import Optional
from pydantic import BaseModel, Field


class ProfileSummary(BaseModel):
    """
    Condensed profile info for auth/me response.

    Contains only what the client needs to route a fresh session
    (onboarding vs. dashboard).
    """
    display_name: Optional[str] = Field(None, description="Name shown in the app")
    onboarding_completed: bool = Field(False, description="Whether onboarding is done")


class AuthMeResponse(BaseModel):
    """
    Response for GET /auth/me - Authenticated user identity.

    Used on app boot to hydrate the session and confirm token validity.
    """
    user_id: str = Field(..., description="User UUID (from JWT 'sub' claim)")
    email: Optional[str] = Field(
        None,
        description="User's email (from JWT 'email' claim, if present)"
    )
    profile: Optional[ProfileSummary] = Field(
        None,
        description="User's profile if it exists. Null before the first profile write."
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": "38f7d540-23fa-497a-8df2-3ab9cbe13da5",
                    "email": "user@example.com",
                    "profile": {
                        "display_name": "Sam",
                        "onboarding_completed": True
                    }
                }
            ]
        }
    }
