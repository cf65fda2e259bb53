"""
Pydantic schemas for profile endpoints.

A profile is 1:1 with auth.users and holds the onboarding flag plus the
taste_preferences document (domain texts, taste_graph, onboarding_analysis,
last_analyzed).
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from backend.schemas.preferences import TastePreferences


class ProfileResponse(BaseModel):
    """Response for GET /profile."""

    user_id: str = Field(..., description="User UUID (from auth.users)")
    display_name: Optional[str] = Field(None, description="Name shown in the app")
    onboarding_completed: bool = Field(
        False,
        description="True once the taste journey has been started"
    )
    taste_preferences: Dict[str, Any] = Field(
        default_factory=dict,
        description="Domain texts plus computed taste_graph, onboarding_analysis, last_analyzed"
    )
    created_at: Optional[str] = Field(None, description="ISO-8601 creation timestamp")
    updated_at: Optional[str] = Field(None, description="ISO-8601 timestamp of last update")


class ProfileUpdateRequest(BaseModel):
    """
    Request to create or update the user's profile.

    All fields are optional; at least one must be provided. Taste
    preferences are merged into the stored document, so computed keys
    (taste_graph, onboarding_analysis) survive a preferences edit.
    """

    display_name: Optional[str] = Field(
        None,
        min_length=1,
        max_length=100,
        description="Updated display name"
    )
    onboarding_completed: Optional[bool] = Field(
        None,
        description="Updated onboarding flag"
    )
    taste_preferences: Optional[TastePreferences] = Field(
        None,
        description="Domain preference texts to merge"
    )


class ProfileUpdateResponse(BaseModel):
    """Response after successfully upserting the profile."""

    status: str = Field("UPDATED", description="Indicates the profile was saved")
    profile: ProfileResponse
    message: str = Field(..., examples=["Profile updated successfully"])
