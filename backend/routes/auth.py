"""
Auth API endpoints.

Provides endpoints for authentication-related operations:
- GET /auth/me - Get authenticated user identity

All endpoints require valid Bearer token authentication.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from supabase import Client

from backend.auth.dependencies import AuthenticatedUser, get_authenticated_user
from backend.db.client import get_supabase_client
from backend.schemas.auth import AuthMeResponse, ProfileSummary
from backend.services import get_user_profile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


async def _get_profile_summary(
    supabase_client: Client,
    user_id: str
) -> Optional[ProfileSummary]:
    """
    Fetch condensed profile for auth/me response.

    Returns None if the profile doesn't exist yet or cannot be read; the
    identity part of the response does not depend on it.
    """
    try:
        profile = await get_user_profile(supabase_client, user_id)
    except Exception as e:
        logger.error(f"Error fetching profile for auth/me: {e}")
        return None

    if profile is None:
        logger.debug(f"No profile found for user_id={user_id}")
        return None

    return ProfileSummary(
        display_name=profile.get("display_name"),
        onboarding_completed=bool(profile.get("onboarding_completed")),
    )


@router.get(
    "/me",
    response_model=AuthMeResponse,
    status_code=status.HTTP_200_OK,
    summary="Get authenticated user identity",
    description="""
    Get the authenticated user's core identity for session hydration.

    This endpoint:
    - Validates the bearer token
    - Returns user_id and email from JWT claims
    - Includes profile summary if profile exists

    Note: Profile is null for new users who haven't started a journey.

    Security:
    - Requires valid Authorization Bearer token
    - RLS ensures users only see their own data
    """
)
async def get_auth_me(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> AuthMeResponse:
    try:
        supabase_client = get_supabase_client(auth_user.access_token)
        profile = await _get_profile_summary(supabase_client, auth_user.user_id)

        return AuthMeResponse(
            user_id=auth_user.user_id,
            email=auth_user.email,
            profile=profile,
        )

    except Exception as e:
        logger.error(f"Error in get_auth_me for user_id={auth_user.user_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "auth_me_failed", "details": str(e)}
        )
