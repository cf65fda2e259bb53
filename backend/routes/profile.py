"""
Profile API endpoints.

Provides endpoints for reading and updating the user's taste profile.

Profiles hold the display name, the onboarding flag and the taste
preferences document (raw preferences plus the computed taste graph and
onboarding analysis). Each profile is 1:1 with an auth.users record.
"""

import logging
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends, HTTPException, status

from backend.auth.dependencies import AuthenticatedUser, get_authenticated_user
from backend.db.client import get_supabase_client
from backend.schemas.profile import (
    ProfileResponse,
    ProfileUpdateRequest,
    ProfileUpdateResponse,
)
from backend.services import (
    get_or_create_user_profile,
    store_error_details,
    update_user_profile,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["profile"])


def _to_response(profile: Dict[str, Any]) -> ProfileResponse:
    return ProfileResponse(
        user_id=str(profile.get("user_id")),
        display_name=profile.get("display_name"),
        onboarding_completed=bool(profile.get("onboarding_completed")),
        taste_preferences=profile.get("taste_preferences") or {},
        created_at=profile.get("created_at"),
        updated_at=profile.get("updated_at"),
    )


@router.get(
    "",
    response_model=ProfileResponse,
    status_code=status.HTTP_200_OK,
    summary="Get user profile",
    description="""
    Retrieve the authenticated user's profile.

    This endpoint:
    - Returns display name, onboarding flag and taste preferences
    - Creates an empty profile on the first fetch
    - Only accessible to the profile owner (RLS enforced)

    Security:
    - Requires valid Authorization Bearer token
    - RLS ensures users only see their own profile
    """
)
async def get_profile(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> ProfileResponse:
    """
    Auth
    - Handled by get_authenticated_user dependency

    Call Service
    - get_or_create_user_profile() (not-found is not an error)

    Persistence
    - One upsert the first time a user's profile is read
    """
    logger.info(f"Fetching profile for user {auth_user.user_id}")

    supabase_client = get_supabase_client(auth_user.access_token)

    try:
        profile = await get_or_create_user_profile(
            supabase_client=supabase_client,
            user_id=auth_user.user_id
        )
    except Exception as e:
        logger.error(f"Failed to fetch profile for user {auth_user.user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "fetch_error",
                "details": store_error_details(e)
            }
        )

    return _to_response(profile)


@router.put(
    "",
    response_model=ProfileUpdateResponse,
    status_code=status.HTTP_200_OK,
    summary="Update user profile",
    description="""
    Upsert the authenticated user's profile.

    This endpoint:
    - Accepts partial updates (only provided fields are written)
    - Merges taste_preferences into the stored document
    - Returns the complete stored profile

    Security:
    - Only the profile owner can update their profile
    - RLS enforces user_id = auth.uid()
    """
)
async def update_profile(
    request: ProfileUpdateRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> ProfileUpdateResponse:
    logger.info(f"Updating profile for user {auth_user.user_id}")

    if (
        request.display_name is None
        and request.onboarding_completed is None
        and request.taste_preferences is None
    ):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "invalid_request",
                "details": "At least one field must be provided for update"
            }
        )

    supabase_client = get_supabase_client(auth_user.access_token)

    try:
        profile = await update_user_profile(
            supabase_client=supabase_client,
            user_id=auth_user.user_id,
            display_name=request.display_name,
            onboarding_completed=request.onboarding_completed,
            taste_preferences=(
                request.taste_preferences.as_dict()
                if request.taste_preferences is not None
                else None
            ),
        )
    except Exception as e:
        logger.error(f"Failed to update profile for user {auth_user.user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "update_error",
                "details": store_error_details(e)
            }
        )

    return ProfileUpdateResponse(
        profile=_to_response(profile),
        message="Profile updated successfully"
    )
