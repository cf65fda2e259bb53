"""
User profile service.

Handles fetching and upserting user_profiles rows in Supabase.
Profiles are 1:1 with auth.users and are never deleted by this backend.
"""

import logging
from typing import Any, Dict, Optional, cast

from postgrest.exceptions import APIError
from supabase import Client

from backend.services.errors import PersistenceError
from backend.utils.constants import POSTGREST_NOT_FOUND_CODE

logger = logging.getLogger(__name__)

PROFILE_TABLE = "user_profiles"


async def get_user_profile(
    supabase_client: Client,
    user_id: str
) -> Optional[Dict[str, Any]]:
    """
    Fetch the user's profile from Supabase.

    A missing row is not an error: PostgREST reports it with code
    PGRST116 and this function returns None ("profile not yet created").
    Every other read failure propagates.

    Args:
        supabase_client: Authenticated Supabase client
        user_id: The authenticated user's ID

    Returns:
        The user's profile dict, or None if not found

    Security:
        - RLS enforces user_id = auth.uid()
    """
    logger.debug(f"Fetching profile for user {user_id}")

    try:
        result = (
            supabase_client.table(PROFILE_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .single()
            .execute()
        )
    except APIError as e:
        if e.code == POSTGREST_NOT_FOUND_CODE:
            logger.info(f"Profile not found for user {user_id}")
            return None
        raise

    if not result.data:
        return None

    profile: Dict[str, Any] = cast(Dict[str, Any], result.data)
    logger.info(
        f"Profile found for user {user_id}: "
        f"onboarding_completed={profile.get('onboarding_completed')}"
    )
    return profile


async def upsert_user_profile(
    supabase_client: Client,
    user_id: str,
    **patch: Any
) -> Dict[str, Any]:
    """
    Create the profile or update the given columns.

    Only the columns in `patch` are written; other columns of an existing
    row keep their values.

    Args:
        supabase_client: Authenticated Supabase client
        user_id: The authenticated user's ID
        **patch: Columns to write (display_name, onboarding_completed,
                 taste_preferences)

    Returns:
        The stored profile record

    Raises:
        PersistenceError: If the store returned no row
        postgrest.exceptions.APIError: If the store rejected the write
    """
    row = {"user_id": user_id, **patch}

    logger.info(f"Upserting profile for user {user_id}: {sorted(patch.keys())}")

    result = (
        supabase_client.table(PROFILE_TABLE)
        .upsert(row, on_conflict="user_id")
        .execute()
    )

    if not result.data:
        raise PersistenceError("Failed to save profile: no data returned")

    profile: Dict[str, Any] = cast(Dict[str, Any], result.data[0])
    logger.info(f"Profile saved successfully for user {user_id}")
    return profile


async def get_or_create_user_profile(
    supabase_client: Client,
    user_id: str
) -> Dict[str, Any]:
    """Return the profile, creating an empty one on first fetch."""
    profile = await get_user_profile(supabase_client, user_id)
    if profile is not None:
        return profile

    logger.info(f"Creating initial profile for user {user_id}")
    return await upsert_user_profile(
        supabase_client,
        user_id,
        onboarding_completed=False,
        taste_preferences={},
    )


async def update_user_profile(
    supabase_client: Client,
    user_id: str,
    display_name: Optional[str] = None,
    onboarding_completed: Optional[bool] = None,
    taste_preferences: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Apply a partial profile update.

    taste_preferences is merged into the stored document rather than
    replacing it, so the computed taste_graph and onboarding_analysis
    survive a preferences edit.
    """
    patch: Dict[str, Any] = {}

    if display_name is not None:
        patch["display_name"] = display_name
    if onboarding_completed is not None:
        patch["onboarding_completed"] = onboarding_completed
    if taste_preferences is not None:
        existing = await get_user_profile(supabase_client, user_id)
        stored = (existing or {}).get("taste_preferences") or {}
        patch["taste_preferences"] = {**stored, **taste_preferences}

    return await upsert_user_profile(supabase_client, user_id, **patch)
