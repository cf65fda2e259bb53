"""
Taste journey API endpoint.

POST /taste-journey dispatches on the `action` field:
- start: analyze preferences, seed discomfort items, mark onboarding done
- generate-path: 4-step bridge from currentTaste to targetTaste
- create-plan: five-day expansion plan
"""

import logging
from typing import Annotated, Any, List

from fastapi import APIRouter, Depends, HTTPException, status

from backend.auth.dependencies import AuthenticatedUser, get_authenticated_user
from backend.db.client import get_supabase_client
from backend.schemas.journey import JOURNEY_ACTIONS, TasteJourneyRequest
from backend.services import (
    create_five_day_plan,
    generate_progressive_path,
    start_taste_journey,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["taste-journey"])


def _missing_fields(action: str, fields: List[str]) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={
            "error": "invalid_request",
            "details": f"Action '{action}' requires: {', '.join(fields)}"
        }
    )


@router.post(
    "/taste-journey",
    status_code=status.HTTP_200_OK,
    summary="Run a taste journey action",
    description="""
    Single entry point for the taste journey.

    Actions:
    - start (preferences)
    - generate-path (domain, currentTaste, targetTaste)
    - create-plan (preferences, optional domain)

    Unknown actions return 400 {error: "Invalid action"}.

    Security:
    - Requires valid Authorization Bearer token
    """
)
async def taste_journey(
    request: TasteJourneyRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> Any:
    """
    Auth
    - Handled by get_authenticated_user dependency

    Parse/Validate Request
    - action must be one of start, generate-path, create-plan
    - Each action checks its own required fields

    Call Service
    - journey_service function for the action

    Map Output -> ResponseModel
    - Responses are serialized with camelCase aliases

    Persistence
    - Only `start` writes (recommendations and the profile)
    """
    action = request.action
    logger.info(f"Taste journey request from user {auth_user.user_id}: action={action}")

    if action not in JOURNEY_ACTIONS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Invalid action",
                "details": f"Supported actions: {', '.join(JOURNEY_ACTIONS)}"
            }
        )

    if action == "start":
        if request.preferences is None:
            raise _missing_fields(action, ["preferences"])

        supabase_client = get_supabase_client(auth_user.access_token)
        try:
            result = await start_taste_journey(
                supabase_client=supabase_client,
                user_id=auth_user.user_id,
                preferences=request.preferences,
            )
        except Exception as e:
            logger.error(f"Failed to start taste journey for user {auth_user.user_id}: {e}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail={
                    "error": "Failed to start taste journey",
                    "details": str(e)
                }
            )
        return result.model_dump(by_alias=True)

    if action == "generate-path":
        missing = [
            name
            for name, value in (
                ("domain", request.domain),
                ("currentTaste", request.current_taste),
                ("targetTaste", request.target_taste),
            )
            if not value
        ]
        if missing:
            raise _missing_fields(action, missing)

        path = await generate_progressive_path(
            domain=request.domain,
            current_taste=request.current_taste,
            target_taste=request.target_taste,
        )
        return path.model_dump(by_alias=True)

    plan = await create_five_day_plan(
        preferences=request.preferences,
        domain=request.domain,
    )
    return plan.model_dump(by_alias=True)
