"""
Recommendation API endpoints.

- POST /generate-recommendations: build and store a discomfort batch
- GET  /recommendations: read stored recommendations back

The user identity always comes from the bearer token; a userId field in
the request body is ignored.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from backend.auth.dependencies import AuthenticatedUser, get_authenticated_user
from backend.db.client import get_supabase_client
from backend.schemas.recommendations import (
    GenerateRecommendationsRequest,
    GenerateRecommendationsResponse,
    RecommendationListResponse,
)
from backend.services import (
    PersistenceError,
    generate_recommendations,
    list_recommendations,
    store_error_details,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["recommendations"])


@router.post(
    "/generate-recommendations",
    response_model=GenerateRecommendationsResponse,
    status_code=status.HTTP_200_OK,
    summary="Generate discomfort recommendations",
    description="""
    Build a batch of recommendations for one domain and store it.

    This endpoint:
    - Uses Qloo insights when available, curated seeds otherwise
    - Shifts every difficulty by (difficulty - 3), clamped to 1-5
    - Upserts rows keyed on (user_id, external_id)
    - Reports the data source as qloo_api, fallback or none

    Security:
    - Requires valid Authorization Bearer token
    - RLS enforces user_id = auth.uid() on the stored rows
    """
)
async def generate_recommendations_endpoint(
    request: GenerateRecommendationsRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> GenerateRecommendationsResponse:
    """
    Auth
    - Handled by get_authenticated_user dependency

    Parse/Validate Request
    - FastAPI validates GenerateRecommendationsRequest
    - userId in the body is never used

    Call Service
    - generate_recommendations() builds, recenters and upserts the batch

    Persistence
    - One upsert for the whole batch; none for an empty batch
    """
    if request.user_id and request.user_id != auth_user.user_id:
        logger.warning(
            f"Ignoring body userId that does not match token for user {auth_user.user_id}"
        )

    supabase_client = get_supabase_client(auth_user.access_token)

    try:
        return await generate_recommendations(
            supabase_client=supabase_client,
            user_id=auth_user.user_id,
            domain=request.domain,
            difficulty=request.difficulty,
            preferences=request.preferences,
        )
    except PersistenceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Failed to save recommendations",
                "details": e.details
            }
        )
    except Exception as e:
        logger.error(
            f"Recommendation generation failed for user {auth_user.user_id}: {e}",
            exc_info=True
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Internal server error",
                "details": str(e)
            }
        )


@router.get(
    "/recommendations",
    response_model=RecommendationListResponse,
    status_code=status.HTTP_200_OK,
    summary="List stored recommendations",
)
async def list_recommendations_endpoint(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    domain: Optional[str] = Query(None, max_length=50, description="Filter by domain"),
) -> RecommendationListResponse:
    """Stored recommendations for the caller, newest first."""
    supabase_client = get_supabase_client(auth_user.access_token)

    try:
        rows = await list_recommendations(
            supabase_client=supabase_client,
            user_id=auth_user.user_id,
            domain=domain,
        )
    except Exception as e:
        logger.error(f"Failed to list recommendations for user {auth_user.user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "fetch_error",
                "details": store_error_details(e)
            }
        )

    return RecommendationListResponse(recommendations=rows, count=len(rows))
