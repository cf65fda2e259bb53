"""
Progress API endpoints.

- GET  /progress: the user's interaction log, newest first
- POST /progress: append one interaction (completed, saved, skipped)
- POST /progress/growth-report: Gemini summary of the log

The log is append-only: there is no update or delete endpoint.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from backend.auth.dependencies import AuthenticatedUser, get_authenticated_user
from backend.db.client import get_supabase_client
from backend.schemas.progress import (
    GrowthReportRequest,
    GrowthReportResponse,
    ProgressCreateRequest,
    ProgressItem,
    ProgressListResponse,
    ProgressStatus,
)
from backend.services import (
    GeminiAPIError,
    generate_growth_report,
    insert_progress,
    list_progress,
    store_error_details,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/progress", tags=["progress"])


@router.get(
    "",
    response_model=ProgressListResponse,
    status_code=status.HTTP_200_OK,
    summary="List progress",
    description="""
    Retrieve the user's progress log ordered by created_at descending.

    Optional filters:
    - status: completed | saved | skipped
    - domain: film | music | books | food | fashion

    Security:
    - Requires valid Authorization Bearer token
    - RLS ensures users only see their own rows
    """
)
async def get_progress(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    status_filter: Optional[ProgressStatus] = Query(None, alias="status"),
    domain: Optional[str] = Query(None, max_length=50),
) -> ProgressListResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    try:
        items = await list_progress(
            supabase_client=supabase_client,
            user_id=auth_user.user_id,
            status=status_filter,
            domain=domain,
        )
    except Exception as e:
        logger.error(f"Failed to fetch progress for user {auth_user.user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "fetch_error",
                "details": store_error_details(e)
            }
        )

    return ProgressListResponse(progress=items, count=len(items))


@router.post(
    "",
    response_model=ProgressItem,
    status_code=status.HTTP_201_CREATED,
    summary="Track progress",
    description="""
    Append one interaction to the user's progress log.

    Security:
    - Requires valid Authorization Bearer token
    - RLS enforces user_id = auth.uid()
    """
)
async def track_progress(
    request: ProgressCreateRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> ProgressItem:
    supabase_client = get_supabase_client(auth_user.access_token)

    try:
        row = await insert_progress(
            supabase_client=supabase_client,
            user_id=auth_user.user_id,
            item=request,
        )
    except Exception as e:
        logger.error(f"Failed to track progress for user {auth_user.user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "create_error",
                "details": store_error_details(e)
            }
        )

    return ProgressItem.model_validate(row)


@router.post(
    "/growth-report",
    response_model=GrowthReportResponse,
    status_code=status.HTTP_200_OK,
    summary="Generate a growth report",
    description="""
    Summarize the user's progress log and ask Gemini for a growth report.

    Gemini errors are passed through with the provider's status code.

    Security:
    - Requires valid Authorization Bearer token
    """
)
async def growth_report(
    request: GrowthReportRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> GrowthReportResponse:
    supabase_client = get_supabase_client(auth_user.access_token)

    try:
        return await generate_growth_report(
            supabase_client=supabase_client,
            user_id=auth_user.user_id,
            focus=request.prompt,
        )
    except GeminiAPIError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail={
                "error": "Gemini API error",
                "details": e.details,
                "status": e.status_code
            }
        )
    except Exception as e:
        logger.error(f"Growth report failed for user {auth_user.user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Internal server error",
                "details": str(e)
            }
        )
