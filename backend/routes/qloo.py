"""
Cultural-graph passthrough endpoint.

POST /qloo-api forwards one request to the Qloo API and returns its JSON
body unchanged. Qloo error statuses are passed through.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, status

from backend.auth.dependencies import AuthenticatedUser, get_authenticated_user
from backend.schemas.qloo import QlooRequest
from backend.services import QlooAPIError, QlooNotConfiguredError, call_qloo

logger = logging.getLogger(__name__)

router = APIRouter(tags=["qloo"])


@router.post(
    "/qloo-api",
    status_code=status.HTTP_200_OK,
    summary="Call the Qloo API",
    description="""
    Forward a GET or POST to a Qloo endpoint with the server's API key.

    Security:
    - Requires valid Authorization Bearer token
    - The Qloo key never leaves the server
    """
)
async def qloo_api(
    request: QlooRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> Any:
    logger.info(
        f"Qloo request from user {auth_user.user_id}: "
        f"{request.method} {request.endpoint}"
    )

    try:
        return await call_qloo(
            endpoint=request.endpoint,
            method=request.method,
            params=request.params,
            body=request.body,
        )
    except QlooAPIError as e:
        raise HTTPException(
            status_code=e.status_code,
            detail={
                "error": "Qloo API error",
                "details": e.details,
                "status": e.status_code
            }
        )
    except QlooNotConfiguredError as e:
        logger.error(f"Qloo is not configured: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Internal server error",
                "details": str(e)
            }
        )
    except Exception as e:
        logger.error(f"Qloo request failed for user {auth_user.user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Internal server error",
                "details": str(e)
            }
        )
