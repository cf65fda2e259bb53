"""
Generative-text API endpoint.

POST /gemini-api runs one Gemini generation for a task type
(onboarding, explanation, curriculum, growth-report) and returns the
extracted text with the full provider response.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from backend.auth.dependencies import AuthenticatedUser, get_authenticated_user
from backend.schemas.gemini import GeminiRequest, GeminiResponse
from backend.services import GeminiAPIError, GeminiNotConfiguredError, generate_text

logger = logging.getLogger(__name__)

router = APIRouter(tags=["gemini"])


@router.post(
    "/gemini-api",
    response_model=GeminiResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_200_OK,
    summary="Generate text with Gemini",
    description="""
    Run one Gemini generation using the system prompt for the requested type.

    Provider errors are passed through with the provider's status code as
    {error: "Gemini API error", details, status}.

    Security:
    - Requires valid Authorization Bearer token
    """
)
async def gemini_api(
    request: GeminiRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> GeminiResponse:
    """
    Auth
    - Handled by get_authenticated_user dependency

    Parse/Validate Request
    - FastAPI validates GeminiRequest (type must be a known task type)

    Call Service
    - generate_text() builds the prompt and calls Gemini

    Map Output -> ResponseModel
    - response is the first candidate text or "No response generated"
    """
    logger.info(f"Gemini request from user {auth_user.user_id}: type={request.type}")

    try:
        result = await generate_text(
            task_type=request.type,
            prompt=request.prompt,
            domain=request.domain,
            preferences=request.preferences.as_dict() if request.preferences is not None else None,
            progress_data=request.progress_data,
            context=request.context,
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
    except GeminiNotConfiguredError as e:
        logger.error(f"Gemini is not configured: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Internal server error",
                "details": str(e)
            }
        )
    except Exception as e:
        logger.error(f"Gemini request failed for user {auth_user.user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "Internal server error",
                "details": str(e)
            }
        )

    return GeminiResponse(
        response=result.response_text,
        type=request.type,
        domain=request.domain,
        full_response=result.full_response,
    )
