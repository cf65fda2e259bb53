"""
FastAPI application entry point for the taste expansion backend.

This module creates the FastAPI app instance, installs the error handlers
that give every failure an {error, details} body, and registers all routers.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.auth.dependencies import get_authenticated_user
from backend.config import settings
from backend.routes.auth import router as auth_router
from backend.routes.gemini import router as gemini_router
from backend.routes.health import router as health_router
from backend.routes.journey import router as journey_router
from backend.routes.profile import router as profile_router
from backend.routes.progress import router as progress_router
from backend.routes.qloo import router as qloo_router
from backend.routes.recommendations import router as recommendations_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


def _get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins based on environment.

    Environment-based configuration:
    - ENVIRONMENT=production: Uses CORS_ALLOWED_ORIGINS (comma-separated)
    - ENVIRONMENT=testing/development: Allows all origins for local dev

    Returns:
        List of allowed origin URLs, or ["*"] for development.
    """
    if settings.is_production():
        origins = settings.CORS_ALLOWED_ORIGINS
        if origins:
            logger.info(f"CORS configured for production with {len(origins)} allowed origins")
            return origins

        logger.warning(
            "CORS_ALLOWED_ORIGINS not set in production. "
            "No web origins allowed. Set CORS_ALLOWED_ORIGINS for the web client."
        )
        return []

    logger.info(f"CORS configured for {settings.ENVIRONMENT}: allowing all origins")
    return ["*"]


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts)


async def _identity_gate_error(request: Request) -> Optional[StarletteHTTPException]:
    """Run the identity gate for a request whose payload failed to parse."""
    if get_authenticated_user in request.app.dependency_overrides:
        return None

    try:
        await get_authenticated_user(request.headers.get("authorization"))
    except StarletteHTTPException as e:
        return e
    return None


# Create FastAPI app
app = FastAPI(
    title="Taste Expansion API",
    description="Backend service for the taste expansion web client",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Flatten HTTPException details into the response body.

    Routes raise HTTPException(detail={"error": ..., "details": ...}); the
    client expects that dict as the whole body.
    """
    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"error": str(exc.detail)}

    return JSONResponse(
        status_code=exc.status_code,
        content=content,
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Malformed payloads are client errors: 400 with a readable summary.

    FastAPI decodes the body before resolving dependencies, so the identity
    gate runs here first: a caller without a valid token gets 401 whatever
    the body looks like.
    """
    identity_error = await _identity_gate_error(request)
    if identity_error is not None:
        return await http_exception_handler(request, identity_error)

    logger.error(
        f"Validation error on {request.method} {request.url.path}: {exc.errors()}"
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "validation_error",
            "details": _format_validation_errors(exc)
        }
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=True
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "details": str(exc)
        }
    )


# Configure CORS with environment-based origins
cors_origins = _get_cors_origins()
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router)
app.include_router(auth_router)
app.include_router(gemini_router)
app.include_router(qloo_router)
app.include_router(recommendations_router)
app.include_router(journey_router)
app.include_router(profile_router)
app.include_router(progress_router)

logger.info("FastAPI app initialized successfully")
