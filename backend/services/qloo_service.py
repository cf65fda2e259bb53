"""
Qloo Service - Cultural Affinity Graph Client

Thin HTTP client for the Qloo API. It is used two ways:
- Raw passthrough for the /qloo-api endpoint (frontend-driven calls)
- Typed helpers (tags, insights) for the recommendation adapter and the
  journey orchestrator

Every call is a single request with the bearer API key; there are no
retries. Non-success statuses raise QlooAPIError with the provider status
and body so callers can decide between surfacing and falling back.
"""

import logging
from typing import Any, Dict, List, Literal, Optional

import httpx

from backend.config import settings

logger = logging.getLogger(__name__)

HttpMethod = Literal["GET", "POST"]

TAGS_ENDPOINT = "v2/tags"
INSIGHTS_ENDPOINT = "insights"
MAX_SIGNAL_TAGS = 5


class QlooNotConfiguredError(RuntimeError):
    """QLOO_API_KEY is not set."""


class QlooAPIError(Exception):
    """Qloo answered with a non-success status."""

    def __init__(self, status_code: int, details: Any):
        super().__init__(f"Qloo API error ({status_code})")
        self.status_code = status_code
        self.details = details


def _build_http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=settings.QLOO_API_URL.rstrip("/") + "/",
        timeout=settings.QLOO_TIMEOUT_SECONDS,
        headers={
            "Authorization": f"Bearer {settings.QLOO_API_KEY}",
            "Content-Type": "application/json",
        },
    )


def _query_params(params: Optional[Dict[str, Any]]) -> Dict[str, str]:
    """Drop null values and stringify the rest for the query string."""
    if not params:
        return {}
    query: Dict[str, str] = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            query[key] = "true" if value else "false"
        else:
            query[key] = str(value)
    return query


def _error_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


async def call_qloo(
    endpoint: str,
    method: HttpMethod = "GET",
    params: Optional[Dict[str, Any]] = None,
    body: Optional[Dict[str, Any]] = None,
) -> Any:
    """
    Issue one request to the Qloo API and return the decoded JSON.

    Args:
        endpoint: Path relative to QLOO_API_URL (e.g. "v2/tags", "insights")
        method: GET sends params as the query string, POST sends body as JSON
        params: Query parameters (GET only, null values dropped)
        body: JSON body (POST only)

    Raises:
        QlooNotConfiguredError: QLOO_API_KEY missing
        QlooAPIError: Non-success status from Qloo
        httpx.HTTPError: Transport failures
    """
    if not settings.QLOO_API_KEY:
        logger.error("QLOO_API_KEY not configured")
        raise QlooNotConfiguredError(
            "QLOO_API_KEY is not configured. "
            "Please set it in your .env file to use the Qloo service."
        )

    path = endpoint.lstrip("/")
    logger.info(f"Calling Qloo API: {method} {path}")

    async with _build_http_client() as client:
        if method == "GET":
            response = await client.get(path, params=_query_params(params))
        else:
            response = await client.post(path, json=body or {})

    if response.is_error:
        details = _error_body(response)
        logger.error(f"Qloo API error: status={response.status_code}, endpoint={path}")
        raise QlooAPIError(status_code=response.status_code, details=details)

    logger.info(f"Qloo API response received: endpoint={path}")
    return response.json()


async def fetch_tag_ids(limit: int = 10) -> List[str]:
    """
    Fetch tag identifiers to use as an interest signal.

    Tags without a string id are discarded; at most MAX_SIGNAL_TAGS ids
    are returned. An unexpected payload shape yields an empty list.
    """
    payload = await call_qloo(TAGS_ENDPOINT, "GET", params={"limit": limit})

    tags = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(tags, list):
        logger.info("Qloo tags response had no data list")
        return []

    tag_ids = [
        tag["id"]
        for tag in tags
        if isinstance(tag, dict) and isinstance(tag.get("id"), str) and tag["id"]
    ]
    return tag_ids[:MAX_SIGNAL_TAGS]


async def fetch_insights(entity_type: str, tags: List[str], limit: int = 10) -> Any:
    """Query Qloo insights for an entity type using tags as the interest signal."""
    return await call_qloo(
        INSIGHTS_ENDPOINT,
        "POST",
        body={
            "filter": {"type": entity_type, "limit": limit},
            "signal": {"interests": {"tags": tags}},
        },
    )
