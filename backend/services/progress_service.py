"""
Progress Service - Interaction Log and Growth Reports

Handles the append-only user_progress log:
- Insert one row per interaction (completed, saved, skipped)
- Read the log newest first, optionally filtered by status or domain
- Summarize the log and ask Gemini for a growth report

Rows are never updated or deleted here.
"""

import logging
from collections import Counter
from typing import Any, Dict, List, Optional, cast

from supabase import Client

from backend.agents.taste.prompts import build_growth_report_prompt
from backend.schemas.progress import (
    GrowthReportResponse,
    ProgressCreateRequest,
    ProgressStats,
)
from backend.services.errors import PersistenceError
from backend.services.gemini_service import generate_text

logger = logging.getLogger(__name__)

PROGRESS_TABLE = "user_progress"

# Most recent rows sent to Gemini with a growth report request
REPORT_RECENT_ITEMS = 20


async def insert_progress(
    supabase_client: Client,
    user_id: str,
    item: ProgressCreateRequest
) -> Dict[str, Any]:
    """
    Append one interaction to the progress log.

    Raises:
        PersistenceError: If the store returned no row
    """
    row = {"user_id": user_id, **item.model_dump(exclude_none=True)}

    logger.info(
        f"Tracking progress for user {user_id}: "
        f"status={item.status}, domain={item.domain}, item_type={item.item_type}"
    )

    result = supabase_client.table(PROGRESS_TABLE).insert(row).execute()

    if not result.data:
        raise PersistenceError("Failed to track progress: no data returned")

    return cast(Dict[str, Any], result.data[0])


async def list_progress(
    supabase_client: Client,
    user_id: str,
    status: Optional[str] = None,
    domain: Optional[str] = None
) -> List[Dict[str, Any]]:
    """Read the user's progress log, newest first."""
    query = supabase_client.table(PROGRESS_TABLE).select("*").eq("user_id", user_id)

    if status:
        query = query.eq("status", status)
    if domain:
        query = query.eq("domain", domain)

    result = query.order("created_at", desc=True).execute()

    items = cast(List[Dict[str, Any]], result.data or [])
    logger.info(f"Fetched {len(items)} progress rows for user {user_id}")
    return items


def compute_progress_stats(items: List[Dict[str, Any]]) -> ProgressStats:
    """Count rows per status and per domain, and average the difficulty."""
    by_status = Counter(str(item.get("status")) for item in items if item.get("status"))
    by_domain = Counter(str(item.get("domain")) for item in items if item.get("domain"))

    difficulties = [
        item["difficulty"]
        for item in items
        if isinstance(item.get("difficulty"), (int, float))
    ]
    average = round(sum(difficulties) / len(difficulties), 2) if difficulties else None

    return ProgressStats(
        total=len(items),
        by_status=dict(by_status),
        by_domain=dict(by_domain),
        average_difficulty=average,
    )


async def generate_growth_report(
    supabase_client: Client,
    user_id: str,
    focus: Optional[str] = None
) -> GrowthReportResponse:
    """
    Summarize the progress log and ask Gemini for a growth report.

    Gemini errors propagate; the route maps them to HTTP responses.
    """
    items = await list_progress(supabase_client, user_id)
    stats = compute_progress_stats(items)

    recent = [
        {
            "item_type": item.get("item_type"),
            "status": item.get("status"),
            "domain": item.get("domain"),
            "difficulty": item.get("difficulty"),
            "created_at": item.get("created_at"),
        }
        for item in items[:REPORT_RECENT_ITEMS]
    ]

    result = await generate_text(
        task_type="growth-report",
        prompt=build_growth_report_prompt(stats.model_dump(), focus),
        progress_data={"recent": recent},
    )

    return GrowthReportResponse(report=result.response_text, stats=stats)
