"""
Pydantic schemas for progress tracking endpoints.

Progress is an append-only log of user interactions with recommendations
(completed, saved, skipped), read back newest first.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

ProgressStatus = Literal["completed", "saved", "skipped"]


class ProgressCreateRequest(BaseModel):
    """Record one interaction."""

    item_id: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Recommendation external_id or an ad hoc id"
    )
    item_type: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Kind of item",
        examples=["recommendation", "challenge", "plan_day"]
    )
    status: ProgressStatus
    domain: str = Field(..., min_length=1, max_length=50)
    difficulty: Optional[int] = Field(None, ge=1, le=5)
    metadata: Optional[Dict[str, Any]] = None


class ProgressItem(BaseModel):
    """One user_progress row."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    user_id: Optional[str] = None
    item_id: str
    item_type: str
    status: str
    domain: str
    difficulty: Optional[int] = None
    metadata: Optional[Dict[str, Any]] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ProgressListResponse(BaseModel):
    """Response for GET /progress."""

    progress: List[ProgressItem] = Field(default_factory=list)
    count: int = Field(..., ge=0)


class ProgressStats(BaseModel):
    """Counts derived from the progress log."""

    total: int = 0
    by_status: Dict[str, int] = Field(default_factory=dict)
    by_domain: Dict[str, int] = Field(default_factory=dict)
    average_difficulty: Optional[float] = None


class GrowthReportRequest(BaseModel):
    """Optional focus question for the growth report."""

    prompt: Optional[str] = Field(None, max_length=2000)


class GrowthReportResponse(BaseModel):
    """Response for POST /progress/growth-report."""

    report: str
    stats: ProgressStats
