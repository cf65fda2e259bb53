"""
Pydantic schemas for discomfort recommendations.

Covers:
- The POST /generate-recommendations request/response contract
- Stored content_recommendations rows
- The candidate batch returned by the recommendation adapter, modeled as
  PRIMARY (Qloo data), FALLBACK (seed data, with the reason) or FAILED
  (nothing produced) so callers and tests can tell the sources apart
"""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from backend.schemas.preferences import TastePreferences

RecommendationSource = Literal["qloo_api", "fallback", "none"]

FallbackReason = Literal["no_valid_tags", "qloo_error", "unexpected_format", "empty_result"]


# ============================================================================
# REQUEST MODELS
# ============================================================================

class GenerateRecommendationsRequest(BaseModel):
    """
    Request a batch of discomfort recommendations for one domain.

    userId is accepted for client compatibility but ignored: the verified
    token is the only source of the user identity.
    """

    model_config = ConfigDict(populate_by_name=True)

    user_id: Optional[str] = Field(
        None,
        alias="userId",
        description="Ignored; identity comes from the bearer token"
    )
    preferences: Optional[TastePreferences] = Field(
        None,
        description="User's taste preferences"
    )
    domain: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Cultural domain; unknown domains are treated as film",
        examples=["film", "music", "books", "food", "fashion"]
    )
    difficulty: int = Field(
        3,
        description="Requested difficulty; 3 is neutral, results are clamped to 1-5",
        examples=[1, 3, 5]
    )


# ============================================================================
# STORED ROWS
# ============================================================================

class ContentRecommendation(BaseModel):
    """One content_recommendations row as returned by the store."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = Field(None, description="Row UUID")
    user_id: Optional[str] = Field(None, description="Owner UUID")
    external_id: str = Field(..., description="Qloo id or generated fallback token")
    domain: str
    title: str
    description: Optional[str] = None
    difficulty: int = Field(..., ge=1, le=5)
    image_url: Optional[str] = None
    reason: Optional[str] = None
    cultural_context: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class GenerateRecommendationsResponse(BaseModel):
    """Response for POST /generate-recommendations."""

    recommendations: List[ContentRecommendation] = Field(default_factory=list)
    message: str = Field(..., examples=["Recommendations generated successfully"])
    source: RecommendationSource = Field(
        ...,
        description="qloo_api when Qloo data was used, fallback for seed data, none when empty"
    )


class RecommendationListResponse(BaseModel):
    """Response for GET /recommendations."""

    recommendations: List[ContentRecommendation] = Field(default_factory=list)
    count: int = Field(..., ge=0)


# ============================================================================
# ADAPTER RESULT MODELS
# ============================================================================

class RecommendationCandidate(BaseModel):
    """A recommendation before persistence."""

    domain: str
    title: str
    description: str
    difficulty: int
    image_url: str
    reason: str
    cultural_context: str
    metadata: Dict[str, Any] = Field(default_factory=dict)
    external_id: Optional[str] = Field(
        None,
        description="Provider id when the candidate came from Qloo"
    )


class PrimaryCandidates(BaseModel):
    """Candidates built from Qloo insights."""

    status: Literal["PRIMARY"] = "PRIMARY"
    candidates: List[RecommendationCandidate]

    @property
    def source(self) -> RecommendationSource:
        return "qloo_api"


class FallbackCandidates(BaseModel):
    """Candidates built from the static seed table."""

    status: Literal["FALLBACK"] = "FALLBACK"
    candidates: List[RecommendationCandidate]
    reason: FallbackReason

    @property
    def source(self) -> RecommendationSource:
        return "fallback"


class FailedCandidates(BaseModel):
    """Neither Qloo nor the seed table produced anything."""

    status: Literal["FAILED"] = "FAILED"
    candidates: List[RecommendationCandidate] = Field(default_factory=list)
    reason: str

    @property
    def source(self) -> RecommendationSource:
        return "none"


CandidateBatch = Union[PrimaryCandidates, FallbackCandidates, FailedCandidates]
