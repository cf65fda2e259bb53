"""
Pydantic schemas for the taste journey endpoint (POST /taste-journey).

One endpoint serves three actions (start, generate-path, create-plan);
each action has its own response model. Wire names are camelCase.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from backend.schemas.preferences import TastePreferences
from backend.schemas.recommendations import ContentRecommendation
from backend.utils.difficulty import coerce_difficulty

JOURNEY_ACTIONS = ("start", "generate-path", "create-plan")


class TasteJourneyRequest(BaseModel):
    """
    Request body for all journey actions.

    Required fields per action:
    - start: preferences
    - generate-path: domain, currentTaste, targetTaste
    - create-plan: preferences (domain optional)
    """

    model_config = ConfigDict(populate_by_name=True)

    action: str = Field(..., examples=list(JOURNEY_ACTIONS))
    preferences: Optional[TastePreferences] = None
    domain: Optional[str] = Field(None, max_length=50)
    current_taste: Optional[str] = Field(None, alias="currentTaste", max_length=500)
    target_taste: Optional[str] = Field(None, alias="targetTaste", max_length=500)


# --- start ---

class JourneyStartResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    taste_graph: Dict[str, Any] = Field(default_factory=dict, alias="tasteGraph")
    onboarding_report: str = Field(..., alias="onboardingReport")
    discomfort_items: List[ContentRecommendation] = Field(
        default_factory=list,
        alias="discomfortItems"
    )
    message: str = "Taste journey started successfully"


# --- generate-path ---

class ProgressivePathStep(BaseModel):
    """One step of a bridge from the current taste to the target taste."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str
    difficulty: int = Field(..., ge=1, le=5)
    description: str = ""
    cultural_context: Optional[str] = Field(None, alias="culturalContext")

    @field_validator("difficulty", mode="before")
    @classmethod
    def _clamp(cls, value: Any) -> int:
        return coerce_difficulty(value, default=1)

    @field_validator("description", mode="before")
    @classmethod
    def _null_description(cls, value: Any) -> Any:
        return "" if value is None else value


class ProgressivePathResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    progressive_path: List[ProgressivePathStep] = Field(..., alias="progressivePath")
    domain: str
    journey: str = Field(..., examples=["Pop → Free Jazz"])


# --- create-plan ---

class PlanDay(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    day: int = Field(..., ge=1, le=5)
    theme: str
    domain: str
    title: str
    challenge: str
    time_commitment: str = Field(..., alias="timeCommitment")
    learning_objective: str = Field(..., alias="learningObjective")
    reflection_prompt: str = Field(..., alias="reflectionPrompt")
    connection_to_growth: str = Field(..., alias="connectionToGrowth")


class FiveDayPlan(BaseModel):
    title: str
    domain: str
    description: str
    days: List[PlanDay] = Field(default_factory=list)


class FiveDayPlanResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    five_day_plan: FiveDayPlan = Field(..., alias="fiveDayPlan")
