"""
Pydantic schemas for the generative-text endpoint (POST /gemini-api).

Field names on the wire are camelCase (progressData, fullResponse) to match
the web client; Python attributes stay snake_case.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from backend.agents.taste.prompts import TaskType
from backend.schemas.preferences import TastePreferences


class GeminiRequest(BaseModel):
    """Request one generation for a fixed task type."""

    model_config = ConfigDict(populate_by_name=True)

    prompt: str = Field(
        ...,
        min_length=1,
        max_length=20000,
        description="Caller's request text"
    )
    type: TaskType = Field(
        ...,
        description="Selects the system prompt template",
        examples=["onboarding", "explanation", "curriculum", "growth-report"]
    )
    context: Optional[str] = Field(
        None,
        max_length=20000,
        description="Free-text context placed before the request"
    )
    domain: Optional[str] = Field(
        None,
        max_length=50,
        description="Cultural domain (film, music, books, food, fashion)"
    )
    preferences: Optional[TastePreferences] = Field(
        None,
        description="Taste preferences, appended to the prompt as JSON"
    )
    progress_data: Optional[Union[Dict[str, Any], List[Any]]] = Field(
        None,
        alias="progressData",
        description="Progress payload, appended to the prompt as JSON"
    )


class GeminiResponse(BaseModel):
    """Extracted text plus the full provider response."""

    model_config = ConfigDict(populate_by_name=True)

    response: str = Field(..., description="First candidate text, or a placeholder")
    type: TaskType
    domain: Optional[str] = None
    full_response: Dict[str, Any] = Field(
        default_factory=dict,
        alias="fullResponse",
        description="Raw Gemini response (JSON)"
    )
