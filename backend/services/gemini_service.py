"""
Gemini Service - Generative-Text Adapter

Translates a (type, prompt, domain, preferences, progressData, context)
request into one Gemini call and returns the extracted plain text.

Architecture:
- Pattern: Single-shot LLM call, no tools
- API: Google Gen AI Python SDK (google-genai), async client
- Generation: temperature 0.7, top_k 40, top_p 0.95, max 1024 output tokens
- Safety: harassment, hate speech, sexually explicit and dangerous content
  blocked at BLOCK_MEDIUM_AND_ABOVE

Failure modes:
- GOOGLE_API_KEY missing -> GeminiNotConfiguredError (HTTP 500)
- Provider returns an error status -> GeminiAPIError carrying the provider
  status code and body (propagated verbatim by the route)
- Anything else propagates to the route's generic 500 handler
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from google import genai
from google.genai import errors, types

from backend.agents.taste.prompts import (
    build_full_prompt,
    build_user_prompt,
    get_system_prompt,
)
from backend.config import settings
from backend.utils.logging import preview

logger = logging.getLogger(__name__)

NO_RESPONSE_TEXT = "No response generated"

GENERATION_TEMPERATURE = 0.7
GENERATION_TOP_K = 40
GENERATION_TOP_P = 0.95
GENERATION_MAX_OUTPUT_TOKENS = 1024

SAFETY_CATEGORIES = [
    types.HarmCategory.HARM_CATEGORY_HARASSMENT,
    types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
    types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
    types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
]

# Lazily created Gemini client
_gemini_client: Optional[genai.Client] = None


class GeminiNotConfiguredError(RuntimeError):
    """GOOGLE_API_KEY is not set."""


class GeminiAPIError(Exception):
    """Gemini answered with a non-success status."""

    def __init__(self, status_code: int, details: Any):
        super().__init__(f"Gemini API error ({status_code})")
        self.status_code = status_code
        self.details = details


@dataclass
class GeminiResult:
    """
    Outcome of one generation call.

    Attributes:
        text: First candidate's first part text, or None when the model
              returned nothing usable (safety block, empty candidate)
        full_response: JSON-safe dump of the provider response
    """
    text: Optional[str]
    full_response: Dict[str, Any] = field(default_factory=dict)

    @property
    def response_text(self) -> str:
        return self.text or NO_RESPONSE_TEXT


def _get_gemini_client() -> genai.Client:
    """
    Lazy initialization of the Gemini client.

    Raises:
        GeminiNotConfiguredError: If GOOGLE_API_KEY is not configured
    """
    global _gemini_client

    if _gemini_client is not None:
        return _gemini_client

    if not settings.GOOGLE_API_KEY:
        logger.error("GOOGLE_API_KEY not configured")
        raise GeminiNotConfiguredError(
            "GOOGLE_API_KEY is not configured. "
            "Please set it in your .env file to use the Gemini service."
        )

    _gemini_client = genai.Client(api_key=settings.GOOGLE_API_KEY)
    logger.info("Gemini client initialized successfully")
    return _gemini_client


def build_generation_config() -> types.GenerateContentConfig:
    return types.GenerateContentConfig(
        temperature=GENERATION_TEMPERATURE,
        top_k=GENERATION_TOP_K,
        top_p=GENERATION_TOP_P,
        max_output_tokens=GENERATION_MAX_OUTPUT_TOKENS,
        safety_settings=[
            types.SafetySetting(
                category=category,
                threshold=types.HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
            )
            for category in SAFETY_CATEGORIES
        ],
    )


def extract_text(response: types.GenerateContentResponse) -> Optional[str]:
    """Return the first candidate's first part text, or None."""
    if not response.candidates:
        return None
    content = response.candidates[0].content
    if not content or not content.parts:
        return None
    return content.parts[0].text or None


def _dump_response(response: types.GenerateContentResponse) -> Dict[str, Any]:
    try:
        return response.model_dump(mode="json", exclude_none=True)
    except Exception as e:
        logger.warning(f"Could not serialize Gemini response: {e}")
        return {}


async def generate_text(
    task_type: str,
    prompt: str,
    domain: Optional[str] = None,
    preferences: Optional[Dict[str, Any]] = None,
    progress_data: Optional[Any] = None,
    context: Optional[str] = None,
) -> GeminiResult:
    """
    Run one Gemini generation for a task type.

    Args:
        task_type: onboarding | explanation | curriculum | growth-report
        prompt: The caller's request text
        domain: Cultural domain (used by the explanation template)
        preferences: Taste preferences appended as JSON
        progress_data: Progress payload appended as JSON
        context: Free-text context placed before the request

    Returns:
        GeminiResult with the extracted text and the full provider response

    Raises:
        ValueError: Unknown task type
        GeminiNotConfiguredError: GOOGLE_API_KEY missing
        GeminiAPIError: Provider returned an error status
    """
    system_prompt = get_system_prompt(task_type, domain)
    user_prompt = build_user_prompt(
        prompt=prompt,
        context=context,
        preferences=preferences,
        progress_data=progress_data,
    )

    client = _get_gemini_client()

    logger.info(
        f"Gemini request: type={task_type}, domain={domain}, "
        f"prompt='{preview(prompt)}'"
    )

    try:
        response = await client.aio.models.generate_content(
            model=settings.GEMINI_MODEL,
            contents=build_full_prompt(system_prompt, user_prompt),
            config=build_generation_config(),
        )
    except errors.APIError as e:
        logger.error(f"Gemini API error: status={e.code}, message={e.message}")
        raise GeminiAPIError(status_code=e.code, details=e.details) from e

    text = extract_text(response)
    if text is None:
        logger.warning(f"Gemini returned no text for type={task_type}")
    else:
        logger.info(f"Gemini response received for type={task_type} ({len(text)} chars)")

    return GeminiResult(text=text, full_response=_dump_response(response))
