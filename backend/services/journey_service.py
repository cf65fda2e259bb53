"""
Journey Service - Taste Journey Orchestration

Implements the three POST /taste-journey actions on top of the Gemini,
Qloo, recommendation and profile services:

- start: taste graph + onboarding analysis + first discomfort items,
  then the profile is marked as onboarded
- generate-path: a 4-step bridge between two tastes in one domain
- create-plan: a templated five-day expansion plan

Only the profile write in `start` is allowed to fail the request. Every
other provider failure degrades to a fixed text or template.
"""

import asyncio
import json
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from supabase import Client

from backend.agents.taste.prompts import (
    build_five_day_plan_prompt,
    build_onboarding_prompt,
    build_progressive_path_prompt,
)
from backend.schemas.journey import (
    FiveDayPlan,
    FiveDayPlanResponse,
    JourneyStartResponse,
    PlanDay,
    ProgressivePathResponse,
    ProgressivePathStep,
)
from backend.schemas.preferences import TastePreferences
from backend.services.gemini_service import generate_text
from backend.services.profile_service import upsert_user_profile
from backend.services.qloo_service import fetch_insights
from backend.services.recommendation_service import generate_recommendations
from backend.utils.constants import (
    DEFAULT_DOMAIN,
    NEUTRAL_DIFFICULTY,
    PATH_BRIDGES,
    PATH_ENDPOINTS,
    PLAN_DAYS,
    PLAN_THEMES,
    PLAN_TIME_COMMITMENT,
    SUPPORTED_DOMAINS,
)

logger = logging.getLogger(__name__)

WELCOME_REPORT = (
    "Welcome to your taste journey! Based on your preferences, we've identified "
    "several exciting opportunities for cultural expansion. Your journey will be "
    "personalized to gradually introduce new experiences that challenge your "
    "current tastes while building on what you already enjoy."
)

DEFAULT_PLAN_DESCRIPTION = "A carefully crafted journey to expand your cultural horizons"

TASTE_GRAPH_ENTITY_TYPE = "urn:entity:movie"
TASTE_GRAPH_TAGS = ["popular", "trending"]
TASTE_GRAPH_LIMIT = 5

STARTER_DOMAIN = "film"
STARTER_ITEMS = 3

PATH_STEPS = 4

# First JSON array literal in a model response (greedy to the last "]")
JSON_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ============================================================================
# START
# ============================================================================

async def build_taste_graph() -> Dict[str, Any]:
    """
    Snapshot popular Qloo insights as the user's starting taste graph.

    Returns {} when Qloo fails or answers with nothing.
    """
    try:
        insights = await fetch_insights(
            TASTE_GRAPH_ENTITY_TYPE,
            TASTE_GRAPH_TAGS,
            limit=TASTE_GRAPH_LIMIT,
        )
    except Exception as e:
        logger.warning(f"Taste graph unavailable, continuing without it: {e}")
        return {}

    if not insights:
        return {}
    return {"insights": insights, "generated_at": _now_iso()}


async def generate_onboarding_report(preferences: Dict[str, Any]) -> str:
    """Gemini onboarding analysis, or the fixed welcome text."""
    try:
        result = await generate_text(
            task_type="onboarding",
            prompt=build_onboarding_prompt(preferences),
            preferences=preferences,
        )
    except Exception as e:
        logger.warning(f"Onboarding analysis failed, using welcome text: {e}")
        return WELCOME_REPORT

    return result.text or WELCOME_REPORT


async def start_taste_journey(
    supabase_client: Client,
    user_id: str,
    preferences: TastePreferences
) -> JourneyStartResponse:
    """
    Start a taste journey for the user.

    The taste graph and onboarding analysis have no side effects and run
    concurrently; the starter recommendations and the profile write follow
    in order.

    Raises:
        PersistenceError / postgrest.exceptions.APIError: If the profile
            write failed. Nothing else raises.
    """
    prefs = preferences.as_dict()
    logger.info(f"Starting taste journey for user {user_id}: domains={sorted(prefs)}")

    taste_graph, onboarding_report = await asyncio.gather(
        build_taste_graph(),
        generate_onboarding_report(prefs),
    )

    try:
        generated = await generate_recommendations(
            supabase_client,
            user_id,
            domain=STARTER_DOMAIN,
            difficulty=NEUTRAL_DIFFICULTY,
            preferences=preferences,
        )
        discomfort_items = generated.recommendations[:STARTER_ITEMS]
    except Exception as e:
        logger.warning(f"Starter recommendations failed for user {user_id}: {e}")
        discomfort_items = []

    await upsert_user_profile(
        supabase_client,
        user_id,
        taste_preferences={
            **prefs,
            "taste_graph": taste_graph,
            "onboarding_analysis": onboarding_report,
            "last_analyzed": _now_iso(),
        },
        onboarding_completed=True,
    )

    logger.info(
        f"Taste journey started for user {user_id}: "
        f"{len(discomfort_items)} discomfort items"
    )

    return JourneyStartResponse(
        taste_graph=taste_graph,
        onboarding_report=onboarding_report,
        discomfort_items=discomfort_items,
    )


# ============================================================================
# GENERATE-PATH
# ============================================================================

def parse_progressive_path(text: Optional[str]) -> List[ProgressivePathStep]:
    """
    Extract path steps from a model response.

    Takes the first [...] literal in the text. Returns [] if there is none,
    if it is not valid JSON, or if any step fails validation.
    """
    if not text:
        return []

    match = JSON_ARRAY_PATTERN.search(text)
    if not match:
        logger.warning("No JSON array found in progressive path response")
        return []

    # Trailing commas are a common model mistake
    cleaned = re.sub(r",(\s*[}\]])", r"\1", match.group(0))

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.warning(f"Progressive path JSON parse error: {e}")
        return []

    if not isinstance(data, list):
        return []

    try:
        return [ProgressivePathStep.model_validate(step) for step in data]
    except ValidationError as e:
        logger.warning(f"Progressive path step validation failed: {e.error_count()} errors")
        return []


def build_path_template(
    domain: str,
    current_taste: str,
    target_taste: str
) -> List[ProgressivePathStep]:
    """Fixed 4-step path: current taste, two domain bridges, target taste."""
    template_domain = domain if domain in PATH_BRIDGES else DEFAULT_DOMAIN
    start_description, end_description = PATH_ENDPOINTS[template_domain]

    steps = [ProgressivePathStep(title=current_taste, difficulty=1, description=start_description)]
    steps.extend(
        ProgressivePathStep(title=title, difficulty=index + 2, description=description)
        for index, (title, description) in enumerate(PATH_BRIDGES[template_domain])
    )
    steps.append(ProgressivePathStep(title=target_taste, difficulty=PATH_STEPS, description=end_description))
    return steps


def backfill_cultural_context(
    steps: List[ProgressivePathStep],
    domain: str
) -> List[ProgressivePathStep]:
    return [
        step if step.cultural_context else step.model_copy(update={
            "cultural_context": (
                f"Step {index + 1} in your {domain} journey: Building cultural "
                f"awareness through gradual exposure to new experiences."
            )
        })
        for index, step in enumerate(steps)
    ]


async def generate_progressive_path(
    domain: str,
    current_taste: str,
    target_taste: str
) -> ProgressivePathResponse:
    """Build a bridge from current_taste to target_taste, templated on any failure."""
    logger.info(f"Generating progressive path in {domain}: '{current_taste}' -> '{target_taste}'")

    steps: List[ProgressivePathStep] = []
    try:
        result = await generate_text(
            task_type="curriculum",
            prompt=build_progressive_path_prompt(domain, current_taste, target_taste),
            domain=domain,
        )
        steps = parse_progressive_path(result.text)
    except Exception as e:
        logger.warning(f"Progressive path generation failed, using template: {e}")

    if not steps:
        steps = build_path_template(domain, current_taste, target_taste)

    return ProgressivePathResponse(
        progressive_path=backfill_cultural_context(steps, domain),
        domain=domain,
        journey=f"{current_taste} → {target_taste}",
    )


# ============================================================================
# CREATE-PLAN
# ============================================================================

def build_plan_days(domain: Optional[str]) -> List[PlanDay]:
    """Five themed days, cycling through every domain unless one is given."""
    days = []
    for day in range(1, PLAN_DAYS + 1):
        day_domain = domain or SUPPORTED_DOMAINS[(day - 1) % len(SUPPORTED_DOMAINS)]
        theme = PLAN_THEMES[(day - 1) % len(PLAN_THEMES)]
        days.append(
            PlanDay(
                day=day,
                theme=theme,
                domain=day_domain,
                title=f"Day {day}: {theme} in {day_domain[:1].upper()}{day_domain[1:]}",
                challenge=(
                    f"Explore a {day_domain} recommendation that challenges "
                    f"your current preferences"
                ),
                time_commitment=PLAN_TIME_COMMITMENT,
                learning_objective=f"Build comfort with unfamiliar {day_domain} experiences",
                reflection_prompt=(
                    f"How did today's {day_domain} experience change your "
                    f"perspective? What surprised you?"
                ),
                connection_to_growth=(
                    "This step builds your cultural confidence and openness "
                    "to new experiences"
                ),
            )
        )
    return days


async def create_five_day_plan(
    preferences: Optional[TastePreferences],
    domain: Optional[str] = None
) -> FiveDayPlanResponse:
    prefs = preferences.as_dict() if preferences is not None else {}

    description = DEFAULT_PLAN_DESCRIPTION
    try:
        result = await generate_text(
            task_type="curriculum",
            prompt=build_five_day_plan_prompt(prefs, domain),
            domain=domain,
            preferences=prefs if preferences is not None else None,
        )
        description = result.text or DEFAULT_PLAN_DESCRIPTION
    except Exception as e:
        logger.warning(f"Five-day plan description failed, using default: {e}")

    plan = FiveDayPlan(
        title=f"5-Day {domain or 'Multi-Domain'} Cultural Expansion Journey",
        domain=domain or "Multi-domain",
        description=description,
        days=build_plan_days(domain),
    )
    return FiveDayPlanResponse(five_day_plan=plan)
