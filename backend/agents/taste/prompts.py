"""
Taste Expansion Prompt Templates

Contains the four system prompts of the generative-text adapter and the
user prompt builders used by the journey orchestrator.

Architecture:
- Pattern: Single-shot LLM call (no tools, no structured output)
- Model: Gemini Flash (configurable via GEMINI_MODEL)
- Temperature: 0.7 (creative, varied coaching language)
- Output: Free text; the progressive-path prompt asks for a JSON array that
  the journey service parses best-effort

Prompt shape:
- The system prompt and the user prompt are sent as ONE text part,
  joined by a blank line
- Optional context, preferences and progress data are appended to the
  user prompt as serialized text
"""

import json
from typing import Any, Dict, Literal, Optional

TaskType = Literal["onboarding", "explanation", "curriculum", "growth-report"]

TASK_TYPES = ("onboarding", "explanation", "curriculum", "growth-report")

# =============================================================================
# SYSTEM PROMPTS
# =============================================================================

ONBOARDING_SYSTEM_PROMPT = (
    "You are a cultural mentor specializing in taste analysis. Analyze user "
    "preferences with emotional intelligence and create personalized discomfort "
    "challenges. Focus on tone, emotional patterns, and cultural comfort zones. "
    "Be insightful but not overwhelming."
)

EXPLANATION_SYSTEM_PROMPT = (
    "You are a cultural educator. Explain why experiencing discomfort in "
    "{domain} domains is valuable for growth. Use simple, engaging language. "
    "Connect the unfamiliar to familiar experiences. Be encouraging and "
    "curious, not preachy."
)

CURRICULUM_SYSTEM_PROMPT = (
    "You are a curriculum designer for cultural expansion. Create progressive "
    "learning paths that bridge familiar tastes to challenging ones. Design "
    "5-day taste plans using cross-domain connections. Focus on gradual "
    "discomfort escalation and clear learning objectives."
)

GROWTH_REPORT_SYSTEM_PROMPT = (
    "You are a growth analyst. Review user progress data and provide insights "
    "about cultural expansion patterns. Identify breakthroughs, suggest next "
    "challenges, and celebrate meaningful progress. Be specific and actionable."
)


def get_system_prompt(task_type: str, domain: Optional[str] = None) -> str:
    """
    Select the fixed system prompt for a task type.

    Only the explanation prompt is parameterized (by domain, defaulting
    to "cultural").

    Raises:
        ValueError: If task_type is not one of TASK_TYPES
    """
    if task_type == "onboarding":
        return ONBOARDING_SYSTEM_PROMPT
    if task_type == "explanation":
        return EXPLANATION_SYSTEM_PROMPT.format(domain=domain or "cultural")
    if task_type == "curriculum":
        return CURRICULUM_SYSTEM_PROMPT
    if task_type == "growth-report":
        return GROWTH_REPORT_SYSTEM_PROMPT
    raise ValueError(f"Unknown task type: {task_type}")


def to_json_text(value: Any) -> str:
    """Serialize prompt payloads; unknown objects fall back to str()."""
    return json.dumps(value, ensure_ascii=False, default=str)


def build_user_prompt(
    prompt: str,
    context: Optional[str] = None,
    preferences: Optional[Dict[str, Any]] = None,
    progress_data: Optional[Any] = None,
) -> str:
    """
    Build the user half of the final prompt.

    Args:
        prompt: Caller's request text
        context: Optional free-text context, placed before the request
        preferences: Optional taste preferences, appended as JSON
        progress_data: Optional progress payload, appended as JSON

    Returns:
        str: User prompt text
    """
    user_prompt = prompt

    if context:
        user_prompt = f"Context: {context}\n\nRequest: {prompt}"

    if preferences is not None:
        user_prompt += f"\n\nUser Preferences: {to_json_text(preferences)}"

    if progress_data is not None:
        user_prompt += f"\n\nProgress Data: {to_json_text(progress_data)}"

    return user_prompt


def build_full_prompt(system_prompt: str, user_prompt: str) -> str:
    return f"{system_prompt}\n\n{user_prompt}"


# =============================================================================
# JOURNEY PROMPTS
# =============================================================================

def build_onboarding_prompt(preferences: Dict[str, Any]) -> str:
    """Taste-profile analysis request sent when a journey starts."""
    return f"""Analyze this user's taste preferences and create a comprehensive cultural profile. Identify comfort zones, potential growth areas, and recommend 3 discomfort challenges for immediate exploration.

User preferences: {to_json_text(preferences)}

Please provide:
1. A summary of their current taste profile
2. Identified comfort zones
3. Recommended growth areas
4. 3 specific discomfort challenges they should try"""


def build_progressive_path_prompt(domain: str, current_taste: str, target_taste: str) -> str:
    """Request a 4-step bridge from the current taste to the target taste."""
    return f"""Create a 4-step progressive learning path in {domain} from "{current_taste}" to "{target_taste}".

For each step, provide:
- Title (specific recommendation)
- Difficulty level (1-5)
- Description (why this step is important)
- Cultural context (background information)

Make each step a logical bridge that builds on the previous one. The progression should feel natural and achievable.

Format as a JSON array with objects containing: title, difficulty, description, culturalContext"""


def build_five_day_plan_prompt(preferences: Optional[Dict[str, Any]], domain: Optional[str]) -> str:
    """Request a free-text five-day expansion plan."""
    return f"""Create a structured 5-day cultural expansion plan focusing on {domain or 'multiple domains'}.

Each day should include:
- Day number and theme
- One primary challenge/activity
- Learning objective
- Time commitment (realistic)
- Reflection prompt
- Connection to overall growth

Make it engaging, progressive, and achievable. Focus on building cultural confidence through manageable discomfort.

User preferences: {to_json_text(preferences or {})}"""


def build_growth_report_prompt(stats: Dict[str, Any], focus: Optional[str] = None) -> str:
    """Request a progress analysis over the user's interaction log."""
    focus_section = f"\n\nThe user asked specifically: {focus}" if focus else ""
    return f"""Review this user's cultural expansion progress and write a short growth report.

Summary counts: {to_json_text(stats)}

Please provide:
1. The domains where they stretched the most
2. Patterns in what they completed versus skipped
3. One breakthrough worth celebrating
4. Two concrete next challenges{focus_section}"""
