"""
Taste Expansion prompts - Single-Shot Gemini Workflows

The service layer is in:
- backend/services/gemini_service.py (generative-text adapter)
- backend/services/journey_service.py (journey orchestrator)

Prompt templates are in:
- backend/agents/taste/prompts.py
"""

from backend.agents.taste.prompts import (
    TASK_TYPES,
    TaskType,
    build_five_day_plan_prompt,
    build_full_prompt,
    build_growth_report_prompt,
    build_onboarding_prompt,
    build_progressive_path_prompt,
    build_user_prompt,
    get_system_prompt,
)

__all__ = [
    "TASK_TYPES",
    "TaskType",
    "get_system_prompt",
    "build_user_prompt",
    "build_full_prompt",
    "build_onboarding_prompt",
    "build_progressive_path_prompt",
    "build_five_day_plan_prompt",
    "build_growth_report_prompt",
]
