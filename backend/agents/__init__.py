"""
Prompt packages for the Gemini-backed features.

- taste: system prompts and user-prompt builders for onboarding analysis,
  explanations, curricula and growth reports
"""

from backend.agents.taste import get_system_prompt

__all__ = ["get_system_prompt"]
