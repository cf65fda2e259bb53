"""
Logging utilities for the Taste Expansion backend.

Provides standardized logger configuration following privacy rules.

CRITICAL SECURITY RULES:
- NEVER log Supabase Auth tokens, Gemini or Qloo API keys
- NEVER log full taste preference text or onboarding reports (user-authored content)
- NEVER log raw provider payloads at INFO level

Acceptable logging:
- High-level events (e.g., "Taste journey started", "Fallback recommendations used")
- Non-sensitive metadata (e.g., "domain='music', difficulty=3, source='fallback'")
- Counts and truncated prompt previews
- Error codes and sanitized error messages
"""

import logging
from typing import Optional


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a configured logger for the specified module.

    Args:
        name: Module name (typically __name__)
        level: Optional logging level (defaults to INFO)

    Returns:
        Configured logger instance

    Usage:
        >>> from backend.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("High-level event occurred")
    """
    logger = logging.getLogger(name)

    if level is None:
        level = logging.INFO

    logger.setLevel(level)

    # Add handler if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def preview(text: Optional[str], limit: int = 100) -> str:
    """Truncate free text for log lines."""
    if not text:
        return ""
    return text[:limit] + "..." if len(text) > limit else text
