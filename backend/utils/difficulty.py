"""
Difficulty arithmetic shared by recommendations and progressive paths.

Difficulty is always an integer in [MIN_DIFFICULTY, MAX_DIFFICULTY] after any
adjustment.
"""

from typing import Any

from backend.utils.constants import MAX_DIFFICULTY, MIN_DIFFICULTY, NEUTRAL_DIFFICULTY


def clamp_difficulty(value: int) -> int:
    return max(MIN_DIFFICULTY, min(MAX_DIFFICULTY, int(value)))


def recenter_difficulty(value: int, requested: int) -> int:
    """
    Shift a difficulty by (requested - 3) and clamp.

    A request of 3 leaves the value unchanged; higher or lower requests bias
    every item of a batch by the same amount.
    """
    return clamp_difficulty(value + (requested - NEUTRAL_DIFFICULTY))


def coerce_difficulty(value: Any, default: int) -> int:
    """Best-effort int conversion for model-generated difficulty values."""
    try:
        return clamp_difficulty(int(float(value)))
    except (TypeError, ValueError):
        return clamp_difficulty(default)
