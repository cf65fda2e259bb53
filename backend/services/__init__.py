"""
Service layer for the taste expansion backend.

Contains business logic orchestration that:
- Wraps the Gemini and Qloo providers behind typed functions
- Builds, recenters and stores discomfort recommendations
- Orchestrates the taste journey actions
- Handles persistence (calling Supabase under RLS)

Services act as the glue between routes (HTTP layer) and providers/database.
"""

from .errors import PersistenceError, store_error_details
from .gemini_service import (
    GeminiAPIError,
    GeminiNotConfiguredError,
    GeminiResult,
    generate_text,
)
from .journey_service import (
    create_five_day_plan,
    generate_progressive_path,
    start_taste_journey,
)
from .profile_service import (
    get_or_create_user_profile,
    get_user_profile,
    update_user_profile,
    upsert_user_profile,
)
from .progress_service import (
    compute_progress_stats,
    generate_growth_report,
    insert_progress,
    list_progress,
)
from .qloo_service import (
    QlooAPIError,
    QlooNotConfiguredError,
    call_qloo,
)
from .recommendation_service import (
    generate_recommendation_candidates,
    generate_recommendations,
    list_recommendations,
    upsert_recommendations,
)

__all__ = [
    "PersistenceError",
    "store_error_details",
    "GeminiAPIError",
    "GeminiNotConfiguredError",
    "GeminiResult",
    "generate_text",
    "QlooAPIError",
    "QlooNotConfiguredError",
    "call_qloo",
    "generate_recommendation_candidates",
    "generate_recommendations",
    "list_recommendations",
    "upsert_recommendations",
    "start_taste_journey",
    "generate_progressive_path",
    "create_five_day_plan",
    "get_user_profile",
    "get_or_create_user_profile",
    "upsert_user_profile",
    "update_user_profile",
    "insert_progress",
    "list_progress",
    "compute_progress_stats",
    "generate_growth_report",
]
