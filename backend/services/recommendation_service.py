"""
Recommendation Service - Discomfort Recommendations

Builds a batch of "discomfort" recommendations for one cultural domain and
stores it in content_recommendations.

Candidate pipeline:
1. Fetch up to 5 Qloo tag ids (any error means zero tags)
2. Query Qloo insights for the domain's entity type using those tags
3. Fall back to the curated seed table when Qloo is unusable
4. Recenter every difficulty by (requested - 3) and clamp to 1-5

The batch is written with one upsert keyed on (user_id, external_id), so
replaying a batch updates rows instead of duplicating them.
"""

import logging
import random
import time
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, cast

from supabase import Client

from backend.schemas.preferences import TastePreferences
from backend.schemas.recommendations import (
    CandidateBatch,
    FailedCandidates,
    FallbackCandidates,
    FallbackReason,
    GenerateRecommendationsResponse,
    PrimaryCandidates,
    RecommendationCandidate,
)
from backend.services.errors import PersistenceError
from backend.services.qloo_service import fetch_insights, fetch_tag_ids
from backend.utils.constants import (
    DEFAULT_DOMAIN,
    DEFAULT_ENTITY_TYPE,
    DEFAULT_IMAGES,
    DOMAIN_REASONS,
    ENTITY_TYPE_MAP,
    FALLBACK_SEEDS,
    GENERIC_REASON,
    NEUTRAL_DIFFICULTY,
)
from backend.utils.difficulty import clamp_difficulty, recenter_difficulty

logger = logging.getLogger(__name__)

RECOMMENDATIONS_TABLE = "content_recommendations"

MAX_PRIMARY_ITEMS = 5
INSIGHTS_LIMIT = 10


# ============================================================================
# DOMAIN TABLE LOOKUPS
# ============================================================================

def resolve_entity_type(domain: str) -> str:
    return ENTITY_TYPE_MAP.get(domain, DEFAULT_ENTITY_TYPE)


def default_image(domain: str) -> str:
    return DEFAULT_IMAGES.get(domain, DEFAULT_IMAGES[DEFAULT_DOMAIN])


def domain_reason(domain: str) -> str:
    return DOMAIN_REASONS.get(domain, GENERIC_REASON)


def candidate_domain(domain: str) -> str:
    """Domain stored on candidates; the "all" pseudo-domain is tagged as film."""
    return DEFAULT_DOMAIN if domain == "all" else domain


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def sanitize_metadata(value: Any) -> Any:
    """
    Reduce a metadata value to plain JSON.

    Dicts and lists are walked recursively; str, int, float, bool and None
    pass through; anything else becomes None.
    """
    if isinstance(value, dict):
        return {str(key): sanitize_metadata(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [sanitize_metadata(item) for item in value]
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return None


# ============================================================================
# CANDIDATE BUILDERS
# ============================================================================

def build_primary_candidates(
    items: List[Any],
    domain: str,
    difficulty: int
) -> List[RecommendationCandidate]:
    """Map the first Qloo insight items to candidates with jittered difficulty."""
    tagged_domain = candidate_domain(domain)
    generated_at = _now_iso()
    candidates: List[RecommendationCandidate] = []

    for index, item in enumerate(items[:MAX_PRIMARY_ITEMS]):
        if not isinstance(item, dict):
            logger.debug(f"Skipping non-object Qloo item at index {index}")
            continue

        qloo_id = item.get("id")
        name = item.get("name")
        description = item.get("description")
        image_url = item.get("image_url")

        candidates.append(
            RecommendationCandidate(
                domain=tagged_domain,
                title=name or item.get("title") or f"{domain} Recommendation {index + 1}",
                description=(
                    description
                    or f"A curated {domain} recommendation from our cultural database"
                ),
                difficulty=clamp_difficulty(difficulty + random.randint(-1, 1)),
                image_url=image_url or default_image(domain),
                reason=domain_reason(domain),
                cultural_context=(
                    item.get("cultural_context") or f"Contemporary {domain} exploration"
                ),
                metadata=sanitize_metadata({
                    "qloo_id": qloo_id,
                    "generated_at": generated_at,
                    "source": "qloo_api",
                    "name": name,
                    "description": description,
                    "image_url": image_url,
                }),
                external_id=str(qloo_id) if qloo_id not in (None, "") else None,
            )
        )

    return candidates


def build_fallback_candidates(domain: str, difficulty: int) -> List[RecommendationCandidate]:
    """Three curated seeds for the domain, difficulty ascending from the request."""
    seeds = FALLBACK_SEEDS.get(domain, FALLBACK_SEEDS[DEFAULT_DOMAIN])
    generated_at = _now_iso()

    return [
        RecommendationCandidate(
            domain=domain,
            title=seed["title"],
            description=seed["description"],
            difficulty=clamp_difficulty(difficulty + index),
            image_url=default_image(domain),
            reason=domain_reason(domain),
            cultural_context=seed["cultural_context"],
            metadata={"source": "fallback", "generated_at": generated_at, "index": index},
        )
        for index, seed in enumerate(seeds)
    ]


def _fallback(domain: str, difficulty: int, reason: FallbackReason) -> CandidateBatch:
    logger.info(f"Using fallback recommendations for {domain}: {reason}")
    candidates = build_fallback_candidates(domain, difficulty)
    if not candidates:
        return FailedCandidates(reason=f"no fallback seeds after {reason}")
    return FallbackCandidates(candidates=candidates, reason=reason)


async def generate_recommendation_candidates(domain: str, difficulty: int) -> CandidateBatch:
    """
    Build recommendation candidates for a domain.

    Qloo is tried first; every Qloo failure mode degrades to the seed table
    and is reported through FallbackCandidates.reason. The returned
    difficulties are not yet recentered (see apply_requested_difficulty).

    Args:
        domain: Cultural domain (film, music, books, food, fashion or all)
        difficulty: Requested difficulty, used as the base for each item

    Returns:
        PrimaryCandidates, FallbackCandidates or FailedCandidates
    """
    try:
        tags = await fetch_tag_ids()
    except Exception as e:
        logger.warning(f"Qloo tag fetch failed, continuing without tags: {e}")
        tags = []

    if not tags:
        return _fallback(domain, difficulty, "no_valid_tags")

    entity_type = resolve_entity_type(domain)
    logger.info(f"Querying Qloo insights: entity_type={entity_type}, tags={len(tags)}")

    try:
        payload = await fetch_insights(entity_type, tags, limit=INSIGHTS_LIMIT)
    except Exception as e:
        logger.warning(f"Qloo insights request failed: {e}")
        return _fallback(domain, difficulty, "qloo_error")

    items = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(items, list):
        logger.warning(f"Unexpected Qloo insights format: {type(payload).__name__}")
        return _fallback(domain, difficulty, "unexpected_format")

    candidates = build_primary_candidates(items, domain, difficulty)
    if not candidates:
        return _fallback(domain, difficulty, "empty_result")

    logger.info(f"Built {len(candidates)} candidates from Qloo for {domain}")
    return PrimaryCandidates(candidates=candidates)


def apply_requested_difficulty(
    candidates: List[RecommendationCandidate],
    requested: int
) -> List[RecommendationCandidate]:
    """Shift every candidate by (requested - 3), clamped to 1-5."""
    if requested == NEUTRAL_DIFFICULTY:
        return list(candidates)
    return [
        candidate.model_copy(
            update={"difficulty": recenter_difficulty(candidate.difficulty, requested)}
        )
        for candidate in candidates
    ]


# ============================================================================
# PERSISTENCE
# ============================================================================

def make_external_id(domain: str) -> str:
    """Generated identity for candidates without a Qloo id."""
    return f"fallback_{domain}_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}"


def to_recommendation_rows(
    user_id: str,
    candidates: List[RecommendationCandidate]
) -> List[Dict[str, Any]]:
    rows = []
    for candidate in candidates:
        row = candidate.model_dump(exclude={"external_id"})
        row["user_id"] = user_id
        row["external_id"] = candidate.external_id or make_external_id(candidate.domain)
        row["metadata"] = sanitize_metadata(candidate.metadata)
        rows.append(row)
    return rows


async def upsert_recommendations(
    supabase_client: Client,
    rows: List[Dict[str, Any]]
) -> List[Dict[str, Any]]:
    """
    Write a batch of recommendation rows with a single upsert.

    Conflicts on (user_id, external_id) update the existing row.

    Raises:
        PersistenceError: If the store rejected the write
    """
    if not rows:
        return []

    try:
        result = (
            supabase_client.table(RECOMMENDATIONS_TABLE)
            .upsert(rows, on_conflict="user_id,external_id")
            .execute()
        )
    except Exception as e:
        logger.error(f"Failed to upsert {len(rows)} recommendations: {e}", exc_info=True)
        raise PersistenceError("Failed to save recommendations", details=str(e)) from e

    saved = cast(List[Dict[str, Any]], result.data or [])
    logger.info(f"Upserted {len(saved)} recommendations")
    return saved


async def list_recommendations(
    supabase_client: Client,
    user_id: str,
    domain: Optional[str] = None
) -> List[Dict[str, Any]]:
    """Stored recommendations for the user, newest first."""
    query = supabase_client.table(RECOMMENDATIONS_TABLE).select("*").eq("user_id", user_id)
    if domain:
        query = query.eq("domain", domain)

    result = query.order("created_at", desc=True).execute()
    return cast(List[Dict[str, Any]], result.data or [])


async def generate_recommendations(
    supabase_client: Client,
    user_id: str,
    domain: str,
    difficulty: int = NEUTRAL_DIFFICULTY,
    preferences: Optional[TastePreferences] = None
) -> GenerateRecommendationsResponse:
    """
    Generate, recenter and store a recommendation batch.

    Args:
        supabase_client: Authenticated Supabase client
        user_id: The authenticated user's ID
        domain: Cultural domain
        difficulty: Requested difficulty (3 is neutral)
        preferences: Taste preferences, logged for context

    Returns:
        GenerateRecommendationsResponse with the stored rows and their source

    Raises:
        PersistenceError: If the upsert failed
    """
    domain = domain.strip().lower()
    logger.info(
        f"Generating recommendations for user {user_id}: domain={domain}, "
        f"difficulty={difficulty}, preferences="
        f"{sorted(preferences.as_dict().keys()) if preferences else []}"
    )

    batch = await generate_recommendation_candidates(domain, difficulty)
    candidates = apply_requested_difficulty(batch.candidates, difficulty)

    if not candidates:
        logger.warning(f"No recommendation candidates for {domain}: {batch.status}")
        return GenerateRecommendationsResponse(
            recommendations=[],
            message="No recommendations available",
            source=batch.source,
        )

    rows = to_recommendation_rows(user_id, candidates)
    saved = await upsert_recommendations(supabase_client, rows)

    return GenerateRecommendationsResponse(
        recommendations=saved,
        message="Recommendations generated successfully",
        source=batch.source,
    )
