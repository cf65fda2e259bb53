#!/usr/bin/env python3
"""
Recommendation Adapter Smoke Script

Runs the recommendation adapter and the progressive-path generator locally
against the real Qloo and Gemini APIs, without Supabase and without a
frontend. Nothing is written to the database.

Usage:
    python scripts/try_recommendations.py
    python scripts/try_recommendations.py --domain music --difficulty 5
    python scripts/try_recommendations.py --path --domain music --current Pop --target "Free Jazz"
"""

import argparse
import asyncio
import logging
import os
import sys

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from backend.config import settings  # noqa: E402  (loads .env)
from backend.schemas.recommendations import FallbackCandidates  # noqa: E402
from backend.services.journey_service import generate_progressive_path  # noqa: E402
from backend.services.recommendation_service import (  # noqa: E402
    apply_requested_difficulty,
    generate_recommendation_candidates,
)
from backend.utils.constants import SUPPORTED_DOMAINS  # noqa: E402

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def run_recommendations(domain: str, difficulty: int) -> None:
    if not settings.QLOO_API_KEY:
        print("\n⚠️  QLOO_API_KEY not set: expect fallback recommendations.")

    batch = await generate_recommendation_candidates(domain, difficulty)
    candidates = apply_requested_difficulty(batch.candidates, difficulty)

    print("\n" + "=" * 60)
    print(f"STATUS: {batch.status}  SOURCE: {batch.source}")
    if isinstance(batch, FallbackCandidates):
        print(f"FALLBACK REASON: {batch.reason}")
    print("=" * 60)

    for i, candidate in enumerate(candidates, 1):
        print(f"\n--- #{i} ---")
        print(f"  Title:       {candidate.title}")
        print(f"  Difficulty:  {candidate.difficulty}")
        print(f"  Context:     {candidate.cultural_context}")
        print(f"  External id: {candidate.external_id or '(generated on save)'}")


async def run_path(domain: str, current: str, target: str) -> None:
    if not settings.GOOGLE_API_KEY:
        print("\n⚠️  GOOGLE_API_KEY not set: expect the template path.")

    result = await generate_progressive_path(domain, current, target)

    print("\n" + "=" * 60)
    print(f"JOURNEY: {result.journey} ({result.domain})")
    print("=" * 60)

    for i, step in enumerate(result.progressive_path, 1):
        print(f"\n{i}. {step.title} (difficulty {step.difficulty})")
        print(f"   {step.description}")
        print(f"   {step.cultural_context}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Try the recommendation adapter locally")
    parser.add_argument("--domain", default="film", help=f"One of {', '.join(SUPPORTED_DOMAINS)}")
    parser.add_argument("--difficulty", type=int, default=3, help="Requested difficulty (1-5)")
    parser.add_argument("--path", action="store_true", help="Generate a progressive path instead")
    parser.add_argument("--current", default="Pop", help="Current taste (with --path)")
    parser.add_argument("--target", default="Free Jazz", help="Target taste (with --path)")
    args = parser.parse_args()

    if args.path:
        asyncio.run(run_path(args.domain, args.current, args.target))
    else:
        asyncio.run(run_recommendations(args.domain, args.difficulty))


if __name__ == "__main__":
    main()
