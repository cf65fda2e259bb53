"""
Tests for the taste journey orchestration.

Gemini, Qloo, recommendations and the profile write are patched at the
journey_service boundary.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from backend.schemas.preferences import TastePreferences
from backend.schemas.recommendations import GenerateRecommendationsResponse
from backend.services.gemini_service import GeminiAPIError, GeminiResult
from backend.services.journey_service import (
    DEFAULT_PLAN_DESCRIPTION,
    WELCOME_REPORT,
    build_path_template,
    create_five_day_plan,
    generate_progressive_path,
    parse_progressive_path,
    start_taste_journey,
)
from backend.utils.constants import PLAN_THEMES

SERVICE = "backend.services.journey_service"


def _rec(i):
    return {
        "id": f"rec-{i}",
        "external_id": f"qloo-{i}",
        "domain": "film",
        "title": f"Film {i}",
        "difficulty": 3,
    }


@pytest.fixture
def gemini():
    with patch(f"{SERVICE}.generate_text", new_callable=AsyncMock) as mock:
        mock.return_value = GeminiResult(text="Your taste profile is adventurous.")
        yield mock


@pytest.fixture
def insights():
    with patch(f"{SERVICE}.fetch_insights", new_callable=AsyncMock) as mock:
        mock.return_value = {"data": [{"id": "m1"}]}
        yield mock


@pytest.fixture
def recommendations():
    with patch(f"{SERVICE}.generate_recommendations", new_callable=AsyncMock) as mock:
        mock.return_value = GenerateRecommendationsResponse(
            recommendations=[_rec(i) for i in range(5)],
            message="Recommendations generated successfully",
            source="qloo_api",
        )
        yield mock


@pytest.fixture
def profile_upsert():
    with patch(f"{SERVICE}.upsert_user_profile", new_callable=AsyncMock) as mock:
        mock.return_value = {"user_id": "user-1", "onboarding_completed": True}
        yield mock


@pytest.fixture
def preferences():
    return TastePreferences(film="Marvel movies", music="Pop")


class TestStartTasteJourney:

    @pytest.mark.asyncio
    async def test_happy_path(self, gemini, insights, recommendations, profile_upsert, preferences):
        client = MagicMock()

        result = await start_taste_journey(client, "user-1", preferences)

        assert result.success is True
        assert result.taste_graph["insights"] == {"data": [{"id": "m1"}]}
        assert "generated_at" in result.taste_graph
        assert result.onboarding_report == "Your taste profile is adventurous."
        assert [item.external_id for item in result.discomfort_items] == ["qloo-0", "qloo-1", "qloo-2"]

        insights.assert_awaited_once_with("urn:entity:movie", ["popular", "trending"], limit=5)
        recommendations.assert_awaited_once()
        assert recommendations.call_args.kwargs["domain"] == "film"
        assert recommendations.call_args.kwargs["difficulty"] == 3

        kwargs = profile_upsert.call_args.kwargs
        assert kwargs["onboarding_completed"] is True
        stored = kwargs["taste_preferences"]
        assert stored["film"] == "Marvel movies"
        assert stored["music"] == "Pop"
        assert stored["onboarding_analysis"] == "Your taste profile is adventurous."
        assert stored["taste_graph"] == result.taste_graph
        assert "last_analyzed" in stored

    @pytest.mark.asyncio
    async def test_provider_failures_degrade(self, gemini, insights, recommendations, profile_upsert, preferences):
        insights.side_effect = Exception("qloo down")
        gemini.side_effect = GeminiAPIError(503, "unavailable")
        recommendations.side_effect = Exception("store down")

        result = await start_taste_journey(MagicMock(), "user-1", preferences)

        assert result.taste_graph == {}
        assert result.onboarding_report == WELCOME_REPORT
        assert result.discomfort_items == []
        profile_upsert.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_empty_gemini_text_uses_welcome(self, gemini, insights, recommendations, profile_upsert, preferences):
        gemini.return_value = GeminiResult(text=None)

        result = await start_taste_journey(MagicMock(), "user-1", preferences)

        assert result.onboarding_report == WELCOME_REPORT

    @pytest.mark.asyncio
    async def test_profile_write_failure_propagates(self, gemini, insights, recommendations, profile_upsert, preferences):
        profile_upsert.side_effect = Exception("permission denied")

        with pytest.raises(Exception, match="permission denied"):
            await start_taste_journey(MagicMock(), "user-1", preferences)


class TestProgressivePath:

    def test_parse_first_array_in_text(self):
        text = (
            "Here is your path:\n```json\n"
            '[{"title": "A", "difficulty": 1, "description": "d1"},'
            ' {"title": "B", "difficulty": 9, "description": "d2", "culturalContext": "ctx"},]\n'
            "```\nEnjoy!"
        )

        steps = parse_progressive_path(text)

        assert [s.title for s in steps] == ["A", "B"]
        assert [s.difficulty for s in steps] == [1, 5]
        assert steps[1].cultural_context == "ctx"

    def test_null_description_keeps_model_path(self):
        text = '[{"title": "A", "difficulty": 2, "description": null}]'

        steps = parse_progressive_path(text)

        assert len(steps) == 1
        assert steps[0].title == "A"
        assert steps[0].description == ""

    @pytest.mark.parametrize("text", [
        None,
        "",
        "No JSON here",
        "[not json]",
        '{"title": "object, not array"}',
        '[{"difficulty": 2}]',
    ])
    def test_parse_failures_return_empty(self, text):
        assert parse_progressive_path(text) == []

    def test_template_for_unknown_domain_is_film(self):
        steps = build_path_template("opera", "Verdi", "Berg")

        assert [s.title for s in steps] == [
            "Verdi",
            "Critically Acclaimed Blockbusters",
            "International Cinema",
            "Berg",
        ]

    @pytest.mark.asyncio
    async def test_music_pop_to_free_jazz_fallback(self, gemini):
        gemini.side_effect = GeminiAPIError(500, "boom")

        result = await generate_progressive_path("music", "Pop", "Free Jazz")

        assert result.journey == "Pop → Free Jazz"
        assert result.domain == "music"
        assert [s.title for s in result.progressive_path] == [
            "Pop",
            "Genre Fusion",
            "Instrumental Exploration",
            "Free Jazz",
        ]
        assert [s.difficulty for s in result.progressive_path] == [1, 2, 3, 4]
        assert result.progressive_path[0].cultural_context == (
            "Step 1 in your music journey: Building cultural awareness "
            "through gradual exposure to new experiences."
        )

    @pytest.mark.asyncio
    async def test_gemini_path_is_used_and_backfilled(self, gemini):
        gemini.return_value = GeminiResult(
            text='[{"title": "Bossa Nova", "difficulty": 2, "description": "soft"}]'
        )

        result = await generate_progressive_path("music", "Pop", "Free Jazz")

        assert [s.title for s in result.progressive_path] == ["Bossa Nova"]
        assert result.progressive_path[0].cultural_context.startswith("Step 1 in your music journey")
        assert gemini.call_args.kwargs["task_type"] == "curriculum"

    @pytest.mark.asyncio
    async def test_wire_names_are_camel_case(self, gemini):
        gemini.return_value = GeminiResult(text=None)

        result = await generate_progressive_path("film", "Marvel", "Tarkovsky")
        body = result.model_dump(by_alias=True)

        assert "progressivePath" in body
        assert "culturalContext" in body["progressivePath"][0]


class TestFiveDayPlan:

    @pytest.mark.asyncio
    async def test_multi_domain_plan(self, gemini):
        gemini.return_value = GeminiResult(text="Five days of gentle stretching.")

        result = await create_five_day_plan(TastePreferences(film="Marvel"), None)
        plan = result.five_day_plan

        assert plan.title == "5-Day Multi-Domain Cultural Expansion Journey"
        assert plan.domain == "Multi-domain"
        assert plan.description == "Five days of gentle stretching."
        assert [d.day for d in plan.days] == [1, 2, 3, 4, 5]
        assert [d.theme for d in plan.days] == PLAN_THEMES
        assert [d.domain for d in plan.days] == ["film", "music", "books", "food", "fashion"]
        assert plan.days[0].title == "Day 1: Foundation Building in Film"
        assert plan.days[4].time_commitment == "30-60 minutes"

    @pytest.mark.asyncio
    async def test_single_domain_plan_with_gemini_error(self, gemini):
        gemini.side_effect = GeminiAPIError(500, "boom")

        result = await create_five_day_plan(None, "books")
        plan = result.five_day_plan

        assert plan.title == "5-Day books Cultural Expansion Journey"
        assert plan.description == DEFAULT_PLAN_DESCRIPTION
        assert all(d.domain == "books" for d in plan.days)
        assert plan.days[2].title == "Day 3: Cultural Bridge in Books"
        assert plan.days[2].reflection_prompt == (
            "How did today's books experience change your perspective? What surprised you?"
        )
