"""
Tests for the profile and progress endpoints.
"""

import pytest
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError
from unittest.mock import AsyncMock, patch

from backend.auth.dependencies import AuthenticatedUser, get_authenticated_user
from backend.main import app
from backend.schemas.progress import GrowthReportResponse, ProgressStats
from backend.services.errors import PersistenceError
from backend.services.gemini_service import GeminiAPIError

client = TestClient(app)


async def mock_get_authenticated_user_dependency():
    return AuthenticatedUser(
        user_id="test-user-id",
        access_token="test-access-token"
    )


@pytest.fixture
def mock_auth():
    app.dependency_overrides[get_authenticated_user] = mock_get_authenticated_user_dependency
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def mock_profile():
    return {
        "user_id": "test-user-id",
        "display_name": "Sam",
        "onboarding_completed": True,
        "taste_preferences": {"film": "Marvel"},
        "created_at": "2025-11-05T10:00:00Z",
        "updated_at": "2025-11-05T10:00:00Z",
    }


@pytest.fixture
def mock_supabase():
    with patch("backend.routes.profile.get_supabase_client") as profile_client, \
         patch("backend.routes.progress.get_supabase_client") as progress_client:
        yield profile_client, progress_client


class TestProfileEndpoints:

    def test_get_profile(self, mock_auth, mock_supabase, mock_profile):
        with patch("backend.routes.profile.get_or_create_user_profile", new_callable=AsyncMock) as mock:
            mock.return_value = mock_profile

            response = client.get("/profile")

        assert response.status_code == 200
        assert response.json()["display_name"] == "Sam"
        assert response.json()["taste_preferences"] == {"film": "Marvel"}

    def test_get_profile_store_error(self, mock_auth, mock_supabase):
        with patch("backend.routes.profile.get_or_create_user_profile", new_callable=AsyncMock) as mock:
            mock.side_effect = Exception("connection refused")

            response = client.get("/profile")

        assert response.status_code == 500
        assert response.json()["error"] == "fetch_error"
        assert response.json()["details"] == "connection refused"

    def test_put_profile_merges_preferences(self, mock_auth, mock_supabase, mock_profile):
        with patch("backend.routes.profile.update_user_profile", new_callable=AsyncMock) as mock:
            mock.return_value = mock_profile

            response = client.put("/profile", json={"taste_preferences": {"music": " Jazz "}})

        assert response.status_code == 200
        assert response.json()["status"] == "UPDATED"
        assert mock.call_args.kwargs["taste_preferences"] == {"music": "Jazz"}
        assert mock.call_args.kwargs["display_name"] is None

    def test_put_profile_requires_a_field(self, mock_auth, mock_supabase):
        response = client.put("/profile", json={})

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_request"


class TestProgressEndpoints:

    def test_list_with_filters(self, mock_auth, mock_supabase):
        rows = [{
            "id": "p1",
            "item_id": "r1",
            "item_type": "recommendation",
            "status": "completed",
            "domain": "film",
        }]
        with patch("backend.routes.progress.list_progress", new_callable=AsyncMock) as mock:
            mock.return_value = rows

            response = client.get("/progress", params={"status": "completed", "domain": "film"})

        assert response.status_code == 200
        assert response.json()["count"] == 1
        assert mock.call_args.kwargs["status"] == "completed"
        assert mock.call_args.kwargs["domain"] == "film"

    def test_list_store_error_reports_store_message(self, mock_auth, mock_supabase):
        with patch("backend.routes.progress.list_progress", new_callable=AsyncMock) as mock:
            mock.side_effect = APIError({
                "message": "permission denied for table user_progress",
                "code": "42501",
            })

            response = client.get("/progress")

        assert response.status_code == 500
        assert response.json() == {
            "error": "fetch_error",
            "details": "permission denied for table user_progress",
        }

    def test_track_progress_empty_write(self, mock_auth, mock_supabase):
        with patch("backend.routes.progress.insert_progress", new_callable=AsyncMock) as mock:
            mock.side_effect = PersistenceError("Failed to track progress", "insert returned no rows")

            response = client.post("/progress", json={
                "item_id": "r1",
                "item_type": "recommendation",
                "status": "saved",
                "domain": "books",
            })

        assert response.status_code == 500
        assert response.json()["details"] == "insert returned no rows"

    def test_invalid_status_filter(self, mock_auth, mock_supabase):
        response = client.get("/progress", params={"status": "abandoned"})

        assert response.status_code == 400

    def test_track_progress(self, mock_auth, mock_supabase):
        row = {
            "id": "p1",
            "user_id": "test-user-id",
            "item_id": "r1",
            "item_type": "recommendation",
            "status": "saved",
            "domain": "books",
        }
        with patch("backend.routes.progress.insert_progress", new_callable=AsyncMock) as mock:
            mock.return_value = row

            response = client.post("/progress", json={
                "item_id": "r1",
                "item_type": "recommendation",
                "status": "saved",
                "domain": "books",
            })

        assert response.status_code == 201
        assert response.json()["id"] == "p1"
        assert mock.call_args.kwargs["user_id"] == "test-user-id"

    def test_growth_report(self, mock_auth, mock_supabase):
        with patch("backend.routes.progress.generate_growth_report", new_callable=AsyncMock) as mock:
            mock.return_value = GrowthReportResponse(report="Great work", stats=ProgressStats(total=2))

            response = client.post("/progress/growth-report", json={"prompt": "How am I doing?"})

        assert response.status_code == 200
        assert response.json()["report"] == "Great work"
        assert mock.call_args.kwargs["focus"] == "How am I doing?"

    def test_growth_report_gemini_error(self, mock_auth, mock_supabase):
        with patch("backend.routes.progress.generate_growth_report", new_callable=AsyncMock) as mock:
            mock.side_effect = GeminiAPIError(503, "overloaded")

            response = client.post("/progress/growth-report", json={})

        assert response.status_code == 503
        assert response.json()["error"] == "Gemini API error"
