"""
Tests for the provider passthrough endpoints (/gemini-api, /qloo-api).
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, patch

from backend.auth.dependencies import AuthenticatedUser, get_authenticated_user
from backend.main import app
from backend.services.gemini_service import GeminiAPIError, GeminiNotConfiguredError, GeminiResult
from backend.services.qloo_service import QlooAPIError

client = TestClient(app)


async def mock_get_authenticated_user_dependency():
    """Mock dependency that returns test AuthenticatedUser."""
    return AuthenticatedUser(
        user_id="test-user-id",
        access_token="test-access-token"
    )


@pytest.fixture
def mock_auth():
    """Override get_authenticated_user dependency."""
    app.dependency_overrides[get_authenticated_user] = mock_get_authenticated_user_dependency
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def mock_generate_text():
    with patch("backend.routes.gemini.generate_text", new_callable=AsyncMock) as mock:
        mock.return_value = GeminiResult(
            text="Try Persona next.",
            full_response={"candidates": [{"content": {"parts": [{"text": "Try Persona next."}]}}]},
        )
        yield mock


class TestGeminiApi:

    def test_success(self, mock_auth, mock_generate_text):
        response = client.post("/gemini-api", json={
            "prompt": "What next?",
            "type": "explanation",
            "domain": "film",
            "preferences": {"film": "  Marvel  ", "unknown": "dropped"},
            "progressData": {"completed": 3},
        })

        assert response.status_code == 200
        body = response.json()
        assert body["response"] == "Try Persona next."
        assert body["type"] == "explanation"
        assert body["domain"] == "film"
        assert "fullResponse" in body

        kwargs = mock_generate_text.call_args.kwargs
        assert kwargs["preferences"] == {"film": "Marvel"}
        assert kwargs["progress_data"] == {"completed": 3}

    def test_no_text_placeholder(self, mock_auth, mock_generate_text):
        mock_generate_text.return_value = GeminiResult(text=None)

        response = client.post("/gemini-api", json={"prompt": "x", "type": "onboarding"})

        assert response.status_code == 200
        assert response.json()["response"] == "No response generated"

    def test_provider_status_is_passed_through(self, mock_auth, mock_generate_text):
        details = {"error": {"code": 429, "message": "Quota exceeded"}}
        mock_generate_text.side_effect = GeminiAPIError(429, details)

        response = client.post("/gemini-api", json={"prompt": "x", "type": "curriculum"})

        assert response.status_code == 429
        assert response.json() == {
            "error": "Gemini API error",
            "details": details,
            "status": 429,
        }

    def test_missing_key_is_internal_error(self, mock_auth, mock_generate_text):
        mock_generate_text.side_effect = GeminiNotConfiguredError("GOOGLE_API_KEY is not configured")

        response = client.post("/gemini-api", json={"prompt": "x", "type": "onboarding"})

        assert response.status_code == 500
        assert response.json()["error"] == "Internal server error"

    def test_unknown_type_is_validation_error(self, mock_auth, mock_generate_text):
        response = client.post("/gemini-api", json={"prompt": "x", "type": "poetry"})

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"
        mock_generate_text.assert_not_called()


class TestQlooApi:

    def test_passthrough(self, mock_auth):
        with patch("backend.routes.qloo.call_qloo", new_callable=AsyncMock) as mock:
            mock.return_value = {"data": [{"id": "urn:tag:jazz"}]}

            response = client.post("/qloo-api", json={
                "endpoint": "v2/tags",
                "method": "GET",
                "params": {"limit": 5},
            })

        assert response.status_code == 200
        assert response.json() == {"data": [{"id": "urn:tag:jazz"}]}
        mock.assert_awaited_once_with(endpoint="v2/tags", method="GET", params={"limit": 5}, body=None)

    def test_provider_error_status(self, mock_auth):
        with patch("backend.routes.qloo.call_qloo", new_callable=AsyncMock) as mock:
            mock.side_effect = QlooAPIError(404, {"message": "not found"})

            response = client.post("/qloo-api", json={"endpoint": "insights", "method": "POST", "body": {}})

        assert response.status_code == 404
        assert response.json()["error"] == "Qloo API error"

    def test_endpoint_must_be_a_path(self, mock_auth):
        response = client.post("/qloo-api", json={"endpoint": "https://evil.example/x"})

        assert response.status_code == 400
