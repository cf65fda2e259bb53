"""
Tests for the identity gate on every protected endpoint.

An unauthenticated call must return 401 {error: "Unauthorized"} and must
not create a Supabase client or reach Gemini/Qloo.
"""

from contextlib import ExitStack

import pytest
from fastapi.testclient import TestClient
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError
from unittest.mock import patch

from backend.main import app

client = TestClient(app)

ROUTE_MODULES = ["recommendations", "journey", "profile", "progress", "auth"]

PROTECTED_CALLS = [
    ("POST", "/gemini-api", {"prompt": "hi", "type": "onboarding"}),
    ("POST", "/qloo-api", {"endpoint": "v2/tags", "method": "GET"}),
    ("POST", "/generate-recommendations", {"domain": "film", "difficulty": 3}),
    ("GET", "/recommendations", None),
    ("POST", "/taste-journey", {"action": "create-plan"}),
    ("GET", "/profile", None),
    ("PUT", "/profile", {"display_name": "Sam"}),
    ("GET", "/progress", None),
    ("POST", "/progress", {"item_id": "r1", "item_type": "recommendation", "status": "saved", "domain": "film"}),
    ("POST", "/progress/growth-report", {}),
    ("GET", "/auth/me", None),
]


@pytest.fixture
def downstream():
    """Patch every way a handler could reach the store or a provider."""
    with ExitStack() as stack:
        mocks = {
            module: stack.enter_context(patch(f"backend.routes.{module}.get_supabase_client"))
            for module in ROUTE_MODULES
        }
        mocks["gemini"] = stack.enter_context(patch("backend.routes.gemini.generate_text"))
        mocks["qloo"] = stack.enter_context(patch("backend.routes.qloo.call_qloo"))
        mocks["plan"] = stack.enter_context(patch("backend.routes.journey.create_five_day_plan"))
        yield mocks


def _call(method, path, body, headers=None):
    return client.request(method, path, json=body, headers=headers or {})


@pytest.mark.parametrize("method,path,body", PROTECTED_CALLS)
def test_missing_token_is_rejected_without_side_effects(downstream, method, path, body):
    response = _call(method, path, body)

    assert response.status_code == 401
    assert response.json()["error"] == "Unauthorized"
    for mock in downstream.values():
        mock.assert_not_called()


@pytest.mark.parametrize("header", ["Token abc", "Bearer", "Bearer a b"])
def test_malformed_authorization_header(downstream, header):
    response = _call("GET", "/profile", None, headers={"Authorization": header})

    assert response.status_code == 401
    assert response.json() == {
        "error": "Unauthorized",
        "details": "Invalid Authorization header format",
    }


@pytest.mark.parametrize("error,details", [
    (ExpiredSignatureError("expired"), "Authentication token has expired"),
    (InvalidTokenError("bad"), "Invalid authentication token"),
])
def test_rejected_token(downstream, error, details):
    with patch("backend.auth.dependencies._decode_token", side_effect=error):
        response = _call("GET", "/recommendations", None, headers={"Authorization": "Bearer abc"})

    assert response.status_code == 401
    assert response.json()["details"] == details
    downstream["recommendations"].assert_not_called()


def test_token_without_subject(downstream):
    with patch("backend.auth.dependencies._decode_token", return_value={"aud": "authenticated"}):
        response = _call("GET", "/profile", None, headers={"Authorization": "Bearer abc"})

    assert response.status_code == 401
    downstream["profile"].assert_not_called()


def _post_raw(body, headers=None):
    return client.post(
        "/taste-journey",
        content=body,
        headers={"Content-Type": "application/json", **(headers or {})},
    )


def test_unparseable_body_without_token_is_unauthorized(downstream):
    response = _post_raw("{not json")

    assert response.status_code == 401
    assert response.json() == {
        "error": "Unauthorized",
        "details": "Missing Authorization header",
    }
    for mock in downstream.values():
        mock.assert_not_called()


def test_unparseable_body_with_rejected_token_is_unauthorized(downstream):
    with patch("backend.auth.dependencies._decode_token", side_effect=InvalidTokenError("bad")):
        response = _post_raw("{not json", headers={"Authorization": "Bearer abc"})

    assert response.status_code == 401
    assert response.json()["details"] == "Invalid authentication token"


def test_unparseable_body_with_verified_token_is_validation_error(downstream):
    with patch("backend.auth.dependencies._decode_token", return_value={"sub": "user-123"}):
        response = _post_raw("{not json", headers={"Authorization": "Bearer abc"})

    assert response.status_code == 400
    assert response.json()["error"] == "validation_error"
    downstream["journey"].assert_not_called()


def test_verified_token_reaches_handler():
    claims = {"sub": "user-123", "email": "sam@example.com"}
    with patch("backend.auth.dependencies._decode_token", return_value=claims), \
         patch("backend.routes.auth.get_supabase_client"), \
         patch("backend.routes.auth.get_user_profile", return_value=None):
        response = _call("GET", "/auth/me", None, headers={"Authorization": "Bearer abc"})

    assert response.status_code == 200
    assert response.json() == {
        "user_id": "user-123",
        "email": "sam@example.com",
        "profile": None,
    }


def test_health_is_public():
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "taste-expansion-backend"}
