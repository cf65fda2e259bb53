"""
FastAPI routers for all API endpoints.

Each module defines a router for one surface (gemini-api, qloo-api,
recommendations, taste-journey, profile, progress, auth, health).
Every non-public router resolves the caller with get_authenticated_user
before touching a provider or the database.
"""
