"""
Pydantic schemas for API request and response validation.

All FastAPI endpoints use explicit Pydantic models. Wire names follow the
web client (camelCase aliases where it expects them); `Any` only appears
in provider passthrough payloads and JSON metadata columns.
"""
