"""
Service-layer exceptions shared by the persistence functions.
"""

from typing import Optional

from postgrest.exceptions import APIError


class PersistenceError(Exception):
    """A Supabase write returned no data or was rejected."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.details = details or message


def store_error_details(error: Exception) -> str:
    """Error text reported by the store, for the `details` of a 500 body."""
    if isinstance(error, PersistenceError):
        return error.details
    if isinstance(error, APIError) and error.message:
        return error.message
    return str(error)
