"""
Database access layer for the Taste Expansion backend.

All database operations MUST:
- Respect Row Level Security (RLS): user_id = auth.uid()
- Never bypass RLS
- Use only the tables user_profiles, user_progress and content_recommendations

Table schemas, migrations and RLS policies live in the Supabase project,
not here.
"""

from .client import get_supabase_client

__all__ = ["get_supabase_client"]
