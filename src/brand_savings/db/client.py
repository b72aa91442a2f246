"""
Brand Savings - Supabase Client.

Low-level database access. The record store goes through here.
"""

from supabase import Client, create_client

from brand_savings.config import settings

# Singleton client instance
_client: Client | None = None


def get_client() -> Client:
    """
    Get the Supabase client.

    Uses the anon key, same as the public calculator page. Row-level
    security on the submissions table allows inserts only.
    """
    global _client

    if _client is None:
        _client = create_client(
            settings.supabase_url,
            settings.supabase_anon_key,
        )

    return _client


def reset_client() -> None:
    """Drop the cached client (tests, settings reload)."""
    global _client
    _client = None
