"""
E-TernakID - Supabase Client.

Low-level database access. The document store goes through here.
"""

from supabase import Client, create_client

from eternak.config import settings
from eternak.errors import StoreConfigurationError

# Singleton client instance
_client: Client | None = None


def get_client() -> Client:
    """
    Get the Supabase client.

    Uses singleton pattern to reuse connection. The service role key is
    preferred so the server can write regardless of row level security.
    """
    global _client

    if _client is None:
        key = settings.supabase_service_role_key or settings.supabase_anon_key
        if not settings.supabase_url or not key:
            raise StoreConfigurationError(
                "SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY (or SUPABASE_ANON_KEY) must be set"
            )
        _client = create_client(settings.supabase_url, key)

    return _client


def reset_client() -> None:
    """Drop the cached client (tests, credential rotation)."""
    global _client
    _client = None
