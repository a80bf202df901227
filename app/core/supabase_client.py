# app/core/supabase_client.py
from functools import lru_cache
from supabase import create_client, Client

from app.core.config import get_settings
from app.core.errors import RemoteError


@lru_cache
def supabase_admin() -> Client:
    """
    Create a Supabase client with the service role key.

    Used for:
      - reading the live auth user behind a verified JWT
      - writing user_metadata (full_name, description, avatar_url)
      - uploading / listing / removing objects in the avatars and pdfs buckets

    WARNING:
      - Never expose service role key to frontend.
      - Only backend should call this.

    Raises:
        RemoteError: if SUPABASE_SERVICE_ROLE_KEY is not set.
    """
    settings = get_settings()
    if not settings.SUPABASE_SERVICE_ROLE_KEY:
        raise RemoteError("Missing SUPABASE_SERVICE_ROLE_KEY in .env")
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
