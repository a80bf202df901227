# app/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Centralized application settings loaded from environment.

    Required env vars (.env):
      - SUPABASE_URL
      - SUPABASE_KEY (anon key)
      - SUPABASE_JWT_SECRET (JWT signing secret from Supabase project settings)

    Optional:
      - SUPABASE_SERVICE_ROLE_KEY (admin Auth + Storage calls)
      - XAI_API_KEY (text generation)
      - GEMINI_API_KEY (PDF analysis)
    """

    PROJECT_NAME: str = "DocBrief Backend"
    API_PREFIX: str = "/api"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"

    # Supabase
    SUPABASE_URL: str
    SUPABASE_KEY: str

    # JWT verification (backend-side)
    SUPABASE_JWT_SECRET: str
    SUPABASE_JWT_ALG: str = "HS256"

    # Service role key bypasses RLS (backend only)
    SUPABASE_SERVICE_ROLE_KEY: str | None = None

    # Storage buckets
    AVATAR_BUCKET: str = "avatars"
    PDF_BUCKET: str = "pdfs"
    MAX_AVATAR_BYTES: int = 5 * 1024 * 1024

    # Text model (xAI, OpenAI-compatible API)
    XAI_API_KEY: str | None = None
    XAI_BASE_URL: str = "https://api.x.ai/v1"
    XAI_MODEL: str = "grok-beta"

    # Vision / document model
    GEMINI_API_KEY: str | None = None
    GEMINI_VISION_MODEL: str = "gemini-2.0-flash"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def get_cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """
    Cached settings loader.
    Ensures we don't re-parse .env on every import / request.
    """
    return Settings()
