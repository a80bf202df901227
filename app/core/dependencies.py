# app/core/dependencies.py
"""
FastAPI dependency providers for remote collaborators.

Routes and services never build clients themselves; they receive them
from here, so tests can swap any of them via `app.dependency_overrides`.
Providers only record names and settings: SDK clients are created on
first remote call, so request validation never depends on credentials.
"""
from app.core.ai_client import TextModel, VisionModel
from app.core.config import get_settings
from app.core.storage_utils import StorageBucket
from app.repositories.user_repo import AuthUserRepository


def get_user_repository() -> AuthUserRepository:
    return AuthUserRepository()


def get_avatar_bucket() -> StorageBucket:
    return StorageBucket(get_settings().AVATAR_BUCKET)


def get_pdf_bucket() -> StorageBucket:
    return StorageBucket(get_settings().PDF_BUCKET)


def get_text_model() -> TextModel:
    return TextModel(get_settings().XAI_MODEL)


def get_vision_model() -> VisionModel:
    return VisionModel(get_settings().GEMINI_VISION_MODEL)
