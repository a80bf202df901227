# app/repositories/user_repo.py
from typing import Any

import httpx
from supabase import AuthApiError, AuthError, Client

from app.core.errors import RemoteError, provider_message
from app.core.supabase_client import supabase_admin
from app.models.user import AuthUser


class AuthUserRepository:
    """
    Data access layer for Supabase auth users.

    Responsibilities:
      - Pure remote calls against the Auth admin API
      - No FastAPI routing, no business logic
      - Provider failures surface as RemoteError with the provider message
    """

    def __init__(self, client: Client | None = None):
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = supabase_admin()
        return self._client

    @staticmethod
    def _to_user(raw: Any) -> AuthUser:
        return AuthUser(
            id=str(raw.id),
            email=raw.email,
            user_metadata=dict(raw.user_metadata or {}),
        )

    @staticmethod
    def _is_user_not_found(exc: AuthApiError) -> bool:
        return exc.status == 404 or getattr(exc, "code", None) == "user_not_found"

    def get_by_id(self, user_id: str) -> AuthUser | None:
        """Return the live auth user, or None if it no longer exists."""
        try:
            response = self.client.auth.admin.get_user_by_id(user_id)
        except AuthApiError as exc:
            if self._is_user_not_found(exc):
                return None
            raise RemoteError(provider_message(exc)) from exc
        except (AuthError, httpx.HTTPError) as exc:
            raise RemoteError(provider_message(exc)) from exc
        if response is None or response.user is None:
            return None
        return self._to_user(response.user)

    def update_metadata(self, user_id: str, metadata: dict[str, Any]) -> AuthUser:
        """
        Write `metadata` as the user's user_metadata in a single call.

        Callers pass the full desired metadata state; keys set to None are
        cleared on the provider side.
        """
        try:
            response = self.client.auth.admin.update_user_by_id(
                user_id, {"user_metadata": metadata}
            )
        except (AuthError, httpx.HTTPError) as exc:
            raise RemoteError(provider_message(exc)) from exc
        return self._to_user(response.user)
