# app/core/auth.py
from typing import Any

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError

from app.core.config import get_settings
from app.core.dependencies import get_user_repository
from app.core.errors import NotAuthenticated
from app.models.user import AuthUser
from app.repositories.user_repo import AuthUserRepository

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise immediately
#   so we can support "guest" mode (unauthenticated).
bearer_scheme = HTTPBearer(auto_error=False)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a Supabase access token (JWT).

    Verification:
      - signature (HS256 using SUPABASE_JWT_SECRET)
      - expiration time (exp)
      - audience is NOT verified (Supabase 'aud' may vary)

    Args:
        token: raw JWT from the Authorization header.

    Returns:
        Decoded JWT claims.

    Raises:
        NotAuthenticated: if token is invalid/expired.
    """
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.SUPABASE_JWT_ALG],
            options={"verify_aud": False},
        )
    except JWTError:
        raise NotAuthenticated("Invalid or expired token")


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    repo: AuthUserRepository = Depends(get_user_repository),
) -> AuthUser | None:
    """
    Resolve the current user from a Supabase JWT.

    Flow:
      1. If no Authorization header => guest => return None (no remote call).
      2. Decode JWT => extract 'sub' (auth user id).
      3. Load the live auth user so user_metadata reflects the latest
         profile writes rather than the claims baked into the token.

    Returns:
        AuthUser if authenticated, else None for guests.

    Raises:
        NotAuthenticated: if token is malformed, missing 'sub', or the
            user no longer exists.
    """
    if credentials is None:
        return None  # guest mode

    payload = decode_access_token(credentials.credentials)
    sub = payload.get("sub")
    if not sub:
        raise NotAuthenticated("Token missing sub")

    user = repo.get_by_id(sub)
    if user is None:
        raise NotAuthenticated("User no longer exists")
    return user


def require_auth(user: AuthUser | None = Depends(get_current_user)) -> AuthUser:
    """
    Enforce authentication.

    If attached to a route, guests (missing/invalid JWT)
    will be rejected with 401.

    Raises:
        NotAuthenticated: if user is None.
    """
    if user is None:
        raise NotAuthenticated("Authentication required")
    return user
