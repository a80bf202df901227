# app/services/route_guard.py
"""
Client-side navigation guard.

Recomputed from the live session on every navigation; nothing is kept
between checks.
"""
from urllib.parse import urlsplit

from app.models.user import AuthUser

LOGIN_PATH = "/login"
PROFILE_PATH = "/profile"
CONFIRM_PATH = "/confirm"

# Reachable without a session (login page, auth callback, landing page).
PUBLIC_PATHS = frozenset({LOGIN_PATH, CONFIRM_PATH, "/"})

# Reachable with an incomplete profile.
PROFILE_SETUP_PATHS = frozenset({PROFILE_PATH, LOGIN_PATH})


def resolve_redirect(
    user: AuthUser | None,
    destination: str,
    *,
    server_side: bool = False,
) -> str | None:
    """
    Return the path to redirect to, or None to let the navigation continue.

    Rules:
      - server-rendered navigations are never redirected
      - guests are sent to /login unless the destination is public
      - users without a full_name are sent to /profile unless already
        heading to /profile or /login
    """
    if server_side:
        return None

    path = urlsplit(destination).path or "/"

    if user is None:
        return None if path in PUBLIC_PATHS else LOGIN_PATH

    if not user.full_name and path not in PROFILE_SETUP_PATHS:
        return PROFILE_PATH

    return None
