# app/routers/navigation.py
from fastapi import APIRouter, Depends, Query

from app.core.auth import get_current_user
from app.models.user import AuthUser
from app.schemas.navigation import NavigationRead
from app.services.route_guard import resolve_redirect

router = APIRouter(prefix="/navigation", tags=["Navigation"])


@router.get("", response_model=NavigationRead)
def check_navigation(
    path: str = Query(..., min_length=1, description="Destination path"),
    server_side: bool = False,
    current_user: AuthUser | None = Depends(get_current_user),
):
    """
    Ask where a client-side navigation to `path` should end up.

    Works for guests too: they get {"redirect": "/login"} for any
    non-public page.
    """
    return NavigationRead(
        redirect=resolve_redirect(current_user, path, server_side=server_side)
    )
