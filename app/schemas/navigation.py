# app/schemas/navigation.py
from sqlmodel import SQLModel


class NavigationRead(SQLModel):
    """Where the client router should go instead, or null to continue."""

    redirect: str | None = None
