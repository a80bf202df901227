# app/models/user.py
from typing import Any

from sqlmodel import SQLModel, Field

# user_metadata keys owned by this app
FULL_NAME_KEY = "full_name"
DESCRIPTION_KEY = "description"
AVATAR_URL_KEY = "avatar_url"


class AuthUser(SQLModel):
    """
    Snapshot of a Supabase auth user.

    Identity:
      - id: Supabase auth.users.id (JWT "sub"), immutable.

    Profile data is not stored in a table of ours: full_name,
    description and avatar_url live as free-form `user_metadata`
    on the auth record itself.
    """

    id: str = Field(description="Supabase auth.users.id")
    email: str | None = Field(default=None, description="Email owned by Supabase Auth")
    user_metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def full_name(self) -> str | None:
        return self.user_metadata.get(FULL_NAME_KEY)

    @property
    def description(self) -> str | None:
        return self.user_metadata.get(DESCRIPTION_KEY)

    @property
    def avatar_url(self) -> str | None:
        return self.user_metadata.get(AVATAR_URL_KEY)
