# app/schemas/profile.py
from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


class ProfileRead(SQLModel):
    """
    Profile projection of the authenticated auth user.

    Fields other than `id` are None until explicitly set.
    """

    id: str
    email: str | None = None
    full_name: str | None = None
    description: str | None = None
    avatar_url: str | None = None


class ProfileUpdate(SQLModel):
    """
    Profile edit payload.

    Each field is tri-state:
      - omitted     => left unchanged
      - null        => cleared
      - a value     => set

    Only the keys present in the request body are applied (see
    `model_fields_set`), so a sparse payload never wipes other fields.
    """

    model_config = ConfigDict(extra="forbid")

    full_name: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=1000)
    avatar_url: str | None = None

    @field_validator("full_name")
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("full_name cannot be empty")
        return v

    @field_validator("description")
    @classmethod
    def normalize_description(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else v


class AvatarRead(SQLModel):
    """Result of an avatar upload."""

    avatar_url: str


class SuccessResponse(SQLModel):
    success: bool = True
