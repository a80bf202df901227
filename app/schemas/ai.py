# app/schemas/ai.py
from pydantic import ConfigDict, StrictStr
from sqlmodel import SQLModel, Field


class GenerateRequest(SQLModel):
    """
    Body of POST /generate.

    `prompt` must be a real, non-empty string; numbers and other JSON
    types are rejected instead of being coerced.
    """

    model_config = ConfigDict(extra="ignore")

    prompt: StrictStr = Field(min_length=1)


class GenerateResponse(SQLModel):
    result: str
