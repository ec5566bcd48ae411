"""Greeting payload produced by the greeting service."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Greeting(BaseModel):
    """A numbered greeting, e.g. ``{"id": 1, "content": "Hello, World!"}``."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(ge=1)
    content: str
