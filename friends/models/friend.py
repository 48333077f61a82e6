"""Pydantic models for friend records."""

from typing import Optional

from pydantic import BaseModel, Field


class Friend(BaseModel):
    """A row of the friends table.

    `nick=None` means the friend has no nickname; an empty string is kept as-is.
    """
    id: int = Field(..., gt=0, description="Store-generated identifier")
    name: str
    nick: Optional[str] = None


class GeneratedId(BaseModel):
    """Identifier returned by INSERT ... RETURNING id."""
    id: int = Field(..., gt=0)
