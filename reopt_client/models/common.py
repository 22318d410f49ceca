"""Shared base model and helpers used across the REopt client models."""

from datetime import datetime, timezone
from typing import Annotated

from pydantic import BaseModel, Field


def utc_now() -> datetime:
    """Return the current UTC timestamp (timezone-aware)."""
    return datetime.now(tz=timezone.utc)


UTCTimestamp = Annotated[
    datetime, Field(description="UTC timezone-aware timestamp.")
]


class ReoptBase(BaseModel):
    """Base model for all client models. Uses pydantic's default config."""
