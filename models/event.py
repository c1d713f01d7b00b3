"""Standalone event model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class Event(BaseModel):
    """A single scheduled occurrence owned by one creator.

    Args:
        event_id: Storage identifier (None until persisted).
        creator_id: ID of the user who owns the event.
        name: Event name.
        start: Start timestamp (timezone-aware).
        end: End timestamp (timezone-aware).
        confirmed: Whether the event is scheduled. Drafts never conflict.
    """

    event_id: Optional[int] = Field(default=None, description="Storage identifier")
    creator_id: int = Field(description="Owner user ID")
    name: str = Field(default="", description="Event name")
    start: datetime = Field(description="Start timestamp")
    end: datetime = Field(description="End timestamp")
    confirmed: bool = Field(default=True, description="Scheduled (not a draft)")

    @field_validator("start", "end")
    @classmethod
    def validate_timezone_aware(cls, v: datetime) -> datetime:
        """Ensure datetime is timezone-aware."""
        if v.tzinfo is None:
            raise ValueError("Datetime must be timezone-aware (recommend UTC)")
        return v

    def overlaps(self, start: datetime, end: datetime) -> bool:
        """Check half-open overlap with ``[start, end)``.

        Touching intervals (one ends exactly when the other starts) do not
        overlap.
        """
        return self.start < end and self.end > start
