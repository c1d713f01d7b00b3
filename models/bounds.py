"""End bound of a recurring event's date range.

A recurring event either ends on a concrete date (``Bounded``) or recurs
indefinitely (``Unbounded``). Storage layers that cannot represent the
unbounded case use ``FAR_FUTURE_DATE`` as a sentinel; convert at the edge
with ``end_from_date`` / ``end_to_date`` and never compare against the
sentinel directly.
"""

from datetime import date
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

FAR_FUTURE_DATE = date(5000, 1, 1)


class Bounded(BaseModel):
    """Recurrence stops after a concrete date (inclusive).

    Args:
        on: Last date the recurrence applies to.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["bounded"] = "bounded"
    on: date = Field(description="Last date (inclusive)")


class Unbounded(BaseModel):
    """Recurrence never stops."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["unbounded"] = "unbounded"


TemplateEnd = Annotated[Union[Bounded, Unbounded], Field(discriminator="kind")]


def end_from_date(value: Optional[date]) -> Union[Bounded, Unbounded]:
    """Convert a stored end date (``None`` or sentinel means unbounded)."""
    if value is None or value >= FAR_FUTURE_DATE:
        return Unbounded()
    return Bounded(on=value)


def end_to_date(end: Union[Bounded, Unbounded]) -> date:
    """Convert an end bound to a storable date, using the sentinel for Unbounded."""
    if isinstance(end, Bounded):
        return end.on
    return FAR_FUTURE_DATE


def earlier_end(
    a: Union[Bounded, Unbounded], b: Union[Bounded, Unbounded]
) -> Union[Bounded, Unbounded]:
    """Return the earlier of two end bounds. Unbounded is later than any date."""
    if isinstance(a, Unbounded):
        return b
    if isinstance(b, Unbounded):
        return a
    return a if a.on <= b.on else b


def end_before(end: Union[Bounded, Unbounded], day: date) -> bool:
    """Check if an end bound falls strictly before a date."""
    return isinstance(end, Bounded) and end.on < day


def includes(end: Union[Bounded, Unbounded], day: date) -> bool:
    """Check if a date is on or before an end bound."""
    return not end_before(end, day)
