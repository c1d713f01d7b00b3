"""Recurrence rule model.

Rules are weekly day-of-week patterns. A daily rule is the weekly rule that
fires on all seven days. Rule text uses the ``FREQUENCY:DAYS`` form, e.g.
``WEEKLY:MONDAY,WEDNESDAY`` or ``DAILY``.
"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.bounds import Bounded, TemplateEnd, Unbounded
from scheduling.exceptions import InvalidRecurrenceRuleError


class DayOfWeek(str, Enum):
    """Day of the week, in ISO order (Monday first)."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def of(cls, day: date) -> "DayOfWeek":
        """Get the weekday a calendar date falls on.

        Args:
            day: Calendar date.

        Returns:
            The matching DayOfWeek.
        """
        return _ISO_ORDER[day.weekday()]

    @property
    def index(self) -> int:
        """Position in the week, 0 for Monday."""
        return _ISO_ORDER.index(self)


_ISO_ORDER = list(DayOfWeek)


class RecurrenceFrequency(str, Enum):
    """Supported recurrence cadences."""

    DAILY = "daily"
    WEEKLY = "weekly"


class RecurrenceRule(BaseModel):
    """A parsed weekly recurrence pattern.

    Args:
        frequency: Cadence the rule was declared with.
        days_of_week: Weekdays on which the rule fires (never empty).
        source: Original rule text, if the rule was parsed from text.
    """

    model_config = ConfigDict(frozen=True)

    frequency: RecurrenceFrequency = Field(
        default=RecurrenceFrequency.WEEKLY, description="Recurrence cadence"
    )
    days_of_week: frozenset[DayOfWeek] = Field(
        description="Weekdays the rule fires on"
    )
    source: Optional[str] = Field(default=None, description="Original rule text")

    @field_validator("days_of_week")
    @classmethod
    def validate_days_of_week(cls, days: frozenset[DayOfWeek]) -> frozenset[DayOfWeek]:
        """Ensure at least one weekday is set.

        Raises:
            ValueError: If the set is empty.
        """
        if not days:
            raise ValueError("days_of_week must contain at least one day")
        return days

    @classmethod
    def weekly(cls, *days: DayOfWeek) -> "RecurrenceRule":
        """Build a weekly rule from weekdays."""
        return cls(frequency=RecurrenceFrequency.WEEKLY, days_of_week=frozenset(days))

    @classmethod
    def daily(cls) -> "RecurrenceRule":
        """Build a rule that fires every day."""
        return cls(frequency=RecurrenceFrequency.DAILY, days_of_week=frozenset(DayOfWeek))

    @classmethod
    def parse(cls, text: str) -> "RecurrenceRule":
        """Parse rule text such as ``WEEKLY:MONDAY,FRIDAY``.

        Args:
            text: Rule text. Frequency and day names are case-insensitive.

        Returns:
            The parsed RecurrenceRule with ``source`` set to the input.

        Raises:
            InvalidRecurrenceRuleError: If the frequency is unknown or
                unsupported, or the day list is missing or malformed.
        """
        parts = text.strip().split(":")
        frequency_name = parts[0].strip().upper()

        if frequency_name == "DAILY":
            return cls(
                frequency=RecurrenceFrequency.DAILY,
                days_of_week=frozenset(DayOfWeek),
                source=text,
            )

        if frequency_name != "WEEKLY" or len(parts) != 2:
            # MONTHLY and anything else land here
            raise InvalidRecurrenceRuleError(
                "unsupported_recurrence", f"Unsupported recurrence rule: {text!r}"
            )

        names = [name.strip() for name in parts[1].split(",")]
        if not any(names):
            raise InvalidRecurrenceRuleError(
                "weekly_missing_days", f"Weekly rule has no days: {text!r}"
            )

        days = set()
        for name in names:
            try:
                days.add(DayOfWeek(name.lower()))
            except ValueError:
                raise InvalidRecurrenceRuleError(
                    "invalid_day", f"Invalid day name {name!r} in rule {text!r}"
                ) from None

        return cls(
            frequency=RecurrenceFrequency.WEEKLY,
            days_of_week=frozenset(days),
            source=text,
        )

    def fires_on(self, day: date) -> bool:
        """Check if the rule's weekday pattern matches a date."""
        return DayOfWeek.of(day) in self.days_of_week

    def shares_day_with(self, other: "RecurrenceRule") -> bool:
        """Check if two rules have at least one weekday in common."""
        return not self.days_of_week.isdisjoint(other.days_of_week)

    def sorted_days(self) -> list[DayOfWeek]:
        """Get the rule's weekdays ordered Monday first."""
        return sorted(self.days_of_week, key=lambda d: d.index)

    def to_text(self) -> str:
        """Render the rule in ``FREQUENCY:DAYS`` form."""
        if self.frequency == RecurrenceFrequency.DAILY:
            return "DAILY"
        return "WEEKLY:" + ",".join(d.name for d in self.sorted_days())

    def summary(self, start_date: date, end: TemplateEnd = Unbounded()) -> str:
        """Describe the rule in English.

        Args:
            start_date: First date the rule applies to.
            end: Last date the rule applies to, or Unbounded.

        Returns:
            Text such as "Every Monday and Friday from July 14, 2025 forever".
        """
        until = f"until {_format_date(end.on)}" if isinstance(end, Bounded) else "forever"

        if self.frequency == RecurrenceFrequency.DAILY:
            return f"Every day from {_format_date(start_date)} {until}"

        day_list = " and ".join(d.value.capitalize() for d in self.sorted_days())
        return f"Every {day_list} from {_format_date(start_date)} {until}"


def _format_date(day: date) -> str:
    return f"{day.strftime('%B')} {day.day}, {day.year}"
