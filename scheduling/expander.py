"""Recurrence expansion.

Turns a recurrence rule into the concrete calendar dates it fires on inside
a date window. Expansion walks the window one day at a time, so callers are
responsible for bounding the window.
"""

import logging
from datetime import date, timedelta
from typing import Iterable

from models.recurrence import RecurrenceRule
from scheduling.exceptions import InvalidArgumentError

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


class RecurrenceExpander:
    """Enumerates the dates on which a recurrence rule fires."""

    def expand(
        self,
        rule: RecurrenceRule,
        start: date,
        end: date,
        skip_days: Iterable[date] = (),
    ) -> list[date]:
        """Expand a rule over the inclusive window ``[start, end]``.

        Args:
            rule: Recurrence rule to expand.
            start: First date of the window.
            end: Last date of the window (may equal ``start``).
            skip_days: Dates to leave out even if the rule fires on them.

        Returns:
            Dates in the window whose weekday is in the rule and which are
            not skipped, in ascending order.

        Raises:
            InvalidArgumentError: If ``start`` is after ``end``.
        """
        if start > end:
            raise InvalidArgumentError(
                f"Expansion window start {start} is after end {end}"
            )

        skipped = frozenset(skip_days)
        occurrences = []
        cursor = start
        while cursor <= end:
            if cursor not in skipped and rule.fires_on(cursor):
                occurrences.append(cursor)
            cursor += ONE_DAY

        logger.debug(
            "Expanded %s over %s..%s (%d days): %d occurrences",
            rule.to_text(),
            start,
            end,
            (end - start).days + 1,
            len(occurrences),
        )
        return occurrences

    def occurs_on(self, rule: RecurrenceRule, day: date) -> bool:
        """Check if the rule itself fires on a date.

        Skip days are not consulted: this answers whether the rule fires,
        independent of whether that occurrence was later skipped.
        """
        return rule.fires_on(day)
