"""Creator timezone resolution and local-time conversion."""

from datetime import date, datetime, time
from typing import NamedTuple, Optional, Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from scheduling.exceptions import InvalidArgumentError


class TimezoneResolver(Protocol):
    """Looks up the IANA zone a creator's local dates and times are in."""

    def resolve_zone(self, creator_id: int) -> str:
        ...


class StaticTimezoneResolver:
    """Resolves zones from a fixed mapping with a fallback zone.

    Args:
        zones: Mapping of creator ID to IANA zone identifier.
        default: Zone used for creators missing from the mapping.
    """

    def __init__(self, zones: Optional[dict[int, str]] = None, default: str = "UTC"):
        self.zones = dict(zones or {})
        self.default = default

    def resolve_zone(self, creator_id: int) -> str:
        return self.zones.get(creator_id, self.default)

    def set_zone(self, creator_id: int, zone: str) -> None:
        """Store a creator's zone, validating the identifier first."""
        load_zone(zone)
        self.zones[creator_id] = zone


class LocalWindow(NamedTuple):
    """An absolute interval expressed in a creator's local dates and times."""

    start_date: date
    end_date: date
    start_time: time
    end_time: time

    @property
    def single_day(self) -> bool:
        return self.start_date == self.end_date


def load_zone(zone: str) -> ZoneInfo:
    """Load a zone, raising InvalidArgumentError for unknown identifiers."""
    try:
        return ZoneInfo(zone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidArgumentError(f"Invalid timezone identifier: {zone}") from exc


def to_local_window(start: datetime, end: datetime, zone: str) -> LocalWindow:
    """Convert an absolute interval into local dates and times in ``zone``."""
    tz = load_zone(zone)
    local_start = start.astimezone(tz)
    local_end = end.astimezone(tz)
    return LocalWindow(
        start_date=local_start.date(),
        end_date=local_end.date(),
        start_time=local_start.time(),
        end_time=local_end.time(),
    )
