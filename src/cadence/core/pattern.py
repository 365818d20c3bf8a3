"""Recurrence pattern data model - no I/O dependencies."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from dateutil.parser import isoparse


class RecurrenceType(str, Enum):
    """Canonical repeat rule types."""

    ONCE = "once"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class Weekday:
    """A day of the week as shown in the pattern editor."""

    value: int
    label: str
    # Badge code; two letters where one would be ambiguous
    short_label: str


# 0 = Sunday ... 6 = Saturday
DAYS_OF_WEEK: tuple[Weekday, ...] = (
    Weekday(0, "Sunday", "Su"),
    Weekday(1, "Monday", "M"),
    Weekday(2, "Tuesday", "Tu"),
    Weekday(3, "Wednesday", "W"),
    Weekday(4, "Thursday", "Th"),
    Weekday(5, "Friday", "F"),
    Weekday(6, "Saturday", "Sa"),
)

WEEKDAYS = (1, 2, 3, 4, 5)


def sunday_weekday(d: date) -> int:
    """Weekday number with Sunday = 0."""
    return (d.weekday() + 1) % 7


def clean_days(days) -> tuple[int, ...]:
    """Sorted, de-duplicated weekday numbers in [0, 6]."""
    if not isinstance(days, (list, tuple, set, frozenset)):
        return ()
    valid = set()
    for d in days:
        if isinstance(d, bool) or not isinstance(d, int):
            continue
        if 0 <= d <= 6:
            valid.add(d)
    return tuple(sorted(valid))


def parse_timestamp(value) -> datetime | None:
    """Parse an ISO timestamp into a naive local datetime."""
    if not value:
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    elif isinstance(value, str):
        try:
            dt = isoparse(value.strip())
        except (ValueError, OverflowError):
            return None
    else:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone().replace(tzinfo=None)
    return dt


def parse_date(value) -> date | None:
    """Local calendar date of a stored date or timestamp."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    dt = parse_timestamp(value)
    return dt.date() if dt else None


@dataclass(frozen=True)
class RecurrencePattern:
    """
    A repeat rule.

    `type` is a plain string only when an unrecognized legacy tag was passed
    through by the normalizer; everything else uses RecurrenceType.
    """

    type: RecurrenceType | str
    interval: int = 1
    days_of_week: tuple[int, ...] = field(default=())
    start_date: date | None = None
    end_date: date | None = None

    def __post_init__(self):
        kind = self.type
        if not isinstance(kind, RecurrenceType):
            try:
                kind = RecurrenceType(kind)
            except ValueError:
                pass
        object.__setattr__(self, "type", kind)
        object.__setattr__(self, "days_of_week", clean_days(self.days_of_week))

    @property
    def effective_interval(self) -> int:
        """Interval floored at 1 so a recurrence always moves forward."""
        if isinstance(self.interval, bool) or not isinstance(self.interval, int):
            return 1
        return max(self.interval, 1)

    @property
    def type_name(self) -> str:
        return self.type.value if isinstance(self.type, RecurrenceType) else str(self.type)

    @property
    def is_known_type(self) -> bool:
        return isinstance(self.type, RecurrenceType)

    def to_dict(self) -> dict:
        """Serialize to the camelCase storage shape."""
        data: dict = {"type": self.type_name}
        if self.type is not RecurrenceType.ONCE:
            data["interval"] = self.interval
        if self.days_of_week:
            data["daysOfWeek"] = list(self.days_of_week)
        if self.start_date:
            data["startDate"] = self.start_date.isoformat()
        if self.end_date:
            data["endDate"] = self.end_date.isoformat()
        return data


def is_recurrence_active(pattern: RecurrencePattern | None) -> bool:
    """A pattern is active when present and not 'once'."""
    return pattern is not None and pattern.type is not RecurrenceType.ONCE
