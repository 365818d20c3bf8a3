"""
Legacy recurrence pattern migration - no I/O dependencies.

Older app versions persisted patterns with a wider set of type tags.
Each stored shape is classified into a LegacyTag (or UnknownTag) and
resolved through a fixed mapping table into a canonical RecurrencePattern.
Malformed input degrades to "no pattern" instead of raising.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum

from .pattern import WEEKDAYS, RecurrencePattern, RecurrenceType, parse_date, clean_days

logger = logging.getLogger(__name__)


class LegacyTag(Enum):
    """Every type tag the app has ever persisted."""

    NONE = "none"
    ONCE = "once"
    WEEKDAYS = "weekdays"
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    CUSTOM = "custom"
    DAILY = "daily"


@dataclass(frozen=True)
class UnknownTag:
    """A stored pattern whose type tag is outside the known set."""

    tag: str


DroppedCallback = Callable[[Mapping], None]


def classify(raw) -> LegacyTag | UnknownTag | None:
    """Identify the legacy variant of a stored pattern, or None if unusable."""
    if not isinstance(raw, Mapping):
        return None
    tag = raw.get("type")
    if not isinstance(tag, str) or not tag:
        return None
    try:
        return LegacyTag(tag)
    except ValueError:
        return UnknownTag(tag)


def _interval(raw: Mapping) -> int:
    value = raw.get("interval")
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        return 1
    return value


def _dates(raw: Mapping) -> dict:
    return {
        "start_date": parse_date(raw.get("startDate")),
        "end_date": parse_date(raw.get("endDate")),
    }


def normalize_pattern(
    raw: Mapping | RecurrencePattern | None,
    on_dropped: DroppedCallback | None = None,
) -> RecurrencePattern | None:
    """
    Convert a stored (possibly outdated) pattern into the canonical shape.

    Returns None for "no pattern": missing or malformed input, and the
    retired 'yearly' type, which is dropped with a warning and reported
    to `on_dropped`. Unknown tags pass through with their tag kept.
    Applying this twice gives the same result as applying it once.
    """
    if isinstance(raw, RecurrencePattern):
        raw = raw.to_dict()

    variant = classify(raw)
    if variant is None:
        if raw is not None:
            logger.debug(f"Ignoring malformed recurrence pattern: {raw!r}")
        return None

    days = clean_days(raw.get("daysOfWeek"))

    match variant:
        case LegacyTag.NONE | LegacyTag.ONCE:
            return RecurrencePattern(type=RecurrenceType.ONCE)
        case LegacyTag.WEEKDAYS:
            return RecurrencePattern(
                type=RecurrenceType.WEEKLY, interval=1, days_of_week=WEEKDAYS, **_dates(raw)
            )
        case LegacyTag.BIWEEKLY:
            return RecurrencePattern(
                type=RecurrenceType.WEEKLY, interval=2, days_of_week=days, **_dates(raw)
            )
        case LegacyTag.CUSTOM:
            return RecurrencePattern(
                type=RecurrenceType.WEEKLY, interval=1, days_of_week=days, **_dates(raw)
            )
        case LegacyTag.YEARLY:
            logger.warning(f"Dropping unsupported yearly recurrence pattern: {dict(raw)!r}")
            if on_dropped is not None:
                on_dropped(raw)
            return None
        case LegacyTag.DAILY:
            return RecurrencePattern(
                type=RecurrenceType.DAILY, interval=_interval(raw), **_dates(raw)
            )
        case LegacyTag.WEEKLY:
            return RecurrencePattern(
                type=RecurrenceType.WEEKLY, interval=_interval(raw), days_of_week=days, **_dates(raw)
            )
        case LegacyTag.MONTHLY:
            return RecurrencePattern(
                type=RecurrenceType.MONTHLY, interval=_interval(raw), **_dates(raw)
            )
        case UnknownTag(tag=tag):
            logger.warning(f"Passing through unrecognized recurrence type {tag!r}")
            return RecurrencePattern(
                type=tag, interval=_interval(raw), days_of_week=days, **_dates(raw)
            )


def normalize_task_dict(raw: Mapping, on_dropped: DroppedCallback | None = None) -> dict:
    """Copy of a stored task record with its `recurrence` field normalized."""
    record = dict(raw)
    pattern = normalize_pattern(record.get("recurrence"), on_dropped)
    if pattern is None:
        record.pop("recurrence", None)
    else:
        record["recurrence"] = pattern.to_dict()
    return record
