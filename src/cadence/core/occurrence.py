"""Pure next-occurrence arithmetic - no I/O dependencies."""

import logging
from datetime import date, datetime, time, timedelta

from dateutil.relativedelta import relativedelta

from .pattern import RecurrencePattern, RecurrenceType, sunday_weekday

logger = logging.getLogger(__name__)

END_OF_DAY = time(23, 59, 59, 999000)


def shift_days(d: date, days: int) -> date:
    """Return a new date `days` after `d`."""
    return d + timedelta(days=days)


def shift_months(d: date, months: int) -> date:
    """
    Return a new date `months` calendar months after `d`.

    Overflowing days clamp to the last day of the target month
    (Jan 31 + 1 month -> Feb 28, or Feb 29 in a leap year).
    """
    return d + relativedelta(months=months)


def end_of_day(d: date) -> datetime:
    """23:59:59.999 local time on `d`."""
    return datetime.combine(d, END_OF_DAY)


def is_past_end(candidate: date | datetime, end_date: date | None) -> bool:
    """True if `candidate` falls strictly after the end of `end_date`."""
    if end_date is None:
        return False
    if not isinstance(candidate, datetime):
        candidate = datetime.combine(candidate, time.min)
    return candidate > end_of_day(end_date)


def next_weekday_occurrence(anchor: date, days_of_week: tuple[int, ...], interval: int = 1) -> date:
    """
    Next date after `anchor` whose weekday is in `days_of_week`.

    A later selected day in the same week wins regardless of interval.
    Otherwise wrap to the first selected day, skipping `interval - 1` weeks.
    """
    if not days_of_week:
        return shift_days(anchor, 7 * interval)

    current = sunday_weekday(anchor)
    for day in sorted(set(days_of_week)):
        if day > current:
            return shift_days(anchor, day - current)

    first_day = min(days_of_week)
    days_until_wrap = (7 - current) + first_day
    return shift_days(anchor, days_until_wrap + 7 * (interval - 1))


def next_occurrence(anchor: date, pattern: RecurrencePattern) -> date | None:
    """
    Compute the next occurrence after `anchor`.

    Returns None when the recurrence has terminated: the pattern is 'once',
    its type is unrecognized, its end date precedes its start date, or the
    candidate falls after `end_date`.
    Pure function - no I/O.
    """
    if isinstance(anchor, datetime):
        anchor = anchor.date()

    if pattern.start_date and pattern.end_date and pattern.end_date < pattern.start_date:
        return None

    interval = pattern.effective_interval

    match pattern.type:
        case RecurrenceType.ONCE:
            return None
        case RecurrenceType.DAILY:
            candidate = shift_days(anchor, interval)
        case RecurrenceType.WEEKLY:
            candidate = next_weekday_occurrence(anchor, pattern.days_of_week, interval)
        case RecurrenceType.MONTHLY:
            candidate = shift_months(anchor, interval)
        case _:
            logger.warning(f"Cannot compute next occurrence for unknown recurrence type {pattern.type_name!r}")
            return None

    if is_past_end(candidate, pattern.end_date):
        logger.debug(f"Recurrence ended: {candidate} is after {pattern.end_date}")
        return None

    return candidate


def upcoming_occurrences(anchor: date, pattern: RecurrencePattern, count: int) -> list[date]:
    """Up to `count` successive occurrences, stopping early on termination."""
    dates = []
    current = anchor
    for _ in range(count):
        nxt = next_occurrence(current, pattern)
        if nxt is None:
            break
        dates.append(nxt)
        current = nxt
    return dates
