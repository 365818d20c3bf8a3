"""Pure recurrence label formatting - no I/O dependencies."""

from .pattern import DAYS_OF_WEEK, RecurrencePattern, RecurrenceType


def format_days_of_week(days: tuple[int, ...]) -> str:
    """
    Readable weekday list, e.g. "Mon, Wed & Fri".

    All seven days collapse to "Every day".
    """
    if not days:
        return ""

    names = [DAYS_OF_WEEK[d].label[:3] for d in sorted(set(days))]

    if len(names) == 7:
        return "Every day"
    if len(names) == 1:
        return names[0]
    if len(names) == 2:
        return " & ".join(names)
    return ", ".join(names[:-1]) + " & " + names[-1]


def format_days_short(days: tuple[int, ...]) -> str:
    """Compact weekday codes, e.g. "MWF"."""
    return "".join(DAYS_OF_WEEK[d].short_label for d in sorted(set(days)))


def long_label(pattern: RecurrencePattern) -> str:
    """Human-readable phrase for a pattern, e.g. "Every 2 weeks on Mon & Thu"."""
    interval = pattern.effective_interval

    match pattern.type:
        case RecurrenceType.ONCE:
            return "Does not repeat"
        case RecurrenceType.DAILY:
            return "Every day" if interval == 1 else f"Every {interval} days"
        case RecurrenceType.WEEKLY:
            if pattern.days_of_week:
                days_text = format_days_of_week(pattern.days_of_week)
                if interval == 1:
                    return f"Weekly on {days_text}"
                return f"Every {interval} weeks on {days_text}"
            return "Every week" if interval == 1 else f"Every {interval} weeks"
        case RecurrenceType.MONTHLY:
            return "Every month" if interval == 1 else f"Every {interval} months"
        case _:
            return "Unknown"


def short_label(pattern: RecurrencePattern) -> str:
    """Badge-sized label, e.g. "MWF" or "2W"."""
    interval = pattern.effective_interval

    match pattern.type:
        case RecurrenceType.ONCE:
            return "ONCE"
        case RecurrenceType.DAILY:
            return "DAILY" if interval == 1 else f"{interval}D"
        case RecurrenceType.WEEKLY:
            if 0 < len(pattern.days_of_week) < 7:
                days_short = format_days_short(pattern.days_of_week)
                return days_short if interval == 1 else f"{interval}W {days_short}"
            return "WEEKLY" if interval == 1 else f"{interval}W"
        case RecurrenceType.MONTHLY:
            return "MONTHLY" if interval == 1 else f"{interval}MO"
        case _:
            return "?"
