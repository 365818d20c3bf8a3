"""Functional core - pure recurrence logic with no I/O."""

from .pattern import RecurrencePattern, RecurrenceType, DAYS_OF_WEEK, is_recurrence_active
from .occurrence import next_occurrence, upcoming_occurrences, end_of_day
from .labels import long_label, short_label
from .legacy import LegacyTag, UnknownTag, classify, normalize_pattern
from .tasks import Todo, Subtask, Reminder, build_next_instance

__all__ = [
    # Pattern
    "RecurrencePattern",
    "RecurrenceType",
    "DAYS_OF_WEEK",
    "is_recurrence_active",
    # Occurrences
    "next_occurrence",
    "upcoming_occurrences",
    "end_of_day",
    # Labels
    "long_label",
    "short_label",
    # Legacy migration
    "LegacyTag",
    "UnknownTag",
    "classify",
    "normalize_pattern",
    # Tasks
    "Todo",
    "Subtask",
    "Reminder",
    "build_next_instance",
]
