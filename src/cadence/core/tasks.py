"""Pure task domain logic and recurring instance creation - no I/O dependencies."""

import uuid
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import datetime

from .legacy import DroppedCallback, normalize_pattern
from .occurrence import end_of_day, is_past_end, next_occurrence
from .pattern import RecurrencePattern, RecurrenceType, is_recurrence_active, parse_timestamp


def generate_id() -> str:
    """A new unique task identifier."""
    return uuid.uuid4().hex


def _as_list(value) -> list:
    return value if isinstance(value, list) else []


def format_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat(timespec="milliseconds")


@dataclass
class Subtask:
    """A checklist item inside a task."""

    id: str
    text: str
    completed: bool = False


@dataclass
class Reminder:
    """A reminder time; `notification_id` is set once it has been scheduled."""

    id: str
    date: datetime
    notification_id: str | None = None


@dataclass
class Todo:
    """A to-do item, optionally part of a recurring chain."""

    id: str
    text: str
    completed: bool = False
    list_id: str | None = None
    priority: str | None = None
    due_date: datetime | None = None
    recurrence: RecurrencePattern | None = None
    is_recurring: bool = False
    parent_recurrence_id: str | None = None
    recurrence_count: int = 0
    reminders: list[Reminder] = field(default_factory=list)
    color_variant: int | None = None
    archived_at: datetime | None = None
    subtasks: list[Subtask] = field(default_factory=list)

    @property
    def is_recurrence_active(self) -> bool:
        return is_recurrence_active(self.recurrence)

    @property
    def chain_id(self) -> str:
        """Identity of the task that started this recurring chain."""
        return self.parent_recurrence_id or self.id

    @classmethod
    def from_dict(cls, data: dict, on_dropped: DroppedCallback | None = None) -> "Todo":
        """Create a Todo from its stored record, migrating legacy recurrence patterns."""
        reminders = []
        for r in _as_list(data.get("reminders")):
            when = parse_timestamp(r.get("date")) if isinstance(r, dict) else None
            if when is None:
                continue
            reminders.append(Reminder(id=str(r.get("id", "")), date=when, notification_id=r.get("notificationId")))

        subtasks = [
            Subtask(id=str(s.get("id", "")), text=s.get("text", ""), completed=bool(s.get("completed")))
            for s in _as_list(data.get("subtasks"))
            if isinstance(s, dict)
        ]

        count = data.get("recurrenceCount")
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            count = 0
        return cls(
            id=str(data["id"]),
            text=data.get("text", ""),
            completed=bool(data.get("completed", False)),
            list_id=data.get("listId"),
            priority=data.get("priority"),
            due_date=parse_timestamp(data.get("dueDate")),
            recurrence=normalize_pattern(data.get("recurrence"), on_dropped),
            is_recurring=bool(data.get("isRecurring", False)),
            parent_recurrence_id=data.get("parentRecurrenceId"),
            recurrence_count=count,
            reminders=reminders,
            color_variant=data.get("colorVariant"),
            archived_at=parse_timestamp(data.get("archivedAt")),
            subtasks=subtasks,
        )

    def to_dict(self) -> dict:
        """Serialize to the camelCase storage record; unset optionals are omitted."""
        data = {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "listId": self.list_id,
            "priority": self.priority,
            "dueDate": format_timestamp(self.due_date),
            "recurrence": self.recurrence.to_dict() if self.recurrence else None,
            "isRecurring": self.is_recurring or None,
            "parentRecurrenceId": self.parent_recurrence_id,
            "recurrenceCount": self.recurrence_count or None,
            "colorVariant": self.color_variant,
            "archivedAt": format_timestamp(self.archived_at),
        }
        data = {k: v for k, v in data.items() if v is not None}
        if self.reminders:
            data["reminders"] = [
                {
                    k: v
                    for k, v in {
                        "id": r.id,
                        "date": format_timestamp(r.date),
                        "notificationId": r.notification_id,
                    }.items()
                    if v is not None
                }
                for r in self.reminders
            ]
        if self.subtasks:
            data["subtasks"] = [{"id": s.id, "text": s.text, "completed": s.completed} for s in self.subtasks]
        return data


def build_next_instance(
    completed: Todo,
    now: datetime | None = None,
    new_id: str | Callable[[], str] | None = None,
    color_variant: int | None = None,
) -> Todo | None:
    """
    Build the next task in a recurring chain after `completed` was finished.

    Returns None when there is no pattern, the pattern is 'once', or the
    recurrence has reached its end date. The anchor is the task's due date,
    or `now` when it has none. The new task is due at end of day, starts with
    no reminders, and points at the chain's original task.

    Pure function - does not persist, notify, or mutate `completed`.
    """
    pattern = completed.recurrence
    if pattern is None or pattern.type is RecurrenceType.ONCE:
        return None

    anchor = completed.due_date or now or datetime.now()
    next_date = next_occurrence(anchor, pattern)
    if next_date is None:
        return None

    next_due = end_of_day(next_date)
    if is_past_end(next_due, pattern.end_date):
        return None

    if callable(new_id):
        new_id = new_id()
    if not new_id or new_id == completed.id:
        new_id = generate_id()

    return Todo(
        id=new_id,
        text=completed.text,
        completed=False,
        list_id=completed.list_id,
        priority=completed.priority,
        due_date=next_due,
        recurrence=replace(pattern),
        is_recurring=True,
        parent_recurrence_id=completed.parent_recurrence_id or completed.id,
        recurrence_count=(completed.recurrence_count or 0) + 1,
        reminders=[],
        color_variant=completed.color_variant if color_variant is None else color_variant,
    )
