"""Workflow layer between the CLI and the store.

Each function loads the list, applies pure core logic, saves, and
returns what changed.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime

from .core.legacy import LegacyTag, UnknownTag, classify, normalize_pattern
from .core.pattern import RecurrencePattern, is_recurrence_active
from .core.tasks import Todo, build_next_instance, generate_id
from .errors import TodoNotFoundError
from .ports.todo_store import TodoStore

logger = logging.getLogger(__name__)


@dataclass
class CompletionResult:
    """Outcome of completing a todo."""

    archived: Todo
    next_instance: Todo | None = None


@dataclass
class MigrationReport:
    """
    Counts of recurrence patterns seen while migrating a store.

    `migrated` counts only patterns whose stored form was rewritten.
    """

    total: int = 0
    migrated: int = 0
    dropped: list[str] = field(default_factory=list)
    unknown: list[str] = field(default_factory=list)
    tags: Counter = field(default_factory=Counter)


def find_todo(todos: list[Todo], todo_id: str) -> Todo:
    for todo in todos:
        if todo.id == todo_id:
            return todo
    raise TodoNotFoundError(todo_id)


def add_todo(
    store: TodoStore,
    text: str,
    list_id: str | None = None,
    due_date: datetime | None = None,
    recurrence: RecurrencePattern | None = None,
    priority: str | None = None,
) -> Todo:
    """Create a todo at the top of the list."""
    todos = store.load()
    todo = Todo(
        id=generate_id(),
        text=text.strip(),
        list_id=list_id,
        priority=priority,
        due_date=due_date,
        recurrence=recurrence,
        is_recurring=is_recurrence_active(recurrence),
    )
    store.save([todo, *todos])
    logger.info(f"Added todo {todo.id}")
    return todo


def complete_todo(store: TodoStore, todo_id: str, now: datetime | None = None) -> CompletionResult:
    """
    Complete and archive a todo, scheduling its next instance if it recurs.

    An already-completed todo is left as it was and spawns nothing.
    """
    now = now or datetime.now()
    todos = store.load()
    todo = find_todo(todos, todo_id)

    if todo.completed:
        logger.info(f"Todo {todo_id} is already completed")
        return CompletionResult(archived=todo)

    next_instance = None
    if todo.is_recurrence_active:
        existing_ids = {t.id for t in todos}
        next_instance = build_next_instance(todo, now=now)
        while next_instance is not None and next_instance.id in existing_ids:
            next_instance.id = generate_id()

    todo.completed = True
    todo.archived_at = now

    if next_instance is not None:
        todos = [next_instance, *todos]
        logger.info(
            f"Scheduled instance {next_instance.recurrence_count} of chain {next_instance.chain_id} "
            f"for {next_instance.due_date.date()}"
        )
    elif todo.is_recurrence_active:
        logger.info(f"Recurrence of {todo.chain_id} has ended")

    store.save(todos)
    return CompletionResult(archived=todo, next_instance=next_instance)


def migrate_store(store: TodoStore) -> MigrationReport:
    """Rewrite every stored record with a canonical recurrence pattern."""
    report = MigrationReport()
    records = store.load_raw()
    report.total = len(records)

    for record in records:
        raw = record.get("recurrence")
        variant = classify(raw)
        if variant is None:
            continue
        match variant:
            case LegacyTag.YEARLY:
                report.dropped.append(str(record["id"]))
            case UnknownTag(tag=tag):
                report.unknown.append(str(record["id"]))
                report.tags[tag] += 1
                continue
            case LegacyTag():
                if normalize_pattern(raw).to_dict() != raw:
                    report.migrated += 1
        report.tags[variant.value] += 1

    store.save([Todo.from_dict(record) for record in records])
    logger.info(
        f"Migrated {report.migrated} patterns, dropped {len(report.dropped)}, "
        f"passed through {len(report.unknown)}"
    )
    return report
