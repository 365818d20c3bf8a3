"""Cadence CLI - recurring to-do list."""

import json
import logging
import sys
from datetime import date

import click

from .adapters.json_store import JsonTodoStore
from .config import load_config
from .core.labels import long_label, short_label
from .core.occurrence import end_of_day, upcoming_occurrences
from .core.pattern import RecurrencePattern, RecurrenceType
from .errors import CadenceError
from .workflows import add_todo, complete_todo, migrate_store


def _parse_days(ctx, param, value: str | None) -> tuple[int, ...]:
    """Parse "1,3,5" into weekday numbers (0 = Sunday)."""
    if not value:
        return ()
    try:
        days = tuple(int(d.strip()) for d in value.split(",") if d.strip())
    except ValueError:
        raise click.BadParameter("expected comma-separated weekday numbers, e.g. 1,3,5")
    if any(d < 0 or d > 6 for d in days):
        raise click.BadParameter("weekdays must be between 0 (Sunday) and 6 (Saturday)")
    return days


def _parse_date(ctx, param, value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"{value!r} is not a YYYY-MM-DD date")


def pattern_options(f):
    """Options describing a recurrence pattern."""
    f = click.option("--until", "end_date", default=None, callback=_parse_date, help="Last allowed date (YYYY-MM-DD)")(f)
    f = click.option("--days", default=None, callback=_parse_days, help="Weekdays for weekly repeats, 0=Sunday (e.g. 1,3,5)")(f)
    f = click.option("--interval", "-n", default=1, type=click.IntRange(min=1), help="Repeat every N units")(f)
    f = click.option(
        "--repeat",
        "repeat",
        default=None,
        type=click.Choice([t.value for t in RecurrenceType]),
        help="Recurrence type",
    )(f)
    return f


def _build_pattern(repeat: str | None, interval: int, days: tuple[int, ...], end_date: date | None):
    if repeat is None:
        return None
    return RecurrencePattern(type=repeat, interval=interval, days_of_week=days, end_date=end_date)


def _store(ctx) -> JsonTodoStore:
    return JsonTodoStore(ctx.obj["config"].todos_path)


def _fail(e: Exception) -> None:
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(package_name="cadence-todo")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx, debug: bool):
    """Cadence - recurring to-do list."""
    config = load_config()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if debug else config.log_level,
    )
    ctx.ensure_object(dict)
    ctx.obj["config"] = config


@main.command("next")
@pattern_options
@click.option("--from", "anchor", default=None, callback=_parse_date, help="Anchor date (YYYY-MM-DD), defaults to today")
@click.option("--count", "-c", default=1, type=click.IntRange(min=1), help="Number of occurrences to show")
def next_cmd(repeat, interval, days, end_date, anchor, count):
    """Show the next occurrence(s) of a pattern."""
    pattern = _build_pattern(repeat or "daily", interval, days, end_date)
    dates = upcoming_occurrences(anchor or date.today(), pattern, count)
    if not dates:
        click.echo("Recurrence has ended.")
        return
    for d in dates:
        click.echo(d.isoformat())


@main.command()
@pattern_options
def label(repeat, interval, days, end_date):
    """Show the long and short labels of a pattern."""
    pattern = _build_pattern(repeat or "once", interval, days, end_date)
    click.echo(long_label(pattern))
    click.echo(short_label(pattern))


@main.command()
@click.argument("text")
@click.option("--due", default=None, callback=_parse_date, help="Due date (YYYY-MM-DD)")
@click.option("--list", "list_id", default=None, help="List id (defaults to DEFAULT_LIST_ID)")
@click.option("--priority", default=None, type=click.Choice(["none", "low", "medium", "high"]))
@pattern_options
@click.pass_context
def add(ctx, text, due, list_id, priority, repeat, interval, days, end_date):
    """Add a todo."""
    if not text.strip():
        raise click.BadParameter("todo text cannot be empty", param_hint="TEXT")
    config = ctx.obj["config"]
    pattern = _build_pattern(repeat, interval, days, end_date)
    due_date = end_of_day(due) if due else None
    try:
        todo = add_todo(
            _store(ctx),
            text,
            list_id=list_id or config.default_list_id,
            due_date=due_date,
            recurrence=pattern,
            priority=priority,
        )
    except CadenceError as e:
        _fail(e)
    click.echo(f"Added {todo.id}")


@main.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--all", "show_all", is_flag=True, help="Include completed todos")
@click.pass_context
def list_cmd(ctx, as_json: bool, show_all: bool):
    """List todos."""
    config = ctx.obj["config"]
    try:
        todos = _store(ctx).load()
    except CadenceError as e:
        _fail(e)

    if not show_all:
        todos = [t for t in todos if not t.completed]

    if as_json:
        click.echo(json.dumps([t.to_dict() for t in todos], indent=2))
        return

    if not todos:
        click.echo("Nothing to do.")
        return

    for todo in todos:
        mark = "x" if todo.completed else " "
        due = f" (due {todo.due_date.strftime(config.date_format)})" if todo.due_date else ""
        badge = f" [{short_label(todo.recurrence)}]" if todo.is_recurrence_active else ""
        click.echo(f"[{mark}] {todo.id[:8]} {todo.text}{due}{badge}")


@main.command()
@click.argument("todo_id")
@click.pass_context
def done(ctx, todo_id: str):
    """Complete a todo, scheduling the next one if it repeats."""
    config = ctx.obj["config"]
    store = _store(ctx)
    try:
        todos = store.load()
        matches = [t.id for t in todos if t.id.startswith(todo_id)]
        if len(matches) > 1:
            _fail(CadenceError(f"Id prefix {todo_id!r} is ambiguous"))
        result = complete_todo(store, matches[0] if matches else todo_id)
    except CadenceError as e:
        _fail(e)

    click.echo(f"Completed: {result.archived.text}")
    nxt = result.next_instance
    if nxt is not None:
        click.echo(f"Next \"{nxt.text}\" scheduled for {nxt.due_date.strftime(config.date_format)}")


@main.command()
@click.pass_context
def migrate(ctx):
    """Upgrade stored recurrence patterns to the current format."""
    try:
        report = migrate_store(_store(ctx))
    except CadenceError as e:
        _fail(e)

    click.echo(f"Checked {report.total} todos, migrated {report.migrated} patterns.")
    if report.dropped:
        click.echo(f"Dropped yearly patterns (no longer supported): {', '.join(report.dropped)}", err=True)
    if report.unknown:
        click.echo(f"Unrecognized patterns kept as-is: {', '.join(report.unknown)}", err=True)


if __name__ == "__main__":
    main()
