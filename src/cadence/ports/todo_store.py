"""Todo storage interface."""

from typing import Protocol

from cadence.core.tasks import Todo


class TodoStore(Protocol):
    """Interface for persisting the to-do list."""

    def load(self) -> list[Todo]:
        """Load all todos, migrating legacy records."""
        ...

    def load_raw(self) -> list[dict]:
        """Load stored records without interpretation."""
        ...

    def save(self, todos: list[Todo]) -> None:
        """Replace the stored list."""
        ...
