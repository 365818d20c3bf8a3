"""Exceptions raised by the I/O shell around the core."""


class CadenceError(Exception):
    """Base class for cadence errors."""


class StoreError(CadenceError):
    """The todo store could not be read or written."""


class TodoNotFoundError(CadenceError):
    """No todo with the requested id exists."""

    def __init__(self, todo_id: str):
        super().__init__(f"No todo with id {todo_id!r}")
        self.todo_id = todo_id
