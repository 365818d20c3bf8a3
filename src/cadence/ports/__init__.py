"""Ports - interfaces/protocols for external dependencies."""

from .todo_store import TodoStore

__all__ = [
    "TodoStore",
]
