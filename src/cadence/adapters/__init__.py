"""Adapters - I/O implementations of ports."""

from .json_store import JsonTodoStore

__all__ = [
    "JsonTodoStore",
]
