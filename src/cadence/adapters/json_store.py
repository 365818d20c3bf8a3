"""JSON file todo storage adapter."""

import json
import logging
from pathlib import Path

from cadence.core.legacy import DroppedCallback
from cadence.core.tasks import Todo
from cadence.errors import StoreError

logger = logging.getLogger(__name__)


class JsonTodoStore:
    """
    File-based todo storage.

    Implements TodoStore protocol. The whole list is one JSON array of
    camelCase records, newest first.
    """

    def __init__(self, path: Path | str, on_dropped: DroppedCallback | None = None):
        self.path = Path(path).expanduser()
        self.on_dropped = on_dropped

    def load_raw(self) -> list[dict]:
        """Read stored records. A missing file is an empty list."""
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            logger.error(f"Failed to load todos from {self.path}: {e}")
            raise StoreError(f"Failed to load todos from {self.path}: {e}") from e
        if not isinstance(data, list):
            raise StoreError(f"Expected a JSON array in {self.path}")
        return [item for item in data if isinstance(item, dict) and "id" in item]

    def load(self) -> list[Todo]:
        """Load todos, normalizing legacy recurrence patterns."""
        return [Todo.from_dict(item, self.on_dropped) for item in self.load_raw()]

    def save(self, todos: list[Todo]) -> None:
        self.save_raw([t.to_dict() for t in todos])

    def save_raw(self, records: list[dict]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(records, indent=2))
        except OSError as e:
            logger.error(f"Failed to save todos to {self.path}: {e}")
            raise StoreError(f"Failed to save todos to {self.path}: {e}") from e
        logger.debug(f"Saved {len(records)} todos to {self.path}")
