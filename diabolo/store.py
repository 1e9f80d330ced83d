"""Key-value persistence for saved competitors and final-ranking assignments.

The scoring code never performs I/O itself; the session or script that owns
the state loads the current lists and saves them back explicitly.
"""

import json
import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, TypeVar

from diabolo.models import SavedCompetitor
from diabolo.ranking.final import JudgeAssignment

logger = logging.getLogger(__name__)

T = TypeVar("T")

COMPETITORS_KEY = "diabolo-saved-competitors"
ASSIGNMENTS_KEY = "diabolo-final-rankings-assignments"

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class StoreError(Exception):
    """Error reading from or writing to a store."""
    pass


class KeyValueStore(ABC):
    """Abstract base class for JSON-compatible key-value stores."""

    @abstractmethod
    def load(self, key: str) -> Any | None:
        """Return the value saved under key, or None if nothing is saved.

        Raises:
            StoreError: If the saved value cannot be decoded
        """
        pass

    @abstractmethod
    def save(self, key: str, value: Any) -> None:
        """Overwrite the value saved under key."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove the value saved under key, if any."""
        pass


class MemoryStore(KeyValueStore):
    """Store that keeps JSON-encoded values in memory."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def load(self, key: str) -> Any | None:
        raw = self._data.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise StoreError(f"Corrupt value for {key!r}: {e}") from e

    def save(self, key: str, value: Any) -> None:
        self._data[key] = json.dumps(value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """Store that keeps one JSON document per key in a directory."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise StoreError(f"Invalid store key: {key!r}")
        return self.directory / f"{key}.json"

    def load(self, key: str) -> Any | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise StoreError(f"Corrupt value for {key!r} in {path}: {e}") from e

    def save(self, key: str, value: Any) -> None:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(json.dumps(value, indent=2), encoding="utf-8")
        tmp_path.replace(path)
        logger.debug("Saved %s", path)

    def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class CompetitorRepository:
    """Loads and saves the ordered lists of competitors and judge assignments."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def _load_list(self, key: str) -> list[dict[str, Any]]:
        try:
            data = self.store.load(key)
        except StoreError as e:
            logger.warning("Discarding unreadable saved data: %s", e)
            self.store.remove(key)
            return []
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning("Discarding saved data for %r: expected a list", key)
            self.store.remove(key)
            return []
        return data

    def _load_records(self, key: str, from_dict: Callable[[dict[str, Any]], T]) -> list[T]:
        try:
            return [from_dict(item) for item in self._load_list(key)]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.warning("Discarding saved data for %r: invalid record: %s", key, e)
            self.store.remove(key)
            return []

    def load_competitors(self) -> list[SavedCompetitor]:
        return self._load_records(COMPETITORS_KEY, SavedCompetitor.from_dict)

    def save_competitors(self, competitors: list[SavedCompetitor]) -> None:
        self.store.save(COMPETITORS_KEY, [c.to_dict() for c in competitors])
        logger.info("Saved %d competitors", len(competitors))

    def load_assignments(self) -> list[JudgeAssignment]:
        return self._load_records(ASSIGNMENTS_KEY, JudgeAssignment.from_dict)

    def save_assignments(self, assignments: list[JudgeAssignment]) -> None:
        self.store.save(ASSIGNMENTS_KEY, [a.to_dict() for a in assignments])
        logger.info("Saved %d final ranking entries", len(assignments))

    def clear_assignments(self) -> None:
        self.store.remove(ASSIGNMENTS_KEY)
