from __future__ import annotations

import copy
import json
import os
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from .models import TodoEntity
from .settings import Settings, get_settings


class StorageError(Exception):
    """Base class for failures of the todo storage backend."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class ReadError(StorageError):
    """The store is missing or could not be read."""


class ParseError(StorageError):
    """The store content is not a JSON array of objects."""


class WriteError(StorageError):
    """The store could not be written."""


# PUBLIC_INTERFACE
class Storage(ABC):
    """Abstract contract for loading and saving the whole todo collection."""

    @abstractmethod
    def load(self) -> List[TodoEntity]:
        """Return the full collection in stored order."""

    @abstractmethod
    def save(self, todos: Iterable[TodoEntity]) -> None:
        """Replace the stored collection with `todos`."""

    @abstractmethod
    def describe(self) -> str:
        """Short label naming the backend, used by the health check."""


class JsonFileStorage(Storage):
    """
    Stores the collection as one pretty-printed JSON array in a file.

    The file is read on every load and rewritten in full on every save.
    There is no partial-write protection: a crash mid-write can leave the
    file truncated.
    """

    def __init__(self, path: str) -> None:
        self._path = path

    @property
    def path(self) -> str:
        return self._path

    def describe(self) -> str:
        return "file"

    def load(self) -> List[TodoEntity]:
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                raw = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ReadError(f"Cannot read todo store: {e}", path=self._path) from e

        try:
            data = json.loads(raw)
        except ValueError as e:
            raise ParseError(f"Todo store is not valid JSON: {e}", path=self._path) from e

        if not isinstance(data, list):
            raise ParseError(
                f"Todo store must contain a JSON array, got {type(data).__name__}",
                path=self._path,
            )
        for index, item in enumerate(data):
            if not isinstance(item, dict):
                raise ParseError(
                    f"Todo store entry {index} is not an object",
                    path=self._path,
                )
        return data

    def save(self, todos: Iterable[TodoEntity]) -> None:
        content = json.dumps(list(todos), indent=2, ensure_ascii=False) + "\n"
        try:
            os.makedirs(os.path.dirname(self._path) or ".", exist_ok=True)
            with open(self._path, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            raise WriteError(f"Cannot write todo store: {e}", path=self._path) from e

    def ensure_exists(self) -> bool:
        """
        Write an empty collection if the file does not exist yet.

        Returns:
            True if the file was created, False if it was already there.
        """
        if os.path.exists(self._path):
            return False
        self.save([])
        return True


class InMemoryStorage(Storage):
    """
    Storage kept in process memory, suitable for testing and throwaway runs.
    Loads and saves copy the data so callers never share state with the store.
    """

    def __init__(self, initial: Optional[Iterable[TodoEntity]] = None) -> None:
        self._items: List[TodoEntity] = copy.deepcopy(list(initial or []))

    def describe(self) -> str:
        return "memory"

    def load(self) -> List[TodoEntity]:
        return copy.deepcopy(self._items)

    def save(self, todos: Iterable[TodoEntity]) -> None:
        self._items = copy.deepcopy(list(todos))


# PUBLIC_INTERFACE
def build_storage(settings: Optional[Settings] = None) -> Storage:
    """
    Factory to return the configured storage based on settings.
    - file: JsonFileStorage at settings.json_path
    - memory: InMemoryStorage starting empty
    """
    settings = settings or get_settings()
    if settings.persistence_backend == "memory":
        return InMemoryStorage()
    return JsonFileStorage(settings.json_path)
