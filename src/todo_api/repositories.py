from __future__ import annotations

import uuid
from datetime import datetime
from threading import RLock
from typing import Callable, List, Optional

import structlog

from .filters import is_completed, overdue_at, select
from .models import TodoEntity
from .schemas import TodoCreate, TodoUpdate
from .storage import Storage
from .utils import format_timestamp, utc_now

log = structlog.get_logger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


# PUBLIC_INTERFACE
class TodoRepository:
    """
    Todo operations on top of a Storage backend.

    Every call loads the full collection. Mutations locate the record,
    change it in memory and save the full collection back. A re-entrant lock
    serializes these sequences within the process; separate processes
    sharing one file still race and the last writer wins.
    """

    def __init__(
        self,
        storage: Storage,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self._storage = storage
        self._clock = clock or utc_now
        self._id_factory = id_factory or _new_id
        self._lock = RLock()

    @property
    def storage(self) -> Storage:
        return self._storage

    def _allocate_id(self, todos: List[TodoEntity]) -> str:
        taken = {t.get("id") for t in todos}
        while True:
            candidate = self._id_factory()
            if candidate not in taken:
                return candidate
            log.warning("todo id collision, minting another", id=candidate)

    @staticmethod
    def _index_of(todos: List[TodoEntity], todo_id: str) -> Optional[int]:
        for i, t in enumerate(todos):
            if t.get("id") == todo_id:
                return i
        return None

    def list_all(self) -> List[TodoEntity]:
        with self._lock:
            return self._storage.load()

    def list_overdue(self, now: Optional[datetime] = None) -> List[TodoEntity]:
        """Todos whose due time is before `now` (default: the clock) and not completed."""
        when = now or self._clock()
        return select(self.list_all(), overdue_at(when))

    def list_completed(self) -> List[TodoEntity]:
        return select(self.list_all(), is_completed)

    def get(self, todo_id: str) -> Optional[TodoEntity]:
        """Return the todo with `todo_id`, or None if not found."""
        todos = self.list_all()
        i = self._index_of(todos, todo_id)
        return None if i is None else todos[i]

    def create(self, data: TodoCreate) -> TodoEntity:
        with self._lock:
            todos = self._storage.load()
            entity: TodoEntity = {
                "id": self._allocate_id(todos),
                "name": data.name,
                "completed": False,
                "created": format_timestamp(self._clock()),
            }
            if data.due is not None:
                entity["due"] = data.due
            todos.append(entity)
            self._storage.save(todos)
        log.info("todo created", id=entity["id"])
        return entity

    def update(self, todo_id: str, data: TodoUpdate) -> Optional[TodoEntity]:
        """
        Apply the fields present in `data` to the todo. Returns the updated
        todo, or None if not found (nothing is saved then).
        """
        with self._lock:
            todos = self._storage.load()
            i = self._index_of(todos, todo_id)
            if i is None:
                return None

            updated = todos[i]
            fields = data.model_fields_set
            if "name" in fields and data.name is not None:
                updated["name"] = data.name
            if "due" in fields:
                # Respect explicit nulling of due
                if data.due is None:
                    updated.pop("due", None)
                else:
                    updated["due"] = data.due

            self._storage.save(todos)
        log.info("todo updated", id=todo_id, fields=sorted(fields))
        return updated

    def set_completed(self, todo_id: str, completed: bool) -> Optional[TodoEntity]:
        """
        Mark the todo completed or not completed. Repeating the call is not
        an error. Returns the todo, or None if not found.
        """
        with self._lock:
            todos = self._storage.load()
            i = self._index_of(todos, todo_id)
            if i is None:
                return None
            todos[i]["completed"] = completed
            self._storage.save(todos)
        log.info("todo completed" if completed else "todo undone", id=todo_id)
        return todos[i]

    def delete(self, todo_id: str) -> Optional[TodoEntity]:
        """Remove the todo with `todo_id`. Returns the removed todo, or None if not found."""
        with self._lock:
            todos = self._storage.load()
            i = self._index_of(todos, todo_id)
            if i is None:
                return None
            removed = todos.pop(i)
            self._storage.save(todos)
        log.info("todo deleted", id=todo_id)
        return removed
