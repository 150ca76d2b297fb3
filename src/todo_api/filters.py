"""
Pure predicates over stored todos.

These never touch storage or HTTP so they can be reused by the repository
and tested on plain dicts.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Iterable, List, Mapping

from .utils import try_parse_timestamp

TodoPredicate = Callable[[Mapping[str, Any]], bool]


# PUBLIC_INTERFACE
def is_completed(todo: Mapping[str, Any]) -> bool:
    """True when the todo is marked completed."""
    return todo.get("completed") is True


# PUBLIC_INTERFACE
def is_overdue(todo: Mapping[str, Any], now: datetime) -> bool:
    """
    True when the todo has a due timestamp strictly earlier than `now` and is
    not completed. Todos without a due value, or with one that cannot be
    parsed, are never overdue.
    """
    if is_completed(todo):
        return False
    due = try_parse_timestamp(todo.get("due"))
    if due is None:
        return False
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return due < now


def overdue_at(now: datetime) -> TodoPredicate:
    return lambda todo: is_overdue(todo, now)


# PUBLIC_INTERFACE
def select(todos: Iterable[Mapping[str, Any]], predicate: TodoPredicate) -> List[Any]:
    """Return the todos matching `predicate`, keeping their stored order."""
    return [t for t in todos if predicate(t)]
