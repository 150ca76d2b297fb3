from __future__ import annotations

from typing import TypedDict


class _TodoRequired(TypedDict):
    id: str
    name: str
    completed: bool
    created: str


# PUBLIC_INTERFACE
class TodoEntity(_TodoRequired, total=False):
    """
    A Todo item exactly as it is stored in the JSON file.

    Fields:
    - id: Opaque unique string token, minted by the server
    - name: Non-empty name of the todo
    - completed: Boolean completion flag
    - created: ISO8601 UTC creation timestamp, e.g. '2021-12-30T14:48:00.000Z'
    - due: Optional ISO8601 due date or datetime supplied by the client

    Records loaded from disk may carry additional keys; they are kept as-is
    so the collection round-trips verbatim.
    """

    due: str
