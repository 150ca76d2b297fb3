from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status

from ..models import TodoEntity
from ..repositories import TodoRepository
from ..schemas import TodoCreate, TodoOut, TodoUpdate

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
)

# Records are returned as stored, so the models below only document the shape
_LIST_OK = {200: {"model": List[TodoOut], "description": "Todos in stored order"}}
_ITEM_OK = {200: {"model": TodoOut, "description": "The todo"}}
_NOT_FOUND = {404: {"description": "Todo not found"}}


def _get_repo(request: Request) -> TodoRepository:
    """
    Dependency returning the repository built for this application by create_app.
    """
    return request.app.state.repository


def _found(item: TodoEntity | None) -> TodoEntity:
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Todo not found")
    return item


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=None,
    responses=_LIST_OK,
    summary="List Todos",
    description="Return every todo in stored order. An empty store returns [].",
)
def list_todos(repo: TodoRepository = Depends(_get_repo)) -> List[TodoEntity]:
    return repo.list_all()


# PUBLIC_INTERFACE
@router.get(
    "/overdue",
    response_model=None,
    responses=_LIST_OK,
    summary="List Overdue Todos",
    description="Return todos whose due time has passed and which are not completed. Todos without a due time are never included.",
)
def list_overdue_todos(repo: TodoRepository = Depends(_get_repo)) -> List[TodoEntity]:
    return repo.list_overdue()


# PUBLIC_INTERFACE
@router.get(
    "/completed",
    response_model=None,
    responses=_LIST_OK,
    summary="List Completed Todos",
    description="Return todos marked as completed.",
)
def list_completed_todos(repo: TodoRepository = Depends(_get_repo)) -> List[TodoEntity]:
    return repo.list_completed()


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=None,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new Todo item and return the created resource.",
    responses={
        201: {"model": TodoOut, "description": "Todo created successfully"},
        400: {"description": "Validation error"},
    },
)
def create_todo(payload: TodoCreate, repo: TodoRepository = Depends(_get_repo)) -> TodoEntity:
    """
    Create a new Todo. The server mints the id, stamps `created` and sets
    `completed` to false.
    """
    return repo.create(payload)


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=None,
    summary="Get Todo",
    description="Get a single Todo item by ID.",
    responses={**_ITEM_OK, **_NOT_FOUND},
)
def get_todo(todo_id: str, repo: TodoRepository = Depends(_get_repo)) -> TodoEntity:
    return _found(repo.get(todo_id))


# PUBLIC_INTERFACE
@router.patch(
    "/{todo_id}",
    response_model=None,
    summary="Update Todo",
    description="Partially update `name` and/or `due` of a Todo item. Absent fields are left untouched.",
    responses={**_ITEM_OK, **_NOT_FOUND, 400: {"description": "Validation error"}},
)
def patch_todo(todo_id: str, payload: TodoUpdate, repo: TodoRepository = Depends(_get_repo)) -> TodoEntity:
    return _found(repo.update(todo_id, payload))


# PUBLIC_INTERFACE
@router.post(
    "/{todo_id}/complete",
    response_model=None,
    summary="Complete Todo",
    description="Mark a Todo item as completed. Completing an already completed todo is not an error.",
    responses={**_ITEM_OK, **_NOT_FOUND},
)
def complete_todo(todo_id: str, repo: TodoRepository = Depends(_get_repo)) -> TodoEntity:
    return _found(repo.set_completed(todo_id, True))


# PUBLIC_INTERFACE
@router.post(
    "/{todo_id}/undo",
    response_model=None,
    summary="Undo Todo",
    description="Mark a Todo item as not completed. Undoing an open todo is not an error.",
    responses={**_ITEM_OK, **_NOT_FOUND},
)
def undo_todo(todo_id: str, repo: TodoRepository = Depends(_get_repo)) -> TodoEntity:
    return _found(repo.set_completed(todo_id, False))


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    response_model=None,
    summary="Delete Todo",
    description="Delete a Todo item by ID and return the removed item.",
    responses={**_ITEM_OK, **_NOT_FOUND},
)
def delete_todo(todo_id: str, repo: TodoRepository = Depends(_get_repo)) -> TodoEntity:
    """
    Delete a Todo. Returns 200 with the removed todo, 404 if not found.
    """
    return _found(repo.delete(todo_id))
