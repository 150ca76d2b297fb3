from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .utils import parse_timestamp


def _clean_name(value: str) -> str:
    s = value.strip()
    if not s:
        raise ValueError("name must not be empty")
    return s


def _check_due(value: Optional[str]) -> Optional[str]:
    """
    Validate that due is an ISO8601 date or datetime string. The client's
    string is kept (trimmed) rather than reformatted.
    """
    if value is None:
        return None
    parse_timestamp(value)
    return value.strip()


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Schema for creating a new Todo item.
    Unknown fields are ignored; a body without `name` is rejected.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Turn on central heating",
                "due": "2021-12-30T14:48:00.000Z",
            }
        }
    )

    name: str = Field(..., description="Name of the todo item", min_length=1)
    due: Optional[str] = Field(
        default=None,
        description="Optional due date/time as an ISO8601 date or datetime string",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """
        Strip whitespace and reject blank names.
        """
        return _clean_name(v)

    @field_validator("due")
    @classmethod
    def validate_due(cls, v: Optional[str]) -> Optional[str]:
        return _check_due(v)


# PUBLIC_INTERFACE
class TodoUpdate(BaseModel):
    """
    Schema for partially updating an existing Todo item.
    Only fields present in the request body are applied; `due: null` clears
    the due date.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Buy 6 Cartons of Milk",
            }
        }
    )

    name: Optional[str] = Field(default=None, description="New name of the todo item", min_length=1)
    due: Optional[str] = Field(
        default=None,
        description="New due date/time as an ISO8601 date or datetime string, or null to clear it",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("name must not be null")
        return _clean_name(v)

    @field_validator("due")
    @classmethod
    def validate_due(cls, v: Optional[str]) -> Optional[str]:
        return _check_due(v)


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "19d539a11189-bb60-u663-8sd4-01507581",
                "name": "Buy 2 Cartons of Milk",
                "completed": True,
                "created": "2021-12-16T14:48:00.000Z",
                "due": "2021-12-23T14:48:00.000Z",
            }
        }
    )

    id: str = Field(..., description="Unique identifier of the todo item")
    name: str = Field(..., description="Name of the todo item")
    completed: bool = Field(default=False, description="Completion status flag")
    created: Optional[str] = Field(default=None, description="Creation timestamp (ISO8601, UTC)")
    due: Optional[str] = Field(default=None, description="Due date/time (ISO8601)")
