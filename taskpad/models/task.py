"""Domain models for the task tracker."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Priority(str, Enum):
    """Task priority enumeration."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class StatusFilter(str, Enum):
    """Completion status a view can be restricted to."""
    ALL = "All"
    PENDING = "Pending"
    COMPLETED = "Completed"


class PriorityFilter(str, Enum):
    """Priority a view can be restricted to."""
    ALL = "All"
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Theme(str, Enum):
    """Cosmetic theme preference."""
    LIGHT = "light"
    DARK = "dark"


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class _CamelModel(BaseModel):
    """Base model using camelCase on the wire and on disk."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Task(_CamelModel):
    """Task domain model."""

    id: str = Field(default_factory=lambda: str(uuid4()), description="Unique task identifier")
    title: str = Field(..., description="Task title")
    description: str = Field(default="", description="Task description")
    priority: Priority = Field(..., description="Task priority")
    due_date: Optional[str] = Field(default=None, description="Due date as an ISO date string")
    completed: bool = Field(default=False, description="Whether the task is done")
    created_at: datetime = Field(default_factory=utc_now, description="Task creation timestamp")
    updated_at: datetime = Field(default_factory=utc_now, description="Task last update timestamp")

    @field_validator("due_date", mode="before")
    @classmethod
    def _empty_due_date_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("description", mode="before")
    @classmethod
    def _none_description_is_empty(cls, value):
        return "" if value is None else value

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class TaskDraft(_CamelModel):
    """Unvalidated candidate for a new or edited task.

    Every field is optional and loosely typed so that the validation engine,
    not the model parser, decides what is wrong with it.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    priority: Any = None
    due_date: Optional[str] = None
    completed: Optional[bool] = None

    @field_validator("priority", mode="before")
    @classmethod
    def _enum_to_literal(cls, value):
        if isinstance(value, Enum):
            return value.value
        return value


class FilterSpec(BaseModel):
    """The (status, priority, query) triple describing a requested view."""

    model_config = ConfigDict(frozen=True)

    status: StatusFilter = StatusFilter.ALL
    priority: PriorityFilter = PriorityFilter.ALL
    query: str = ""
