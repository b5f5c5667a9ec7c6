"""API request/response schemas for the task tracker."""

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .models.task import Priority, Task, Theme
from .utils.dates import format_due_date


class TaskResponse(BaseModel):
    """Schema for task API responses."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="Unique task identifier")
    title: str = Field(..., description="Task title")
    description: str = Field(..., description="Task description")
    priority: Priority = Field(..., description="Task priority")
    due_date: Optional[str] = Field(None, description="Due date as an ISO date string")
    due_label: str = Field(..., description="Human-readable due date")
    completed: bool = Field(..., description="Whether the task is done")
    created_at: datetime = Field(..., description="Task creation timestamp")
    updated_at: datetime = Field(..., description="Task last update timestamp")

    @classmethod
    def from_task(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            priority=task.priority,
            due_date=task.due_date,
            due_label=format_due_date(task.due_date),
            completed=task.completed,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


class ValidationErrorResponse(BaseModel):
    """Schema for rejected create/update requests."""
    error: str = Field(default="Validation error", description="Error summary")
    details: Dict[str, str] = Field(..., description="Field name to error message")
    status_code: int = Field(default=422, description="HTTP status code")


class ThemeUpdate(BaseModel):
    """Schema for setting the theme preference."""
    theme: Theme = Field(..., description="Theme to use")


class ThemeResponse(BaseModel):
    """Schema for theme preference responses."""
    theme: Theme = Field(..., description="Current theme")


class HealthResponse(BaseModel):
    """Schema for health check responses."""
    status: str = Field(default="healthy", description="Service health status")
    version: str = Field(default="1.0.0", description="Application version")
    storage: str = Field(..., description="Where state is persisted")
    task_count: int = Field(..., description="Number of tasks in the store")
