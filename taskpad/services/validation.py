"""Field-level validation for task drafts."""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel

from ..models.task import Priority
from ..utils.dates import is_valid_date

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000

TITLE_REQUIRED = "Title is required"
TITLE_TOO_LONG = f"Max {TITLE_MAX_LENGTH} characters"
DESCRIPTION_TOO_LONG = f"Max {DESCRIPTION_MAX_LENGTH} characters"
PRIORITY_INVALID = "Priority must be one of Low, Medium, High"
DUE_DATE_INVALID = "Due date invalid"

PRIORITY_VALUES = frozenset(p.value for p in Priority)

# wire name -> python attribute
_FIELDS = {
    "title": "title",
    "description": "description",
    "priority": "priority",
    "dueDate": "due_date",
}


class TaskValidationError(ValueError):
    """Raised when a create/update is rejected because the draft is invalid."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        details = "; ".join(f"{field}: {message}" for field, message in self.errors.items())
        super().__init__(f"Invalid task: {details}")


def _draft_values(draft: Any) -> Dict[str, Any]:
    if isinstance(draft, BaseModel):
        return {wire: getattr(draft, attr, None) for wire, attr in _FIELDS.items()}
    if isinstance(draft, Mapping):
        return {wire: draft.get(wire, draft.get(attr)) for wire, attr in _FIELDS.items()}
    raise TypeError(f"Cannot validate draft of type {type(draft).__name__}")


def validate_task(draft: Any) -> Dict[str, str]:
    """Validate a task draft.

    Every rule is checked independently, so all problems are reported at once.

    Args:
        draft: TaskDraft, Task, or a mapping keyed by camelCase or
            snake_case field names

    Returns:
        Mapping of field name to error message; empty when the draft is valid
    """
    values = _draft_values(draft)
    errors: Dict[str, str] = {}

    title = values["title"]
    if not isinstance(title, str) or not title.strip():
        errors["title"] = TITLE_REQUIRED
    elif len(title.strip()) > TITLE_MAX_LENGTH:
        errors["title"] = TITLE_TOO_LONG

    description = values["description"]
    if description and len(str(description)) > DESCRIPTION_MAX_LENGTH:
        errors["description"] = DESCRIPTION_TOO_LONG

    priority = values["priority"]
    if isinstance(priority, Enum):
        priority = priority.value
    if not isinstance(priority, str) or priority not in PRIORITY_VALUES:
        errors["priority"] = PRIORITY_INVALID

    due_date = values["dueDate"]
    if due_date and not is_valid_date(due_date):
        errors["dueDate"] = DUE_DATE_INVALID

    return errors
