"""Filtering and ordering of the visible task list."""

from functools import cmp_to_key
from typing import Any, Iterable, List, Optional

from ..models.task import FilterSpec, PriorityFilter, StatusFilter, Task
from ..utils.dates import to_timestamp


def _enum_value(value: Any) -> Any:
    return getattr(value, "value", value)


def _matches_status(task: Task, status: StatusFilter) -> bool:
    if status == StatusFilter.PENDING:
        return not task.completed
    if status == StatusFilter.COMPLETED:
        return bool(task.completed)
    return True


def _matches_priority(task: Task, priority: PriorityFilter) -> bool:
    if priority == PriorityFilter.ALL:
        return True
    return _enum_value(task.priority) == _enum_value(priority)


def _matches_query(task: Task, query: str) -> bool:
    if not query:
        return True
    return query in (task.title or "").lower()


def _compare_timestamps(a: Optional[float], b: Optional[float]) -> int:
    """Ascending comparison; a missing side means no decision."""
    if a is None or b is None or a == b:
        return 0
    return -1 if a < b else 1


def compare_tasks(a: Task, b: Task) -> int:
    """Three-level ordering used for the visible list.

    1. incomplete before completed
    2. due date ascending, tasks with a due date before tasks without
    3. creation time descending

    Unparseable dates never raise; they just leave that level undecided.
    """
    if bool(a.completed) != bool(b.completed):
        return 1 if a.completed else -1

    a_has_due = bool(a.due_date)
    b_has_due = bool(b.due_date)
    if a_has_due and b_has_due:
        result = _compare_timestamps(to_timestamp(a.due_date), to_timestamp(b.due_date))
        if result:
            return result
    elif a_has_due != b_has_due:
        return -1 if a_has_due else 1

    return -_compare_timestamps(to_timestamp(a.created_at), to_timestamp(b.created_at))


def select_visible_tasks(
    tasks: Iterable[Task],
    filter_spec: Optional[FilterSpec] = None,
) -> List[Task]:
    """Return the filtered, ordered tasks for a view.

    Pure: the input collection is left untouched and a new list is returned.

    Args:
        tasks: Full task collection
        filter_spec: Requested status/priority/query; None shows everything

    Returns:
        Visible tasks in display order
    """
    spec = filter_spec or FilterSpec()
    query = (spec.query or "").strip().lower()

    visible = [
        task for task in tasks
        if _matches_status(task, spec.status)
        and _matches_priority(task, spec.priority)
        and _matches_query(task, query)
    ]

    # sorted() is stable, so full ties keep their input order
    return sorted(visible, key=cmp_to_key(compare_tasks))
