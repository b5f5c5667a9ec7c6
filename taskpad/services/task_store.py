"""Task store: the authoritative in-memory collection and its mutations."""

import json
import logging
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Callable, Dict, Iterable, List, Optional
from uuid import uuid4

from pydantic import TypeAdapter, ValidationError

from ..models.task import FilterSpec, Priority, Task, TaskDraft, utc_now
from ..utils.dates import parse_date
from .storage import StorageAdapter
from .validation import TaskValidationError, validate_task
from .view_selector import select_visible_tasks

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
IdFactory = Callable[[], str]

DEFAULT_TASKS_KEY = "tasks"

_task_list_adapter = TypeAdapter(List[Task])


def demo_tasks() -> List[Task]:
    """Starter tasks shown on a fresh install."""
    return [
        Task(
            id="170000003-03",
            title="Prepare slides",
            description="For Monday's meeting.",
            priority=Priority.MEDIUM,
            due_date="2025-11-15",
            completed=False,
            created_at="2025-11-09T12:00:00Z",
            updated_at="2025-11-09T13:00:00Z",
        ),
        Task(
            id="170000001-01",
            title="Submit React Assessment",
            description="Finish all sections and code.",
            priority=Priority.HIGH,
            due_date="2025-11-20",
            completed=False,
            created_at="2025-11-11T10:00:00Z",
            updated_at="2025-11-11T10:10:00Z",
        ),
        Task(
            id="170000002-02",
            title="Buy groceries",
            description="",
            priority=Priority.LOW,
            due_date="2025-11-11",
            completed=True,
            created_at="2025-11-10T08:00:00Z",
            updated_at="2025-11-10T09:00:00Z",
        ),
    ]


def serialize_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps(
        [task.model_dump(mode="json", by_alias=True) for task in tasks],
        ensure_ascii=False,
    )


_STORED_REQUIRED_KEYS = ("id", "createdAt", "updatedAt")


def deserialize_tasks(blob: str) -> List[Task]:
    """Parse a stored collection.

    Stored records must be complete committed tasks: ids and timestamps are
    never filled in, and every record must pass the same validation rules as
    a new task.

    Raises:
        ValueError: If the blob is not a JSON list of valid task records
    """
    data = json.loads(blob)
    if not isinstance(data, list):
        raise ValueError("stored tasks are not a list")
    for index, record in enumerate(data):
        if not isinstance(record, dict):
            raise ValueError(f"stored task {index} is not an object")
        missing = [key for key in _STORED_REQUIRED_KEYS if key not in record]
        if missing:
            raise ValueError(f"stored task {index} is missing {', '.join(missing)}")

    tasks = _task_list_adapter.validate_python(data)
    for task in tasks:
        errors = validate_task(task)
        if errors:
            raise ValueError(f"stored task {task.id} is invalid: {errors}")
        if task.updated_at < task.created_at:
            raise ValueError(f"stored task {task.id} was updated before it was created")
    return tasks


class TaskStore:
    """Owns the task collection, validates mutations and persists them.

    Mutations validate, stamp timestamps and commit in memory before the
    collection is written out. A failed write leaves the in-memory change in
    place.
    """

    def __init__(
        self,
        storage: StorageAdapter,
        *,
        clock: Optional[Clock] = None,
        id_factory: Optional[IdFactory] = None,
        default_tasks: Optional[Iterable[Task]] = None,
        tasks_key: str = DEFAULT_TASKS_KEY,
    ):
        """Initialize the task store and load the persisted collection.

        Args:
            storage: Storage adapter used for persistence
            clock: Returns the current time; defaults to UTC now
            id_factory: Returns a fresh task id; defaults to a UUID4 string
            default_tasks: Collection used when nothing usable is stored
            tasks_key: Storage key for the serialized collection
        """
        self._storage = storage
        self._clock: Clock = clock or utc_now
        self._id_factory: IdFactory = id_factory or (lambda: str(uuid4()))
        self._default_tasks = list(default_tasks or [])
        self._tasks_key = tasks_key
        self._tasks: List[Task] = []
        self._lock = Lock()

        self._tasks = self._load()
        logger.info(
            f"Task store ready with {len(self._tasks)} tasks (storage={storage.describe()})"
        )

    # ---- persistence ----

    def _defaults(self) -> List[Task]:
        return [task.model_copy(deep=True) for task in self._default_tasks]

    def _load(self) -> List[Task]:
        result = self._storage.load(self._tasks_key)
        if not result.ok:
            logger.warning(f"Could not load tasks, using defaults: {result.error}")
            return self._defaults()
        if not result.found:
            logger.info("No stored tasks found, using defaults")
            return self._defaults()

        try:
            tasks = deserialize_tasks(result.value)
        except (ValueError, ValidationError) as e:
            logger.warning(f"Stored tasks are malformed, using defaults: {str(e)}")
            return self._defaults()

        unique: List[Task] = []
        seen = set()
        for task in tasks:
            if task.id in seen:
                logger.warning(f"Dropping duplicate stored task {task.id}")
                continue
            seen.add(task.id)
            unique.append(task)
        return unique

    def _persist(self) -> bool:
        try:
            blob = serialize_tasks(self._tasks)
        except (TypeError, ValueError) as e:
            logger.warning(f"Could not serialize tasks: {str(e)}")
            return False
        saved = self._storage.save(self._tasks_key, blob)
        if not saved:
            logger.warning("Tasks were not persisted; continuing in memory only")
        return saved

    # ---- helpers ----

    def _now(self) -> datetime:
        now = self._clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return now

    def _stamp(self, task: Task) -> None:
        task.updated_at = max(self._now(), task.created_at)

    def _find(self, task_id: str) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def _new_id(self) -> str:
        existing = {task.id for task in self._tasks}
        task_id = self._id_factory()
        while task_id in existing:
            task_id = self._id_factory()
        return task_id

    @staticmethod
    def _coerce_draft(draft: Any) -> TaskDraft:
        if isinstance(draft, TaskDraft):
            return draft
        return TaskDraft.model_validate(draft)

    # ---- reads ----

    @property
    def tasks(self) -> List[Task]:
        """Current collection in insertion order (a copy of the list)."""
        with self._lock:
            return list(self._tasks)

    def get_task(self, task_id: str) -> Optional[Task]:
        with self._lock:
            task = self._find(task_id)
        if task is None:
            logger.debug(f"Task {task_id} not found")
        return task

    def list_visible(self, filter_spec: Optional[FilterSpec] = None) -> List[Task]:
        """Visible tasks for a view, computed from the latest committed state."""
        with self._lock:
            visible = select_visible_tasks(self._tasks, filter_spec)
        logger.debug(f"Listed {len(visible)} visible tasks (filter={filter_spec})")
        return visible

    def get_task_count(self, completed: Optional[bool] = None) -> int:
        with self._lock:
            if completed is None:
                return len(self._tasks)
            return sum(1 for task in self._tasks if task.completed == completed)

    def get_statistics(self) -> Dict[str, Any]:
        """Get task statistics.

        Returns:
            Dictionary with totals, per-priority counts, completion rate and
            the number of pending tasks whose due date has passed
        """
        today = self._now().date()
        with self._lock:
            total = len(self._tasks)
            completed = sum(1 for task in self._tasks if task.completed)
            by_priority = {priority.value: 0 for priority in Priority}
            overdue = 0
            for task in self._tasks:
                by_priority[task.priority.value] += 1
                due = parse_date(task.due_date)
                if not task.completed and due is not None and due.date() < today:
                    overdue += 1

        completion_rate = (completed / total * 100) if total > 0 else 0
        return {
            "total_tasks": total,
            "completed": completed,
            "pending": total - completed,
            "overdue": overdue,
            "priority_counts": by_priority,
            "completion_rate": round(completion_rate, 2),
        }

    # ---- mutations ----

    def create_task(self, draft: Any) -> Task:
        """Create a new task from a draft.

        Args:
            draft: TaskDraft or mapping with title, description, priority, dueDate

        Returns:
            Created task

        Raises:
            TaskValidationError: If the draft is invalid; nothing is stored
        """
        draft = self._coerce_draft(draft)
        errors = validate_task(draft)
        if errors:
            logger.info(f"Rejected new task: {errors}")
            raise TaskValidationError(errors)

        with self._lock:
            now = self._now()
            task = Task(
                id=self._new_id(),
                title=draft.title.strip(),
                description=(draft.description or "").strip(),
                priority=draft.priority,
                due_date=draft.due_date or None,
                completed=False,
                created_at=now,
                updated_at=now,
            )
            self._tasks.insert(0, task)
            self._persist()

        logger.info(f"Created task {task.id}: {task.title}")
        return task

    def update_task(self, task_id: str, draft: Any) -> Optional[Task]:
        """Edit a task.

        Fields the draft leaves unset keep their current value. The merged
        result is validated as a whole.

        Args:
            task_id: Task ID
            draft: TaskDraft or mapping with the fields to change

        Returns:
            Updated task if found, None otherwise

        Raises:
            TaskValidationError: If the merged draft is invalid; the task is unchanged
        """
        draft = self._coerce_draft(draft)
        with self._lock:
            task = self._find(task_id)
            if task is None:
                logger.warning(f"Task {task_id} not found for update")
                return None

            merged = TaskDraft(
                title=task.title,
                description=task.description,
                priority=task.priority,
                due_date=task.due_date,
                completed=task.completed,
            ).model_copy(update=draft.model_dump(exclude_unset=True))

            errors = validate_task(merged)
            if errors:
                logger.info(f"Rejected update of task {task_id}: {errors}")
                raise TaskValidationError(errors)

            task.title = merged.title.strip()
            task.description = (merged.description or "").strip()
            task.priority = Priority(merged.priority)
            task.due_date = merged.due_date or None
            if merged.completed is not None:
                task.completed = bool(merged.completed)
            self._stamp(task)
            self._persist()

        logger.info(f"Updated task {task_id}: {task.title}")
        return task

    def toggle_complete(self, task_id: str) -> Optional[Task]:
        """Flip a task between pending and completed.

        Returns:
            Updated task if found, None otherwise
        """
        with self._lock:
            task = self._find(task_id)
            if task is None:
                logger.warning(f"Task {task_id} not found for toggle")
                return None
            task.completed = not task.completed
            self._stamp(task)
            self._persist()

        logger.info(f"Toggled task {task_id}: completed={task.completed}")
        return task

    def delete_task(self, task_id: str) -> bool:
        """Delete a task.

        Returns:
            True if task was deleted, False if not found
        """
        with self._lock:
            task = self._find(task_id)
            if task is None:
                logger.warning(f"Task {task_id} not found for deletion")
                return False
            self._tasks.remove(task)
            self._persist()

        logger.info(f"Deleted task {task_id}: {task.title}")
        return True

    def clear_all_tasks(self) -> int:
        """Clear all tasks (for testing/development).

        Returns:
            Number of tasks that were cleared
        """
        with self._lock:
            count = len(self._tasks)
            self._tasks.clear()
            self._persist()
        logger.warning(f"Cleared all {count} tasks")
        return count
