"""Task management CRUD routes."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..deps import get_task_store
from ..models.task import FilterSpec, PriorityFilter, StatusFilter, TaskDraft
from ..schemas import TaskResponse, ValidationErrorResponse
from ..services.task_store import TaskStore
from ..services.validation import TaskValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])

_VALIDATION_RESPONSES = {
    status.HTTP_422_UNPROCESSABLE_ENTITY: {"model": ValidationErrorResponse},
}


def _not_found(task_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Task {task_id} not found"
    )


@router.get("/stats", response_model=dict)
@router.get("/stats/", response_model=dict, include_in_schema=False)
async def get_task_statistics(
    task_store: TaskStore = Depends(get_task_store)
) -> dict:
    """Get task statistics.

    Args:
        task_store: Task store instance

    Returns:
        Task statistics
    """
    try:
        logger.debug("Getting task statistics")
        return task_store.get_statistics()

    except Exception as e:
        logger.error(f"Error getting task statistics: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error while retrieving statistics"
        )


@router.get("/", response_model=List[TaskResponse])
async def list_tasks(
    status_filter: StatusFilter = Query(StatusFilter.ALL, alias="status"),
    priority_filter: PriorityFilter = Query(PriorityFilter.ALL, alias="priority"),
    q: str = Query("", description="Case-insensitive title search"),
    task_store: TaskStore = Depends(get_task_store)
) -> List[TaskResponse]:
    """List the visible tasks for a status/priority/search view.

    Args:
        status_filter: All, Pending or Completed
        priority_filter: All, Low, Medium or High
        q: Title search text
        task_store: Task store instance

    Returns:
        Task responses in display order
    """
    try:
        filter_spec = FilterSpec(status=status_filter, priority=priority_filter, query=q)
        tasks = task_store.list_visible(filter_spec)
        return [TaskResponse.from_task(task) for task in tasks]

    except Exception as e:
        logger.error(f"Error listing tasks: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error while listing tasks"
        )


@router.post(
    "/",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_VALIDATION_RESPONSES,
)
async def create_task(
    draft: TaskDraft,
    task_store: TaskStore = Depends(get_task_store)
) -> TaskResponse:
    """Create a new task.

    Raises:
        TaskValidationError: Rendered as 422 with per-field messages
        HTTPException: If task creation fails unexpectedly
    """
    try:
        logger.info(f"Creating new task: {draft.title!r}")
        task = task_store.create_task(draft)
        return TaskResponse.from_task(task)

    except TaskValidationError:
        raise
    except Exception as e:
        logger.error(f"Unexpected error creating task: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error during task creation"
        )


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    task_store: TaskStore = Depends(get_task_store)
) -> TaskResponse:
    """Get a specific task by ID."""
    task = task_store.get_task(task_id)
    if task is None:
        raise _not_found(task_id)
    return TaskResponse.from_task(task)


@router.patch("/{task_id}", response_model=TaskResponse, responses=_VALIDATION_RESPONSES)
@router.put("/{task_id}", response_model=TaskResponse, responses=_VALIDATION_RESPONSES)
async def update_task(
    task_id: str,
    draft: TaskDraft,
    task_store: TaskStore = Depends(get_task_store)
) -> TaskResponse:
    """Edit a task.

    Fields missing from the body keep their current values.

    Raises:
        HTTPException: If task not found or update fails
        TaskValidationError: Rendered as 422 with per-field messages
    """
    try:
        logger.info(f"Updating task: {task_id}")
        task = task_store.update_task(task_id, draft)
        if task is None:
            raise _not_found(task_id)
        return TaskResponse.from_task(task)

    except (HTTPException, TaskValidationError):
        raise
    except Exception as e:
        logger.error(f"Unexpected error updating task {task_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error during task update"
        )


@router.post("/{task_id}/toggle", response_model=TaskResponse)
async def toggle_task(
    task_id: str,
    task_store: TaskStore = Depends(get_task_store)
) -> TaskResponse:
    """Flip a task between pending and completed."""
    task = task_store.toggle_complete(task_id)
    if task is None:
        raise _not_found(task_id)
    return TaskResponse.from_task(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: str,
    task_store: TaskStore = Depends(get_task_store)
):
    """Delete a task.

    Raises:
        HTTPException: If task not found
    """
    logger.info(f"Deleting task: {task_id}")
    if not task_store.delete_task(task_id):
        raise _not_found(task_id)
