# backend/app/crud/tasks.py
import logging
from datetime import date
from typing import List, Optional, Union

from app.core import lifecycle
from app.core.errors import StorageUnavailable
from app.db.store import TaskStore
from app.schemas.task import Message, TaskCreate, TaskRead, TaskUpdate

logger = logging.getLogger(__name__)

COMPLETED_AND_REMOVED = "Task completed and removed"
DELETED = "Task deleted"

# CREATE
async def create_task(store: TaskStore, user_id: str, task_data: TaskCreate) -> TaskRead:
    return await store.create(task_data.model_dump(exclude_none=True), owner=user_id)

# READ ALL
async def get_tasks(store: TaskStore, user_id: str, recurring: Optional[str] = None) -> List[TaskRead]:
    return await store.list(user_id, recurring)

# READ ONE
async def get_task(store: TaskStore, user_id: str, task_id: str) -> Optional[TaskRead]:
    return await store.get_by_id(task_id, owner=user_id)

# UPDATE
async def update_task(
    store: TaskStore,
    user_id: str,
    task_id: str,
    task_data: TaskUpdate,
    today: Optional[date] = None,
) -> Optional[Union[TaskRead, Message]]:
    """
    Plain patch, or the completion transition when the body sets
    `completed: true`. Returns None when the task is missing (or was
    removed by a concurrent request before this one got to it).

    Not transactional: the rollover deletes first and creates second. The
    create only runs if this request's delete removed the task, so two
    concurrent completions produce one next occurrence. If the create
    fails the completed task stays deleted.
    """
    existing = await store.get_by_id(task_id, owner=user_id)
    if existing is None:
        return None

    requested = task_data.model_dump(exclude_unset=True)
    # an explicit null would store a non-boolean `completed`
    if "completed" in requested and requested["completed"] is None:
        del requested["completed"]
    action = lifecycle.decide(existing, requested, today=today)

    if isinstance(action, lifecycle.PlainUpdate):
        if not action.fields:
            return existing
        return await store.update_fields(task_id, action.fields, owner=user_id)

    removed = await store.delete_by_id(existing.id, owner=user_id)
    if not removed:
        logger.info("Task %s disappeared before completion could remove it", existing.id)
        return None

    if isinstance(action, lifecycle.CompleteAndRemove):
        return Message(message=COMPLETED_AND_REMOVED)

    try:
        next_task = await store.create(action.new_fields, owner=existing.user)
    except StorageUnavailable:
        logger.error(
            "Task %s was completed and deleted but its next %s occurrence was not created",
            existing.id,
            existing.recurring,
        )
        raise
    logger.info(
        "Rolled over %s task %s -> %s (due %s)",
        existing.recurring,
        existing.id,
        next_task.id,
        next_task.due_date,
    )
    return next_task

# DELETE
async def delete_task(store: TaskStore, user_id: str, task_id: str) -> bool:
    return await store.delete_by_id(task_id, owner=user_id)
