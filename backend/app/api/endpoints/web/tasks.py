# backend/app/api/endpoints/web/tasks.py
from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional, Union

from app.api.deps import get_current_user_id, get_task_store
from app.core.errors import TaskNotFound, storage_errors
from app.crud import tasks as task_crud
from app.db.store import TaskStore
from app.schemas.task import Message, TaskCreate, TaskRead, TaskUpdate

router = APIRouter(tags=["Tasks"])

# READ ALL
@router.get("", response_model=List[TaskRead])
async def read_tasks(
    recurring: Optional[str] = Query(default=None, description="daily | weekly | monthly | none | all"),
    user_id: str = Depends(get_current_user_id),
    store: TaskStore = Depends(get_task_store),
):
    with storage_errors("fetching tasks"):
        return await task_crud.get_tasks(store, user_id, recurring)

# CREATE
@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
async def create_task(
    task: TaskCreate,
    user_id: str = Depends(get_current_user_id),
    store: TaskStore = Depends(get_task_store),
):
    with storage_errors("creating task"):
        return await task_crud.create_task(store, user_id, task)

# READ ONE
@router.get("/{task_id}", response_model=TaskRead)
async def read_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    store: TaskStore = Depends(get_task_store),
):
    with storage_errors("fetching task"):
        task = await task_crud.get_task(store, user_id, task_id)
    if not task:
        raise TaskNotFound()
    return task

# UPDATE (plain patch or completion)
@router.put("/{task_id}", response_model=Union[TaskRead, Message])
@router.patch("/{task_id}", response_model=Union[TaskRead, Message])
async def update_task(
    task_id: str,
    task: TaskUpdate,
    user_id: str = Depends(get_current_user_id),
    store: TaskStore = Depends(get_task_store),
):
    with storage_errors("updating task"):
        result = await task_crud.update_task(store, user_id, task_id, task)
    if result is None:
        raise TaskNotFound()
    return result

# DELETE
@router.delete("/{task_id}", response_model=Message)
async def delete_task(
    task_id: str,
    user_id: str = Depends(get_current_user_id),
    store: TaskStore = Depends(get_task_store),
):
    with storage_errors("deleting task"):
        deleted = await task_crud.delete_task(store, user_id, task_id)
    if not deleted:
        raise TaskNotFound()
    return Message(message=task_crud.DELETED)
