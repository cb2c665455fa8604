# backend/app/schemas/task.py

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional

# --- Request schemas ---
class TaskCreate(BaseModel):
    """
    [Request] POST /api/tasks
    Body of a new task. The owner comes from the access token, so any
    `user` key the client sends is ignored.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    completed: bool = False
    due_date: Optional[str] = Field(default=None, alias="dueDate")
    recurring: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

class TaskUpdate(BaseModel):
    """
    [Request] PUT/PATCH /api/tasks/{task_id}
    Partial patch. Only the keys the client actually sent are applied;
    `completed: true` triggers the completion transition.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    completed: Optional[bool] = None
    due_date: Optional[str] = Field(default=None, alias="dueDate")
    recurring: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

# --- Response schemas ---
class TaskRead(BaseModel):
    """
    [Response] a stored task as returned to the client.
    `user` is the owner's id.
    """
    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    completed: bool = False
    due_date: Optional[str] = Field(default=None, alias="dueDate")
    recurring: Optional[str] = None
    user: str
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

class Message(BaseModel):
    """[Response] confirmation or error body."""
    message: str
