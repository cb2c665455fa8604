# backend/app/db/store.py
"""
Task store interface shared by the MongoDB and in-memory backends.
"""

from typing import Any, Dict, List, Mapping, Optional, Protocol

from app.core.config import Settings
from app.schemas.task import TaskRead

# Document keys a client may set; owner, id and timestamps are store-managed
MUTABLE_FIELDS = ("title", "description", "completed", "due_date", "recurring")


class TaskStore(Protocol):
    """
    Persistent task collection.

    `owner`, where accepted, restricts the lookup to that user's tasks.
    Backend failures raise StorageUnavailable.
    """

    async def connect(self) -> None:
        ...

    async def close(self) -> None:
        ...

    async def ping(self) -> bool:
        ...

    async def list(self, owner: str, recurring_filter: Optional[str] = None) -> List[TaskRead]:
        ...

    async def create(self, fields: Mapping[str, Any], owner: str) -> TaskRead:
        ...

    async def get_by_id(self, task_id: str, owner: Optional[str] = None) -> Optional[TaskRead]:
        ...

    async def update_fields(
        self, task_id: str, fields: Mapping[str, Any], owner: Optional[str] = None
    ) -> Optional[TaskRead]:
        ...

    async def delete_by_id(self, task_id: str, owner: Optional[str] = None) -> bool:
        ...


def writable_fields(fields: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in fields.items() if k in MUTABLE_FIELDS}


def serialize_task(doc: Mapping[str, Any]) -> TaskRead:
    return TaskRead(
        id=str(doc["_id"]),
        title=doc.get("title"),
        description=doc.get("description"),
        completed=bool(doc.get("completed", False)),
        due_date=doc.get("due_date"),
        recurring=doc.get("recurring"),
        user=str(doc["user_id"]),
        created_at=doc.get("created_at"),
        updated_at=doc.get("updated_at"),
    )


def build_task_store(settings: Settings) -> TaskStore:
    if settings.USE_IN_MEMORY_STORE:
        from app.db.memory import InMemoryTaskStore
        return InMemoryTaskStore()

    from app.db.mongo import MongoTaskStore
    return MongoTaskStore(
        uri=settings.MONGO_URI,
        db_name=settings.MONGO_DB_NAME,
        collection_name=settings.MONGO_TASKS_COLLECTION,
        timeout_ms=settings.MONGO_TIMEOUT_MS,
    )
