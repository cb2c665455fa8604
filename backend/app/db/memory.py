# backend/app/db/memory.py
import copy
import itertools
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from bson import ObjectId

from app.db.store import serialize_task, writable_fields
from app.models.task import ALL_RECURRENCES
from app.schemas.task import TaskRead

logger = logging.getLogger(__name__)


class InMemoryTaskStore:
    """
    Dict-backed store with the same document layout as MongoTaskStore.
    Used by the tests and for running the API without a MongoDB server.
    """

    def __init__(self):
        self.docs: Dict[str, Dict[str, Any]] = {}
        # creation order, breaks created_at ties
        self._seq = itertools.count()

    async def connect(self) -> None:
        logger.info("Using in-memory task store")

    async def close(self) -> None:
        self.docs.clear()

    async def ping(self) -> bool:
        return True

    def reset(self) -> None:
        self.docs.clear()

    def _find(self, task_id: str, owner: Optional[str]) -> Optional[Dict[str, Any]]:
        doc = self.docs.get(task_id)
        if doc is None:
            return None
        if owner is not None and doc["user_id"] != owner:
            return None
        return doc

    async def list(self, owner: str, recurring_filter: Optional[str] = None) -> List[TaskRead]:
        docs = [doc for doc in self.docs.values() if doc["user_id"] == owner]
        if recurring_filter and recurring_filter != ALL_RECURRENCES:
            docs = [doc for doc in docs if doc.get("recurring") == recurring_filter]
        docs.sort(key=lambda doc: (doc["created_at"], doc["_seq"]), reverse=True)
        return [serialize_task(doc) for doc in docs]

    async def create(self, fields: Mapping[str, Any], owner: str) -> TaskRead:
        now = datetime.now(timezone.utc)
        task_id = str(ObjectId())
        doc = {
            "completed": False,
            **copy.deepcopy(writable_fields(fields)),
            "_id": task_id,
            "_seq": next(self._seq),
            "user_id": owner,
            "created_at": now,
            "updated_at": now,
        }
        self.docs[task_id] = doc
        return serialize_task(doc)

    async def get_by_id(self, task_id: str, owner: Optional[str] = None) -> Optional[TaskRead]:
        doc = self._find(task_id, owner)
        return serialize_task(doc) if doc else None

    async def update_fields(
        self, task_id: str, fields: Mapping[str, Any], owner: Optional[str] = None
    ) -> Optional[TaskRead]:
        doc = self._find(task_id, owner)
        if doc is None:
            return None
        doc.update(copy.deepcopy(writable_fields(fields)))
        doc["updated_at"] = datetime.now(timezone.utc)
        return serialize_task(doc)

    async def delete_by_id(self, task_id: str, owner: Optional[str] = None) -> bool:
        if self._find(task_id, owner) is None:
            return False
        del self.docs[task_id]
        return True
