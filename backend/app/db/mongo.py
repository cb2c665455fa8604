# backend/app/db/mongo.py
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from app.core.errors import StorageUnavailable
from app.db.store import serialize_task, writable_fields
from app.models.task import ALL_RECURRENCES
from app.schemas.task import TaskRead

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _safe_object_id(task_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(task_id)
    except (InvalidId, TypeError):
        return None


@contextmanager
def _driver_errors():
    try:
        yield
    except PyMongoError as exc:
        raise StorageUnavailable(detail=f"{type(exc).__name__}: {exc}") from exc


class MongoTaskStore:
    """
    Tasks in a MongoDB collection, one document per task:
    {_id, user_id, title, description, completed, due_date, recurring,
     created_at, updated_at}
    """

    def __init__(self, uri: str, db_name: str, collection_name: str = "tasks", timeout_ms: int = 5000):
        self.uri = uri
        self.db_name = db_name
        self.collection_name = collection_name
        self.timeout_ms = timeout_ms
        self.client: Optional[AsyncIOMotorClient] = None
        self.collection: Optional[AsyncIOMotorCollection] = None

    async def connect(self) -> None:
        self.client = AsyncIOMotorClient(
            self.uri,
            serverSelectionTimeoutMS=self.timeout_ms,
            tz_aware=True,
        )
        self.collection = self.client[self.db_name][self.collection_name]
        with _driver_errors():
            await self.collection.create_index([("user_id", 1), ("created_at", DESCENDING)])
        logger.info("MongoDB connected (db=%s, collection=%s)", self.db_name, self.collection_name)

    async def close(self) -> None:
        if self.client:
            self.client.close()
            self.client = None
            self.collection = None
            logger.info("MongoDB connection closed")

    def _tasks(self) -> AsyncIOMotorCollection:
        if self.collection is None:
            raise StorageUnavailable(detail="MongoDB store is not connected")
        return self.collection

    def _scoped_query(self, task_id: str, owner: Optional[str]) -> Optional[Dict[str, Any]]:
        oid = _safe_object_id(task_id)
        if oid is None:
            return None
        query: Dict[str, Any] = {"_id": oid}
        if owner is not None:
            query["user_id"] = owner
        return query

    async def ping(self) -> bool:
        if self.client is None:
            raise StorageUnavailable(detail="MongoDB store is not connected")
        with _driver_errors():
            await self.client.admin.command("ping")
        return True

    # READ ALL
    async def list(self, owner: str, recurring_filter: Optional[str] = None) -> List[TaskRead]:
        query: Dict[str, Any] = {"user_id": owner}
        if recurring_filter and recurring_filter != ALL_RECURRENCES:
            query["recurring"] = recurring_filter
        with _driver_errors():
            cursor = self._tasks().find(query).sort([("created_at", DESCENDING), ("_id", DESCENDING)])
            return [serialize_task(doc) async for doc in cursor]

    # CREATE
    async def create(self, fields: Mapping[str, Any], owner: str) -> TaskRead:
        now = _utcnow()
        new_task = {
            "completed": False,
            **writable_fields(fields),
            "user_id": owner,
            "created_at": now,
            "updated_at": now,
        }
        with _driver_errors():
            result = await self._tasks().insert_one(new_task)
            saved = await self._tasks().find_one({"_id": result.inserted_id})
        if saved is None:
            raise StorageUnavailable(detail=f"inserted task {result.inserted_id} could not be read back")
        return serialize_task(saved)

    # READ ONE
    async def get_by_id(self, task_id: str, owner: Optional[str] = None) -> Optional[TaskRead]:
        query = self._scoped_query(task_id, owner)
        if query is None:
            return None
        with _driver_errors():
            doc = await self._tasks().find_one(query)
        return serialize_task(doc) if doc else None

    # UPDATE
    async def update_fields(
        self, task_id: str, fields: Mapping[str, Any], owner: Optional[str] = None
    ) -> Optional[TaskRead]:
        query = self._scoped_query(task_id, owner)
        if query is None:
            return None
        update_fields = writable_fields(fields)
        update_fields["updated_at"] = _utcnow()
        with _driver_errors():
            updated = await self._tasks().find_one_and_update(
                query,
                {"$set": update_fields},
                return_document=ReturnDocument.AFTER,
            )
        return serialize_task(updated) if updated else None

    # DELETE
    async def delete_by_id(self, task_id: str, owner: Optional[str] = None) -> bool:
        query = self._scoped_query(task_id, owner)
        if query is None:
            return False
        with _driver_errors():
            result = await self._tasks().delete_one(query)
        return result.deleted_count == 1
