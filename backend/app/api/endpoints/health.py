# backend/app/api/endpoints/health.py

from fastapi import APIRouter, Depends

from app.api.deps import get_task_store
from app.core.errors import StorageUnavailable
from app.db.store import TaskStore

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(store: TaskStore = Depends(get_task_store)):
    """
    [Ops] health check
    - process is alive and the task store answers a ping
    - used by the load balancer / uptime monitoring
    """
    store_ok = False
    store_error = None

    try:
        store_ok = await store.ping()
    except StorageUnavailable as e:
        store_error = e.detail or e.message

    return {
        "status": "ok" if store_ok else "degraded",
        "store": store_ok,
        "store_error": store_error,
    }
