# backend/app/core/errors.py

import logging
from contextlib import contextmanager
from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class TaskError(Exception):
    """
    Base error for the task API.
    `message` goes to the client, `detail` only to the log.
    """
    status_code = 500
    message = "Server error"

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None):
        if message is not None:
            self.message = message
        self.detail = detail
        super().__init__(self.message)


class TaskNotFound(TaskError):
    status_code = 404
    message = "Task not found"


class StorageUnavailable(TaskError):
    status_code = 500
    message = "Storage unavailable"


class ServerError(TaskError):
    status_code = 500


@contextmanager
def storage_errors(action: str):
    """
    Turn a store failure, or any other unexpected error on the request
    path, into the per-operation 500,
    e.g. storage_errors("fetching tasks") -> "Server error while fetching tasks".
    """
    message = f"Server error while {action}"
    try:
        yield
    except StorageUnavailable as exc:
        logger.error("Storage error while %s: %s", action, exc.detail or exc.message)
        raise StorageUnavailable(message, detail=exc.detail) from exc
    except TaskError:
        raise
    except Exception as exc:
        logger.exception("Unexpected error while %s", action)
        raise ServerError(message, detail=f"{type(exc).__name__}: {exc}") from exc


async def task_error_handler(request: Request, exc: TaskError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})
