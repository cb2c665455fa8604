# main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.endpoints import health
from app.api.endpoints.web import tasks
from app.core.config import Settings, settings as default_settings
from app.core.errors import TaskError, task_error_handler
from app.core.logging_setup import setup_logging
from app.db.store import build_task_store

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    setup_logging(settings.LOG_LEVEL)

    # Store lifecycle: opened before traffic is accepted, closed on shutdown
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = build_task_store(settings)
        await store.connect()
        app.state.task_store = store
        logger.info("Task API started in %s mode", settings.ENVIRONMENT)
        yield
        await store.close()

    app = FastAPI(title="Recurring Tasks Backend", lifespan=lifespan)
    app.state.settings = settings

    # --- Middleware ---

    # CORS: browser clients. Credentials cannot be combined with a "*" origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials="*" not in settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # {"message": ...} bodies for 404 / 500
    app.add_exception_handler(TaskError, task_error_handler)

    @app.get("/")
    async def read_root():
        return {"message": "Server running successfully"}

    app.include_router(health.router)
    app.include_router(tasks.router, prefix=f"{settings.API_PREFIX}/tasks", tags=["tasks"])

    return app


app = create_app()
