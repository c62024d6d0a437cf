"""tasktrack API — FastAPI application entry point and composition root.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TaskTrackError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Stores and services built once per app in the lifespan and kept on app.state;
      services injected beforehand (tests) are left in place

Design Decisions:
    - create_app() factory plus module-level app: uvicorn uses `tasktrack.main:app`,
      tests build isolated apps with their own settings
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tasktrack.api.error_handlers import register_error_handlers
from tasktrack.api.request_logging import register_request_logging
from tasktrack.api.routes import health, tasks, users
from tasktrack.config import Settings, get_settings
from tasktrack.infrastructure.observability import setup_logging
from tasktrack.infrastructure.task_store import InMemoryTaskStore
from tasktrack.infrastructure.user_store import InMemoryUserStore
from tasktrack.services.seed_data import seed_sample_data
from tasktrack.services.task_service import TaskService
from tasktrack.services.user_service import UserService

logger = logging.getLogger(__name__)


def build_services(app: FastAPI, settings: Settings) -> None:
    """Wire stores into services unless they were injected already."""
    if getattr(app.state, "task_service", None) is not None:
        return
    app.state.task_service = TaskService(InMemoryTaskStore())
    app.state.user_service = UserService(InMemoryUserStore())
    if settings.seed_sample_data:
        seed_sample_data(app.state.task_service, app.state.user_service)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        build_services(app, settings)
        logger.info(f"{settings.app_name} {settings.app_version} started")
        yield
        logger.info(f"{settings.app_name} shutting down")

    app = FastAPI(
        title="tasktrack API", version=settings.app_version, lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_request_logging(app, settings.request_log_skip_paths)

    app.include_router(health.router)
    app.include_router(tasks.router)
    app.include_router(users.router)

    register_error_handlers(app)
    return app


app = create_app()
