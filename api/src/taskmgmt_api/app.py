"""Application factory.

Builds the FastAPI app from an immutable ServiceSettings value. Collaborators
(engine, Task Store, Credential Store, Auth Service) are constructed here once
and stored on `app.state`; routes reach them only through dependencies.

Usage:
    settings = ServiceSettings.from_env()
    app = create_app(settings)
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.ext.asyncio import AsyncEngine
from taskmgmt_auth.credentials import CredentialStore
from taskmgmt_auth.service import AuthService
from taskmgmt_data_access.client import create_engine, create_schema
from taskmgmt_data_access.tasks import TaskStore
from taskmgmt_shared.settings import ServiceSettings

from taskmgmt_api import auth_routes, task_routes
from taskmgmt_api.errors import unhandled_error_middleware, validation_error_handler

logger = logging.getLogger(__name__)


def create_app(settings: ServiceSettings, engine: AsyncEngine | None = None) -> FastAPI:
    """Create the API. Pass `engine` to share an existing database (tests)."""
    engine = engine or create_engine(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await create_schema(engine)
        logger.info("Database schema ready")
        yield
        await engine.dispose()

    app = FastAPI(title="TaskManagement API", version="1.0.0", lifespan=lifespan)

    app.state.settings = settings
    app.state.task_store = TaskStore(engine)
    app.state.auth_service = AuthService(
        CredentialStore(engine, bcrypt_rounds=settings.bcrypt_rounds), settings
    )

    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.middleware("http")(unhandled_error_middleware)

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok"}

    app.include_router(auth_routes.router)
    app.include_router(task_routes.router)
    return app
