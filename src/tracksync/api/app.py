"""FastAPI application setup."""

from __future__ import annotations

import functools
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tracksync.api.dependencies import (
    close_sync_service,
    close_task_store,
    init_sync_service,
    init_task_store,
)
from tracksync.api.models import APIResponse
from tracksync.api.routes import projects, sync
from tracksync.config import Settings
from tracksync.logging import get_logger, sanitize_for_log
from tracksync.sync import SyncService
from tracksync.task_store import PersistenceError, ProjectNotFoundError
from tracksync.youtrack import (
    AuthenticationFailedError,
    InvalidBoardReferenceError,
    MissingCredentialError,
    RemoteUnavailableError,
    YouTrackClient,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = get_logger("api")


def _error_response(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse[None](data=None, error=sanitize_for_log(str(exc))).model_dump(),
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings
    store = init_task_store(settings.db_path)
    init_sync_service(
        SyncService(
            store=store,
            client_factory=functools.partial(YouTrackClient, timeout=settings.http_timeout),
        )
    )

    yield

    close_sync_service()
    close_task_store()


def create_app(db_path: str | None = None, settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings.from_env()
    if db_path is not None:
        settings.db_path = db_path

    app = FastAPI(
        title="tracksync API",
        description="Sync open YouTrack sprint issues into a local task list",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers

    @app.exception_handler(ProjectNotFoundError)
    async def project_not_found_handler(
        _request: Request, exc: ProjectNotFoundError
    ) -> JSONResponse:
        return _error_response(status.HTTP_404_NOT_FOUND, exc)

    @app.exception_handler(InvalidBoardReferenceError)
    async def invalid_board_handler(
        _request: Request, exc: InvalidBoardReferenceError
    ) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, exc)

    @app.exception_handler(MissingCredentialError)
    async def missing_credential_handler(
        _request: Request, exc: MissingCredentialError
    ) -> JSONResponse:
        return _error_response(status.HTTP_400_BAD_REQUEST, exc)

    @app.exception_handler(AuthenticationFailedError)
    async def authentication_failed_handler(
        _request: Request, exc: AuthenticationFailedError
    ) -> JSONResponse:
        return _error_response(status.HTTP_401_UNAUTHORIZED, exc)

    @app.exception_handler(RemoteUnavailableError)
    async def remote_unavailable_handler(
        _request: Request, exc: RemoteUnavailableError
    ) -> JSONResponse:
        return _error_response(status.HTTP_502_BAD_GATEWAY, exc)

    @app.exception_handler(PersistenceError)
    async def persistence_error_handler(_request: Request, exc: PersistenceError) -> JSONResponse:
        logger.error("Persistence error: %s", exc)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc)

    app.include_router(projects.router, prefix="/api/v1")
    app.include_router(sync.router, prefix="/api/v1")

    return app
