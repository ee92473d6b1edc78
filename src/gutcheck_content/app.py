"""FastAPI application factory and process entry point."""

from __future__ import annotations

import logging
import secrets
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from gutcheck_content.config import load_settings
from gutcheck_content.content.loader import FileContentLoader
from gutcheck_content.errors import (
    ContentResolutionError,
    ContentValidationError,
    InvalidContentError,
    RevisionError,
    RevisionNotFoundError,
    UnknownLevelIdError,
)
from gutcheck_content.logging import configure_logging
from gutcheck_content.routes import admin, health, question_sets, results_packs
from gutcheck_content.startup import init_database

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)

_HTTP_UNPROCESSABLE = 422


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = app.state.settings
    cosmos = await init_database(settings)
    app.state.cosmos = cosmos
    app.state.loader = FileContentLoader(settings.content.level_aliases)
    logger.info("API started — env=%s", settings.app.env)
    try:
        yield
    finally:
        await cosmos.close()
        logger.info("API shutdown complete")


async def _resolution_error(request: Request, exc: ContentResolutionError) -> JSONResponse:
    logger.warning("Resolution failed — %s", exc)
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": str(exc)})


async def _unknown_level(request: Request, exc: UnknownLevelIdError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)})


async def _invalid_content(request: Request, exc: InvalidContentError) -> JSONResponse:
    logger.error("Stored content failed validation — %s", exc)
    return JSONResponse(
        status_code=_HTTP_UNPROCESSABLE,
        content={"error": str(exc), "errors": exc.errors},
    )


async def _validation_failed(request: Request, exc: ContentValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=_HTTP_UNPROCESSABLE,
        content={"error": str(exc), "errors": exc.errors, "warnings": exc.warnings},
    )


async def _revision_not_found(request: Request, exc: RevisionNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": str(exc)})


async def _revision_error(request: Request, exc: RevisionError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)})


def create_app() -> FastAPI:
    """Build the API application."""
    settings = load_settings()
    configure_logging(settings.app.log_level, log_file=settings.app.log_file or None)

    app = FastAPI(title="gutcheck-content", lifespan=lifespan)
    app.state.settings = settings

    secret_key = settings.app.session_secret
    if not secret_key:
        logger.warning("SESSION_SECRET is not set — sessions will not survive a restart")
        secret_key = secrets.token_urlsafe(32)
    app.add_middleware(SessionMiddleware, secret_key=secret_key, https_only=not settings.app.is_development)

    app.add_exception_handler(ContentResolutionError, _resolution_error)
    app.add_exception_handler(UnknownLevelIdError, _unknown_level)
    app.add_exception_handler(InvalidContentError, _invalid_content)
    app.add_exception_handler(ContentValidationError, _validation_failed)
    app.add_exception_handler(RevisionNotFoundError, _revision_not_found)
    app.add_exception_handler(RevisionError, _revision_error)

    app.include_router(health.router)
    app.include_router(question_sets.router)
    app.include_router(results_packs.router)
    app.include_router(admin.router)
    return app


def main() -> None:
    """Entry point for the API process."""
    settings = load_settings()
    uvicorn.run("gutcheck_content.app:create_app", factory=True, host=settings.app.host, port=settings.app.port)


if __name__ == "__main__":
    main()
