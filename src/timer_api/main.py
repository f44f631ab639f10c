from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import translate_errors
from .logging_config import configure_logging
from .middleware import global_exception_handler, request_logger
from .repositories import Repository, get_repository
from .routers import timers as timers_router
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "timers",
        "description": "Create timers and read them back with their live countdown.",
    },
]


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Return request validation errors in the same shape as timer validation failures.

    Response format:
        [
            {"error": "invalid_request", "error_description": "...", "field": "..."},
            ...
        ]
    """
    return JSONResponse(status_code=400, content=translate_errors(exc.errors(), request_errors=True))


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, repository: Optional[Repository] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use; loaded from the environment when omitted.
        repository: Storage handle to use; built from settings when omitted.
            It is opened at startup and closed at shutdown either way.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    repo = repository if repository is not None else get_repository(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        repo.open()
        app.state.repository = repo
        logger.info("Timer service started with %s backend", repo.name)
        try:
            yield
        finally:
            repo.close()
            logger.info("Timer service stopped")

    app = FastAPI(
        title="Timer Backend",
        description="Backend API service for countdown timers with pluggable storage backends.",
        version="0.1.0",
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )

    # Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(request_logger(settings.slow_request_seconds))

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    # PUBLIC_INTERFACE
    @app.get("/", summary="Health Check", tags=["health"])
    def health_check():
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health.
        """
        return {"message": "Healthy", "backend": repo.name}

    app.include_router(timers_router.router)
    return app


app = create_app()
