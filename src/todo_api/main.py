from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .logging_config import setup_logging
from .repositories import TodoRepository
from .request_logger import RequestLoggerMiddleware
from .routers import todos as todos_router
from .settings import Settings, get_settings
from .storage import JsonFileStorage, Storage, StorageError, build_storage

log = structlog.get_logger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {
        "name": "todos",
        "description": "CRUD and complete/undo operations for Todo items stored in a JSON file.",
    },
]


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Return a consistent JSON structure for request validation errors.

    Response format:
        {
            "error": "ValidationError",
            "detail": [... pydantic/fastapi error details ...],
            "message": "Request validation failed"
        }
    """
    return JSONResponse(
        status_code=400,
        content={
            "error": "ValidationError",
            "message": "Request validation failed",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


async def storage_exception_handler(request: Request, exc: StorageError) -> JSONResponse:
    """
    Log storage failures with their cause and answer 500 without exposing
    paths or OS messages to the client.
    """
    log.error(
        "todo storage failure",
        error_type=type(exc).__name__,
        error=str(exc),
        path=exc.path,
        method=request.method,
        url=request.url.path,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "StorageError",
            "message": "Todo storage is unavailable",
        },
    )


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, storage: Optional[Storage] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use; read from the environment when omitted.
        storage: Storage backend to use; built from settings when omitted.

    Returns:
        A configured FastAPI app whose handlers share one TodoRepository.
    """
    settings = settings or get_settings()
    setup_logging(env=settings.env, level=settings.log_level)
    storage = storage or build_storage(settings)
    repository = TodoRepository(storage)

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        log.info("application starting", env=settings.env, storage=storage.describe())
        if isinstance(storage, JsonFileStorage) and settings.create_if_missing:
            if storage.ensure_exists():
                log.info("created empty todo store", path=storage.path)
        yield
        log.info("application stopped")

    app = FastAPI(
        title="Todo JSON API",
        description="REST service managing todos persisted in a single JSON file.",
        version="0.1.0",
        openapi_tags=openapi_tags,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.repository = repository

    # Configure CORS based on settings (.env -> CORS_ALLOW_ORIGINS), with '*' fallback
    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggerMiddleware)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StorageError, storage_exception_handler)

    # PUBLIC_INTERFACE
    @app.get("/", summary="Health Check", tags=["health"])
    def health_check():
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health.
        """
        return {"message": "Healthy", "storage": storage.describe()}

    app.include_router(todos_router.router)
    return app


app = create_app()
