"""FastAPI main application with app factory and route configuration."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings
from .deps import build_storage, build_task_store, get_settings
from .routes import preferences, tasks
from .schemas import HealthResponse
from .services.preferences import ThemePreferences
from .services.validation import TaskValidationError
from .utils.logging import setup_logging

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use; defaults to the cached environment settings

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Build the store on startup; nothing to release on shutdown."""
        logger.info("Starting up Taskpad")

        setup_logging(settings)

        storage = build_storage(settings)
        app.state.storage = storage
        app.state.task_store = build_task_store(settings, storage)
        app.state.theme_preferences = ThemePreferences(storage, theme_key=settings.theme_key)

        logger.info("Application startup completed successfully")

        yield

        logger.info("Shutting down Taskpad")

    app = FastAPI(
        title="Taskpad",
        description="Local task tracker: create, edit, filter, search, complete and delete tasks",
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all HTTP requests."""
        logger.info(f"Request: {request.method} {request.url}")

        response = await call_next(request)

        logger.info(
            f"Response: {response.status_code} for {request.method} {request.url}"
        )
        return response

    @app.exception_handler(TaskValidationError)
    async def task_validation_handler(request: Request, exc: TaskValidationError):
        """Render a rejected create/update with its per-field messages."""
        logger.warning(
            f"Rejected {request.method} {request.url}: {exc.errors}"
        )

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error": "Validation error",
                "details": exc.errors,
                "status_code": 422,
                "path": str(request.url),
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions with proper logging."""
        logger.warning(
            f"HTTP {exc.status_code}: {exc.detail} for {request.method} {request.url}"
        )

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.detail,
                "status_code": exc.status_code,
                "path": str(request.url),
            },
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        """Handle request validation errors with detailed information."""
        logger.warning(
            f"Validation error for {request.method} {request.url}: {exc.errors()}"
        )

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error": "Validation error",
                "details": jsonable_errors(exc),
                "status_code": 422,
                "path": str(request.url),
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.error(
            f"Unexpected error for {request.method} {request.url}: {str(exc)}",
            exc_info=True,
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error",
                "status_code": 500,
                "path": str(request.url),
            },
        )

    @app.get("/healthz", tags=["health"], response_model=HealthResponse)
    async def health_check(request: Request) -> HealthResponse:
        """Health check endpoint.

        Reports "degraded" when the store has not been initialized.
        """
        store = getattr(request.app.state, "task_store", None)
        storage = getattr(request.app.state, "storage", None)

        return HealthResponse(
            status="healthy" if store is not None else "degraded",
            version=VERSION,
            storage=storage.describe() if storage is not None else "unavailable",
            task_count=store.get_task_count() if store is not None else 0,
        )

    @app.get("/", tags=["root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "name": "Taskpad API",
            "version": VERSION,
            "docs_url": "/docs",
            "health_check": "/healthz",
            "endpoints": {
                "tasks": "/tasks",
                "theme": "/preferences/theme",
            },
        }

    app.include_router(tasks.router)
    app.include_router(preferences.router)

    logger.info("FastAPI application created and configured")

    return app


def jsonable_errors(exc: RequestValidationError) -> list:
    """Request validation errors without the non-JSON ``ctx`` payloads."""
    return [
        {key: value for key, value in error.items() if key in ("type", "loc", "msg")}
        for error in exc.errors()
    ]


def run() -> None:
    """Serve the API with uvicorn using the configured host and port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "taskpad.main:create_app",
        factory=True,
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
