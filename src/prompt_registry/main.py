"""
Main FastAPI application for the Prompt Registry.

Sets up the application with all routes, middleware, and startup/shutdown logic.
"""

import sys
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from prompt_registry.api.health import router as health_router
from prompt_registry.api.v1.templates import router as templates_router
from prompt_registry.config import Settings
from prompt_registry.registry.dispatcher import Dispatcher
from prompt_registry.registry.store import TemplateStore
from prompt_registry.utils.errors import ConfigurationError, MissingVariableError, PromptRegistryError
from prompt_registry.utils.logging import get_logger, setup_logging
from prompt_registry.utils.request_context import set_request_id

logger = get_logger(__name__)


def build_dispatcher(settings: Settings) -> Dispatcher:
    """
    Load the template store described by settings and wrap it in a dispatcher.

    Raises:
        ConfigurationError: If templates_dir does not name a directory
        LoadError: If any template file is malformed or duplicated
    """
    if not settings.templates_dir.is_dir():
        raise ConfigurationError(
            f"templates_dir is not a directory: {settings.templates_dir}",
            error_code="INVALID_TEMPLATES_DIR",
        )

    store = TemplateStore.load(
        settings.templates_dir,
        patterns=settings.template_patterns,
        recursive=settings.templates_recursive,
    )
    return Dispatcher(store)


@asynccontextmanager
async def lifespan(app: FastAPI):  # type: ignore
    """
    Manage application lifecycle.

    Loads the template store once at startup; a load failure aborts startup.

    Args:
        app: FastAPI application instance

    Yields:
        Control during application runtime
    """
    logger.info("Application starting up")
    settings = app.state.settings
    try:
        app.state.dispatcher = build_dispatcher(settings)
        logger.info(
            "Template store initialized",
            extra={
                "templates_dir": str(settings.templates_dir),
                "template_count": len(app.state.dispatcher.store),
            },
        )
    except Exception as exc:
        logger.critical(
            "Failed to load templates - application cannot start",
            extra={
                "error": str(exc),
                "error_type": type(exc).__name__,
            },
        )
        raise

    yield

    logger.info("Application shutting down")
    app.state.dispatcher = None


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Optional settings; loaded from the environment when omitted

    Returns:
        Configured FastAPI application instance
    """
    if settings is None:
        try:
            settings = Settings()
        except Exception as exc:
            # Cannot use logger yet - settings failed to load
            print(f"CRITICAL: Failed to load settings: {exc}", file=sys.stderr)
            raise

    setup_logging(settings)

    logger.info(
        "Creating FastAPI application",
        extra={
            "environment": settings.environment,
            "api_title": settings.api_title,
        },
    )

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description="Prompt template registry and dispatch service",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.dispatcher = None

    @app.middleware("http")
    async def add_request_tracking(request: Request, call_next):  # type: ignore
        """Tag each request with an ID and record its response time."""
        request_id = request.headers.get("X-Request-ID", "").strip()
        if not request_id:
            request_id = f"req_{int(time.time() * 1000)}"

        set_request_id(request_id)

        start_time = time.time()
        response = await call_next(request)
        response_time = time.time() - start_time

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = str(response_time)
        logger.info(
            "Response completed",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "response_time": response_time,
            },
        )
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    @app.exception_handler(MissingVariableError)
    async def missing_variable_handler(request: Request, exc: MissingVariableError) -> JSONResponse:  # type: ignore
        """Report the unfilled placeholder so the caller can supply it."""
        logger.warning(
            f"Missing template variable: {exc.message}",
            extra={
                "placeholder": exc.placeholder,
                "template": exc.identifier,
                "path": request.url.path,
            },
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.error_code,
                "message": exc.message,
                "placeholder": exc.placeholder,
            },
        )

    @app.exception_handler(PromptRegistryError)
    async def registry_error_handler(request: Request, exc: PromptRegistryError) -> JSONResponse:  # type: ignore
        """Handle prompt registry-specific exceptions."""
        log = logger.warning if exc.status_code < 500 else logger.error
        log(
            f"Prompt registry error: {exc.message}",
            extra={
                "error_code": exc.error_code,
                "path": request.url.path,
            },
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.error_code,
                "message": exc.message,
            },
        )

    app.include_router(health_router)
    app.include_router(templates_router)

    logger.info("FastAPI application created successfully")

    return app


# Create the application instance for running with FastAPI CLI
app = create_app()
