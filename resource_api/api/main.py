"""
FastAPI application entrypoint with middleware, lifecycle, and error handling.
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..config import Settings, get_settings
from ..db.repositories import PostRepository, UserRepository
from ..exceptions import ConflictError, NotFoundError, RepositoryError, ValidationError
from ..logger import request_id_var, setup_logging
from .routes import health_router, posts_router, root_router, users_router
from .schemas import ErrorDetail, ErrorResponse

LOGGER = logging.getLogger(__name__)

_ERROR_STATUS: dict[type[RepositoryError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
}


def _error_json(
    request: Request,
    status_code: int,
    message: str,
    details: list[ErrorDetail] | None = None,
) -> JSONResponse:
    """Render the uniform ``{"error": ...}`` body."""
    error_response = ErrorResponse(
        error=message,
        details=details,
        request_id=getattr(request.state, "request_id", None),
    )
    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(exclude_none=True),
    )


# -----------------------------------------------------------------------------
# Application Lifespan
# -----------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan context manager.

    Configures logging on startup. Repositories live on ``app.state`` and are
    discarded with the process.
    """
    settings: Settings = app.state.settings
    setup_logging(settings)

    LOGGER.info(
        "Starting %s v%s in %s environment",
        settings.app.name,
        settings.app.version,
        settings.app.environment.value,
    )

    yield

    LOGGER.info(
        "Application shutdown complete (%d users, %d posts discarded).",
        len(app.state.users),
        len(app.state.posts),
    )


# -----------------------------------------------------------------------------
# Application Factory
# -----------------------------------------------------------------------------


def create_app(
    settings: Settings | None = None,
    *,
    users: UserRepository | None = None,
    posts: PostRepository | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Each call builds fresh repositories unless ``users``/``posts`` are given,
    so every application instance owns an isolated data set.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="In-memory users and posts resource API",
        docs_url="/docs" if settings.app.debug else None,
        redoc_url="/redoc" if settings.app.debug else None,
        openapi_url="/openapi.json" if settings.app.debug else None,
        lifespan=lifespan,
    )

    users = users if users is not None else UserRepository()
    app.state.settings = settings
    app.state.users = users
    app.state.posts = posts if posts is not None else PostRepository(users)

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allow_origins,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # -------------------------------------------------------------------------
    # Request Logging Middleware
    # -------------------------------------------------------------------------

    @app.middleware("http")
    async def request_logging_middleware(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Log request details and add request ID header."""
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        start_time = time.perf_counter()

        # Attach request_id to request state for access in handlers
        request.state.request_id = request_id
        token = request_id_var.set(request_id)

        try:
            response = await call_next(request)
        except Exception:
            LOGGER.exception(
                "Unhandled exception for %s %s",
                request.method,
                request.url.path,
            )
            raise
        else:
            duration_ms = (time.perf_counter() - start_time) * 1000
            LOGGER.info(
                "%s %s -> %d (%.2fms)",
                request.method,
                request.url.path,
                response.status_code,
                duration_ms,
            )
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = request_id
        return response

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------

    @app.exception_handler(RepositoryError)
    async def repository_exception_handler(
        request: Request,
        exc: RepositoryError,
    ) -> JSONResponse:
        """Translate domain errors into their HTTP status."""
        status_code = next(
            (code for kind, code in _ERROR_STATUS.items() if isinstance(exc, kind)),
            status.HTTP_400_BAD_REQUEST,
        )
        return _error_json(request, status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Handle HTTP exceptions with consistent error format."""
        return _error_json(request, exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Reject malformed bodies with 400 and per-field details."""
        details = [
            ErrorDetail(
                field=".".join(str(loc) for loc in error.get("loc", [])),
                message=error.get("msg", "Validation error"),
                code=error.get("type"),
            )
            for error in exc.errors()
        ]

        return _error_json(
            request,
            status.HTTP_400_BAD_REQUEST,
            "Request validation failed",
            details,
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        LOGGER.exception(
            "Unhandled exception: %s [%s]",
            str(exc),
            getattr(request.state, "request_id", None),
        )

        # Hide internal errors in production
        message = str(exc) if settings.app.debug else "An internal error occurred"
        return _error_json(request, status.HTTP_500_INTERNAL_SERVER_ERROR, message)

    # -------------------------------------------------------------------------
    # Route Registration
    # -------------------------------------------------------------------------

    app.include_router(root_router)
    app.include_router(health_router)
    app.include_router(users_router)
    app.include_router(posts_router)

    return app


# -----------------------------------------------------------------------------
# Application Instance
# -----------------------------------------------------------------------------

app = create_app()


__all__ = ["app", "create_app"]
