"""Catalog API main application module.

This module initializes the FastAPI application and configures
core middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from app.api.health import router as health_router
from app.api.middleware import setup_middleware
from app.api.products import router as products_router
from app.api.schemas import ErrorResponse
from app.infrastructure.config import settings
from app.infrastructure.database import create_tables, engine
from app.infrastructure.image_store import get_image_store
from app.infrastructure.logging import configure_logging

configure_logging()

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown events.

    Args:
        app: The FastAPI application instance.

    Yields:
        None after startup, cleanup happens after yield.
    """
    logger.info(
        "Starting catalog API",
        version=settings.api_version,
        debug=settings.debug,
    )

    # Fails startup if the directory cannot be created
    get_image_store().ensure_directory()

    if settings.create_tables_on_startup:
        await create_tables()
        logger.info("Database schema ready")

    yield

    logger.info("Shutting down catalog API")
    await engine.dispose()


app = FastAPI(
    title="Catalog API",
    description="Product catalog with search, pagination and image upload",
    version=settings.api_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware (must be added before custom middleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware (request ID, error handling)
setup_middleware(app)

# Include routers
app.include_router(health_router, tags=["Health"])
app.include_router(products_router)


# ============================================================================
# Custom Exception Handlers
# ============================================================================


def error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    details: list[dict] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Render the ErrorResponse envelope with the request's correlation ID."""
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        details=details or [],
        request_id=getattr(request.state, "request_id", None),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render HTTP errors, including domain errors mapped by the routers."""
    if isinstance(exc.detail, dict):
        return error_response(
            request,
            exc.status_code,
            exc.detail.get("error_code", "ERROR"),
            exc.detail.get("message", ""),
            exc.detail.get("details"),
            headers=exc.headers,
        )
    return error_response(request, exc.status_code, "ERROR", str(exc.detail), headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render query, path and form validation failures."""
    return error_response(
        request,
        422,
        "VALIDATION_ERROR",
        "Request validation failed",
        [
            {
                "field": ".".join(str(p) for p in err.get("loc", ())) or None,
                "message": err.get("msg", ""),
            }
            for err in exc.errors()
        ],
    )
