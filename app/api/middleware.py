"""Request context and error middleware for the catalog API."""

import time
from typing import Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Attach a request ID and log one line per request.

    The ID is taken from ``X-Request-ID`` when the client sends one,
    stored on ``request.state``, bound into the structlog context for the
    duration of the request and echoed back on the response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id

        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            locale=request.headers.get("Accept-Language"),
        )
        started = time.perf_counter()
        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                query=str(request.url.query) or None,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
        finally:
            structlog.contextvars.unbind_contextvars("request_id", "locale")

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Render unhandled exceptions as a 500 error envelope.

    Storage failures (``OSError`` from the image directory) are logged
    separately from other errors; clients see the same response for both.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except OSError as e:
            logger.exception("Image storage failure", path=request.url.path, error=str(e))
        except Exception as e:
            logger.exception(
                "Unhandled exception",
                path=request.url.path,
                method=request.method,
                error_type=type(e).__name__,
            )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error_code": "INTERNAL_ERROR",
                "message": "An internal error occurred",
                "details": [],
                "request_id": getattr(request.state, "request_id", None),
            },
        )


def setup_middleware(app: FastAPI) -> None:
    """Install catalog middleware.

    Last added runs first, so the request context wraps error handling and
    500 responses still carry the request ID header.
    """
    app.add_middleware(ErrorHandlerMiddleware)
    app.add_middleware(RequestContextMiddleware)
