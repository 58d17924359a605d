"""
IoTeX Explorer - API Middleware
=================================
Custom middleware for the explorer FastAPI application.
"""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from iotex_explorer.logging_setup import get_logger

logger = get_logger("api.middleware")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Add unique request ID to each request.

    An incoming X-Request-ID header is reused, otherwise a uuid4 is generated.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log all requests with timing information.

    Logs:
    - Request method and path
    - Response status code
    - Request duration
    - Client IP
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()

        request_id = getattr(request.state, "request_id", "unknown")
        client_ip = request.client.host if request.client else "unknown"

        logger.info(
            f"[{request_id}] {request.method} {request.url.path} from {client_ip}"
        )

        response = await call_next(request)

        duration = time.perf_counter() - start_time
        logger.info(
            f"[{request_id}] {request.method} {request.url.path} "
            f"-> {response.status_code} ({duration:.3f}s)"
        )

        response.headers["X-Process-Time"] = f"{duration:.6f}"
        return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Catches unhandled exceptions and returns a 500 JSON body.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            request_id = getattr(request.state, "request_id", "unknown")
            logger.error(
                f"[{request_id}] Unhandled error: {type(e).__name__}: {str(e)}",
                exc_info=True
            )
            return JSONResponse(
                status_code=500,
                content={
                    "error": "Internal Server Error",
                    "detail": "An unexpected error occurred",
                    "request_id": request_id
                },
                headers={REQUEST_ID_HEADER: request_id},
            )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Add security headers to all responses.

    Headers:
    - X-Content-Type-Options: nosniff
    - X-Frame-Options: DENY
    - Referrer-Policy
    - Strict-Transport-Security (HTTPS only)
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = \
                "max-age=31536000; includeSubDomains"

        return response


class CacheControlMiddleware(BaseHTTPMiddleware):
    """
    Add cache control headers to responses.

    - Static files: 1 year, immutable
    - Address lookups and pages: never cached (balances and votes change)
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        if "/static/" in request.url.path:
            response.headers["Cache-Control"] = "public, max-age=31536000, immutable"
        else:
            response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate"

        return response


__all__ = [
    'REQUEST_ID_HEADER',
    'RequestIDMiddleware',
    'RequestLoggingMiddleware',
    'ErrorHandlingMiddleware',
    'SecurityHeadersMiddleware',
    'CacheControlMiddleware',
]
