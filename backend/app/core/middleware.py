"""
Dynamic REST API - HTTP Middleware
Request/Response logging, timing, and context management
"""

import time
from typing import Callable, Optional, Set
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from app.core.config import settings
from app.core.logging_config import (
    logger,
    set_request_id,
    set_project_id,
    generate_request_id,
)


# Paths that should skip detailed logging (health checks, docs)
SKIP_LOGGING_PATHS: Set[str] = {
    "/health",
    "/",
    "/favicon.ico",
    "/docs",
    "/redoc",
    "/openapi.json",
}

SLOW_REQUEST_MS = 1000.0


def should_skip_logging(path: str) -> bool:
    """Check if path should skip detailed logging"""
    return path in SKIP_LOGGING_PATHS


def extract_mock_project_id(path: str, prefix: Optional[str] = None) -> Optional[str]:
    """Return the project id segment of a mock path, if any"""
    prefix = (prefix or settings.MOCK_PREFIX).rstrip("/") + "/"
    if not path.startswith(prefix):
        return None
    project_id = path[len(prefix):].split("/", 1)[0]
    return project_id or None


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for logging HTTP requests and responses.

    - Generates and tracks request IDs for correlation
    - Sets the mock project id as a context variable for downstream logging
    - Logs method, path, status and duration
    - Adds X-Request-ID and X-Response-Time headers
    """

    def __init__(self, app: ASGIApp, slow_request_ms: float = SLOW_REQUEST_MS):
        super().__init__(app)
        self.slow_request_ms = slow_request_ms

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or generate_request_id()
        set_request_id(request_id)

        path = request.url.path
        project_id = extract_mock_project_id(path)
        if project_id:
            set_project_id(project_id)

        skip_logging = should_skip_logging(path)
        start_time = time.perf_counter()

        try:
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start_time) * 1000

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"

            if not skip_logging:
                logger.log_request(
                    request.method,
                    path,
                    response.status_code,
                    duration_ms,
                    client_ip=request.client.host if request.client else "unknown",
                )

                # Configured mock delays are expected to be slow
                if duration_ms > self.slow_request_ms and not project_id:
                    logger.warning(
                        f"Slow request: {request.method} {path} took {duration_ms:.2f}ms",
                        extra={
                            "event_type": "slow_request",
                            "http_method": request.method,
                            "http_path": path,
                            "duration_ms": duration_ms,
                        }
                    )

            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"✗ {request.method} {path} - Exception ({duration_ms:.2f}ms): {type(exc).__name__}",
                exc_info=True,
                extra={
                    "event_type": "http_request_error",
                    "http_method": request.method,
                    "http_path": path,
                    "duration_ms": duration_ms,
                    "error_type": type(exc).__name__,
                }
            )
            raise

        finally:
            set_request_id("")
            set_project_id("")


__all__ = [
    "RequestLoggingMiddleware",
    "should_skip_logging",
    "extract_mock_project_id",
    "SKIP_LOGGING_PATHS",
]
