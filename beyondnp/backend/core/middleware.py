"""
Request Context Middleware.

Binds a request ID, the calling client and the route to the structlog
context so every log line written while serving a request carries them.
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from beyondnp.backend.core.logging import get_logger

logger = get_logger(__name__)

# Clients that identify themselves through X-Client-ID; anything else is "unknown".
# Keep aligned with VALID_SOURCES in logging.py.
KNOWN_CLIENTS = {"web", "cli", "internal"}


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds request context to every request.

    Headers:
    - X-Request-ID: Unique request identifier (generated if not provided),
      echoed on the response and included in the response metadata
    - X-Client-ID: Calling client (web, cli, internal)
    - X-Response-Time: Response duration in milliseconds

    Access in endpoints:
        request.state.request_id
        request.state.client_id
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request with context tracking."""
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        client_id = request.headers.get("X-Client-ID", "unknown").lower()
        if client_id not in KNOWN_CLIENTS:
            client_id = "unknown"

        request.state.request_id = request_id
        request.state.client_id = client_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            source=client_id,
            method=request.method,
            path=request.url.path,
        )

        start = time.perf_counter()
        logger.debug(
            "Request started",
            extra={"client_host": request.client.host if request.client else None},
        )

        try:
            response = await call_next(request)

            duration_ms = int((time.perf_counter() - start) * 1000)
            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms}ms"

            logger.debug(
                "Request completed",
                extra={"status_code": response.status_code, "duration_ms": duration_ms},
            )
            return response

        except Exception as exc:
            logger.error(
                "Request failed with exception",
                extra={
                    "duration_ms": int((time.perf_counter() - start) * 1000),
                    "error_type": type(exc).__name__,
                },
            )
            raise

        finally:
            # Context must not leak into the next request on this worker
            structlog.contextvars.clear_contextvars()
