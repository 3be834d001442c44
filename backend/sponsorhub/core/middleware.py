"""
SponsorHub - HTTP Middleware

Request tracing and access logging, security headers, and an early
Content-Length check so oversized uploads are refused before parsing.
"""

import time
from typing import Callable, Dict, FrozenSet
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from sponsorhub.core.config import settings
from sponsorhub.core.logging_config import (
    logger,
    set_request_id,
    set_user_id,
    generate_request_id,
)

REQUEST_ID_HEADER = "X-Request-ID"

# Polled by load balancers and browsers; not worth an access log line
QUIET_PATHS: FrozenSet[str] = frozenset({
    f"{settings.API_PREFIX}/health",
    "/favicon.ico",
    "/docs",
    "/redoc",
    "/openapi.json",
})

SECURITY_HEADERS: Dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Cache-Control": "no-store",
}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Binds a request id to the logging context for the lifetime of the request,
    echoes it back in ``X-Request-ID`` and writes one access log line.
    """

    SLOW_REQUEST_MS = 1000

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
        set_request_id(request_id)
        quiet = request.url.path in QUIET_PATHS
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                f"Unhandled error on {request.method} {request.url.path}",
                exc_info=True,
                extra={"kind": "http", "elapsed_ms": round(self._elapsed(started), 2)},
            )
            raise
        else:
            elapsed = self._elapsed(started)
            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers["X-Response-Time"] = f"{elapsed:.1f}ms"

            if not quiet:
                logger.log_request(
                    request.method,
                    request.url.path,
                    response.status_code,
                    elapsed,
                    client_ip=request.client.host if request.client else None,
                )
                if elapsed > self.SLOW_REQUEST_MS:
                    logger.warning(f"Slow request: {request.method} {request.url.path} took {elapsed:.0f}ms")
            return response
        finally:
            set_request_id("")
            set_user_id("")

    @staticmethod
    def _elapsed(started: float) -> float:
        return (time.perf_counter() - started) * 1000


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds SECURITY_HEADERS unless the handler already set them"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Refuses bodies whose declared Content-Length exceeds ``max_size`` with a 413 envelope"""

    def __init__(self, app: ASGIApp, max_size: int):
        super().__init__(app)
        self.max_size = max_size

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        declared = request.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > self.max_size:
            logger.warning(
                f"Refused {request.method} {request.url.path}: body of {declared} bytes exceeds {self.max_size}"
            )
            return JSONResponse(
                status_code=413,
                content={
                    "success": False,
                    "message": f"Request body too large. Maximum size is {self.max_size // (1024 * 1024)}MB",
                    "code": "REQUEST_TOO_LARGE",
                },
            )
        return await call_next(request)


__all__ = [
    "RequestLoggingMiddleware",
    "SecurityHeadersMiddleware",
    "RequestSizeLimitMiddleware",
    "QUIET_PATHS",
]
