from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from datetime import timedelta

from sponsorhub.core.config import settings
from sponsorhub.core.database import init_db, close_db
from sponsorhub.core.exceptions import SponsorHubError, error_response
from sponsorhub.core.logging_config import logger
from sponsorhub.core.middleware import (
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
    RequestSizeLimitMiddleware,
)
from sponsorhub.core.rate_limiter import limiter, rate_limit_exceeded_handler
from sponsorhub.api.router import api_router
from sponsorhub.services.notification_service import notification_cleanup
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
import sponsorhub.models  # noqa: F401  Import models so metadata knows about them


async def validate_critical_config():
    """Validate critical configuration at startup - fail fast if missing"""
    errors = []
    warnings = []

    if not settings.DATABASE_URL:
        errors.append("DATABASE_URL is not set")

    if not settings.SECRET_KEY or settings.SECRET_KEY == "CHANGE_ME":
        errors.append("SECRET_KEY is not set or using default value")

    if not settings.JWT_SECRET_KEY or settings.JWT_SECRET_KEY == "CHANGE_ME":
        errors.append("JWT_SECRET_KEY is not set or using default value")

    if settings.ALLOW_ADMIN_SIGNUP and not settings.is_dev_mode():
        warnings.append("ALLOW_ADMIN_SIGNUP is enabled outside development")

    if not settings.RATE_LIMIT_ENABLED:
        warnings.append("RATE_LIMIT_ENABLED is false - rate limiting disabled")

    if errors:
        for err in errors:
            logger.critical(f"[Startup] CRITICAL: {err}")
        raise RuntimeError(f"Missing critical configuration: {', '.join(errors)}")

    for warn in warnings:
        logger.warning(f"[Startup] WARNING: {warn}")

    logger.info("[Startup] Critical configuration validated")
    return True


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup and shutdown"""
    # Startup
    logger.info("=" * 60)
    logger.info(f"Starting {settings.APP_NAME} API...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Version: {settings.APP_VERSION}")
    logger.info("=" * 60)

    await validate_critical_config()

    await init_db()
    logger.info("[Startup] Database tables ready")

    if settings.NOTIFICATION_CLEANUP_ENABLED:
        notification_cleanup.cleanup_interval = timedelta(minutes=settings.NOTIFICATION_CLEANUP_INTERVAL_MINUTES)
        await notification_cleanup.start()
        logger.info(
            f"Started notification cleanup service - "
            f"Retention: {settings.NOTIFICATION_RETENTION_DAYS}d, "
            f"Interval: {settings.NOTIFICATION_CLEANUP_INTERVAL_MINUTES}min"
        )
    else:
        logger.info("Notification cleanup service disabled")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME} API...")

    if settings.NOTIFICATION_CLEANUP_ENABLED:
        await notification_cleanup.stop()
        logger.info("Stopped notification cleanup service")

    await close_db()


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Event sponsorship marketplace connecting event organizers with sponsors",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
    redirect_slashes=False  # Prevent 307 redirects that break CORS
)

# Add rate limiter state and exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# Add middleware (order matters - last added runs first)
# 1. Default per-key rate limit for undecorated routes
app.add_middleware(SlowAPIMiddleware)

# 2. Request logging
app.add_middleware(RequestLoggingMiddleware)

# 3. Security headers
app.add_middleware(SecurityHeadersMiddleware)

# 4. Request size limit
app.add_middleware(RequestSizeLimitMiddleware, max_size=settings.MAX_REQUEST_SIZE)

# 5. CORS - Origins from CORS_ORIGINS_STR in .env
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Response-Time"],
)


# Exception handlers
@app.exception_handler(SponsorHubError)
async def sponsorhub_exception_handler(request: Request, exc: SponsorHubError):
    if exc.status_code >= 500:
        logger.log_error_with_context(exc, "request", path=request.url.path)
    return JSONResponse(status_code=exc.status_code, content=error_response(exc))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def _validation_message(error: dict) -> str:
    message = error.get("msg", "Invalid request")
    if error.get("type") == "value_error":
        return message.removeprefix("Value error, ")
    field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    return f"{field}: {message}" if field else message


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    details = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": _validation_message(err),
        }
        for err in errors
    ]
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "message": details[0]["message"] if details else "Invalid request",
            "code": "VALIDATION_ERROR",
            "details": {"errors": details},
        },
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": str(exc) if settings.DEBUG else "Internal server error",
        }
    )


# Include API router
app.include_router(api_router, prefix=settings.API_PREFIX)


def run():
    """Console entry point: serve the API with uvicorn"""
    import uvicorn
    uvicorn.run(
        "sponsorhub.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.DEBUG
    )


if __name__ == "__main__":
    run()
