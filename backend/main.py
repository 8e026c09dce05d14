"""TaskFlow - Main FastAPI Application."""

import asyncio
import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.middleware.rate_limit import limiter
from api.routes import api_router
from core.exceptions import DomainException
from infrastructure.config import get_settings
from infrastructure.database import close_db, init_db
from infrastructure.logging_config import setup_logging
from services.background_tasks import invitation_sweep_loop

settings = get_settings()
logger = logging.getLogger(__name__)

# Sentry error tracking, initialised at module level so startup errors are captured too
if settings.sentry_dsn:
    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.logging import LoggingIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        integrations=[
            FastApiIntegration(transaction_style="url"),
            SqlalchemyIntegration(),
            LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
        ],
        traces_sample_rate=0.1 if settings.is_production else 1.0,
        send_default_pii=False,
    )
    logger.info("Sentry error tracking initialised (env=%s)", settings.environment)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # JSON in production, human-readable in development
    setup_logging(
        json_output=not settings.debug and settings.is_production,
        level="DEBUG" if settings.debug else "INFO",
    )

    # Startup
    logger.info("Starting %s v%s", settings.app_name, settings.app_version)
    logger.info("Environment: %s", settings.environment)

    settings.validate_production_secrets()

    if settings.is_development:
        logger.info("Development mode - initializing database...")
        await init_db()

    # Expire stale invitations and purge old resolved ones
    sweep_task = asyncio.create_task(invitation_sweep_loop(), name="invitation-sweep")

    logger.info("Application started successfully!")

    yield

    # Shutdown
    logger.info("Shutting down...")

    sweep_task.cancel()
    try:
        await sweep_task
    except asyncio.CancelledError:
        pass

    await close_db()
    logger.info("Application stopped.")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Task comments and project invitations",
    version=settings.app_version,
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

# Rate limiting: SlowAPIMiddleware applies the default limit to every route,
# @limiter.limit decorators override it per endpoint
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(DomainException)
async def domain_exception_handler(request: Request, exc: DomainException):
    """Map service-layer errors to their HTTP status."""
    if exc.status_code >= 500:
        logger.error("Domain error on %s: %s", request.url.path, exc.message)
    else:
        logger.info(
            "Request rejected: %s",
            exc.message,
            extra={"path": request.url.path, "status_code": exc.status_code},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    # Production logs only type and a truncated message
    if settings.is_production:
        logger.error("Unhandled exception: %s: %s", type(exc).__name__, str(exc)[:200])
    else:
        logger.error("Unhandled exception: %s", str(exc), exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# Reject request bodies larger than 1MB
_MAX_BODY_SIZE = 1024 * 1024


@app.middleware("http")
async def limit_request_body_size(request: Request, call_next):
    if request.method in ("POST", "PUT", "PATCH"):
        content_length = request.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > _MAX_BODY_SIZE:
            return JSONResponse(
                status_code=413,
                content={"detail": "Request body too large (max 1MB)"},
            )
    return await call_next(request)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    response.headers["X-Response-Time"] = f"{duration_ms:.1f}ms"

    # Health probes are too noisy to log
    path = request.url.path
    if not path.startswith("/api/v1/health"):
        logger.info(
            "%s %s %s %.1fms",
            request.method,
            path,
            response.status_code,
            round(duration_ms, 1),
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "method": request.method,
                "path": path,
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 1),
            },
        )
    return response


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    incoming = request.headers.get("X-Request-ID")
    # Only a valid UUID from the caller is reused, to keep log lines clean
    if incoming:
        try:
            uuid.UUID(incoming)
            request_id = incoming
        except ValueError:
            request_id = str(uuid.uuid4())
    else:
        request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    if settings.is_production:
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
    return response


# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Requested-With", "X-Request-ID"],
)

# Include API routes
app.include_router(api_router, prefix="/api/v1")


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs" if settings.is_development else "disabled",
        "health": "/api/v1/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        workers=settings.workers if not settings.is_development else 1,
    )
