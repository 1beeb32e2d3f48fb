"""
IMF Gadget API FastAPI Application
Main entry point for the backend API server.
"""

import logging
import time
from contextlib import asynccontextmanager
from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from imf_api.config import settings
from imf_api.database import init_db, close_db
from imf_api.exceptions import error_boundary_middleware, register_exception_handlers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.
    Runs on startup and cleanup on shutdown.
    """
    # Startup
    from imf_api.logging_config import setup_logging
    setup_logging(log_dir=settings.log_dir, log_level=settings.log_level)

    logger.info("Starting IMF Gadget API...")

    # Create tables directly in debug mode
    # In production, use Alembic migrations instead
    if settings.debug:
        await init_db()
        logger.info("Database initialized (debug mode)")

    yield

    # Shutdown
    logger.info("Shutting down IMF Gadget API...")
    await close_db()


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Secure API to manage IMF gadgets.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

register_exception_handlers(app)

# Innermost middleware: the ones added after it also wrap its 500 responses
app.add_middleware(BaseHTTPMiddleware, dispatch=error_boundary_middleware)

# Configure rate limiting: one global budget per client IP
limiter = Limiter(
    key_func=get_remote_address,
    application_limits=[settings.rate_limit_default],
    enabled=settings.rate_limit_enabled,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Adds conservative security headers to every response."""

    HEADERS = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "SAMEORIGIN",
        "Referrer-Policy": "no-referrer",
        "Cross-Origin-Opener-Policy": "same-origin",
        "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    }

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in self.HEADERS.items():
            response.headers.setdefault(name, value)
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration. Headers are never logged."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "%s %s %s %.1fms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Health Check Endpoints
# =============================================================================

@app.get("/", tags=["General"], response_class=PlainTextResponse)
async def root():
    """Welcome message."""
    return "Welcome to the IMF Gadget API"


@app.get("/health", tags=["General"])
async def health_check():
    """Liveness check for container orchestration."""
    return {
        "status": "healthy",
        "service": "imf-gadget-api",
        "version": "1.0.0"
    }


from imf_api.api import auth, gadgets
from imf_api.api.dependencies import get_current_user


# =============================================
# API Routers
# =============================================

app.include_router(auth.router, prefix="/auth", tags=["Auth"])
app.include_router(gadgets.router, prefix="/gadgets", tags=["Gadgets"], dependencies=[Depends(get_current_user)])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "imf_api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug
    )
