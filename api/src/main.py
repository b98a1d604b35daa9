"""
FastAPI application entry point for the Dad Jokes Demo API.

This module provides the main FastAPI application with:
- Greeting, dad joke, name registration and weather mood endpoints
- Health and readiness endpoints
- Request logging with correlation IDs
- Prometheus metrics
- Uniform JSON error envelopes
- Database connection pool management
- Graceful startup and shutdown
"""

import time
import uuid
import structlog
import uvicorn
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict, Any

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from prometheus_client import CONTENT_TYPE_LATEST

from api.src.config import get_settings, Settings
from api.src.dependencies import init_db_pool, close_db_pool, get_db_pool
from api.src.error_handlers import general_exception_handler, register_exception_handlers
from api.src.repositories.joke_repo import DadJokeRepository
from api.src.routers import ALL_ROUTERS
from shared.logging import bind_context, configure_logging, unbind_context
from shared.metrics import get_metrics, get_metrics_handler

logger = structlog.get_logger(__name__)

settings: Settings = get_settings()
metrics = get_metrics()

# ============================================================================
# Lifespan Management
# ============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager for startup and shutdown events.

    Handles:
    - Logging configuration
    - Database connection pool initialization
    - Graceful shutdown and resource cleanup
    """
    configure_logging(
        log_level=settings.log_level,
        json_logs=settings.json_logs,
        service_name=settings.app_name,
        environment=settings.environment
    )

    logger.info(
        "application_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment
    )

    try:
        pool = await init_db_pool()

        async with pool.acquire() as conn:
            version = await conn.fetchval("SELECT version()")
            logger.info("database_connected", postgres_version=version)

        _update_pool_metrics()

        logger.info("application_started", app_name=settings.app_name)

        yield

    except Exception as e:
        logger.error("application_startup_failed", error=str(e), exc_info=True)
        raise

    finally:
        logger.info("application_shutting_down")

        try:
            await close_db_pool()
            logger.info("application_shutdown_complete")
        except Exception as e:
            logger.error("application_shutdown_failed", error=str(e), exc_info=True)

# ============================================================================
# FastAPI Application
# ============================================================================

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description=(
        "Demo API serving greetings, dad jokes, name registration "
        "and weather-based outfit moods."
    ),
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
    debug=settings.debug,
)

# ============================================================================
# Middleware Configuration
# ============================================================================

if settings.cors_enabled:
    logger.info("configuring_cors", origins=settings.cors_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request logging, correlation IDs and metrics."""

    async def dispatch(self, request: Request, call_next):
        """Process request and log details."""
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())

        method = request.method
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"

        bind_context(correlation_id=correlation_id)
        metrics.http_requests_in_progress.labels(method=method).inc()
        start_time = time.perf_counter()

        logger.info("request_started", method=method, path=path, client_ip=client_ip)

        try:
            response = await call_next(request)

            duration = time.perf_counter() - start_time
            endpoint = _endpoint_label(request)

            metrics.http_requests.labels(
                method=method,
                endpoint=endpoint,
                status=response.status_code
            ).inc()
            metrics.http_request_duration.labels(
                method=method,
                endpoint=endpoint
            ).observe(duration)

            logger.info(
                "request_completed",
                method=method,
                path=path,
                status_code=response.status_code,
                duration=f"{duration:.3f}s"
            )

            response.headers["X-Correlation-ID"] = correlation_id
            return response

        except Exception as e:
            duration = time.perf_counter() - start_time
            endpoint = _endpoint_label(request)

            metrics.http_requests.labels(
                method=method,
                endpoint=endpoint,
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            ).inc()
            metrics.http_request_duration.labels(
                method=method,
                endpoint=endpoint
            ).observe(duration)

            logger.error(
                "request_failed",
                method=method,
                path=path,
                error=str(e),
                duration=f"{duration:.3f}s"
            )

            # 500 envelopes carry the correlation ID too
            response = await general_exception_handler(request, e)
            response.headers["X-Correlation-ID"] = correlation_id
            return response

        finally:
            metrics.http_requests_in_progress.labels(method=method).dec()
            unbind_context("correlation_id")


def _endpoint_label(request: Request) -> str:
    """Route template for metric labels, so unknown paths share one series."""
    route = request.scope.get("route")
    return getattr(route, "path", "unmatched")


app.add_middleware(RequestLoggingMiddleware)

# ============================================================================
# Exception Handlers
# ============================================================================

register_exception_handlers(app)

# ============================================================================
# API Routers
# ============================================================================

for router in ALL_ROUTERS:
    app.include_router(router)

# ============================================================================
# Health and Readiness Endpoints
# ============================================================================

@app.get("/health", tags=["Health"], response_class=JSONResponse)
async def health_check() -> Dict[str, Any]:
    """
    Health check endpoint.

    Returns basic health status without checking dependencies.
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment
    }


@app.get("/ready", tags=["Health"], response_class=JSONResponse)
async def readiness_check() -> JSONResponse:
    """
    Readiness check endpoint.

    Verifies the joke table can be queried before reporting ready and
    reports how many jokes it holds.
    """
    checks = {"database": "unknown"}
    joke_count = None

    try:
        joke_count = await DadJokeRepository(get_db_pool()).count()
        checks["database"] = "healthy"
    except Exception as e:
        logger.error("database_health_check_failed", error=str(e))
        checks["database"] = "unhealthy"

    _update_pool_metrics()

    all_healthy = all(state == "healthy" for state in checks.values())

    return JSONResponse(
        status_code=status.HTTP_200_OK if all_healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "ready" if all_healthy else "not_ready",
            "service": settings.app_name,
            "version": settings.app_version,
            "checks": checks,
            "jokes": joke_count
        }
    )


def _update_pool_metrics() -> None:
    try:
        pool = get_db_pool()
    except RuntimeError:
        return
    metrics.database_pool_size.labels(state="total").set(pool.get_size())
    metrics.database_pool_size.labels(state="idle").set(pool.get_idle_size())

# ============================================================================
# Metrics Endpoint
# ============================================================================

if settings.metrics_enabled:
    render_metrics = get_metrics_handler(metrics.registry)

    @app.get("/metrics", tags=["Monitoring"], response_class=PlainTextResponse)
    async def metrics_endpoint() -> Response:
        """Prometheus metrics endpoint."""
        _update_pool_metrics()
        return Response(content=render_metrics(), media_type=CONTENT_TYPE_LATEST)

# ============================================================================
# Application Entry Point
# ============================================================================

if __name__ == "__main__":
    logger.info(
        "starting_uvicorn_server",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )

    uvicorn.run(
        "api.src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=True,
    )
