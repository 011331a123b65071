"""
Points API — FastAPI Application Factory
==========================================

What:  Creates and configures the ASGI application serving /points.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   uvicorn points_api.main:app (local development, containers).
       The Lambda deployment uses points_api.handlers instead.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐                   │
    │  │ Req ID   │→│  Logging        │                   │
    │  └──────────┘ └─────────────────┘                   │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────┐                  │
    │  │ POST /points │ │ GET /points  │                  │
    │  └──────────────┘ └──────────────┘                  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Payload→400 │ HttpError→status │ other→500   │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from points_api import __version__
from points_api.config import settings
from points_api.database import reset_resources
from points_api.exceptions import PointsAPIError
from points_api.logging_setup import setup_logging
from points_api.middleware.logging import RequestLoggingMiddleware
from points_api.middleware.request_id import RequestIDMiddleware, request_id_var
from points_api.responses import JSON_HEADERS, error_response_parts
from points_api.routes import points

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging and log the target table.
    Shutdown: drop the cached boto3 resource.
    """
    setup_logging()
    logger.info("Points API starting up...")
    logger.info(
        "Points table: %s (region=%s, conditional_writes=%s)",
        settings.points_table_name,
        settings.aws_region,
        settings.conditional_writes,
    )
    if settings.dynamodb_endpoint_url:
        logger.info("Using DynamoDB endpoint %s", settings.dynamodb_endpoint_url)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Points API shutting down...")
    reset_resources()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to HTTP responses.

    Handler hierarchy:
        MalformedPayloadError   → 400 {"error": ...}
        PayloadValidationError  → 400 {"errors": [...]}
        HttpError               → its status code, its message as body
        StoreUnavailableError   → 500 (generic body, details logged)
        Exception (fallback)    → 500 (generic body, stack trace logged)
    """

    def server_error(rid: str) -> JSONResponse:
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(PointsAPIError)
    async def handle_points_error(request: Request, exc: PointsAPIError):
        """Recognised kinds share the Lambda response mapping."""
        rid = request_id_var.get("")
        parts = error_response_parts(exc)
        if parts is None:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
            return server_error(rid)

        status_code, body = parts
        logger.info("[%s] %s → %d", rid, type(exc).__name__, status_code)
        return Response(content=body, status_code=status_code, headers=dict(JSON_HEADERS))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: generic 500, stack trace logged server-side only."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return server_error(rid)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Points API",
        description=(
            "Stores one points record per user in DynamoDB. "
            "POST /points creates a record for a new user; GET /points lists them all."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → route
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(points.router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "points_api.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )
