"""FastAPI application factory.

Learn: App factory pattern — create_app() returns a configured FastAPI
instance. Lifespan manages startup/shutdown (logging, database tables,
engine disposal). Middleware, CORS, error handlers, and routers are all
registered here.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from skillswap import __version__
from skillswap.api import api_router
from skillswap.config import settings
from skillswap.errors import AuthenticationError, SkillSwapError
from skillswap.logging_config import configure_logging
from skillswap.middleware.request_id import RequestIdMiddleware
from skillswap.middleware.security import SecurityHeadersMiddleware

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Learn: Anything before `yield` runs at startup, after `yield` runs at
    shutdown. SQLite dev databases get their tables created on startup;
    PostgreSQL is migrated with Alembic instead.
    """
    configure_logging(level=settings.log_level, log_json=settings.log_json)
    logger.info(
        "skillswap.starting",
        version=__version__,
        environment=settings.environment,
        storage=settings.storage_backend,
        port=settings.port,
    )

    if settings.storage_backend == "sql" and settings.database_url.startswith("sqlite"):
        from skillswap.db.engine import create_tables

        await create_tables()
        logger.info("skillswap.tables_created")

    yield

    logger.info("skillswap.shutdown")
    if settings.storage_backend == "sql":
        from skillswap.db.engine import engine

        await engine.dispose()


async def skillswap_error_handler(request: Request, exc: SkillSwapError) -> JSONResponse:
    """Render a classified service error as {"detail": ...}."""
    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}
    if exc.status_code >= 500:
        logger.error("http.error", error=exc.detail, kind=type(exc).__name__)
    else:
        logger.info("http.rejected", status=exc.status_code, kind=type(exc).__name__)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=headers,
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Unparseable bodies are a client error like any other: 400."""
    return JSONResponse(status_code=400, content={"detail": "Malformed request body"})


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="Skill Swap API",
        description="Peer-to-peer skill exchange — users, swap requests, conversations",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Middleware stack ──────────────────────────────────────
    # Starlette middleware executes in reverse order of registration.
    # Request flow: CORS → Security → RequestId → handler
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(SkillSwapError, skillswap_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(api_router)
    return app


# Default app instance (used by uvicorn: skillswap.main:app)
app = create_app()
