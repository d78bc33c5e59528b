import logging
from contextlib import asynccontextmanager

import logfire
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from rolegate.application.api.v1.errors import map_error
from rolegate.application.api.v1.routes import admin, health
from rolegate.application.di import create_container
from rolegate.config import Config, configure_logging
from rolegate.domain.auth.port.credential import CredentialHasher
from rolegate.domain.shared.authorization.startup import validate_all_handlers
from rolegate.domain.shared.error import RoleGateError
from rolegate.infrastructure.persistence.database import create_tables
from rolegate.infrastructure.persistence.seed import ensure_bootstrap_owner
from rolegate.util.di.fastapi import setup_dishka

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = app.state.dishka_container
    config = await container.get(Config)

    if config.database.auto_migrate:
        engine = await container.get(AsyncEngine)
        await create_tables(engine)
        logger.info("Database tables ensured")

    if config.admin.bootstrap_owner is not None:
        await ensure_bootstrap_owner(
            await container.get(async_sessionmaker[AsyncSession]),
            config.admin.bootstrap_owner,
            await container.get(CredentialHasher),
        )

    yield

    await container.close()


def create_app(config: Config | None = None) -> FastAPI:
    """Create FastAPI application.

    Run with ``uvicorn --factory rolegate.application.api.rest.app:create_app``.
    """
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    # Configure logging early
    configure_logging(config.logging)
    logger.info("Starting %s server v%s", config.server.name, config.server.version)

    if not config.auth.jwt.secret:
        logger.warning("ROLEGATE_AUTH__JWT__SECRET is empty; every bearer token will be rejected")

    # Validate all handlers have authorization declarations (fail fast)
    validate_all_handlers()

    app_instance = FastAPI(
        title=config.server.name,
        description=config.server.description,
        version=config.server.version,
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    logfire.configure(
        service_name=config.server.name,
        service_version=config.server.version,
        send_to_logfire="if-token-present",
        console=False,
    )
    logfire.instrument_fastapi(app_instance)

    # Setup dependency injection
    container = create_container(config)
    setup_dishka(container, app_instance)

    # Register v1 routes with /api/v1 prefix
    app_instance.include_router(health.router, prefix="/api/v1")
    app_instance.include_router(admin.router, prefix="/api/v1")

    # Global RoleGate error handler - maps domain and infrastructure errors to HTTP responses
    @app_instance.exception_handler(RoleGateError)
    async def rolegate_error_handler(request: Request, exc: RoleGateError):
        http_exc = map_error(exc)
        return JSONResponse(
            status_code=http_exc.status_code,
            content=http_exc.detail,
            headers=http_exc.headers,
        )

    # Global exception handler - logs all unhandled exceptions
    @app_instance.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    return app_instance
