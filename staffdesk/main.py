"""FastAPI application entry point.

    uvicorn staffdesk.main:app --reload

``create_app`` builds the application; ``app`` is the module-level instance
used by the ASGI server.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from staffdesk.core.config import get_settings
from staffdesk.core.container import (
    get_auth_provider,
    get_database,
    get_logger,
    get_path_revalidator,
)
from staffdesk.presentation.routers.api.middleware import TraceMiddleware
from staffdesk.presentation.routers.api.v1 import create_v1_router
from staffdesk.presentation.routers.api.v1.errors import register_exception_handlers


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan.

    - Startup: log configuration summary
    - Shutdown: dispose the database engine, close the identity provider
      HTTP client and the Redis pool
    """
    settings = get_settings()
    get_logger().info(
        "app.startup",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment.value,
    )

    yield

    await get_database().close()
    await get_auth_provider().aclose()
    await get_path_revalidator().aclose()
    get_logger().info("app.shutdown")


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Staff scheduling administration API",
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Wire trace middleware (request correlation)
    app.add_middleware(TraceMiddleware)

    # RFC 9457 error responses
    register_exception_handlers(app)

    app.include_router(create_v1_router())

    @app.get("/health")
    async def health() -> JSONResponse:
        """Health check for monitoring and load balancers.

        Returns 503 when the database is unreachable.
        """
        database_ok = await get_database().check_connection()
        return JSONResponse(
            status_code=200 if database_ok else 503,
            content={
                "status": "healthy" if database_ok else "unhealthy",
                "database": "ok" if database_ok else "unavailable",
            },
        )

    return app


app = create_app()
