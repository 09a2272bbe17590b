"""
FastAPI entry point for the subscription feed service.
Wires session, feed, search and player components at startup.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from subfeed.api import dependencies
from subfeed.api.routers import (
    feed_router,
    health_router,
    player_router,
    search_router,
    session_router,
)
from subfeed.config import get_settings
from subfeed.config.logging import configure_logging
from subfeed.core.exceptions import AppException
from subfeed.core.telemetry import setup_telemetry

logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan (Startup/Shutdown)
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Build the singletons and run identity initialization once."""
    settings = get_settings()
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION} (catalog={settings.CATALOG_BACKEND})")

    session = dependencies.wire_components()
    await session.initialize(dependencies.get_credentials())
    logger.info(f"Session ready: state={session.state.value}")

    yield

    logger.info("Shutting down application")
    gateway = dependencies.get_catalog_gateway()
    close = getattr(gateway, "aclose", None)
    if close is not None:
        await close()


# =============================================================================
# Exception Handlers
# =============================================================================


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render application errors as the shared error envelope."""
    if exc.status_code >= 500:
        logger.warning(f"{request.method} {request.url.path} failed: {exc.error_code} {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything else is a 500 with a generic body."""
    logger.exception(f"Unhandled exception on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
            }
        },
    )


# =============================================================================
# Application Factory
# =============================================================================


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    configure_logging(debug=settings.DEBUG)

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="""
        Subscription Feed API

        Rebuilds a home feed from the latest uploads of your subscriptions.

        - Short-form clips filtered out (under 60s or tagged #shorts)
        - No view counts, likes or comments anywhere
        - Video search with the same filter
        - Embedded player without related-video chrome
        """,
        lifespan=lifespan,
    )

    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    for router in (health_router, session_router, feed_router, search_router, player_router):
        app.include_router(router)

    setup_telemetry(app)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("subfeed.main:app", host="0.0.0.0", port=8000, reload=get_settings().DEBUG)
