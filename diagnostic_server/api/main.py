import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from diagnostic_server.core.config import Settings
from diagnostic_server.models.state import HealthState, ServerIdentity
from diagnostic_server.routers import echo, health

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
def create_app(
    settings: Settings,
    identity: ServerIdentity,
    params: Any,
    health_state: Optional[HealthState] = None,
) -> FastAPI:
    """Build the diagnostic server application around its injected state."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Started for %s", settings.base_path)
        yield

    app = FastAPI(
        title="Diagnostic Server",
        description="Echoes request metadata and exposes a togglable health check.",
        version="0.1.0",
        lifespan=lifespan,
        # The catch-all echo routes own every path, including the docs paths
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        openapi_tags=[
            {"name": "health", "description": "Health check and its toggles"},
            {"name": "echo", "description": "Catch-all request echo"},
        ],
    )

    app.state.settings = settings
    app.state.identity = identity
    app.state.params = params
    app.state.health = health_state if health_state is not None else HealthState()

    # Catch-all for truly unhandled exceptions only
    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled error for %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    # Routers; health must precede the catch-all echo routes
    app.include_router(health.router)
    app.include_router(echo.router)
    return app
