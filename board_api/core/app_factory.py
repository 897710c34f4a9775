"""Application factory for the FastAPI app.

Centralizes app construction (metadata, middleware, handlers, routers and
the service container) so tests can build isolated instances.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from board_api.api.deps import ServiceContainer, build_container
from board_api.api.routes import files_router, health_router, messages_router, users_router
from board_api.core.config import settings
from board_api.core.exception_handlers import setup_exception_handlers
from board_api.core.logging import configure_logging
from board_api.core.middleware import request_id_middleware
from board_api.core.openapi import apply_openapi_customizations


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    await app.state.container.session_provider.aclose()


def create_app(container: ServiceContainer | None = None) -> FastAPI:
    """Create and configure the FastAPI application instance.

    Args:
        container: Optional pre-built service container; built from
            settings when omitted.

    Returns:
        Configured FastAPI app with middleware, handlers, routers and docs.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Message Board API",
        description=(
            "Message board and per-user file area. Posting, uploads and deletes "
            "go through a rate-limited pipeline: identity resolution, per-user "
            "(or shared anonymous) token bucket quotas, then content validation."
        ),
        version="0.1.0",
        debug=settings.app.debug,
        lifespan=_lifespan,
    )
    app.state.container = container or build_container()

    app.middleware("http")(request_id_middleware)

    setup_exception_handlers(app)

    app.include_router(messages_router, prefix="/v1")
    app.include_router(files_router, prefix="/v1")
    app.include_router(users_router, prefix="/v1")
    app.include_router(health_router)

    apply_openapi_customizations(app)

    return app
