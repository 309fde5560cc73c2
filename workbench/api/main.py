"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, workbench.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from workbench.api.deps.dependencies import get_service_cache
from workbench.configs import get_settings
from workbench.observability import configure_logging
from workbench.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from .routers import groups_router, health_router, metrics_router, transcripts_router

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Close the cached outbound HTTP clients on shutdown."""
    logger = logging.getLogger("uvicorn")
    logger.info("Workbench API starting")

    yield

    # Shutdown
    await get_service_cache().clear()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    configure_logging(get_settings().log_level)

    app = FastAPI(
        title="Workbench API",
        description="Workspace groups, connector state and meeting transcript summaries",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Observability middleware; correlation is outermost so request logs carry the id
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    for router in (health_router, groups_router, transcripts_router):
        app.include_router(router, prefix=API_PREFIX)
    app.include_router(metrics_router)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "workbench.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
