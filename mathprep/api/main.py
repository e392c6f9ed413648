"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, uvicorn, mathprep.api.routers, mathprep.observability, mathprep.configs
System role: Application initialization and configuration
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mathprep import __version__
from mathprep.api.routers import (
    admin_router,
    flags_router,
    friends_router,
    health_router,
    leaderboard_router,
    practice_router,
    profiles_router,
    questions_router,
    rewards_router,
    tests_router,
)
from mathprep.boundary.db import dispose_async_engine
from mathprep.configs import get_settings
from mathprep.observability.logger import configure_logging
from mathprep.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging on startup and releases pooled database
    connections on shutdown.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Application startup: logging configured", extra={"environment": settings.environment})

    yield

    await dispose_async_engine()
    logger.info("Application shutdown")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title="MathPrep API",
        description="Math competition practice: adaptive sessions, tests, leaderboards and rewards",
        version=__version__,
        lifespan=lifespan,
    )

    # Added first = runs last
    app.add_middleware(CorrelationMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for router in (
        health_router,
        profiles_router,
        questions_router,
        practice_router,
        tests_router,
        leaderboard_router,
        rewards_router,
        flags_router,
        friends_router,
        admin_router,
    ):
        app.include_router(router, prefix=API_PREFIX)

    return app


app = create_app()


def main() -> None:
    import uvicorn

    uvicorn.run(
        "mathprep.api.main:app",
        host="0.0.0.0",
        port=8000,
    )


if __name__ == "__main__":
    main()
