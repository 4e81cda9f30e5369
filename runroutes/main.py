# runroutes/main.py

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from runroutes.api.v1 import routes_health, routes_recommend
from runroutes.core.config import settings
from runroutes.core.logger import logger
from runroutes.services.candidate_source import TrailRouterClient


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Own the outbound HTTP client for the lifetime of the app.
    """
    http_client = httpx.Client(timeout=settings.TRAILROUTER_TIMEOUT_S)
    app.state.candidate_source = TrailRouterClient.from_settings(settings, http_client)
    logger.info(
        "Candidate source ready (TrailRouter base URL configured: {})",
        bool(settings.TRAILROUTER_API_BASE),
    )
    try:
        yield
    finally:
        http_client.close()


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Recommends running routes near a starting location.",
        lifespan=lifespan,
    )

    # Routers
    app.include_router(routes_health.router, prefix="", tags=["health"])
    app.include_router(routes_recommend.router, prefix="", tags=["recommend"])

    return app


app = create_app()
