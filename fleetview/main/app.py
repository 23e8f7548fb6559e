"""
FastAPI application factory - Main Layer

``create_app`` wires the container, the middleware stack and the routers.
The module-level ``app`` is what uvicorn serves.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fleetview.main.config import AppSettings, get_settings
from fleetview.main.container import app_lifespan, init_container
from fleetview.presentation.controllers import (
    fleet_router,
    reports_router,
    system_router,
    trends_router,
)
from fleetview.shared import configure_logging, get_logger, update_logging_from_settings

# Bootstrap from LOG_* variables until the settings are parsed.
configure_logging()

logger = get_logger(__name__)

ROUTERS = (system_router, fleet_router, reports_router, trends_router)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.started_at = datetime.now(timezone.utc)

    async with app_lifespan() as container:
        app.state.container = container
        logger.info(
            "app.started",
            version=app.version,
            started_at=app.state.started_at.isoformat(),
        )
        yield

    uptime = datetime.now(timezone.utc) - app.state.started_at
    logger.info("app.stopped", uptime_seconds=round(uptime.total_seconds(), 1))


def create_app(settings: AppSettings | None = None) -> FastAPI:
    """Build the application; settings default to the environment."""
    settings = settings or get_settings()
    update_logging_from_settings(settings)
    init_container(settings)

    app = FastAPI(
        title=settings.service.title,
        description=settings.service.description,
        version=settings.service.version,
        debug=settings.service.debug,
        lifespan=lifespan,
    )

    # The dashboard front end is served from another origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PATCH"],
        allow_headers=["*"],
    )

    for router in ROUTERS:
        app.include_router(router)

    logger.debug(
        "app.created",
        environment=settings.environment.value,
        routes=len(app.routes),
    )
    return app


app = create_app()
