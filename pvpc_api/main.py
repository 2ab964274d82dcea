"""
This module creates and configures the main FastAPI application for the
PVPC Spot Price API. It serves the Spanish day-ahead (PVPC) electricity
prices stored locally, their averages, a dashboard snapshot and usage
recommendations.

Tags:
    - fastapi
    - electricity-prices
    - rest-api
    - mvc-architecture

API Categories:
    - Information: System health and API metadata
    - Price Data: Hourly prices, dashboard and fetch trigger
    - Statistics: Daily, weekly and monthly averages

Run:
    uvicorn pvpc_api.main:create_app --factory
    python -m pvpc_api.main
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import ApplicationConfig
from .container import AppContainer, build_container
from .controllers import PvpcPriceController
from .errors import register_error_handling


logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def create_app(container: Optional[AppContainer] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        container: Prebuilt collaborators. When omitted the configuration is
            read from the environment and the price store is opened.

    Returns:
        FastAPI: Configured application; routes live under /api.
    """
    if container is None:
        config = ApplicationConfig.from_env()
        configure_logging(config.api.log_level)
        container = build_container(config)
    config = container.config

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"🚀 Starting {config.api.title} (timezone {container.clock.timezone_name})")
        yield
        container.close()
        logger.info("👋 Shutdown complete")

    app = FastAPI(
        title=config.api.title,
        description=config.api.description,
        version=config.api.version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "System Information",
                "description": "API health, version info, and price data status"
            },
            {
                "name": "Price Data",
                "description": "Hourly prices, dashboard snapshot, recommendations and fetch trigger"
            },
            {
                "name": "Statistics & Analytics",
                "description": "Daily, weekly and monthly price averages"
            },
        ]
    )
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.allow_origins,
        allow_credentials=config.api.allow_credentials,
        allow_methods=config.api.allow_methods,
        allow_headers=config.api.allow_headers,
    )

    register_error_handling(app, logger)

    app.include_router(
        PvpcPriceController().router,
        prefix="/api",
    )

    return app


if __name__ == "__main__":
    import uvicorn

    app_config = ApplicationConfig.from_env()
    uvicorn.run(
        "pvpc_api.main:create_app",
        factory=True,
        host=app_config.api.host,
        port=app_config.api.port,
        reload=app_config.api.reload,
        log_level=app_config.api.log_level.lower(),
    )
