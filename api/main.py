"""
API main entry point.

Creates the database tables if needed and runs the aiohttp server.
"""

import asyncio
import sys
from pathlib import Path

from aiohttp import web
from loguru import logger


# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from api.app import create_app  # noqa: E402
from api.initialization.logging import setup_logging  # noqa: E402
from api.initialization.services import (  # noqa: E402
    initialize_mirror,
    initialize_world_id,
    report_missing_integrations,
)
from app.config.database import async_session_maker, engine  # noqa: E402
from app.config.settings import settings  # noqa: E402
from app.models.base import Base  # noqa: E402


async def init_models() -> None:
    """Create tables that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ready")


async def dispose_engine(app: web.Application) -> None:
    """Close database connections on shutdown."""
    await engine.dispose()
    logger.info("Database engine disposed")


async def build_app() -> web.Application:
    """Initialize dependencies and build the application."""
    setup_logging(settings)
    report_missing_integrations(settings)

    await init_models()

    app = create_app(
        async_session_maker,
        settings,
        world_id_service=initialize_world_id(settings),
        mirror=initialize_mirror(settings),
    )
    app.on_cleanup.append(dispose_engine)

    logger.info(f"API listening on http://{settings.api_host}:{settings.api_port}")
    logger.info(f"  - Health: http://{settings.api_host}:{settings.api_port}/api/health")
    return app


def main() -> None:
    """Run the API server."""
    try:
        web.run_app(
            build_app(),
            host=settings.api_host,
            port=settings.api_port,
            print=None,
        )
    except (KeyboardInterrupt, asyncio.CancelledError):
        logger.info("API stopped by user")


if __name__ == "__main__":
    main()
