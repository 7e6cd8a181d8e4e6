"""
Application factory.

Builds the aiohttp application with middlewares, routes and the
shared services stored under typed application keys.
"""

from collections.abc import Callable

from aiohttp import web
from loguru import logger
from sqlalchemy.ext.asyncio import async_sessionmaker

from api.handlers import setup_routes
from api.keys import (
    CLOCK_KEY,
    MIRROR_KEY,
    SESSION_MAKER_KEY,
    SETTINGS_KEY,
    WORLD_ID_KEY,
)
from api.middlewares import (
    cors_middleware,
    database_middleware,
    error_middleware,
)
from app.config.settings import Settings
from app.services.blockchain_mirror import RewardContractMirror
from app.services.world_id_service import WorldIDService
from app.utils.datetime_utils import utc_timestamp


def create_app(
    session_maker: async_sessionmaker,
    settings: Settings,
    world_id_service: WorldIDService | None = None,
    mirror: RewardContractMirror | None = None,
    clock: Callable[[], int] = utc_timestamp,
) -> web.Application:
    """
    Create REST API application.

    Args:
        session_maker: Session factory used per request
        settings: Application settings
        world_id_service: Identity verification client (built from settings if None)
        mirror: On-chain mirror (built from settings if None)
        clock: Returns current time in epoch seconds

    Returns:
        Configured aiohttp application
    """
    app = web.Application(
        middlewares=[cors_middleware, error_middleware, database_middleware]
    )

    app[SESSION_MAKER_KEY] = session_maker
    app[SETTINGS_KEY] = settings
    app[WORLD_ID_KEY] = world_id_service or WorldIDService.from_settings(settings)
    app[MIRROR_KEY] = mirror or RewardContractMirror.from_settings(settings)
    app[CLOCK_KEY] = clock

    setup_routes(app)
    app.on_cleanup.append(_close_services)

    return app


async def _close_services(app: web.Application) -> None:
    """Close outbound clients and drain pending mirror calls."""
    logger.info("Closing API services...")
    await app[MIRROR_KEY].close()
    await app[WORLD_ID_KEY].close()
