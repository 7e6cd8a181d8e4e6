"""
Application keys.

Typed keys for objects shared through the aiohttp application.
"""

from collections.abc import Callable

from aiohttp import web
from sqlalchemy.ext.asyncio import async_sessionmaker

from app.config.settings import Settings
from app.services.blockchain_mirror import RewardContractMirror
from app.services.world_id_service import WorldIDService


SESSION_MAKER_KEY = web.AppKey("session_maker", async_sessionmaker)
SETTINGS_KEY = web.AppKey("settings", Settings)
WORLD_ID_KEY = web.AppKey("world_id", WorldIDService)
MIRROR_KEY = web.AppKey("mirror", RewardContractMirror)
CLOCK_KEY: web.AppKey[Callable[[], int]] = web.AppKey("clock")
