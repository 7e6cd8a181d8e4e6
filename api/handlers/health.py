"""
Health check handler.

Reports liveness and which external integrations are configured.
"""

from aiohttp import web

from api.keys import SETTINGS_KEY
from app.utils.datetime_utils import utc_now


async def health_handler(request: web.Request) -> web.Response:
    """
    Health check endpoint.

    Returns:
        JSON response with status, timestamp and integration flags
    """
    return web.json_response(
        {
            "status": "ok",
            "timestamp": utc_now().isoformat(),
            "config": request.app[SETTINGS_KEY].integration_status(),
        }
    )
