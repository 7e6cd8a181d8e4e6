"""
Database middleware.

Opens one AsyncSession per request from the application's session
maker. Transaction boundaries are owned by the services.
"""

from collections.abc import Awaitable, Callable

from aiohttp import web

from api.keys import SESSION_MAKER_KEY


Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


@web.middleware
async def database_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Provide request["session"] for the duration of the handler."""
    session_maker = request.app[SESSION_MAKER_KEY]
    async with session_maker() as session:
        request["session"] = session
        return await handler(request)
