"""
Error middleware.

Maps domain errors to HTTP responses with a uniform JSON body:
{"error": <message>, "kind": <kind>, "retryable": <bool>}.
"""

from collections.abc import Awaitable, Callable

from aiohttp import web
from loguru import logger

from accrual.exceptions import AccrualError, ErrorKind


Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INVALID_ARGUMENT: 400,
    ErrorKind.CONFLICT: 409,
    ErrorKind.UNAVAILABLE: 503,
}


def error_response(error: AccrualError) -> web.Response:
    """Build JSON response for a domain error."""
    return web.json_response(
        {
            "error": error.message,
            "kind": error.kind.value,
            "retryable": error.retryable,
        },
        status=STATUS_BY_KIND.get(error.kind, 500),
    )


@web.middleware
async def error_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Convert raised errors to JSON responses."""
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except AccrualError as e:
        if e.retryable:
            logger.warning(
                f"{request.method} {request.path} failed ({e.kind.value}): {e.message}"
            )
        else:
            logger.debug(
                f"{request.method} {request.path} rejected ({e.kind.value}): {e.message}"
            )
        return error_response(e)
    except Exception as e:
        logger.exception(f"Unhandled error in {request.method} {request.path}: {e}")
        return web.json_response(
            {"error": "Internal server error", "kind": "internal", "retryable": False},
            status=500,
        )
