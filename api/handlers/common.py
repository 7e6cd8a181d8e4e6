"""
Handler helpers.

Request parsing and service construction shared by route handlers.
"""

from typing import Any, TypeVar

from aiohttp import web
from sqlalchemy.ext.asyncio import AsyncSession

from accrual.exceptions import InvalidArgumentError
from api.keys import CLOCK_KEY, MIRROR_KEY
from app.services.base_service import BaseService
from app.validators import parse_nullifier_hash


ServiceType = TypeVar("ServiceType", bound=BaseService)


def get_session(request: web.Request) -> AsyncSession:
    """Session opened by the database middleware."""
    return request["session"]


def build_service(
    request: web.Request, service_cls: type[ServiceType], **kwargs: Any
) -> ServiceType:
    """
    Instantiate a service bound to the request session.

    Args:
        request: Current request
        service_cls: Service class to build
        **kwargs: Extra service options

    Returns:
        Service instance sharing the application clock and mirror
    """
    return service_cls(
        get_session(request),
        clock=request.app[CLOCK_KEY],
        mirror=request.app[MIRROR_KEY],
        **kwargs,
    )


async def read_json(request: web.Request) -> dict[str, Any]:
    """
    Decode JSON object body.

    Raises:
        InvalidArgumentError: If body is not a JSON object
    """
    try:
        data = await request.json()
    except ValueError as e:
        raise InvalidArgumentError("Invalid JSON body") from e

    if not isinstance(data, dict):
        raise InvalidArgumentError("JSON body must be an object")
    return data


def path_key(request: web.Request) -> str:
    """Account key from the URL path."""
    return parse_nullifier_hash(request.match_info.get("nullifier_hash"))


def body_key(data: dict[str, Any]) -> str:
    """Account key from a JSON body."""
    return parse_nullifier_hash(data.get("nullifier_hash"))
