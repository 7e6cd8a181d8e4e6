"""
API middlewares.

Registered outermost first: CORS, error mapping, database session.
"""

from api.middlewares.cors import cors_middleware
from api.middlewares.database import database_middleware
from api.middlewares.errors import error_middleware


__all__ = ["cors_middleware", "database_middleware", "error_middleware"]
