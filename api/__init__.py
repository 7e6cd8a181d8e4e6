"""
REST API package.

aiohttp application exposing account, claim and staking operations.
"""

from api.app import create_app


__all__ = ["create_app"]
