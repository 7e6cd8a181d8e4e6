"""
API Initialization - Logging Module.

Configures loguru logger for the API server.
Sets up log rotation and retention policies.
"""

from loguru import logger

from app.config.settings import Settings


def setup_logging(settings: Settings) -> None:
    """Configure logger with file rotation."""
    logger.add(
        "logs/api.log",
        rotation="1 day",
        retention="7 days",
        level=settings.log_level,
        encoding="utf-8",
    )

    logger.info("Starting World Reward Coin API...")
