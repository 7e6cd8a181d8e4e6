"""
API Initialization - Services Module.

Builds outbound clients from settings and reports integration status.
"""

from loguru import logger

from app.config.settings import Settings
from app.services.blockchain_mirror import RewardContractMirror
from app.services.world_id_service import WorldIDService


def initialize_world_id(settings: Settings) -> WorldIDService:
    """Create World ID verification client."""
    service = WorldIDService.from_settings(settings)
    if settings.world_id_app_id:
        logger.info(f"World ID verification enabled (action={settings.world_id_action})")
    else:
        logger.warning("World ID app not configured, verification requests will fail")
    return service


def initialize_mirror(settings: Settings) -> RewardContractMirror:
    """Create on-chain mirror (disabled when not fully configured)."""
    mirror = RewardContractMirror.from_settings(settings)
    if mirror.enabled:
        logger.info(f"Contract mirror enabled (chain_id={settings.chain_id})")
    else:
        logger.info("Contract mirror disabled, running database-only")
    return mirror


def report_missing_integrations(settings: Settings) -> None:
    """Log environment variables that are not set."""
    missing = settings.missing_integrations()
    if missing:
        logger.warning(f"Missing environment variables: {', '.join(missing)}")
        logger.warning("Some features may not work properly")
    else:
        logger.success("All integrations configured")
