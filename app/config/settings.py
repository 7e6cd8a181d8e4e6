"""
Application settings.

Loads configuration from environment variables using pydantic-settings.
"""

from loguru import logger
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from eth_utils import to_checksum_address

from app.config.constants import (
    DEFAULT_API_PORT,
    DEFAULT_CHAIN_ID,
    WORLD_ID_TIMEOUT,
    WORLD_ID_VERIFY_URL,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite+aiosqlite:///./database.sqlite"
    database_echo: bool = False

    # HTTP API
    api_host: str = "0.0.0.0"
    api_port: int = Field(
        default=DEFAULT_API_PORT, ge=1, le=65535, description="REST API port"
    )

    # World ID verification
    world_id_app_id: str | None = None
    world_id_action: str = "claim-reward"
    world_id_verify_url: str = WORLD_ID_VERIFY_URL
    world_id_timeout: float = Field(
        default=WORLD_ID_TIMEOUT, gt=0, description="Verification request timeout (seconds)"
    )

    # On-chain mirror (optional)
    rpc_url: str | None = None
    contract_address: str | None = None
    wallet_private_key: str | None = None
    chain_id: int = Field(default=DEFAULT_CHAIN_ID, gt=0, description="EVM chain ID")

    # Claim policy: cap client-supplied claim amounts to server-side accrual
    enforce_claim_cap: bool = Field(
        default=False,
        description="Reject claim amounts above the server-computed claimable amount",
    )

    # Application
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name."""
        level = v.strip().upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @field_validator("contract_address")
    @classmethod
    def validate_contract_address(cls, v: str | None) -> str | None:
        """Checksum contract address if set."""
        if not v or not v.strip():
            return None
        try:
            return to_checksum_address(v.strip())
        except ValueError as e:
            raise ValueError(f"Invalid contract address: {v}") from e

    @model_validator(mode="after")
    def validate_production(self) -> "Settings":
        """Validate production-specific requirements."""
        if self.environment == "production":
            if self.debug:
                raise ValueError(
                    "DEBUG must be False in production environment. "
                    "Set DEBUG=false in your .env file."
                )
            if not self.world_id_app_id:
                logger.warning(
                    "WORLD_ID_APP_ID is not set in production. "
                    "Identity verification requests will fail."
                )
        return self

    @property
    def mirror_enabled(self) -> bool:
        """True when every on-chain mirror setting is present."""
        return bool(self.rpc_url and self.contract_address and self.wallet_private_key)

    def integration_status(self) -> dict[str, bool]:
        """Configured state of each external integration."""
        return {
            "worldId": bool(self.world_id_app_id),
            "contract": bool(self.contract_address),
            "rpc": bool(self.rpc_url),
            "privateKey": bool(self.wallet_private_key),
        }

    def missing_integrations(self) -> list[str]:
        """Environment variable names of unset integrations."""
        names = {
            "worldId": "WORLD_ID_APP_ID",
            "contract": "CONTRACT_ADDRESS",
            "rpc": "RPC_URL",
            "privateKey": "WALLET_PRIVATE_KEY",
        }
        return [
            names[key]
            for key, configured in self.integration_status().items()
            if not configured
        ]


settings = Settings()
