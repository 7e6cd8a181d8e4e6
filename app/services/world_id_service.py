"""
World ID verification service.

Delegates proof verification to the World ID developer API. The proof
is a black box here: the service only learns success/failure and
passes on the pseudonymous nullifier hash and verification tier.
"""

import asyncio
from dataclasses import dataclass
from typing import Any

import aiohttp
from loguru import logger

from accrual.core.models import VerificationLevel
from accrual.exceptions import UnavailableError
from app.config.settings import Settings
from app.utils.security import mask_nullifier


@dataclass
class VerificationResult:
    """Result of a World ID proof verification."""

    success: bool
    nullifier_hash: str
    verification_level: VerificationLevel
    error: str | None = None

    @property
    def is_verified(self) -> bool:
        """Orb-level proofs mark the account as verified."""
        return self.verification_level == VerificationLevel.ORB


class WorldIDService:
    """Client for the World ID cloud verification endpoint."""

    def __init__(
        self,
        app_id: str | None,
        action: str,
        verify_url: str,
        timeout: float,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        """
        Initialize World ID service.

        Args:
            app_id: World ID application ID
            action: Action identifier the proof was generated for
            verify_url: Base URL of the verify endpoint
            timeout: Request timeout in seconds
            session: Optional shared aiohttp session
        """
        self.app_id = app_id
        self.action = action
        self.verify_url = verify_url.rstrip("/")
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None

    @classmethod
    def from_settings(cls, settings: Settings) -> "WorldIDService":
        """Build service from application settings."""
        return cls(
            app_id=settings.world_id_app_id,
            action=settings.world_id_action,
            verify_url=settings.world_id_verify_url,
            timeout=settings.world_id_timeout,
        )

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the HTTP session if this service created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def verify(
        self,
        proof: str,
        merkle_root: str,
        nullifier_hash: str,
        verification_level: VerificationLevel,
    ) -> VerificationResult:
        """
        Verify a proof bundle with World ID.

        Args:
            proof: Zero-knowledge proof from the widget
            merkle_root: Merkle root the proof was generated against
            nullifier_hash: Pseudonymous per-action identifier
            verification_level: Claimed proof tier

        Returns:
            VerificationResult; success is False when World ID rejects the proof

        Raises:
            UnavailableError: If the service is not configured or unreachable
        """
        if not self.app_id:
            raise UnavailableError("World ID app is not configured")

        payload = {
            "nullifier_hash": nullifier_hash,
            "merkle_root": merkle_root,
            "proof": proof,
            "verification_level": verification_level.value,
            "action": self.action,
        }
        url = f"{self.verify_url}/{self.app_id}"

        session = await self._get_session()
        try:
            async with session.post(
                url,
                json=payload,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                data = await self._read_json(response)
                status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"World ID request failed: {e}")
            raise UnavailableError("Verification service unavailable") from e

        if status >= 500:
            logger.error(f"World ID server error: HTTP {status}")
            raise UnavailableError("Verification service unavailable")

        if status == 200 and data.get("success"):
            logger.info(
                f"World ID proof verified for {mask_nullifier(nullifier_hash)} "
                f"({verification_level.value})"
            )
            return VerificationResult(
                success=True,
                nullifier_hash=nullifier_hash,
                verification_level=verification_level,
            )

        detail = data.get("detail") or data.get("code") or f"HTTP {status}"
        logger.warning(
            f"World ID proof rejected for {mask_nullifier(nullifier_hash)}: {detail}"
        )
        return VerificationResult(
            success=False,
            nullifier_hash=nullifier_hash,
            verification_level=verification_level,
            error=str(detail),
        )

    @staticmethod
    async def _read_json(response: aiohttp.ClientResponse) -> dict[str, Any]:
        """Decode JSON body, tolerating non-JSON error pages."""
        try:
            data = await response.json(content_type=None)
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}
