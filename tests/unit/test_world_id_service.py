"""Tests for WorldIDService with a mocked aiohttp session."""

import json
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from accrual.core.models import VerificationLevel
from accrual.exceptions import UnavailableError
from app.services.world_id_service import WorldIDService


def make_session(status: int = 200, payload=None, json_error: Exception | None = None):
    """Build a mock aiohttp session whose post() yields one response."""
    response = MagicMock()
    response.status = status
    if json_error is not None:
        response.json = AsyncMock(side_effect=json_error)
    else:
        response.json = AsyncMock(return_value=payload)

    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=response)
    context.__aexit__ = AsyncMock(return_value=False)

    session = MagicMock()
    session.closed = False
    session.post = MagicMock(return_value=context)
    session.close = AsyncMock()
    return session


def make_service(session, app_id: str | None = "app_staging_123") -> WorldIDService:
    return WorldIDService(
        app_id=app_id,
        action="claim-reward",
        verify_url="https://developer.worldcoin.org/api/v1/verify/",
        timeout=5.0,
        session=session,
    )


async def verify(service: WorldIDService, level=VerificationLevel.ORB):
    return await service.verify(
        proof="0xproof",
        merkle_root="0xroot",
        nullifier_hash="0x2bf8406809dcefb1a7d5f1d4",
        verification_level=level,
    )


class TestWorldIDService:
    """Tests for proof verification."""

    @pytest.mark.asyncio
    async def test_successful_verification(self) -> None:
        """HTTP 200 with success=true yields a successful result."""
        session = make_session(200, {"success": True, "action": "claim-reward"})
        result = await verify(make_service(session))

        assert result.success is True
        assert result.is_verified is True
        assert result.error is None

    @pytest.mark.asyncio
    async def test_request_payload(self) -> None:
        """Proof bundle and action are posted to {verify_url}/{app_id}."""
        session = make_session(200, {"success": True})
        await verify(make_service(session), level=VerificationLevel.DEVICE)

        args, kwargs = session.post.call_args
        assert args[0] == "https://developer.worldcoin.org/api/v1/verify/app_staging_123"
        assert kwargs["json"] == {
            "nullifier_hash": "0x2bf8406809dcefb1a7d5f1d4",
            "merkle_root": "0xroot",
            "proof": "0xproof",
            "verification_level": "device",
            "action": "claim-reward",
        }
        assert isinstance(kwargs["timeout"], aiohttp.ClientTimeout)

    @pytest.mark.asyncio
    async def test_rejected_proof(self) -> None:
        """A 400 answer is a negative result, not an error."""
        session = make_session(400, {"code": "invalid_proof", "detail": "The provided proof is invalid."})
        result = await verify(make_service(session))

        assert result.success is False
        assert result.error == "The provided proof is invalid."

    @pytest.mark.asyncio
    async def test_success_flag_false(self) -> None:
        """HTTP 200 without success=true is a negative result."""
        session = make_session(200, {"success": False, "code": "already_verified"})
        result = await verify(make_service(session))

        assert result.success is False
        assert result.error == "already_verified"

    @pytest.mark.asyncio
    async def test_non_json_body(self) -> None:
        """Non-JSON error pages fall back to the HTTP status."""
        session = make_session(403, json_error=json.JSONDecodeError("bad", "<html>", 0))
        result = await verify(make_service(session))

        assert result.success is False
        assert result.error == "HTTP 403"

    @pytest.mark.asyncio
    async def test_server_error_unavailable(self) -> None:
        """5xx answers raise UnavailableError."""
        session = make_session(502, {})
        with pytest.raises(UnavailableError):
            await verify(make_service(session))

    @pytest.mark.asyncio
    async def test_transport_error_unavailable(self) -> None:
        """Connection failures raise UnavailableError."""
        session = make_session()
        session.post.side_effect = aiohttp.ClientConnectionError("connection refused")
        with pytest.raises(UnavailableError):
            await verify(make_service(session))

    @pytest.mark.asyncio
    async def test_timeout_unavailable(self) -> None:
        """Timeouts raise UnavailableError."""
        session = make_session()
        session.post.side_effect = TimeoutError()
        with pytest.raises(UnavailableError):
            await verify(make_service(session))

    @pytest.mark.asyncio
    async def test_not_configured(self) -> None:
        """Missing app ID raises UnavailableError without a request."""
        session = make_session()
        with pytest.raises(UnavailableError):
            await verify(make_service(session, app_id=None))
        session.post.assert_not_called()

    @pytest.mark.asyncio
    async def test_close_keeps_shared_session(self) -> None:
        """A session passed in is not closed by the service."""
        session = make_session()
        await make_service(session).close()
        session.close.assert_not_called()
