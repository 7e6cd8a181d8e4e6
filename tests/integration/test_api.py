"""Integration tests for the REST API over an in-memory database."""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from aiohttp.test_utils import TestClient, TestServer

from accrual import SECONDS_PER_YEAR
from accrual.core.models import VerificationLevel
from accrual.exceptions import UnavailableError
from api import create_app
from app.config.settings import Settings
from app.services.world_id_service import VerificationResult

KEY = "0x2bf8406809dcefb1a7d5f1d4c0f9e2b3a1c7d8e9"

pytestmark = pytest.mark.integration


def verification(success: bool = True, level: str = "orb") -> VerificationResult:
    return VerificationResult(
        success=success,
        nullifier_hash=KEY,
        verification_level=VerificationLevel(level),
        error=None if success else "invalid_proof",
    )


@pytest.fixture
def world_id():
    """Mock World ID client accepting every proof."""
    service = MagicMock()
    service.verify = AsyncMock(return_value=verification())
    service.close = AsyncMock()
    return service


@pytest_asyncio.fixture
async def client(session_maker, clock, world_id, mock_mirror):
    """Test client for an application bound to the in-memory database."""
    settings = Settings(_env_file=None, world_id_app_id="app_staging_test")
    app = create_app(
        session_maker,
        settings,
        world_id_service=world_id,
        mirror=mock_mirror,
        clock=clock,
    )
    async with TestClient(TestServer(app)) as test_client:
        yield test_client


async def register(client: TestClient, level: str = "orb") -> dict:
    response = await client.post(
        "/api/auth/verify-world-id",
        json={
            "proof": "0xproof",
            "merkle_root": "0xroot",
            "nullifier_hash": KEY,
            "verification_level": level,
        },
    )
    assert response.status == 200
    return await response.json()


async def claim(client: TestClient, amount) -> dict:
    response = await client.post("/api/claim/execute", json={"nullifier_hash": KEY, "amount": amount})
    assert response.status == 200
    return await response.json()


class TestHealth:
    """Tests for the health endpoint."""

    @pytest.mark.asyncio
    async def test_health(self, client: TestClient) -> None:
        """Health reports status, timestamp and integration flags."""
        response = await client.get("/api/health")
        data = await response.json()

        assert response.status == 200
        assert data["status"] == "ok"
        assert "timestamp" in data
        assert data["config"]["worldId"] is True
        assert set(data["config"]) == {"worldId", "contract", "rpc", "privateKey"}

    @pytest.mark.asyncio
    async def test_cors_headers(self, client: TestClient) -> None:
        """Responses and preflights carry permissive CORS headers."""
        response = await client.get("/api/health")
        assert response.headers["Access-Control-Allow-Origin"] == "*"

        preflight = await client.options("/api/stake")
        assert preflight.status == 204
        assert "POST" in preflight.headers["Access-Control-Allow-Methods"]


class TestAuth:
    """Tests for identity verification."""

    @pytest.mark.asyncio
    async def test_verify_creates_account(self, client: TestClient, world_id) -> None:
        """Successful verification creates an account."""
        data = await register(client)

        assert data == {
            "success": True,
            "nullifier_hash": KEY,
            "verification_level": "orb",
            "is_verified": True,
        }
        world_id.verify.assert_awaited_once()

        balance = await client.get(f"/api/user/balance/{KEY}")
        assert await balance.json() == {"balance": "0.00000000"}

    @pytest.mark.asyncio
    async def test_verify_failure(self, client: TestClient, world_id) -> None:
        """A rejected proof returns 400 and creates nothing."""
        world_id.verify.return_value = verification(success=False)

        response = await client.post(
            "/api/auth/verify-world-id",
            json={
                "proof": "0xproof",
                "merkle_root": "0xroot",
                "nullifier_hash": KEY,
                "verification_level": "orb",
            },
        )
        data = await response.json()

        assert response.status == 400
        assert data["kind"] == "invalid_argument"

        missing = await client.get(f"/api/user/balance/{KEY}")
        assert missing.status == 404

    @pytest.mark.asyncio
    async def test_verify_missing_fields(self, client: TestClient, world_id) -> None:
        """Incomplete proof bundles are rejected before verification."""
        response = await client.post(
            "/api/auth/verify-world-id",
            json={"nullifier_hash": KEY, "verification_level": "orb"},
        )
        assert response.status == 400
        world_id.verify.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_verification_service_down(self, client: TestClient, world_id) -> None:
        """Identity service outages map to a retryable 503."""
        world_id.verify.side_effect = UnavailableError("Verification service unavailable")

        response = await client.post(
            "/api/auth/verify-world-id",
            json={
                "proof": "0xproof",
                "merkle_root": "0xroot",
                "nullifier_hash": KEY,
                "verification_level": "device",
            },
        )
        data = await response.json()

        assert response.status == 503
        assert data == {
            "error": "Verification service unavailable",
            "kind": "unavailable",
            "retryable": True,
        }

    @pytest.mark.asyncio
    async def test_malformed_json(self, client: TestClient) -> None:
        """Unparseable bodies are invalid arguments."""
        response = await client.post(
            "/api/auth/verify-world-id",
            data="{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status == 400
        assert (await response.json())["error"] == "Invalid JSON body"


class TestUserEndpoints:
    """Tests for read-only account endpoints."""

    @pytest.mark.asyncio
    async def test_unknown_user(self, client: TestClient) -> None:
        """Unknown keys return 404 with the error envelope."""
        response = await client.get(f"/api/user/balance/{KEY}")

        assert response.status == 404
        assert await response.json() == {
            "error": "User not found",
            "kind": "not_found",
            "retryable": False,
        }

    @pytest.mark.asyncio
    async def test_account_snapshot(self, client: TestClient, clock) -> None:
        """Account endpoint returns balances and clocks."""
        await register(client, level="device")
        response = await client.get(f"/api/user/account/{KEY}")
        data = await response.json()

        assert response.status == 200
        assert data["verification_level"] == "device"
        assert data["is_verified"] is False
        assert data["total_staked"] == "0.00000000"
        assert data["last_claim_time"] == clock.now

    @pytest.mark.asyncio
    async def test_transactions(self, client: TestClient, clock) -> None:
        """Transaction log is returned newest first and honors limit."""
        await register(client)
        clock.advance(10)
        await claim(client, "1")
        clock.advance(10)
        await claim(client, "2")

        response = await client.get(f"/api/user/transactions/{KEY}", params={"limit": "1"})
        data = await response.json()

        assert response.status == 200
        assert len(data["transactions"]) == 1
        assert data["transactions"][0]["type"] == "claim"
        assert data["transactions"][0]["amount"] == "2.00000000"

    @pytest.mark.asyncio
    async def test_transactions_invalid_limit(self, client: TestClient) -> None:
        """Non-numeric limits are rejected."""
        await register(client)
        response = await client.get(f"/api/user/transactions/{KEY}", params={"limit": "many"})
        assert response.status == 400


class TestClaimEndpoints:
    """Tests for the claim stream over HTTP."""

    @pytest.mark.asyncio
    async def test_claim_flow(self, client: TestClient, clock, mock_mirror) -> None:
        """Claimable amount accrues and can be claimed."""
        await register(client)
        clock.advance(100)

        status = await client.get(f"/api/claim/status/{KEY}")
        assert await status.json() == {"claimable": "0.00240000"}

        assert await claim(client, "0.0024") == {"claimed": "0.00240000"}

        balance = await client.get(f"/api/user/balance/{KEY}")
        assert await balance.json() == {"balance": "0.00240000"}
        mock_mirror.schedule.assert_called_with("claim_time_reward", KEY, Decimal("0.0024"))

    @pytest.mark.asyncio
    async def test_claim_zero(self, client: TestClient) -> None:
        """Zero claims are rejected."""
        await register(client)
        response = await client.post("/api/claim/execute", json={"nullifier_hash": KEY, "amount": 0})
        data = await response.json()

        assert response.status == 400
        assert data["error"] == "No claimable amount"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", ["abc", "NaN", None])
    async def test_claim_invalid_amount(self, client: TestClient, amount) -> None:
        """Malformed amounts are rejected."""
        await register(client)
        response = await client.post("/api/claim/execute", json={"nullifier_hash": KEY, "amount": amount})
        assert response.status == 400

    @pytest.mark.asyncio
    async def test_claim_past_storage_limit(self, client: TestClient) -> None:
        """A claim that would overflow the stored balance is a 400."""
        await register(client)
        await claim(client, "9999999999")

        response = await client.post("/api/claim/execute", json={"nullifier_hash": KEY, "amount": "1"})
        data = await response.json()

        assert response.status == 400
        assert data["kind"] == "invalid_argument"
        balance = await client.get(f"/api/user/balance/{KEY}")
        assert await balance.json() == {"balance": "9999999999.00000000"}

    @pytest.mark.asyncio
    async def test_claim_unknown_user(self, client: TestClient) -> None:
        """Claims for unknown keys return 404."""
        response = await client.post("/api/claim/execute", json={"nullifier_hash": KEY, "amount": "1"})
        assert response.status == 404


class TestStakingEndpoints:
    """Tests for the staking stream over HTTP."""

    @pytest.mark.asyncio
    async def test_stake_year_unstake(self, client: TestClient, clock) -> None:
        """1000 staked for one year earns 700 and unstakes to 1700."""
        await register(client)
        clock.advance(10)
        await claim(client, "1000")

        response = await client.post("/api/stake", json={"nullifier_hash": KEY, "amount": "1000"})
        assert await response.json() == {"staked": "1000.00000000"}

        clock.advance(SECONDS_PER_YEAR)
        reward = await client.get(f"/api/stake/reward/{KEY}")
        assert await reward.json() == {"reward": "700.00000000"}

        total = await client.get(f"/api/stake/total/{KEY}")
        assert await total.json() == {"total_stake": "1000.00000000"}

        unstaked = await client.post("/api/stake/unstake", json={"nullifier_hash": KEY})
        assert await unstaked.json() == {"unstaked": "1700.00000000"}

        balance = await client.get(f"/api/user/balance/{KEY}")
        assert await balance.json() == {"balance": "1700.00000000"}

    @pytest.mark.asyncio
    async def test_compound_and_claim_reward(self, client: TestClient, clock) -> None:
        """Compound grows the stake; claim-reward pays interest out."""
        await register(client)
        clock.advance(10)
        await claim(client, "1000")
        await client.post("/api/stake", json={"nullifier_hash": KEY, "amount": 1000})

        clock.advance(SECONDS_PER_YEAR)
        compounded = await client.post("/api/stake/compound", json={"nullifier_hash": KEY})
        assert await compounded.json() == {"compounded": "700.00000000"}

        clock.advance(SECONDS_PER_YEAR)
        harvested = await client.post("/api/stake/claim-reward", json={"nullifier_hash": KEY})
        assert await harvested.json() == {"claimed": "1190.00000000"}

    @pytest.mark.asyncio
    async def test_stake_more_than_balance(self, client: TestClient) -> None:
        """Staking beyond the balance is rejected."""
        await register(client)
        response = await client.post("/api/stake", json={"nullifier_hash": KEY, "amount": "5"})
        data = await response.json()

        assert response.status == 400
        assert data["error"] == "Invalid amount"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/api/stake/unstake", "/api/stake/compound", "/api/stake/claim-reward"])
    async def test_nothing_staked(self, client: TestClient, path: str) -> None:
        """Staking operations without a position are rejected."""
        await register(client)
        response = await client.post(path, json={"nullifier_hash": KEY})
        data = await response.json()

        assert response.status == 400
        assert data["error"] == "No staked amount"

    @pytest.mark.asyncio
    async def test_missing_key(self, client: TestClient) -> None:
        """Bodies without a key are rejected."""
        response = await client.post("/api/stake/unstake", json={})
        assert response.status == 400
