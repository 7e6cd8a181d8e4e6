"""
Route handlers.

All routes live under the /api prefix.
"""

from aiohttp import web

from api.handlers import auth, claim, health, staking, user
from app.config.constants import API_PREFIX


def setup_routes(app: web.Application) -> None:
    """Register all API routes."""
    router = app.router
    key = "{nullifier_hash}"

    router.add_post(f"{API_PREFIX}/auth/verify-world-id", auth.verify_world_id)

    router.add_get(f"{API_PREFIX}/user/balance/{key}", user.get_balance)
    router.add_get(f"{API_PREFIX}/user/account/{key}", user.get_account)
    router.add_get(f"{API_PREFIX}/user/transactions/{key}", user.get_transactions)

    router.add_get(f"{API_PREFIX}/claim/status/{key}", claim.get_claim_status)
    router.add_post(f"{API_PREFIX}/claim/execute", claim.execute_claim)

    router.add_post(f"{API_PREFIX}/stake", staking.stake)
    router.add_post(f"{API_PREFIX}/stake/unstake", staking.unstake)
    router.add_get(f"{API_PREFIX}/stake/reward/{key}", staking.get_reward)
    router.add_get(f"{API_PREFIX}/stake/total/{key}", staking.get_total_stake)
    router.add_post(f"{API_PREFIX}/stake/compound", staking.compound)
    router.add_post(f"{API_PREFIX}/stake/claim-reward", staking.claim_reward)

    router.add_get(f"{API_PREFIX}/health", health.health_handler)


__all__ = ["setup_routes"]
