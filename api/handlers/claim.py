"""
Claim handlers.

Time-based reward stream.
"""

from aiohttp import web

from accrual.utils.formatters import format_amount
from api.handlers.common import body_key, build_service, path_key, read_json
from api.keys import SETTINGS_KEY
from app.services.reward_service import RewardService
from app.validators import parse_amount


def _reward_service(request: web.Request) -> RewardService:
    """Reward service honoring the claim cap setting."""
    return build_service(
        request,
        RewardService,
        enforce_claim_cap=request.app[SETTINGS_KEY].enforce_claim_cap,
    )


async def get_claim_status(request: web.Request) -> web.Response:
    """GET /api/claim/status/{nullifier_hash}"""
    claimable = await _reward_service(request).get_claimable(path_key(request))
    return web.json_response({"claimable": format_amount(claimable)})


async def execute_claim(request: web.Request) -> web.Response:
    """POST /api/claim/execute with nullifier_hash and amount."""
    data = await read_json(request)
    nullifier_hash = body_key(data)
    amount = parse_amount(data.get("amount"))

    result = await _reward_service(request).claim(nullifier_hash, amount)
    return web.json_response({"claimed": format_amount(result.amount)})
