"""
Staking handlers.
"""

from aiohttp import web

from accrual.utils.formatters import format_amount
from api.handlers.common import body_key, build_service, path_key, read_json
from app.services.account_service import AccountService
from app.services.staking_service import StakingService
from app.validators import parse_amount


async def stake(request: web.Request) -> web.Response:
    """POST /api/stake with nullifier_hash and amount."""
    data = await read_json(request)
    nullifier_hash = body_key(data)
    amount = parse_amount(data.get("amount"))

    result = await build_service(request, StakingService).stake(nullifier_hash, amount)
    return web.json_response({"staked": format_amount(result.amount)})


async def unstake(request: web.Request) -> web.Response:
    """POST /api/stake/unstake"""
    data = await read_json(request)
    result = await build_service(request, StakingService).unstake(body_key(data))
    return web.json_response({"unstaked": format_amount(result.amount)})


async def get_reward(request: web.Request) -> web.Response:
    """GET /api/stake/reward/{nullifier_hash}"""
    service = build_service(request, StakingService)
    reward = await service.get_staking_reward(path_key(request))
    return web.json_response({"reward": format_amount(reward)})


async def get_total_stake(request: web.Request) -> web.Response:
    """GET /api/stake/total/{nullifier_hash}"""
    service = build_service(request, AccountService)
    total = await service.get_total_staked(path_key(request))
    return web.json_response({"total_stake": format_amount(total)})


async def compound(request: web.Request) -> web.Response:
    """POST /api/stake/compound"""
    data = await read_json(request)
    result = await build_service(request, StakingService).compound(body_key(data))
    return web.json_response({"compounded": format_amount(result.amount)})


async def claim_reward(request: web.Request) -> web.Response:
    """POST /api/stake/claim-reward"""
    data = await read_json(request)
    result = await build_service(request, StakingService).claim_staking_reward(
        body_key(data)
    )
    return web.json_response({"claimed": format_amount(result.amount)})
