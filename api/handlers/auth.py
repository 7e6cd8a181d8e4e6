"""
Identity verification handler.

Verifies a World ID proof and ensures an account exists for the
verified nullifier hash.
"""

from aiohttp import web

from accrual.exceptions import InvalidArgumentError
from api.handlers.common import body_key, build_service, read_json
from api.keys import WORLD_ID_KEY
from app.services.account_service import AccountService
from app.validators import validate_verification_level


async def verify_world_id(request: web.Request) -> web.Response:
    """
    POST /api/auth/verify-world-id

    Body: proof, merkle_root, nullifier_hash, verification_level.
    Accounts are created on first successful verification; an
    existing account keeps its stored verification level.
    """
    data = await read_json(request)
    nullifier_hash = body_key(data)

    proof = data.get("proof")
    merkle_root = data.get("merkle_root")
    if not isinstance(proof, str) or not proof:
        raise InvalidArgumentError("proof is required")
    if not isinstance(merkle_root, str) or not merkle_root:
        raise InvalidArgumentError("merkle_root is required")

    is_valid, level, error = validate_verification_level(data.get("verification_level"))
    if not is_valid:
        raise InvalidArgumentError(error)

    result = await request.app[WORLD_ID_KEY].verify(
        proof=proof,
        merkle_root=merkle_root,
        nullifier_hash=nullifier_hash,
        verification_level=level,
    )
    if not result.success:
        raise InvalidArgumentError("World ID verification failed")

    service = build_service(request, AccountService)
    account, _ = await service.register_verified(nullifier_hash, level)

    return web.json_response(
        {
            "success": True,
            "nullifier_hash": account.nullifier_hash,
            "verification_level": account.verification_level,
            "is_verified": account.is_verified,
        }
    )
