"""
User account handlers.

Read-only account queries.
"""

from aiohttp import web

from accrual.exceptions import InvalidArgumentError
from accrual.utils.formatters import format_amount
from api.handlers.common import build_service, path_key
from app.config.constants import DEFAULT_TRANSACTIONS_LIMIT, MAX_TRANSACTIONS_LIMIT
from app.models.transaction import TransactionRecord
from app.models.user_account import UserAccount
from app.services.account_service import AccountService


def serialize_account(account: UserAccount) -> dict:
    """Account snapshot as JSON-ready dict."""
    return {
        "nullifier_hash": account.nullifier_hash,
        "verification_level": account.verification_level,
        "is_verified": account.is_verified,
        "balance": format_amount(account.balance),
        "total_staked": format_amount(account.total_staked),
        "total_claimed": format_amount(account.total_claimed),
        "last_claim_time": account.last_claim_time,
        "last_stake_time": account.last_stake_time,
        "created_at": account.created_at.isoformat() if account.created_at else None,
    }


def serialize_transaction(entry: TransactionRecord) -> dict:
    """Transaction log entry as JSON-ready dict."""
    return {
        "id": entry.id,
        "type": entry.type,
        "amount": format_amount(entry.amount),
        "status": entry.status,
        "tx_hash": entry.tx_hash,
        "created_at": entry.created_at.isoformat() if entry.created_at else None,
    }


def _parse_limit(raw: str | None) -> int:
    """Parse ?limit= query parameter."""
    if raw is None or raw == "":
        return DEFAULT_TRANSACTIONS_LIMIT
    try:
        limit = int(raw)
    except ValueError as e:
        raise InvalidArgumentError("limit must be an integer") from e
    if limit < 1 or limit > MAX_TRANSACTIONS_LIMIT:
        raise InvalidArgumentError(f"limit must be between 1 and {MAX_TRANSACTIONS_LIMIT}")
    return limit


async def get_balance(request: web.Request) -> web.Response:
    """GET /api/user/balance/{nullifier_hash}"""
    service = build_service(request, AccountService)
    balance = await service.get_balance(path_key(request))
    return web.json_response({"balance": format_amount(balance)})


async def get_account(request: web.Request) -> web.Response:
    """GET /api/user/account/{nullifier_hash}"""
    service = build_service(request, AccountService)
    account = await service.get_account(path_key(request))
    return web.json_response(serialize_account(account))


async def get_transactions(request: web.Request) -> web.Response:
    """GET /api/user/transactions/{nullifier_hash}?limit=N"""
    nullifier_hash = path_key(request)
    limit = _parse_limit(request.query.get("limit"))

    service = build_service(request, AccountService)
    entries = await service.list_transactions(nullifier_hash, limit=limit)
    return web.json_response(
        {"transactions": [serialize_transaction(entry) for entry in entries]}
    )
