"""
Services.

Business logic layer.
"""

from app.services.account_service import AccountService
from app.services.base_service import BaseService
from app.services.blockchain_mirror import RewardContractMirror
from app.services.reward_service import RewardService
from app.services.staking_service import StakingService
from app.services.world_id_service import VerificationResult, WorldIDService


__all__ = [
    "AccountService",
    "BaseService",
    "RewardContractMirror",
    "RewardService",
    "StakingService",
    "VerificationResult",
    "WorldIDService",
]
