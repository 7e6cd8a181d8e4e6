"""
On-chain mirror of account operations.
"""

from app.services.blockchain_mirror.constants import REWARD_CONTRACT_ABI
from app.services.blockchain_mirror.reward_contract import RewardContractMirror

__all__ = ["REWARD_CONTRACT_ABI", "RewardContractMirror"]
