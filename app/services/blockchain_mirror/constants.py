"""
Reward contract constants.

ABI of the World Reward Coin contract functions mirrored by the backend.
"""


def _string(name: str) -> dict:
    return {"internalType": "string", "name": name, "type": "string"}


def _uint(name: str) -> dict:
    return {"internalType": "uint256", "name": name, "type": "uint256"}


def _write(name: str, *inputs: dict) -> dict:
    return {
        "type": "function",
        "name": name,
        "stateMutability": "nonpayable",
        "inputs": list(inputs),
        "outputs": [],
    }


REWARD_CONTRACT_ABI: list[dict] = [
    _write(
        "registerUser",
        _string("nullifierHash"),
        {"internalType": "bool", "name": "isVerified", "type": "bool"},
    ),
    _write("stake", _string("nullifierHash"), _uint("amount")),
    _write("unstake", _string("nullifierHash")),
    _write("claimStakingReward", _string("nullifierHash")),
    _write("compoundStakingReward", _string("nullifierHash")),
    _write("claimTimeReward", _string("nullifierHash"), _uint("amount")),
    {
        "type": "function",
        "name": "getUserInfo",
        "stateMutability": "view",
        "inputs": [_string("nullifierHash")],
        "outputs": [
            _uint("balance"),
            _uint("totalStaked"),
            _uint("lastClaimTime"),
            _uint("lastStakeTime"),
            {"internalType": "bool", "name": "isVerified", "type": "bool"},
            _uint("totalClaimed"),
            _uint("pendingReward"),
        ],
    },
]
