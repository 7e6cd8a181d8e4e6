"""World Reward Coin application layer."""
