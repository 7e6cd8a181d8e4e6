"""Create users and transactions tables.

Revision ID: 20261019_000001_create_users_and_transactions
Revises:
Create Date: 2026-10-19

"""

from typing import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20261019_000001_create_users_and_transactions"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create users and transactions tables."""
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nullifier_hash", sa.String(length=255), nullable=False),
        sa.Column("verification_level", sa.String(length=20), nullable=False),
        sa.Column("is_verified", sa.Boolean(), nullable=False),
        sa.Column("balance", sa.DECIMAL(precision=18, scale=8), nullable=False),
        sa.Column("total_staked", sa.DECIMAL(precision=18, scale=8), nullable=False),
        sa.Column("total_claimed", sa.DECIMAL(precision=18, scale=8), nullable=False),
        sa.Column("last_claim_time", sa.BigInteger(), nullable=False),
        sa.Column("last_stake_time", sa.BigInteger(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.CheckConstraint("balance >= 0", name="check_user_balance_non_negative"),
        sa.CheckConstraint(
            "total_staked >= 0", name="check_user_total_staked_non_negative"
        ),
        sa.CheckConstraint(
            "total_claimed >= 0", name="check_user_total_claimed_non_negative"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_users_nullifier_hash", "users", ["nullifier_hash"], unique=True
    )

    op.create_table(
        "transactions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("nullifier_hash", sa.String(length=255), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("amount", sa.DECIMAL(precision=18, scale=8), nullable=False),
        sa.Column("tx_hash", sa.String(length=66), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_transactions_nullifier_hash", "transactions", ["nullifier_hash"]
    )
    op.create_index("ix_transactions_created_at", "transactions", ["created_at"])


def downgrade() -> None:
    """Drop users and transactions tables."""
    op.drop_index("ix_transactions_created_at", table_name="transactions")
    op.drop_index("ix_transactions_nullifier_hash", table_name="transactions")
    op.drop_table("transactions")
    op.drop_index("ix_users_nullifier_hash", table_name="users")
    op.drop_table("users")
