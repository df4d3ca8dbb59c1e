"""create airdrop_log

Revision ID: 20240528_airdrop_log
Revises:
Create Date: 2024-05-28 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision: str = "20240528_airdrop_log"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Append-only log of token transfers."""
    op.create_table(
        "airdrop_log",
        sa.Column(
            "id",
            UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("wallet_address", sa.Text(), nullable=False),
        sa.Column("amount_sent", sa.BigInteger(), nullable=False),
        sa.Column("tx_signature", sa.Text(), nullable=True),
        sa.Column(
            "sent_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_airdrop_log"),
    )
    op.create_index(
        "ix_airdrop_log_wallet_address", "airdrop_log", ["wallet_address"]
    )


def downgrade() -> None:
    op.drop_index("ix_airdrop_log_wallet_address", table_name="airdrop_log")
    op.drop_table("airdrop_log")
