"""claim tracking: users.has_claimed, tasks.description, fee_payments

Revision ID: 20250601_claim_tracking
Revises: 20250417161033_init
Create Date: 2025-06-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision: str = "20250601_claim_tracking"
down_revision: Union[str, Sequence[str], None] = "20250417161033_init"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column(
        "users",
        sa.Column(
            "has_claimed", sa.Boolean(), server_default=sa.false(), nullable=False
        ),
    )
    op.add_column("tasks", sa.Column("description", sa.Text(), nullable=True))

    op.create_table(
        "fee_payments",
        sa.Column(
            "id",
            UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("wallet_address", sa.Text(), nullable=False),
        sa.Column("tx_signature", sa.Text(), nullable=False),
        sa.Column("used", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_fee_payments"),
        sa.UniqueConstraint("tx_signature", name="uq_fee_payments_tx_signature"),
    )
    op.create_index(
        "ix_fee_payments_wallet_address", "fee_payments", ["wallet_address"]
    )


def downgrade() -> None:
    op.drop_index("ix_fee_payments_wallet_address", table_name="fee_payments")
    op.drop_table("fee_payments")
    op.drop_column("tasks", "description")
    op.drop_column("users", "has_claimed")
