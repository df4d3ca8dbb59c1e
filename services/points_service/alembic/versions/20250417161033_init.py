"""init users, tasks and completed_tasks

Revision ID: 20250417161033_init
Revises: 20240528_airdrop_log
Create Date: 2025-04-17 16:10:33.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID


# revision identifiers, used by Alembic.
revision: str = "20250417161033_init"
down_revision: Union[str, Sequence[str], None] = "20240528_airdrop_log"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _uuid_pk() -> sa.Column:
    return sa.Column(
        "id",
        UUID(as_uuid=True),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def upgrade() -> None:
    """Referral-point program tables."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    op.create_table(
        "users",
        _uuid_pk(),
        sa.Column("wallet_address", sa.Text(), nullable=False),
        sa.Column(
            "total_points", sa.Integer(), server_default=sa.text("0"), nullable=False
        ),
        sa.Column("referrer_id", UUID(as_uuid=True), nullable=True),
        sa.Column(
            "referral_code",
            UUID(as_uuid=True),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("wallet_address", name="uq_users_wallet_address"),
        sa.UniqueConstraint("referral_code", name="uq_users_referral_code"),
        sa.ForeignKeyConstraint(
            ["referrer_id"], ["users.id"], name="fk_users_referrer_id_users"
        ),
    )
    op.create_index("ix_users_referrer_id", "users", ["referrer_id"])

    op.create_table(
        "tasks",
        _uuid_pk(),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_tasks"),
    )

    op.create_table(
        "completed_tasks",
        _uuid_pk(),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("task_id", UUID(as_uuid=True), nullable=False),
        sa.Column(
            "completed_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_completed_tasks"),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], name="fk_completed_tasks_user_id_users"
        ),
        sa.ForeignKeyConstraint(
            ["task_id"], ["tasks.id"], name="fk_completed_tasks_task_id_tasks"
        ),
        sa.UniqueConstraint(
            "user_id", "task_id", name="uq_completed_tasks_user_id_task_id"
        ),
    )


def downgrade() -> None:
    op.drop_table("completed_tasks")
    op.drop_table("tasks")
    op.drop_index("ix_users_referrer_id", table_name="users")
    op.drop_table("users")
    # uuid-ossp is left installed, other schemas may rely on it
