"""User model: wallet-identified participant of the points program."""

import uuid
from typing import Optional

from libs.db.base import Base
from sqlalchemy import Boolean, ForeignKey, Integer, Text, false, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship


class User(Base):
    """One row per wallet, created on first wallet interaction."""

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        server_default=text("uuid_generate_v4()"),
    )
    wallet_address: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    total_points: Mapped[int] = mapped_column(
        Integer, default=0, server_default=text("0"), nullable=False
    )
    referrer_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=True, index=True
    )
    referral_code: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        unique=True,
        default=uuid.uuid4,
        server_default=text("uuid_generate_v4()"),
        nullable=False,
    )
    has_claimed: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )

    # Self-referential referral tree
    referrer: Mapped[Optional["User"]] = relationship(
        back_populates="referrals", remote_side=[id]
    )
    referrals: Mapped[list["User"]] = relationship(back_populates="referrer")

    completed_tasks: Mapped[list["CompletedTask"]] = relationship(  # noqa: F821
        back_populates="user", lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<User {self.wallet_address} points={self.total_points}>"
