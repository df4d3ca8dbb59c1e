"""Airdrop ledger models: AirdropLog and FeePayment."""

import uuid
from datetime import datetime
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from services.points_service.errors import AppendOnlyViolation
from sqlalchemy import BigInteger, Boolean, DateTime, Text, event, false, func, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, object_session


class AirdropLog(Base):
    """Append-only record of a token transfer.

    Standalone: a wallet may receive an airdrop without having a users row.
    """

    __tablename__ = "airdrop_log"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        server_default=text("gen_random_uuid()"),
    )
    wallet_address: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    amount_sent: Mapped[int] = mapped_column(BigInteger, nullable=False)
    tx_signature: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    sent_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<AirdropLog {self.wallet_address} amount={self.amount_sent}>"


@event.listens_for(AirdropLog, "before_update")
def _refuse_airdrop_update(mapper, connection, target: AirdropLog) -> None:
    # merge() and same-value assignments mark the row dirty without changes
    session = object_session(target)
    if session is not None and not session.is_modified(
        target, include_collections=False
    ):
        return
    raise AppendOnlyViolation(f"airdrop_log row {target.id} cannot be updated")


@event.listens_for(AirdropLog, "before_delete")
def _refuse_airdrop_delete(mapper, connection, target: AirdropLog) -> None:
    raise AppendOnlyViolation(f"airdrop_log row {target.id} cannot be deleted")


class FeePayment(Base):
    """On-chain claim fee seen for a wallet. A signature unlocks one claim."""

    __tablename__ = "fee_payments"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        server_default=text("gen_random_uuid()"),
    )
    wallet_address: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    tx_signature: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    used: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default=false(), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<FeePayment {self.tx_signature} used={self.used}>"
