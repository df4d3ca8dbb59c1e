"""Datetime utilities for timezone-aware UTC timestamps.

Usage:
    from libs.common.datetime_utils import utc_now

    sent_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, server_default=func.now()
    )
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC datetime.

    Every timestamp column in the points schema is TIMESTAMPTZ, so naive
    values from datetime.utcnow() must never be written.
    """
    return datetime.now(timezone.utc)
