"""Typed errors for writes rejected by the points schema.

PostgreSQL enforces the structural invariants (unique wallet, one completion
per user/task, referential integrity). The driver reports them as
``IntegrityError``; callers get one of the exceptions below instead, keyed on
the constraint name from ``libs.db.base.NAMING_CONVENTION``.

Usage:
    async with guard_constraints(db):
        db.add(User(wallet_address=wallet))
        await db.commit()
"""

import contextlib
from typing import AsyncIterator, Optional

from libs.common.logging import get_logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)

FOREIGN_KEY_VIOLATION = "23503"


class PointsSchemaError(Exception):
    """Base class for all points schema errors."""


class ConstraintViolation(PointsSchemaError):
    """A write violated a declared constraint."""

    def __init__(self, constraint: Optional[str], message: Optional[str] = None):
        self.constraint = constraint
        super().__init__(message or f"Constraint violated: {constraint or 'unknown'}")


class DuplicateWalletAddress(ConstraintViolation):
    def __init__(self, constraint: Optional[str] = "uq_users_wallet_address"):
        super().__init__(constraint, "Wallet address already registered")


class DuplicateTaskCompletion(ConstraintViolation):
    def __init__(self, constraint: Optional[str] = "uq_completed_tasks_user_id_task_id"):
        super().__init__(constraint, "Task already completed by this user")


class DuplicateFeePayment(ConstraintViolation):
    def __init__(self, constraint: Optional[str] = "uq_fee_payments_tx_signature"):
        super().__init__(constraint, "Fee transaction already recorded")


class UnknownReference(ConstraintViolation):
    """Foreign key points at a row that does not exist."""

    def __init__(self, constraint: Optional[str] = None):
        super().__init__(constraint, f"Referenced row does not exist ({constraint})")


class AppendOnlyViolation(PointsSchemaError):
    """An append-only record was updated or deleted."""


_UNIQUE_ERRORS = {
    "uq_users_wallet_address": DuplicateWalletAddress,
    "uq_completed_tasks_user_id_task_id": DuplicateTaskCompletion,
    "uq_fee_payments_tx_signature": DuplicateFeePayment,
}

_FOREIGN_KEYS = (
    "fk_users_referrer_id_users",
    "fk_completed_tasks_user_id_users",
    "fk_completed_tasks_task_id_tasks",
)


def constraint_name(exc: IntegrityError) -> Optional[str]:
    """Return the name of the violated constraint, if it can be determined."""
    diag = getattr(exc.orig, "diag", None)
    name = getattr(diag, "constraint_name", None)
    if name:
        return name

    # Drivers without diagnostics only give us the server message
    message = str(exc.orig)
    for candidate in (*_UNIQUE_ERRORS, *_FOREIGN_KEYS):
        if f'"{candidate}"' in message:
            return candidate
    return None


def translate_integrity_error(exc: IntegrityError) -> ConstraintViolation:
    """Map a driver ``IntegrityError`` to a typed ``ConstraintViolation``."""
    name = constraint_name(exc)

    if name in _UNIQUE_ERRORS:
        return _UNIQUE_ERRORS[name](name)

    sqlstate = getattr(exc.orig, "sqlstate", None)
    if sqlstate == FOREIGN_KEY_VIOLATION or name in _FOREIGN_KEYS:
        return UnknownReference(name)

    return ConstraintViolation(name)


@contextlib.asynccontextmanager
async def guard_constraints(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """Roll back and re-raise constraint failures as typed errors."""
    try:
        yield session
    except IntegrityError as exc:
        await session.rollback()
        error = translate_integrity_error(exc)
        logger.warning("Rejected write: %s (constraint=%s)", error, error.constraint)
        raise error from exc
