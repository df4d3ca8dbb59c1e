"""Unit tests for IntegrityError translation. Driver errors are faked."""

import logging
from unittest.mock import AsyncMock

import pytest
from services.points_service.errors import (
    ConstraintViolation,
    DuplicateFeePayment,
    DuplicateTaskCompletion,
    DuplicateWalletAddress,
    UnknownReference,
    constraint_name,
    guard_constraints,
    translate_integrity_error,
)
from sqlalchemy.exc import IntegrityError


class _Diag:
    def __init__(self, constraint_name):
        self.constraint_name = constraint_name


class _DriverError(Exception):
    def __init__(self, message, constraint=None, sqlstate=None):
        super().__init__(message)
        self.diag = _Diag(constraint)
        self.sqlstate = sqlstate


def _integrity_error(message="violation", constraint=None, sqlstate=None):
    return IntegrityError(
        "INSERT ...", {}, _DriverError(message, constraint, sqlstate)
    )


@pytest.mark.unit
@pytest.mark.parametrize(
    "constraint, expected",
    [
        ("uq_users_wallet_address", DuplicateWalletAddress),
        ("uq_completed_tasks_user_id_task_id", DuplicateTaskCompletion),
        ("uq_fee_payments_tx_signature", DuplicateFeePayment),
    ],
)
def test_unique_violations_map_to_typed_errors(constraint, expected):
    error = translate_integrity_error(
        _integrity_error(constraint=constraint, sqlstate="23505")
    )

    assert type(error) is expected
    assert error.constraint == constraint


@pytest.mark.unit
def test_foreign_key_violation_by_sqlstate():
    error = translate_integrity_error(
        _integrity_error(constraint="fk_completed_tasks_task_id_tasks", sqlstate="23503")
    )

    assert isinstance(error, UnknownReference)
    assert error.constraint == "fk_completed_tasks_task_id_tasks"


@pytest.mark.unit
def test_constraint_name_falls_back_to_message():
    exc = _integrity_error(
        message='duplicate key value violates unique constraint "uq_users_wallet_address"'
    )

    assert constraint_name(exc) == "uq_users_wallet_address"
    assert isinstance(translate_integrity_error(exc), DuplicateWalletAddress)


@pytest.mark.unit
def test_foreign_key_detected_from_message_without_sqlstate():
    exc = _integrity_error(
        message='insert violates foreign key constraint "fk_users_referrer_id_users"'
    )

    assert isinstance(translate_integrity_error(exc), UnknownReference)


@pytest.mark.unit
def test_unknown_constraint_is_generic_violation():
    error = translate_integrity_error(
        _integrity_error(message="null value in column", sqlstate="23502")
    )

    assert type(error) is ConstraintViolation
    assert error.constraint is None
    assert "unknown" in str(error)


@pytest.mark.asyncio
@pytest.mark.unit
async def test_guard_constraints_rolls_back_and_chains(caplog):
    session = AsyncMock()
    original = _integrity_error(constraint="uq_users_wallet_address")

    with caplog.at_level(logging.WARNING, logger="services.points_service.errors"):
        with pytest.raises(DuplicateWalletAddress) as exc_info:
            async with guard_constraints(session):
                raise original

    session.rollback.assert_awaited_once()
    assert exc_info.value.__cause__ is original
    assert "uq_users_wallet_address" in caplog.text


@pytest.mark.asyncio
@pytest.mark.unit
async def test_guard_constraints_ignores_other_errors():
    session = AsyncMock()

    with pytest.raises(ValueError):
        async with guard_constraints(session):
            raise ValueError("not a constraint problem")

    session.rollback.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.unit
async def test_guard_constraints_yields_session():
    session = AsyncMock()

    async with guard_constraints(session) as guarded:
        assert guarded is session

    session.rollback.assert_not_awaited()


@pytest.mark.unit
def test_message_fallback_matches_whole_constraint_name():
    exc = _integrity_error(
        message='duplicate key value violates unique constraint "uq_users_wallet_address_lower"'
    )

    assert constraint_name(exc) is None
    assert type(translate_integrity_error(exc)) is ConstraintViolation
