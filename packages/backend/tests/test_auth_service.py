"""AuthService tests — outcomes returned without going through HTTP."""

import pytest
from sqlalchemy import func, select

from pressroom.db.models import User
from pressroom.outcome import Failure, FailureKind, Ok, invalid_credentials
from pressroom.schemas.auth import LoginRequest, RegisterRequest
from pressroom.services.auth_service import EMAIL_TAKEN, AuthService


def _register_body(email="race@example.com"):
    return RegisterRequest(
        name="Racer",
        email=email,
        password="correct-horse",
        password_confirmation="correct-horse",
    )


@pytest.mark.asyncio
async def test_register_returns_user_with_token(db_session):
    outcome = await AuthService(db_session).register(_register_body())
    assert isinstance(outcome, Ok)
    assert outcome.value.id is not None
    assert len(outcome.value.api_token) == 60


@pytest.mark.asyncio
async def test_register_race_loses_on_unique_index(session_factory, monkeypatch):
    """A registration that passed the pre-check still fails cleanly on the index."""
    async with session_factory() as first:
        assert isinstance(await AuthService(first).register(_register_body()), Ok)

    async with session_factory() as second:
        svc = AuthService(second)

        async def missed_precheck(email):
            return None

        monkeypatch.setattr(svc, "find_by_email", missed_precheck)
        outcome = await svc.register(_register_body())

    assert isinstance(outcome, Failure)
    assert outcome.kind is FailureKind.VALIDATION
    assert outcome.fields == {"email": [EMAIL_TAKEN]}

    async with session_factory() as check:
        assert await check.scalar(select(func.count()).select_from(User)) == 1


@pytest.mark.asyncio
async def test_login_failures_are_the_same_value(db_session):
    svc = AuthService(db_session)
    await svc.register(_register_body(email="known@example.com"))

    wrong_password = await svc.login(
        LoginRequest(email="known@example.com", password="wrong-password")
    )
    unknown_email = await svc.login(
        LoginRequest(email="unknown@example.com", password="wrong-password")
    )
    assert wrong_password == unknown_email == invalid_credentials()


@pytest.mark.asyncio
async def test_login_rotates_token(db_session):
    svc = AuthService(db_session)
    registered = await svc.register(_register_body(email="rot@example.com"))
    first = registered.value.api_token

    outcome = await svc.login(LoginRequest(email="rot@example.com", password="correct-horse"))
    assert isinstance(outcome, Ok)
    assert outcome.value.api_token != first


@pytest.mark.asyncio
async def test_logout_unknown_user(db_session):
    outcome = await AuthService(db_session).logout(12345)
    assert isinstance(outcome, Failure)
    assert outcome.kind is FailureKind.NOT_FOUND
