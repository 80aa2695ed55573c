"""Auth service — registration, login, logout.

Service layer separates business logic from HTTP routing. Every method
returns an Outcome: expected failures (duplicate email, bad credentials)
come back as Failure values for the route to render, never as
exceptions.
"""

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pressroom.auth.password import burn_verification, hash_password, verify_password
from pressroom.auth.tokens import TokenIssuer
from pressroom.db.models import User
from pressroom.outcome import (
    Failure,
    Ok,
    Outcome,
    invalid_credentials,
    not_found,
    validation_failed,
)
from pressroom.schemas.auth import LoginRequest, RegisterRequest

logger = structlog.get_logger()

EMAIL_TAKEN = "The email has already been taken."


def _email_taken() -> Failure:
    return validation_failed({"email": [EMAIL_TAKEN]})


class AuthService:
    """Business logic for accounts and their tokens."""

    def __init__(self, db: AsyncSession, tokens: TokenIssuer | None = None):
        self.db = db
        self.tokens = tokens or TokenIssuer(db)

    async def find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    async def get_user(self, user_id: int) -> Outcome[User]:
        user = await self.db.get(User, user_id)
        if user is None:
            return not_found()
        return Ok(user)

    # ─── Register ───────────────────────────────────────

    async def register(self, body: RegisterRequest) -> Outcome[User]:
        """Create an account and issue its first token.

        The pre-check gives the common case a clean validation error;
        the unique index on email settles concurrent registrations, and
        the loser gets the same error.
        """
        if await self.find_by_email(body.email) is not None:
            logger.info("auth.register_rejected", reason="email_taken")
            return _email_taken()

        user = User(
            name=body.name,
            email=body.email,
            password_hash=hash_password(body.password),
        )
        self.db.add(user)
        try:
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            logger.info("auth.register_rejected", reason="email_conflict")
            return _email_taken()

        await self.tokens.issue(user)
        await self.db.commit()
        await self.db.refresh(user)

        logger.info("auth.registered", user_id=user.id)
        return Ok(user)

    # ─── Login ──────────────────────────────────────────

    async def login(self, body: LoginRequest) -> Outcome[User]:
        """Check credentials and rotate the user's token.

        Unknown email and wrong password return the identical failure,
        and both run one bcrypt check.
        """
        user = await self.find_by_email(body.email)

        if user is None:
            burn_verification(body.password)
            logger.info("auth.login_failed")
            return invalid_credentials()

        if not verify_password(body.password, user.password_hash):
            logger.info("auth.login_failed")
            return invalid_credentials()

        await self.tokens.issue(user)
        await self.db.commit()
        await self.db.refresh(user)

        logger.info("auth.logged_in", user_id=user.id)
        return Ok(user)

    # ─── Logout ─────────────────────────────────────────

    async def logout(self, user_id: int) -> Outcome[None]:
        """Revoke the user's token. Later requests with it get 401."""
        user = await self.db.get(User, user_id)
        if user is None:
            return not_found()

        await self.tokens.revoke(user)
        await self.db.commit()

        logger.info("auth.logged_out", user_id=user_id)
        return Ok(None)
