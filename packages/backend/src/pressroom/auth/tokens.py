"""API token issuance.

Tokens are opaque: 60 URL-safe characters from the OS CSPRNG, stored on
the user row. Issuing a token replaces the previous one, so a user has
at most one token that authenticates.
"""

import secrets
from typing import Callable

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pressroom.db.models import User
from pressroom.log import token_hint

logger = structlog.get_logger()

TOKEN_LENGTH = 60
MAX_ATTEMPTS = 5


class TokenCollisionError(RuntimeError):
    """Every generated candidate was already held by some user."""


def generate_token() -> str:
    """Random 60-character token (45 bytes, base64url without padding)."""
    return secrets.token_urlsafe(TOKEN_LENGTH * 3 // 4)


class TokenIssuer:
    """Assigns fresh tokens to users.

    The generator is injectable so collision handling can be exercised
    with a deterministic sequence.
    """

    def __init__(
        self,
        db: AsyncSession,
        generate: Callable[[], str] = generate_token,
    ):
        self.db = db
        self.generate = generate

    async def _taken(self, token: str) -> bool:
        result = await self.db.execute(
            select(User.id).where(User.api_token == token)
        )
        return result.first() is not None

    async def issue(self, user: User) -> str:
        """Give the user a new token and flush it. Returns the token.

        A candidate already held by any user (including this one) is
        discarded and regenerated. The unique constraint on api_token
        backs this check at the database level.
        """
        for _ in range(MAX_ATTEMPTS):
            candidate = self.generate()
            if not await self._taken(candidate):
                break
            logger.warning("auth.token_collision", user_id=user.id)
        else:
            raise TokenCollisionError(
                f"no unused token after {MAX_ATTEMPTS} attempts"
            )

        user.api_token = candidate
        await self.db.flush()
        logger.info("auth.token_issued", user_id=user.id, token=token_hint(candidate))
        return candidate

    async def revoke(self, user: User) -> None:
        """Clear the user's token; it stops authenticating at once."""
        user.api_token = None
        await self.db.flush()
        logger.info("auth.token_revoked", user_id=user.id)
