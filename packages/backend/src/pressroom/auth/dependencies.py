"""FastAPI auth dependencies.

Used as Depends() in route handlers and at include_router level to gate
protected routes. The resolved user is handed to handlers as an explicit
CurrentUser argument; nothing is stored in module or global state.
"""

import secrets
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pressroom.db.engine import get_db
from pressroom.db.models import User
from pressroom.outcome import Rejected, unauthenticated


@dataclass(frozen=True)
class CurrentUser:
    """The authenticated caller of the current request."""

    id: int
    name: str
    email: str


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an `Authorization: Bearer <token>` value."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        return None
    return token


async def resolve_token(db: AsyncSession, token: str) -> Optional[User]:
    """Find the user currently holding token, or None."""
    result = await db.execute(select(User).where(User.api_token == token))
    user = result.scalars().first()
    if user is None or user.api_token is None:
        return None
    if not secrets.compare_digest(user.api_token, token):
        return None
    return user


async def get_current_user(
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
) -> CurrentUser:
    """Resolve the bearer token to a user (required, 401 otherwise).

    A missing header, a malformed header and a token nobody holds all
    fail the same way.
    """
    token = bearer_token(authorization)
    if token is None:
        raise Rejected(unauthenticated())

    user = await resolve_token(db, token)
    if user is None:
        raise Rejected(unauthenticated())

    return CurrentUser(id=user.id, name=user.name, email=user.email)
