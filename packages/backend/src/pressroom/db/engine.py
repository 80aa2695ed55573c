"""Async SQLAlchemy engine and session factory.

One engine with connection pooling; each request gets its own
AsyncSession through the get_db dependency.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from pressroom.config import settings


def build_engine(url: str, echo: Optional[bool] = None, **kwargs) -> AsyncEngine:
    """Create an engine with pool settings suited to the backend.

    SQL echo follows settings.debug unless echo is given. Bound parameters
    are never written to the log: they carry tokens and password hashes.
    """
    if echo is None:
        echo = settings.debug
    if url.startswith("sqlite"):
        # SQLite: no pool sizing; allow use across the event loop's threads
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    else:
        kwargs.setdefault("pool_size", 5)
        kwargs.setdefault("max_overflow", 15)
    return create_async_engine(url, echo=echo, hide_parameters=True, **kwargs)


engine = build_engine(settings.database_url)

# Each request gets its own session.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncSession:
    """FastAPI dependency: yields a session per request, auto-closes."""
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
