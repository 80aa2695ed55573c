"""Demo data for local development.

seed() empties the articles table, then inserts generated articles and
a set of demo users sharing one password. Users whose email already
exists are left alone, so seeding twice does not fail.
"""

import random

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from pressroom.auth.password import hash_password
from pressroom.db.models import Article, Base, User

logger = structlog.get_logger()

_WORDS = (
    "ink press column editor draft headline byline margin proof layout "
    "story lede source quote deadline print issue feature desk wire "
    "copy folio caption gutter masthead sidebar teaser edition"
).split()


def _sentence(rng: random.Random, words: int) -> str:
    text = " ".join(rng.choice(_WORDS) for _ in range(words))
    return text.capitalize() + "."


def fake_article(rng: random.Random) -> dict:
    paragraphs = [
        " ".join(_sentence(rng, rng.randint(6, 14)) for _ in range(rng.randint(2, 5)))
        for _ in range(rng.randint(1, 3))
    ]
    return {
        "title": _sentence(rng, rng.randint(3, 7)).rstrip("."),
        "body": "\n\n".join(paragraphs),
    }


async def create_schema(engine: AsyncEngine) -> None:
    """Create all tables without Alembic (local/dev use)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed(
    db: AsyncSession,
    users: int = 10,
    articles: int = 50,
    password: str = "password",
    rng: random.Random | None = None,
) -> dict:
    """Reset articles and add demo users. Returns the counts written."""
    rng = rng or random.Random()

    await db.execute(delete(Article))
    for _ in range(articles):
        db.add(Article(**fake_article(rng)))

    existing = set(
        (await db.execute(select(User.email).where(User.email.like("user%@example.com"))))
        .scalars()
        .all()
    )
    password_hash = hash_password(password)
    created = 0
    for n in range(1, users + 1):
        email = f"user{n}@example.com"
        if email in existing:
            continue
        db.add(User(name=f"User {n}", email=email, password_hash=password_hash))
        created += 1

    await db.commit()
    logger.info("seed.done", articles=articles, users_created=created)
    return {"articles": articles, "users": created}
