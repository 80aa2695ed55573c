"""Article service — CRUD over the articles table."""

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pressroom.db.models import Article
from pressroom.outcome import Ok, Outcome, not_found
from pressroom.schemas.article import ArticleCreate, ArticleUpdate

logger = structlog.get_logger()

# The only columns a request may write.
WRITABLE_FIELDS = ("title", "body")


def _assign(article: Article, values: dict) -> None:
    for name in WRITABLE_FIELDS:
        if name in values:
            setattr(article, name, values[name])


class ArticleService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_articles(self) -> list[Article]:
        result = await self.db.execute(select(Article).order_by(Article.id))
        return list(result.scalars().all())

    async def get_article(self, article_id: int) -> Outcome[Article]:
        article = await self.db.get(Article, article_id)
        if article is None:
            return not_found()
        return Ok(article)

    async def create_article(self, body: ArticleCreate) -> Article:
        article = Article()
        _assign(article, body.model_dump())
        self.db.add(article)
        await self.db.commit()
        await self.db.refresh(article)

        logger.info("articles.created", article_id=article.id)
        return article

    async def update_article(self, article: Article, body: ArticleUpdate) -> Article:
        """Apply the fields present in the body; omitted fields are kept."""
        values = body.model_dump(exclude_unset=True, exclude_none=True)
        _assign(article, values)
        await self.db.commit()
        await self.db.refresh(article)

        logger.info("articles.updated", article_id=article.id, fields=sorted(values))
        return article

    async def delete_article(self, article: Article) -> None:
        article_id = article.id
        await self.db.delete(article)
        await self.db.commit()
        logger.info("articles.deleted", article_id=article_id)
