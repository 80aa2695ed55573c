"""Article API routes. Mounted behind get_current_user in api/__init__.py.

{article_id} is resolved to an Article by the article_from_path
dependency before the handler runs; ids that are missing or not
integers give the 404 envelope.
"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from pressroom.db.engine import get_db
from pressroom.db.models import Article
from pressroom.outcome import Failure, Rejected, not_found
from pressroom.schemas.article import ArticleCreate, ArticleRead, ArticleUpdate
from pressroom.services.article_service import ArticleService

router = APIRouter()

# Upper bound of the signed 64-bit primary key column.
MAX_ARTICLE_ID = 2**63 - 1


def _svc(db: AsyncSession = Depends(get_db)) -> ArticleService:
    return ArticleService(db)


async def article_from_path(
    article_id: str, svc: ArticleService = Depends(_svc)
) -> Article:
    # Anything that is not a positive signed 64-bit integer names no article.
    if not (article_id.isascii() and article_id.isdigit()):
        raise Rejected(not_found())
    article_pk = int(article_id)
    if not 0 < article_pk <= MAX_ARTICLE_ID:
        raise Rejected(not_found())
    outcome = await svc.get_article(article_pk)
    if isinstance(outcome, Failure):
        raise Rejected(outcome)
    return outcome.value


@router.get("/articles", response_model=list[ArticleRead])
async def list_articles(svc: ArticleService = Depends(_svc)):
    return await svc.list_articles()


@router.get("/articles/{article_id}", response_model=ArticleRead)
async def get_article(article: Article = Depends(article_from_path)):
    return article


@router.post("/articles", response_model=ArticleRead, status_code=201)
async def create_article(body: ArticleCreate, svc: ArticleService = Depends(_svc)):
    return await svc.create_article(body)


@router.put("/articles/{article_id}", response_model=ArticleRead)
async def update_article(
    body: ArticleUpdate,
    article: Article = Depends(article_from_path),
    svc: ArticleService = Depends(_svc),
):
    return await svc.update_article(article, body)


@router.delete("/articles/{article_id}", status_code=204)
async def delete_article(
    article: Article = Depends(article_from_path),
    svc: ArticleService = Depends(_svc),
):
    await svc.delete_article(article)
    return Response(status_code=204)
