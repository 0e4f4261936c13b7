"""API router for article storage."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from article_pipeline.agents.agent_ingestion import DeduplicatingIngestor, IngestCandidate
from article_pipeline.api.dependencies import get_db_session, get_ingestor
from article_pipeline.api.schemas.requests import ArticleCreateRequest
from article_pipeline.api.schemas.responses import (
    ArticleCreateResponse,
    ArticleDeleteResponse,
    ArticleListResponse,
    ArticleResponse,
    ErrorResponse,
)
from article_pipeline.database.crud_articles import (
    delete_article,
    get_article,
    list_articles,
    list_articles_by_status,
)
from article_pipeline.database.models import ArticleStatus
from article_pipeline.utils.exceptions import ArticleNotFoundError
from article_pipeline.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/articles", tags=["Articles"])


@router.get(
    "",
    response_model=ArticleListResponse,
    summary="List articles",
    description="List stored articles, most recent first.",
)
async def list_all_articles(
    limit: Optional[int] = Query(None, ge=1, le=500, description="Maximum articles to return"),
    db: AsyncSession = Depends(get_db_session),
) -> ArticleListResponse:
    articles = await list_articles(db, limit=limit)
    return ArticleListResponse(
        articles=[ArticleResponse.model_validate(article) for article in articles],
        total=len(articles),
    )


@router.get(
    "/public",
    response_model=ArticleListResponse,
    summary="List processed articles",
    description="List articles whose enrichment is complete (status processed), most recent first.",
)
async def list_public_articles(
    db: AsyncSession = Depends(get_db_session),
) -> ArticleListResponse:
    articles = await list_articles_by_status(db, ArticleStatus.PROCESSED)
    return ArticleListResponse(
        articles=[ArticleResponse.model_validate(article) for article in articles],
        total=len(articles),
    )


@router.get(
    "/{article_id}",
    response_model=ArticleResponse,
    summary="Get article",
    responses={404: {"model": ErrorResponse, "description": "Article not found"}},
)
async def get_single_article(
    article_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> ArticleResponse:
    article = await get_article(db, article_id)
    if article is None:
        raise ArticleNotFoundError(article_id)
    return ArticleResponse.model_validate(article)


@router.post(
    "",
    response_model=ArticleCreateResponse,
    summary="Create article (idempotent)",
    description="""
    Store an article unless its URL already exists.

    - 201 with `created: true` for a new URL
    - 200 with `created: false` and the existing ID for a duplicate URL
    """,
)
async def create_single_article(
    request: ArticleCreateRequest,
    response: Response,
    ingestor: DeduplicatingIngestor = Depends(get_ingestor),
) -> ArticleCreateResponse:
    article_id, created = await ingestor.store(
        IngestCandidate(
            url=request.url,
            title=request.title,
            content=request.original_content,
            published_date=request.published_date,
        )
    )
    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return ArticleCreateResponse(id=article_id, created=created)


@router.delete(
    "/{article_id}",
    response_model=ArticleDeleteResponse,
    summary="Delete article",
    description="Remove an article unconditionally. Deleting a missing ID is not an error.",
)
async def delete_single_article(
    article_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> ArticleDeleteResponse:
    deleted = await delete_article(db, article_id)
    return ArticleDeleteResponse(id=article_id, deleted=deleted)
