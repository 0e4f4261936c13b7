"""API router for blog ingestion."""

from fastapi import APIRouter, Depends, Query

from article_pipeline.agents.agent_ingestion import DEFAULT_BATCH_SIZE, DeduplicatingIngestor
from article_pipeline.api.dependencies import get_ingestor
from article_pipeline.api.schemas.responses import (
    ArticleCreateResponse,
    ErrorResponse,
    ScrapeBatchResponse,
)

router = APIRouter(prefix="/ingestion", tags=["Ingestion"])


@router.post(
    "/discover",
    response_model=ArticleCreateResponse,
    status_code=201,
    summary="Scrape one new random article",
    description="""
    Fetch the source blog listing, shuffle its article links and store the first
    one that is not stored yet and has extractable content.
    """,
    responses={
        404: {"model": ErrorResponse, "description": "No new article found, delete some existing ones"},
        502: {"model": ErrorResponse, "description": "Listing page could not be fetched"},
    },
)
async def discover_article(
    ingestor: DeduplicatingIngestor = Depends(get_ingestor),
) -> ArticleCreateResponse:
    article_id = await ingestor.discover_new_article()
    return ArticleCreateResponse(id=article_id, created=True)


@router.post(
    "/oldest",
    response_model=ScrapeBatchResponse,
    summary="Scrape the oldest listed articles",
    description="Store the last articles shown on the listing page, skipping those already stored.",
)
async def scrape_oldest_articles(
    limit: int = Query(DEFAULT_BATCH_SIZE, ge=1, le=50, description="Number of links taken from the end of the listing"),
    ingestor: DeduplicatingIngestor = Depends(get_ingestor),
) -> ScrapeBatchResponse:
    article_ids = await ingestor.scrape_oldest(limit=limit)
    return ScrapeBatchResponse(article_ids=article_ids, total=len(article_ids))
