"""API router for LLM enrichment and version restore."""

from typing import Optional

from fastapi import APIRouter, Depends, Body

from article_pipeline.agents.enrichment.article_enricher import ArticleEnricher
from article_pipeline.api.dependencies import get_article_enricher
from article_pipeline.api.schemas.requests import EnrichRequest, RestoreVersionRequest
from article_pipeline.api.schemas.responses import ArticleResponse, ErrorResponse
from article_pipeline.database.crud_articles import get_article
from article_pipeline.utils.exceptions import ArticleNotFoundError

router = APIRouter(prefix="/enrichment", tags=["Enrichment"])


@router.post(
    "/{article_id}",
    response_model=ArticleResponse,
    summary="Enrich an article",
    description="""
    Rewrite an article with the LLM.

    This endpoint:
    - Scrapes approved research candidates into bounded excerpts
    - Offers other stored articles as interlinking targets
    - Builds the prompt from the saved generation configuration
    - Calls the models in preference order with retry and fallback
    - Snapshots the previous enrichment into the version history
    """,
    responses={
        404: {"model": ErrorResponse, "description": "Article not found"},
        409: {"model": ErrorResponse, "description": "Search or generation already in progress"},
        422: {"model": ErrorResponse, "description": "Article has no content"},
        502: {"model": ErrorResponse, "description": "Generation failed or returned malformed JSON"},
    },
)
async def enrich_article(
    article_id: int,
    request: Optional[EnrichRequest] = Body(None),
    enricher: ArticleEnricher = Depends(get_article_enricher),
) -> ArticleResponse:
    models = request.models if request is not None else None
    article = await enricher.enrich(article_id, models=models)
    return ArticleResponse.model_validate(article)


@router.post(
    "/{article_id}/restore",
    response_model=ArticleResponse,
    summary="Restore a version",
    description="Copy a version snapshot back onto the live article. History and status are unchanged.",
    responses={404: {"model": ErrorResponse, "description": "Article or version not found"}},
)
async def restore_version(
    article_id: int,
    request: RestoreVersionRequest,
    enricher: ArticleEnricher = Depends(get_article_enricher),
) -> ArticleResponse:
    article = await get_article(enricher.db_session, article_id)
    if article is None:
        raise ArticleNotFoundError(article_id)
    article = await enricher.version_manager.restore(article, request.timestamp)
    return ArticleResponse.model_validate(article)
