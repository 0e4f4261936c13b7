"""API router for research candidates."""

from fastapi import APIRouter, Depends

from article_pipeline.agents.agent_research import ResearchCoordinator
from article_pipeline.api.dependencies import get_research_coordinator
from article_pipeline.api.schemas.requests import CandidateActionRequest, ResearchConfigRequest
from article_pipeline.api.schemas.responses import (
    ArticleResponse,
    ErrorResponse,
    ResearchCandidatesResponse,
)

router = APIRouter(prefix="/research", tags=["Research"])


@router.post(
    "/{article_id}/search",
    response_model=ResearchCandidatesResponse,
    summary="Search research candidates",
    description="""
    Search the web for content related to the article title and store up to four
    pending candidates for review. On search failure the research state reverts
    to idle.
    """,
    responses={
        404: {"model": ErrorResponse, "description": "Article not found"},
        409: {"model": ErrorResponse, "description": "Research already in progress"},
        502: {"model": ErrorResponse, "description": "Search provider failed"},
    },
)
async def search_candidates(
    article_id: int,
    coordinator: ResearchCoordinator = Depends(get_research_coordinator),
) -> ResearchCandidatesResponse:
    candidates = await coordinator.search(article_id)
    return ResearchCandidatesResponse(
        article_id=article_id,
        candidates=[candidate.model_dump() for candidate in candidates],
    )


@router.post(
    "/{article_id}/candidates/approve",
    response_model=ResearchCandidatesResponse,
    summary="Approve a candidate",
    responses={404: {"model": ErrorResponse, "description": "Article not found"}},
)
async def approve_candidate(
    article_id: int,
    request: CandidateActionRequest,
    coordinator: ResearchCoordinator = Depends(get_research_coordinator),
) -> ResearchCandidatesResponse:
    candidates = await coordinator.approve(article_id, request.url)
    return ResearchCandidatesResponse(
        article_id=article_id,
        candidates=[candidate.model_dump() for candidate in candidates],
    )


@router.post(
    "/{article_id}/candidates/reject",
    response_model=ResearchCandidatesResponse,
    summary="Reject a candidate",
    responses={404: {"model": ErrorResponse, "description": "Article not found"}},
)
async def reject_candidate(
    article_id: int,
    request: CandidateActionRequest,
    coordinator: ResearchCoordinator = Depends(get_research_coordinator),
) -> ResearchCandidatesResponse:
    candidates = await coordinator.reject(article_id, request.url)
    return ResearchCandidatesResponse(
        article_id=article_id,
        candidates=[candidate.model_dump() for candidate in candidates],
    )


@router.put(
    "/{article_id}/config",
    response_model=ArticleResponse,
    summary="Save generation configuration",
    description="Persist tone, keywords, target language, readability level and custom instructions.",
    responses={404: {"model": ErrorResponse, "description": "Article not found"}},
)
async def save_generation_config(
    article_id: int,
    request: ResearchConfigRequest,
    coordinator: ResearchCoordinator = Depends(get_research_coordinator),
) -> ArticleResponse:
    article = await coordinator.save_config(
        article_id,
        tone=request.tone,
        keywords=request.keywords,
        target_language=request.target_language,
        readability_level=request.readability_level,
        custom_prompt=request.custom_prompt,
    )
    return ArticleResponse.model_validate(article)
