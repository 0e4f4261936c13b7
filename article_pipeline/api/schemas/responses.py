"""Pydantic response schemas for API endpoints."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import AliasGenerator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelResponse(BaseModel):
    """Response model read from ORM attributes and serialized in camelCase."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=AliasGenerator(serialization_alias=to_camel),
    )


class ResearchCandidateResponse(CamelResponse):
    url: str
    title: str
    snippet: str
    status: str


class ArticleResponse(CamelResponse):
    """Response schema for an article."""

    id: int = Field(..., description="Article ID")
    url: str = Field(..., description="Article URL")
    title: str = Field(..., description="Article title")
    original_content: str
    published_date: Optional[str] = None
    status: str = Field(..., description="Lifecycle status (pending, processed)")

    research_state: Optional[str] = None
    research_candidates: Optional[List[ResearchCandidateResponse]] = None

    user_tone: Optional[str] = None
    user_keywords: Optional[List[str]] = None
    custom_prompt: Optional[str] = None
    target_language: Optional[str] = None
    readability_level: Optional[int] = None

    ai_summary: Optional[str] = None
    ai_tags: Optional[List[str]] = None
    updated_content: Optional[str] = None
    citations: Optional[List[str]] = None
    seo_score: Optional[int] = None
    seo_analysis: Optional[Dict[str, Any]] = None
    version_history: Optional[List[Dict[str, Any]]] = None

    created_at: datetime
    updated_at: datetime


class ArticleListResponse(CamelResponse):
    articles: List[ArticleResponse]
    total: int


class ArticleCreateResponse(CamelResponse):
    """Response schema for idempotent creation."""

    id: int
    created: bool = Field(..., description="False when the URL already existed")


class ArticleDeleteResponse(CamelResponse):
    id: int
    deleted: bool


class ScrapeBatchResponse(CamelResponse):
    article_ids: List[int]
    total: int


class ResearchCandidatesResponse(CamelResponse):
    """Response schema for research search and curation."""

    article_id: int
    candidates: List[ResearchCandidateResponse]


class ModelInfoResponse(CamelResponse):
    name: str
    supports_generation: bool
    size: Optional[int] = None


class ModelListResponse(CamelResponse):
    models: List[ModelInfoResponse]
    total: int


class ChatResponse(CamelResponse):
    reply: str


class ErrorResponse(CamelResponse):
    """Error body returned by the exception handlers."""

    detail: str
    error_type: str
    raw_text: Optional[str] = None
