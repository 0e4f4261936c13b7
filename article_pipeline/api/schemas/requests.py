"""Pydantic request schemas for API endpoints."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Request body accepting camelCase or snake_case keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ArticleCreateRequest(CamelModel):
    """Request schema for idempotent article creation."""

    url: str = Field(..., min_length=1, description="Canonical article URL (unique)")
    title: str = Field(..., min_length=1, description="Article title")
    original_content: str = Field(..., min_length=1, description="Plain-text article body")
    published_date: Optional[str] = Field(None, description="Publication date", examples=["2025-01-20"])


class CandidateActionRequest(CamelModel):
    """Request schema for approving or rejecting a research candidate."""

    url: str = Field(..., min_length=1, description="Candidate URL")


class ResearchConfigRequest(CamelModel):
    """Request schema for the user's generation configuration."""

    tone: Optional[str] = Field(None, description="Tone label", examples=["professional"])
    keywords: List[str] = Field(default_factory=list, description="Keywords to work in")
    target_language: Optional[str] = Field(None, description="Output language", examples=["French"])
    readability_level: Optional[int] = Field(None, ge=0, le=100, description="Readability target (0-100)")
    custom_prompt: Optional[str] = Field(None, description="Free-text instructions")


class EnrichRequest(CamelModel):
    """Request schema for article enrichment."""

    models: Optional[List[str]] = Field(
        None,
        min_length=1,
        description="Ordered model preference list overriding the configured one",
    )


class RestoreVersionRequest(CamelModel):
    """Request schema for restoring a version snapshot."""

    timestamp: int = Field(..., description="Snapshot timestamp (ms since epoch)")


class ChatMessageSchema(CamelModel):
    role: Literal["user", "model"]
    text: str


class ChatRequest(CamelModel):
    """Request schema for the chat assistant."""

    messages: List[ChatMessageSchema] = Field(default_factory=list, description="Previous turns, oldest first")
    new_message: str = Field(..., min_length=1, description="User message")
