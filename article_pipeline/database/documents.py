"""Pydantic models for the JSON document columns of the articles table."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from article_pipeline.database.models import CandidateStatus


class ResearchCandidate(BaseModel):
    """External search result proposed as research material."""

    url: str
    title: str
    snippet: str
    status: CandidateStatus = CandidateStatus.PENDING

    model_config = ConfigDict(use_enum_values=True)


class VersionSnapshot(BaseModel):
    """Enrichment fields captured right before an overwrite."""

    timestamp: int = Field(..., description="Milliseconds since epoch, unique per article")
    summary: Optional[str] = None
    tags: Optional[List[str]] = None
    updated_content: Optional[str] = Field(default=None, alias="updatedContent")
    seo_analysis: Optional[Dict[str, Any]] = Field(default=None, alias="seoAnalysis")

    model_config = ConfigDict(populate_by_name=True)

    def to_document(self) -> Dict[str, Any]:
        """Serialize for the version_history column, omitting absent fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


def load_candidates(raw: Optional[List[Dict[str, Any]]]) -> List[ResearchCandidate]:
    return [ResearchCandidate.model_validate(item) for item in raw or []]


def dump_candidates(candidates: List[ResearchCandidate]) -> List[Dict[str, Any]]:
    return [candidate.model_dump() for candidate in candidates]


def load_history(raw: Optional[List[Dict[str, Any]]]) -> List[VersionSnapshot]:
    return [VersionSnapshot.model_validate(item) for item in raw or []]
