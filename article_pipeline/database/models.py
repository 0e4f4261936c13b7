"""SQLAlchemy models for all database tables."""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlalchemy import JSON, TIMESTAMP, CheckConstraint, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from article_pipeline.database.db_session import Base

# JSON documents are stored as JSONB on PostgreSQL and plain JSON elsewhere
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ArticleStatus(str, Enum):
    """Lifecycle state of an article."""

    PENDING = "pending"
    PROCESSED = "processed"


class ResearchState(str, Enum):
    """Research sub-state of an article."""

    IDLE = "idle"
    SEARCHING = "searching"
    REVIEWING = "reviewing"
    PROCESSING = "processing"
    COMPLETE = "complete"


class CandidateStatus(str, Enum):
    """Human curation status of a research candidate."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class TimestampMixin:
    """Mixin for created_at and updated_at timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        default=_utcnow,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        server_default=func.now(),
        nullable=False,
    )


# 1. articles
class Article(Base, TimestampMixin):
    """Scraped blog article moving through ingestion, research and rewrite."""

    __tablename__ = "articles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    url: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    original_content: Mapped[str] = mapped_column(Text, nullable=False)
    published_date: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20),
        default=ArticleStatus.PENDING.value,
        nullable=False,
        index=True,
    )

    # Research
    research_state: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    research_candidates: Mapped[Optional[list]] = mapped_column(JSONDocument, nullable=True)

    # User generation configuration
    user_tone: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    user_keywords: Mapped[Optional[list]] = mapped_column(JSONDocument, nullable=True)
    custom_prompt: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    target_language: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    readability_level: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # Enrichment outputs
    ai_summary: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    ai_tags: Mapped[Optional[list]] = mapped_column(JSONDocument, nullable=True)
    updated_content: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    citations: Mapped[Optional[list]] = mapped_column(JSONDocument, nullable=True)
    seo_score: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    seo_analysis: Mapped[Optional[dict]] = mapped_column(JSONDocument, nullable=True)

    # Newest first, bounded by settings.version_history_limit
    version_history: Mapped[Optional[list]] = mapped_column(JSONDocument, nullable=True)

    __table_args__ = (
        Index("ix_articles_created_at", "created_at"),
        CheckConstraint(
            "readability_level IS NULL OR (readability_level >= 0 AND readability_level <= 100)",
            name="ck_articles_readability_level_range",
        ),
    )

    @property
    def has_enrichment(self) -> bool:
        """Whether a rewrite has already been applied."""
        return bool(self.updated_content)

    def __repr__(self) -> str:
        return f"<Article id={self.id} url={self.url!r} status={self.status}>"
