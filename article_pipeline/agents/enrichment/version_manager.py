"""Versioned persistence of enrichment results."""

import time
from typing import Any, Callable, Dict, List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from article_pipeline.agents.enrichment.response_parser import EnrichmentResult
from article_pipeline.database.crud_articles import update_article
from article_pipeline.database.documents import VersionSnapshot, load_history
from article_pipeline.database.models import Article, ArticleStatus
from article_pipeline.database.state_machine import check_status_transition
from article_pipeline.utils.exceptions import VersionNotFoundError
from article_pipeline.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_HISTORY_LIMIT = 10


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class VersionManager:
    """Snapshot the live enrichment before every overwrite, keep a bounded history."""

    def __init__(
        self,
        db_session: AsyncSession,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        """
        Initialize the version manager.

        Args:
            db_session: Database session
            history_limit: Maximum snapshots kept per article
            clock: Millisecond clock (default: wall clock)
        """
        self.db_session = db_session
        self.history_limit = history_limit
        self._clock = clock or _now_ms

    def _next_timestamp(self, history: Sequence[Dict[str, Any]]) -> int:
        """Millisecond timestamp strictly greater than every existing one."""
        timestamp = self._clock()
        latest = max((entry.get("timestamp", 0) for entry in history), default=None)
        if latest is not None and timestamp <= latest:
            timestamp = latest + 1
        return timestamp

    def snapshot(self, article: Article, history: Sequence[Dict[str, Any]]) -> VersionSnapshot:
        return VersionSnapshot(
            timestamp=self._next_timestamp(history),
            summary=article.ai_summary,
            tags=list(article.ai_tags) if article.ai_tags is not None else None,
            updated_content=article.updated_content,
            seo_analysis=dict(article.seo_analysis) if article.seo_analysis is not None else None,
        )

    async def apply_result(
        self,
        article: Article,
        result: EnrichmentResult,
        citations: Optional[List[str]] = None,
    ) -> Article:
        """
        Overwrite the live enrichment with a new result.

        The current enrichment, if any, is pushed to the front of the history
        first, and the history is truncated to history_limit entries. Fields
        absent from the result are left untouched.

        Args:
            article: Article to update
            result: Parsed enrichment result
            citations: Research source URLs that grounded the result

        Returns:
            Updated Article
        """
        status = check_status_transition(article.status, ArticleStatus.PROCESSED)
        history: List[Dict[str, Any]] = list(article.version_history or [])

        if article.has_enrichment:
            snapshot = self.snapshot(article, history)
            history = [snapshot.to_document(), *history][: self.history_limit]
            logger.info("Version snapshot captured", article_id=article.id, timestamp=snapshot.timestamp)

        fields: Dict[str, Any] = {
            "updated_content": result.rewritten_content,
            "status": status.value,
            "version_history": history,
        }
        if result.summary is not None:
            fields["ai_summary"] = result.summary
        if result.tags is not None:
            fields["ai_tags"] = list(result.tags)
        if result.seo is not None:
            fields["seo_analysis"] = result.seo.to_document()
            fields["seo_score"] = result.seo.score
        if citations:
            fields["citations"] = list(citations)

        article = await update_article(self.db_session, article, **fields)
        logger.info(
            "Enrichment applied",
            article_id=article.id,
            history_length=len(history),
            citations=len(citations or []),
        )
        return article

    async def restore(self, article: Article, timestamp: int) -> Article:
        """
        Copy a history snapshot back onto the live record.

        History and status are left unchanged.

        Raises:
            VersionNotFoundError: If no snapshot has this exact timestamp
        """
        snapshot = next(
            (entry for entry in load_history(article.version_history) if entry.timestamp == timestamp),
            None,
        )
        if snapshot is None:
            raise VersionNotFoundError(article.id, timestamp)

        seo_analysis = dict(snapshot.seo_analysis) if snapshot.seo_analysis is not None else None
        article = await update_article(
            self.db_session,
            article,
            ai_summary=snapshot.summary,
            ai_tags=list(snapshot.tags) if snapshot.tags is not None else None,
            updated_content=snapshot.updated_content,
            seo_analysis=seo_analysis,
            seo_score=seo_analysis.get("score") if seo_analysis else None,
        )
        logger.info("Version restored", article_id=article.id, timestamp=timestamp)
        return article
