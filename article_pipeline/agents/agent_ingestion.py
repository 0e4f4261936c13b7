"""Deduplicating ingestion agent for the source blog."""

import random
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, MutableSequence, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from article_pipeline.agents.base_agent import BaseAgent
from article_pipeline.config.settings import settings
from article_pipeline.database.crud_articles import create_article, get_article_by_url
from article_pipeline.ingestion.content_extractor import extract_content
from article_pipeline.ingestion.fetcher import PageFetcher
from article_pipeline.ingestion.link_extractor import LinkCandidate, extract_links
from article_pipeline.utils.exceptions import NoNewContentError, ScrapingError

DEFAULT_BATCH_SIZE = 5


@dataclass
class IngestCandidate:
    """Extracted article ready to be stored."""

    url: str
    title: str
    content: str
    published_date: Optional[str] = None


def _today() -> str:
    return datetime.now(timezone.utc).date().isoformat()


class DeduplicatingIngestor(BaseAgent):
    """Insert only articles whose URL is not stored yet."""

    def __init__(
        self,
        db_session: AsyncSession,
        fetcher: Optional[PageFetcher] = None,
        base_url: Optional[str] = None,
        shuffle: Optional[Callable[[MutableSequence], None]] = None,
    ) -> None:
        """
        Initialize the ingestor.

        Args:
            db_session: Database session
            fetcher: Page fetcher (default: PageFetcher with settings)
            base_url: Blog listing URL (default: settings.source_base_url)
            shuffle: In-place shuffle used by random discovery (default: random.shuffle)
        """
        super().__init__("ingestion")
        self.db_session = db_session
        self.fetcher = fetcher or PageFetcher()
        self.base_url = base_url or settings.source_base_url
        self._shuffle = shuffle or random.shuffle

    async def ingest(self, candidate: IngestCandidate) -> int:
        """
        Store a candidate, idempotent by URL.

        Returns:
            ID of the new or existing article
        """
        article_id, _ = await self.store(candidate)
        return article_id

    async def store(self, candidate: IngestCandidate) -> Tuple[int, bool]:
        """
        Store a candidate unless its URL already exists.

        Returns:
            Tuple (article_id, created)
        """
        article, created = await create_article(
            self.db_session,
            url=candidate.url,
            title=candidate.title,
            original_content=candidate.content,
            published_date=candidate.published_date,
        )
        self.set_article_context(article.id)
        self.log_step(
            "ingest",
            "completed",
            "Article stored" if created else "Duplicate URL skipped",
            details={"url": candidate.url, "created": created},
        )
        return article.id, created

    async def _list_candidates(self) -> List[LinkCandidate]:
        html = await self.fetcher.fetch(self.base_url)
        return extract_links(html, self.base_url)

    async def _scrape_candidate(self, link: LinkCandidate) -> Optional[IngestCandidate]:
        """Fetch and extract one candidate, None when it yields nothing usable."""
        try:
            html = await self.fetcher.fetch(link.url)
        except ScrapingError as e:
            self.logger.warning("Candidate fetch failed, skipping", url=link.url, reason=e.reason)
            return None

        content = extract_content(html, fallback_title=link.title)
        if content.is_empty:
            self.logger.warning("Candidate has no extractable content, skipping", url=link.url)
            return None

        return IngestCandidate(
            url=link.url,
            title=content.title,
            content=content.body,
            published_date=_today(),
        )

    async def discover_new_article(self) -> int:
        """
        Scrape one random article that is not stored yet.

        The listing candidates are shuffled and probed one at a time. The scan
        is bounded by the number of candidates on the listing page.

        Returns:
            ID of the newly stored article

        Raises:
            ScrapingError: If the listing page itself cannot be fetched
            NoNewContentError: If every candidate is stored already or empty
        """
        async with self.step_context("discover") as ctx:
            links = list(await self._list_candidates())
            self._shuffle(links)
            ctx["candidates"] = len(links)

            for checked, link in enumerate(links, start=1):
                if await get_article_by_url(self.db_session, link.url) is not None:
                    continue

                candidate = await self._scrape_candidate(link)
                if candidate is None:
                    continue

                article_id = await self.ingest(candidate)
                ctx["checked"] = checked
                ctx["article_id"] = article_id
                return article_id

            raise NoNewContentError(candidates_checked=len(links))

    async def scrape_oldest(self, limit: int = DEFAULT_BATCH_SIZE) -> List[int]:
        """
        Ingest the oldest articles shown on the listing page.

        Args:
            limit: Number of links taken from the end of the listing

        Returns:
            IDs of newly created articles
        """
        created_ids: List[int] = []
        async with self.step_context("scrape_oldest") as ctx:
            links = await self._list_candidates()
            oldest = links[-limit:] if limit > 0 else []
            ctx["candidates"] = len(oldest)

            for link in oldest:
                if await get_article_by_url(self.db_session, link.url) is not None:
                    self.logger.info("Article already stored, skipping", url=link.url)
                    continue

                candidate = await self._scrape_candidate(link)
                if candidate is None:
                    continue

                created_ids.append(await self.ingest(candidate))

            ctx["created"] = len(created_ids)
        return created_ids
