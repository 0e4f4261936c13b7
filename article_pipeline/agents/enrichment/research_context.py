"""Research context assembly from approved candidates."""

import asyncio
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from article_pipeline.agents.enrichment.prompts import ResearchSource
from article_pipeline.database.documents import ResearchCandidate
from article_pipeline.ingestion.content_extractor import extract_readable_text
from article_pipeline.ingestion.fetcher import PageFetcher
from article_pipeline.utils.exceptions import ResearchContextError, ScrapingError
from article_pipeline.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ResearchContext:
    """Sources that were scraped successfully, in candidate order."""

    sources: List[ResearchSource] = field(default_factory=list)
    failed_urls: List[str] = field(default_factory=list)

    @property
    def citations(self) -> List[str]:
        return [source.url for source in self.sources]

    @property
    def degraded(self) -> bool:
        """Approved sources existed but none could be used."""
        return bool(self.failed_urls) and not self.sources


class ResearchContextBuilder:
    """Fetch approved research pages and reduce them to bounded excerpts."""

    def __init__(
        self,
        fetcher: Optional[PageFetcher] = None,
        max_chars: int = 2000,
        require_sources: bool = False,
    ) -> None:
        self.fetcher = fetcher or PageFetcher()
        self.max_chars = max_chars
        self.require_sources = require_sources

    async def _excerpt(self, url: str) -> Optional[str]:
        try:
            html = await self.fetcher.fetch(url)
        except ScrapingError as e:
            logger.warning("Research source fetch failed, skipping", url=url, reason=e.reason)
            return None

        text = extract_readable_text(html)
        if not text:
            logger.warning("Research source has no readable text, skipping", url=url)
            return None
        return text[: self.max_chars]

    async def build(self, candidates: Sequence[ResearchCandidate]) -> ResearchContext:
        """
        Build the research context.

        Per-source failures are absorbed. When every source fails, the
        context is returned empty unless require_sources is set.

        Args:
            candidates: Approved candidates in curation order

        Returns:
            ResearchContext

        Raises:
            ResearchContextError: If require_sources is set and no source succeeded
        """
        if not candidates:
            return ResearchContext()

        excerpts = await asyncio.gather(*(self._excerpt(candidate.url) for candidate in candidates))

        context = ResearchContext()
        for candidate, excerpt in zip(candidates, excerpts):
            if excerpt is None:
                context.failed_urls.append(candidate.url)
            else:
                context.sources.append(ResearchSource(url=candidate.url, excerpt=excerpt))

        if context.degraded:
            if self.require_sources:
                raise ResearchContextError(
                    f"All {len(candidates)} approved research sources failed to scrape"
                )
            logger.warning(
                "All research sources failed, generating without research",
                failed=len(context.failed_urls),
            )
        else:
            logger.info(
                "Research context built",
                sources=len(context.sources),
                failed=len(context.failed_urls),
            )
        return context
