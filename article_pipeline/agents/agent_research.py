"""Research coordination agent: candidate discovery and human curation."""

from typing import Iterable, List, Optional
from urllib.parse import urlparse

from sqlalchemy.ext.asyncio import AsyncSession

from article_pipeline.agents.base_agent import BaseAgent
from article_pipeline.agents.tools.web_search import SearchResult, WebSearchClient
from article_pipeline.config.settings import settings
from article_pipeline.database.crud_articles import get_article, update_article
from article_pipeline.database.documents import (
    ResearchCandidate,
    dump_candidates,
    load_candidates,
)
from article_pipeline.database.models import Article, CandidateStatus, ResearchState
from article_pipeline.database.state_machine import check_research_transition
from article_pipeline.utils.exceptions import ArticleNotFoundError

DEFAULT_TITLE = "No Title"
DEFAULT_SNIPPET = "No description available"


def _hostname(url: str) -> str:
    host = (urlparse(url).hostname or "").lower()
    return host[4:] if host.startswith("www.") else host


def _matches_domain(host: str, domain: str) -> bool:
    domain = domain.lower()
    if domain.startswith("www."):
        domain = domain[4:]
    return host == domain or host.endswith("." + domain)


def filter_search_results(
    results: Iterable[SearchResult],
    blocked_domains: Iterable[str],
    max_candidates: int,
) -> List[ResearchCandidate]:
    """
    Turn raw search results into pending research candidates.

    Results without an http(s) link, on a blocked domain (or one of its
    subdomains) or repeating an earlier URL are dropped. The list is capped
    to max_candidates.

    Args:
        results: Search results in provider order
        blocked_domains: Origin site and disallowed domains
        max_candidates: Maximum number of candidates kept

    Returns:
        Candidates with status pending
    """
    blocked = [domain for domain in blocked_domains if domain]
    seen: set[str] = set()
    candidates: List[ResearchCandidate] = []

    for result in results:
        if len(candidates) >= max_candidates:
            break
        link = (result.link or "").strip()
        if not link.startswith(("http://", "https://")):
            continue
        host = _hostname(link)
        if any(_matches_domain(host, domain) for domain in blocked):
            continue
        if link in seen:
            continue

        seen.add(link)
        candidates.append(
            ResearchCandidate(
                url=link,
                title=(result.title or "").strip() or DEFAULT_TITLE,
                snippet=(result.description or "").strip() or DEFAULT_SNIPPET,
                status=CandidateStatus.PENDING,
            )
        )

    return candidates


class ResearchCoordinator(BaseAgent):
    """Find competing content for an article and track its curation."""

    def __init__(
        self,
        db_session: AsyncSession,
        search_client: Optional[WebSearchClient] = None,
        search_limit: Optional[int] = None,
        max_candidates: Optional[int] = None,
        origin_url: Optional[str] = None,
        disallowed_domains: Optional[List[str]] = None,
    ) -> None:
        super().__init__("research")
        self.db_session = db_session
        self.search_client = search_client or WebSearchClient()
        self.search_limit = search_limit or settings.search_limit
        self.max_candidates = max_candidates or settings.max_research_candidates
        self.origin_domain = _hostname(origin_url or settings.source_base_url)
        self.disallowed_domains = (
            disallowed_domains if disallowed_domains is not None else settings.disallowed_domains
        )

    async def _load(self, article_id: int) -> Article:
        article = await get_article(self.db_session, article_id)
        if article is None:
            raise ArticleNotFoundError(article_id)
        self.set_article_context(article_id)
        return article

    async def _set_research_state(self, article: Article, target: ResearchState, **fields) -> Article:
        state = check_research_transition(article.research_state, target)
        return await update_article(self.db_session, article, research_state=state.value, **fields)

    async def search(self, article_id: int) -> List[ResearchCandidate]:
        """
        Search the web for content related to the article title.

        Moves research state idle -> searching -> reviewing. On failure the
        state reverts to idle, no candidate is written and the error propagates.

        Returns:
            Persisted candidates, all pending

        Raises:
            ArticleNotFoundError: If the article does not exist
            InvalidStateTransitionError: If a search cannot start from the current state
            SearchProviderError: If the search provider fails
        """
        article = await self._load(article_id)
        article = await self._set_research_state(article, ResearchState.SEARCHING)

        async with self.step_context("search") as ctx:
            try:
                results = await self.search_client.search(article.title, limit=self.search_limit)
            except Exception:
                await self._set_research_state(article, ResearchState.IDLE)
                self.logger.warning("Search failed, research state reverted", article_id=article_id)
                raise

            candidates = filter_search_results(
                results,
                blocked_domains=[self.origin_domain, *self.disallowed_domains],
                max_candidates=self.max_candidates,
            )
            await self._set_research_state(
                article,
                ResearchState.REVIEWING,
                research_candidates=dump_candidates(candidates),
            )
            ctx["results"] = len(results)
            ctx["candidates"] = len(candidates)

        return candidates

    async def _set_candidate_status(
        self,
        article_id: int,
        url: str,
        status: CandidateStatus,
    ) -> List[ResearchCandidate]:
        article = await self._load(article_id)
        candidates = load_candidates(article.research_candidates)

        changed = False
        for candidate in candidates:
            if candidate.url == url and candidate.status != status.value:
                candidate.status = status.value
                changed = True

        if not changed:
            self.logger.debug("Candidate status unchanged", url=url, status=status.value)
            return candidates

        await update_article(self.db_session, article, research_candidates=dump_candidates(candidates))
        self.log_step("curation", "completed", f"Candidate {status.value}", details={"url": url})
        return candidates

    async def approve(self, article_id: int, url: str) -> List[ResearchCandidate]:
        """Mark one candidate approved. Unknown URLs are ignored."""
        return await self._set_candidate_status(article_id, url, CandidateStatus.APPROVED)

    async def reject(self, article_id: int, url: str) -> List[ResearchCandidate]:
        """Mark one candidate rejected. Unknown URLs are ignored."""
        return await self._set_candidate_status(article_id, url, CandidateStatus.REJECTED)

    async def save_config(
        self,
        article_id: int,
        tone: Optional[str] = None,
        keywords: Optional[List[str]] = None,
        target_language: Optional[str] = None,
        readability_level: Optional[int] = None,
        custom_prompt: Optional[str] = None,
    ) -> Article:
        """
        Persist the user's generation configuration.

        Raises:
            ArticleNotFoundError: If the article does not exist
            ValueError: If readability_level is outside 0-100
        """
        if readability_level is not None and not 0 <= readability_level <= 100:
            raise ValueError("readability_level must be between 0 and 100")

        article = await self._load(article_id)
        article = await update_article(
            self.db_session,
            article,
            user_tone=tone,
            user_keywords=list(keywords) if keywords is not None else None,
            target_language=target_language,
            readability_level=readability_level,
            custom_prompt=custom_prompt,
        )
        self.log_step("save_config", "completed", "Generation configuration saved")
        return article
