"""Article enricher: research context, prompt, generation and versioned write."""

from typing import List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from article_pipeline.agents.base_agent import BaseAgent
from article_pipeline.agents.enrichment.config import EnrichmentConfig
from article_pipeline.agents.enrichment.generation_engine import GenerationEngine
from article_pipeline.agents.enrichment.llm_client import OllamaClient
from article_pipeline.agents.enrichment.prompts import (
    PromptInputs,
    ResearchSource,
    SiblingArticle,
    compose,
)
from article_pipeline.agents.enrichment.research_context import ResearchContextBuilder
from article_pipeline.agents.enrichment.version_manager import VersionManager
from article_pipeline.database.crud_articles import get_article, list_articles, update_article
from article_pipeline.database.documents import load_candidates
from article_pipeline.database.models import Article, CandidateStatus, ResearchState
from article_pipeline.database.state_machine import (
    check_research_transition,
    is_research_in_flight,
)
from article_pipeline.utils.exceptions import (
    ArticleNotFoundError,
    ConcurrentOperationError,
    MissingContentError,
)


def build_prompt_inputs(
    article: Article,
    research: Sequence[ResearchSource],
    siblings: Sequence[Article],
    config: EnrichmentConfig,
) -> PromptInputs:
    """Collect prompt inputs from the stored article and its context."""
    return PromptInputs(
        title=article.title,
        original_content=article.original_content or "",
        research=list(research),
        siblings=[SiblingArticle(title=sibling.title, url=sibling.url) for sibling in siblings],
        tone=article.user_tone,
        keywords=list(article.user_keywords or []),
        readability_level=article.readability_level,
        custom_instructions=article.custom_prompt,
        target_language=article.target_language,
        max_content_chars=config.max_content_chars,
        max_research_chars=config.max_research_chars,
        max_siblings=config.max_sibling_articles,
    )


class ArticleEnricher(BaseAgent):
    """Rewrite an article with the LLM and persist the result as a new version."""

    def __init__(
        self,
        db_session: AsyncSession,
        engine: Optional[GenerationEngine] = None,
        context_builder: Optional[ResearchContextBuilder] = None,
        version_manager: Optional[VersionManager] = None,
        config: Optional[EnrichmentConfig] = None,
    ) -> None:
        super().__init__("enrichment")
        self.db_session = db_session
        self.config = config or EnrichmentConfig.default()
        self.engine = engine or GenerationEngine(OllamaClient(), config=self.config)
        self.context_builder = context_builder or ResearchContextBuilder(
            max_chars=self.config.max_research_chars,
            require_sources=self.config.require_research_sources,
        )
        self.version_manager = version_manager or VersionManager(
            db_session,
            history_limit=self.config.version_history_limit,
        )

    async def _load(self, article_id: int) -> Article:
        article = await get_article(self.db_session, article_id)
        if article is None:
            raise ArticleNotFoundError(article_id)
        return article

    async def enrich(self, article_id: int, models: Optional[List[str]] = None) -> Article:
        """
        Enrich an article.

        The research state moves to processing for the duration of the call,
        then to complete. On failure it reverts to its previous value and the
        enrichment fields are left untouched.

        Args:
            article_id: Article ID
            models: Ordered model list overriding the configured one

        Returns:
            Updated Article

        Raises:
            ArticleNotFoundError: If the article does not exist
            MissingContentError: If the article has no original content
            ConcurrentOperationError: If a search or generation is in flight
            ResearchContextError: If strict research mode is on and every source failed
            GenerationError: If every model and attempt combination failed
            MalformedResponseError: If the model output breaks the JSON contract
        """
        article = await self._load(article_id)
        self.set_article_context(article_id)

        if not (article.original_content or "").strip():
            raise MissingContentError(f"Article {article_id} has no content to analyze")
        if is_research_in_flight(article.research_state):
            raise ConcurrentOperationError(
                f"Article {article_id} is busy (research state: {article.research_state})"
            )

        previous_state = article.research_state
        processing = check_research_transition(previous_state, ResearchState.PROCESSING)
        article = await update_article(self.db_session, article, research_state=processing.value)

        try:
            async with self.step_context("enrich") as ctx:
                approved = [
                    candidate
                    for candidate in load_candidates(article.research_candidates)
                    if candidate.status == CandidateStatus.APPROVED.value
                ]
                context = await self.context_builder.build(approved)
                ctx["approved_sources"] = len(approved)
                ctx["used_sources"] = len(context.sources)

                siblings = await list_articles(
                    self.db_session,
                    limit=self.config.max_sibling_articles,
                    exclude_id=article.id,
                )
                prompt = compose(build_prompt_inputs(article, context.sources, siblings, self.config))
                ctx["prompt_length"] = len(prompt)

                result = await self.engine.generate(prompt, models)
                article = await self.version_manager.apply_result(article, result, context.citations)
                ctx["seo_score"] = article.seo_score
        except BaseException:
            await self._revert_research_state(article_id, previous_state)
            raise

        complete = check_research_transition(article.research_state, ResearchState.COMPLETE)
        return await update_article(self.db_session, article, research_state=complete.value)

    async def _revert_research_state(self, article_id: int, previous_state: Optional[str]) -> None:
        await self.db_session.rollback()
        article = await self._load(article_id)
        target = ResearchState(previous_state) if previous_state else ResearchState.IDLE
        check_research_transition(article.research_state, target)
        await update_article(self.db_session, article, research_state=previous_state)
        self.logger.warning(
            "Enrichment failed, research state reverted",
            research_state=previous_state,
        )
