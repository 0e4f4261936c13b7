"""Article enrichment module: prompt composition, LLM generation and versioning."""

from article_pipeline.agents.enrichment.article_enricher import ArticleEnricher
from article_pipeline.agents.enrichment.config import EnrichmentConfig

__all__ = ["ArticleEnricher", "EnrichmentConfig"]
