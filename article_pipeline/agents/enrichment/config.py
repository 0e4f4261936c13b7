"""Configuration for article enrichment module."""

from dataclasses import dataclass, field
from typing import List

from article_pipeline.config.settings import settings


@dataclass
class EnrichmentConfig:
    """Article enrichment configuration."""

    # Ordered model preference list
    models: List[str] = field(default_factory=lambda: list(settings.llm_models))

    # Retry settings (per model)
    max_attempts_per_model: int = 3
    rate_limit_backoff_seconds: float = 3.0
    error_retry_delay_seconds: float = 1.0

    # Prompt budgets
    max_content_chars: int = field(default_factory=lambda: settings.max_content_chars)
    max_research_chars: int = field(default_factory=lambda: settings.max_research_chars)
    max_sibling_articles: int = field(default_factory=lambda: settings.max_sibling_articles)

    # Versioning
    version_history_limit: int = field(default_factory=lambda: settings.version_history_limit)

    # Fail instead of degrading when every approved research source fails
    require_research_sources: bool = field(default_factory=lambda: settings.require_research_sources)

    @classmethod
    def default(cls) -> "EnrichmentConfig":
        """Create default configuration."""
        return cls()
