"""Configuration settings using Pydantic Settings."""

from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

# Find .env file - look in project root
# Go up from article_pipeline/config/settings.py -> article_pipeline/config -> article_pipeline -> root
_project_root = Path(__file__).parent.parent.parent
_env_file = _project_root / ".env"

# Also check current working directory as fallback
_cwd_env_file = Path.cwd() / ".env"
if not _env_file.exists() and _cwd_env_file.exists():
    _env_file = _cwd_env_file


DEFAULT_CHAT_SYSTEM_PROMPT = """You are Jarvis, the assistant of the blog enrichment pipeline website.

About the project:
- Phase 1: Data ingestion (scraping the source blog and storing articles).
- Phase 2: AI refinement (research, summary, tags, rewrite and SEO analysis).
- Phase 3: Frontend (article browsing, knowledge graph and this chat widget).

Your personality:
- Professional, witty and helpful.
- Be concise but informative.
- Answer general questions as well.
"""


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(_env_file) if _env_file.exists() else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_prefix="",
    )

    # PostgreSQL
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "articles_db"
    postgres_user: str = "articles_user"
    postgres_password: str = "change_me_strong_password"

    # Full URL override (e.g. sqlite+aiosqlite:///./articles.db for local runs)
    database_url_override: Optional[str] = None

    @property
    def database_url(self) -> str:
        """Construct async database URL."""
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    # Ollama
    ollama_base_url: str = "http://localhost:11434"
    # Ordered model preference list used by the generation engine
    llm_models: List[str] = ["llama3.1:8b", "mistral:7b", "phi3:medium"]
    llm_timeout_seconds: float = 120.0

    # Source blog
    source_base_url: str = "https://beyondchats.com/blogs/"
    article_path_segment: str = "/blogs/"
    excluded_path_segments: List[str] = ["/tag/", "/page/", "/author/"]

    # Scraping
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )
    fetch_timeout_seconds: float = 5.0

    # Research
    search_limit: int = 5
    max_research_candidates: int = 4
    disallowed_domains: List[str] = ["youtube.com", "youtu.be", "vimeo.com", "tiktok.com"]

    # Prompt budgets
    max_content_chars: int = 4000
    max_research_chars: int = 2000
    max_sibling_articles: int = 50

    # Versioning
    version_history_limit: int = 10

    # Fail enrichment when every approved research source failed to scrape
    require_research_sources: bool = False

    # Chat assistant
    chat_system_prompt: str = DEFAULT_CHAT_SYSTEM_PROMPT

    # Rate Limiting
    rate_limit_per_minute: int = 100

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"


# Global settings instance
settings = Settings()
