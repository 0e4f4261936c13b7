"""Custom exceptions hierarchy."""

from typing import Optional


class PipelineError(Exception):
    """Base exception for all article pipeline errors."""

    pass


class NotFoundError(PipelineError):
    """Referenced article, version or candidate does not exist."""

    pass


class ArticleNotFoundError(NotFoundError):
    """Article does not exist in the store."""

    def __init__(self, article_id: int) -> None:
        self.article_id = article_id
        super().__init__(f"Article {article_id} not found")


class VersionNotFoundError(NotFoundError):
    """No history snapshot matches the requested timestamp."""

    def __init__(self, article_id: int, timestamp: int) -> None:
        self.article_id = article_id
        self.timestamp = timestamp
        super().__init__(f"Version {timestamp} not found for article {article_id}")


class ExhaustedCandidatesError(PipelineError):
    """Ingestion scan found no candidate yielding new, non-empty content."""

    pass


class NoNewContentError(ExhaustedCandidatesError):
    """Random discovery exhausted every listing candidate."""

    def __init__(self, candidates_checked: int = 0) -> None:
        self.candidates_checked = candidates_checked
        super().__init__(
            "No new articles found to scrape! Try deleting some existing ones."
        )


class ScrapingError(PipelineError):
    """Error while fetching or parsing a single page."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to scrape {url}: {reason}")


class SearchProviderError(PipelineError):
    """External web search failed."""

    pass


class ResearchContextError(PipelineError):
    """Every approved research source failed to scrape."""

    pass


class LLMError(PipelineError):
    """Error during LLM operations."""

    pass


class LLMProviderError(LLMError):
    """The LLM provider rejected or failed a single call."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class RateLimitError(LLMProviderError):
    """Provider signalled too many requests or an overloaded service."""

    pass


class ClientRequestError(LLMProviderError):
    """Malformed request or unknown model, retrying the same model is pointless."""

    pass


class GenerationError(LLMError):
    """Every model and attempt combination was exhausted."""

    def __init__(self, message: str, attempts: int = 0) -> None:
        self.attempts = attempts
        super().__init__(message)


class MalformedResponseError(LLMError):
    """LLM output could not be coerced into the enrichment JSON contract."""

    def __init__(self, message: str, raw_text: str) -> None:
        self.raw_text = raw_text
        super().__init__(message)


class InvalidStateTransitionError(PipelineError):
    """Requested lifecycle transition is not in the transition table."""

    def __init__(self, machine: str, current: str, target: str) -> None:
        self.machine = machine
        self.current = current
        self.target = target
        super().__init__(f"Invalid {machine} transition: {current} -> {target}")


class ConcurrentOperationError(PipelineError):
    """Another research or generation operation is in flight for the article."""

    pass


class MissingContentError(PipelineError):
    """Article has no original content to enrich."""

    pass
