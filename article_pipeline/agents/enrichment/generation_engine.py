"""LLM generation with per-model retry and model fallback."""

from typing import List, Optional, Protocol, Sequence

from article_pipeline.agents.enrichment.config import EnrichmentConfig
from article_pipeline.agents.enrichment.response_parser import EnrichmentResult, parse_llm_response
from article_pipeline.utils.exceptions import ClientRequestError, GenerationError
from article_pipeline.utils.logging import get_logger
from article_pipeline.utils.retry import SleepFunc, llm_retrying

logger = get_logger(__name__)


class TextGenerator(Protocol):
    async def generate(self, model: str, prompt: str, json_mode: bool = True) -> str:
        ...


class GenerationEngine:
    """
    Invoke the LLM over an ordered model list.

    Each model gets up to ``max_attempts_per_model`` attempts. Rate-limit
    failures back off linearly, client errors move on to the next model at
    once, any other failure waits a fixed delay.
    """

    def __init__(
        self,
        provider: TextGenerator,
        config: Optional[EnrichmentConfig] = None,
        sleep: Optional[SleepFunc] = None,
    ) -> None:
        self.provider = provider
        self.config = config or EnrichmentConfig.default()
        self._sleep = sleep

    async def generate_text(self, prompt: str, models: Optional[Sequence[str]] = None) -> str:
        """
        Return the first successful raw completion.

        Raises:
            GenerationError: If every model and attempt combination failed
        """
        model_list: List[str] = list(models if models is not None else self.config.models)
        if not model_list:
            raise GenerationError("No LLM models configured")

        last_error: Optional[BaseException] = None
        attempts = 0

        for model in model_list:
            try:
                async for attempt in llm_retrying(
                    f"generate:{model}",
                    max_attempts=self.config.max_attempts_per_model,
                    rate_limit_step=self.config.rate_limit_backoff_seconds,
                    error_delay=self.config.error_retry_delay_seconds,
                    sleep=self._sleep,
                ):
                    with attempt:
                        attempts += 1
                        text = await self.provider.generate(model, prompt, json_mode=True)
                        logger.info(
                            "Generation succeeded",
                            model=model,
                            attempt=attempt.retry_state.attempt_number,
                        )
                        return text
            except ClientRequestError as e:
                last_error = e
                logger.warning("Client error, skipping model", model=model, error=str(e))
            except Exception as e:
                last_error = e
                logger.warning("Model attempts exhausted", model=model, error=str(e))

        raise GenerationError(
            f"All models failed after {attempts} attempts: {last_error}",
            attempts=attempts,
        ) from last_error

    async def generate(self, prompt: str, models: Optional[Sequence[str]] = None) -> EnrichmentResult:
        """
        Generate and parse an enrichment result.

        Parsing failures are terminal and not retried.

        Raises:
            GenerationError: If every model and attempt combination failed
            MalformedResponseError: If the completion does not hold the JSON contract
        """
        raw_text = await self.generate_text(prompt, models)
        return parse_llm_response(raw_text)
