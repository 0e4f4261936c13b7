"""Retry utilities with tenacity for LLM operations."""

import asyncio
from typing import Awaitable, Callable, Optional, Tuple, Type

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    retry_if_not_exception_type,
    stop_after_attempt,
)

from article_pipeline.utils.exceptions import ClientRequestError, RateLimitError
from article_pipeline.utils.logging import get_logger

logger = get_logger(__name__)

# Default retry configuration
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_RATE_LIMIT_STEP_SECONDS = 3.0
DEFAULT_ERROR_DELAY_SECONDS = 1.0

SleepFunc = Callable[[float], Awaitable[None]]


def classified_wait(
    rate_limit_step: float = DEFAULT_RATE_LIMIT_STEP_SECONDS,
    error_delay: float = DEFAULT_ERROR_DELAY_SECONDS,
    rate_limit_exceptions: Tuple[Type[BaseException], ...] = (RateLimitError,),
) -> Callable[[RetryCallState], float]:
    """
    Build a tenacity wait strategy that depends on the failure class.

    Rate-limit failures wait ``attempt_number * rate_limit_step`` seconds,
    every other retryable failure waits ``error_delay`` seconds.

    Args:
        rate_limit_step: Linear backoff step for rate-limit failures
        error_delay: Fixed delay for any other failure
        rate_limit_exceptions: Exception types treated as rate limiting

    Returns:
        Wait callable usable as ``AsyncRetrying(wait=...)``
    """

    def _wait(retry_state: RetryCallState) -> float:
        outcome = retry_state.outcome
        error = outcome.exception() if outcome is not None else None
        if isinstance(error, rate_limit_exceptions):
            return rate_limit_step * retry_state.attempt_number
        return error_delay

    return _wait


def _log_before_sleep(operation: str) -> Callable[[RetryCallState], None]:
    def _log(retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            "Retrying operation",
            operation=operation,
            attempt=retry_state.attempt_number,
            wait_seconds=retry_state.next_action.sleep if retry_state.next_action else None,
            error_type=type(error).__name__ if error else None,
            error=str(error) if error else None,
        )

    return _log


def llm_retrying(
    operation: str,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    rate_limit_step: float = DEFAULT_RATE_LIMIT_STEP_SECONDS,
    error_delay: float = DEFAULT_ERROR_DELAY_SECONDS,
    sleep: Optional[SleepFunc] = None,
) -> AsyncRetrying:
    """
    Create the AsyncRetrying controller for one LLM model.

    Client request errors are never retried: they are re-raised on the first
    attempt so the caller can move on to the next model. Cancellation is not an
    ``Exception`` subclass and therefore propagates untouched.

    Usage:
        async for attempt in llm_retrying("generate:mistral:7b"):
            with attempt:
                text = await provider.generate(...)

    Args:
        operation: Name used in retry logs
        max_attempts: Maximum attempts for this model (default: 3)
        rate_limit_step: Linear backoff step for rate-limit failures
        error_delay: Fixed delay for other failures
        sleep: Awaitable sleep function (default: asyncio.sleep)

    Returns:
        Configured AsyncRetrying instance
    """
    return AsyncRetrying(
        sleep=sleep or asyncio.sleep,
        stop=stop_after_attempt(max_attempts),
        wait=classified_wait(rate_limit_step=rate_limit_step, error_delay=error_delay),
        retry=(
            retry_if_exception_type(Exception)
            & retry_if_not_exception_type(ClientRequestError)
        ),
        before_sleep=_log_before_sleep(operation),
        reraise=True,
    )
