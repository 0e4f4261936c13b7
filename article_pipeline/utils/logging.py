"""Structured logging setup using structlog with pipeline context support."""

import logging
import sys
from contextvars import ContextVar
from typing import Any, Optional

import structlog
from structlog.types import EventDict, Processor

from article_pipeline.config.settings import settings


# Context variables bound to every log line of a pipeline operation
_article_id_ctx: ContextVar[Optional[int]] = ContextVar("article_id", default=None)
_stage_ctx: ContextVar[Optional[str]] = ContextVar("stage", default=None)


def set_pipeline_context(
    article_id: Optional[int] = None,
    stage: Optional[str] = None,
) -> None:
    """
    Set the current pipeline context for structured logging.

    Args:
        article_id: Article being processed
        stage: Current pipeline stage (ingestion, research, enrichment, ...)
    """
    if article_id is not None:
        _article_id_ctx.set(article_id)
    if stage is not None:
        _stage_ctx.set(stage)


def clear_pipeline_context() -> None:
    """Clear the current pipeline context."""
    _article_id_ctx.set(None)
    _stage_ctx.set(None)


def get_pipeline_context() -> dict[str, Any]:
    """
    Get the current pipeline context.

    Returns:
        Dict with article_id and stage
    """
    return {
        "article_id": _article_id_ctx.get(),
        "stage": _stage_ctx.get(),
    }


def add_pipeline_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add pipeline context to log entries if available."""
    article_id = _article_id_ctx.get()
    stage = _stage_ctx.get()

    if article_id is not None and "article_id" not in event_dict:
        event_dict["article_id"] = article_id
    if stage and "stage" not in event_dict:
        event_dict["stage"] = stage

    return event_dict


def setup_logging() -> None:
    """Configure structured logging."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_pipeline_context,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if settings.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
