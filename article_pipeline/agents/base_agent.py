"""Base agent class with step logging support."""

import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from article_pipeline.utils.logging import get_logger, set_pipeline_context


class BaseAgent:
    """
    Base class for pipeline agents.

    Provides:
    - Structured logging bound to the agent name
    - Pipeline context (article_id, stage) for every log line
    - Step timing with start, completion and error events
    """

    def __init__(self, agent_name: str) -> None:
        """
        Initialize agent logging.

        Args:
            agent_name: Unique name for this agent (used in logs and as stage)
        """
        self.agent_name = agent_name
        self.logger = get_logger(f"agent.{agent_name}")
        self._step_timers: Dict[str, float] = {}

    def set_article_context(self, article_id: Optional[int]) -> None:
        """
        Bind the article being processed to subsequent log lines.

        Args:
            article_id: Article ID
        """
        set_pipeline_context(article_id=article_id, stage=self.agent_name)

    def log_step(
        self,
        step_name: str,
        status: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log a workflow step.

        Args:
            step_name: Name of the step
            status: Status (started, completed, error, warning)
            message: Human-readable message
            details: Optional additional details
        """
        self.logger.info(
            "workflow_step",
            step=step_name,
            status=status,
            message=message,
            details=details or {},
        )

    def start_step_timer(self, step_name: str) -> None:
        self._step_timers[step_name] = time.time()
        self.log_step(step_name, "started", f"Starting {step_name}")

    def stop_step_timer(
        self,
        step_name: str,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> float:
        """
        Stop a step timer and log completion.

        Returns:
            Duration in seconds
        """
        start_time = self._step_timers.pop(step_name, None)
        if start_time is None:
            return 0.0

        duration = time.time() - start_time
        self.log_step(
            step_name,
            "completed",
            message or f"Completed {step_name}",
            details={**(details or {}), "duration_seconds": round(duration, 3)},
        )
        return duration

    @asynccontextmanager
    async def step_context(
        self,
        step_name: str,
        message: Optional[str] = None,
    ) -> AsyncGenerator[Dict[str, Any], None]:
        """
        Context manager tracking a step's execution time and status.

        Usage:
            async with self.step_context("search") as ctx:
                ...
                ctx["candidates"] = 4

        Args:
            step_name: Name of the step
            message: Optional completion message

        Yields:
            Dict for storing step results, logged on completion
        """
        step_data: Dict[str, Any] = {}
        self.start_step_timer(step_name)

        try:
            yield step_data
            self.stop_step_timer(
                step_name,
                message=message or f"Completed {step_name}",
                details=step_data if step_data else None,
            )
        except Exception as e:
            duration = time.time() - self._step_timers.pop(step_name, time.time())
            self.logger.error(
                "workflow_step",
                step=step_name,
                status="error",
                message=f"Failed during {step_name}",
                error_type=type(e).__name__,
                error=str(e),
                details={"duration_seconds": round(duration, 3), **step_data},
            )
            raise
