"""Exception handlers mapping pipeline errors to HTTP responses."""

from typing import Dict, Type

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from article_pipeline.utils.exceptions import (
    ConcurrentOperationError,
    ExhaustedCandidatesError,
    GenerationError,
    InvalidStateTransitionError,
    LLMProviderError,
    MalformedResponseError,
    MissingContentError,
    NotFoundError,
    PipelineError,
    ResearchContextError,
    ScrapingError,
    SearchProviderError,
)
from article_pipeline.utils.logging import get_logger

logger = get_logger(__name__)

# Most specific classes first
STATUS_CODES: Dict[Type[PipelineError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ExhaustedCandidatesError: status.HTTP_404_NOT_FOUND,
    ConcurrentOperationError: status.HTTP_409_CONFLICT,
    InvalidStateTransitionError: status.HTTP_409_CONFLICT,
    MissingContentError: 422,
    MalformedResponseError: status.HTTP_502_BAD_GATEWAY,
    GenerationError: status.HTTP_502_BAD_GATEWAY,
    LLMProviderError: status.HTTP_502_BAD_GATEWAY,
    SearchProviderError: status.HTTP_502_BAD_GATEWAY,
    ResearchContextError: status.HTTP_502_BAD_GATEWAY,
    ScrapingError: status.HTTP_502_BAD_GATEWAY,
}


def status_code_for(error: PipelineError) -> int:
    for error_class, status_code in STATUS_CODES.items():
        if isinstance(error, error_class):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def pipeline_error_handler(request: Request, exc: PipelineError) -> JSONResponse:
    """Render a pipeline error with its status code."""
    status_code = status_code_for(exc)
    body = {"detail": str(exc), "errorType": type(exc).__name__}
    if isinstance(exc, MalformedResponseError):
        body["rawText"] = exc.raw_text

    log = logger.error if status_code >= 500 else logger.warning
    log(
        "Request failed",
        path=request.url.path,
        status_code=status_code,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return JSONResponse(status_code=status_code, content=body)


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    logger.warning("Invalid request value", path=request.url.path, error=str(exc))
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc), "errorType": type(exc).__name__},
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register pipeline exception handlers on the app."""
    app.add_exception_handler(PipelineError, pipeline_error_handler)
    app.add_exception_handler(ValueError, value_error_handler)
