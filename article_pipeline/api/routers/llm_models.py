"""API router for LLM model listing."""

from fastapi import APIRouter, Depends, Query

from article_pipeline.agents.enrichment.llm_client import OllamaClient
from article_pipeline.api.dependencies import get_llm_client
from article_pipeline.api.schemas.responses import ErrorResponse, ModelInfoResponse, ModelListResponse

router = APIRouter(prefix="/models", tags=["Models"])


@router.get(
    "",
    response_model=ModelListResponse,
    summary="List LLM models",
    description="List models installed on the LLM provider and whether they support structured generation.",
    responses={502: {"model": ErrorResponse, "description": "LLM provider unreachable"}},
)
async def list_llm_models(
    generation_only: bool = Query(False, description="Only return models usable for generation"),
    llm_client: OllamaClient = Depends(get_llm_client),
) -> ModelListResponse:
    models = await llm_client.list_models()
    if generation_only:
        models = [model for model in models if model.supports_generation]
    return ModelListResponse(
        models=[
            ModelInfoResponse(name=model.name, supports_generation=model.supports_generation, size=model.size)
            for model in models
        ],
        total=len(models),
    )
