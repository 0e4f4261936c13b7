"""FastAPI main application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from article_pipeline.api.middleware.error_handlers import setup_exception_handlers
from article_pipeline.api.middleware.rate_limit import setup_rate_limiting
from article_pipeline.api.routers import (
    articles,
    chat,
    enrichment,
    health,
    ingestion,
    llm_models,
    research,
)
from article_pipeline.utils.logging import setup_logging

# Setup logging
setup_logging()

# Create FastAPI app
app = FastAPI(
    title="Article Enrichment Pipeline API",
    version="1.0.0",
    description="REST API for blog scraping, research curation and LLM article enrichment",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Setup CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup rate limiting and error mapping
setup_rate_limiting(app)
setup_exception_handlers(app)

# Register routers
app.include_router(health.router, prefix="/api/v1")
app.include_router(articles.router, prefix="/api/v1")
app.include_router(ingestion.router, prefix="/api/v1")
app.include_router(research.router, prefix="/api/v1")
app.include_router(enrichment.router, prefix="/api/v1")
app.include_router(llm_models.router, prefix="/api/v1")
app.include_router(chat.router, prefix="/api/v1")
