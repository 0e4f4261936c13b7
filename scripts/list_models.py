#!/usr/bin/env python3
"""Script to list the models available on the LLM provider."""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from article_pipeline.agents.enrichment.llm_client import OllamaClient
from article_pipeline.config.settings import settings
from article_pipeline.utils.exceptions import LLMProviderError
from article_pipeline.utils.logging import setup_logging

setup_logging()


async def main() -> int:
    """Main entry point."""
    client = OllamaClient()
    print(f"Fetching models from {settings.ollama_base_url}...")

    try:
        models = await client.list_models()
    except LLMProviderError as e:
        print(f"❌ Provider error: {e}")
        return 1

    generation_models = [model for model in models if model.supports_generation]
    if not generation_models:
        print("No generation models found.")
        return 0

    print("\n✨ Available generation models:\n")
    for model in generation_models:
        preferred = " (configured)" if model.name in settings.llm_models else ""
        print(f"🔹 ID: {model.name}{preferred}")
        if model.size:
            print(f"   Size: {model.size / 1_000_000_000:.1f} GB")
        print("--------------------------------------------------")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
