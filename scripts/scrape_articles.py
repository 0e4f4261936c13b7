#!/usr/bin/env python3
"""Script to ingest the oldest articles of the source blog."""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from article_pipeline.agents.agent_ingestion import DEFAULT_BATCH_SIZE, DeduplicatingIngestor
from article_pipeline.config.settings import settings
from article_pipeline.database.db_session import AsyncSessionLocal
from article_pipeline.utils.exceptions import ScrapingError
from article_pipeline.utils.logging import get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)


async def scrape_articles(base_url: str, limit: int) -> list[int]:
    """
    Ingest the last `limit` articles of the listing page.

    Args:
        base_url: Blog listing URL
        limit: Number of links taken from the end of the listing

    Returns:
        IDs of newly created articles
    """
    async with AsyncSessionLocal() as db_session:
        ingestor = DeduplicatingIngestor(db_session, base_url=base_url)
        return await ingestor.scrape_oldest(limit=limit)


async def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Scrape the oldest articles of the source blog")
    parser.add_argument(
        "--base-url",
        default=settings.source_base_url,
        help="Blog listing URL",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=DEFAULT_BATCH_SIZE,
        help="Number of oldest articles to scrape",
    )
    args = parser.parse_args()

    print(f"🔍 Scraping {args.limit} oldest articles from {args.base_url}")
    try:
        article_ids = await scrape_articles(args.base_url, args.limit)
    except ScrapingError as e:
        print(f"❌ Listing page unavailable: {e}")
        return 1

    print(f"\n✅ Scraping finished: {len(article_ids)} new articles stored")
    for article_id in article_ids:
        print(f"  - article {article_id}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
