#!/usr/bin/env python3
"""Script to research and enrich every pending article."""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Dict

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from article_pipeline.agents.agent_research import ResearchCoordinator
from article_pipeline.agents.enrichment.article_enricher import ArticleEnricher
from article_pipeline.database.crud_articles import list_articles_by_status
from article_pipeline.database.db_session import AsyncSessionLocal
from article_pipeline.database.models import ArticleStatus
from article_pipeline.utils.exceptions import PipelineError
from article_pipeline.utils.logging import clear_pipeline_context, get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)

DEFAULT_AUTO_APPROVE = 2
DEFAULT_PAUSE_SECONDS = 2.0


async def enhance_articles(
    auto_approve: int = DEFAULT_AUTO_APPROVE,
    pause_seconds: float = DEFAULT_PAUSE_SECONDS,
) -> Dict[str, int]:
    """
    Search, auto-approve the top candidates and enrich each pending article.

    A failure on one article is reported and the batch moves on.

    Args:
        auto_approve: Number of top research candidates approved automatically
        pause_seconds: Pause between articles to stay under provider rate limits

    Returns:
        Statistics (total, enriched, failed)
    """
    stats = {"total": 0, "enriched": 0, "failed": 0}

    async with AsyncSessionLocal() as db_session:
        pending = await list_articles_by_status(db_session, ArticleStatus.PENDING)
        stats["total"] = len(pending)
        coordinator = ResearchCoordinator(db_session)
        enricher = ArticleEnricher(db_session)

        # Enrichment failures roll the session back and expire loaded articles
        targets = [(article.id, article.title) for article in pending]

        for index, (article_id, title) in enumerate(targets):
            print(f"\n📝 Processing: {title!r}")
            try:
                candidates = await coordinator.search(article_id)
                for candidate in candidates[:auto_approve]:
                    await coordinator.approve(article_id, candidate.url)
                    print(f"   ✅ Source approved: {candidate.url}")

                enriched = await enricher.enrich(article_id)
                stats["enriched"] += 1
                print(f"   🧠 Enriched (SEO score: {enriched.seo_score}, citations: {len(enriched.citations or [])})")
            except PipelineError as e:
                stats["failed"] += 1
                logger.error("Article enhancement failed", article_id=article_id, error=str(e))
                print(f"   ❌ Failed: {e}")
            finally:
                clear_pipeline_context()

            if index < len(targets) - 1 and pause_seconds > 0:
                await asyncio.sleep(pause_seconds)

    return stats


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Research and enrich every pending article")
    parser.add_argument(
        "--auto-approve",
        type=int,
        default=DEFAULT_AUTO_APPROVE,
        help="Number of top research candidates approved automatically",
    )
    parser.add_argument(
        "--pause",
        type=float,
        default=DEFAULT_PAUSE_SECONDS,
        help="Seconds to wait between articles",
    )
    args = parser.parse_args()

    print("🚀 Starting article enhancement...")
    stats = await enhance_articles(auto_approve=args.auto_approve, pause_seconds=args.pause)

    print("\n🎉 Enhancement finished:")
    print(f"  📊 Pending articles: {stats['total']}")
    print(f"  ✅ Enriched: {stats['enriched']}")
    print(f"  ❌ Failed: {stats['failed']}")


if __name__ == "__main__":
    asyncio.run(main())
