"""CRUD operations for Article model."""

from typing import Any, List, Optional, Tuple

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from article_pipeline.database.models import Article, ArticleStatus
from article_pipeline.utils.logging import get_logger

logger = get_logger(__name__)


async def get_article(
    db_session: AsyncSession,
    article_id: int,
) -> Optional[Article]:
    """
    Get article by ID.

    Args:
        db_session: Database session
        article_id: Article ID

    Returns:
        Article if found, None otherwise
    """
    result = await db_session.execute(select(Article).where(Article.id == article_id))
    return result.scalar_one_or_none()


async def get_article_by_url(
    db_session: AsyncSession,
    url: str,
) -> Optional[Article]:
    """
    Get article by its unique URL (exact match).

    Args:
        db_session: Database session
        url: Canonical article URL

    Returns:
        Article if found, None otherwise
    """
    result = await db_session.execute(select(Article).where(Article.url == url))
    return result.scalar_one_or_none()


async def list_articles(
    db_session: AsyncSession,
    limit: Optional[int] = None,
    exclude_id: Optional[int] = None,
) -> List[Article]:
    """
    List articles, most recent first.

    Args:
        db_session: Database session
        limit: Maximum number of articles to return (optional)
        exclude_id: Article ID to leave out (optional)

    Returns:
        List of Article instances
    """
    query = select(Article)
    if exclude_id is not None:
        query = query.where(Article.id != exclude_id)
    query = query.order_by(Article.created_at.desc(), Article.id.desc())
    if limit is not None:
        query = query.limit(limit)

    result = await db_session.execute(query)
    return list(result.scalars().all())


async def list_articles_by_status(
    db_session: AsyncSession,
    status: ArticleStatus,
) -> List[Article]:
    """
    List articles with the given lifecycle status, most recent first.

    Args:
        db_session: Database session
        status: Article status

    Returns:
        List of Article instances
    """
    result = await db_session.execute(
        select(Article)
        .where(Article.status == status.value)
        .order_by(Article.created_at.desc(), Article.id.desc())
    )
    return list(result.scalars().all())


async def create_article(
    db_session: AsyncSession,
    url: str,
    title: str,
    original_content: str,
    published_date: Optional[str] = None,
) -> Tuple[Article, bool]:
    """
    Create an article unless one already exists for the URL.

    Duplicate URLs are a no-op returning the existing article. A concurrent
    insert of the same URL is caught through the unique constraint.

    Args:
        db_session: Database session
        url: Canonical article URL
        title: Article title
        original_content: Plain-text article body
        published_date: Publication date string (optional)

    Returns:
        Tuple (article, created)
    """
    existing = await get_article_by_url(db_session, url)
    if existing is not None:
        logger.info("Article already exists, skipping", url=url, article_id=existing.id)
        return existing, False

    article = Article(
        url=url,
        title=title,
        original_content=original_content,
        published_date=published_date,
        status=ArticleStatus.PENDING.value,
    )
    db_session.add(article)
    try:
        await db_session.commit()
    except IntegrityError:
        await db_session.rollback()
        existing = await get_article_by_url(db_session, url)
        if existing is None:
            raise
        logger.info("Article inserted concurrently, returning existing", url=url, article_id=existing.id)
        return existing, False

    await db_session.refresh(article)
    logger.info("Article created", url=url, article_id=article.id)
    return article, True


async def update_article(
    db_session: AsyncSession,
    article: Article,
    **kwargs: Any,
) -> Article:
    """
    Patch article fields.

    Args:
        db_session: Database session
        article: Article instance to update
        **kwargs: Fields to update

    Returns:
        Updated Article instance
    """
    for key, value in kwargs.items():
        if not hasattr(article, key):
            raise AttributeError(f"Article has no field '{key}'")
        setattr(article, key, value)

    await db_session.commit()
    await db_session.refresh(article)
    logger.debug("Article updated", article_id=article.id, fields=list(kwargs.keys()))
    return article


async def delete_article(
    db_session: AsyncSession,
    article_id: int,
) -> bool:
    """
    Delete an article unconditionally.

    Args:
        db_session: Database session
        article_id: Article ID

    Returns:
        True if a row was deleted
    """
    result = await db_session.execute(delete(Article).where(Article.id == article_id))
    await db_session.commit()
    deleted = (result.rowcount or 0) > 0
    logger.info("Article deleted", article_id=article_id, deleted=deleted)
    return deleted
