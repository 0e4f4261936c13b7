"""Unit tests for article CRUD operations."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from article_pipeline.database import crud_articles
from article_pipeline.database.crud_articles import (
    create_article,
    delete_article,
    get_article,
    list_articles,
    list_articles_by_status,
    update_article,
)
from article_pipeline.database.models import ArticleStatus


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_article_defaults(db_session: AsyncSession) -> None:
    article, created = await create_article(
        db_session,
        url="https://example.com/blogs/one",
        title="First article title",
        original_content="Body text",
        published_date="2024-05-01",
    )

    assert created is True
    assert article.id is not None
    assert article.status == ArticleStatus.PENDING.value
    assert article.research_state is None
    assert article.has_enrichment is False
    assert article.created_at is not None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_article_is_idempotent_by_url(db_session: AsyncSession) -> None:
    first, created_first = await create_article(db_session, url="https://e.com/blogs/a", title="Title A", original_content="A")
    second, created_second = await create_article(db_session, url="https://e.com/blogs/a", title="Other", original_content="B")

    assert created_first is True
    assert created_second is False
    assert second.id == first.id
    assert second.title == "Title A"
    assert len(await list_articles(db_session)) == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_concurrent_insert_returns_existing(db_session: AsyncSession, monkeypatch) -> None:
    """Test that a unique constraint violation resolves to the stored row."""
    existing, _ = await create_article(db_session, url="https://e.com/blogs/race", title="Winner", original_content="W")
    real_lookup = crud_articles.get_article_by_url
    calls = []

    async def stale_lookup(session, url):
        calls.append(url)
        if len(calls) == 1:
            return None
        return await real_lookup(session, url)

    monkeypatch.setattr(crud_articles, "get_article_by_url", stale_lookup)

    article, created = await create_article(db_session, url="https://e.com/blogs/race", title="Loser", original_content="L")

    assert created is False
    assert article.id == existing.id
    assert len(calls) == 2


@pytest.mark.unit
@pytest.mark.asyncio
async def test_list_articles_order_limit_and_exclusion(db_session: AsyncSession) -> None:
    ids = []
    for index in range(3):
        article, _ = await create_article(
            db_session, url=f"https://e.com/blogs/{index}", title=f"Article {index}", original_content="Body"
        )
        ids.append(article.id)

    newest_first = [article.id for article in await list_articles(db_session)]
    assert newest_first == list(reversed(ids))

    assert len(await list_articles(db_session, limit=2)) == 2
    assert ids[1] not in [article.id for article in await list_articles(db_session, exclude_id=ids[1])]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_update_and_status_listing(db_session: AsyncSession) -> None:
    article, _ = await create_article(db_session, url="https://e.com/blogs/u", title="Update me", original_content="Body")

    await update_article(db_session, article, status=ArticleStatus.PROCESSED.value, ai_tags=["a", "b"])

    reloaded = await get_article(db_session, article.id)
    assert reloaded.ai_tags == ["a", "b"]
    assert [a.id for a in await list_articles_by_status(db_session, ArticleStatus.PROCESSED)] == [article.id]
    assert await list_articles_by_status(db_session, ArticleStatus.PENDING) == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_update_unknown_field(db_session: AsyncSession) -> None:
    article, _ = await create_article(db_session, url="https://e.com/blogs/x", title="Unknown field", original_content="B")

    with pytest.raises(AttributeError):
        await update_article(db_session, article, not_a_column="value")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_delete_article(db_session: AsyncSession) -> None:
    article, _ = await create_article(db_session, url="https://e.com/blogs/d", title="Delete me", original_content="B")

    assert await delete_article(db_session, article.id) is True
    assert await delete_article(db_session, article.id) is False
    assert await get_article(db_session, article.id) is None
