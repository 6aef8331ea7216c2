"""
Practice CMS Backend — Article Service Tests
============================================

What:  Publish gate, publication timestamp rules and the featured view.

What we test:
    ✅ New articles are drafts and stay out of the public listing
    ✅ publish() stamps published_at once; republishing keeps it
    ✅ unpublish() hides the article but keeps published_at
    ✅ Saving with is_published=True counts as publishing
    ✅ Public listing breaks order ties by newest publication first
    ✅ Featured view: published + featured only, capped, ordered
"""

from datetime import datetime, timezone

import pytest

from practice_cms.exceptions import NotFoundError
from practice_cms.services.article_service import article_service


def _article(title="On anxiety", **extra):
    fields = {
        "title": title,
        "description": "A short introduction.",
        "content": "<p>Body</p>",
        "author": "Dr. Silva",
    }
    fields.update(extra)
    return fields


class TestPublicationGate:
    @pytest.mark.asyncio
    async def test_new_article_is_a_draft(self, db_session):
        article = await article_service.create(db_session, _article())

        assert article.is_published is False
        assert article.published_at is None
        assert article.category == "Psicologia"
        assert await article_service.list_published(db_session) == []
        assert [a.id for a in await article_service.list_all(db_session)] == [article.id]

    @pytest.mark.asyncio
    async def test_public_get_hides_drafts(self, db_session):
        article = await article_service.create(db_session, _article())

        with pytest.raises(NotFoundError):
            await article_service.get_published(db_session, article.id)

        await article_service.publish(db_session, article.id)
        found = await article_service.get_published(db_session, article.id)
        assert found.id == article.id

    @pytest.mark.asyncio
    async def test_publish_unknown_article_raises_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            await article_service.publish(db_session, 12345)

    @pytest.mark.asyncio
    async def test_republishing_keeps_first_publication_date(self, db_session):
        article = await article_service.create(db_session, _article())

        first = await article_service.publish(db_session, article.id)
        first_published_at = first.published_at
        second = await article_service.publish(db_session, article.id)

        assert first_published_at is not None
        assert second.published_at == first_published_at

    @pytest.mark.asyncio
    async def test_unpublish_keeps_publication_date(self, db_session):
        article = await article_service.create(db_session, _article())
        published = await article_service.publish(db_session, article.id)
        published_at = published.published_at

        draft = await article_service.unpublish(db_session, article.id)

        assert draft.is_published is False
        assert draft.published_at == published_at
        assert await article_service.list_published(db_session) == []

        again = await article_service.publish(db_session, article.id)
        assert again.published_at == published_at

    @pytest.mark.asyncio
    async def test_creating_as_published_stamps_date(self, db_session):
        article = await article_service.create(db_session, _article(is_published=True))

        assert article.is_published is True
        assert article.published_at is not None

    @pytest.mark.asyncio
    async def test_update_to_published_stamps_date(self, db_session):
        article = await article_service.create(db_session, _article())

        updated = await article_service.update(db_session, article.id, {"is_published": True})

        assert updated.published_at is not None


class TestPublicOrdering:
    @pytest.mark.asyncio
    async def test_equal_order_sorts_newest_publication_first(self, db_session):
        first = await article_service.create(db_session, _article("First", is_published=True))
        second = await article_service.create(db_session, _article("Second", is_published=True))
        first.published_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
        second.published_at = datetime(2024, 6, 1, tzinfo=timezone.utc)
        await db_session.flush()

        admin_view = await article_service.list_all(db_session)
        public_view = await article_service.list_active(db_session)

        assert [a.id for a in admin_view] == [first.id, second.id]
        assert [a.id for a in public_view] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_order_still_wins_over_publication_date(self, db_session):
        late = await article_service.create(db_session, _article("Late", order=0, is_published=True))
        early = await article_service.create(db_session, _article("Early", order=1, is_published=True))
        late.published_at = datetime(2020, 1, 1, tzinfo=timezone.utc)
        early.published_at = datetime(2025, 1, 1, tzinfo=timezone.utc)
        await db_session.flush()

        public_view = await article_service.list_published(db_session)

        assert [a.id for a in public_view] == [late.id, early.id]


class TestFeatured:
    @pytest.mark.asyncio
    async def test_only_published_featured_articles(self, db_session):
        featured = await article_service.create(
            db_session, _article("Featured", is_featured=True, is_published=True)
        )
        await article_service.create(db_session, _article("Draft", is_featured=True))
        await article_service.create(db_session, _article("Plain", is_published=True))

        result = await article_service.list_featured(db_session)

        assert [a.id for a in result] == [featured.id]

    @pytest.mark.asyncio
    async def test_featured_is_capped(self, db_session):
        for index in range(4):
            await article_service.create(
                db_session,
                _article(f"Article {index}", order=index, is_featured=True, is_published=True),
            )

        result = await article_service.list_featured(db_session, limit=2)

        assert [a.title for a in result] == ["Article 0", "Article 1"]

    @pytest.mark.asyncio
    async def test_manual_order_wins_over_publication_date(self, db_session):
        older = await article_service.create(
            db_session, _article("Older", order=0, is_featured=True, is_published=True)
        )
        newer = await article_service.create(
            db_session, _article("Newer", order=1, is_featured=True, is_published=True)
        )

        result = await article_service.list_featured(db_session)

        assert [a.id for a in result] == [older.id, newer.id]
