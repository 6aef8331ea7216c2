"""
Practice CMS Backend — Article Service
======================================

What:  Ordered resource service for articles, plus the publish gate and
       the homepage "featured" view.
Why:   Articles are the only content type whose visibility flag has a
       lifecycle (draft → published → draft) and a timestamp attached to it.

Publication rules:
    - Public listing shows is_published rows only.
    - publish() sets is_published and, the first time only, published_at.
    - unpublish() clears is_published and leaves published_at alone, so a
      republished article keeps its original publication date.
    - Public ordering is (order ASC, published_at DESC, id ASC): the admin's
      manual order wins, newer articles first within the same position.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from practice_cms.config import settings
from practice_cms.database import DATABASE_ERRORS
from practice_cms.exceptions import NotFoundError
from practice_cms.models.article import Article
from practice_cms.models.mixins import utcnow
from practice_cms.services.ordered_resource import OrderedResourceService

logger = logging.getLogger(__name__)


class ArticleService(OrderedResourceService[Article]):
    def __init__(self):
        super().__init__(Article, label="article", visibility_field="is_published")

    def _published_select(self):
        return (
            select(Article)
            .where(Article.is_published.is_(True))
            .order_by(
                Article.order.asc(),
                Article.published_at.desc(),
                Article.id.asc(),
            )
        )

    def _before_flush(self, item: Article) -> None:
        # Saving with isPublished=true counts as publishing
        if item.is_published and item.published_at is None:
            item.published_at = utcnow()

    async def list_active(self, db: AsyncSession) -> List[Article]:
        """Same rows as the published subset of list_all; order ties break by newest publication."""
        return await self.list_published(db)

    async def list_published(self, db: AsyncSession) -> List[Article]:
        try:
            result = await db.execute(self._published_select())
            return list(result.scalars().all())
        except DATABASE_ERRORS as e:
            raise self._database_error("list", e)

    async def get_published(self, db: AsyncSession, article_id: int) -> Article:
        """
        Public single-article view.

        Raises:
            NotFoundError: unknown id OR the article is a draft. Drafts are
                           indistinguishable from missing rows to the public.
        """
        article = await self.get(db, article_id)
        if not article.is_published:
            raise NotFoundError(resource=self.label, resource_id=str(article_id))
        return article

    async def list_featured(self, db: AsyncSession, limit: Optional[int] = None) -> List[Article]:
        """Published + featured articles for the homepage, capped at `limit`."""
        limit = settings.featured_articles_limit if limit is None else limit
        try:
            result = await db.execute(
                self._published_select().where(Article.is_featured.is_(True)).limit(limit)
            )
            return list(result.scalars().all())
        except DATABASE_ERRORS as e:
            raise self._database_error("list", e)

    async def publish(self, db: AsyncSession, article_id: int) -> Article:
        article = await self.update(db, article_id, {"is_published": True})
        logger.info("article %s published (first published at %s)", article_id, article.published_at)
        return article

    async def unpublish(self, db: AsyncSession, article_id: int) -> Article:
        article = await self.update(db, article_id, {"is_published": False})
        logger.info("article %s unpublished", article_id)
        return article


# ── Singleton Instance ────────────────────────────────────────────────────
article_service = ArticleService()
