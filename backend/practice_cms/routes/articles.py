"""
Practice CMS Backend — Article Routes
=====================================

What:  Article endpoints beyond the generic CRUD/reorder set:
    GET  /api/articles/featured              homepage highlight (published + featured)
    GET  /api/articles/{id}                  one published article
    GET  /api/admin/articles/{id}            one article, drafts included
    POST /api/admin/articles/{id}/publish    draft → published
    POST /api/admin/articles/{id}/unpublish  published → draft

/featured is declared before /{article_id} so it is not parsed as an id.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from practice_cms.database import get_db_session
from practice_cms.exceptions import DatabaseError
from practice_cms.schemas.content import ArticleResponse
from practice_cms.services import audit
from practice_cms.services.article_service import article_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Articles"])


@router.get(
    "/api/articles/featured",
    response_model=List[ArticleResponse],
    summary="Featured articles",
)
async def list_featured_articles(
    limit: Optional[int] = Query(default=None, ge=1, le=50, description="Defaults to FEATURED_ARTICLES_LIMIT"),
    db: AsyncSession = Depends(get_db_session),
):
    try:
        return await article_service.list_featured(db, limit=limit)
    except DatabaseError:
        await db.rollback()
        logger.warning("Serving empty featured list: database unavailable")
        return []


@router.get(
    "/api/articles/{article_id}",
    response_model=ArticleResponse,
    summary="Get a published article",
)
async def get_published_article(
    article_id: int = Path(...),
    db: AsyncSession = Depends(get_db_session),
):
    return await article_service.get_published(db, article_id)


@router.get(
    "/api/admin/articles/{article_id}",
    response_model=ArticleResponse,
    summary="Get any article (drafts included)",
)
async def get_article(
    article_id: int = Path(...),
    db: AsyncSession = Depends(get_db_session),
):
    return await article_service.get(db, article_id)


@router.post(
    "/api/admin/articles/{article_id}/publish",
    response_model=ArticleResponse,
    summary="Publish an article",
    description="Sets isPublished. publishedAt is stamped on the first publication only.",
)
async def publish_article(
    article_id: int = Path(...),
    db: AsyncSession = Depends(get_db_session),
):
    article = await article_service.publish(db, article_id)
    await audit.record(db, "publish", "articles", article_id)
    return article


@router.post(
    "/api/admin/articles/{article_id}/unpublish",
    response_model=ArticleResponse,
    summary="Return an article to draft",
)
async def unpublish_article(
    article_id: int = Path(...),
    db: AsyncSession = Depends(get_db_session),
):
    article = await article_service.unpublish(db, article_id)
    await audit.record(db, "unpublish", "articles", article_id)
    return article
