"""
Practice CMS Backend — Site Document Routes
===========================================

What:  One typed endpoint set per single-document setting, generated for
       every entry of services.site_documents.DOCUMENTS.

Endpoints per {slug} (contact-settings, footer-settings, cookie-settings,
privacy-policy, terms-of-use):
    GET    /api/{slug}          document, defaults if never saved (public)
    GET    /api/admin/{slug}    same, for the admin form
    PUT    /api/admin/{slug}    merge the sent fields; ?expectedVersion=n
    DELETE /api/admin/{slug}    forget the saved document, back to defaults

Plus:
    POST   /api/admin/reset-footer-badges   footer back to defaults
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from practice_cms.database import get_db_session
from practice_cms.exceptions import DatabaseError
from practice_cms.services import audit
from practice_cms.services.site_documents import (
    DOCUMENTS,
    FOOTER_SETTINGS,
    SiteDocument,
    site_document_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Site documents"])


def register_document(router: APIRouter, document: SiteDocument) -> None:
    slug = document.slug
    ResponseSchema = document.response_schema
    WriteSchema = document.write_schema

    @router.get(
        f"/api/{slug}",
        response_model=ResponseSchema,
        name=f"get_{slug}",
        summary=f"{slug} (public)",
    )
    async def get_public(db: AsyncSession = Depends(get_db_session)):
        try:
            return await site_document_service.respond(db, document)
        except DatabaseError:
            await db.rollback()
            logger.warning("Serving default %s: database unavailable", slug)
            return site_document_service.defaults_response(document)

    @router.get(
        f"/api/admin/{slug}",
        response_model=ResponseSchema,
        name=f"admin_get_{slug}",
        summary=f"{slug} for editing",
    )
    async def get_admin(db: AsyncSession = Depends(get_db_session)):
        return await site_document_service.respond(db, document)

    @router.put(
        f"/api/admin/{slug}",
        response_model=ResponseSchema,
        name=f"update_{slug}",
        summary=f"Save {slug}",
        description="Fields not sent keep their current value. A stale expectedVersion answers 409.",
    )
    async def update_document(
        body: WriteSchema,
        expected_version: Optional[int] = Query(default=None, alias="expectedVersion", ge=0),
        db: AsyncSession = Depends(get_db_session),
    ):
        updates = body.model_dump(exclude_unset=True)
        saved = await site_document_service.write(
            db, document, updates, expected_version=expected_version
        )
        await audit.record(db, "update", slug, document.key, changes=updates.keys())
        return saved

    @router.delete(
        f"/api/admin/{slug}",
        response_model=ResponseSchema,
        name=f"reset_{slug}",
        summary=f"Reset {slug} to defaults",
    )
    async def reset_document(db: AsyncSession = Depends(get_db_session)):
        defaults = await site_document_service.reset(db, document)
        await audit.record(db, "reset", slug, document.key)
        return defaults


for _document in DOCUMENTS.values():
    register_document(router, _document)


@router.post(
    "/api/admin/reset-footer-badges",
    response_model=FOOTER_SETTINGS.response_schema,
    summary="Reset the footer (badges included) to defaults",
)
async def reset_footer_badges(db: AsyncSession = Depends(get_db_session)):
    defaults = await site_document_service.reset(db, FOOTER_SETTINGS)
    await audit.record(db, "reset", FOOTER_SETTINGS.slug, FOOTER_SETTINGS.key)
    return defaults
