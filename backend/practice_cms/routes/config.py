"""
Practice CMS Backend — Site Configuration Routes
================================================

What:  The key/value settings store, the section color map, and the
       public maintenance flag.

Endpoints:
    GET    /api/config                         all entries (public site boot)
    GET    /api/admin/config                   all entries
    GET    /api/admin/config/{key}             one entry, 404 if absent
    POST   /api/admin/config                   upsert {key, value, expectedVersion?}
    DELETE /api/admin/config/{key}             idempotent delete
    GET    /api/section-colors                 {sections, version}
    PUT    /api/admin/section-colors/{section} set one section's style
    DELETE /api/admin/section-colors/{section} reset one section to its default
    GET    /api/maintenance-check              {maintenance, general}

Concurrency:
    Writes return the stored `version`. Sending it back as `expectedVersion`
    turns a lost update into a 409 the admin UI can show as "reload".
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from practice_cms.database import get_db_session
from practice_cms.exceptions import DatabaseError, NotFoundError
from practice_cms.schemas.common import SuccessResponse
from practice_cms.schemas.config import (
    ConfigEntryResponse,
    ConfigWrite,
    MaintenanceStatus,
    SectionStylesResponse,
    SectionStyleWrite,
)
from practice_cms.services import audit
from practice_cms.services.config_service import SECTION_COLORS_KEY, config_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Site configuration"])


# ── Key/value store ───────────────────────────────────────────────────────

@router.get("/api/config", response_model=List[ConfigEntryResponse], summary="All settings (public)")
async def list_public_config(db: AsyncSession = Depends(get_db_session)):
    try:
        return await config_service.get_all(db)
    except DatabaseError:
        await db.rollback()
        logger.warning("Serving empty configuration: database unavailable")
        return []


@router.get("/api/admin/config", response_model=List[ConfigEntryResponse], summary="All settings")
async def list_config(db: AsyncSession = Depends(get_db_session)):
    return await config_service.get_all(db)


@router.get("/api/admin/config/{key}", response_model=ConfigEntryResponse, summary="One setting")
async def get_config(key: str, db: AsyncSession = Depends(get_db_session)):
    entry = await config_service.get(db, key)
    if entry is None:
        raise NotFoundError(resource="config", resource_id=key)
    return entry


@router.post(
    "/api/admin/config",
    response_model=ConfigEntryResponse,
    summary="Create or overwrite a setting",
    description=(
        "Without expectedVersion the last write wins. With expectedVersion the write "
        "only succeeds if the stored version still matches (0 = key must be new); "
        "otherwise 409."
    ),
)
async def set_config(body: ConfigWrite, db: AsyncSession = Depends(get_db_session)):
    previous = await config_service.get(db, body.key)
    old_value = previous.value if previous is not None else None

    entry = await config_service.set(db, body.key, body.value, expected_version=body.expected_version)
    await audit.record(db, "set", "config", body.key, old_value=old_value, new_value=entry.value)
    return entry


@router.delete("/api/admin/config/{key}", response_model=SuccessResponse, summary="Delete a setting")
async def delete_config(key: str, db: AsyncSession = Depends(get_db_session)):
    await config_service.delete(db, key)
    await audit.record(db, "delete", "config", key)
    return SuccessResponse()


# ── Section colors ────────────────────────────────────────────────────────

@router.get("/api/section-colors", response_model=SectionStylesResponse, summary="Section style map")
async def get_section_colors(db: AsyncSession = Depends(get_db_session)):
    try:
        sections, version = await config_service.get_section_styles(db)
    except DatabaseError:
        await db.rollback()
        logger.warning("Serving default section colors: database unavailable")
        return SectionStylesResponse()
    return SectionStylesResponse(sections=sections, version=version)


@router.put(
    "/api/admin/section-colors/{section}",
    response_model=SectionStylesResponse,
    summary="Set one section's style",
    description="Other sections are preserved. A concurrent edit of the map answers 409.",
)
async def set_section_color(
    section: str,
    body: SectionStyleWrite,
    db: AsyncSession = Depends(get_db_session),
):
    style = body.model_dump(by_alias=True, exclude={"expected_version"}, exclude_none=True)
    entry = await config_service.set_section_style(
        db, section, style, expected_version=body.expected_version
    )
    await audit.record(db, "set", SECTION_COLORS_KEY, section, new_value=style)
    return SectionStylesResponse(sections=entry.value, version=entry.version)


@router.delete(
    "/api/admin/section-colors/{section}",
    response_model=SectionStylesResponse,
    summary="Reset one section to its default style",
)
async def reset_section_color(
    section: str,
    expected_version: Optional[int] = Query(default=None, alias="expectedVersion", ge=0),
    db: AsyncSession = Depends(get_db_session),
):
    sections, version, removed = await config_service.reset_section_style(
        db, section, expected_version=expected_version
    )
    if removed:
        await audit.record(db, "reset", SECTION_COLORS_KEY, section)
    return SectionStylesResponse(sections=sections, version=version)


# ── Maintenance ───────────────────────────────────────────────────────────

@router.get(
    "/api/maintenance-check",
    response_model=MaintenanceStatus,
    summary="Maintenance mode flag",
)
async def maintenance_check(db: AsyncSession = Depends(get_db_session)):
    try:
        return await config_service.maintenance_status(db)
    except DatabaseError:
        await db.rollback()
        logger.warning("Maintenance flag: database unavailable, reporting site as up")
        return MaintenanceStatus(maintenance={"enabled": False}, general={})
