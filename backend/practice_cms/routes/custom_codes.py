"""
Practice CMS Backend — Custom Code Location Routes
==================================================

What:  Snippet lookups by injection point, on top of the generic CRUD set.
    GET /api/custom-codes/{location}                 active snippets (public)
    GET /api/admin/custom-codes/location/{location}  all snippets (admin)

`location` must be `header` or `body`; anything else is a 400.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from practice_cms.database import get_db_session
from practice_cms.exceptions import DatabaseError
from practice_cms.schemas.content import CustomCodeResponse
from practice_cms.services.custom_code_service import custom_code_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Custom codes"])


@router.get(
    "/api/custom-codes/{location}",
    response_model=List[CustomCodeResponse],
    summary="Active snippets for one injection point",
)
async def list_active_codes(location: str, db: AsyncSession = Depends(get_db_session)):
    try:
        return await custom_code_service.list_active_by_location(db, location)
    except DatabaseError:
        await db.rollback()
        logger.warning("Serving no %s snippets: database unavailable", location)
        return []


@router.get(
    "/api/admin/custom-codes/location/{location}",
    response_model=List[CustomCodeResponse],
    summary="All snippets for one injection point",
)
async def list_codes(location: str, db: AsyncSession = Depends(get_db_session)):
    return await custom_code_service.list_by_location(db, location)
