"""
Practice CMS Backend — Support Message and Change Log Routes
============================================================

Endpoints (admin only):
    GET    /api/admin/support-messages        inbox, newest first
    POST   /api/admin/support-messages        new message to the maintainer
    PUT    /api/admin/support-messages/{id}   mark read / respond / edit
    DELETE /api/admin/support-messages/{id}   idempotent delete
    GET    /api/admin/logs/changes?month=     admin change history for a month
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from practice_cms.database import get_db_session
from practice_cms.schemas.common import SuccessResponse
from practice_cms.schemas.support import (
    AdminChangeResponse,
    ChangeLogResponse,
    SupportMessageCreate,
    SupportMessageResponse,
    SupportMessageUpdate,
)
from practice_cms.services import audit
from practice_cms.services.support_message_service import support_message_service

router = APIRouter(tags=["Support and history (admin)"])


@router.get(
    "/api/admin/support-messages",
    response_model=List[SupportMessageResponse],
    summary="All support messages",
)
async def list_support_messages(db: AsyncSession = Depends(get_db_session)):
    return await support_message_service.list_all(db)


@router.post(
    "/api/admin/support-messages",
    response_model=SupportMessageResponse,
    summary="Send a message to the site maintainer",
)
async def create_support_message(
    body: SupportMessageCreate,
    db: AsyncSession = Depends(get_db_session),
):
    message = await support_message_service.create(db, body.model_dump())
    await audit.record(db, "create", "support-messages", message.id)
    return message


@router.put(
    "/api/admin/support-messages/{message_id}",
    response_model=SupportMessageResponse,
    summary="Update a support message",
)
async def update_support_message(
    body: SupportMessageUpdate,
    message_id: int = Path(...),
    db: AsyncSession = Depends(get_db_session),
):
    fields = body.model_dump(exclude_unset=True)
    message = await support_message_service.update(db, message_id, fields)
    await audit.record(db, "update", "support-messages", message_id, changes=fields.keys())
    return message


@router.delete(
    "/api/admin/support-messages/{message_id}",
    response_model=SuccessResponse,
    summary="Delete a support message",
)
async def delete_support_message(
    message_id: int = Path(...),
    db: AsyncSession = Depends(get_db_session),
):
    await support_message_service.delete(db, message_id)
    await audit.record(db, "delete", "support-messages", message_id)
    return SuccessResponse()


@router.get(
    "/api/admin/logs/changes",
    response_model=ChangeLogResponse,
    summary="Admin change history",
    description="Entries for one month (YYYY-MM, default current month), newest first.",
)
async def list_admin_changes(
    month: Optional[str] = Query(default=None, description="YYYY-MM"),
    db: AsyncSession = Depends(get_db_session),
):
    logs = await audit.list_changes(db, month)
    months = await audit.available_months(db)
    return ChangeLogResponse(
        logs=[AdminChangeResponse.model_validate(entry) for entry in logs],
        months=months,
    )
