"""
Practice CMS Backend — Ordered Resource Routes
==============================================

What:  The six CRUD/reorder endpoints, generated for every entry of
       services.registry.RESOURCES.
How:   register_resource() closes over one ResourceDefinition and declares
       the handlers with that type's schemas, so OpenAPI shows concrete
       request/response models per type.

Endpoints per {slug}:
    GET    /api/{slug}                    visible rows, ordered (public)
    GET    /api/admin/{slug}              all rows, ordered
    POST   /api/admin/{slug}              create
    PUT    /api/admin/{slug}/reorder      batch reorder, returns full collection
    PUT    /api/admin/{slug}/{id}         partial update
    DELETE /api/admin/{slug}/{id}         idempotent delete

Route order:
    /reorder is registered before /{item_id}; both are PUT and the path
    matcher would otherwise hand "reorder" to the id route.
"""

import logging
from typing import Any, List

from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from practice_cms.database import get_db_session
from practice_cms.exceptions import DatabaseError
from practice_cms.schemas.common import SuccessResponse
from practice_cms.services import audit
from practice_cms.services.ordered_resource import parse_reorder_payload
from practice_cms.services.registry import RESOURCES, ResourceDefinition

logger = logging.getLogger(__name__)

public_router = APIRouter(tags=["Content"])
admin_router = APIRouter(tags=["Content (admin)"])


def register_resource(
    public: APIRouter, admin: APIRouter, definition: ResourceDefinition
) -> None:
    slug = definition.slug
    service = definition.service
    CreateSchema = definition.create_schema
    UpdateSchema = definition.update_schema
    ResponseSchema = definition.response_schema

    @public.get(
        f"/api/{slug}",
        response_model=List[ResponseSchema],
        name=f"list_{slug}",
        summary=f"List visible {slug}",
    )
    async def list_visible(db: AsyncSession = Depends(get_db_session)):
        # Public pages render an empty section rather than an error page
        try:
            return await service.list_active(db)
        except DatabaseError:
            await db.rollback()
            logger.warning("Serving empty %s list: database unavailable", slug)
            return []

    @admin.get(
        f"/api/admin/{slug}",
        response_model=List[ResponseSchema],
        name=f"admin_list_{slug}",
        summary=f"List all {slug}",
    )
    async def list_all(db: AsyncSession = Depends(get_db_session)):
        return await service.list_all(db)

    @admin.post(
        f"/api/admin/{slug}",
        response_model=ResponseSchema,
        name=f"create_{slug}",
        summary=f"Create one of {slug}",
    )
    async def create_item(
        body: CreateSchema,
        db: AsyncSession = Depends(get_db_session),
    ):
        item = await service.create(db, body.model_dump())
        await audit.record(db, "create", slug, item.id)
        return item

    @admin.put(
        f"/api/admin/{slug}/reorder",
        response_model=List[ResponseSchema],
        name=f"reorder_{slug}",
        summary=f"Reorder {slug}",
        description=(
            "Body: `[{id, order}, ...]`, `{items: [...]}` or `{value: [...]}`. "
            "Ids that do not exist are skipped. Returns the full re-sorted collection."
        ),
    )
    async def reorder_items(
        payload: Any = Body(...),
        db: AsyncSession = Depends(get_db_session),
    ):
        items = parse_reorder_payload(payload)
        result = await service.reorder(db, items)
        await audit.record(db, "reorder", slug, changes=[str(entry.id) for entry in items])
        return result

    @admin.put(
        f"/api/admin/{slug}/{{item_id}}",
        response_model=ResponseSchema,
        name=f"update_{slug}",
        summary=f"Update one of {slug}",
    )
    async def update_item(
        body: UpdateSchema,
        item_id: int = Path(..., description="Row id"),
        db: AsyncSession = Depends(get_db_session),
    ):
        fields = body.model_dump(exclude_unset=True)
        item = await service.update(db, item_id, fields)
        await audit.record(db, "update", slug, item_id, changes=fields.keys())
        return item

    @admin.delete(
        f"/api/admin/{slug}/{{item_id}}",
        response_model=SuccessResponse,
        name=f"delete_{slug}",
        summary=f"Delete one of {slug}",
    )
    async def delete_item(
        item_id: int = Path(..., description="Row id"),
        db: AsyncSession = Depends(get_db_session),
    ):
        await service.delete(db, item_id)
        await audit.record(db, "delete", slug, item_id)
        return SuccessResponse()


for _definition in RESOURCES.values():
    register_resource(public_router, admin_router, _definition)
