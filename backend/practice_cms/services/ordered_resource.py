"""
Practice CMS Backend — Ordered Resource Service
===============================================

What:  One generic service behind every orderable content type
       (testimonials, FAQ, services, photo carousel, specialties,
       articles, custom codes).
Why:   The seven types differ only in their columns. Listing, visibility
       filtering, partial updates, idempotent deletes and batch reordering
       are the same algorithm, so they live here once.
How:   An instance is bound to a model class, a human-readable label (used
       in error messages) and the name of its boolean visibility column.
       Every method receives the request's AsyncSession and never commits:
       get_db_session commits once per request, which is what makes a
       reorder batch atomic.

Ordering contract:
    ORDER BY "order" ASC, id ASC  — deterministic even when two rows share
    an order value.

Reorder flow (PUT /api/admin/{resource}/reorder):
    ┌──────────────┐    ┌──────────────────┐    ┌────────────────┐
    │ parse body   │───▶│ UPDATE ... SET   │───▶│ SELECT all     │
    │ (3 envelopes)│    │ order per id     │    │ ordered        │
    └──────────────┘    │ (same txn)       │    └────────────────┘
                        └──────────────────┘
    Unknown ids are skipped and logged; known ids are still applied.
"""

import logging
from typing import Any, Dict, Generic, List, Sequence, Type, TypeVar

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from practice_cms.database import DATABASE_ERRORS
from practice_cms.exceptions import (
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from practice_cms.schemas.common import ReorderItem

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")

# Keys the admin client has used to wrap the reorder array
REORDER_ENVELOPE_KEYS = ("items", "value")

# Columns the server owns; never written from request data
PROTECTED_FIELDS = frozenset({"id", "created_at", "updated_at", "published_at"})


def parse_reorder_payload(payload: Any) -> List[ReorderItem]:
    """
    Normalize a reorder request body into a list of ReorderItem.

    Accepted shapes:
        [{"id": 1, "order": 0}, ...]
        {"items": [...]}
        {"value": [...]}

    Raises:
        ValidationError: body is not one of the shapes above, the list is
                         empty, or an entry lacks an integer id/order.
    """
    if isinstance(payload, dict):
        for key in REORDER_ENVELOPE_KEYS:
            if key in payload:
                payload = payload[key]
                break

    if not isinstance(payload, list) or not payload:
        raise ValidationError(
            message="Reorder data must be a non-empty array of {id, order}",
            field="body",
        )

    try:
        return [ReorderItem.model_validate(entry) for entry in payload]
    except PydanticValidationError as e:
        raise ValidationError(
            message="Each reorder entry needs an integer id and order",
            field="body",
            context={
                "errors": [
                    {"loc": [str(part) for part in err["loc"]], "msg": err["msg"]}
                    for err in e.errors()
                ]
            },
        )


class OrderedResourceService(Generic[ModelT]):
    """
    Business logic for one orderable collection.

    Error Handling Strategy:
        Application errors (NotFoundError, ValidationError) propagate as-is.
        Database failures (SQLAlchemy errors, and driver connection errors or
        timeouts) are logged with their detail and re-raised as a
        DatabaseError carrying a generic message.
    """

    def __init__(
        self,
        model: Type[ModelT],
        label: str,
        visibility_field: str = "is_active",
    ):
        self.model = model
        self.label = label
        self.visibility_field = visibility_field

    # ── Query helpers ─────────────────────────────────────────────────────

    def _ordered_select(self):
        return select(self.model).order_by(self.model.order.asc(), self.model.id.asc())

    def _visible_clause(self):
        return getattr(self.model, self.visibility_field).is_(True)

    def _database_error(self, action: str, error: Exception) -> DatabaseError:
        logger.error("Database error during %s %s: %s", self.label, action, str(error), exc_info=True)
        return DatabaseError(
            message=f"Could not {action} {self.label}. Please try again.",
            context={"error_type": type(error).__name__},
        )

    def _writable_columns(self) -> Dict[str, Any]:
        """Attribute name → Column for every column a client may set."""
        return {
            attr: column
            for attr, column in self.model.__mapper__.columns.items()
            if attr not in PROTECTED_FIELDS
        }

    def _before_flush(self, item: ModelT) -> None:
        """Hook for subclasses to derive server-owned columns before a write."""

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list_all(self, db: AsyncSession) -> List[ModelT]:
        """Every row, ordered. Admin views."""
        try:
            result = await db.execute(
                self._ordered_select().execution_options(populate_existing=True)
            )
            return list(result.scalars().all())
        except DATABASE_ERRORS as e:
            raise self._database_error("list", e)

    async def list_active(self, db: AsyncSession) -> List[ModelT]:
        """Only rows whose visibility flag is set, in the same order as list_all."""
        try:
            result = await db.execute(self._ordered_select().where(self._visible_clause()))
            return list(result.scalars().all())
        except DATABASE_ERRORS as e:
            raise self._database_error("list", e)

    async def get(self, db: AsyncSession, item_id: int) -> ModelT:
        """
        Fetch one row by primary key.

        Raises:
            NotFoundError: no row with this id (→ 404)
        """
        try:
            item = await db.get(self.model, item_id)
        except DATABASE_ERRORS as e:
            raise self._database_error("load", e)
        if item is None:
            raise NotFoundError(resource=self.label, resource_id=str(item_id))
        return item

    # ── Writes ────────────────────────────────────────────────────────────

    async def create(self, db: AsyncSession, fields: Dict[str, Any]) -> ModelT:
        """Insert a row. Omitted `order` becomes 0; omitted flags take column defaults."""
        columns = self._writable_columns()
        values = {k: v for k, v in fields.items() if k in columns}
        item = self.model(**values)
        self._before_flush(item)
        try:
            db.add(item)
            await db.flush()
            await db.refresh(item)
        except DATABASE_ERRORS as e:
            raise self._database_error("create", e)
        logger.info("%s %s created (order=%s)", self.label, item.id, item.order)
        return item

    async def update(self, db: AsyncSession, item_id: int, fields: Dict[str, Any]) -> ModelT:
        """
        Apply a partial update: only keys present in `fields` change.

        Raises:
            NotFoundError:   unknown id
            ValidationError: null sent for a required column
        """
        item = await self.get(db, item_id)
        columns = self._writable_columns()

        for attr, value in fields.items():
            column = columns.get(attr)
            if column is None:
                continue
            if value is None and not column.nullable:
                raise ValidationError(message=f"{attr} cannot be null", field=attr)
            setattr(item, attr, value)
        self._before_flush(item)

        try:
            await db.flush()
            await db.refresh(item)
        except DATABASE_ERRORS as e:
            raise self._database_error("update", e)
        return item

    async def delete(self, db: AsyncSession, item_id: int) -> None:
        """Remove a row. Deleting an id that does not exist is a no-op."""
        try:
            item = await db.get(self.model, item_id)
            if item is None:
                logger.debug("%s %s already absent; delete is a no-op", self.label, item_id)
                return
            await db.delete(item)
            await db.flush()
        except DATABASE_ERRORS as e:
            raise self._database_error("delete", e)
        logger.info("%s %s deleted", self.label, item_id)

    async def reorder(self, db: AsyncSession, items: Sequence[ReorderItem]) -> List[ModelT]:
        """
        Assign new `order` values in one transaction and return the full,
        re-sorted collection.

        The UPDATEs run in the caller's transaction: either every assignment
        is committed with the request or none is.

        Ids that match no row are skipped with a warning.
        """
        if not items:
            raise ValidationError(message="Reorder data must be a non-empty array", field="body")

        skipped: List[int] = []
        try:
            for entry in items:
                result = await db.execute(
                    update(self.model)
                    .where(self.model.id == entry.id)
                    .values(order=entry.order)
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount == 0:
                    skipped.append(entry.id)
            await db.flush()
        except DATABASE_ERRORS as e:
            raise self._database_error("reorder", e)

        if skipped:
            logger.warning(
                "Reorder of %s skipped unknown ids: %s", self.label, ", ".join(map(str, skipped))
            )
        logger.info("%s reordered: %d of %d entries applied", self.label, len(items) - len(skipped), len(items))

        return await self.list_all(db)

