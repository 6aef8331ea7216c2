"""
Practice CMS Backend — Support Message Service
==============================================

What:  The admin dashboard's inbox to the site maintainer: list, create,
       partial update (mark read, respond) and idempotent delete.
How:   Same session contract as the other services: never commits, wraps
       database failures in DatabaseError.

Not here:
    Forwarding a new message by e-mail is an outbound-mail concern and is
    not part of this backend.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from practice_cms.database import DATABASE_ERRORS
from practice_cms.exceptions import DatabaseError, NotFoundError, ValidationError
from practice_cms.models.mixins import utcnow
from practice_cms.models.support_message import SupportMessage

logger = logging.getLogger(__name__)

DEFAULT_SENDER_NAME = "Sistema do Site"
DEFAULT_SENDER_EMAIL = "noreply@sistema.local"

UPDATABLE_FIELDS = frozenset({"message", "type", "is_read", "admin_response"})


class SupportMessageService:
    def _database_error(self, action: str, error: Exception) -> DatabaseError:
        logger.error("Database error during support message %s: %s", action, str(error), exc_info=True)
        return DatabaseError(message=f"Could not {action} support message. Please try again.")

    async def list_all(self, db: AsyncSession) -> List[SupportMessage]:
        """Every message, newest first."""
        try:
            result = await db.execute(
                select(SupportMessage).order_by(
                    SupportMessage.created_at.desc(), SupportMessage.id.desc()
                )
            )
            return list(result.scalars().all())
        except DATABASE_ERRORS as e:
            raise self._database_error("list", e)

    async def create(self, db: AsyncSession, fields: Dict[str, Any]) -> SupportMessage:
        """Store a new message. Blank name or email fall back to the site's sender identity."""
        message = SupportMessage(
            name=(fields.get("name") or "").strip() or DEFAULT_SENDER_NAME,
            email=(fields.get("email") or "").strip() or DEFAULT_SENDER_EMAIL,
            message=fields["message"],
            type=fields.get("type") or "support",
            attachments=list(fields.get("attachments") or []),
            is_read=False,
        )
        try:
            db.add(message)
            await db.flush()
            await db.refresh(message)
        except DATABASE_ERRORS as e:
            raise self._database_error("create", e)
        logger.info("Support message %s created (type=%s)", message.id, message.type)
        return message

    async def update(self, db: AsyncSession, message_id: int, fields: Dict[str, Any]) -> SupportMessage:
        """
        Apply a partial update. Saving a non-empty adminResponse stamps
        respondedAt.

        Raises:
            NotFoundError:   unknown id
            ValidationError: null sent for a required field
        """
        try:
            message = await db.get(SupportMessage, message_id)
        except DATABASE_ERRORS as e:
            raise self._database_error("load", e)
        if message is None:
            raise NotFoundError(resource="support message", resource_id=str(message_id))

        for name, value in fields.items():
            if name not in UPDATABLE_FIELDS:
                continue
            if value is None and name != "admin_response":
                raise ValidationError(message=f"{name} cannot be null", field=name)
            setattr(message, name, value)
        if fields.get("admin_response"):
            message.responded_at = utcnow()

        try:
            await db.flush()
            await db.refresh(message)
        except DATABASE_ERRORS as e:
            raise self._database_error("update", e)
        return message

    async def delete(self, db: AsyncSession, message_id: int) -> None:
        """Remove a message. Deleting an id that does not exist is a no-op."""
        try:
            message = await db.get(SupportMessage, message_id)
            if message is None:
                return
            await db.delete(message)
            await db.flush()
        except DATABASE_ERRORS as e:
            raise self._database_error("delete", e)
        logger.info("Support message %s deleted", message_id)


# ── Singleton Instance ────────────────────────────────────────────────────
support_message_service = SupportMessageService()
