"""
Practice CMS Backend — Admin Audit Log
======================================

What:  One record per admin mutation, written twice: a structured line on
       the `practice_cms.audit` logger and a row in `admin_change_log`.
Why:   Content and settings changes need a trail: who (client IP), when,
       which request, what changed. The log line lets the deployment route
       the trail (stdout, file, SIEM); the table lets the admin dashboard
       read it back month by month.
How:   record() adds the row to the request's session, so the entry commits
       or rolls back together with the change it describes.

Example line:
    2024-01-15 10:30:00 [INFO] practice_cms.audit: action=update resource=faq
    id=3 request_id=a1b2c3d4 client_ip=203.0.113.7 changes=question,answer
"""

import json
import logging
import re
from typing import Any, Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from practice_cms.database import DATABASE_ERRORS
from practice_cms.exceptions import DatabaseError, ValidationError
from practice_cms.middleware.request_id import client_ip_var, request_id_var
from practice_cms.models.admin_change import AdminChange
from practice_cms.models.mixins import utcnow

audit_logger = logging.getLogger("practice_cms.audit")
logger = logging.getLogger(__name__)

# Config values can be large documents; the log keeps a prefix
MAX_VALUE_CHARS = 500

MONTH_PATTERN = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def _render(value: Any) -> str:
    text = json.dumps(value, ensure_ascii=False, default=str, sort_keys=True)
    if len(text) > MAX_VALUE_CHARS:
        return text[:MAX_VALUE_CHARS] + "..."
    return text


async def record(
    db: AsyncSession,
    action: str,
    resource: str,
    identifier: Any = None,
    changes: Optional[Iterable[str]] = None,
    old_value: Any = None,
    new_value: Any = None,
) -> AdminChange:
    """
    Emit one audit entry for an admin mutation.

    Args:
        db: the request's session; the row commits with the change itself
        action: create, update, delete, reorder, publish, unpublish, set, reset
        resource: resource slug, "config", or a settings document slug
        identifier: row id or config key
        changes: names of the fields the request touched
        old_value / new_value: config values before and after the write
    """
    changed = sorted(changes) if changes else None
    request_id = request_id_var.get()
    client_ip = client_ip_var.get()

    parts = [f"action={action}", f"resource={resource}"]
    if identifier is not None:
        parts.append(f"id={identifier}")
    parts.append(f"request_id={request_id or '-'}")
    parts.append(f"client_ip={client_ip or '-'}")
    if changed:
        parts.append(f"changes={','.join(changed)}")
    if old_value is not None or new_value is not None:
        parts.append(f"old={_render(old_value)}")
        parts.append(f"new={_render(new_value)}")
    audit_logger.info(" ".join(parts))

    now = utcnow()
    entry = AdminChange(
        created_at=now,
        month=now.strftime("%Y-%m"),
        action=action,
        resource=resource,
        identifier=str(identifier) if identifier is not None else None,
        request_id=request_id or None,
        client_ip=client_ip or None,
        changes=changed,
        old_value=old_value,
        new_value=new_value,
    )
    db.add(entry)
    return entry


async def list_changes(db: AsyncSession, month: Optional[str] = None) -> List[AdminChange]:
    """
    Entries for one month ("YYYY-MM", default: the current month), newest first.

    Raises:
        ValidationError: month is not in YYYY-MM form
    """
    if month is None:
        month = utcnow().strftime("%Y-%m")
    elif not MONTH_PATTERN.match(month):
        raise ValidationError(message="month must look like YYYY-MM", field="month")

    try:
        result = await db.execute(
            select(AdminChange)
            .where(AdminChange.month == month)
            .order_by(AdminChange.created_at.desc(), AdminChange.id.desc())
        )
        return list(result.scalars().all())
    except DATABASE_ERRORS as e:
        logger.error("Database error reading change log: %s", str(e), exc_info=True)
        raise DatabaseError(message="Could not read the change log. Please try again.")


async def available_months(db: AsyncSession) -> List[str]:
    """Months that have at least one entry, newest first."""
    try:
        result = await db.execute(
            select(AdminChange.month).distinct().order_by(AdminChange.month.desc())
        )
        return list(result.scalars().all())
    except DATABASE_ERRORS as e:
        logger.error("Database error listing change log months: %s", str(e), exc_info=True)
        raise DatabaseError(message="Could not read the change log. Please try again.")
