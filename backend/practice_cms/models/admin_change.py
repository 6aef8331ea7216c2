"""
Practice CMS Backend — Admin Change Log Model
=============================================

What:  One row per admin mutation: what was touched, by which request, from
       which address, and (for settings) the value before and after.
Why:   The admin dashboard shows a monthly change history. Rows are written
       in the same transaction as the change they describe, so a rolled-back
       request leaves no entry behind.

Table Design Rationale:
    - month ("YYYY-MM"): indexed, so listing one month and the set of months
      with entries are plain portable queries
    - identifier as text: row ids and config keys share the column
"""

from datetime import datetime
from typing import Any, List, Optional

from sqlalchemy import JSON, DateTime, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from practice_cms.database import Base
from practice_cms.models.mixins import utcnow


class AdminChange(Base):
    __tablename__ = "admin_change_log"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    month: Mapped[str] = mapped_column(String(7), nullable=False, index=True)
    action: Mapped[str] = mapped_column(String(20), nullable=False)
    resource: Mapped[str] = mapped_column(String(100), nullable=False)
    identifier: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    request_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    client_ip: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    changes: Mapped[Optional[List[str]]] = mapped_column(JSON(none_as_null=True), nullable=True)
    old_value: Mapped[Optional[Any]] = mapped_column(JSON(none_as_null=True), nullable=True)
    new_value: Mapped[Optional[Any]] = mapped_column(JSON(none_as_null=True), nullable=True)

    def __repr__(self) -> str:
        return f"<AdminChange(id={self.id}, action='{self.action}', resource='{self.resource}')>"
