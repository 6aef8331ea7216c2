"""
Practice CMS Backend — Support Message Model
===========================================

What:  Messages the practice sends from the admin dashboard to its site
       maintainer (support requests, bug reports, feature ideas), with the
       maintainer's response.
Why:   Unlike content tables these are an inbox: newest first, no manual
       order, no public visibility.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, Boolean, DateTime, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from practice_cms.database import Base
from practice_cms.models.mixins import utcnow

MESSAGE_TYPES = ("support", "contact", "feedback", "bug", "feature")


class SupportMessage(Base):
    __tablename__ = "support_messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="support",
        server_default=text("'support'"),
        comment="support, contact, feedback, bug or feature",
    )
    attachments: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Image URLs attached to the message",
    )
    is_read: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    admin_response: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        index=True,
    )
    responded_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Set when an admin_response is saved",
    )

    def __repr__(self) -> str:
        return f"<SupportMessage(id={self.id}, type='{self.type}', is_read={self.is_read})>"
