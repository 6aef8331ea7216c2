"""
Practice CMS Backend — Custom Code Model
========================================

What:  HTML/JS snippets (analytics tags, chat widgets) injected into the page
       head or the end of the body, in `order` sequence.
Security Note:
    Snippets are stored and served verbatim. Only authenticated admins can
    write them; the admin gate in middleware/admin_auth.py is the control.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from practice_cms.database import Base
from practice_cms.models.mixins import ActiveFlagMixin, OrderedMixin

CODE_LOCATIONS = ("header", "body")


class CustomCode(OrderedMixin, ActiveFlagMixin, Base):
    __tablename__ = "custom_codes"

    name: Mapped[str] = mapped_column(Text, nullable=False, comment="Descriptive label")
    code: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(String(20), nullable=False, comment="'header' or 'body'")

    def __repr__(self) -> str:
        return f"<CustomCode(id={self.id}, name='{self.name}', location='{self.location}')>"
