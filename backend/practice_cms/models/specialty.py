"""
Practice CMS Backend — Specialty Model
======================================

What:  Areas of practice listed in the "About" section (anxiety, depression, ...).
"""

from sqlalchemy import Text, text
from sqlalchemy.orm import Mapped, mapped_column

from practice_cms.database import Base
from practice_cms.models.mixins import ActiveFlagMixin, OrderedMixin


class Specialty(OrderedMixin, ActiveFlagMixin, Base):
    __tablename__ = "specialties"

    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    icon: Mapped[str] = mapped_column(Text, nullable=False, default="Brain", server_default=text("'Brain'"))
    icon_color: Mapped[str] = mapped_column(
        Text, nullable=False, default="#ec4899", server_default=text("'#ec4899'")
    )

    def __repr__(self) -> str:
        return f"<Specialty(id={self.id}, title='{self.title}', order={self.order})>"
