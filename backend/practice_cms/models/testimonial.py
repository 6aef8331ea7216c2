"""
Practice CMS Backend — Testimonial Model
========================================

What:  Client testimonials shown in the homepage carousel.
Who:   Managed from the admin "Depoimentos" tab; read by GET /api/testimonials.
"""

from typing import Optional

from sqlalchemy import Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from practice_cms.database import Base
from practice_cms.models.mixins import ActiveFlagMixin, OrderedMixin


class Testimonial(OrderedMixin, ActiveFlagMixin, Base):
    __tablename__ = "testimonials"

    name: Mapped[str] = mapped_column(Text, nullable=False)
    service: Mapped[str] = mapped_column(Text, nullable=False, comment="Service the client attended")
    testimonial: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False, default=5, server_default=text("5"))
    # Path of the client's photo (produced by the external image optimizer)
    photo: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Testimonial(id={self.id}, name='{self.name}', order={self.order})>"
