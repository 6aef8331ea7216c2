"""
Practice CMS Backend — Photo Carousel Model
===========================================

What:  Gallery slides. image_url points at an already-optimized WebP file;
       upload and transcoding happen outside this service.
"""

from typing import Optional

from sqlalchemy import Boolean, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from practice_cms.database import Base
from practice_cms.models.mixins import ActiveFlagMixin, OrderedMixin


class PhotoCarouselItem(OrderedMixin, ActiveFlagMixin, Base):
    __tablename__ = "photo_carousel"

    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    show_text: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true"),
        comment="Render title/description over the slide",
    )

    def __repr__(self) -> str:
        return f"<PhotoCarouselItem(id={self.id}, title='{self.title}', order={self.order})>"
