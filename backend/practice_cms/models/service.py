"""
Practice CMS Backend — Service Model
====================================

What:  Therapy services offered by the practice (individual, couples, online...).

Display flags:
    price and duration are stored even when hidden; show_price / show_duration
    decide whether the public card renders them.
"""

from typing import Optional

from sqlalchemy import Boolean, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from practice_cms.database import Base
from practice_cms.models.mixins import ActiveFlagMixin, OrderedMixin


class Service(OrderedMixin, ActiveFlagMixin, Base):
    __tablename__ = "services"

    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    icon: Mapped[str] = mapped_column(Text, nullable=False, comment="Icon name from the admin icon picker")
    gradient: Mapped[str] = mapped_column(Text, nullable=False, comment="Card gradient classes")
    price: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    duration: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    show_price: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    show_duration: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )

    def __repr__(self) -> str:
        return f"<Service(id={self.id}, title='{self.title}', order={self.order})>"
