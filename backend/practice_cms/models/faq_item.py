"""
Practice CMS Backend — FAQ Item Model
=====================================

What:  Question/answer pairs rendered in the FAQ accordion.
"""

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from practice_cms.database import Base
from practice_cms.models.mixins import ActiveFlagMixin, OrderedMixin


class FaqItem(OrderedMixin, ActiveFlagMixin, Base):
    __tablename__ = "faq_items"

    question: Mapped[str] = mapped_column(Text, nullable=False)
    answer: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<FaqItem(id={self.id}, order={self.order})>"
