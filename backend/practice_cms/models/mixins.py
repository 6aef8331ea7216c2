"""
Practice CMS Backend — Shared Column Mixins
===========================================

What:  Columns every orderable content table carries.
Why:   The ordered resource service works against these attribute names
       (`id`, `order`, `created_at`, and a boolean visibility flag), so every
       content model must spell them identically.

Ordering contract:
    Rows sort by `order` ascending, ties broken by `id` ascending. `order`
    values need not be contiguous; deleting a row leaves a gap.
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Integer, text
from sqlalchemy.orm import Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderedMixin:
    """Primary key, display position, and creation time."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # "order" is an SQL keyword; SQLAlchemy quotes it in every statement
    order: Mapped[int] = mapped_column(
        "order",
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
        comment="Display position; ascending, ties broken by id",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )


class ActiveFlagMixin:
    """Visibility flag for everything except articles (which use is_published)."""

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=text("true"),
        comment="Public visibility; inactive rows are admin-only",
    )
