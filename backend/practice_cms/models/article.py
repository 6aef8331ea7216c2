"""
Practice CMS Backend — Article SQLAlchemy Model
===============================================

What:  Scientific/educational articles written by the practice.
Why:   The only content type with a publish gate: new articles are drafts
       and never reach the public site until explicitly published.

Lifecycle:
    Draft (is_published=False)
      → publish()   → Published (is_published=True, published_at set once)
      → unpublish() → Draft again (published_at kept: it means "first published at")

Featured view:
    is_featured AND is_published, ordered by (order, published_at DESC),
    capped for the homepage highlight.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from practice_cms.database import Base
from practice_cms.models.mixins import OrderedMixin, utcnow


class Article(OrderedMixin, Base):
    __tablename__ = "articles"

    # ── Content ───────────────────────────────────────────────────────────
    title: Mapped[str] = mapped_column(Text, nullable=False)
    subtitle: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    badge: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, comment="Full article body (HTML)")
    card_image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # ── Authorship / citation ─────────────────────────────────────────────
    author: Mapped[str] = mapped_column(Text, nullable=False)
    co_authors: Mapped[Optional[str]] = mapped_column(Text, nullable=True, comment="Comma-separated")
    institution: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    article_references: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    doi: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    keywords: Mapped[Optional[str]] = mapped_column(Text, nullable=True, comment="Comma-separated")
    category: Mapped[str] = mapped_column(
        Text, nullable=False, default="Psicologia", server_default=text("'Psicologia'")
    )
    reading_time: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, comment="Minutes")

    # ── Call to action ────────────────────────────────────────────────────
    show_contact_button: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    contact_button_text: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True, default="Entrar em Contato"
    )
    contact_button_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # ── Publication ───────────────────────────────────────────────────────
    is_published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false"),
        comment="Public visibility gate; drafts are admin-only",
    )
    is_featured: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    published_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="First time the article was published; never cleared",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return (
            f"<Article(id={self.id}, title='{self.title}', "
            f"published={self.is_published}, order={self.order})>"
        )
