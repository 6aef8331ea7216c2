"""
Practice CMS Backend — ConfigEntry SQLAlchemy Model
===================================================

What:  ORM model for the `site_config` table: one JSON value per setting key.
Why:   Hero text, section colors, cookie banner copy, marketing pixel IDs and
       every other free-form setting live here, so new settings need no
       migration.
Who:   Used by ConfigService; read by both the admin dashboard and public pages.

Table Design Rationale:
    - key UNIQUE: at most one row per setting; writes are upserts
    - value JSON: no fixed schema, interpretation belongs to the admin form
      that owns the key (JSONB on PostgreSQL for indexing and compact storage)
    - version: bumped on every write; callers may pass it back as an
      optimistic-concurrency token so a stale form cannot silently overwrite
      a newer save
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Integer, String, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from practice_cms.database import Base
from practice_cms.models.mixins import utcnow

# JSONB on PostgreSQL, generic JSON (TEXT-backed) on SQLite
JSONValue = JSON().with_variant(JSONB(), "postgresql")


class ConfigEntry(Base):
    """A single named, arbitrarily-typed site setting."""

    __tablename__ = "site_config"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    key: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        comment="Setting name, e.g. hero_image, section_colors",
    )

    value: Mapped[Any] = mapped_column(
        JSONValue,
        nullable=False,
        comment="Arbitrary JSON owned by the form that edits this key",
    )

    version: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        server_default=text("1"),
        comment="Incremented on every write; optimistic concurrency token",
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    def __repr__(self) -> str:
        return f"<ConfigEntry(key='{self.key}', version={self.version})>"
