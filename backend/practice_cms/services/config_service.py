"""
Practice CMS Backend — Config Service
=====================================

What:  Key → JSON value store for every free-form site setting (hero text,
       contact info, maintenance mode, section colors, ...), plus the
       section color map built on top of it.
Why:   Settings change shape with the admin forms; a JSON column lets a
       form add a field without a migration.
How:   One row per key. Writes are upserts that bump `version`, which
       doubles as an optimistic-concurrency token.

Concurrency model:
    set(key, value)                        → last write wins
    set(key, value, expected_version=n)    → write only if stored version == n
                                             (n == 0: only if the key is new)
    Mismatch → ConflictError (409) and nothing is written.

    Section colors are a read-merge-write of ONE entry shared by every
    section. That write is always guarded by the version that was read, so
    two admins editing different sections at once cannot silently erase
    each other's change: the second save gets a 409 and reloads.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import delete, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from practice_cms.database import DATABASE_ERRORS
from practice_cms.exceptions import (
    ConflictError,
    DatabaseError,
    ValidationError,
)
from practice_cms.models.mixins import utcnow
from practice_cms.models.site_config import ConfigEntry
from practice_cms.schemas.config import CONFIG_KEY_MAX_LENGTH

logger = logging.getLogger(__name__)

SECTION_COLORS_KEY = "section_colors"
MAINTENANCE_KEY = "maintenance_mode"
GENERAL_INFO_KEY = "general_info"

_UPSERT_DIALECTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def _check_key(key: str) -> None:
    if not isinstance(key, str) or not key.strip():
        raise ValidationError(message="Config key must be a non-empty string", field="key")
    if len(key) > CONFIG_KEY_MAX_LENGTH:
        raise ValidationError(
            message=f"Config key must be at most {CONFIG_KEY_MAX_LENGTH} characters",
            field="key",
            context={"length": len(key)},
        )


class ConfigService:
    """
    Business logic for site_config.

    Error Handling Strategy:
        ConflictError and ValidationError propagate to the 409/400 handlers.
        Any other database failure, including an unreachable server, is logged
        and wrapped in DatabaseError.
    """

    async def get(self, db: AsyncSession, key: str) -> Optional[ConfigEntry]:
        """Return the entry for `key`, or None. A missing key is not an error."""
        _check_key(key)
        try:
            result = await db.execute(
                select(ConfigEntry)
                .where(ConfigEntry.key == key)
                .execution_options(populate_existing=True)
            )
            return result.scalar_one_or_none()
        except DATABASE_ERRORS as e:
            logger.error("Database error reading config %s: %s", key, str(e), exc_info=True)
            raise DatabaseError(message="Could not read site configuration. Please try again.")

    async def get_all(self, db: AsyncSession) -> List[ConfigEntry]:
        """Every entry, sorted by key."""
        try:
            result = await db.execute(
                select(ConfigEntry)
                .order_by(ConfigEntry.key.asc())
                .execution_options(populate_existing=True)
            )
            return list(result.scalars().all())
        except DATABASE_ERRORS as e:
            logger.error("Database error listing config: %s", str(e), exc_info=True)
            raise DatabaseError(message="Could not read site configuration. Please try again.")

    async def set(
        self,
        db: AsyncSession,
        key: str,
        value: Any,
        expected_version: Optional[int] = None,
    ) -> ConfigEntry:
        """
        Insert or overwrite `key`.

        Args:
            db: Async database session (the caller's transaction)
            key: 1..100 character setting name
            value: any JSON-serializable document
            expected_version: optimistic-concurrency guard, see module docstring

        Returns:
            The stored entry (version 1 on insert, previous + 1 on overwrite)

        Raises:
            ValidationError: invalid key or null value
            ConflictError:   expected_version did not match the stored row
            DatabaseError:   the write failed
        """
        _check_key(key)
        if value is None:
            raise ValidationError(message="Config value must not be null", field="value")

        try:
            if expected_version is None:
                entry = await self._upsert(db, key, value)
            elif expected_version == 0:
                entry = await self._insert_new(db, key, value)
            else:
                entry = await self._update_if_version(db, key, value, expected_version)
        except (ConflictError, ValidationError):
            raise
        except DATABASE_ERRORS as e:
            logger.error("Database error writing config %s: %s", key, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save site configuration. Please try again.",
                context={"key": key},
            )

        logger.info("Config %s saved (version %d)", key, entry.version)
        return entry

    async def _upsert(self, db: AsyncSession, key: str, value: Any) -> ConfigEntry:
        dialect = db.get_bind().dialect.name
        insert = _UPSERT_DIALECTS.get(dialect)
        if insert is None:
            # No native upsert; read-modify-write inside the request transaction
            entry = await self.get(db, key)
            if entry is None:
                return await self._insert_new(db, key, value)
            entry.value = value
            entry.version += 1
            entry.updated_at = utcnow()
            await db.flush()
            return entry

        now = utcnow()
        stmt = insert(ConfigEntry).values(key=key, value=value, version=1, updated_at=now)
        stmt = stmt.on_conflict_do_update(
            index_elements=[ConfigEntry.key],
            set_={
                "value": stmt.excluded.value,
                "updated_at": now,
                "version": ConfigEntry.version + 1,
            },
        ).returning(ConfigEntry)
        result = await db.execute(stmt, execution_options={"populate_existing": True})
        return result.scalar_one()

    async def _insert_new(self, db: AsyncSession, key: str, value: Any) -> ConfigEntry:
        existing = await self.get(db, key)
        if existing is not None:
            raise ConflictError(key=key, expected_version=0, current_version=existing.version)

        entry = ConfigEntry(key=key, value=value, version=1, updated_at=utcnow())
        db.add(entry)
        try:
            await db.flush()
        except IntegrityError:
            # Another transaction inserted the key between our SELECT and INSERT
            raise ConflictError(key=key, expected_version=0, current_version=None)
        return entry

    async def _update_if_version(
        self, db: AsyncSession, key: str, value: Any, expected_version: int
    ) -> ConfigEntry:
        result = await db.execute(
            update(ConfigEntry)
            .where(ConfigEntry.key == key, ConfigEntry.version == expected_version)
            .values(value=value, version=ConfigEntry.version + 1, updated_at=utcnow())
            .returning(ConfigEntry),
            execution_options={"populate_existing": True},
        )
        entry = result.scalar_one_or_none()
        if entry is None:
            current = await self.get(db, key)
            raise ConflictError(
                key=key,
                expected_version=expected_version,
                current_version=current.version if current else None,
            )
        return entry

    async def delete(self, db: AsyncSession, key: str) -> None:
        """Remove `key`. Deleting a key that does not exist succeeds."""
        _check_key(key)
        try:
            result = await db.execute(
                delete(ConfigEntry)
                .where(ConfigEntry.key == key)
                .execution_options(synchronize_session=False)
            )
        except DATABASE_ERRORS as e:
            logger.error("Database error deleting config %s: %s", key, str(e), exc_info=True)
            raise DatabaseError(message="Could not delete site configuration. Please try again.")
        if result.rowcount:
            logger.info("Config %s deleted", key)

    # ── Section colors ────────────────────────────────────────────────────

    async def get_section_styles(self, db: AsyncSession) -> Tuple[Dict[str, Any], int]:
        """
        Return (section → style map, version of the stored entry).

        Version 0 means the map was never saved. A stored value that is not
        an object is treated as an empty map, and sections whose style is not
        an object are left out.
        """
        entry = await self.get(db, SECTION_COLORS_KEY)
        if entry is None:
            return {}, 0
        if not isinstance(entry.value, dict):
            return {}, entry.version

        sections = {name: style for name, style in entry.value.items() if isinstance(style, dict)}
        if len(sections) != len(entry.value):
            logger.warning(
                "Ignoring %d malformed section style(s) in %s",
                len(entry.value) - len(sections),
                SECTION_COLORS_KEY,
            )
        return sections, entry.version

    async def set_section_style(
        self,
        db: AsyncSession,
        section: str,
        style: Dict[str, Any],
        expected_version: Optional[int] = None,
    ) -> ConfigEntry:
        """Merge one section's style into the map, leaving other sections untouched."""
        if not section.strip():
            raise ValidationError(message="Section name must not be empty", field="section")

        sections, version = await self.get_section_styles(db)
        sections[section] = style
        guard = version if expected_version is None else expected_version
        return await self.set(db, SECTION_COLORS_KEY, sections, expected_version=guard)

    async def reset_section_style(
        self,
        db: AsyncSession,
        section: str,
        expected_version: Optional[int] = None,
    ) -> Tuple[Dict[str, Any], int, bool]:
        """
        Drop a section from the map so it renders with its built-in default.

        Returns (sections, version, removed). Resetting a section that has no
        stored style writes nothing, but a stale expected_version still
        raises ConflictError.
        """
        sections, version = await self.get_section_styles(db)
        if section not in sections:
            if expected_version is not None and expected_version != version:
                raise ConflictError(
                    key=SECTION_COLORS_KEY,
                    expected_version=expected_version,
                    current_version=version,
                )
            return sections, version, False

        del sections[section]
        guard = version if expected_version is None else expected_version
        entry = await self.set(db, SECTION_COLORS_KEY, sections, expected_version=guard)
        return dict(entry.value), entry.version, True

    # ── Maintenance ───────────────────────────────────────────────────────

    async def maintenance_status(self, db: AsyncSession) -> Dict[str, Dict[str, Any]]:
        """
        Public maintenance flag.

        Returns:
            {"maintenance": {...maintenance_mode value, "enabled": bool},
             "general":     {...general_info value}}
        """
        maintenance_entry = await self.get(db, MAINTENANCE_KEY)
        general_entry = await self.get(db, GENERAL_INFO_KEY)

        maintenance: Dict[str, Any] = {}
        if maintenance_entry is not None and isinstance(maintenance_entry.value, dict):
            maintenance.update(maintenance_entry.value)
        maintenance["enabled"] = bool(maintenance.get("isEnabled", False))

        general: Dict[str, Any] = {}
        if general_entry is not None and isinstance(general_entry.value, dict):
            general.update(general_entry.value)

        return {"maintenance": maintenance, "general": general}


# ── Singleton Instance ────────────────────────────────────────────────────
config_service = ConfigService()
