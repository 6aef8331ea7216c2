"""
Practice CMS Backend — Config Service Tests
===========================================

What:  Key/JSON store semantics, optimistic concurrency and the section
       color map built on top of it.

What we test:
    ✅ Upsert: insert, overwrite (not merge), same-value idempotence
    ✅ Version counter and expected_version guards (409 on mismatch)
    ✅ Idempotent delete, key validation, sorted listing
    ✅ Section styles merge one section and keep the others
    ✅ Malformed section entries are ignored; no-op resets write nothing
    ✅ Maintenance status derivation
"""

import pytest

from practice_cms.exceptions import ConflictError, ValidationError
from practice_cms.services.config_service import SECTION_COLORS_KEY, config_service

GRADIENT = {
    "backgroundType": "gradient",
    "gradientColors": ["#fdf2f8", "#ede9fe"],
    "gradientDirection": "to-br",
    "opacity": 1.0,
}
SOLID = {"backgroundType": "solid", "backgroundColor": "#ffffff", "opacity": 0.9}


class TestUpsert:
    @pytest.mark.asyncio
    async def test_missing_key_returns_none(self, db_session):
        assert await config_service.get(db_session, "hero_image") is None

    @pytest.mark.asyncio
    async def test_set_then_overwrite_replaces_value(self, db_session):
        await config_service.set(db_session, "hero_image", {"path": "/x.webp", "alt": "Office"})
        await config_service.set(db_session, "hero_image", {"path": "/y.webp"})

        entry = await config_service.get(db_session, "hero_image")

        assert entry.value == {"path": "/y.webp"}

    @pytest.mark.asyncio
    async def test_same_value_twice_is_stable(self, db_session):
        value = {"phone": "+55 11 0000-0000", "tags": ["a", "b"], "nested": {"n": 1}}

        await config_service.set(db_session, "contact_info", value)
        first = (await config_service.get(db_session, "contact_info")).value
        await config_service.set(db_session, "contact_info", value)
        second = (await config_service.get(db_session, "contact_info")).value

        assert first == value
        assert second == value

    @pytest.mark.asyncio
    async def test_version_starts_at_one_and_increments(self, db_session):
        created = await config_service.set(db_session, "footer", {"text": "v1"})
        assert created.version == 1

        updated = await config_service.set(db_session, "footer", {"text": "v2"})
        assert updated.version == 2

    @pytest.mark.asyncio
    async def test_get_all_is_sorted_by_key(self, db_session):
        for key in ("zeta", "alpha", "mid"):
            await config_service.set(db_session, key, {"k": key})

        entries = await config_service.get_all(db_session)

        assert [entry.key for entry in entries] == ["alpha", "mid", "zeta"]

    @pytest.mark.asyncio
    async def test_accepts_non_object_values(self, db_session):
        await config_service.set(db_session, "announcement_count", 3)
        await config_service.set(db_session, "banner", "Closed on holidays")

        assert (await config_service.get(db_session, "announcement_count")).value == 3
        assert (await config_service.get(db_session, "banner")).value == "Closed on holidays"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("key", ["", "   ", "k" * 101])
    async def test_invalid_keys_are_rejected(self, db_session, key):
        with pytest.raises(ValidationError):
            await config_service.set(db_session, key, {"a": 1})

    @pytest.mark.asyncio
    async def test_null_value_is_rejected(self, db_session):
        with pytest.raises(ValidationError):
            await config_service.set(db_session, "hero_image", None)


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_removes_entry(self, db_session):
        await config_service.set(db_session, "hero_image", {"path": "/x.webp"})

        await config_service.delete(db_session, "hero_image")

        assert await config_service.get(db_session, "hero_image") is None

    @pytest.mark.asyncio
    async def test_delete_missing_key_succeeds(self, db_session):
        await config_service.delete(db_session, "never_existed")
        await config_service.delete(db_session, "never_existed")


class TestOptimisticConcurrency:
    @pytest.mark.asyncio
    async def test_matching_version_writes(self, db_session):
        created = await config_service.set(db_session, "hero", {"title": "Hello"})
        created_version = created.version

        updated = await config_service.set(
            db_session, "hero", {"title": "Welcome"}, expected_version=created_version
        )

        assert updated.version == created_version + 1
        assert updated.value == {"title": "Welcome"}

    @pytest.mark.asyncio
    async def test_stale_version_raises_conflict_and_keeps_value(self, db_session):
        await config_service.set(db_session, "hero", {"title": "v1"})
        await config_service.set(db_session, "hero", {"title": "v2"})

        with pytest.raises(ConflictError) as exc_info:
            await config_service.set(db_session, "hero", {"title": "lost"}, expected_version=1)

        assert exc_info.value.current_version == 2
        assert (await config_service.get(db_session, "hero")).value == {"title": "v2"}

    @pytest.mark.asyncio
    async def test_version_zero_creates_only_new_keys(self, db_session):
        created = await config_service.set(db_session, "fresh", {"a": 1}, expected_version=0)
        assert created.version == 1

        with pytest.raises(ConflictError):
            await config_service.set(db_session, "fresh", {"a": 2}, expected_version=0)

    @pytest.mark.asyncio
    async def test_positive_version_on_missing_key_conflicts(self, db_session):
        with pytest.raises(ConflictError) as exc_info:
            await config_service.set(db_session, "ghost", {"a": 1}, expected_version=3)

        assert exc_info.value.current_version == 0


class TestSectionStyles:
    @pytest.mark.asyncio
    async def test_empty_map_before_first_save(self, db_session):
        sections, version = await config_service.get_section_styles(db_session)

        assert sections == {}
        assert version == 0

    @pytest.mark.asyncio
    async def test_setting_one_section_keeps_the_others(self, db_session):
        await config_service.set_section_style(db_session, "hero", GRADIENT)
        await config_service.set_section_style(db_session, "faq", SOLID)

        sections, version = await config_service.get_section_styles(db_session)

        assert sections == {"hero": GRADIENT, "faq": SOLID}
        assert version == 2

    @pytest.mark.asyncio
    async def test_stale_expected_version_conflicts(self, db_session):
        await config_service.set_section_style(db_session, "hero", GRADIENT)
        await config_service.set_section_style(db_session, "faq", SOLID)

        with pytest.raises(ConflictError):
            await config_service.set_section_style(
                db_session, "services", SOLID, expected_version=1
            )

        sections, _ = await config_service.get_section_styles(db_session)
        assert "services" not in sections

    @pytest.mark.asyncio
    async def test_reset_removes_only_that_section(self, db_session):
        await config_service.set_section_style(db_session, "hero", GRADIENT)
        await config_service.set_section_style(db_session, "faq", SOLID)

        sections, _, removed = await config_service.reset_section_style(db_session, "hero")

        assert removed is True
        assert sections == {"faq": SOLID}

    @pytest.mark.asyncio
    async def test_reset_unknown_section_is_noop(self, db_session):
        await config_service.set_section_style(db_session, "faq", SOLID)

        sections, version, removed = await config_service.reset_section_style(db_session, "footer")

        assert removed is False
        assert sections == {"faq": SOLID}
        assert version == 1

    @pytest.mark.asyncio
    async def test_reset_unknown_section_with_stale_version_conflicts(self, db_session):
        await config_service.set_section_style(db_session, "hero", GRADIENT)
        await config_service.set_section_style(db_session, "faq", SOLID)

        with pytest.raises(ConflictError):
            await config_service.reset_section_style(db_session, "footer", expected_version=1)

    @pytest.mark.asyncio
    async def test_non_object_section_entries_are_left_out(self, db_session):
        await config_service.set(
            db_session, SECTION_COLORS_KEY, {"hero": "#fff", "faq": SOLID, "footer": None}
        )

        sections, version = await config_service.get_section_styles(db_session)

        assert sections == {"faq": SOLID}
        assert version == 1

    @pytest.mark.asyncio
    async def test_saving_a_section_drops_malformed_neighbours(self, db_session):
        await config_service.set(db_session, SECTION_COLORS_KEY, {"hero": "#fff", "faq": SOLID})

        entry = await config_service.set_section_style(db_session, "about", GRADIENT)

        assert entry.value == {"faq": SOLID, "about": GRADIENT}

    @pytest.mark.asyncio
    async def test_non_object_value_reads_as_empty_map(self, db_session):
        await config_service.set(db_session, SECTION_COLORS_KEY, ["not", "a", "map"])

        sections, version = await config_service.get_section_styles(db_session)

        assert sections == {}
        assert version == 1


class TestMaintenanceStatus:
    @pytest.mark.asyncio
    async def test_defaults_when_unset(self, db_session):
        status = await config_service.maintenance_status(db_session)

        assert status == {"maintenance": {"enabled": False}, "general": {}}

    @pytest.mark.asyncio
    async def test_enabled_mirrors_is_enabled(self, db_session):
        await config_service.set(
            db_session, "maintenance_mode", {"isEnabled": True, "message": "Back soon"}
        )
        await config_service.set(db_session, "general_info", {"siteName": "Clinic"})

        status = await config_service.maintenance_status(db_session)

        assert status["maintenance"] == {"isEnabled": True, "message": "Back soon", "enabled": True}
        assert status["general"] == {"siteName": "Clinic"}
