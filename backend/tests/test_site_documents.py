"""
Practice CMS Backend — Site Document Service Tests
==================================================

What:  Typed single-document settings stored on the config store.

What we test:
    ✅ Never-saved documents read as their defaults at version 0
    ✅ Writes merge into the current document and bump the version
    ✅ Legal documents stamp lastUpdated; invalid merges are 400s
    ✅ Stale versions conflict; reset brings the defaults back
    ✅ A stored value that no longer validates reads as the defaults
"""

import pytest

from practice_cms.exceptions import ConflictError, ValidationError
from practice_cms.services.config_service import config_service
from practice_cms.services.site_documents import (
    CONTACT_SETTINGS,
    COOKIE_SETTINGS,
    DOCUMENTS,
    FOOTER_SETTINGS,
    PRIVACY_POLICY,
    site_document_service,
)


class TestRead:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("slug", sorted(DOCUMENTS))
    async def test_unsaved_document_is_defaults_at_version_zero(self, db_session, slug):
        document = DOCUMENTS[slug]

        response = await site_document_service.respond(db_session, document)

        assert response.version == 0
        assert response.updated_at is None
        for name, value in document.defaults.items():
            assert getattr(response, name) == value

    @pytest.mark.asyncio
    async def test_stored_fields_override_defaults(self, db_session):
        await config_service.set(db_session, "cookie_settings", {"title": "Cookies", "position": "bottom"})

        current, version = await site_document_service.read(db_session, COOKIE_SETTINGS)

        assert version == 1
        assert current.title == "Cookies"
        assert current.position == "bottom"
        assert current.accept_button_text == "Aceitar Cookies"

    @pytest.mark.asyncio
    async def test_invalid_stored_value_reads_as_defaults(self, db_session):
        await config_service.set(db_session, "cookie_settings", {"position": "left"})

        current, version = await site_document_service.read(db_session, COOKIE_SETTINGS)

        assert version == 1
        assert current.position == "top"
        assert current.title == COOKIE_SETTINGS.defaults["title"]


class TestWrite:
    @pytest.mark.asyncio
    async def test_partial_write_keeps_other_fields(self, db_session):
        await site_document_service.write(
            db_session, FOOTER_SETTINGS, {"general_info": {"name": "Clínica"}}
        )

        saved = await site_document_service.write(
            db_session, FOOTER_SETTINGS, {"trust_seals": [{"name": "CRP"}]}
        )

        assert saved.version == 2
        assert saved.general_info == {"name": "Clínica"}
        assert saved.trust_seals == [{"name": "CRP"}]

    @pytest.mark.asyncio
    async def test_stored_value_uses_camel_case_keys(self, db_session):
        await site_document_service.write(
            db_session, CONTACT_SETTINGS, {"schedule_info": {"weekdays": "8h-18h"}}
        )

        entry = await config_service.get(db_session, "contact_settings")

        assert entry.value["scheduleInfo"] == {"weekdays": "8h-18h"}
        assert "contactCard" in entry.value

    @pytest.mark.asyncio
    async def test_legal_document_stamps_last_updated(self, db_session):
        saved = await site_document_service.write(
            db_session, PRIVACY_POLICY, {"content": "<p>Novo texto</p>"}
        )

        assert saved.content == "<p>Novo texto</p>"
        assert saved.title == PRIVACY_POLICY.defaults["title"]
        assert saved.last_updated is not None

    @pytest.mark.asyncio
    async def test_invalid_merge_is_validation_error(self, db_session):
        with pytest.raises(ValidationError):
            await site_document_service.write(db_session, COOKIE_SETTINGS, {"position": "middle"})

        assert await config_service.get(db_session, "cookie_settings") is None

    @pytest.mark.asyncio
    async def test_stale_expected_version_conflicts(self, db_session):
        await site_document_service.write(db_session, COOKIE_SETTINGS, {"title": "A"})

        with pytest.raises(ConflictError) as exc_info:
            await site_document_service.write(
                db_session, COOKIE_SETTINGS, {"title": "B"}, expected_version=0
            )

        assert exc_info.value.current_version == 1
        current, _ = await site_document_service.read(db_session, COOKIE_SETTINGS)
        assert current.title == "A"


class TestReset:
    @pytest.mark.asyncio
    async def test_reset_returns_defaults(self, db_session):
        await site_document_service.write(db_session, COOKIE_SETTINGS, {"title": "Custom"})

        response = await site_document_service.reset(db_session, COOKIE_SETTINGS)

        assert response.version == 0
        assert response.title == COOKIE_SETTINGS.defaults["title"]
        assert await config_service.get(db_session, "cookie_settings") is None
