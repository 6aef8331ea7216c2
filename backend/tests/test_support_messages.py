"""
Practice CMS Backend — Support Message Service Tests
====================================================

What we test:
    ✅ Blank sender fields fall back to the site's own identity
    ✅ Inbox lists newest first
    ✅ Responding stamps respondedAt; unknown ids are 404s
    ✅ Delete is idempotent
"""

import pytest

from practice_cms.exceptions import NotFoundError, ValidationError
from practice_cms.services.support_message_service import (
    DEFAULT_SENDER_EMAIL,
    DEFAULT_SENDER_NAME,
    support_message_service,
)


@pytest.mark.asyncio
async def test_blank_sender_uses_site_identity(db_session):
    message = await support_message_service.create(
        db_session, {"name": "  ", "email": None, "message": "O banner sumiu"}
    )

    assert message.name == DEFAULT_SENDER_NAME
    assert message.email == DEFAULT_SENDER_EMAIL
    assert message.type == "support"
    assert message.attachments == []
    assert message.is_read is False


@pytest.mark.asyncio
async def test_list_is_newest_first(db_session):
    first = await support_message_service.create(db_session, {"message": "one"})
    second = await support_message_service.create(db_session, {"message": "two", "type": "bug"})

    messages = await support_message_service.list_all(db_session)

    assert [m.id for m in messages] == [second.id, first.id]


@pytest.mark.asyncio
async def test_response_stamps_responded_at(db_session):
    message = await support_message_service.create(db_session, {"message": "help"})

    updated = await support_message_service.update(
        db_session, message.id, {"is_read": True, "admin_response": "Resolvido"}
    )

    assert updated.is_read is True
    assert updated.admin_response == "Resolvido"
    assert updated.responded_at is not None


@pytest.mark.asyncio
async def test_marking_read_leaves_response_unset(db_session):
    message = await support_message_service.create(db_session, {"message": "help"})

    updated = await support_message_service.update(db_session, message.id, {"is_read": True})

    assert updated.responded_at is None


@pytest.mark.asyncio
async def test_null_required_field_is_rejected(db_session):
    message = await support_message_service.create(db_session, {"message": "help"})

    with pytest.raises(ValidationError):
        await support_message_service.update(db_session, message.id, {"message": None})


@pytest.mark.asyncio
async def test_update_unknown_id_is_not_found(db_session):
    with pytest.raises(NotFoundError):
        await support_message_service.update(db_session, 999, {"is_read": True})


@pytest.mark.asyncio
async def test_delete_is_idempotent(db_session):
    message = await support_message_service.create(db_session, {"message": "bye"})

    await support_message_service.delete(db_session, message.id)
    await support_message_service.delete(db_session, message.id)

    assert await support_message_service.list_all(db_session) == []
