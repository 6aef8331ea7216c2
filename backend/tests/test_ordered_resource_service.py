"""
Practice CMS Backend — Ordered Resource Service Tests
=====================================================

What:  Tests for the generic list / create / update / delete / reorder logic.
How:   Real SQLite database per test (see conftest.engine); services run in
       one session exactly as they do inside a request.

What we test:
    ✅ Ordering by (order, id), stable across calls
    ✅ list_active is exactly the visible subset of list_all
    ✅ Partial updates, not-found and null handling
    ✅ Idempotent delete that leaves order gaps
    ✅ Reorder: applied in full, unknown ids skipped, atomic per transaction
    ✅ Reorder body envelopes
"""

import logging

import pytest

from practice_cms.exceptions import NotFoundError, ValidationError
from practice_cms.schemas.common import ReorderItem
from practice_cms.services.ordered_resource import parse_reorder_payload
from practice_cms.services.registry import faq_service, testimonial_service


async def _create_testimonials(db, orders):
    created = []
    for index, order in enumerate(orders):
        created.append(
            await testimonial_service.create(
                db,
                {
                    "name": f"Client {index}",
                    "service": "Individual therapy",
                    "testimonial": "Very helpful sessions.",
                    "order": order,
                },
            )
        )
    return created


class TestListing:
    @pytest.mark.asyncio
    async def test_list_all_sorts_by_order_then_id(self, db_session):
        a, b, c = await _create_testimonials(db_session, [2, 0, 0])

        items = await testimonial_service.list_all(db_session)

        assert [item.id for item in items] == [b.id, c.id, a.id]

    @pytest.mark.asyncio
    async def test_equal_orders_are_stable_across_calls(self, db_session):
        await _create_testimonials(db_session, [0, 0, 0, 0])

        first = [item.id for item in await testimonial_service.list_all(db_session)]
        second = [item.id for item in await testimonial_service.list_all(db_session)]

        assert first == second == sorted(first)

    @pytest.mark.asyncio
    async def test_list_active_is_visible_subset(self, db_session):
        a, b, c = await _create_testimonials(db_session, [0, 1, 2])
        await testimonial_service.update(db_session, b.id, {"is_active": False})

        everything = await testimonial_service.list_all(db_session)
        active = await testimonial_service.list_active(db_session)

        assert [item.id for item in active] == [
            item.id for item in everything if item.is_active
        ]
        assert [item.id for item in active] == [a.id, c.id]


class TestCreateAndUpdate:
    @pytest.mark.asyncio
    async def test_create_applies_defaults(self, db_session):
        item = await faq_service.create(db_session, {"question": "Q?", "answer": "A."})

        assert item.id is not None
        assert item.order == 0
        assert item.is_active is True
        assert item.created_at is not None

    @pytest.mark.asyncio
    async def test_update_changes_only_given_fields(self, db_session):
        (item,) = await _create_testimonials(db_session, [4])

        updated = await testimonial_service.update(db_session, item.id, {"rating": 3})

        assert updated.rating == 3
        assert updated.name == "Client 0"
        assert updated.order == 4

    @pytest.mark.asyncio
    async def test_update_unknown_id_raises_not_found(self, db_session):
        with pytest.raises(NotFoundError) as exc_info:
            await faq_service.update(db_session, 999, {"answer": "nope"})

        assert exc_info.value.context["resource_id"] == "999"

    @pytest.mark.asyncio
    async def test_update_rejects_null_for_required_column(self, db_session):
        (item,) = await _create_testimonials(db_session, [0])

        with pytest.raises(ValidationError) as exc_info:
            await testimonial_service.update(db_session, item.id, {"name": None})

        assert exc_info.value.field == "name"

    @pytest.mark.asyncio
    async def test_update_allows_clearing_optional_column(self, db_session):
        item = await testimonial_service.create(
            db_session,
            {"name": "Ana", "service": "Couples", "testimonial": "Great.", "photo": "/p.webp"},
        )

        updated = await testimonial_service.update(db_session, item.id, {"photo": None})

        assert updated.photo is None

    @pytest.mark.asyncio
    async def test_update_ignores_server_owned_fields(self, db_session):
        (item,) = await _create_testimonials(db_session, [0])
        original_id = item.id

        updated = await testimonial_service.update(db_session, item.id, {"id": 500, "rating": 4})

        assert updated.id == original_id
        assert updated.rating == 4


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete_twice_succeeds(self, db_session):
        item = await faq_service.create(db_session, {"question": "Q?", "answer": "A."})

        await faq_service.delete(db_session, item.id)
        await faq_service.delete(db_session, item.id)

        assert await faq_service.list_all(db_session) == []

    @pytest.mark.asyncio
    async def test_delete_leaves_order_gaps(self, db_session):
        a, b, c = await _create_testimonials(db_session, [0, 1, 2])

        await testimonial_service.delete(db_session, b.id)

        remaining = await testimonial_service.list_all(db_session)
        assert [(item.id, item.order) for item in remaining] == [(a.id, 0), (c.id, 2)]


class TestReorder:
    @pytest.mark.asyncio
    async def test_reorder_moves_last_item_first(self, db_session):
        first, second, third = await _create_testimonials(db_session, [0, 1, 2])

        result = await testimonial_service.reorder(
            db_session,
            [
                ReorderItem(id=third.id, order=0),
                ReorderItem(id=first.id, order=1),
                ReorderItem(id=second.id, order=2),
            ],
        )

        assert [item.id for item in result] == [third.id, first.id, second.id]
        assert [item.order for item in result] == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_reorder_skips_unknown_ids(self, db_session, caplog):
        first, second = await _create_testimonials(db_session, [0, 1])

        with caplog.at_level(logging.WARNING):
            result = await testimonial_service.reorder(
                db_session,
                [
                    ReorderItem(id=second.id, order=0),
                    ReorderItem(id=4242, order=1),
                    ReorderItem(id=first.id, order=2),
                ],
            )

        assert [item.id for item in result] == [second.id, first.id]
        assert "4242" in caplog.text

    @pytest.mark.asyncio
    async def test_reorder_rejects_empty_list(self, db_session):
        with pytest.raises(ValidationError):
            await testimonial_service.reorder(db_session, [])

    @pytest.mark.asyncio
    async def test_reorder_is_invisible_until_commit(self, session_factory):
        async with session_factory() as setup:
            rows = await _create_testimonials(setup, [0, 1, 2])
            original = [row.id for row in rows]
            await setup.commit()

        reversed_items = [
            ReorderItem(id=row_id, order=position)
            for position, row_id in enumerate(reversed(original))
        ]

        async with session_factory() as writer:
            await testimonial_service.reorder(writer, reversed_items)

            async with session_factory() as reader:
                during = [item.id for item in await testimonial_service.list_all(reader)]
            assert during == original

            await writer.commit()

        async with session_factory() as reader:
            after = [item.id for item in await testimonial_service.list_all(reader)]
        assert after == list(reversed(original))

    @pytest.mark.asyncio
    async def test_rolled_back_reorder_leaves_no_partial_state(self, session_factory):
        async with session_factory() as setup:
            rows = await _create_testimonials(setup, [0, 1, 2])
            original = [(row.id, row.order) for row in rows]
            await setup.commit()

        async with session_factory() as writer:
            await testimonial_service.reorder(
                writer,
                [ReorderItem(id=rows[2].id, order=0), ReorderItem(id=rows[0].id, order=9)],
            )
            await writer.rollback()

        async with session_factory() as reader:
            items = await testimonial_service.list_all(reader)
        assert [(item.id, item.order) for item in items] == original


class TestParseReorderPayload:
    def test_plain_array(self):
        items = parse_reorder_payload([{"id": 1, "order": 0}, {"id": 2, "order": 1}])
        assert [(i.id, i.order) for i in items] == [(1, 0), (2, 1)]

    @pytest.mark.parametrize("envelope", ["items", "value"])
    def test_wrapped_array(self, envelope):
        items = parse_reorder_payload({envelope: [{"id": 7, "order": 3}]})
        assert [(i.id, i.order) for i in items] == [(7, 3)]

    @pytest.mark.parametrize(
        "payload",
        [[], {"items": []}, {"other": [{"id": 1, "order": 0}]}, "1,2,3", None],
    )
    def test_rejects_missing_or_empty_list(self, payload):
        with pytest.raises(ValidationError):
            parse_reorder_payload(payload)

    def test_rejects_entry_without_integer_id(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_reorder_payload([{"id": "abc", "order": 0}])

        assert exc_info.value.context["errors"]
