"""Unit tests for the Order aggregate."""

from datetime import datetime, timezone

import pytest

from afterschool.domain.exceptions import ValidationError
from afterschool.domain.model.order import Order, OrderLineItem, OrderStatus
from afterschool.domain.model.value_objects import Quantity
from tests.fakes import ENGLISH_ID, MATH_ID


def _make_order(**overrides) -> Order:
    fields = dict(
        id="0" * 24,
        order_number="ORD-2026-0001",
        customer_name="Jo Bloggs",
        phone="07123456789",
        items=[
            OrderLineItem(MATH_ID, Quantity(2)),
            OrderLineItem(ENGLISH_ID, Quantity(1)),
        ],
        notes="Allergic to peanuts",
    )
    fields.update(overrides)
    return Order(**fields)


class TestOrderDefaults:

    def test_starts_pending(self):
        order = _make_order()
        assert order.status == OrderStatus.PENDING
        assert order.completed_at is None

    def test_total_places(self):
        assert _make_order().total_places == 3


class TestMarkDone:

    def test_pending_to_done(self):
        order = _make_order()
        now = datetime(2026, 10, 1, 12, 0, tzinfo=timezone.utc)
        order.mark_done(now)
        assert order.status == OrderStatus.DONE
        assert order.completed_at == now

    def test_done_only_once(self):
        order = _make_order()
        order.mark_done()
        with pytest.raises(ValidationError, match="expected pending"):
            order.mark_done()


class TestMatches:

    @pytest.mark.parametrize("query", ["ord-2026", "BLOGGS", "0712345", "peanut"])
    def test_matches_searchable_fields(self, query):
        assert _make_order().matches(query)

    def test_does_not_match_lesson_ids(self):
        assert not _make_order().matches(MATH_ID)
