"""Tests for total composition, order lifecycle and reports."""

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from storefront import order as O

from tests.helpers import NOW, line, gift, address, ok, err


def make_order(
    subtotal: int = 500,
    discount: int = 0,
    status: O.OrderStatus = O.OrderStatus.PENDING,
    user_id: str = "u1",
    created_at: datetime = NOW,
) -> O.Order:
    return O.Order(
        user_id=user_id,
        items=(line("oud", subtotal),),
        totals=O.OrderTotals.build(subtotal, discount, 85),
        shipping_address=address(),
        status=status,
        created_at=created_at,
        updated_at=created_at,
    )


class TestCompose:
    def test_discount_then_shipping(self):
        assert O.compose(500, 100, 70) == Decimal(470)

    def test_never_negative(self):
        assert O.compose(50, 100, 0) == Decimal(0)

    def test_shipping_is_not_discounted(self):
        """A discount larger than the subtotal does not eat into shipping."""
        assert O.compose(300, 300, 85) == Decimal(85)

    def test_totals_are_composed(self):
        totals = O.OrderTotals.build("199.99", "20", 85)
        assert totals.total == Decimal("264.99")


class TestTransitions:
    @pytest.mark.parametrize(
        ("current", "requested"),
        [
            (O.OrderStatus.PENDING, O.OrderStatus.PROCESSING),
            (O.OrderStatus.PROCESSING, O.OrderStatus.SHIPPED),
            (O.OrderStatus.SHIPPED, O.OrderStatus.DELIVERED),
            (O.OrderStatus.PENDING, O.OrderStatus.CANCELLED),
            (O.OrderStatus.DELIVERED, O.OrderStatus.CANCELLED),
        ],
    )
    def test_allowed(self, current, requested):
        assert O.can_transition(current, requested)

    @pytest.mark.parametrize(
        ("current", "requested"),
        [
            (O.OrderStatus.PENDING, O.OrderStatus.SHIPPED),
            (O.OrderStatus.DELIVERED, O.OrderStatus.PENDING),
            (O.OrderStatus.CANCELLED, O.OrderStatus.PROCESSING),
            (O.OrderStatus.CANCELLED, O.OrderStatus.CANCELLED),
        ],
    )
    def test_rejected(self, current, requested):
        assert not O.can_transition(current, requested)

    def test_transition_keeps_totals(self):
        order = make_order(discount=100)
        later = NOW + timedelta(hours=1)

        updated = ok(O.transition(order, O.OrderStatus.PROCESSING, later))

        assert updated.status is O.OrderStatus.PROCESSING
        assert updated.updated_at == later
        assert updated.totals == order.totals
        assert order.status is O.OrderStatus.PENDING

    def test_transition_error_message(self):
        e = err(O.transition(make_order(), O.OrderStatus.DELIVERED))
        assert e.message == "Cannot move order from pending to delivered"


class TestReports:
    def test_revenue_excludes_cancelled_and_shipping(self):
        orders = [
            make_order(500, 100),
            make_order(300),
            make_order(1000, status=O.OrderStatus.CANCELLED),
        ]
        assert O.revenue(orders) == Decimal(700)

    def test_count_by_status(self):
        counts = O.count_by_status([make_order(), make_order(status=O.OrderStatus.SHIPPED)])
        assert counts[O.OrderStatus.PENDING] == 1
        assert counts[O.OrderStatus.SHIPPED] == 1
        assert counts[O.OrderStatus.CANCELLED] == 0


class TestCodec:
    def test_gift_package_snapshot(self):
        item = gift("box", 1200, ("50ml", ("oud", "amber")), ("100ml", ("musk",)))
        data = O.item_to_dict(item)

        assert data["kind"] == "gift_package"
        assert data["package_price"] == "1200"
        assert O.item_from_dict(data) == item

    def test_line_snapshot_keeps_decimals(self):
        item = line("oud", "749.99", 2, original="900")
        assert O.item_from_dict(O.item_to_dict(item)) == item


class TestMemoryOrderStore:
    @pytest.mark.asyncio
    async def test_save_twice_fails(self):
        store = O.MemoryOrderStore()
        order = make_order()

        ok(await store.save(order))
        assert "already exists" in err(await store.save(order)).message

    @pytest.mark.asyncio
    async def test_list_for_user_newest_first(self):
        store = O.MemoryOrderStore()
        older = make_order(created_at=NOW - timedelta(days=1))
        newer = make_order()
        other = make_order(user_id="u2")
        for order in (older, newer, other):
            ok(await store.save(order))

        assert [o.id for o in ok(await store.list_for_user("u1"))] == [newer.id, older.id]

    @pytest.mark.asyncio
    async def test_set_status(self):
        store = O.MemoryOrderStore()
        order = make_order()
        ok(await store.save(order))

        updated = ok(await store.set_status(order.id, O.OrderStatus.PROCESSING, NOW))
        assert updated.status is O.OrderStatus.PROCESSING

        e = err(await store.set_status(order.id, O.OrderStatus.PENDING, NOW))
        assert isinstance(e, O.StatusError)
        assert ok(await store.get(order.id)).status is O.OrderStatus.PROCESSING

        assert ok(await store.set_status("missing", O.OrderStatus.PROCESSING)) is None
