"""
Admin dashboard figures.
"""

from __future__ import annotations

from collections.abc import Iterable

from storefront._types import Money, ZERO
from storefront.order._types import Order, OrderStatus


def revenue(orders: Iterable[Order]) -> Money:
    """Σ (subtotal − discount) over non-cancelled orders. Shipping is not revenue."""
    return sum(
        (
            order.totals.subtotal - order.totals.discount_amount
            for order in orders
            if order.status is not OrderStatus.CANCELLED
        ),
        ZERO,
    )


def count_by_status(orders: Iterable[Order]) -> dict[OrderStatus, int]:
    counts = dict.fromkeys(OrderStatus, 0)
    for order in orders:
        counts[order.status] += 1
    return counts


__all__ = ("revenue", "count_by_status")
