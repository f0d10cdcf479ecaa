"""
Cart aggregation — subtotal before discount and shipping.
"""

from __future__ import annotations

from collections.abc import Iterable

from storefront._types import Money, ZERO
from storefront.money import PricedItem, resolve_unit_price


def effective_quantity(item: PricedItem) -> int:
    """
    Quantity used for pricing.

    Note: Missing, zero, negative or non-integer quantities count as 1.
    Client carts are untrusted and must still price.
    """
    quantity = getattr(item, "quantity", None)
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        return 1
    return quantity


def line_total(item: PricedItem) -> Money:
    return resolve_unit_price(item) * effective_quantity(item)


def subtotal(items: Iterable[PricedItem]) -> Money:
    """Σ unit price × quantity. Order-independent."""
    return sum((line_total(item) for item in items), ZERO)


def item_count(items: Iterable[PricedItem]) -> int:
    return sum(effective_quantity(item) for item in items)


__all__ = ("effective_quantity", "line_total", "subtotal", "item_count")
