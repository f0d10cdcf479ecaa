"""
Price resolution — the single chargeable unit price of a line.
"""

from __future__ import annotations

from storefront._types import Money, ZERO
from storefront.money._types import (
    LineItem,
    GiftPackageLineItem,
    PricedItem,
    DisplayPair,
)


def _non_negative(amount: Money) -> Money:
    return amount if amount > ZERO else ZERO


def resolve_unit_price(item: PricedItem) -> Money:
    """
    Chargeable unit price.

    LineItem: discounted ?? original ?? 0.
    GiftPackageLineItem: package_price, always.
    """
    match item:
        case GiftPackageLineItem(package_price=price):
            return _non_negative(price)
        case LineItem(unit_discounted_price=discounted) if discounted is not None:
            return _non_negative(discounted)
        case LineItem(unit_original_price=original) if original is not None:
            return _non_negative(original)
        case _:
            return ZERO


def _original_of(item: PricedItem) -> Money | None:
    match item:
        case GiftPackageLineItem(package_original_price=original):
            return original
        case LineItem(unit_original_price=original):
            return original


def resolve_display_pair(item: PricedItem) -> DisplayPair:
    """
    (original, effective) for strikethrough rendering.

    The original is dropped unless it is strictly above the charged price.
    """
    effective = resolve_unit_price(item)
    original = _original_of(item)
    if original is None or original <= ZERO or original <= effective:
        return DisplayPair(original=None, effective=effective)
    return DisplayPair(original=original, effective=effective)


__all__ = ("resolve_unit_price", "resolve_display_pair")
