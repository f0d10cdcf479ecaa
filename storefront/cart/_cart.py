"""
Cart — explicit, injectable cart state.

Replaces page-level mutable cart state: every change returns a new Cart.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field

from storefront._types import Money
from storefront.money import LineItem, GiftPackageLineItem, PricedItem
from storefront.cart._aggregate import effective_quantity, subtotal, item_count


def item_key(item: PricedItem) -> str:
    """
    Identity of a cart line.

    LineItem: product_id:size.
    GiftPackageLineItem: product_id plus every chosen (size, products) pair,
    so two differently configured packages stay separate lines.
    """
    match item:
        case GiftPackageLineItem(product_id=product_id, size_selections=selections):
            parts = ";".join(f"{s.size}={','.join(s.product_ids)}" for s in selections)
            return f"{product_id}:gift:{parts}"
        case LineItem(product_id=product_id, size=size):
            return f"{product_id}:{size}"


@dataclass(frozen=True, slots=True)
class Cart:
    """
    Ordered cart lines.

    Example:
        cart = Cart().add(item).add(item)   # one line, quantity 2
        cart.subtotal
        cart.update_quantity(item_key(item), 0)   # removes the line

    Note: Immutable — each method returns new Cart.
    """

    items: tuple[PricedItem, ...] = field(default_factory=tuple)

    def add(self, item: PricedItem) -> Cart:
        key = item_key(item)
        added = effective_quantity(item)
        for index, existing in enumerate(self.items):
            if item_key(existing) == key:
                merged = dataclasses.replace(
                    existing, quantity=effective_quantity(existing) + added
                )
                return Cart(items=self.items[:index] + (merged,) + self.items[index + 1 :])
        return Cart(items=self.items + (item,))

    def update_quantity(self, key: str, quantity: int) -> Cart:
        if quantity <= 0:
            return self.remove(key)
        return Cart(
            items=tuple(
                dataclasses.replace(item, quantity=quantity) if item_key(item) == key else item
                for item in self.items
            )
        )

    def remove(self, key: str) -> Cart:
        return Cart(items=tuple(item for item in self.items if item_key(item) != key))

    def clear(self) -> Cart:
        return Cart()

    def get(self, key: str) -> PricedItem | None:
        return next((item for item in self.items if item_key(item) == key), None)

    @property
    def subtotal(self) -> Money:
        return subtotal(self.items)

    @property
    def count(self) -> int:
        return item_count(self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items

    def __len__(self) -> int:
        return len(self.items)


__all__ = ("Cart", "item_key")
