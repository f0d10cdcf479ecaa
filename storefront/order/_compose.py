"""
Order total composition.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront._types import Money, MoneyLike, ZERO, to_money


def compose(subtotal: MoneyLike, discount_amount: MoneyLike, shipping_fee: MoneyLike) -> Money:
    """
    total = max(0, subtotal − discount + shipping).

    Discount comes off before shipping is added; shipping is never discounted.
    Full precision. Round with display() only when rendering.
    """
    total = to_money(subtotal) - to_money(discount_amount) + to_money(shipping_fee)
    return total if total > ZERO else ZERO


@dataclass(frozen=True, slots=True)
class OrderTotals:
    """
    The composed money tuple persisted with an order.

    Note: Use OrderTotals.build() so total is always composed, never supplied.
    """

    subtotal: Money
    discount_amount: Money
    shipping_fee: Money
    total: Money

    @classmethod
    def build(
        cls,
        subtotal: MoneyLike,
        discount_amount: MoneyLike,
        shipping_fee: MoneyLike,
    ) -> OrderTotals:
        return cls(
            subtotal=to_money(subtotal),
            discount_amount=to_money(discount_amount),
            shipping_fee=to_money(shipping_fee),
            total=compose(subtotal, discount_amount, shipping_fee),
        )


__all__ = ("compose", "OrderTotals")
