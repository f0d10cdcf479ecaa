"""
Checkout types — requests, quotes, errors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from storefront._types import Money, MoneyLike
from storefront.money import PricedItem
from storefront.shipping import ShippingTable, DEFAULT_TABLE
from storefront.discount import DiscountCode, DiscountRejected, DiscountResult
from storefront.order import OrderTotals, ShippingAddress


# ═══════════════════════════════════════════════════════════════════════════════
# Requests
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class QuoteRequest:
    items: tuple[PricedItem, ...]
    region: str | None = None
    discount_code: str | None = None


@dataclass(frozen=True, slots=True)
class PlaceOrderRequest:
    """
    A checkout submission.

    Note: client_total is advisory. It is compared and logged, never persisted.
    """

    user_id: str
    items: tuple[PricedItem, ...]
    shipping_address: ShippingAddress
    discount_code: str | None = None
    payment_method: str = "cod"
    client_total: MoneyLike | None = None


@dataclass(frozen=True, slots=True)
class QuoteInput:
    """Everything the pricing graph reads. Injected once per run."""

    items: tuple[PricedItem, ...]
    region: str | None
    code_text: str | None
    code: DiscountCode | None
    now: datetime
    table: ShippingTable = field(default=DEFAULT_TABLE)


# ═══════════════════════════════════════════════════════════════════════════════
# Quote
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Quote:
    """
    A priced cart.

    discount is None when no code was given. A given code always yields
    Ok(applied) or Error(rejected), never a silent zero.
    """

    items: tuple[PricedItem, ...]
    region: str | None
    subtotal: Money
    discount: DiscountResult | None
    discount_amount: Money
    shipping_fee: Money
    total: Money
    item_count: int

    @property
    def totals(self) -> OrderTotals:
        return OrderTotals(
            subtotal=self.subtotal,
            discount_amount=self.discount_amount,
            shipping_fee=self.shipping_fee,
            total=self.total,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Errors
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class CheckoutError:
    code: str
    message: str
    rejection: DiscountRejected | None = None


class CheckoutErrors:
    @staticmethod
    def empty_cart() -> CheckoutError:
        return CheckoutError("EMPTY_CART", "Cart is empty")

    @staticmethod
    def discount_rejected(rejection: DiscountRejected) -> CheckoutError:
        return CheckoutError("DISCOUNT_REJECTED", rejection.message, rejection)

    @staticmethod
    def storage(msg: str) -> CheckoutError:
        return CheckoutError("STORAGE_ERROR", msg)

    @staticmethod
    def pricing(msg: str) -> CheckoutError:
        return CheckoutError("PRICING_ERROR", msg)

    @staticmethod
    def not_found(msg: str) -> CheckoutError:
        return CheckoutError("NOT_FOUND", msg)

    @staticmethod
    def invalid_status(msg: str) -> CheckoutError:
        return CheckoutError("INVALID_STATUS", msg)

    @staticmethod
    def conflict(msg: str) -> CheckoutError:
        return CheckoutError("CONFLICT", msg)

    @staticmethod
    def unknown_item(msg: str) -> CheckoutError:
        return CheckoutError("UNKNOWN_ITEM", msg)


__all__ = (
    "QuoteRequest",
    "PlaceOrderRequest",
    "QuoteInput",
    "Quote",
    "CheckoutError",
    "CheckoutErrors",
)
