"""
Order types — the settled, price-frozen result of a checkout.
"""

from __future__ import annotations

import secrets
import time
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from storefront._types import Money, utcnow
from storefront.money import PricedItem
from storefront.order._compose import OrderTotals


# ═══════════════════════════════════════════════════════════════════════════════
# Status — Staff-managed Lifecycle
# ═══════════════════════════════════════════════════════════════════════════════


class OrderStatus(Enum):
    """
    Lifecycle:
        PENDING → PROCESSING → SHIPPED → DELIVERED
        any (except CANCELLED) → CANCELLED
    """

    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# ═══════════════════════════════════════════════════════════════════════════════
# Shipping Address
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class ShippingAddress:
    name: str
    address: str
    city: str
    governorate: str
    phone: str = ""
    secondary_phone: str = ""
    email: str = ""
    postal_code: str = ""


# ═══════════════════════════════════════════════════════════════════════════════
# Order
# ═══════════════════════════════════════════════════════════════════════════════


def new_order_id() -> str:
    return f"order-{int(time.time() * 1000)}-{secrets.token_hex(5)[:9]}"


@dataclass(frozen=True, slots=True)
class Order:
    """
    A placed order.

    items are snapshots: later catalog price edits never reach them.
    totals are immutable once created; only status and updated_at change.
    """

    user_id: str
    items: tuple[PricedItem, ...]
    totals: OrderTotals
    shipping_address: ShippingAddress
    discount_code: str | None = None
    payment_method: str = "cod"
    status: OrderStatus = OrderStatus.PENDING
    id: str = field(default_factory=new_order_id)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def region(self) -> str:
        return self.shipping_address.governorate

    @property
    def total(self) -> Money:
        return self.totals.total


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "OrderStatus",
    "ShippingAddress",
    "Order",
    "new_order_id",
)
