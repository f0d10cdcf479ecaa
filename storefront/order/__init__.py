"""
Order — total composition, lifecycle, persistence.

    from storefront import order as O

    O.compose(500, 100, 70)              # Decimal("470")
    O.compose(50, 100, 0)                # Decimal("0"), never negative
    totals = O.OrderTotals.build(500, 100, 70)

    match O.transition(order, O.OrderStatus.PROCESSING):
        case Ok(updated): ...
        case Error(e): e.message
"""

from storefront.order._compose import compose, OrderTotals
from storefront.order._types import OrderStatus, ShippingAddress, Order, new_order_id
from storefront.order._status import StatusError, can_transition, transition
from storefront.order._store import OrderStore, MemoryOrderStore
from storefront.order._sqlalchemy import SQLAlchemyOrderStore
from storefront.order._reports import revenue, count_by_status
from storefront.order._codec import item_to_dict, item_from_dict

__all__ = (
    # Composition
    "compose",
    "OrderTotals",
    # Types
    "OrderStatus",
    "ShippingAddress",
    "Order",
    "new_order_id",
    # Lifecycle
    "StatusError",
    "can_transition",
    "transition",
    # Stores
    "OrderStore",
    "MemoryOrderStore",
    "SQLAlchemyOrderStore",
    # Reports
    "revenue",
    "count_by_status",
    # Codec
    "item_to_dict",
    "item_from_dict",
)
