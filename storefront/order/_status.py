"""
Order status transitions.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime

from storefront._types import Result, Ok, Error, utcnow
from storefront.order._types import Order, OrderStatus


_FORWARD: dict[OrderStatus, OrderStatus] = {
    OrderStatus.PENDING: OrderStatus.PROCESSING,
    OrderStatus.PROCESSING: OrderStatus.SHIPPED,
    OrderStatus.SHIPPED: OrderStatus.DELIVERED,
}


@dataclass(frozen=True, slots=True)
class StatusError:
    """Rejected status change."""

    order_id: str
    current: OrderStatus
    requested: OrderStatus
    message: str


def can_transition(current: OrderStatus, requested: OrderStatus) -> bool:
    if requested is OrderStatus.CANCELLED:
        return current is not OrderStatus.CANCELLED
    return _FORWARD.get(current) is requested


def transition(
    order: Order,
    status: OrderStatus,
    now: datetime | None = None,
) -> Result[Order, StatusError]:
    """
    Move an order one step along its lifecycle.

    Note: Only status and updated_at change. Totals and items are frozen.
    """
    if not can_transition(order.status, status):
        return Error(
            StatusError(
                order_id=order.id,
                current=order.status,
                requested=status,
                message=f"Cannot move order from {order.status.value} to {status.value}",
            )
        )
    return Ok(dataclasses.replace(order, status=status, updated_at=now or utcnow()))


__all__ = ("StatusError", "can_transition", "transition")
