"""
Order store — typed storage protocol.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Protocol

from storefront._types import Result, Ok, Error, StoreError
from storefront.order._types import Order, OrderStatus
from storefront.order._status import StatusError, transition

logger = logging.getLogger(__name__)


class OrderStore(Protocol):
    """
    Order persistence protocol.

    Note: Orders are written once. set_status() is the only update.
    """

    async def save(self, order: Order) -> Result[Order, StoreError]:
        """Insert a new order. Errors if the id already exists."""
        ...

    async def get(self, order_id: str) -> Result[Order | None, StoreError]:
        """Get an order. Returns Ok(None) if not found."""
        ...

    async def list_for_user(self, user_id: str) -> Result[list[Order], StoreError]:
        """A user's orders, newest first."""
        ...

    async def list_all(self) -> Result[list[Order], StoreError]:
        """Every order, newest first."""
        ...

    async def set_status(
        self,
        order_id: str,
        status: OrderStatus,
        now: datetime | None = None,
    ) -> Result[Order | None, StatusError | StoreError]:
        """
        Apply a lifecycle transition. Returns Ok(None) if not found.

        Illegal transitions return Error(StatusError) and change nothing.
        """
        ...


# ═══════════════════════════════════════════════════════════════════════════════
# Memory Store — For Testing
# ═══════════════════════════════════════════════════════════════════════════════


class MemoryOrderStore:
    """In-memory order store. Single process only."""

    def __init__(self) -> None:
        self._orders: dict[str, Order] = {}
        self._lock = asyncio.Lock()

    async def save(self, order: Order) -> Result[Order, StoreError]:
        async with self._lock:
            if order.id in self._orders:
                return Error(StoreError(f"Order already exists: {order.id}"))
            self._orders[order.id] = order
            return Ok(order)

    async def get(self, order_id: str) -> Result[Order | None, StoreError]:
        async with self._lock:
            return Ok(self._orders.get(order_id))

    async def list_for_user(self, user_id: str) -> Result[list[Order], StoreError]:
        async with self._lock:
            orders = [o for o in self._orders.values() if o.user_id == user_id]
            return Ok(sorted(orders, key=lambda o: o.created_at, reverse=True))

    async def list_all(self) -> Result[list[Order], StoreError]:
        async with self._lock:
            return Ok(sorted(self._orders.values(), key=lambda o: o.created_at, reverse=True))

    async def set_status(
        self,
        order_id: str,
        status: OrderStatus,
        now: datetime | None = None,
    ) -> Result[Order | None, StatusError | StoreError]:
        async with self._lock:
            if (order := self._orders.get(order_id)) is None:
                return Ok(None)
            match transition(order, status, now):
                case Ok(updated):
                    self._orders[order_id] = updated
                    logger.info("Order %s: %s → %s", order_id, order.status.value, status.value)
                    return Ok(updated)
                case Error(e):
                    return Error(e)


__all__ = ("OrderStore", "MemoryOrderStore")
