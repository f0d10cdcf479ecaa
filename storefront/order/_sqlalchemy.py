"""
SQLAlchemy order store.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront._types import Result, Ok, Error, StoreError
from storefront.db import OrderTable, to_db_time, from_db_time
from storefront.order._compose import OrderTotals
from storefront.order._types import Order, OrderStatus
from storefront.order._status import StatusError, transition
from storefront.order._codec import (
    item_to_dict,
    item_from_dict,
    address_to_dict,
    address_from_dict,
)

logger = logging.getLogger(__name__)


def to_domain(row: OrderTable) -> Order:
    return Order(
        id=row.id,
        user_id=row.user_id,
        items=tuple(item_from_dict(d) for d in json.loads(row.items)),
        totals=OrderTotals(
            subtotal=row.subtotal,
            discount_amount=row.discount_amount,
            shipping_fee=row.shipping_fee,
            total=row.total,
        ),
        shipping_address=address_from_dict(json.loads(row.shipping_address)),
        discount_code=row.discount_code,
        payment_method=row.payment_method,
        status=OrderStatus(row.status),
        created_at=from_db_time(row.created_at) or row.created_at,
        updated_at=from_db_time(row.updated_at) or row.updated_at,
    )


def to_row(order: Order) -> OrderTable:
    return OrderTable(
        id=order.id,
        user_id=order.user_id,
        items=json.dumps([item_to_dict(i) for i in order.items]),
        shipping_address=json.dumps(address_to_dict(order.shipping_address)),
        subtotal=order.totals.subtotal,
        discount_amount=order.totals.discount_amount,
        shipping_fee=order.totals.shipping_fee,
        total=order.totals.total,
        discount_code=order.discount_code,
        payment_method=order.payment_method,
        status=order.status.value,
        created_at=to_db_time(order.created_at),
        updated_at=to_db_time(order.updated_at),
    )


class SQLAlchemyOrderStore:
    """Orders in any SQLAlchemy async database."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def save(self, order: Order) -> Result[Order, StoreError]:
        try:
            async with self._session_factory() as session:
                session.add(to_row(order))
                await session.commit()
                return Ok(order)
        except Exception as e:
            return Error(StoreError(f"Failed to save order {order.id}: {e}", e))

    async def get(self, order_id: str) -> Result[Order | None, StoreError]:
        try:
            async with self._session_factory() as session:
                row = await session.get(OrderTable, order_id)
                return Ok(None if row is None else to_domain(row))
        except Exception as e:
            return Error(StoreError(f"Failed to get order {order_id}: {e}", e))

    async def list_for_user(self, user_id: str) -> Result[list[Order], StoreError]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(OrderTable)
                    .where(OrderTable.user_id == user_id)
                    .order_by(OrderTable.created_at.desc())
                )
                return Ok([to_domain(row) for row in result.scalars()])
        except Exception as e:
            return Error(StoreError(f"Failed to list orders for {user_id}: {e}", e))

    async def list_all(self) -> Result[list[Order], StoreError]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(OrderTable).order_by(OrderTable.created_at.desc())
                )
                return Ok([to_domain(row) for row in result.scalars()])
        except Exception as e:
            return Error(StoreError(f"Failed to list orders: {e}", e))

    async def set_status(
        self,
        order_id: str,
        status: OrderStatus,
        now: datetime | None = None,
    ) -> Result[Order | None, StatusError | StoreError]:
        try:
            async with self._session_factory() as session:
                row = await session.get(OrderTable, order_id, with_for_update=True)
                if row is None:
                    return Ok(None)
                current = to_domain(row)
                match transition(current, status, now):
                    case Ok(updated):
                        row.status = updated.status.value
                        row.updated_at = to_db_time(updated.updated_at) or row.updated_at
                        await session.commit()
                        logger.info(
                            "Order %s: %s → %s", order_id, current.status.value, status.value
                        )
                        return Ok(updated)
                    case Error(e):
                        return Error(e)
        except Exception as e:
            return Error(StoreError(f"Failed to update order {order_id}: {e}", e))


__all__ = ("SQLAlchemyOrderStore",)
