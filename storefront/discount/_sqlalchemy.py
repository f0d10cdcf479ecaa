"""
SQLAlchemy discount store.

Usage:
    session_factory, engine = await create_database(url)
    store = SQLAlchemyDiscountStore(session_factory)

    match await store.redeem("SAVE10", lambda code: D.evaluate(code, subtotal, now, items)):
        case Ok(applied): ...
        case Error(DiscountRejected() as rejected): ...
        case Error(StoreError() as e): ...
"""

from __future__ import annotations

import logging
from typing import Any, cast

from sqlalchemy import select, update, or_
from sqlalchemy.engine import CursorResult
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront._types import Result, Ok, Error, StoreError
from storefront.db import DiscountCodeTable, db_now, to_db_time, from_db_time
from storefront.discount._types import DiscountCode, DiscountType, RejectionReason, canonical_code
from storefront.discount._evaluate import not_found, reject
from storefront.discount._store import Evaluator, Redemption

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# Row Mapping
# ═══════════════════════════════════════════════════════════════════════════════


def to_domain(row: DiscountCodeTable, *, uses_offset: int = 0) -> DiscountCode:
    created_at = from_db_time(row.created_at)
    assert created_at is not None
    return DiscountCode(
        code=row.code,
        type=DiscountType(row.type),
        value=row.value,
        buy_x=row.buy_x,
        get_x=row.get_x,
        min_order_amount=row.min_order_amount,
        max_uses=row.max_uses,
        current_uses=row.current_uses - uses_offset,
        is_active=row.is_active,
        expires_at=from_db_time(row.expires_at),
        created_at=created_at,
    )


def to_row(code: DiscountCode) -> DiscountCodeTable:
    return DiscountCodeTable(
        code=code.code,
        type=code.type.value,
        value=code.value,
        buy_x=code.buy_x,
        get_x=code.get_x,
        min_order_amount=code.min_order_amount,
        max_uses=code.max_uses,
        current_uses=code.current_uses,
        is_active=code.is_active,
        expires_at=to_db_time(code.expires_at),
        created_at=to_db_time(code.created_at),
        updated_at=db_now(),
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Store
# ═══════════════════════════════════════════════════════════════════════════════


class SQLAlchemyDiscountStore:
    """
    Discount codes in any SQLAlchemy async database.

    Note: redeem() increments with a guarded UPDATE before evaluating, so
    the write lock (SQLite) or row lock (Postgres) serializes concurrent
    checkouts of one code. A rejected evaluation rolls the increment back.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def _load(self, session: AsyncSession, key: str) -> DiscountCodeTable | None:
        result = await session.execute(
            select(DiscountCodeTable).where(DiscountCodeTable.code == key)
        )
        return result.scalar_one_or_none()

    async def get(self, code: str) -> Result[DiscountCode | None, StoreError]:
        try:
            async with self._session_factory() as session:
                row = await self._load(session, canonical_code(code))
                return Ok(None if row is None else to_domain(row))
        except Exception as e:
            return Error(StoreError(f"Failed to get discount code: {e}", e))

    async def list_all(self) -> Result[list[DiscountCode], StoreError]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(DiscountCodeTable).order_by(DiscountCodeTable.created_at.desc())
                )
                return Ok([to_domain(row) for row in result.scalars()])
        except Exception as e:
            return Error(StoreError(f"Failed to list discount codes: {e}", e))

    async def create(self, code: DiscountCode) -> Result[DiscountCode | None, StoreError]:
        try:
            async with self._session_factory() as session:
                if await self._load(session, code.code) is not None:
                    return Ok(None)
                session.add(to_row(code))
                try:
                    await session.commit()
                except IntegrityError:
                    # lost the race to a concurrent create
                    await session.rollback()
                    return Ok(None)
                return Ok(code)
        except Exception as e:
            return Error(StoreError(f"Failed to create discount code: {e}", e))

    async def set_active(
        self, code: str, is_active: bool
    ) -> Result[DiscountCode | None, StoreError]:
        try:
            async with self._session_factory() as session:
                row = await self._load(session, canonical_code(code))
                if row is None:
                    return Ok(None)
                row.is_active = is_active
                row.updated_at = db_now()
                await session.commit()
                return Ok(to_domain(row))
        except Exception as e:
            return Error(StoreError(f"Failed to toggle discount code: {e}", e))

    async def delete(self, code: str) -> Result[bool, StoreError]:
        try:
            async with self._session_factory() as session:
                row = await self._load(session, canonical_code(code))
                if row is None:
                    return Ok(False)
                await session.delete(row)
                await session.commit()
                return Ok(True)
        except Exception as e:
            return Error(StoreError(f"Failed to delete discount code: {e}", e))

    async def redeem(self, code: str, evaluate: Evaluator) -> Redemption:
        key = canonical_code(code)
        try:
            async with self._session_factory() as session:
                stmt = (
                    update(DiscountCodeTable)
                    .where(DiscountCodeTable.code == key)
                    .where(
                        or_(
                            DiscountCodeTable.max_uses.is_(None),
                            DiscountCodeTable.current_uses < DiscountCodeTable.max_uses,
                        )
                    )
                    .values(
                        current_uses=DiscountCodeTable.current_uses + 1,
                        updated_at=db_now(),
                    )
                    .execution_options(synchronize_session=False)
                )
                cursor = cast(CursorResult[Any], await session.execute(stmt))
                claimed = cursor.rowcount > 0

                row = await self._load(session, key)
                if row is None:
                    await session.rollback()
                    return not_found(key)

                # Evaluate against the record as it was before this claim
                record = to_domain(row, uses_offset=1 if claimed else 0)
                outcome = evaluate(record)

                match outcome:
                    case Ok(applied) if claimed:
                        await session.commit()
                        logger.info(
                            "Redeemed %s (%d/%s)",
                            key,
                            record.current_uses + 1,
                            record.max_uses if record.max_uses is not None else "∞",
                        )
                        return Ok(applied)
                    case Ok(_):
                        await session.rollback()
                        return reject(
                            key, RejectionReason.EXHAUSTED, "Discount code usage limit reached"
                        )
                    case Error(rejected):
                        await session.rollback()
                        return Error(rejected)
        except Exception as e:
            return Error(StoreError(f"Failed to redeem discount code: {e}", e))


__all__ = ("SQLAlchemyDiscountStore", "to_domain", "to_row")
