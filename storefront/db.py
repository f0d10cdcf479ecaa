"""
Database layer — SQLAlchemy tables for discount codes and orders.

Money columns hold exact decimal strings. Timestamps are stored as naive UTC.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from sqlalchemy import Boolean, DateTime, Integer, String, Text
from sqlalchemy.engine import Dialect
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from storefront._types import as_utc, utcnow


# ═══════════════════════════════════════════════════════════════════════════════
# Column Types
# ═══════════════════════════════════════════════════════════════════════════════


class MoneyType(TypeDecorator[Decimal]):
    """Decimal stored as its string form. No float round trip."""

    impl = String(40)
    cache_ok = True

    def process_bind_param(self, value: Decimal | None, dialect: Dialect) -> str | None:
        return None if value is None else str(value)

    def process_result_value(self, value: Any | None, dialect: Dialect) -> Decimal | None:
        return None if value is None else Decimal(value)


def db_now() -> datetime:
    return utcnow().replace(tzinfo=None)


def to_db_time(moment: datetime | None) -> datetime | None:
    if moment is None:
        return None
    return as_utc(moment).replace(tzinfo=None)


def from_db_time(moment: datetime | None) -> datetime | None:
    if moment is None:
        return None
    return moment.replace(tzinfo=timezone.utc)


# ═══════════════════════════════════════════════════════════════════════════════
# Base
# ═══════════════════════════════════════════════════════════════════════════════


class Base(DeclarativeBase):
    pass


# ═══════════════════════════════════════════════════════════════════════════════
# Discount Codes
# ═══════════════════════════════════════════════════════════════════════════════


class DiscountCodeTable(Base):
    __tablename__ = "discount_codes"

    code: Mapped[str] = mapped_column(String(64), primary_key=True)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    value: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    buy_x: Mapped[int | None] = mapped_column(Integer, nullable=True)
    get_x: Mapped[int | None] = mapped_column(Integer, nullable=True)
    min_order_amount: Mapped[Decimal | None] = mapped_column(MoneyType, nullable=True)
    max_uses: Mapped[int | None] = mapped_column(Integer, nullable=True)
    current_uses: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)


# ═══════════════════════════════════════════════════════════════════════════════
# Orders
# ═══════════════════════════════════════════════════════════════════════════════


class OrderTable(Base):
    """
    Orders with price-frozen item snapshots.

    Note: items and shipping_address are JSON text. Totals are never updated.
    """

    __tablename__ = "orders"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    items: Mapped[str] = mapped_column(Text, nullable=False)
    shipping_address: Mapped[str] = mapped_column(Text, nullable=False)

    subtotal: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    discount_amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    shipping_fee: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    total: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)

    discount_code: Mapped[str | None] = mapped_column(String(64), nullable=True)
    payment_method: Mapped[str] = mapped_column(String(20), nullable=False, default="cod")
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)


# ═══════════════════════════════════════════════════════════════════════════════
# Database Setup
# ═══════════════════════════════════════════════════════════════════════════════


async def create_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def create_database(
    url: str = "sqlite+aiosqlite:///:memory:",
) -> tuple[async_sessionmaker[AsyncSession], AsyncEngine]:
    """Create tables and return (session_factory, engine)."""
    engine = create_async_engine(url, echo=False)
    await create_tables(engine)
    return async_sessionmaker(engine, expire_on_commit=False), engine


__all__ = (
    "MoneyType",
    "Base",
    "DiscountCodeTable",
    "OrderTable",
    "create_tables",
    "create_database",
    "db_now",
    "to_db_time",
    "from_db_time",
)
