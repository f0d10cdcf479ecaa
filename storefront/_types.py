"""
Core types for storefront.

Re-exports from kungfu + money helpers shared by every pricing module.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from datetime import datetime, timezone

# Re-export from kungfu
from kungfu import Result, Ok, Error

# ═══════════════════════════════════════════════════════════════════════════════
# Money
# ═══════════════════════════════════════════════════════════════════════════════

type Money = Decimal
"""A plain decimal amount in the store currency. Never a float."""

type MoneyLike = Decimal | int | float | str

CURRENCY = "EGP"
ZERO = Decimal("0")
CENT = Decimal("0.01")


def to_money(value: MoneyLike) -> Money:
    """
    Coerce a catalog or client value into a Decimal.

    Note: floats go through str() so 0.1 stays 0.1, not its binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def optional_money(value: MoneyLike | None) -> Money | None:
    return None if value is None else to_money(value)


def display(amount: Money) -> Money:
    """Round to cents for display. Internal math never calls this."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(amount: Money, currency: str = CURRENCY) -> str:
    return f"{display(amount)} {currency}"


# ═══════════════════════════════════════════════════════════════════════════════
# Store Error
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class StoreError:
    """Storage operation error."""

    message: str
    cause: Exception | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# Time
# ═══════════════════════════════════════════════════════════════════════════════


def as_utc(moment: datetime) -> datetime:
    """Naive datetimes are treated as UTC so they compare with aware ones."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    # Re-exports from kungfu
    "Result",
    "Ok",
    "Error",
    # Money
    "Money",
    "MoneyLike",
    "CURRENCY",
    "ZERO",
    "CENT",
    "to_money",
    "optional_money",
    "display",
    "format_money",
    # Errors
    "StoreError",
    # Time
    "as_utc",
    "utcnow",
)
