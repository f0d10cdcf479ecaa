"""
Discount types — code records and evaluation outcomes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from storefront._types import Money, Result, ZERO, optional_money, to_money, utcnow


# ═══════════════════════════════════════════════════════════════════════════════
# Discount Type — Closed Set
# ═══════════════════════════════════════════════════════════════════════════════


class DiscountType(Enum):
    """
    How a code turns a subtotal into a discount amount.

    PERCENTAGE: value is percent points of the subtotal.
    FIXED: value is a currency amount.
    BUY_X_GET_X: for every buy_x units, the cheapest get_x are free. value unused.
    """

    PERCENTAGE = "percentage"
    FIXED = "fixed"
    BUY_X_GET_X = "buyXgetX"


class RejectionReason(Enum):
    """
    Why a code does not apply. Checked in declaration order.
    """

    INACTIVE = "inactive"
    EXPIRED = "expired"
    EXHAUSTED = "exhausted"
    BELOW_MINIMUM = "belowMinimum"
    NOT_FOUND = "notFound"
    NOT_ENOUGH_ITEMS = "notEnoughItems"


# ═══════════════════════════════════════════════════════════════════════════════
# Discount Code — Stored Record
# ═══════════════════════════════════════════════════════════════════════════════


def canonical_code(code: str) -> str:
    """Codes are case-insensitive and stored uppercase."""
    return code.strip().upper()


@dataclass(frozen=True, slots=True)
class DiscountCode:
    """
    A promotional rule created by an administrator.

    Note: code is canonicalized on construction, so DiscountCode("save10", ...)
    and DiscountCode("SAVE10", ...) are the same record.

    Raises ValueError for a buyXgetX code without positive buy_x/get_x,
    or with get_x > buy_x.
    """

    code: str
    type: DiscountType
    value: Money = ZERO
    buy_x: int | None = None
    get_x: int | None = None
    min_order_amount: Money | None = None
    max_uses: int | None = None
    current_uses: int = 0
    is_active: bool = True
    expires_at: datetime | None = None
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        object.__setattr__(self, "code", canonical_code(self.code))
        object.__setattr__(self, "value", to_money(self.value))
        object.__setattr__(self, "min_order_amount", optional_money(self.min_order_amount))
        if not self.code:
            raise ValueError("discount code must not be empty")
        if self.value < ZERO:
            raise ValueError(f"{self.code}: value must be >= 0")
        if self.type is DiscountType.BUY_X_GET_X:
            if not self.buy_x or not self.get_x or self.buy_x < 1 or self.get_x < 1:
                raise ValueError(f"{self.code}: buyXgetX requires positive buy_x and get_x")
            if self.get_x > self.buy_x:
                raise ValueError(f"{self.code}: get_x ({self.get_x}) exceeds buy_x ({self.buy_x})")

    @property
    def uses_left(self) -> int | None:
        if self.max_uses is None:
            return None
        return max(0, self.max_uses - self.current_uses)


# ═══════════════════════════════════════════════════════════════════════════════
# Evaluation Result
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class DiscountApplied:
    """The code applies. amount is in [0, subtotal]."""

    code: str
    type: DiscountType
    amount: Money


@dataclass(frozen=True, slots=True)
class DiscountRejected:
    """
    The code does not apply.

    Note: Never collapse this to a zero discount. Callers surface message.
    """

    code: str
    reason: RejectionReason
    message: str


type DiscountResult = Result[DiscountApplied, DiscountRejected]


# ═══════════════════════════════════════════════════════════════════════════════
# Exports
# ═══════════════════════════════════════════════════════════════════════════════

__all__ = (
    "DiscountType",
    "RejectionReason",
    "DiscountCode",
    "DiscountApplied",
    "DiscountRejected",
    "DiscountResult",
    "canonical_code",
)
