"""
Discount evaluation — pure, repeatable, never mutates the code.

Redemption (the current_uses increment) lives in the store, not here.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from storefront._types import Money, MoneyLike, Ok, Error, ZERO, as_utc, display, to_money
from storefront.money import PricedItem
from storefront.cart import item_count
from storefront.discount._types import (
    DiscountCode,
    DiscountType,
    DiscountApplied,
    DiscountRejected,
    DiscountResult,
    RejectionReason,
)
from storefront.discount._buy_x_get_x import free_unit_prices

HUNDRED = to_money(100)


# ═══════════════════════════════════════════════════════════════════════════════
# Rejections
# ═══════════════════════════════════════════════════════════════════════════════


def reject(code: str, reason: RejectionReason, message: str) -> DiscountResult:
    return Error(DiscountRejected(code=code, reason=reason, message=message))


def not_found(code: str) -> DiscountResult:
    return reject(code, RejectionReason.NOT_FOUND, "Invalid discount code")


def _eligibility(code: DiscountCode, subtotal: Money, now: datetime) -> DiscountRejected | None:
    """First failing check wins."""
    if not code.is_active:
        return DiscountRejected(code.code, RejectionReason.INACTIVE, "Discount code is not active")
    if code.expires_at is not None and as_utc(now) >= as_utc(code.expires_at):
        return DiscountRejected(code.code, RejectionReason.EXPIRED, "Discount code has expired")
    if code.max_uses is not None and code.current_uses >= code.max_uses:
        return DiscountRejected(
            code.code, RejectionReason.EXHAUSTED, "Discount code usage limit reached"
        )
    if code.min_order_amount is not None and subtotal < code.min_order_amount:
        return DiscountRejected(
            code.code,
            RejectionReason.BELOW_MINIMUM,
            f"Minimum order amount of {display(code.min_order_amount)} EGP required",
        )
    return None


# ═══════════════════════════════════════════════════════════════════════════════
# Amount
# ═══════════════════════════════════════════════════════════════════════════════


def _clamp(amount: Money, subtotal: Money) -> Money:
    return min(max(amount, ZERO), max(subtotal, ZERO))


def discount_amount(
    code: DiscountCode,
    subtotal: Money,
    items: Sequence[PricedItem] = (),
) -> Money:
    """Amount for an eligible code, in [0, subtotal]. Eligibility is not checked."""
    match code.type:
        case DiscountType.PERCENTAGE:
            return _clamp(subtotal * code.value / HUNDRED, subtotal)
        case DiscountType.FIXED:
            return _clamp(code.value, subtotal)
        case DiscountType.BUY_X_GET_X:
            assert code.buy_x is not None and code.get_x is not None
            free = free_unit_prices(items, code.buy_x, code.get_x)
            return _clamp(sum(free, ZERO), subtotal)


# ═══════════════════════════════════════════════════════════════════════════════
# Evaluate
# ═══════════════════════════════════════════════════════════════════════════════


def evaluate(
    code: DiscountCode,
    subtotal: MoneyLike,
    now: datetime,
    items: Sequence[PricedItem] = (),
) -> DiscountResult:
    """
    Decide whether code applies to a cart and by how much.

    Checks, first failure wins:
        inactive → expired → exhausted → belowMinimum
        → notEnoughItems (buyXgetX with fewer than buy_x units)

    Example:
        match evaluate(code, Decimal(500), utcnow()):
            case Ok(applied):
                applied.amount
            case Error(rejected):
                rejected.reason, rejected.message

    Note: items only matter for buyXgetX. Pass the same lines the
    subtotal was computed from.
    """
    amount_basis = to_money(subtotal)

    if (rejection := _eligibility(code, amount_basis, now)) is not None:
        return Error(rejection)

    if code.type is DiscountType.BUY_X_GET_X:
        assert code.buy_x is not None
        units = item_count(items)
        if units < code.buy_x:
            return reject(
                code.code,
                RejectionReason.NOT_ENOUGH_ITEMS,
                f"Add at least {code.buy_x} items to use this code",
            )

    return Ok(
        DiscountApplied(
            code=code.code,
            type=code.type,
            amount=discount_amount(code, amount_basis, items),
        )
    )


__all__ = ("evaluate", "discount_amount", "reject", "not_found")
