"""
Discount — code evaluation, redemption, offers.

    from storefront import discount as D

    code = D.DiscountCode("save20", D.DiscountType.PERCENTAGE, value=Decimal(20))

    match D.evaluate(code, Decimal(500), now):
        case Ok(applied):
            applied.amount              # Decimal("100")
        case Error(rejected):
            rejected.reason             # D.RejectionReason.EXPIRED, ...

Evaluation is pure: call it as often as you like. Uses are consumed only by
DiscountStore.redeem(), which re-runs evaluate() inside its atomic boundary.
"""

from storefront.discount._types import (
    DiscountType,
    RejectionReason,
    DiscountCode,
    DiscountApplied,
    DiscountRejected,
    DiscountResult,
    canonical_code,
)
from storefront.discount._evaluate import evaluate, discount_amount, reject, not_found
from storefront.discount._buy_x_get_x import unit_prices, free_unit_count, free_unit_prices
from storefront.discount._store import DiscountStore, MemoryDiscountStore, Evaluator, Redemption
from storefront.discount._sqlalchemy import SQLAlchemyDiscountStore
from storefront.discount._offers import Offer, active_offers

__all__ = (
    # Types
    "DiscountType",
    "RejectionReason",
    "DiscountCode",
    "DiscountApplied",
    "DiscountRejected",
    "DiscountResult",
    "canonical_code",
    # Evaluation
    "evaluate",
    "discount_amount",
    "reject",
    "not_found",
    # Buy X get X
    "unit_prices",
    "free_unit_count",
    "free_unit_prices",
    # Stores
    "DiscountStore",
    "MemoryDiscountStore",
    "SQLAlchemyDiscountStore",
    "Evaluator",
    "Redemption",
    # Offers
    "Offer",
    "active_offers",
)
