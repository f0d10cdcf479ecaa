"""
Checkout service — quotes, code validation, order placement, admin operations.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from combinators import lift as L

from storefront._graph import compose
from storefront._types import Result, Ok, Error, StoreError, display, to_money, utcnow
from storefront.money import PricedItem
from storefront import discount as D
from storefront import order as O
from storefront import catalog as P
from storefront.config import PricingPolicy
from storefront.checkout._types import (
    QuoteRequest,
    PlaceOrderRequest,
    QuoteInput,
    Quote,
    CheckoutError,
    CheckoutErrors,
)
from storefront.checkout._nodes import QuoteNode

logger = logging.getLogger(__name__)


class CheckoutService:
    """
    Server-side pricing authority.

    Example:
        service = CheckoutService(MemoryDiscountStore(), MemoryOrderStore())

        match await service.place_order(request):
            case Ok(order):
                order.totals.total
            case Error(e):
                e.code, e.message, e.rejection

    Note: Client totals are never trusted. place_order() recomputes everything
    and consumes a discount use only through DiscountStore.redeem(). With a
    catalog, client line prices are not trusted either: every line is
    re-snapshotted from it before pricing.
    """

    def __init__(
        self,
        discounts: D.DiscountStore,
        orders: O.OrderStore,
        policy: PricingPolicy | None = None,
        clock: Callable[[], datetime] = utcnow,
        *,
        catalog: P.Catalog | None = None,
    ) -> None:
        self._discounts = discounts
        self._orders = orders
        self._policy = policy or PricingPolicy()
        self._clock = clock
        self._catalog = catalog
        if catalog is None:
            logger.warning("No catalog configured, line prices are taken from requests")

    @property
    def policy(self) -> PricingPolicy:
        return self._policy

    # ═══════════════════════════════════════════════════════════════════════════
    # Pricing
    # ═══════════════════════════════════════════════════════════════════════════

    async def _reprice(
        self, items: tuple[PricedItem, ...]
    ) -> Result[tuple[PricedItem, ...], CheckoutError]:
        if self._catalog is None:
            return Ok(items)
        match await P.reprice(self._catalog, items):
            case Ok(priced):
                return Ok(priced)
            case Error(P.CatalogError(kind=P.CatalogErrorKind.INVALID_PRICE) as e):
                logger.error("Catalog price invalid for %s: %s", e.product_id, e.message)
                return Error(CheckoutErrors.pricing(e.message))
            case Error(P.CatalogError() as e):
                logger.info("Cart line rejected, %s: %s", e.product_id, e.kind.name)
                return Error(CheckoutErrors.unknown_item(e.message))
            case Error(StoreError() as e):
                logger.error("Catalog lookup failed: %s", e.message)
                return Error(CheckoutErrors.storage(e.message))

    async def quote(self, request: QuoteRequest) -> Result[Quote, CheckoutError]:
        """
        Price a cart. Evaluates a code without consuming it.

        Lines are re-snapshotted from the catalog first, if one is configured.
        """
        match await self._reprice(tuple(request.items)):
            case Ok(items):
                return await self._price(request, items)
            case Error(e):
                return Error(e)

    async def _price(
        self, request: QuoteRequest, items: tuple[PricedItem, ...]
    ) -> Result[Quote, CheckoutError]:
        code_text = (request.discount_code or "").strip() or None
        record: D.DiscountCode | None = None

        if code_text is not None:
            match await self._discounts.get(code_text):
                case Ok(found):
                    record = found
                case Error(e):
                    logger.error("Discount lookup failed for %s: %s", code_text, e.message)
                    return Error(CheckoutErrors.storage(e.message))

        inputs = QuoteInput(
            items=items,
            region=request.region,
            code_text=code_text,
            code=record,
            now=self._clock(),
            table=self._policy.shipping,
        )

        result = await L.catching_async(
            lambda: compose(QuoteNode, inputs),
            on_error=lambda e: CheckoutErrors.pricing(str(e)),
        )

        match result:
            case Ok(node):
                quote = node.data
                match quote.discount:
                    case Error(rejected):
                        logger.info("Code %s rejected: %s", rejected.code, rejected.reason.value)
                    case _:
                        pass
                return Ok(quote)
            case Error(e):
                logger.error("Pricing failed: %s", e.message)
                return Error(e)

    async def validate_code(
        self,
        code: str,
        request: QuoteRequest,
    ) -> Result[D.DiscountApplied, CheckoutError]:
        """The storefront's "apply code" action. Never consumes a use."""
        match await self.quote(QuoteRequest(request.items, request.region, code)):
            case Ok(Quote(discount=Ok(applied))):
                return Ok(applied)
            case Ok(Quote(discount=Error(rejected))):
                return Error(CheckoutErrors.discount_rejected(rejected))
            case Ok(_):
                missing = D.DiscountRejected("", D.RejectionReason.NOT_FOUND, "Enter a discount code")
                return Error(CheckoutErrors.discount_rejected(missing))
            case Error(e):
                return Error(e)

    # ═══════════════════════════════════════════════════════════════════════════
    # Orders
    # ═══════════════════════════════════════════════════════════════════════════

    async def place_order(self, request: PlaceOrderRequest) -> Result[O.Order, CheckoutError]:
        """
        Reprice, recompute, redeem, persist.

        The code is re-evaluated inside DiscountStore.redeem() against the
        server-computed subtotal. A rejection there fails the checkout.
        """
        if not request.items:
            return Error(CheckoutErrors.empty_cart())

        region = request.shipping_address.governorate
        match await self.quote(QuoteRequest(tuple(request.items), region)):
            case Ok(base):
                return await self._settle(request, base)
            case Error(e):
                return Error(e)

    async def _settle(
        self, request: PlaceOrderRequest, base: Quote
    ) -> Result[O.Order, CheckoutError]:
        now = self._clock()
        code = D.canonical_code(request.discount_code or "") or None

        discount_amount = to_money(0)
        if code is not None:
            match await self._discounts.redeem(
                code, lambda record: D.evaluate(record, base.subtotal, now, base.items)
            ):
                case Ok(applied):
                    discount_amount = applied.amount
                case Error(D.DiscountRejected() as rejected):
                    logger.info("Checkout blocked, code %s: %s", code, rejected.reason.value)
                    return Error(CheckoutErrors.discount_rejected(rejected))
                case Error(StoreError() as e):
                    logger.error("Redemption of %s failed: %s", code, e.message)
                    return Error(CheckoutErrors.storage(e.message))

        totals = O.OrderTotals.build(base.subtotal, discount_amount, base.shipping_fee)

        if request.client_total is not None:
            claimed = to_money(request.client_total)
            if display(claimed) != display(totals.total):
                logger.warning(
                    "Client total %s differs from server total %s, using server total",
                    display(claimed),
                    display(totals.total),
                )

        order = O.Order(
            user_id=request.user_id,
            items=base.items,
            totals=totals,
            shipping_address=request.shipping_address,
            discount_code=code,
            payment_method=request.payment_method,
            created_at=now,
            updated_at=now,
        )

        match await self._orders.save(order):
            case Ok(saved):
                logger.info(
                    "Order %s placed: subtotal=%s discount=%s shipping=%s total=%s",
                    saved.id,
                    display(totals.subtotal),
                    display(totals.discount_amount),
                    display(totals.shipping_fee),
                    display(totals.total),
                )
                return Ok(saved)
            case Error(e):
                if code is not None:
                    # current_uses is never decremented
                    logger.error("Order not saved after redeeming %s: %s", code, e.message)
                else:
                    logger.error("Order not saved: %s", e.message)
                return Error(CheckoutErrors.storage(e.message))

    async def get_order(self, order_id: str) -> Result[O.Order, CheckoutError]:
        match await self._orders.get(order_id):
            case Ok(None):
                return Error(CheckoutErrors.not_found(f"Order not found: {order_id}"))
            case Ok(order):
                return Ok(order)
            case Error(e):
                return Error(CheckoutErrors.storage(e.message))

    async def orders_for_user(self, user_id: str) -> Result[list[O.Order], CheckoutError]:
        match await self._orders.list_for_user(user_id):
            case Ok(orders):
                return Ok(orders)
            case Error(e):
                return Error(CheckoutErrors.storage(e.message))

    async def set_order_status(
        self, order_id: str, status: O.OrderStatus
    ) -> Result[O.Order, CheckoutError]:
        match await self._orders.set_status(order_id, status, self._clock()):
            case Ok(None):
                return Error(CheckoutErrors.not_found(f"Order not found: {order_id}"))
            case Ok(order):
                return Ok(order)
            case Error(O.StatusError() as e):
                return Error(CheckoutErrors.invalid_status(e.message))
            case Error(e):
                return Error(CheckoutErrors.storage(e.message))

    # ═══════════════════════════════════════════════════════════════════════════
    # Discount Administration
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_codes(self) -> Result[list[D.DiscountCode], CheckoutError]:
        match await self._discounts.list_all():
            case Ok(codes):
                return Ok(codes)
            case Error(e):
                return Error(CheckoutErrors.storage(e.message))

    async def create_code(self, code: D.DiscountCode) -> Result[D.DiscountCode, CheckoutError]:
        """Create a new code. An existing code is a conflict and stays untouched."""
        match await self._discounts.create(code):
            case Ok(None):
                return Error(CheckoutErrors.conflict(f"Discount code already exists: {code.code}"))
            case Ok(saved):
                logger.info("Discount code %s saved (%s)", saved.code, saved.type.value)
                return Ok(saved)
            case Error(e):
                return Error(CheckoutErrors.storage(e.message))

    async def set_code_active(
        self, code: str, is_active: bool
    ) -> Result[D.DiscountCode, CheckoutError]:
        match await self._discounts.set_active(code, is_active):
            case Ok(None):
                return Error(CheckoutErrors.not_found(f"Discount code not found: {code}"))
            case Ok(updated):
                return Ok(updated)
            case Error(e):
                return Error(CheckoutErrors.storage(e.message))

    async def delete_code(self, code: str) -> Result[None, CheckoutError]:
        match await self._discounts.delete(code):
            case Ok(True):
                logger.info("Discount code %s deleted", D.canonical_code(code))
                return Ok(None)
            case Ok(_):
                return Error(CheckoutErrors.not_found(f"Discount code not found: {code}"))
            case Error(e):
                return Error(CheckoutErrors.storage(e.message))


__all__ = ("CheckoutService",)
