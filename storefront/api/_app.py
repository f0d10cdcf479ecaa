"""
FastAPI application over CheckoutService.

    service = CheckoutService(discounts, orders, policy)
    app = create_app(service)
    # or: uvicorn storefront.main:build_app --factory

Authentication is not handled here. Put it in front of the app.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

import fastapi
from fastapi import HTTPException, status

from storefront._types import Result, Ok, Error
from storefront.checkout import CheckoutService, CheckoutError
from storefront.api._models import (
    QuoteIn,
    QuoteOut,
    ValidateCodeIn,
    ValidateCodeOut,
    PlaceOrderIn,
    OrderOut,
    OrderStatusIn,
    DiscountCodeIn,
    DiscountCodeOut,
    DiscountToggleIn,
)


ERROR_STATUS: dict[str, int] = {
    "EMPTY_CART": status.HTTP_400_BAD_REQUEST,
    "DISCOUNT_REJECTED": status.HTTP_400_BAD_REQUEST,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVALID_STATUS": status.HTTP_409_CONFLICT,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "UNKNOWN_ITEM": status.HTTP_400_BAD_REQUEST,
    "PRICING_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "STORAGE_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_detail(error: CheckoutError) -> dict[str, Any]:
    detail: dict[str, Any] = {"code": error.code, "error": error.message}
    if error.rejection is not None:
        detail["reason"] = error.rejection.reason.value
    return detail


def unwrap[T](result: Result[T, CheckoutError]) -> T:
    match result:
        case Ok(value):
            return value
        case Error(e):
            raise HTTPException(
                status_code=ERROR_STATUS.get(e.code, status.HTTP_500_INTERNAL_SERVER_ERROR),
                detail=error_detail(e),
            )


def create_app(
    service: CheckoutService,
    lifespan: Callable[[fastapi.FastAPI], AbstractAsyncContextManager[None]] | None = None,
) -> fastapi.FastAPI:
    app = fastapi.FastAPI(title="storefront pricing", lifespan=lifespan)

    # ── Pricing ──────────────────────────────────────────────────────────────

    @app.post("/cart/quote")
    async def quote(req: QuoteIn) -> QuoteOut:
        return QuoteOut.from_domain(unwrap(await service.quote(req.to_domain())))

    @app.post("/discount-codes/validate")
    async def validate_code(req: ValidateCodeIn) -> ValidateCodeOut:
        applied = unwrap(await service.validate_code(req.code, req.to_domain()))
        return ValidateCodeOut.from_domain(applied)

    # ── Orders ───────────────────────────────────────────────────────────────

    @app.post("/orders", status_code=status.HTTP_201_CREATED)
    async def place_order(req: PlaceOrderIn) -> OrderOut:
        return OrderOut.from_domain(unwrap(await service.place_order(req.to_domain())))

    @app.get("/orders/{order_id}")
    async def get_order(order_id: str) -> OrderOut:
        return OrderOut.from_domain(unwrap(await service.get_order(order_id)))

    @app.get("/users/{user_id}/orders")
    async def list_orders(user_id: str) -> list[OrderOut]:
        return [OrderOut.from_domain(o) for o in unwrap(await service.orders_for_user(user_id))]

    @app.put("/orders/{order_id}/status")
    async def set_order_status(order_id: str, req: OrderStatusIn) -> OrderOut:
        return OrderOut.from_domain(unwrap(await service.set_order_status(order_id, req.status)))

    # ── Discount codes (admin) ───────────────────────────────────────────────

    @app.get("/discount-codes")
    async def list_codes() -> list[DiscountCodeOut]:
        return [DiscountCodeOut.from_domain(c) for c in unwrap(await service.list_codes())]

    @app.post("/discount-codes", status_code=status.HTTP_201_CREATED)
    async def create_code(req: DiscountCodeIn) -> DiscountCodeOut:
        try:
            code = req.to_domain()
        except ValueError as e:
            raise HTTPException(
                status_code=422,
                detail={"code": "INVALID_CODE", "error": str(e)},
            ) from e
        return DiscountCodeOut.from_domain(unwrap(await service.create_code(code)))

    @app.patch("/discount-codes/{code}")
    async def toggle_code(code: str, req: DiscountToggleIn) -> DiscountCodeOut:
        return DiscountCodeOut.from_domain(unwrap(await service.set_code_active(code, req.is_active)))

    @app.delete("/discount-codes/{code}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_code(code: str) -> None:
        unwrap(await service.delete_code(code))

    return app


__all__ = ("create_app", "unwrap", "ERROR_STATUS")
