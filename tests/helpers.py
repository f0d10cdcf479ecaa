"""Builders and Result unwrapping shared by the test modules."""

from datetime import datetime, timezone
from decimal import Decimal

from storefront._types import Ok, Error
from storefront import money as M
from storefront import order as O


NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def line(
    product_id: str,
    price: int | str | None,
    quantity: int = 1,
    *,
    size: str = "50ml",
    original: int | str | None = None,
) -> M.LineItem:
    return M.LineItem(
        product_id=product_id,
        size=size,
        volume=size.removesuffix("ml"),
        quantity=quantity,
        unit_original_price=None if original is None else Decimal(original),
        unit_discounted_price=None if price is None else Decimal(price),
    )


def gift(product_id: str, price: int, *selections: tuple[str, tuple[str, ...]]) -> M.GiftPackageLineItem:
    return M.gift_line_item(
        product_id,
        price,
        tuple(M.SizeSelection(size, size.removesuffix("ml"), ids) for size, ids in selections),
    )


def address(governorate: str = "Cairo") -> O.ShippingAddress:
    return O.ShippingAddress(
        name="Mona Adel",
        address="12 Tahrir St",
        city="Downtown",
        governorate=governorate,
        phone="01000000000",
    )


def ok(result):
    match result:
        case Ok(value):
            return value
        case Error(e):
            raise AssertionError(f"expected Ok, got Error({e!r})")


def err(result):
    match result:
        case Error(e):
            return e
        case Ok(value):
            raise AssertionError(f"expected Error, got Ok({value!r})")


def is_ok(result) -> bool:
    match result:
        case Ok(_):
            return True
        case _:
            return False
