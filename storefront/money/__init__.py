"""
Money — line items and price resolution.

    from storefront import money as M

    item = M.line_item_for("oud-noir", M.product_size("50ml", "50", 900, 750), 2)
    M.resolve_unit_price(item)       # Decimal("750")
    M.resolve_display_pair(item)     # DisplayPair(original=900, effective=750)
"""

from storefront._types import display, format_money, to_money
from storefront.money._types import (
    ProductSize,
    LineItem,
    SizeSelection,
    GiftPackageLineItem,
    PricedItem,
    DisplayPair,
    line_item_for,
    product_size,
    gift_line_item,
)
from storefront.money._resolve import resolve_unit_price, resolve_display_pair

__all__ = (
    # Types
    "ProductSize",
    "LineItem",
    "SizeSelection",
    "GiftPackageLineItem",
    "PricedItem",
    "DisplayPair",
    # Constructors
    "line_item_for",
    "product_size",
    "gift_line_item",
    # Resolution
    "resolve_unit_price",
    "resolve_display_pair",
    # Formatting
    "display",
    "format_money",
    "to_money",
)
