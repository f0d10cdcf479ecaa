"""
API — FastAPI surface for the checkout service.

    from storefront.api import create_app

    app = create_app(CheckoutService(discounts, orders))
"""

from storefront.api._app import create_app, unwrap, ERROR_STATUS
from storefront.api._models import (
    LineItemIn,
    GiftPackageIn,
    SizeSelectionIn,
    CartItemIn,
    QuoteIn,
    QuoteOut,
    DiscountOut,
    ValidateCodeIn,
    ValidateCodeOut,
    ShippingAddressModel,
    PlaceOrderIn,
    OrderOut,
    OrderStatusIn,
    DiscountCodeIn,
    DiscountCodeOut,
    DiscountToggleIn,
)

__all__ = (
    "create_app",
    "unwrap",
    "ERROR_STATUS",
    "LineItemIn",
    "GiftPackageIn",
    "SizeSelectionIn",
    "CartItemIn",
    "QuoteIn",
    "QuoteOut",
    "DiscountOut",
    "ValidateCodeIn",
    "ValidateCodeOut",
    "ShippingAddressModel",
    "PlaceOrderIn",
    "OrderOut",
    "OrderStatusIn",
    "DiscountCodeIn",
    "DiscountCodeOut",
    "DiscountToggleIn",
)
