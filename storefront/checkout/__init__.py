"""
Checkout — the pricing graph and the service that owns order creation.

    from storefront import checkout as K

    service = K.CheckoutService(discounts, orders, policy)

    match await service.quote(K.QuoteRequest(items, region="Cairo", discount_code="save10")):
        case Ok(quote):
            quote.subtotal, quote.discount, quote.shipping_fee, quote.total
        case Error(e):
            e.code, e.message
"""

from storefront.checkout._types import (
    QuoteRequest,
    PlaceOrderRequest,
    QuoteInput,
    Quote,
    CheckoutError,
    CheckoutErrors,
)
from storefront.checkout._nodes import (
    InputNode,
    LinesNode,
    SubtotalNode,
    ShippingNode,
    DiscountNode,
    TotalNode,
    QuoteNode,
)
from storefront.checkout._service import CheckoutService

__all__ = (
    # Types
    "QuoteRequest",
    "PlaceOrderRequest",
    "QuoteInput",
    "Quote",
    "CheckoutError",
    "CheckoutErrors",
    # Graph
    "InputNode",
    "LinesNode",
    "SubtotalNode",
    "ShippingNode",
    "DiscountNode",
    "TotalNode",
    "QuoteNode",
    # Service
    "CheckoutService",
)
