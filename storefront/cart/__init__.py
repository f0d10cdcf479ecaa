"""
Cart — aggregation and cart state.

    from storefront import cart as C

    C.subtotal(items)             # Σ unit price × max(1, quantity)
    C.Cart().add(item).subtotal
"""

from storefront.cart._aggregate import effective_quantity, line_total, subtotal, item_count
from storefront.cart._cart import Cart, item_key

__all__ = (
    "effective_quantity",
    "line_total",
    "subtotal",
    "item_count",
    "Cart",
    "item_key",
)
